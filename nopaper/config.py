"""
Nopaper client configuration.

Usage:
    config = NopaperConfig.from_env()
    client = NopaperClient.from_config(config)
"""

from typing import Mapping

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TIMEOUT = 30.0


class NopaperConfig(BaseSettings):
    """
    Connection settings for a Nopaper stand.

    Args:
        url: Stand URL without the partner API suffix
            (e.g. https://np-demo.abanking.ru/)
        token: API key sent in the X-API-KEY header
        insecure_skip_verify: Disable TLS certificate verification
        timeout: Request timeout in seconds, None to disable
    """

    model_config = SettingsConfigDict(env_prefix="NOPAPER_", frozen=True, extra="ignore")

    url: str = Field(min_length=1)
    token: str = Field(min_length=1)
    insecure_skip_verify: bool = False
    timeout: float | None = DEFAULT_TIMEOUT

    @classmethod
    def from_mapping(cls, data: Mapping) -> "NopaperConfig":
        """Build a config from a plain mapping, such as a parsed YAML section."""
        return cls.model_validate(dict(data))

    @classmethod
    def from_env(cls, prefix: str = "NOPAPER_") -> "NopaperConfig":
        """Build a config from NOPAPER_URL, NOPAPER_TOKEN and friends."""
        return cls(_env_prefix=prefix)
