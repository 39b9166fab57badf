"""
Nopaper SDK error types.

All errors inherit from NopaperError for easy catch-all handling.
Provider error codes are mapped to stable exception classes via ERROR_CODES.
"""

from types import MappingProxyType
from typing import Mapping


class NopaperError(Exception):
    """Base exception for all Nopaper SDK errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        body: str | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.body = body
        super().__init__(message)


class ProfileNotFoundError(NopaperError):
    """Raised when no user profile exists for the given phone."""

    def __init__(self, message: str = "profile by phone not found", **kwargs):
        super().__init__(message, **kwargs)


class RequestBodyInvalidError(NopaperError):
    """Raised when the provider could not convert the request body to its model."""

    def __init__(self, message: str = "request body was not converted to model", **kwargs):
        super().__init__(message, **kwargs)


class IncompleteProfileError(NopaperError):
    """Raised when the user profile lacks data required for the operation."""

    def __init__(self, message: str = "user profile is incomplete", **kwargs):
        super().__init__(message, **kwargs)


class ResponseDecodeError(NopaperError):
    """Raised when a successful response carries a malformed payload."""


ERROR_CODES: Mapping[str, type[NopaperError]] = MappingProxyType(
    {
        "NOPAPERPARTNER.10401": ProfileNotFoundError,
        "NOPAPERPARTNERLIB.10401": ProfileNotFoundError,
        "NOPAPERPARTNERAPI.CORE.41116": RequestBodyInvalidError,
        # Assumed codes, not confirmed by the provider; override via NopaperClient(error_codes=...).
        "NOPAPERPARTNER.10402": IncompleteProfileError,
        "NOPAPERPARTNERLIB.10402": IncompleteProfileError,
    }
)
