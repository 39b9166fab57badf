"""
Nopaper Python SDK client.

Synchronous client using httpx. Handles authentication, error mapping,
and response parsing for the Nopaper partner API.

Usage:
    client = NopaperClient(url="https://np-demo.abanking.ru/", token="...")
    user_id = client.get_user_id_by_phone("71234567890")
"""

import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping
from uuid import UUID

import httpx

from nopaper.config import DEFAULT_TIMEOUT, NopaperConfig
from nopaper.errors import ERROR_CODES, NopaperError, ResponseDecodeError
from nopaper.models import (
    NIL_UUID,
    AcceptanceActParty,
    CertificateInfo,
    CreateDraftDocumentRequest,
    CreateSignatureRequest,
    DocumentFiles,
    FileContent,
    FileInfo,
    FileRequest,
    PatchUserInfoRequest,
    RegisterUserRequest,
    SignatureType,
    _parse_certificate,
    _parse_document_files,
    _parse_file_content,
)

logger = logging.getLogger(__name__)

API_PATH = "/partner-api/api/v2/external"
USER_AGENT = "nopaper-python/1.0.0"


class NopaperClient:
    """
    Nopaper partner API client.

    Args:
        url: Stand URL without the partner API suffix
        token: API key, sent as X-API-KEY on every request
        insecure_skip_verify: Disable TLS certificate verification
        timeout: Request timeout in seconds (default: 30)
        transport: Custom httpx transport; it owns its own TLS settings
        error_codes: Extra provider error codes mapped to NopaperError
            subclasses, merged over the built-in table
    """

    def __init__(
        self,
        url: str,
        token: str,
        insecure_skip_verify: bool = False,
        timeout: float | None = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
        error_codes: Mapping[str, type[NopaperError]] | None = None,
    ):
        if not url or not url.strip():
            raise ValueError("Nopaper URL is required")
        if not token:
            raise ValueError("Nopaper API token is required")

        self.token = token
        self.base_url = url.replace(" ", "").rstrip("/") + API_PATH
        self._error_codes = MappingProxyType({**ERROR_CODES, **(error_codes or {})})
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={
                "X-API-KEY": token,
                "User-Agent": USER_AGENT,
            },
            timeout=timeout,
            verify=not insecure_skip_verify,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: NopaperConfig, **kwargs) -> "NopaperClient":
        """Create a client from a NopaperConfig."""
        return cls(
            url=config.url,
            token=config.token,
            insecure_skip_verify=config.insecure_skip_verify,
            timeout=config.timeout,
            **kwargs,
        )

    @property
    def error_codes(self) -> Mapping[str, type[NopaperError]]:
        return self._error_codes

    # -----------------------------------------------------------------------
    # Documents
    # -----------------------------------------------------------------------

    def create_draft_document(self, request: CreateDraftDocumentRequest) -> int:
        """
        Create a new draft document.

        A document is a chain of Word or PDF files that the recipients sign.

        Returns:
            The provider's document ID
        """
        return self._request(
            "POST",
            "/document/draft",
            json=request.to_dict(),
            parse=lambda data: int(data["documentId"]),
        )

    def attach_file(self, document_id: int, file_info: FileInfo) -> None:
        """
        Attach a file to a draft document.

        Args:
            document_id: Draft document ID
            file_info: File name with extension and base64 content
        """
        _require_document_id(document_id)
        if not file_info.file_name:
            raise ValueError("filename with extension can not be empty")
        if not file_info.file_base64:
            raise ValueError("filebase64 can not be empty")

        self._request_empty(
            "POST",
            f"/document/{document_id}/file",
            json={"fileInfo": file_info.to_dict()},
        )

    def activate_document(self, document_id: int) -> None:
        """Send the document to its recipients, moving it to the active state."""
        _require_document_id(document_id)
        self._request_empty("POST", f"/document/{document_id}/send")

    def get_document_files(self, document_id: int) -> DocumentFiles:
        """List the file references stored in a document, grouped by kind."""
        _require_document_id(document_id)
        return self._request(
            "GET",
            f"/document/{document_id}/file-info/list",
            parse=_parse_document_files,
        )

    def get_files(self, files: list[FileRequest]) -> list[FileContent]:
        """
        Download files by ID.

        Args:
            files: Pairs of file ID and the document that holds it

        Returns:
            File contents in base64, in the provider's order
        """
        if not files:
            raise ValueError("at least one file must be requested")
        for item in files:
            if not item.file_id:
                raise ValueError("file id can not be empty")
            _require_document_id(item.document_id)

        return self._request(
            "POST",
            "/document/file/list",
            json={"documentFileInfoList": [f.to_dict() for f in files]},
            parse=lambda data: [_parse_file_content(item) for item in data.get("fileInfoList") or []],
        )

    # -----------------------------------------------------------------------
    # Document signing
    # -----------------------------------------------------------------------

    def start_sms_signature(self, document_id: int, signature_id: UUID) -> None:
        """
        Start SMS signing of a document.

        The provider sends a code to the signer; pass it to
        confirm_sms_signature() to complete the signature.
        """
        _require_document_id(document_id)
        signature_id = _require_uuid(signature_id, "signature id")
        self._request_empty(
            "POST",
            f"/document/{document_id}/sign/{SignatureType.SMS.value}/{signature_id}",
        )

    def confirm_sms_signature(self, document_id: int, signature_id: UUID, code: str) -> None:
        """Confirm an SMS signature with the code the signer received."""
        _require_document_id(document_id)
        signature_id = _require_uuid(signature_id, "signature id")
        if not code:
            raise ValueError("sms code can not be empty")

        self._request_empty(
            "POST",
            f"/document/{document_id}/sign/{SignatureType.SMS.value}/{signature_id}/confirm",
            json={"code": code},
        )

    def sign_with_server_signature(self, document_id: int, signature_id: UUID) -> None:
        """Sign a document with an organization (server) signature."""
        _require_document_id(document_id)
        signature_id = _require_uuid(signature_id, "signature id")
        self._request_empty(
            "PUT",
            f"/document/{document_id}/sign/{SignatureType.SERVER.value}/{signature_id}",
        )

    # -----------------------------------------------------------------------
    # Users
    # -----------------------------------------------------------------------

    def get_user_id_by_phone(self, phone: str) -> UUID:
        """
        Look up a user profile by phone.

        Raises:
            ProfileNotFoundError: No profile is registered for the phone
        """
        if not phone:
            raise ValueError("user phone can not be empty")
        return self._request(
            "GET",
            "/profile-fl/user-guid/by-phone",
            params={"userPhone": phone},
            parse=lambda data: UUID(data["userGuid"]),
        )

    def register_user(self, request: RegisterUserRequest) -> UUID:
        """
        Register an individual's profile.

        The phone must be in 7XXXXXXXXXX form.

        Returns:
            The new user's ID
        """
        if not request.user_phone.startswith("7"):
            raise ValueError("user phone must start with 7")
        return self._request(
            "POST",
            "/profile-fl",
            json=request.to_dict(),
            parse=lambda data: UUID(data["userGuid"]),
        )

    def patch_user_info(self, request: PatchUserInfoRequest) -> None:
        """Update personal data of an existing profile."""
        _require_uuid(request.user_id, "user id")
        self._request_empty("PATCH", "/profile-fl", json=request.to_dict())

    def employ_user(self, user_id: UUID) -> None:
        """Make the user an employee of the partner company."""
        user_id = _require_uuid(user_id, "user id")
        self._request_empty("POST", "/hub/employee", json={"userGuid": str(user_id)})

    def fire_user(self, user_id: UUID) -> None:
        """Remove the user from the partner company's employees."""
        user_id = _require_uuid(user_id, "user id")
        self._request_empty("DELETE", "/hub/employee", params={"userGuid": str(user_id)})

    # -----------------------------------------------------------------------
    # Signatures
    # -----------------------------------------------------------------------

    def create_signature(self, request: CreateSignatureRequest) -> UUID:
        """
        Create a signature (certificate) for a user.

        Returns:
            The new certificate ID, to be activated with activate_signature()
        """
        _require_uuid(request.user_id, "user id")
        if request.acceptance_act_party not in (AcceptanceActParty.NOPAPER, AcceptanceActParty.CLIENT):
            raise ValueError("responsible party for acceptance act must be 1 or 2")
        signature_type = SignatureType(request.signature_type)

        return self._request(
            "POST",
            f"/certificate/pay-control/{signature_type.value}",
            params=request.to_params(),
            parse=lambda data: UUID(data["certificateId"]),
        )

    def list_user_signatures(self, user_id: UUID) -> list[CertificateInfo]:
        """List every signature issued to the user, whatever its status."""
        user_id = _require_uuid(user_id, "user id")
        return self._request(
            "GET",
            "/certificate/list",
            params={"userGuid": str(user_id)},
            parse=lambda data: [_parse_certificate(item) for item in data.get("certificateInfoList") or []],
        )

    def activate_signature(self, certificate_id: UUID) -> None:
        """Activate a signature by its certificate ID."""
        certificate_id = _require_uuid(certificate_id, "certificate id")
        self._request_empty("PATCH", f"/certificate/pay-control/{certificate_id}/activate")

    # -----------------------------------------------------------------------
    # Callbacks
    # -----------------------------------------------------------------------

    def set_callback_uri(self, uri: str) -> None:
        """Set the URI the provider notifies about document events."""
        if not uri:
            raise ValueError("callback uri can not be empty")
        self._request_empty("PATCH", "/hub/callback-uri", params={"uri": uri})

    # -----------------------------------------------------------------------
    # Dispatch
    # -----------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        parse: Callable[[Any], Any],
        json: Any = None,
        params: dict | None = None,
    ) -> Any:
        """Make an HTTP request and decode the JSON payload with ``parse``."""
        response = self._send(method, path, json=json, params=params)
        try:
            return parse(response.json())
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ResponseDecodeError(
                f"cant decode good response from nopaper: {e!r}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    def _request_empty(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict | None = None,
    ) -> None:
        """Make an HTTP request whose response body is not used."""
        self._send(method, path, json=json, params=params)

    def _send(self, method: str, path: str, json: Any = None, params: dict | None = None) -> httpx.Response:
        response = self._client.request(method, path, json=json, params=params)
        logger.debug("%s %s -> %s", method, path, response.status_code)

        if response.status_code == 200 or response.status_code == 201:
            return response

        self._raise_for_error(response)

    def _raise_for_error(self, response: httpx.Response) -> None:
        """Map a failed response to an SDK exception."""
        body = response.text
        code = None
        try:
            error_data = response.json()
        except ValueError:
            error_data = None
        if isinstance(error_data, dict) and isinstance(error_data.get("code"), str):
            code = error_data["code"]

        error_cls = self._error_codes.get(code) if code else None
        if error_cls is not None:
            raise error_cls(status_code=response.status_code, code=code, body=body)

        logger.warning("Unexpected response from nopaper: status=%s code=%s", response.status_code, code)
        if code:
            message = f"unknown bad response error code from nopaper: {code} ({response.status_code}): {body}"
        else:
            message = f"unknown status code from nopaper: {response.status_code} {response.reason_phrase}: {body}"
        raise NopaperError(message, status_code=response.status_code, code=code, body=body)

    def close(self):
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def _require_document_id(document_id: int) -> None:
    if not document_id:
        raise ValueError("document id is required")
    if isinstance(document_id, bool) or not isinstance(document_id, int) or document_id < 0:
        raise ValueError(f"document id must be a positive integer, got {document_id!r}")


def _require_uuid(value: UUID | str | None, name: str) -> UUID:
    if value is None:
        raise ValueError(f"{name} can not be nil")
    value = value if isinstance(value, UUID) else UUID(str(value))
    if value == NIL_UUID:
        raise ValueError(f"{name} can not be nil")
    return value
