"""
Nopaper Python SDK.

Usage:
    from nopaper import CreateSignatureRequest, NopaperClient, RegisterUserRequest

    with NopaperClient(url="https://np-demo.abanking.ru/", token="...") as client:
        user_id = client.register_user(RegisterUserRequest(user_phone="71234567890"))
        certificate_id = client.create_signature(CreateSignatureRequest(user_id=user_id))
        client.activate_signature(certificate_id)
"""

from nopaper.client import NopaperClient
from nopaper.config import NopaperConfig
from nopaper.errors import (
    ERROR_CODES,
    IncompleteProfileError,
    NopaperError,
    ProfileNotFoundError,
    RequestBodyInvalidError,
    ResponseDecodeError,
)
from nopaper.models import (
    AcceptanceActParty,
    CertificateCustomData,
    CertificateInfo,
    CertificateStatus,
    CreateDraftDocumentRequest,
    CreateSignatureRequest,
    DocumentFiles,
    DocumentRouteType,
    FileContent,
    FileIDInfo,
    FileInfo,
    FileRequest,
    PassportData,
    PatchUserInfoRequest,
    RecipientInfo,
    RegisterUserRequest,
    SignatureType,
    UserInfo,
)

__all__ = [
    "NopaperClient",
    "NopaperConfig",
    "NopaperError",
    "ProfileNotFoundError",
    "RequestBodyInvalidError",
    "IncompleteProfileError",
    "ResponseDecodeError",
    "ERROR_CODES",
    "AcceptanceActParty",
    "CertificateCustomData",
    "CertificateInfo",
    "CertificateStatus",
    "CreateDraftDocumentRequest",
    "CreateSignatureRequest",
    "DocumentFiles",
    "DocumentRouteType",
    "FileContent",
    "FileIDInfo",
    "FileInfo",
    "FileRequest",
    "PassportData",
    "PatchUserInfoRequest",
    "RecipientInfo",
    "RegisterUserRequest",
    "SignatureType",
    "UserInfo",
]

__version__ = "1.0.0"
