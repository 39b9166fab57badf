"""
Nopaper SDK request and response models.

Typed dataclasses that mirror the provider's wire schemas. Request models
serialize themselves with ``to_dict()``; responses are decoded by the
``_parse_*`` helpers.
"""

import base64
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum, IntEnum
from uuid import UUID

NIL_UUID = UUID(int=0)

# Provider timestamps may carry 7 fractional digits.
_LONG_FRACTION = re.compile(r"\.(\d{6})\d+")


class DocumentRouteType(IntEnum):
    """Order in which document recipients sign."""

    CONSISTENT = 1  # recipients sign in list order
    PARALLEL = 2


class SignatureType(str, Enum):
    SERVER = "pc-server"  # organization signature
    SMS = "pc-sms"  # client signature confirmed by SMS code


class AcceptanceActParty(IntEnum):
    """Side that generates the acceptance act for a new signature."""

    NOPAPER = 1
    CLIENT = 2


class CertificateStatus(IntEnum):
    TEMPLATE = 1
    INITIALIZATION = 2
    INITIALIZATION_ERROR = 3
    AVAILABLE = 4
    BLOCKED = 5
    REVOKED = 6


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


@dataclass
class RecipientInfo:
    """A participant of the document route."""

    user_phone: str | None = None
    company_inn: str | None = None
    action_type: int | None = None
    sign_type: int | None = None
    company_kpp: str | None = None

    def to_dict(self) -> dict:
        return _compact(
            {
                "userPhone": self.user_phone,
                "companyInn": self.company_inn,
                "actionType": self.action_type,
                "signType": self.sign_type,
                "companyKpp": self.company_kpp,
            }
        )


@dataclass
class CreateDraftDocumentRequest:
    """
    Request for a new draft document (a chain of files).

    ``disable_change`` forbids route editing for everyone except the
    document owner.
    """

    recipients: list[RecipientInfo] = field(default_factory=list)
    title: str | None = None
    user_id: UUID | None = None
    route_type: DocumentRouteType | None = None
    disable_change: bool = False

    def to_dict(self) -> dict:
        payload = _compact(
            {
                "title": self.title,
                "userGuid": str(self.user_id) if self.user_id is not None else None,
                "recipientInfoList": [r.to_dict() for r in self.recipients],
                "documentRouteType": int(self.route_type) if self.route_type else None,
            }
        )
        payload["isDisableChange"] = self.disable_change
        return payload


@dataclass
class FileInfo:
    """A file to attach to a document, already base64 encoded."""

    file_name: str
    file_base64: str

    @classmethod
    def from_bytes(cls, file_name: str, content: bytes) -> "FileInfo":
        return cls(file_name=file_name, file_base64=base64.b64encode(content).decode("ascii"))

    def to_dict(self) -> dict:
        return {"fileNameWithExtension": self.file_name, "filebase64": self.file_base64}


@dataclass
class FileIDInfo:
    """Reference to a file stored in a document."""

    file_id: str
    origin_name: str
    size_kb: int = 0
    original_file_id: UUID | None = None


@dataclass
class DocumentFiles:
    """File references of a document, grouped by kind."""

    origin_files: list[FileIDInfo] = field(default_factory=list)
    origin_files_with_stamp: list[FileIDInfo] = field(default_factory=list)
    oferta: list[FileIDInfo] = field(default_factory=list)
    oferta_with_stamp: list[FileIDInfo] = field(default_factory=list)
    procuratory: list[FileIDInfo] = field(default_factory=list)
    procuratory_with_stamp: list[FileIDInfo] = field(default_factory=list)

    @property
    def all_files(self) -> list[FileIDInfo]:
        return (
            self.origin_files
            + self.origin_files_with_stamp
            + self.oferta
            + self.oferta_with_stamp
            + self.procuratory
            + self.procuratory_with_stamp
        )


@dataclass
class FileRequest:
    """Identifies one file to download from a document."""

    file_id: str
    document_id: int

    def to_dict(self) -> dict:
        return {"fileId": self.file_id, "documentId": self.document_id}


@dataclass
class FileContent:
    """A downloaded file."""

    file_id: UUID | None
    file_base64: str
    file_name: str

    @property
    def content(self) -> bytes:
        return base64.b64decode(self.file_base64)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@dataclass
class PassportData:
    series: str | None = None
    number: str | None = None
    issued_by: str | None = None
    issuing_date: date | None = None
    issuer_department_code: str | None = None
    birth_place: str | None = None

    def to_dict(self) -> dict:
        return _compact(
            {
                "series": self.series,
                "number": self.number,
                "issuedBy": self.issued_by,
                "issuingDate": _format_date(self.issuing_date),
                "issuerDepartmentCode": self.issuer_department_code,
                "birthPlace": self.birth_place,
            }
        )


@dataclass
class UserInfo:
    """Personal data of an individual's profile."""

    name: str | None = None
    surname: str | None = None
    patronymic: str | None = None
    is_short_time_password: bool = False
    birth_date: date | None = None
    gender: int | None = None
    passport: PassportData | None = None

    def to_dict(self) -> dict:
        payload = _compact(
            {
                "name": self.name,
                "surname": self.surname,
                "patronymic": self.patronymic,
                "birthDate": _format_date(self.birth_date),
                "gender": self.gender,
                "passportData": self.passport.to_dict() if self.passport else None,
            }
        )
        payload["isShortTimePassword"] = self.is_short_time_password
        return payload


@dataclass
class RegisterUserRequest:
    user_phone: str
    email: str | None = None
    info: UserInfo = field(default_factory=UserInfo)

    def to_dict(self) -> dict:
        payload = {"userPhone": self.user_phone}
        if self.email:
            payload["email"] = self.email
        payload.update(self.info.to_dict())
        return payload


@dataclass
class PatchUserInfoRequest:
    user_id: UUID
    info: UserInfo = field(default_factory=UserInfo)

    def to_dict(self) -> dict:
        payload = {"userGuid": str(self.user_id)}
        payload.update(self.info.to_dict())
        return payload


# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------


@dataclass
class CreateSignatureRequest:
    """
    Request for a new signature (certificate) for a user.

    The signature type selects the endpoint; the other fields travel as
    query parameters.
    """

    user_id: UUID
    signature_type: SignatureType = SignatureType.SMS
    acceptance_act_party: int = AcceptanceActParty.CLIENT

    def to_params(self) -> dict:
        return {
            "userGuid": str(self.user_id),
            "responsiblePartyForAcceptanceAct": str(int(self.acceptance_act_party)),
        }


@dataclass
class CertificateCustomData:
    pc_user_id: str = ""
    system_id: str = ""
    public_key: str = ""
    issuing_type: int = 0


@dataclass
class CertificateInfo:
    """A signature (certificate) issued to a user."""

    id: UUID
    status: CertificateStatus | int
    owner_name: str = ""
    owner_id: UUID | None = None
    issued_at: datetime | None = None
    valid_until: datetime | None = None
    custom_data: CertificateCustomData = field(default_factory=CertificateCustomData)
    provider_type: int = 0

    @property
    def is_active(self) -> bool:
        return self.status == CertificateStatus.AVAILABLE


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _compact(payload: dict) -> dict:
    """Drop unset fields: None, empty strings, empty lists and zeros."""
    return {k: v for k, v in payload.items() if v not in (None, "", [], 0) or v is False}


def _format_date(value: date | None) -> str | None:
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    text = value.isoformat()
    return text if value.tzinfo else text + "Z"


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(_LONG_FRACTION.sub(r".\1", text))


def _parse_uuid(value: str | None) -> UUID | None:
    if not value:
        return None
    return UUID(value)


def _parse_file_id_info(data: dict) -> FileIDInfo:
    return FileIDInfo(
        file_id=data["fileId"],
        origin_name=data.get("originNameWithExtension", ""),
        size_kb=data.get("sizeKb", 0),
        original_file_id=_parse_uuid(data.get("originalFileId")),
    )


def _parse_document_files(data: dict) -> DocumentFiles:
    def files(key: str) -> list[FileIDInfo]:
        return [_parse_file_id_info(item) for item in data.get(key) or []]

    return DocumentFiles(
        origin_files=files("originFileList"),
        origin_files_with_stamp=files("originFileWithStampList"),
        oferta=files("ofertaList"),
        oferta_with_stamp=files("ofertaWithStampList"),
        procuratory=files("procuratoryList"),
        procuratory_with_stamp=files("procuratoryWithStampList"),
    )


def _parse_file_content(data: dict) -> FileContent:
    return FileContent(
        file_id=_parse_uuid(data.get("fileId")),
        file_base64=data["fileBase64"],
        file_name=data.get("fileNameWithExtension", ""),
    )


def _parse_certificate(data: dict) -> CertificateInfo:
    status = data["status"]
    try:
        status = CertificateStatus(status)
    except ValueError:
        pass  # newer provider statuses stay as plain ints

    custom = data.get("customData") or {}
    return CertificateInfo(
        id=UUID(data["certificateId"]),
        status=status,
        owner_name=data.get("ownerName", ""),
        owner_id=_parse_uuid(data.get("ownerGuid")),
        issued_at=_parse_datetime(data.get("issuedDateTimeUtc")),
        valid_until=_parse_datetime(data.get("validUntilDateTimeUtc")),
        custom_data=CertificateCustomData(
            pc_user_id=custom.get("PCUserId", ""),
            system_id=custom.get("SystemId", ""),
            public_key=custom.get("PublicKey", ""),
            issuing_type=custom.get("IssuingType", 0),
        ),
        provider_type=data.get("providerType", 0),
    )
