"""Tests for request serialization and response parsing helpers."""

from datetime import date, datetime, timezone
from uuid import UUID

import pytest

from nopaper.models import (
    CertificateStatus,
    CreateDraftDocumentRequest,
    CreateSignatureRequest,
    DocumentRouteType,
    FileContent,
    PassportData,
    RecipientInfo,
    RegisterUserRequest,
    SignatureType,
    UserInfo,
    _parse_certificate,
    _parse_datetime,
)


class TestSerialization:
    def test_empty_draft_only_sends_disable_change(self):
        assert CreateDraftDocumentRequest().to_dict() == {"isDisableChange": False}

    def test_parallel_route(self):
        request = CreateDraftDocumentRequest(
            recipients=[RecipientInfo(company_inn="7701234567", company_kpp="770101001", action_type=2)],
            route_type=DocumentRouteType.PARALLEL,
        )
        payload = request.to_dict()

        assert payload["documentRouteType"] == 2
        assert payload["recipientInfoList"] == [
            {"companyInn": "7701234567", "companyKpp": "770101001", "actionType": 2}
        ]

    def test_user_info_with_passport(self):
        """Passport data nests under passportData and dates use ISO format."""
        info = UserInfo(
            name="Ivan",
            birth_date=date(1990, 5, 17),
            gender=1,
            is_short_time_password=True,
            passport=PassportData(
                series="4510",
                number="123456",
                issuing_date=date(2010, 6, 1),
                issuer_department_code="770-001",
            ),
        )
        payload = RegisterUserRequest(user_phone="71234567890", info=info).to_dict()

        assert payload == {
            "userPhone": "71234567890",
            "name": "Ivan",
            "birthDate": "1990-05-17T00:00:00Z",
            "gender": 1,
            "isShortTimePassword": True,
            "passportData": {
                "series": "4510",
                "number": "123456",
                "issuingDate": "2010-06-01T00:00:00Z",
                "issuerDepartmentCode": "770-001",
            },
        }

    def test_aware_datetime_keeps_offset(self):
        info = UserInfo(birth_date=datetime(1990, 5, 17, tzinfo=timezone.utc))
        assert info.to_dict()["birthDate"] == "1990-05-17T00:00:00+00:00"

    def test_signature_params(self):
        request = CreateSignatureRequest(user_id=UUID(int=1), signature_type=SignatureType.SERVER)
        assert request.to_params() == {
            "userGuid": "00000000-0000-0000-0000-000000000001",
            "responsiblePartyForAcceptanceAct": "2",
        }


class TestParsing:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2024-03-01T10:15:30Z", datetime(2024, 3, 1, 10, 15, 30, tzinfo=timezone.utc)),
            ("2024-03-01T10:15:30.5Z", datetime(2024, 3, 1, 10, 15, 30, 500000, tzinfo=timezone.utc)),
            ("2024-03-01T10:15:30.1234567+00:00", datetime(2024, 3, 1, 10, 15, 30, 123456, tzinfo=timezone.utc)),
            ("2024-03-01T10:15:30", datetime(2024, 3, 1, 10, 15, 30)),
        ],
    )
    def test_parse_datetime(self, value, expected):
        assert _parse_datetime(value) == expected

    def test_parse_datetime_empty(self):
        assert _parse_datetime("") is None
        assert _parse_datetime(None) is None

    def test_unknown_certificate_status_kept_as_int(self):
        certificate = _parse_certificate({"certificateId": str(UUID(int=5)), "status": 42})

        assert certificate.status == 42
        assert not isinstance(certificate.status, CertificateStatus)
        assert certificate.is_active is False

    def test_certificate_requires_id(self):
        with pytest.raises(KeyError):
            _parse_certificate({"status": 4})

    def test_file_content_decodes_base64(self):
        content = FileContent(file_id=None, file_base64="JVBERi0xLjQ=", file_name="a.pdf")
        assert content.content == b"%PDF-1.4"
