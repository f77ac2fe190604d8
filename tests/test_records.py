"""
Tests for record and envelope shaping.
"""

import dataclasses

import pytest

from cv_extract.errors import DecodeError
from cv_extract.records import (
    DOCX_MIME,
    PDF_MIME,
    DesiredSalary,
    DocumentType,
    ExtractedRecord,
    ResponseEnvelope,
)


class TestDocumentType:

    @pytest.mark.parametrize(
        "mime, expected",
        [
            (PDF_MIME, DocumentType.PDF),
            (DOCX_MIME, DocumentType.DOCX),
            ("application/msword", DocumentType.UNSUPPORTED),
            ("APPLICATION/PDF", DocumentType.UNSUPPORTED),
            (None, DocumentType.UNSUPPORTED),
        ],
    )
    def test_from_mime(self, mime, expected):
        assert DocumentType.from_mime(mime) is expected


class TestExtractedRecord:

    def test_full_name_needs_both_parts(self):
        assert ExtractedRecord(first_name="Jane", last_name="Doe").full_name == "Jane Doe"
        assert ExtractedRecord(first_name="Jane").full_name is None
        assert ExtractedRecord(last_name="Doe").full_name is None

    def test_is_immutable(self):
        record = ExtractedRecord(email="a@b.co")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.email = "c@d.co"

    def test_wire_keys(self):
        record = ExtractedRecord(
            first_name="Jane",
            last_name="Doe",
            languages=("English",),
            desired_salary=DesiredSalary(amount=100.0, currency="EUR"),
        )

        assert record.to_dict() == {
            "firstName": "Jane",
            "lastName": "Doe",
            "fullName": "Jane Doe",
            "email": None,
            "phoneNumber": None,
            "linkedIn": None,
            "country": None,
            "languages": ["English"],
            "whatsApp": None,
            "telegram": None,
            "desiredSalary": {"amount": 100.0, "currency": "EUR"},
        }


class TestResponseEnvelope:

    def test_ok(self):
        body = ResponseEnvelope.ok(ExtractedRecord()).to_dict()

        assert body["statusCode"] == 200
        assert set(body) == {"statusCode", "data"}

    def test_unsupported(self):
        assert ResponseEnvelope.unsupported().to_dict() == {
            "statusCode": 400,
            "message": "Unsupported file type",
        }

    def test_failure(self):
        body = ResponseEnvelope.failure(DecodeError("PDF", "bad xref")).to_dict()

        assert body == {
            "statusCode": 500,
            "message": "Error parsing resume",
            "error": "Failed to parse PDF: bad xref",
        }
