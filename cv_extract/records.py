"""Request, record and response shapes for the extraction pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class DocumentType(enum.Enum):
    PDF = PDF_MIME
    DOCX = DOCX_MIME
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_mime(cls, mime_type: Optional[str]) -> "DocumentType":
        if mime_type == PDF_MIME:
            return cls.PDF
        if mime_type == DOCX_MIME:
            return cls.DOCX
        return cls.UNSUPPORTED


@dataclass(frozen=True)
class ExtractionRequest:
    raw_bytes: bytes
    declared_type: DocumentType


@dataclass(frozen=True)
class DesiredSalary:
    amount: float
    currency: str

    def to_dict(self) -> Dict[str, Any]:
        return {"amount": self.amount, "currency": self.currency}


@dataclass(frozen=True)
class ExtractedRecord:
    """Candidate fields recovered from one resume.

    Every field is optional. ``full_name`` is derived from the first and
    last name and is only set when both are present.
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    linkedin: Optional[str] = None
    country: Optional[str] = None
    languages: Optional[Tuple[str, ...]] = None
    whatsapp: Optional[str] = None
    telegram: Optional[str] = None
    desired_salary: Optional[DesiredSalary] = None

    @property
    def full_name(self) -> Optional[str]:
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "fullName": self.full_name,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "linkedIn": self.linkedin,
            "country": self.country,
            "languages": list(self.languages) if self.languages else None,
            "whatsApp": self.whatsapp,
            "telegram": self.telegram,
            "desiredSalary": self.desired_salary.to_dict() if self.desired_salary else None,
        }


@dataclass(frozen=True)
class ResponseEnvelope:
    status_code: int
    data: Optional[ExtractedRecord] = None
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, record: ExtractedRecord) -> "ResponseEnvelope":
        return cls(status_code=200, data=record)

    @classmethod
    def unsupported(cls) -> "ResponseEnvelope":
        return cls(status_code=400, message="Unsupported file type")

    @classmethod
    def failure(cls, exc: BaseException) -> "ResponseEnvelope":
        return cls(status_code=500, message="Error parsing resume", error=str(exc))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"statusCode": self.status_code}
        if self.status_code == 200:
            out["data"] = self.data.to_dict() if self.data else None
            return out
        out["message"] = self.message
        if self.status_code == 500:
            out["error"] = self.error
        return out
