"""Exceptions raised while turning a resume into an extracted record."""

from __future__ import annotations

from typing import Any, Dict, Optional


class CVExtractError(Exception):
    """Base exception for all cv_extract errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class UnsupportedFormatError(CVExtractError):
    """The declared MIME type is not PDF or DOCX."""

    def __init__(self, mime_type: Optional[str]) -> None:
        super().__init__("Unsupported file type", {"mime_type": mime_type})
        self.mime_type = mime_type


class DecodeError(CVExtractError):
    """The PDF or DOCX decoder rejected the byte stream."""

    def __init__(self, fmt: str, cause: Any) -> None:
        super().__init__(f"Failed to parse {fmt}: {cause}")
        self.format = fmt
        self.cause = cause


class ExtractionError(CVExtractError):
    """A field extractor failed unexpectedly."""

    def __init__(self, field: str, cause: Any) -> None:
        super().__init__(f"Failed to extract {field}: {cause}")
        self.field = field
        self.cause = cause


class ReferenceDataError(CVExtractError):
    """A bundled reference dataset is missing or malformed."""

    pass
