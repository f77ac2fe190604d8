"""Resume field extraction package.

Modules:
- utils: PDF/DOCX byte readers, regex extractors, reference data loading
- resume_parser: NER-based extractors and record assembly
- manager: ParserManager and the upload event handler
- records: request, record and envelope types
- config: settings and logging setup
- errors: exception hierarchy
"""

from .errors import (
    CVExtractError,
    DecodeError,
    ExtractionError,
    ReferenceDataError,
    UnsupportedFormatError,
)
from .manager import ParserManager, handler
from .records import (
    DesiredSalary,
    DocumentType,
    ExtractedRecord,
    ExtractionRequest,
    ResponseEnvelope,
)
from .resume_parser import SpacyEntityRecognizer, extract_resume_data
from .utils import decode, read_docx, read_pdf

__all__ = [
    "CVExtractError",
    "DecodeError",
    "ExtractionError",
    "ReferenceDataError",
    "UnsupportedFormatError",
    "ParserManager",
    "handler",
    "DesiredSalary",
    "DocumentType",
    "ExtractedRecord",
    "ExtractionRequest",
    "ResponseEnvelope",
    "SpacyEntityRecognizer",
    "extract_resume_data",
    "decode",
    "read_docx",
    "read_pdf",
]
