"""ParserManager for cv_extract.

Resolves the declared document type of an upload, decodes it, runs the
resume extractors and wraps the outcome in a response envelope.
"""

from __future__ import annotations

import base64
import binascii
import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Any, Dict, Mapping, Optional

from .config import configure_logging, get_settings
from .errors import DecodeError
from .records import DocumentType, ExtractionRequest, ResponseEnvelope
from .resume_parser import extract_resume_data
from .utils import decode

logger = logging.getLogger(__name__)


def _mapping(value: Any) -> Mapping[str, Any]:
    # Malformed event parts are treated as absent
    return value if isinstance(value, Mapping) else {}


def _header(headers: Any, name: str) -> Optional[str]:
    for key, value in _mapping(headers).items():
        if isinstance(key, str) and key.lower() == name.lower():
            return value
    return None


class ParserManager:
    """High-level manager that turns uploaded resumes into envelopes.

    Methods:
        detect_file_type(event): declared type from ``format`` or Content-Type
        parse(raw_bytes, mime_type): full pipeline for in-memory bytes
        handle(event): full pipeline for a base64 upload event
    """

    def __init__(
        self,
        recognizer=None,
        decode_timeout: Optional[float] = None,
        max_workers: Optional[int] = None,
        temp_dir: Optional[str] = None,
    ) -> None:
        settings = get_settings()
        self.recognizer = recognizer
        self.decode_timeout = decode_timeout or settings.decode_timeout_seconds
        self.max_workers = max_workers or settings.extractor_workers
        self.temp_dir = temp_dir or settings.temp_dir

    def detect_file_type(self, event: Mapping[str, Any]) -> DocumentType:
        event = _mapping(event)
        upload = _mapping(event.get("uploadCv"))
        mime_type = upload.get("format") or _header(event.get("headers"), "Content-Type")
        return DocumentType.from_mime(mime_type)

    def _decode(self, request: ExtractionRequest) -> str:
        pool = ThreadPoolExecutor(max_workers=1)
        future = pool.submit(decode, request.raw_bytes, request.declared_type, self.temp_dir)
        try:
            return future.result(timeout=self.decode_timeout)
        except FuturesTimeoutError as exc:
            raise DecodeError(
                request.declared_type.name, f"timed out after {self.decode_timeout}s"
            ) from exc
        finally:
            pool.shutdown(wait=False)

    def run(self, request: ExtractionRequest) -> ResponseEnvelope:
        if request.declared_type is DocumentType.UNSUPPORTED:
            logger.warning("Rejecting upload with unsupported file type")
            return ResponseEnvelope.unsupported()

        try:
            text = self._decode(request)
            record = extract_resume_data(text, self.recognizer, self.max_workers)
        except Exception as exc:
            logger.exception("Error parsing resume")
            return ResponseEnvelope.failure(exc)
        return ResponseEnvelope.ok(record)

    def parse(self, raw_bytes: bytes, mime_type: Optional[str]) -> ResponseEnvelope:
        return self.run(ExtractionRequest(raw_bytes, DocumentType.from_mime(mime_type)))

    def handle(self, event: Mapping[str, Any]) -> Dict[str, Any]:
        """Process an upload event and return the wire envelope.

        Schema:
            event: {"uploadCv": {"body": base64, "format": mime?}, "headers": {...}}
            returns: {"statusCode": 200|400|500, "data"?, "message"?, "error"?}
        """
        declared_type = self.detect_file_type(event)
        if declared_type is DocumentType.UNSUPPORTED:
            return self.run(ExtractionRequest(b"", declared_type)).to_dict()

        try:
            raw = base64.b64decode(event["uploadCv"]["body"])
        except (KeyError, TypeError, binascii.Error) as exc:
            logger.exception("Error parsing resume")
            return ResponseEnvelope.failure(exc).to_dict()
        return self.run(ExtractionRequest(raw, declared_type)).to_dict()


def handler(event: Mapping[str, Any], context: Any = None) -> Dict[str, Any]:
    """Entry point for a serverless-style invocation."""
    configure_logging(get_settings().log_level)
    return ParserManager().handle(event)
