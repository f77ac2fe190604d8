"""Utility functions for cv_extract.

Includes byte-level readers for PDF and DOCX uploads, the regex helpers
used for contact and salary fields, and loaders for the bundled reference
datasets.
"""

from __future__ import annotations

import io
import logging
import os
import re
import tempfile
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator, List, Optional, Tuple

import docx2txt
import pandas as pd
import pdfplumber

from .errors import DecodeError, ReferenceDataError, UnsupportedFormatError
from .records import DesiredSalary, DocumentType

logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")


# -----------------------------
# File Readers
# -----------------------------

def read_pdf(raw: bytes) -> str:
    """Read text from PDF bytes using pdfplumber.

    Args:
        raw: Contents of the uploaded PDF.

    Returns:
        Page texts joined by newlines. May be empty, never None.

    Raises:
        DecodeError: If pdfplumber cannot parse the byte stream.
    """
    try:
        text_parts: List[str] = []
        with pdfplumber.open(io.BytesIO(raw)) as pdf:
            for page in pdf.pages:
                content = page.extract_text() or ""
                text_parts.append(content)
        return "\n".join(text_parts)
    except Exception as exc:
        raise DecodeError("PDF", exc) from exc


@contextmanager
def temporary_file(raw: bytes, suffix: str = "", directory: Optional[str] = None) -> Iterator[str]:
    """Write ``raw`` to a uniquely named file and remove it on exit."""
    handle = tempfile.NamedTemporaryFile(suffix=suffix, dir=directory, delete=False)
    path = handle.name
    try:
        with handle:
            handle.write(raw)
        yield path
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass


def read_docx(raw: bytes, temp_dir: Optional[str] = None) -> str:
    """Read text from DOCX bytes using docx2txt.

    docx2txt only accepts a path, so the bytes go through a temporary file
    that is deleted whether or not parsing succeeds.

    Raises:
        DecodeError: If the bytes are not a readable DOCX archive.
    """
    try:
        with temporary_file(raw, suffix=".docx", directory=temp_dir) as path:
            return docx2txt.process(path) or ""
    except Exception as exc:
        raise DecodeError("DOCX", exc) from exc


def decode(raw: bytes, declared_type: DocumentType, temp_dir: Optional[str] = None) -> str:
    """Convert an uploaded document to plain text based on its declared type."""
    logger.debug("Decoding %s document (%d bytes)", declared_type.name, len(raw))
    if declared_type is DocumentType.PDF:
        return read_pdf(raw)
    if declared_type is DocumentType.DOCX:
        return read_docx(raw, temp_dir=temp_dir)
    raise UnsupportedFormatError(declared_type.value)


# -----------------------------
# Regex helpers
# -----------------------------

EMAIL_RE = re.compile(r"[a-zA-Z._%+-][a-zA-Z0-9._%+-]*@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
# Permissive: any run of digits, dashes, brackets and spaces
PHONE_RE = re.compile(r"\+?\d{1,3}[0-9\-() ]{10,20}")
LINKEDIN_RE = re.compile(r"(?:(?:https?://)?(?:www\.)?)?linkedin\.com/(?:in/)?[A-Za-z0-9_-]+", re.I)
WHATSAPP_RE = re.compile(r"(?:https?://)?(?:wa\.me|api\.whatsapp\.com)/\S+", re.I)
TELEGRAM_URL_RE = re.compile(r"(?:https?://)?(?:t\.me|telegram\.me)/\S+", re.I)
# Not part of an email address, and not cut short in front of ".word"
TELEGRAM_HANDLE_RE = re.compile(r"(?<![\w.])@\w+(?!\.?\w)")
SALARY_RE = re.compile(
    r"(?P<currency_symbol>[$€£])\s?"
    r"(?P<amount>\d+(?:,?\d{3})*(?:\.\d{1,2})?)"
    r" {0,3}"
    r"(?P<currency_symbol2>[$€£])?\s?\s?"
    r"(?:per year|annually|per annum|per month)?",
    re.I,
)

CURRENCY_CODES = {"$": "USD", "€": "EUR", "£": "GBP"}


def _first_match(regex: re.Pattern, text: str) -> Optional[str]:
    m = regex.search(text or "")
    return m.group(0) if m else None


def extract_email(text: str) -> Optional[str]:
    return _first_match(EMAIL_RE, text)


def extract_phone(text: str) -> Optional[str]:
    return _first_match(PHONE_RE, text)


def extract_linkedin(text: str) -> Optional[str]:
    return _first_match(LINKEDIN_RE, text)


def extract_whatsapp(text: str) -> Optional[str]:
    return _first_match(WHATSAPP_RE, text)


def extract_telegram(text: str) -> Optional[str]:
    """Return the first Telegram URL, or failing that the first @handle."""
    url = _first_match(TELEGRAM_URL_RE, text)
    if url:
        return url
    return _first_match(TELEGRAM_HANDLE_RE, text)


def extract_salary(text: str) -> Optional[DesiredSalary]:
    """Find the first amount prefixed by $, € or £.

    A trailing period keyword such as "per year" is consumed but not
    interpreted.
    """
    m = SALARY_RE.search(text or "")
    if not m or not m.group("amount"):
        return None
    amount = float(m.group("amount").replace(",", ""))
    symbol = m.group("currency_symbol") or m.group("currency_symbol2") or "$"
    return DesiredSalary(amount=amount, currency=CURRENCY_CODES.get(symbol, "USD"))


# -----------------------------
# Reference datasets
# -----------------------------

@lru_cache(maxsize=None)
def load_reference_list(filename: str, column: str = "name") -> Tuple[str, ...]:
    """Load one column of a bundled CSV dataset, in file order.

    Results are cached for the lifetime of the process.

    Raises:
        ReferenceDataError: If the file or column is missing.
    """
    path = os.path.join(DATA_DIR, filename)
    try:
        # "NA" is Namibia, not a missing value
        frame = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (OSError, pd.errors.ParserError) as exc:
        raise ReferenceDataError(f"Cannot load reference data {filename}", {"error": str(exc)}) from exc
    if column not in frame.columns:
        raise ReferenceDataError(
            f"Missing column {column!r} in {filename}", {"columns": list(frame.columns)}
        )
    values = (v.strip() for v in frame[column].tolist())
    return tuple(v for v in values if v)
