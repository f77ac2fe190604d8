"""
Shared fixtures: an in-memory entity recognizer and tiny PDF/DOCX builders.
"""

import io
import zipfile
from typing import List, Optional

import pytest

from cv_extract.resume_parser import PERSON, PLACE


class FakeRecognizer:
    """Returns canned entities instead of running spaCy."""

    def __init__(self, people: Optional[List[str]] = None, places: Optional[List[str]] = None):
        self.entities = {PERSON: list(people or []), PLACE: list(places or [])}
        self.calls = []

    def recognize_entities(self, text: str, kind: str) -> List[str]:
        self.calls.append(kind)
        return list(self.entities[kind])


class BrokenRecognizer:
    def recognize_entities(self, text: str, kind: str) -> List[str]:
        raise RuntimeError("model not loaded")


def build_pdf(lines: List[str]) -> bytes:
    """Build a one-page PDF that draws each line with Helvetica."""
    ops = [b"BT", b"/F1 12 Tf", b"14 TL", b"72 720 Td"]
    for line in lines:
        escaped = line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
        ops.append(b"(" + escaped.encode("latin-1") + b") Tj T*")
    ops.append(b"ET")
    content = b"\n".join(ops)

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = b"%PDF-1.4\n"
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_at
    return out


def build_docx(paragraphs: List[str]) -> bytes:
    """Build a minimal DOCX archive with one run per paragraph."""
    body = "".join(
        f"<w:p><w:r><w:t xml:space=\"preserve\">{p}</w:t></w:r></w:p>" for p in paragraphs
    )
    document = (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
        f"<w:body>{body}</w:body></w:document>"
    )
    content_types = (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
        '<Default Extension="xml" ContentType="application/xml"/>'
        '<Override PartName="/word/document.xml" '
        'ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>'
        "</Types>"
    )
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("[Content_Types].xml", content_types)
        archive.writestr("word/document.xml", document)
    return buffer.getvalue()


RESUME_LINES = [
    "Jane Doe",
    "Senior Engineer",
    "jane.doe@example.com | +44 20 7946 0958",
    "linkedin.com/in/janedoe",
    "Based in London, United Kingdom",
    "Languages: English, French",
    "WhatsApp: https://wa.me/447946095800",
    "Telegram: @janedoe",
    "Desired salary: £65,000 per annum",
]


@pytest.fixture
def resume_text() -> str:
    return "\n".join(RESUME_LINES)


@pytest.fixture
def recognizer() -> FakeRecognizer:
    return FakeRecognizer(people=["Jane Doe"], places=["London, United Kingdom"])


@pytest.fixture
def pdf_bytes() -> bytes:
    return build_pdf(["Jane Doe", "jane.doe@example.com"])


@pytest.fixture
def docx_bytes() -> bytes:
    return build_docx(RESUME_LINES)
