"""Document text extraction.

Supports .docx (python-docx), .pdf (pypdf) and a UTF-8 fallback for
everything else. Unreadable input yields an empty string.
"""

import io
import sys
from pathlib import Path
from typing import Union

from docx import Document
from pypdf import PdfReader

FORMAT_DOCX = "docx"
FORMAT_PDF = "pdf"
FORMAT_TEXT = "text"

SUFFIX_BY_FORMAT = {FORMAT_DOCX: ".docx", FORMAT_PDF: ".pdf", FORMAT_TEXT: ".txt"}

_FORMAT_BY_SUFFIX = {
    ".docx": FORMAT_DOCX,
    ".pdf": FORMAT_PDF,
    ".txt": FORMAT_TEXT,
    ".md": FORMAT_TEXT,
}

_FORMAT_BY_CONTENT_TYPE = {
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": FORMAT_DOCX,
    "application/pdf": FORMAT_PDF,
}


def _log(msg: str):
    print(msg, file=sys.stderr)


def detect_format(filename: str = "", content_type: str = "") -> str:
    """Format tag from the file name, then the content type.

    Uploads with neither hint are assumed to be Word documents.
    """
    suffix = Path(filename).suffix.lower() if filename else ""
    if suffix in _FORMAT_BY_SUFFIX:
        return _FORMAT_BY_SUFFIX[suffix]
    if suffix:
        return FORMAT_TEXT
    content_type = (content_type or "").split(";")[0].strip().lower()
    if content_type in _FORMAT_BY_CONTENT_TYPE:
        return _FORMAT_BY_CONTENT_TYPE[content_type]
    if content_type.startswith("text/"):
        return FORMAT_TEXT
    return FORMAT_DOCX


def _extract_docx(data: bytes) -> str:
    doc = Document(io.BytesIO(data))
    return "\n".join(p.text for p in doc.paragraphs)


def _extract_pdf(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def extract_text(data: bytes, fmt: str) -> str:
    """Plain text for ``data`` in format ``fmt``; "" when it cannot be read."""
    try:
        if fmt == FORMAT_DOCX:
            return _extract_docx(data)
        if fmt == FORMAT_PDF:
            return _extract_pdf(data)
        return data.decode("utf-8")
    except Exception as e:
        _log(f"[EXTRACT] could not read {fmt} document: {e}")
        return ""


def extract_file(path: Union[str, Path]) -> str:
    """Extract a local file, picking the format from its suffix."""
    path = Path(path)
    return extract_text(path.read_bytes(), detect_format(path.name))
