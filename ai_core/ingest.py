"""Text extraction for uploaded study material (plain text, DOCX, PDF).

Only text is kept: page and paragraph text is concatenated, layout, tables and
images are dropped.
"""
from __future__ import annotations

import enum
import logging
import os
from typing import Optional

import fitz  # PyMuPDF
from docx import Document as DocxDocument

from .cleaning import clean_extracted


logger = logging.getLogger("ai_core.ingest")


class DocumentKind(str, enum.Enum):
    TEXT = "text"
    DOCX = "docx"
    PDF = "pdf"


_EXTENSIONS = {
    ".txt": DocumentKind.TEXT,
    ".md": DocumentKind.TEXT,
    ".docx": DocumentKind.DOCX,
    ".pdf": DocumentKind.PDF,
}


class DocumentExtractionError(Exception):
    """Raised when a document cannot be parsed."""


class EmptyDocumentError(DocumentExtractionError):
    """Raised when a document parses but holds no extractable text."""


def kind_from_filename(filename: Optional[str]) -> Optional[DocumentKind]:
    ext = os.path.splitext(filename or "")[1].lower()
    return _EXTENSIONS.get(ext)


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _read_docx(path: str) -> str:
    doc = DocxDocument(path)
    return "\n\n".join(p.text for p in doc.paragraphs if p.text)


def _read_pdf(path: str) -> str:
    pages = []
    with fitz.open(path) as doc:
        for page in doc:
            pages.append(page.get_text("text").strip())
    return "\n\n".join(pages)


_READERS = {
    DocumentKind.TEXT: _read_text,
    DocumentKind.DOCX: _read_docx,
    DocumentKind.PDF: _read_pdf,
}


def extract_text(path: str, kind: DocumentKind) -> str:
    """Return all text in the file at `path`, read as `kind`.

    Raises:
        DocumentExtractionError: the file could not be parsed.
        EmptyDocumentError: the file holds no non-whitespace text.
    """
    kind = DocumentKind(kind)
    reader = _READERS[kind]
    try:
        raw = reader(path)
    except Exception as e:
        raise DocumentExtractionError(f"Could not read {kind.value} document: {e}") from e

    text = clean_extracted(raw)
    if not text:
        raise EmptyDocumentError(f"No extractable text in {kind.value} document")
    logger.debug("Extracted %s chars from %s (%s)", len(text), os.path.basename(path), kind.value)
    return text
