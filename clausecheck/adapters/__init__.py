"""
Document extraction.

Turns an uploaded .docx, .pdf or .txt into the single plain-text string
the rules run over. Failures surface as ExtractionError with a message
fit to show the user.
"""
from __future__ import annotations
from pathlib import Path
from typing import Optional
import io
import logging

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".docx", ".pdf", ".txt")


class ExtractionError(RuntimeError):
    """A document could not be turned into text."""


def _suffix(name: Optional[str]) -> str:
    return Path(name or "").suffix.lower()


def extract_text(path: str) -> str:
    suffix = _suffix(path)
    if suffix not in SUPPORTED_SUFFIXES:
        raise ExtractionError("Please upload a .docx or .pdf file.")
    if not Path(path).exists():
        raise ExtractionError(f"File not found: {path}")

    logger.info(f"Extracting text from {path}")
    if suffix == ".docx":
        from clausecheck.adapters.docx_adapter import extract_docx_text
        return extract_docx_text(path)
    if suffix == ".pdf":
        from clausecheck.adapters.pdf_adapter import extract_pdf_text
        return extract_pdf_text(path)
    return Path(path).read_text(encoding="utf-8").strip()


def extract_text_from_bytes(data: bytes, filename: str) -> str:
    """Same as extract_text, for an in-memory upload named ``filename``."""
    suffix = _suffix(filename)
    if suffix not in SUPPORTED_SUFFIXES:
        raise ExtractionError("Please upload a .docx or .pdf file.")
    if not data:
        raise ExtractionError("No file provided")

    if suffix == ".docx":
        from clausecheck.adapters.docx_adapter import extract_docx_text
        return extract_docx_text(io.BytesIO(data))
    if suffix == ".pdf":
        from clausecheck.adapters.pdf_adapter import extract_pdf_text
        return extract_pdf_text(io.BytesIO(data))
    try:
        return data.decode("utf-8").strip()
    except UnicodeDecodeError as e:
        raise ExtractionError(f"Text file is not valid UTF-8: {e}") from e
