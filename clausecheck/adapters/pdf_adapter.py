from __future__ import annotations
from typing import BinaryIO, List, Union
import logging
import pdfplumber

from clausecheck.adapters import ExtractionError

logger = logging.getLogger(__name__)


def extract_pdf_text(source: Union[str, BinaryIO]) -> str:
    """Text of every page, pages separated by a blank line."""
    pages: List[str] = []
    try:
        with pdfplumber.open(source) as pdf:
            for page in pdf.pages:
                pages.append((page.extract_text() or "").strip())  # None for image-only pages
    except Exception as e:
        raise ExtractionError(f"Failed to extract PDF text: {e}") from e

    logger.debug(f"Read {len(pages)} PDF pages")
    text = "\n\n".join(p for p in pages if p).strip()
    if not text:
        raise ExtractionError("No extractable text found in PDF")
    return text
