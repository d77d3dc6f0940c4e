from __future__ import annotations
from typing import BinaryIO, List, Union
from docx import Document

from clausecheck.adapters import ExtractionError


def extract_docx_text(source: Union[str, BinaryIO]) -> str:
    """
    Plain text of a .docx: body paragraphs in order, separated by a blank
    line so paragraph boundaries survive into the text.
    """
    try:
        doc = Document(source)
    except Exception as e:
        raise ExtractionError(f"Could not read .docx file: {e}") from e

    paras: List[str] = [p.text for p in doc.paragraphs if p.text.strip()]
    return "\n\n".join(paras).strip()
