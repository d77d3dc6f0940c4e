"""
Defined-term extraction for agreement text.

Recognises the ``"Term" means ...`` construct with straight or curly
quotes. Every occurrence is kept so callers can detect terms defined
more than once.
"""
from __future__ import annotations
from typing import Dict
import re

from clausecheck.ir import DefinitionInfo, DefinitionOccurrence

DEFINITION_RE = re.compile(r"[\"“](.+?)[\"”]\s+means\b", re.IGNORECASE)


def extract_definitions(text: str) -> Dict[str, DefinitionInfo]:
    """
    Map lower-cased term -> DefinitionInfo, in order of first definition.

    Computed fresh on each call; nothing is cached between runs.
    """
    result: Dict[str, DefinitionInfo] = {}
    if not text:
        return result

    for m in DEFINITION_RE.finditer(text):
        term = (m.group(1) or "").strip()
        if not term:
            continue
        key = term.lower()
        info = result.get(key)
        if info is None:
            info = DefinitionInfo(term=term)
            result[key] = info
        info.occurrences.append(DefinitionOccurrence(index=m.start(), matched_text=m.group(0)))
    return result
