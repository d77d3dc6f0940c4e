"""
Span and sentence helpers shared by the rules and the highlighter.

All offsets are Python string indices (Unicode code points) into the
source text, half-open [start, end).
"""
from __future__ import annotations
from typing import List
import re

from clausecheck.ir import Sentence

# Naive on purpose: no abbreviation handling, so "e.g. the Borrower" splits
# after "e.g." and a trailing fragment without terminal punctuation is dropped.
_SENTENCE_RE = re.compile(r"[^.?!]+[.?!]")


def get_sentences(text: str) -> List[Sentence]:
    """
    Split text into sentences.

    A sentence is a maximal run of characters other than ``.``, ``?`` and
    ``!`` followed by one of them. Whitespace-only runs are dropped. The
    returned offsets locate the trimmed sentence text in the source, so
    ``text[s.start:s.end] == s.text``.
    """
    sentences: List[Sentence] = []
    if not text:
        return sentences

    for m in _SENTENCE_RE.finditer(text):
        raw = m.group(0)
        trimmed = raw.strip()
        if not trimmed:
            continue
        lead = len(raw) - len(raw.lstrip())
        start = m.start() + lead
        sentences.append(Sentence(text=trimmed, start=start, end=start + len(trimmed)))
    return sentences


def normalize_whitespace(s: str) -> str:
    return " ".join(s.split()).strip()


def escape_pattern(s: str) -> str:
    """Escape a literal for use inside a dynamically built regex."""
    return re.escape(s)


def find_all(text: str, needle: str) -> List[int]:
    """Start offsets of every non-overlapping occurrence of needle."""
    positions: List[int] = []
    if not text or not needle:
        return positions
    idx = text.find(needle)
    while idx != -1:
        positions.append(idx)
        idx = text.find(needle, idx + len(needle))
    return positions


def count_occurrences(haystack: str, needle: str) -> int:
    """Count occurrences advancing one character per hit (overlaps allowed)."""
    if not needle:
        return 0
    total = 0
    idx = haystack.find(needle)
    while idx != -1:
        total += 1
        idx = haystack.find(needle, idx + 1)
    return total


def span_is_valid(start, end, length: int) -> bool:
    if not isinstance(start, int) or not isinstance(end, int):
        return False
    if isinstance(start, bool) or isinstance(end, bool):
        return False
    return 0 <= start < end <= length


def word_count(s: str) -> int:
    return len([w for w in s.split() if w])
