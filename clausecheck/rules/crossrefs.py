"""
Cross-reference integrity.

A reference such as "clause 9.9" or "Schedule 3" is considered resolved
when the same number (optionally preceded by the same label) starts a line
somewhere in the document. Headings are indexed once per run so each
reference is a set lookup rather than a fresh scan of the text.
"""
from __future__ import annotations
from typing import List, Set, Tuple
import re

from clausecheck.ir import Finding
from clausecheck.rules.base import Rule, FindingFactory

CLAUSE_OR_SECTION_REF = re.compile(r"\b(clause|section)\s+(\d+(?:\.\d+)*)\b", re.IGNORECASE)
SCHEDULE_REF = re.compile(r"\bSchedule\s+(\d+)\b", re.IGNORECASE)

_NUMBERED_LINE = re.compile(r"\s*(?:(clause|section)\s+)?(\d+(?:\.\d+)*)", re.IGNORECASE)
_SCHEDULE_HEADING = re.compile(r"(?:^|\n)\s*SCHEDULE\s+(\d+)\b", re.IGNORECASE)


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _line_starts(text: str) -> List[int]:
    return [0] + [m.end() for m in re.finditer("\n", text)]


def index_clause_headings(text: str) -> Set[Tuple[str, str]]:
    """
    (label, number) pairs that start a line; label is "" for a bare number.

    A heading "3.1.2" also resolves "3" and "3.1", mirroring a word-boundary
    match of the shorter number at the start of the line.
    """
    found: Set[Tuple[str, str]] = set()
    for pos in _line_starts(text):
        m = _NUMBERED_LINE.match(text, pos)
        if not m:
            continue
        label = (m.group(1) or "").lower()
        parts = m.group(2).split(".")
        for i in range(1, len(parts) + 1):
            prefix = ".".join(parts[:i])
            after = m.start(2) + len(prefix)
            if after < len(text) and _is_word_char(text[after]):
                continue
            found.add((label, prefix))
    return found


def index_schedule_headings(text: str) -> Set[str]:
    return {m.group(1) for m in _SCHEDULE_HEADING.finditer(text)}


def _cross_references(text: str) -> List[Finding]:
    if not text:
        return []

    factory = FindingFactory("R-401", "Broken cross-references", "medium", "cross-reference-integrity")
    findings: List[Finding] = []
    headings = index_clause_headings(text)

    # Each broken reference is reported on its own, even when the same
    # target number is cited several times.
    for m in CLAUSE_OR_SECTION_REF.finditer(text):
        label, number = m.group(1), m.group(2)
        if ("", number) in headings or (label.lower(), number) in headings:
            continue
        findings.append(factory.make(
            rule_title="Reference to non-existent clause or section",
            why=(
                f"The document refers to {label} {number}, but no corresponding heading or clause number "
                "could be found. This may indicate a broken or outdated cross-reference."
            ),
            suggestion=(
                f"Either insert a clause or section numbered {number}, or update this reference to point "
                "to the correct provision."
            ),
            matched_text=m.group(0),
            location_label=f"{label} {number} reference",
            start=m.start(),
            end=m.end(),
        ))

    schedules = index_schedule_headings(text)
    for m in SCHEDULE_REF.finditer(text):
        number = m.group(1)
        if number in schedules:
            continue
        findings.append(factory.make(
            rule_title="Reference to non-existent schedule",
            why=(
                f"The document refers to Schedule {number}, but no corresponding schedule heading could be "
                "found. This may indicate a broken or outdated cross-reference."
            ),
            suggestion=(
                f"Either insert a schedule numbered {number}, or update this reference to point to the "
                "correct schedule."
            ),
            matched_text=m.group(0),
            location_label=f"Schedule {number} reference",
            start=m.start(),
            end=m.end(),
        ))

    return findings


def create_cross_reference_rule() -> Rule:
    return Rule(
        id="R-401",
        title="Broken cross-references",
        severity="medium",
        category="cross-reference-integrity",
        check=_cross_references,
    )
