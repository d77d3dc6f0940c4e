from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List
import re

from clausecheck.definitions import extract_definitions
from clausecheck.ir import Finding
from clausecheck.rules.base import Rule, FindingFactory

CAPITALISED_WORD_RE = re.compile(r"\b[A-Z][a-zA-Z]+\b")
MIN_UNDEFINED_USES = 3


def _duplicate_definitions(text: str) -> List[Finding]:
    if not text:
        return []
    factory = FindingFactory("R-501", "Duplicate defined terms", "medium", "drafting-clarity")
    findings: List[Finding] = []
    for info in extract_definitions(text).values():
        if len(info.occurrences) < 2:
            continue
        # The first definition is taken as the real one; the second is the problem.
        second = info.occurrences[1]
        findings.append(factory.make(
            rule_title="Duplicate defined term",
            why=(
                f'The term "{info.term}" appears to be defined more than once in the document. '
                "Multiple definitions of the same term can create ambiguity."
            ),
            suggestion=(
                "Consolidate the definitions of this term into a single, clear definition and remove any "
                "redundant or inconsistent duplicates."
            ),
            matched_text=second.matched_text,
            location_label="Definitions section",
            start=second.index,
            end=second.index + len(second.matched_text),
        ))
    return findings


def create_duplicate_definitions_rule() -> Rule:
    return Rule(
        id="R-501",
        title="Duplicate defined terms",
        severity="medium",
        category="drafting-clarity",
        check=_duplicate_definitions,
    )


@dataclass
class _Usage:
    example: str
    index: int
    count: int = 1


def create_undefined_capitalised_terms_rule(stopwords: Iterable[str]) -> Rule:
    common = frozenset(w.lower() for w in stopwords)

    def check(text: str) -> List[Finding]:
        if not text:
            return []

        defined = set(extract_definitions(text).keys())
        usage: Dict[str, _Usage] = {}
        for m in CAPITALISED_WORD_RE.finditer(text):
            key = m.group(0).lower()
            if key in common or key in defined:
                continue
            if key in usage:
                usage[key].count += 1
            else:
                usage[key] = _Usage(example=m.group(0), index=m.start())

        factory = FindingFactory("R-502", "Capitalised terms used but not defined", "low", "drafting-clarity")
        findings: List[Finding] = []
        for info in usage.values():
            if info.count < MIN_UNDEFINED_USES:
                continue
            findings.append(factory.make(
                rule_title="Capitalised term used but not defined",
                why=(
                    f'The capitalised term "{info.example}" appears repeatedly in the document '
                    f"(approximately {info.count} times) but does not have a clear definition. "
                    "This may cause uncertainty over its precise meaning."
                ),
                suggestion=(
                    "Either add a formal definition for this term in the definitions section or use "
                    "lower-case language if no special defined meaning is intended."
                ),
                matched_text=info.example,
                location_label="Repeated undefined capitalised term",
                start=info.index,
                end=info.index + len(info.example),
            ))
        return findings

    return Rule(
        id="R-502",
        title="Capitalised terms used but not defined",
        severity="low",
        category="drafting-clarity",
        check=check,
    )
