from __future__ import annotations
from typing import List
import re

from clausecheck.ir import Finding
from clausecheck.rules.base import Rule, FindingFactory
from clausecheck.textspan import get_sentences, count_occurrences, word_count

MAX_SENTENCE_WORDS = 45
CONDITIONAL_PHRASES = ("provided that", "subject to", "notwithstanding")
MIN_CONDITIONAL_PHRASES = 3
_DISCRETION_RE = re.compile(r"sole and absolute discretion", re.IGNORECASE)


def _long_sentences(text: str) -> List[Finding]:
    factory = FindingFactory("R-601", "Very long sentences", "low", "drafting-clarity")
    findings: List[Finding] = []
    for s in get_sentences(text):
        wc = word_count(s.text)
        if wc <= MAX_SENTENCE_WORDS:
            continue
        findings.append(factory.make(
            rule_title="Very long sentence",
            why=(
                f"This sentence is very long (approximately {wc} words), which can make it hard to read "
                "and interpret."
            ),
            suggestion=(
                "Consider breaking this sentence into shorter sentences or using sub-paragraphs to improve "
                "clarity."
            ),
            matched_text=s.text,
            location_label="Long sentence",
            start=s.start,
            end=s.end,
        ))
    return findings


def create_long_sentence_rule() -> Rule:
    return Rule(
        id="R-601",
        title="Very long sentences",
        severity="low",
        category="drafting-clarity",
        check=_long_sentences,
    )


def _conditional_density(text: str) -> List[Finding]:
    factory = FindingFactory("R-602", "Heavy use of conditional phrases", "medium", "drafting-clarity")
    findings: List[Finding] = []
    for s in get_sentences(text):
        lower = s.text.lower()
        total = sum(count_occurrences(lower, p) for p in CONDITIONAL_PHRASES)
        if total < MIN_CONDITIONAL_PHRASES:
            continue
        findings.append(factory.make(
            rule_title="Sentence with many conditional phrases",
            why=(
                "This sentence contains several conditional phrases (for example, 'provided that', "
                "'subject to', 'notwithstanding'), which can make the operative effect difficult to follow."
            ),
            suggestion=(
                "Consider simplifying the structure, moving some conditions into separate sub-paragraphs, "
                "or using clearer signposting for each condition."
            ),
            matched_text=s.text,
            location_label="Complex conditional sentence",
            start=s.start,
            end=s.end,
        ))
    return findings


def create_conditional_phrase_density_rule() -> Rule:
    return Rule(
        id="R-602",
        title="Heavy use of conditional phrases",
        severity="medium",
        category="drafting-clarity",
        check=_conditional_density,
    )


def _sole_and_absolute_discretion(text: str) -> List[Finding]:
    if not text:
        return []
    factory = FindingFactory("R-603", "'Sole and absolute discretion' phrasing", "low", "commercial-risk")
    return [
        factory.make(
            why=(
                "The phrase 'sole and absolute discretion' is very one-sided and may be viewed as aggressive "
                "or unreasonable depending on the context."
            ),
            suggestion=(
                "Consider whether a softer formulation (for example, 'reasonable discretion' or adding "
                "objective criteria) would be more appropriate, or confirm that this level of discretion is "
                "a deliberate risk allocation."
            ),
            matched_text=m.group(0),
            location_label="Discretion clause",
            start=m.start(),
            end=m.end(),
        )
        for m in _DISCRETION_RE.finditer(text)
    ]


def create_sole_and_absolute_discretion_rule() -> Rule:
    return Rule(
        id="R-603",
        title="'Sole and absolute discretion' phrasing",
        severity="low",
        category="commercial-risk",
        check=_sole_and_absolute_discretion,
    )
