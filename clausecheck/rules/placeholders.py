"""
Unfinished-drafting detectors.

The configured family reports every match as its own point finding. The
headline [●] rule is different: it emits one aggregate finding that counts
every occurrence, anchored on the first.
"""
from __future__ import annotations
from typing import List

from clausecheck.ir import Finding
from clausecheck.rules.base import Rule, FindingFactory
from clausecheck.rules.load_rules import PlaceholderPatternConfig
from clausecheck.textspan import find_all

PLACEHOLDER = "[●]"


def _placeholder_check(config: PlaceholderPatternConfig):
    def check(text: str) -> List[Finding]:
        if not text:
            return []
        factory = FindingFactory(config.rule_id, config.title, config.severity, config.category)
        findings: List[Finding] = []
        for m in config.pattern.finditer(text):
            if m.end() == m.start():
                continue
            findings.append(factory.make(
                why=(
                    f"The document contains a placeholder ('{config.placeholder_label}') that should be "
                    "replaced with final, agreed wording before execution."
                ),
                suggestion=(
                    "Replace this placeholder with the final agreed detail (for example, amounts, dates, "
                    "party names, or bespoke drafting), or remove it if no longer required."
                ),
                matched_text=m.group(0),
                start=m.start(),
                end=m.end(),
            ))
        return findings
    return check


def create_placeholder_rules(configs: List[PlaceholderPatternConfig]) -> List[Rule]:
    return [
        Rule(
            id=c.rule_id,
            title=c.title,
            severity=c.severity,
            category=c.category,
            check=_placeholder_check(c),
        )
        for c in configs
    ]


def _unresolved_placeholder(text: str) -> List[Finding]:
    positions = find_all(text, PLACEHOLDER)
    if not positions:
        return []

    count = len(positions)
    if count == 1:
        why = (
            f"The document contains an unresolved commercial placeholder '{PLACEHOLDER}', which should be "
            "replaced with an agreed figure or term before signing."
        )
        location = None
    else:
        why = (
            f"The document contains an unresolved commercial placeholder '{PLACEHOLDER}' which appears "
            f"{count} times; each occurrence should be replaced with an agreed figure or term before signing."
        )
        location = f"Appears {count} times in the document"

    factory = FindingFactory("R-101", "Unresolved commercial placeholder", "high", "commercial-risk")
    first = positions[0]
    return [factory.make(
        why=why,
        suggestion=(
            f"Replace each '{PLACEHOLDER}' with the final agreed amount, date, or term and ensure all parties "
            "review and approve the completed provisions before execution."
        ),
        matched_text=PLACEHOLDER,
        location_label=location,
        start=first,
        end=first + len(PLACEHOLDER),
    )]


unresolved_placeholder_rule = Rule(
    id="R-101",
    title="Unresolved commercial placeholder",
    severity="high",
    category="commercial-risk",
    check=_unresolved_placeholder,
)
