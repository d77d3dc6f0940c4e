"""
Required-section presence checks.

Each configured section is looked for once anywhere in the text. When the
pattern is absent the rule emits a single document-level finding with no
span, since there is nothing in the text to point at.
"""
from __future__ import annotations
from typing import List

from clausecheck.ir import Finding
from clausecheck.rules.base import Rule, FindingFactory
from clausecheck.rules.load_rules import RequiredSectionConfig


def _required_section_check(config: RequiredSectionConfig):
    def check(text: str) -> List[Finding]:
        if not text or not text.strip():
            return []
        if config.pattern.search(text):
            return []

        factory = FindingFactory(config.rule_id, config.title, config.severity, "structural-completeness")
        return [factory.make(
            why=(
                f"The document does not appear to contain a clearly labeled '{config.section_label}' "
                "section, which is typically expected in a well-structured agreement."
            ),
            suggestion=(
                f"Add a '{config.section_label}' section with appropriate wording or confirm that its "
                "content is clearly covered elsewhere in the document."
            ),
            matched_text=config.section_label,
            location_label="Whole document",
        )]
    return check


def create_required_section_rules(configs: List[RequiredSectionConfig]) -> List[Rule]:
    return [
        Rule(
            id=c.rule_id,
            title=c.title,
            severity=c.severity,
            category="structural-completeness",
            check=_required_section_check(c),
        )
        for c in configs
    ]


def _missing_governing_law(text: str) -> List[Finding]:
    if not text or not text.strip():
        return []
    if "governing law" in text.lower():
        return []

    factory = FindingFactory("R-102", "Missing governing law clause", "medium", "structural-completeness")
    return [factory.make(
        why=(
            "The document does not contain a governing law clause, leaving uncertainty about which "
            "jurisdiction's laws apply to the agreement."
        ),
        suggestion=(
            "Add a clear governing law clause specifying the jurisdiction (for example, 'This Agreement "
            "is governed by and construed in accordance with the laws of [Jurisdiction]')."
        ),
        matched_text="Governing law",
        location_label="Whole document",
    )]


missing_governing_law_rule = Rule(
    id="R-102",
    title="Missing governing law clause",
    severity="medium",
    category="structural-completeness",
    check=_missing_governing_law,
)
