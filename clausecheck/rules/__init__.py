"""
Rule catalogue.

Builds the full, ordered list of deterministic rules from the YAML rule
pack plus the bespoke rules. The default catalogue is built once on first
use; rules carry no state, so it is shared freely.
"""
from __future__ import annotations
from typing import Any, Dict, Optional, Tuple

from clausecheck.rules.base import Rule, FindingFactory
from clausecheck.rules.load_rules import (
    load_rule_pack,
    load_required_sections,
    load_placeholder_patterns,
    load_stopwords,
)
from clausecheck.rules.sections import create_required_section_rules, missing_governing_law_rule
from clausecheck.rules.placeholders import create_placeholder_rules, unresolved_placeholder_rule
from clausecheck.rules.crossrefs import create_cross_reference_rule
from clausecheck.rules.terms import create_duplicate_definitions_rule, create_undefined_capitalised_terms_rule
from clausecheck.rules.clarity import (
    create_long_sentence_rule,
    create_conditional_phrase_density_rule,
    create_sole_and_absolute_discretion_rule,
)
from clausecheck.rules.domain import (
    unilateral_amendment_rule,
    financial_covenant_rules,
    sanctions_rules,
    benchmark_fallback_rules,
    payment_convention_rules,
    negative_pledge_rules,
)

_DEFAULT_CATALOGUE: Optional[Tuple[Rule, ...]] = None


def build_catalogue(rule_pack: Optional[Dict[str, Any]] = None) -> Tuple[Rule, ...]:
    """Every rule, in catalogue order. The headline [●] rule is not part of it."""
    if rule_pack is None:
        rule_pack = load_rule_pack()
    return (
        missing_governing_law_rule,
        unilateral_amendment_rule,
        # table-driven families
        *create_required_section_rules(load_required_sections(rule_pack)),
        *create_placeholder_rules(load_placeholder_patterns(rule_pack)),
        create_cross_reference_rule(),
        create_duplicate_definitions_rule(),
        create_undefined_capitalised_terms_rule(load_stopwords(rule_pack)),
        create_long_sentence_rule(),
        create_conditional_phrase_density_rule(),
        create_sole_and_absolute_discretion_rule(),
        *financial_covenant_rules,
        *sanctions_rules,
        *benchmark_fallback_rules,
        *payment_convention_rules,
        *negative_pledge_rules,
    )


def get_catalogue() -> Tuple[Rule, ...]:
    global _DEFAULT_CATALOGUE
    if _DEFAULT_CATALOGUE is None:
        _DEFAULT_CATALOGUE = build_catalogue()
    return _DEFAULT_CATALOGUE


__all__ = [
    "Rule",
    "FindingFactory",
    "build_catalogue",
    "get_catalogue",
    "unresolved_placeholder_rule",
    "missing_governing_law_rule",
]
