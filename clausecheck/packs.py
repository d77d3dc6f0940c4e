"""
Rule packs: named, ordered subsets of the rule catalogue.

Pack membership is declared by rule id in the YAML rule pack. Ids that
have no rule in the catalogue are skipped, so the catalogue and the pack
tables can evolve independently.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import logging

from clausecheck.rules import get_catalogue, unresolved_placeholder_rule
from clausecheck.rules.base import Rule
from clausecheck.rules.load_rules import PackDefinition, load_rule_pack, load_pack_definitions

logger = logging.getLogger(__name__)

DEFAULT_PACK = "core"


@dataclass(frozen=True)
class RulePack:
    key: str
    label: str
    rules: Tuple[Rule, ...]

    @property
    def rule_ids(self) -> List[str]:
        return [r.id for r in self.rules]


def build_pack(
    key: str,
    label: str,
    rule_ids: Iterable[str],
    catalogue: Sequence[Rule],
    lead: Sequence[Rule] = (),
) -> RulePack:
    by_id: Dict[str, Rule] = {}
    for rule in catalogue:
        by_id.setdefault(rule.id, rule)

    rules: List[Rule] = list(lead)
    for rule_id in rule_ids:
        rule = by_id.get(rule_id)
        if rule is None:
            logger.debug(f"Pack {key}: no rule {rule_id} in catalogue")
            continue
        rules.append(rule)
    return RulePack(key=key, label=label, rules=tuple(rules))


def build_packs(catalogue: Sequence[Rule], definitions: Iterable[PackDefinition]) -> Tuple[RulePack, ...]:
    packs: List[RulePack] = []
    for d in definitions:
        lead = (unresolved_placeholder_rule,) if d.include_headline_placeholder else ()
        packs.append(build_pack(d.key, d.label, d.rule_ids, catalogue, lead=lead))
    return tuple(packs)


_PACKS: Optional[Tuple[RulePack, ...]] = None


def get_rule_packs() -> Tuple[RulePack, ...]:
    global _PACKS
    if _PACKS is None:
        _PACKS = build_packs(get_catalogue(), load_pack_definitions(load_rule_pack()))
    return _PACKS


def get_pack(key: str) -> Optional[RulePack]:
    for pack in get_rule_packs():
        if pack.key == key:
            return pack
    return None


def resolve_pack_rules(key: str) -> List[Rule]:
    """Rules for a pack key; an unknown key resolves to no rules."""
    pack = get_pack(key)
    return list(pack.rules) if pack else []
