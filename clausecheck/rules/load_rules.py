from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Set
import re
import yaml

DEFAULT_RULES_PATH = Path(__file__).parent / "contract_rules.yml"


@dataclass(frozen=True)
class RequiredSectionConfig:
    rule_id: str
    title: str
    severity: str
    section_label: str
    pattern: Pattern[str]


@dataclass(frozen=True)
class PlaceholderPatternConfig:
    rule_id: str
    title: str
    severity: str
    category: str
    pattern: Pattern[str]
    placeholder_label: str


@dataclass(frozen=True)
class PackDefinition:
    key: str
    label: str
    rule_ids: List[str]
    include_headline_placeholder: bool = False


def _compile(pattern: str, case_insensitive: bool = True) -> Pattern[str]:
    return re.compile(pattern, re.IGNORECASE if case_insensitive else 0)


def load_rule_pack(path: Optional[str] = None) -> Dict[str, Any]:
    with open(path or DEFAULT_RULES_PATH, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_required_sections(rule_pack: Dict[str, Any]) -> List[RequiredSectionConfig]:
    configs: List[RequiredSectionConfig] = []
    for r in rule_pack.get("required_sections", []) or []:
        configs.append(RequiredSectionConfig(
            rule_id=r["id"],
            title=r["title"],
            severity=str(r.get("severity", "medium")),
            section_label=r["section"],
            pattern=_compile(r["pattern"], bool(r.get("case_insensitive", True))),
        ))
    return configs


def load_placeholder_patterns(rule_pack: Dict[str, Any]) -> List[PlaceholderPatternConfig]:
    configs: List[PlaceholderPatternConfig] = []
    for r in rule_pack.get("placeholder_patterns", []) or []:
        configs.append(PlaceholderPatternConfig(
            rule_id=r["id"],
            title=r["title"],
            severity=str(r.get("severity", "medium")),
            category=str(r.get("category", "commercial-risk")),
            pattern=_compile(r["pattern"], bool(r.get("case_insensitive", True))),
            placeholder_label=str(r.get("label", r["title"])),
        ))
    return configs


def load_stopwords(rule_pack: Dict[str, Any]) -> Set[str]:
    return set(
        w.strip().lower()
        for w in (rule_pack.get("common_capitalised_words") or [])
        if isinstance(w, str) and w.strip()
    )


def load_pack_definitions(rule_pack: Dict[str, Any]) -> List[PackDefinition]:
    packs: List[PackDefinition] = []
    for p in rule_pack.get("packs", []) or []:
        packs.append(PackDefinition(
            key=p["key"],
            label=p.get("label", p["key"]),
            rule_ids=[str(i) for i in (p.get("rules") or [])],
            include_headline_placeholder=bool(p.get("include_headline_placeholder", False)),
        ))
    return packs
