"""Helpers for triaging a list of findings in the UI, CLI and reports."""
from __future__ import annotations
from typing import Dict, Iterable, List, Sequence

from clausecheck.ir import Finding, SEVERITIES

_SEVERITY_RANK = {s: i for i, s in enumerate(SEVERITIES)}


def merge_findings(rule_findings: Sequence[Finding], ai_findings: Sequence[Finding]) -> List[Finding]:
    """Rule-engine findings first, then AI findings; each keeps its own ``source``."""
    return list(rule_findings) + list(ai_findings)


def severity_counts(findings: Iterable[Finding]) -> Dict[str, int]:
    counts = {s: 0 for s in SEVERITIES}
    total = 0
    for f in findings:
        total += 1
        if f.severity in counts:
            counts[f.severity] += 1
    counts["total"] = total
    return counts


def _haystack(f: Finding) -> str:
    return " ".join([f.rule_id, f.rule_title, f.why, f.matched_text, f.location_label or ""]).lower()


def filter_findings(findings: Iterable[Finding], severity: str = "all", query: str = "") -> List[Finding]:
    """Severity filter ("all" or one level) combined with a case-insensitive text query."""
    q = (query or "").strip().lower()
    out: List[Finding] = []
    for f in findings:
        if severity != "all" and f.severity != severity:
            continue
        if q and q not in _haystack(f):
            continue
        out.append(f)
    return out


def exclude_resolved(findings: Iterable[Finding], resolved_ids: Iterable[str]) -> List[Finding]:
    resolved = set(resolved_ids)
    return [f for f in findings if f.id not in resolved]


def sort_by_severity(findings: Iterable[Finding]) -> List[Finding]:
    # Stable, so findings of equal severity keep document order.
    return sorted(findings, key=lambda f: _SEVERITY_RANK.get(f.severity, len(SEVERITIES)))
