"""
Turning model output into findings.

Model output is untrusted: anything that is not a JSON array of objects
is treated as "no findings" rather than an error, and every field is
coerced into the closed sets the rest of the package expects.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
import json
import logging
import re

from clausecheck.compare import ComparisonFinding
from clausecheck.ir import Finding, SEVERITIES, CATEGORIES

logger = logging.getLogger(__name__)

AI_RULE_ID = "AI"
_FENCE_OPEN_RE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"\s*```$")


def strip_code_fences(raw: str) -> str:
    cleaned = (raw or "").strip()
    cleaned = _FENCE_OPEN_RE.sub("", cleaned)
    return _FENCE_CLOSE_RE.sub("", cleaned).strip()


def parse_json_array(raw: str) -> List[Dict[str, Any]]:
    """Objects of the JSON array in raw; [] for anything else."""
    try:
        parsed = json.loads(strip_code_fences(raw))
    except (TypeError, ValueError):
        logger.warning("Model output was not valid JSON; ignoring it")
        return []
    if not isinstance(parsed, list):
        return []
    return [item for item in parsed if isinstance(item, dict)]


def _str(item: Dict[str, Any], *keys: str) -> str:
    for k in keys:
        v = item.get(k)
        if isinstance(v, str) and v.strip():
            return v.strip()
    return ""


def ai_findings_from_items(items: List[Dict[str, Any]], text: Optional[str] = None) -> List[Finding]:
    """
    Convert model items into findings with ids AI-1, AI-2, ...

    When the source text is given, the matched text is looked up in it
    (case-insensitively) so the finding can be highlighted like a rule
    finding. Items whose quote cannot be found get no span.
    """
    findings: List[Finding] = []
    for item in items:
        severity = _str(item, "severity").lower()
        if severity not in SEVERITIES:
            severity = "medium"
        category = _str(item, "category").lower()
        matched = _str(item, "matchedText", "matched_text")

        start = end = None
        if text and matched:
            m = re.search(re.escape(matched), text, re.IGNORECASE)
            if m:
                start, end = m.start(), m.end()
                matched = m.group(0)

        findings.append(Finding(
            id=f"AI-{len(findings) + 1}",
            severity=severity,
            rule_id=AI_RULE_ID,
            rule_title=_str(item, "title", "ruleTitle") or "AI finding",
            category=category if category in CATEGORIES else None,
            why=_str(item, "why"),
            suggestion=_str(item, "suggestion"),
            matched_text=matched,
            location_label=_str(item, "locationLabel", "location_label") or None,
            start=start,
            end=end,
            source="ai",
        ))
    return findings


def comparison_findings_from_items(items: List[Dict[str, Any]]) -> List[ComparisonFinding]:
    findings: List[ComparisonFinding] = []
    for item in items:
        severity = _str(item, "severity").lower()
        findings.append(ComparisonFinding(
            id=f"AI-{len(findings) + 1}",
            severity=severity if severity in SEVERITIES else "medium",
            rule_title=_str(item, "ruleTitle", "title") or "AI comparison finding",
            why=_str(item, "why"),
            suggestion=_str(item, "suggestion"),
            baseline_snippet=_str(item, "baselineSnippet") or None,
            new_snippet=_str(item, "newSnippet") or None,
        ))
    return findings
