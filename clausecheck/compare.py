"""
Deterministic baseline-vs-new agreement comparison.

This is not a redline. It looks at a handful of things that commonly move
between drafts (governing law, interest, one-sided discretion, clause
numbering and defined terms) and reports each difference as a finding
carrying the relevant snippet from either side.
"""
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Pattern
import logging
import re

from clausecheck.ir import Severity
from clausecheck.textspan import normalize_whitespace

logger = logging.getLogger(__name__)

PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
CLAUSE_HEADING_RE = re.compile(r"^\s*(?:Clause\s+)?(\d+(?:\.\d+)*)\b", re.IGNORECASE)
DEFINITION_LINE_RE = re.compile(r"[\"“](.+?)[\"”]\s+means\b[^\n]*", re.IGNORECASE)
GOVERNING_LAW_RE = re.compile(r"governing law", re.IGNORECASE)
INTEREST_RE = re.compile(r"interest", re.IGNORECASE)
UNILATERAL_RE = re.compile(
    r"sole and absolute discretion|sole discretion|unilaterally|for any reason or no reason", re.IGNORECASE
)


@dataclass
class ComparisonFinding:
    id: str
    severity: Severity
    rule_title: str
    why: str
    suggestion: str
    baseline_snippet: Optional[str] = None
    new_snippet: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def extract_paragraph_with_keyword(text: str, keyword: Pattern[str]) -> Optional[str]:
    """First blank-line separated paragraph that matches keyword, trimmed."""
    if not text:
        return None
    for para in PARAGRAPH_SPLIT_RE.split(text):
        if keyword.search(para):
            return para.strip()
    return None


def extract_clause_headings(text: str) -> Dict[str, str]:
    """Clause number -> first heading line carrying it, in document order."""
    result: Dict[str, str] = {}
    for line in (text or "").splitlines():
        m = CLAUSE_HEADING_RE.match(line)
        if m and m.group(1) not in result:
            result[m.group(1)] = line.strip()
    return result


def extract_definition_snippets(text: str) -> Dict[str, str]:
    """Lower-cased term -> its first ``"Term" means ...`` line."""
    result: Dict[str, str] = {}
    for m in DEFINITION_LINE_RE.finditer(text or ""):
        term = (m.group(1) or "").strip()
        if term and term.lower() not in result:
            result[term.lower()] = m.group(0).strip()
    return result


class _Collector:
    def __init__(self):
        self.findings: List[ComparisonFinding] = []

    def add(self, **kwargs) -> None:
        self.findings.append(ComparisonFinding(id=f"CF-{len(self.findings) + 1}", **kwargs))


def _compare_paragraphs(
    out: _Collector, baseline: str, new: str, keyword: Pattern[str], severity: Severity, title: str,
    why: str, suggestion: str,
) -> None:
    old_para = extract_paragraph_with_keyword(baseline, keyword)
    new_para = extract_paragraph_with_keyword(new, keyword)
    if not old_para or not new_para:
        return
    if normalize_whitespace(old_para) == normalize_whitespace(new_para):
        return
    out.add(severity=severity, rule_title=title, why=why, suggestion=suggestion,
            baseline_snippet=old_para, new_snippet=new_para)


def compare_documents(baseline: str, new: str) -> List[ComparisonFinding]:
    out = _Collector()

    _compare_paragraphs(
        out, baseline, new, GOVERNING_LAW_RE, "high", "Governing law mismatch",
        why=(
            "Both documents contain a governing law provision, but the wording appears to differ between the "
            "baseline and the new agreement."
        ),
        suggestion=(
            "Confirm which governing law and formulation should apply, then ensure the final agreement set uses "
            "a single, consistent governing law clause."
        ),
    )
    _compare_paragraphs(
        out, baseline, new, INTEREST_RE, "medium", "Interest clause mismatch",
        why=(
            "Both documents contain an interest clause, but the wording appears to differ between the baseline "
            "and the new agreement."
        ),
        suggestion=(
            "Review the interest provisions side by side (rate, day count, payment dates, margin, default "
            "interest) and confirm that any differences are intentional and appropriate."
        ),
    )

    if not UNILATERAL_RE.search(baseline or "") and UNILATERAL_RE.search(new or ""):
        out.add(
            severity="high",
            rule_title="Unilateral amendment / discretion introduced",
            why=(
                "The new agreement appears to introduce language giving one party unilateral discretion or "
                "amendment power (for example, 'sole discretion' or 'unilaterally'), which was not present in the "
                "baseline document."
            ),
            suggestion=(
                "Confirm whether this new unilateral power is deliberate. If not, consider reverting to the "
                "baseline wording or tightening the clause so that changes require mutual agreement."
            ),
            new_snippet=extract_paragraph_with_keyword(new, UNILATERAL_RE),
        )

    new_headings = extract_clause_headings(new)
    for number, line in extract_clause_headings(baseline).items():
        if number in new_headings:
            continue
        out.add(
            severity="medium",
            rule_title="Clause removed in new agreement",
            why=(
                f"A clause heading from the baseline agreement (Clause {number}) does not appear in the new "
                "agreement. This may indicate that a provision has been removed between versions."
            ),
            suggestion=(
                "Confirm whether the removal of this clause is intended. If the risk allocation or protections are "
                "still needed, consider reintroducing or relocating the relevant wording in the new agreement."
            ),
            baseline_snippet=line,
        )

    old_defs = extract_definition_snippets(baseline)
    new_defs = extract_definition_snippets(new)
    for key, snippet in old_defs.items():
        if key in new_defs:
            continue
        out.add(
            severity="medium",
            rule_title="Defined term missing in new agreement",
            why=(
                "A defined term in the baseline agreement does not appear to be defined in the new agreement, "
                "which may create gaps or inconsistencies if the concept is still used."
            ),
            suggestion=(
                "Check whether this term is still needed in the new agreement. If it is, add a corresponding "
                "definition; if not, consider removing any remaining references to it."
            ),
            baseline_snippet=snippet,
        )
    for key, snippet in new_defs.items():
        if key in old_defs:
            continue
        out.add(
            severity="low",
            rule_title="New defined term not present in baseline",
            why=(
                "The new agreement contains a defined term that does not appear in the baseline agreement. This may "
                "reflect an intentional change in structure or risk allocation."
            ),
            suggestion=(
                "Confirm that the introduction of this new defined term (and any related provisions) is intentional "
                "and consistent with the overall deal structure."
            ),
            new_snippet=snippet,
        )

    logger.info(f"Comparison produced {len(out.findings)} findings")
    return out.findings
