"""
Quick checks for a single pasted clause.

These are looser than the document rules: they look for one-sided phrasing
anywhere in the clause and report every hit. Ids share one counter across
all rules, so a run yields C-001-1, C-003-2, C-003-3, ...
"""
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Literal, Optional, Pattern
import re

from clausecheck.ir import Severity

ClauseCategory = Literal["Discretion", "Ambiguity", "Safeguards", "Waiver"]


@dataclass
class ClauseFinding:
    id: str
    severity: Severity
    rule_title: str
    category: ClauseCategory
    why: str
    suggestion: str
    matched_text: str
    start: Optional[int] = None
    end: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ClauseRule:
    id: str
    title: str
    severity: Severity
    category: ClauseCategory
    pattern: Pattern[str]
    why: str
    suggestion: str


CLAUSE_RULES: List[ClauseRule] = [
    ClauseRule(
        id="C-001",
        title="Unilateral discretion",
        severity="high",
        category="Discretion",
        pattern=re.compile(
            r"sole discretion|absolute discretion|in its discretion|for any reason|without reason|as it sees fit",
            re.IGNORECASE,
        ),
        why=(
            "This clause contains unilateral discretion wording (for example, 'sole discretion' or similar), "
            "which gives one party very broad decision-making power."
        ),
        suggestion=(
            "Consider narrowing this discretion (for example, to 'reasonable discretion') or adding objective "
            "criteria and safeguards so decisions are more balanced and predictable."
        ),
    ),
    ClauseRule(
        id="C-002",
        title="Undefined commercial terms",
        severity="medium",
        category="Ambiguity",
        pattern=re.compile(
            r"to be determined|from time to time|as notified|as may be set|as decided", re.IGNORECASE
        ),
        why=(
            "This clause uses open-ended commercial wording (for example, 'to be determined' or similar), which "
            "may leave important terms unclear or changeable without clear limits."
        ),
        suggestion=(
            "Where possible, replace this wording with concrete numbers, dates or objective mechanics (for "
            "example, a defined process or schedule) so parties understand the commercial deal."
        ),
    ),
    ClauseRule(
        id="C-003",
        title="Broad waiver of rights",
        severity="high",
        category="Waiver",
        pattern=re.compile(
            r"irrevocably waives|not subject to challenge|waives any right|no right to dispute", re.IGNORECASE
        ),
        why=(
            "This clause contains broad waiver wording (for example, 'irrevocably waives' or 'waives any "
            "right'), which may prevent a party from challenging the clause or enforcing statutory protections."
        ),
        suggestion=(
            "Consider narrowing the waiver, clarifying which rights are waived, and confirming that mandatory "
            "protections under applicable law remain unaffected."
        ),
    ),
    ClauseRule(
        id="C-004",
        title="Unilateral amendment",
        severity="high",
        category="Safeguards",
        pattern=re.compile(
            r"may amend unilaterally|without consent|without approval|by notice only", re.IGNORECASE
        ),
        why=(
            "This clause appears to allow one party to amend terms unilaterally (for example, 'without consent' "
            "or 'by notice only'), which can undermine certainty for the other party."
        ),
        suggestion=(
            "Consider requiring mutual written agreement for amendments, or limiting any unilateral amendment "
            "right to narrow, objectively defined scenarios (such as correcting obvious errors or implementing "
            "mandatory legal changes)."
        ),
    ),
    ClauseRule(
        id="C-005",
        title="On-demand / immediate repayment",
        severity="high",
        category="Safeguards",
        pattern=re.compile(
            r"repayable on demand|at any time|immediate repayment|for any reason or no reason", re.IGNORECASE
        ),
        why=(
            "This clause suggests one party may demand immediate performance or repayment at will (for example, "
            "'repayable on demand' or similar), which can create significant operational and financial risk "
            "for the other party."
        ),
        suggestion=(
            "Consider tying acceleration to defined Events of Default or objective triggers instead of "
            "unrestricted on-demand rights."
        ),
    ),
]

AMENDMENT_VERB_RE = re.compile(r"may\s+(?:amend|vary|modify|replace)", re.IGNORECASE)
NOTICE_RE = re.compile(r"by written notice|by notice|upon notice", re.IGNORECASE)
MUTUAL_CONSENT_RE = re.compile(
    r"agreed in writing by both parties|signed by both parties"
    r"|with the consent of the (?:other party|counterparty|parties)",
    re.IGNORECASE,
)


def _amendment_by_notice(text: str) -> Optional[re.Match]:
    """
    The amendment verb or notice mechanic, whichever is shorter, when a
    clause lets one party amend by notice with no mutual-consent wording.
    """
    verb = AMENDMENT_VERB_RE.search(text)
    notice = NOTICE_RE.search(text)
    if verb is None or notice is None or MUTUAL_CONSENT_RE.search(text):
        return None
    return notice if len(notice.group(0)) < len(verb.group(0)) else verb


def run_clause_checks(text: str) -> List[ClauseFinding]:
    findings: List[ClauseFinding] = []
    if not text or not text.strip():
        return findings

    counter = 0
    for rule in CLAUSE_RULES:
        for m in rule.pattern.finditer(text):
            counter += 1
            findings.append(ClauseFinding(
                id=f"{rule.id}-{counter}",
                severity=rule.severity,
                rule_title=rule.title,
                category=rule.category,
                why=rule.why,
                suggestion=rule.suggestion,
                matched_text=m.group(0),
                start=m.start(),
                end=m.end(),
            ))

    trigger = _amendment_by_notice(text)
    if trigger is not None:
        counter += 1
        findings.append(ClauseFinding(
            id=f"C-006-{counter}",
            severity="high",
            rule_title="Unilateral amendment without consent",
            category="Safeguards",
            why=(
                "This clause allows one party to amend or vary terms by notice alone, without the other party's "
                "express consent. That creates governance risk because key economics or protections could be "
                "changed unilaterally."
            ),
            suggestion=(
                "Require amendments to be documented as a written agreement signed by both parties, or restrict "
                "any unilateral amendment right to narrow, objectively defined administrative updates."
            ),
            matched_text=trigger.group(0),
            start=trigger.start(),
            end=trigger.end(),
        ))
    return findings
