"""
Loan-agreement specific risk checks.

Apart from the unilateral amendment rule, which works sentence by sentence,
these are presence/absence tests over the whole document and emit at most
one finding each. Where the triggering wording can be located, the finding
points at its first occurrence.
"""
from __future__ import annotations
from typing import List, Optional
import re

from clausecheck.ir import Finding
from clausecheck.rules.base import Rule, FindingFactory
from clausecheck.textspan import get_sentences

FINANCIAL_COVENANT_TERMS = (
    "Leverage Ratio",
    "Interest Cover",
    "Interest Coverage Ratio",
    "DSCR",
    "Debt Service Coverage Ratio",
)

AMENDMENT_RE = re.compile(r"amend|amendment|vary|variation|replace|modif(?:y|ication)", re.IGNORECASE)
UNILATERAL_RISK_RE = re.compile(
    r"unilaterally|without\s+the?\s+consent|for any reason or no reason|sole( and absolute)? discretion",
    re.IGNORECASE,
)
TESTING_RE = re.compile(r"tested|testing|test dates?", re.IGNORECASE)
FREQUENCY_RE = re.compile(r"quarterly|semi-annual|semiannual|annually|annual", re.IGNORECASE)
SANCTIONS_CONCEPT_RE = re.compile(r"sanction|ofac|eu sanctions", re.IGNORECASE)
SANCTIONED_PERSON_RE = re.compile(r'"Sanctioned Person"', re.IGNORECASE)
SANCTIONED_COUNTRY_RE = re.compile(r'"Sanctioned Country"', re.IGNORECASE)
PURPOSE_RE = re.compile(r"\bPurpose\b", re.IGNORECASE)
SCREEN_RATE_RE = re.compile(r"Screen Rate", re.IGNORECASE)
REFERENCE_RATE_RE = re.compile(r"SONIA|SOFR|LIBOR|base rate", re.IGNORECASE)
BENCHMARK_TRIGGER_RE = re.compile(r"Screen Rate|SONIA|SOFR|LIBOR|base rate", re.IGNORECASE)
BENCHMARK_FALLBACK_RE = re.compile(r"Replacement of Screen Rate|Benchmark Replacement", re.IGNORECASE)
BUSINESS_DAY_RE = re.compile(r"Business Day", re.IGNORECASE)
BUSINESS_DAY_CONVENTION_RE = re.compile(
    r"Business Day Convention|following Business Day|preceding Business Day", re.IGNORECASE
)
NEGATIVE_PLEDGE_RE = re.compile(r"Negative Pledge", re.IGNORECASE)
SECURITY_RESTRICTION_RE = re.compile(r"shall not\s+(?:create|grant)\s+any\s+Security", re.IGNORECASE)
GROUP_SCOPE_RE = re.compile(r"Subsidiar|Group\b", re.IGNORECASE)


# --- Unilateral amendment -------------------------------------------------

def _unilateral_amendment(text: str) -> List[Finding]:
    if not text:
        return []
    factory = FindingFactory(
        "R-1201", "Unilateral amendment without counterparty consent", "high", "commercial-risk"
    )
    findings: List[Finding] = []
    for s in get_sentences(text):
        if not AMENDMENT_RE.search(s.text) or not UNILATERAL_RISK_RE.search(s.text):
            continue
        findings.append(factory.make(
            why=(
                "This clause appears to allow one party to amend, vary or replace provisions of the Agreement "
                "unilaterally or without the other party's consent, which is a highly one-sided allocation "
                "of risk."
            ),
            suggestion=(
                "Consider requiring mutual written agreement for amendments, or at least limiting any "
                "unilateral amendment right to narrow, objectively defined circumstances (for example, to "
                "correct manifest errors or to comply with mandatory law)."
            ),
            matched_text=s.text,
            location_label="Amendment / variation clause",
            start=s.start,
            end=s.end,
        ))
    return findings


unilateral_amendment_rule = Rule(
    id="R-1201",
    title="Unilateral amendment without counterparty consent",
    severity="high",
    category="commercial-risk",
    check=_unilateral_amendment,
)


# --- Financial covenants ----------------------------------------------------

def _first_covenant_term(text: str) -> Optional[re.Match]:
    # Earliest term in list order, matched case-insensitively.
    for term in FINANCIAL_COVENANT_TERMS:
        m = re.search(re.escape(term), text, re.IGNORECASE)
        if m:
            return m
    return None


def _covenant_testing_frequency(text: str) -> List[Finding]:
    if not text:
        return []
    first = _first_covenant_term(text)
    if first is None:
        return []
    if TESTING_RE.search(text) and FREQUENCY_RE.search(text):
        return []

    factory = FindingFactory("R-702", "Financial covenant testing frequency unclear", "medium", "drafting-clarity")
    return [factory.make(
        why=(
            "The agreement refers to one or more financial covenants but does not clearly specify how often "
            "they are tested (for example, quarterly on a rolling 12-month basis)."
        ),
        suggestion=(
            "Add clear testing mechanics for each financial covenant, including the test dates (e.g. quarterly), "
            "the testing period (e.g. rolling 12 months) and who performs the calculation."
        ),
        matched_text=first.group(0),
        location_label="Financial covenants",
        start=first.start(),
        end=first.end(),
    )]


financial_covenant_rules: List[Rule] = [
    Rule(
        id="R-702",
        title="Financial covenant testing frequency unclear",
        severity="medium",
        category="drafting-clarity",
        check=_covenant_testing_frequency,
    ),
]


# --- Sanctions ----------------------------------------------------------------

def _sanctions_definitions(text: str) -> List[Finding]:
    if not text:
        return []
    concept = SANCTIONS_CONCEPT_RE.search(text)
    if concept is None:
        return []
    if SANCTIONED_PERSON_RE.search(text) and SANCTIONED_COUNTRY_RE.search(text):
        return []

    factory = FindingFactory("R-801", "Sanctions definitions missing", "high", "commercial-risk")
    return [factory.make(
        why=(
            "The agreement refers to sanctions concepts but does not clearly define 'Sanctioned Person' "
            "and/or 'Sanctioned Country', which can create uncertainty for compliance and enforcement."
        ),
        suggestion=(
            "Add precise definitions of 'Sanctioned Person' and 'Sanctioned Country' (or equivalent terms) "
            "and ensure they are used consistently in the sanctions undertakings and events of default."
        ),
        matched_text=concept.group(0),
        location_label="Sanctions wording",
        start=concept.start(),
        end=concept.end(),
    )]


def _use_of_proceeds_sanctions(text: str) -> List[Finding]:
    if not text:
        return []
    purpose = PURPOSE_RE.search(text)
    if purpose is None or SANCTIONS_CONCEPT_RE.search(text):
        return []

    factory = FindingFactory("R-802", "Use of proceeds sanctions carve-out missing", "medium", "commercial-risk")
    return [factory.make(
        why=(
            "The Purpose clause does not clearly state that proceeds may not be used in breach of applicable "
            "sanctions regimes (for example, OFAC or EU sanctions)."
        ),
        suggestion=(
            "Consider adding language to the Purpose or use of proceeds clauses confirming that no proceeds "
            "will be used in violation of applicable sanctions laws."
        ),
        matched_text=purpose.group(0),
        location_label="Purpose clause",
        start=purpose.start(),
        end=purpose.end(),
    )]


sanctions_rules: List[Rule] = [
    Rule(
        id="R-801",
        title="Sanctions definitions missing",
        severity="high",
        category="commercial-risk",
        check=_sanctions_definitions,
    ),
    Rule(
        id="R-802",
        title="Use of proceeds sanctions carve-out missing",
        severity="medium",
        category="commercial-risk",
        check=_use_of_proceeds_sanctions,
    ),
]


# --- Benchmark rate fallback --------------------------------------------------

def _benchmark_fallback(text: str) -> List[Finding]:
    if not text:
        return []
    if not SCREEN_RATE_RE.search(text) and not REFERENCE_RATE_RE.search(text):
        return []
    if BENCHMARK_FALLBACK_RE.search(text):
        return []

    trigger = BENCHMARK_TRIGGER_RE.search(text)
    factory = FindingFactory("R-901", "Benchmark replacement mechanics missing", "medium", "structural-completeness")
    return [factory.make(
        why=(
            "The agreement references a screen or benchmark rate but does not include clear 'Replacement of "
            "Screen Rate' or similar mechanics in case that rate becomes unavailable."
        ),
        suggestion=(
            "Add benchmark fallback provisions (for example, a 'Replacement of Screen Rate' or 'Benchmark "
            "Replacement' clause) consistent with current market practice."
        ),
        matched_text=trigger.group(0),
        location_label="Benchmark rate",
        start=trigger.start(),
        end=trigger.end(),
    )]


benchmark_fallback_rules: List[Rule] = [
    Rule(
        id="R-901",
        title="Benchmark replacement mechanics missing",
        severity="medium",
        category="structural-completeness",
        check=_benchmark_fallback,
    ),
]


# --- Business Day convention --------------------------------------------------

def _business_day_convention(text: str) -> List[Finding]:
    if not text:
        return []
    m = BUSINESS_DAY_RE.search(text)
    if m is None or BUSINESS_DAY_CONVENTION_RE.search(text):
        return []

    factory = FindingFactory("R-1001", "Business Day convention missing", "medium", "structural-completeness")
    return [factory.make(
        why=(
            "The agreement defines 'Business Day' but does not clearly state how payment dates are adjusted "
            "when they fall on a non-Business Day (for example, Following or Preceding Business Day conventions)."
        ),
        suggestion=(
            "Add a Business Day convention explaining how payment and interest calculation dates move when "
            "they fall on a non-Business Day."
        ),
        matched_text=m.group(0),
        location_label="Business Day definition / payments",
        start=m.start(),
        end=m.end(),
    )]


payment_convention_rules: List[Rule] = [
    Rule(
        id="R-1001",
        title="Business Day convention missing",
        severity="medium",
        category="structural-completeness",
        check=_business_day_convention,
    ),
]


# --- Negative pledge -----------------------------------------------------------

def _negative_pledge_group(text: str) -> List[Finding]:
    if not text:
        return []
    m = NEGATIVE_PLEDGE_RE.search(text) or SECURITY_RESTRICTION_RE.search(text)
    if m is None or GROUP_SCOPE_RE.search(text):
        return []

    factory = FindingFactory("R-1101", "Negative pledge may not cover group", "medium", "commercial-risk")
    return [factory.make(
        why=(
            "The negative pledge wording appears to restrict only one party and does not clearly extend to its "
            "subsidiaries or group entities, which may allow asset leakage to other creditors."
        ),
        suggestion=(
            "Consider extending the negative pledge (or adding separate undertakings) so that it clearly covers "
            "the restricted party and its subsidiaries/group, subject to agreed exceptions."
        ),
        matched_text=m.group(0),
        location_label="Negative pledge / Security undertakings",
        start=m.start(),
        end=m.end(),
    )]


negative_pledge_rules: List[Rule] = [
    Rule(
        id="R-1101",
        title="Negative pledge may not cover group",
        severity="medium",
        category="commercial-risk",
        check=_negative_pledge_group,
    ),
]
