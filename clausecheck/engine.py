from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence
import logging

from clausecheck.ir import Finding
from clausecheck.rules.base import Rule

logger = logging.getLogger(__name__)


@dataclass
class RuleFailure:
    """A rule that raised during an isolated run."""
    rule_id: str
    error: str


def run_rules(
    text: str,
    rules: Sequence[Rule],
    isolate: bool = False,
    failures: Optional[List[RuleFailure]] = None,
) -> List[Finding]:
    """
    Apply each rule in list order and concatenate their findings.

    By default the first rule exception propagates. With isolate=True a
    failing rule is logged, recorded in ``failures`` (when given) and
    skipped, so one bad pattern cannot sink the whole scan.
    """
    findings: List[Finding] = []
    logger.debug(f"Running {len(rules)} rules over {len(text or ''):,} chars")

    for rule in rules:
        if not isolate:
            produced = rule.run(text)
        else:
            try:
                produced = rule.run(text)
            except Exception as e:
                logger.exception(f"Rule {rule.id} failed; skipping")
                if failures is not None:
                    failures.append(RuleFailure(rule_id=rule.id, error=f"{type(e).__name__}: {e}"))
                continue
        if produced:
            logger.debug(f"Rule {rule.id} produced {len(produced)} findings")
        findings.extend(produced)

    return findings
