from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional

from clausecheck.ir import Finding, Severity, Category

CheckFn = Callable[[str], List[Finding]]


@dataclass(frozen=True)
class Rule:
    """A named, stateless text -> findings check."""
    id: str
    title: str
    severity: Severity
    check: CheckFn
    category: Optional[Category] = None

    def run(self, text: str) -> List[Finding]:
        return self.check(text)


class FindingFactory:
    """Builds findings for one rule invocation, numbering ids R-xxx-1, R-xxx-2, ..."""

    def __init__(
        self,
        rule_id: str,
        rule_title: str,
        severity: Severity,
        category: Optional[Category] = None,
    ):
        self.rule_id = rule_id
        self.rule_title = rule_title
        self.severity = severity
        self.category = category
        self.counter = 0

    def make(
        self,
        *,
        why: str,
        suggestion: str,
        matched_text: str,
        location_label: Optional[str] = None,
        start: Optional[int] = None,
        end: Optional[int] = None,
        rule_title: Optional[str] = None,
    ) -> Finding:
        self.counter += 1
        return Finding(
            id=f"{self.rule_id}-{self.counter}",
            severity=self.severity,
            rule_id=self.rule_id,
            rule_title=rule_title or self.rule_title,
            category=self.category,
            why=why,
            suggestion=suggestion,
            matched_text=matched_text,
            location_label=location_label,
            start=start,
            end=end,
        )
