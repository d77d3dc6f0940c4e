from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional, Literal

Severity = Literal["low", "medium", "high"]
Category = Literal[
    "structural-completeness",
    "commercial-risk",
    "drafting-clarity",
    "cross-reference-integrity",
]
Source = Literal["rule", "ai"]

SEVERITIES = ("high", "medium", "low")
CATEGORIES = (
    "structural-completeness",
    "commercial-risk",
    "drafting-clarity",
    "cross-reference-integrity",
)


@dataclass
class Finding:
    id: str                          # rule id + ordinal, unique within a run
    severity: Severity
    rule_id: str
    rule_title: str
    why: str
    suggestion: str
    matched_text: str                # literal trigger, or a label for document-level findings
    category: Optional[Category] = None
    location_label: Optional[str] = None
    start: Optional[int] = None      # half-open [start, end) into the source text
    end: Optional[int] = None
    source: Source = "rule"

    @property
    def has_span(self) -> bool:
        return self.start is not None and self.end is not None and self.start < self.end

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Sentence:
    text: str   # trimmed
    start: int
    end: int


@dataclass(frozen=True)
class DefinitionOccurrence:
    index: int
    matched_text: str


@dataclass
class DefinitionInfo:
    term: str   # first spelling seen
    occurrences: List[DefinitionOccurrence] = field(default_factory=list)


@dataclass(frozen=True)
class SearchMatch:
    start: int
    end: int


@dataclass(frozen=True)
class HighlightSegment:
    start: int
    end: int
    finding: Optional[Finding] = None
    search_index: Optional[int] = None
    is_active_search: bool = False

    @property
    def kind(self) -> str:
        if self.finding is not None and self.search_index is not None:
            return "finding+search"
        if self.finding is not None:
            return "finding"
        if self.search_index is not None:
            return "search"
        return "plain"
