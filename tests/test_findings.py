from clausecheck.findings import (
    merge_findings, severity_counts, filter_findings, exclude_resolved, sort_by_severity,
)
from clausecheck.ir import Finding


def _f(fid, severity, title="Title", location=None, source="rule"):
    return Finding(
        id=fid, severity=severity, rule_id=fid.rsplit("-", 1)[0], rule_title=title,
        why="Explanation", suggestion="Fix", matched_text="text", location_label=location, source=source,
    )


FINDINGS = [
    _f("R-101-1", "high", "Unresolved commercial placeholder"),
    _f("R-601-1", "low", "Very long sentence", location="Long sentence"),
    _f("R-401-1", "medium", "Broken cross-references", location="clause 9 reference"),
    _f("R-603-1", "low", "Discretion"),
]


def test_severity_counts():
    assert severity_counts(FINDINGS) == {"high": 1, "medium": 1, "low": 2, "total": 4}
    assert severity_counts([]) == {"high": 0, "medium": 0, "low": 0, "total": 0}


def test_filter_by_severity_and_query():
    assert [f.id for f in filter_findings(FINDINGS, severity="low")] == ["R-601-1", "R-603-1"]
    assert [f.id for f in filter_findings(FINDINGS, query="  CLAUSE 9 ")] == ["R-401-1"]
    assert [f.id for f in filter_findings(FINDINGS, severity="high", query="r-101")] == ["R-101-1"]
    assert filter_findings(FINDINGS, severity="medium", query="placeholder") == []
    assert filter_findings(FINDINGS) == FINDINGS


def test_exclude_resolved():
    assert [f.id for f in exclude_resolved(FINDINGS, {"R-101-1", "R-603-1"})] == ["R-601-1", "R-401-1"]


def test_sort_by_severity_is_stable():
    assert [f.id for f in sort_by_severity(FINDINGS)] == ["R-101-1", "R-401-1", "R-601-1", "R-603-1"]


def test_merge_keeps_provenance():
    ai = [_f("AI-1", "medium", source="ai")]
    merged = merge_findings(FINDINGS[:1], ai)
    assert [(f.id, f.source) for f in merged] == [("R-101-1", "rule"), ("AI-1", "ai")]
