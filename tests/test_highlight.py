import time

from clausecheck.highlight import compute_segments, find_search_matches, render_html
from clausecheck.ir import Finding, SearchMatch


def _finding(start, end, fid="F-1", severity="high"):
    return Finding(
        id=fid, severity=severity, rule_id="R-X", rule_title="Test rule",
        why="why", suggestion="fix", matched_text="", start=start, end=end,
    )


def _assert_partition(text, segments):
    assert segments[0].start == 0
    assert segments[-1].end == len(text)
    for a, b in zip(segments, segments[1:]):
        assert a.end == b.start
    assert all(s.start < s.end for s in segments)
    assert sum(s.end - s.start for s in segments) == len(text)


def test_finding_and_search_overlap():
    text = "x" * 25
    segments = compute_segments(text, [_finding(10, 15)], [SearchMatch(12, 18)])
    assert [(s.start, s.end, s.kind) for s in segments] == [
        (0, 10, "plain"),
        (10, 12, "finding"),
        (12, 15, "finding+search"),
        (15, 18, "search"),
        (18, 25, "plain"),
    ]
    _assert_partition(text, segments)


def test_invalid_offsets_are_ignored():
    text = "0123456789"
    bad = [_finding(-1, 5), _finding(5, 5), _finding(6, 4), _finding(2, 11), _finding(None, None)]
    segments = compute_segments(text, bad, [SearchMatch(3, 30)])
    assert [(s.start, s.end, s.kind) for s in segments] == [(0, 10, "plain")]


def test_first_finding_wins_on_shared_start():
    text = "abcdefghijkl"
    first = _finding(0, 10, fid="A")
    second = _finding(0, 5, fid="B")
    segments = compute_segments(text, [first, second])
    assert [(s.start, s.end, s.finding.id if s.finding else None) for s in segments] == [
        (0, 5, "A"), (5, 10, "A"), (10, 12, None),
    ]


def test_overlapping_findings_partition():
    text = "The Lender may amend this Agreement unilaterally."
    findings = [_finding(4, 20, "A"), _finding(0, 10, "B"), _finding(15, 49, "C")]
    segments = compute_segments(text, findings, find_search_matches(text, "agreement"))
    _assert_partition(text, segments)
    # Stable sort by start puts B first for [4, 10).
    assert next(s for s in segments if s.start == 4).finding.id == "B"
    assert next(s for s in segments if s.start == 10).finding.id == "A"


def test_search_matches_are_case_insensitive_and_trimmed():
    text = "Loan and LOAN and loan"
    matches = find_search_matches(text, "  loan ")
    assert matches == [SearchMatch(0, 4), SearchMatch(9, 13), SearchMatch(18, 22)]
    assert find_search_matches(text, "   ") == []
    assert find_search_matches(text, "a.d") == []


def test_active_search_index():
    text = "Loan and LOAN and loan"
    segments = compute_segments(text, [], find_search_matches(text, "loan"), active_search_index=1)
    active = [s for s in segments if s.is_active_search]
    assert [(s.start, s.end, s.search_index) for s in active] == [(9, 13, 1)]


def test_empty_text():
    assert compute_segments("", [_finding(0, 1)]) == []
    assert render_html("", []) == ""


def test_render_html_escapes_and_tags():
    text = "a < b & c"
    html = render_html(text, [_finding(2, 3, fid="R-1-1")], [SearchMatch(6, 7)])
    assert html.startswith("a ")
    assert 'data-finding-id="R-1-1"' in html
    assert ">&lt;</mark>" in html
    assert 'data-search-index="0"' in html
    assert "severity-high" in html
    assert "<" not in html.replace("<mark", "").replace("</mark>", "")


def test_render_html_prefers_search_style_but_keeps_finding():
    text = "abcdef"
    html = render_html(text, [_finding(0, 6, fid="F-9")], [SearchMatch(2, 4)], active_search_index=0)
    assert 'class="search-hit search-active" data-finding-id="F-9" data-search-index="0"' in html


def test_search_indices_follow_caller_list():
    text = "abcdefghij"
    matches = [SearchMatch(6, 8), SearchMatch(-1, 2), SearchMatch(0, 2)]
    segments = compute_segments(text, [], matches, active_search_index=2)
    assert [(s.start, s.end, s.search_index, s.is_active_search) for s in segments] == [
        (0, 2, 2, True),
        (2, 6, None, False),
        (6, 8, 0, False),
        (8, 10, None, False),
    ]


def test_thousands_of_matches_and_findings():
    chunk = "the Lender agrees "
    reps = 4000
    text = chunk * reps
    findings = [
        _finding(i * len(chunk) + 4, i * len(chunk) + 10, fid=f"F-{i}") for i in range(reps)
    ]
    matches = find_search_matches(text, "e")
    assert len(matches) == 5 * reps

    started = time.perf_counter()
    segments = compute_segments(text, findings, matches, active_search_index=7)
    elapsed = time.perf_counter() - started

    _assert_partition(text, segments)
    assert [s.search_index for s in segments if s.search_index is not None] == list(range(len(matches)))
    assert {s.finding.id for s in segments if s.finding} == {f.id for f in findings}
    assert [s.search_index for s in segments if s.is_active_search] == [7]
    assert elapsed < 2.0
