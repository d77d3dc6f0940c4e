"""
Highlight overlay for the document view.

Finding spans and search-match spans are merged into one flat sequence of
non-overlapping segments covering the whole text. Each segment knows which
finding (if any) and which search match (if any) it belongs to, which is
all a renderer needs.

Overlap policy: findings are stable-sorted by start, and a segment belongs
to the first finding in that order whose span contains the segment start.
Two findings starting at the same offset therefore resolve to whichever
came first in the input list.
"""
from __future__ import annotations
from typing import List, Optional, Sequence, Tuple, TypeVar
import heapq
import html
import re

from clausecheck.ir import Finding, HighlightSegment, SearchMatch
from clausecheck.textspan import span_is_valid

T = TypeVar("T")


def find_search_matches(text: str, query: str) -> List[SearchMatch]:
    """Case-insensitive literal matches of the trimmed query, scanned left to right."""
    q = (query or "").strip()
    if not text or not q:
        return []
    return [SearchMatch(m.start(), m.end()) for m in re.finditer(re.escape(q), text, re.IGNORECASE)]


def _first_covering(spans: Sequence[Tuple[int, int, T]], points: Sequence[int]) -> List[Optional[T]]:
    """
    For each ascending point, the payload of the earliest span in ``spans``
    (sorted by start) with start <= point < end.

    Spans are pushed onto a heap keyed by list position as the sweep reaches
    their start; spans that have ended are dropped lazily from the top.
    """
    covering: List[Optional[T]] = []
    heap: List[Tuple[int, int]] = []
    nxt = 0
    for point in points:
        while nxt < len(spans) and spans[nxt][0] <= point:
            heapq.heappush(heap, (nxt, spans[nxt][1]))
            nxt += 1
        while heap and heap[0][1] <= point:
            heapq.heappop(heap)
        covering.append(spans[heap[0][0]][2] if heap else None)
    return covering


def compute_segments(
    text: str,
    findings: Sequence[Finding],
    search_matches: Sequence[SearchMatch] = (),
    active_search_index: int = 0,
) -> List[HighlightSegment]:
    """
    Partition text into highlight segments.

    ``search_index`` on a segment, and ``active_search_index``, are positions
    in the caller's ``search_matches`` list. Matches with invalid offsets are
    ignored but do not shift the indices of the others.
    """
    if not text:
        return []
    length = len(text)

    spans = [(f.start, f.end, f) for f in findings if span_is_valid(f.start, f.end, length)]
    spans.sort(key=lambda s: s[0])
    searches = [
        (m.start, m.end, i) for i, m in enumerate(search_matches) if span_is_valid(m.start, m.end, length)
    ]
    searches.sort(key=lambda s: s[0])

    bounds = {0, length}
    for start, end, _ in spans:
        bounds.update((start, end))
    for start, end, _ in searches:
        bounds.update((start, end))
    ordered = sorted(bounds)
    seg_starts = ordered[:-1]

    segment_findings = _first_covering(spans, seg_starts)
    segment_searches = _first_covering(searches, seg_starts)

    segments: List[HighlightSegment] = []
    for seg_start, seg_end, finding, search_index in zip(
        seg_starts, ordered[1:], segment_findings, segment_searches
    ):
        segments.append(HighlightSegment(
            start=seg_start,
            end=seg_end,
            finding=finding,
            search_index=search_index,
            is_active_search=search_index is not None and search_index == active_search_index,
        ))
    return segments


def _search_class(active: bool) -> str:
    return "search-hit search-active" if active else "search-hit"


def render_html(
    text: str,
    findings: Sequence[Finding],
    search_matches: Sequence[SearchMatch] = (),
    active_search_index: int = 0,
) -> str:
    """
    Render the text as HTML with <mark> elements for findings and search hits.

    Where a segment is both, the search styling wins but the finding id is
    kept on the element so it still links to the finding.
    """
    parts: List[str] = []
    for seg in compute_segments(text, findings, search_matches, active_search_index):
        chunk = html.escape(text[seg.start:seg.end])
        kind = seg.kind
        if kind == "plain":
            parts.append(chunk)
        elif kind == "search":
            parts.append(
                f'<mark class="{_search_class(seg.is_active_search)}" '
                f'data-search-index="{seg.search_index}">{chunk}</mark>'
            )
        elif kind == "finding":
            f = seg.finding
            parts.append(
                f'<mark class="finding severity-{f.severity}" data-finding-id="{html.escape(f.id)}" '
                f'title="{html.escape(f.rule_title)}">{chunk}</mark>'
            )
        else:
            f = seg.finding
            parts.append(
                f'<mark class="{_search_class(seg.is_active_search)}" data-finding-id="{html.escape(f.id)}" '
                f'data-search-index="{seg.search_index}" title="{html.escape(f.rule_title)}">{chunk}</mark>'
            )
    return "".join(parts)
