import json

from clausecheck.ir import Finding
from clausecheck.report import build_payload, render_txt, render_report_html, write_json

FINDINGS = [
    Finding(id="R-101-1", severity="high", rule_id="R-101", rule_title="Unresolved commercial placeholder",
            why="Replace <script>alert(1)</script> before signing.", suggestion="Fix", matched_text="[●]",
            start=3, end=6),
    Finding(id="AI-1", severity="low", rule_id="AI", rule_title="Tone", why="Soft.", suggestion="Fix",
            matched_text="x", location_label="Clause 2", source="ai"),
]


def test_payload_counts_and_findings():
    payload = build_payload(FINDINGS, pack="core", source="loan.docx")
    assert payload["counts"] == {"high": 1, "medium": 0, "low": 1, "total": 2}
    assert payload["findings"][0]["start"] == 3
    assert payload["findings"][1]["source"] == "ai"
    assert payload["rule_failures"] == []


def test_json_round_trip(tmp_path):
    path = tmp_path / "out.json"
    write_json(str(path), build_payload(FINDINGS, pack="core"))
    loaded = json.loads(path.read_text(encoding="utf-8"))
    assert loaded["findings"][0]["matched_text"] == "[●]"


def test_render_txt():
    txt = render_txt(build_payload(FINDINGS, pack="core", source="loan.docx"))
    assert "Document: loan.docx" in txt
    assert "Findings: 2 (High: 1, Medium: 0, Low: 1)" in txt
    assert "- [HIGH] R-101: Unresolved commercial placeholder" in txt
    assert "- [LOW] AI [AI]: Tone" in txt
    assert "at: Clause 2" in txt


def test_report_html_is_escaped():
    html = render_report_html(build_payload(FINDINGS, pack="<core>"))
    assert "<h1>ClauseCheck findings report</h1>" in html
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "Pack: &lt;core&gt;" in html
    assert "Total findings: <strong>2</strong> (High: 1, Medium: 0, Low: 1)" in html
    assert html.count("<tr>") == 1 + 2 * len(FINDINGS)
