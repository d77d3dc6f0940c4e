from types import SimpleNamespace

import pytest

from clausecheck.llm import client as client_mod
from clausecheck.llm.client import ClaudeClient, LLMConfig, AnalysisError
from clausecheck.llm.parse import (
    strip_code_fences, parse_json_array, ai_findings_from_items, comparison_findings_from_items,
)
from clausecheck.llm.prompts import build_review_prompt, build_compare_prompt, MAX_COMPARE_CHARS

TEXT = "The Lender may amend this Agreement unilaterally. The Borrower pays interest."

RAW = """```json
[
  {"title": "Unilateral amendment", "severity": "HIGH", "category": "commercial-risk",
   "why": "One-sided.", "suggestion": "Require consent.", "matchedText": "may AMEND this agreement",
   "locationLabel": "Clause 5"},
  {"title": "Odd", "severity": "critical", "category": "vibes", "why": "?", "suggestion": "?",
   "matchedText": "not in the text"}
]
```"""


class FakeMessages:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    def create(self, **kwargs):
        self.calls += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return SimpleNamespace(content=[SimpleNamespace(text=outcome)])


def _client(outcomes):
    c = ClaudeClient(LLMConfig(api_key="test", min_request_interval=0))
    c._client = SimpleNamespace(messages=FakeMessages(outcomes))
    return c


def test_strip_code_fences():
    assert strip_code_fences("```json\n[1]\n```") == "[1]"
    assert strip_code_fences("```\n[]\n```") == "[]"
    assert strip_code_fences(" [] ") == "[]"


def test_parse_json_array_never_raises():
    assert parse_json_array("not json") == []
    assert parse_json_array('{"a": 1}') == []
    assert parse_json_array("") == []
    assert parse_json_array('[{"a": 1}, 2, "x"]') == [{"a": 1}]


def test_ai_findings_are_coerced_and_located():
    findings = ai_findings_from_items(parse_json_array(RAW), text=TEXT)
    assert [f.id for f in findings] == ["AI-1", "AI-2"]
    assert all(f.source == "ai" for f in findings)

    first, second = findings
    assert first.severity == "high"
    assert first.category == "commercial-risk"
    assert first.location_label == "Clause 5"
    assert TEXT[first.start:first.end] == first.matched_text == "may amend this Agreement"

    assert second.severity == "medium"
    assert second.category is None
    assert second.start is None and second.end is None


def test_comparison_items():
    items = [{"ruleTitle": "Law changed", "severity": "low", "why": "w", "suggestion": "s",
              "baselineSnippet": "English law", "newSnippet": None}]
    findings = comparison_findings_from_items(items)
    assert findings[0].id == "AI-1"
    assert findings[0].rule_title == "Law changed"
    assert findings[0].new_snippet is None


def test_prompts_truncate():
    assert build_review_prompt("x" * 20, max_chars=5).endswith("xxxxx")
    prompt = build_compare_prompt("a" * (MAX_COMPARE_CHARS + 10), "b")
    assert f"first {MAX_COMPARE_CHARS} chars" in prompt
    assert "a" * (MAX_COMPARE_CHARS + 1) not in prompt


def test_analyze_document():
    c = _client([RAW])
    findings = c.analyze_document(TEXT)
    assert [f.rule_title for f in findings] == ["Unilateral amendment", "Odd"]


def test_rate_limit_is_retried(monkeypatch):
    sleeps = []
    monkeypatch.setattr(client_mod.time, "sleep", sleeps.append)
    c = _client([Exception("429 Too Many Requests"), Exception("rate limit"), "[]"])
    assert c.analyze_clause("The Lender may do anything.") == []
    assert c.client.messages.calls == 3
    assert [s for s in sleeps if s] == [2, 4]


def test_other_errors_raise_analysis_error(monkeypatch):
    monkeypatch.setattr(client_mod.time, "sleep", lambda s: None)
    c = _client([Exception("invalid api key")])
    with pytest.raises(AnalysisError):
        c.analyze_document(TEXT)
    assert c.client.messages.calls == 1


def test_blank_text_skips_the_model():
    c = _client([])
    assert c.analyze_document("  ") == []
    with pytest.raises(AnalysisError):
        c.compare_documents("", "new")
