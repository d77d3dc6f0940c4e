from __future__ import annotations

from clausecheck.llm.client import ClaudeClient, LLMConfig, AnalysisError
from clausecheck.llm.parse import ai_findings_from_items, parse_json_array

__all__ = ["ClaudeClient", "LLMConfig", "AnalysisError", "ai_findings_from_items", "parse_json_array"]
