from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, List, TYPE_CHECKING
import time
import logging

from clausecheck.compare import ComparisonFinding
from clausecheck.ir import Finding
from clausecheck.llm.parse import (
    parse_json_array,
    ai_findings_from_items,
    comparison_findings_from_items,
)
from clausecheck.llm.prompts import (
    SYSTEM_PROMPT,
    MAX_REVIEW_CHARS,
    build_review_prompt,
    build_clause_prompt,
    build_compare_prompt,
)

if TYPE_CHECKING:
    import anthropic

logger = logging.getLogger(__name__)


class AnalysisError(RuntimeError):
    """The model could not be reached or refused the request."""


@dataclass
class LLMConfig:
    """Configuration for Claude API client."""
    api_key: str
    model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 4096
    temperature: float = 0.2
    max_retries: int = 3  # Max retries for rate limit errors
    min_request_interval: float = 0.3  # Min seconds before each request


def _is_rate_limit(e: Exception) -> bool:
    error_str = str(e).lower()
    return (
        "rate" in error_str or
        "429" in error_str or
        "too many requests" in error_str or
        "overloaded" in error_str
    )


class ClaudeClient:
    """Thin wrapper around Anthropic's Claude API for agreement review."""

    def __init__(self, config: LLMConfig):
        self.config = config
        self._client: Optional["anthropic.Anthropic"] = None

    @property
    def client(self) -> "anthropic.Anthropic":
        """Lazy initialization of Anthropic client."""
        if self._client is None:
            try:
                import anthropic
                self._client = anthropic.Anthropic(api_key=self.config.api_key)
            except ImportError:
                raise ImportError(
                    "anthropic library not installed. "
                    "Run: pip install anthropic"
                )
        return self._client

    def _complete(self, user_prompt: str, label: str) -> str:
        """One prompt -> raw model text, retrying rate limits with exponential backoff."""
        last_error: Optional[Exception] = None
        for attempt in range(self.config.max_retries + 1):
            try:
                time.sleep(self.config.min_request_interval)

                message = self.client.messages.create(
                    model=self.config.model,
                    max_tokens=self.config.max_tokens,
                    temperature=self.config.temperature,
                    system=SYSTEM_PROMPT,
                    messages=[{"role": "user", "content": user_prompt}],
                )

                result = ""
                for block in message.content:
                    if hasattr(block, "text"):
                        result += block.text
                return result.strip()

            except Exception as e:
                last_error = e
                if _is_rate_limit(e) and attempt < self.config.max_retries:
                    # Exponential backoff: 2s, 4s, 8s
                    backoff = 2 ** (attempt + 1)
                    logger.warning(f"Rate limit hit for {label}, retry {attempt+1}/{self.config.max_retries} in {backoff}s")
                    time.sleep(backoff)
                    continue
                break

        logger.warning(f"{label} failed: {type(last_error).__name__}: {last_error}")
        raise AnalysisError(f"{label} failed: {last_error}") from last_error

    def analyze_document(self, text: str, max_chars: int = MAX_REVIEW_CHARS) -> List[Finding]:
        """AI findings for a whole agreement, located in text where possible."""
        if not text or not text.strip():
            return []
        raw = self._complete(build_review_prompt(text, max_chars), "AI analysis")
        findings = ai_findings_from_items(parse_json_array(raw), text=text)
        logger.info(f"AI analysis returned {len(findings)} findings")
        return findings

    def analyze_clause(self, text: str) -> List[Finding]:
        if not text or not text.strip():
            return []
        raw = self._complete(build_clause_prompt(text), "Clause analysis")
        return ai_findings_from_items(parse_json_array(raw), text=text)

    def compare_documents(self, baseline: str, new: str) -> List[ComparisonFinding]:
        if not baseline or not new:
            raise AnalysisError("Both baseline and new text are required")
        raw = self._complete(build_compare_prompt(baseline, new), "Comparison")
        return comparison_findings_from_items(parse_json_array(raw))
