from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import logging

from clausecheck.adapters import extract_text
from clausecheck.engine import run_rules, RuleFailure
from clausecheck.findings import merge_findings
from clausecheck.ir import Finding
from clausecheck.llm.prompts import MAX_REVIEW_CHARS
from clausecheck.packs import DEFAULT_PACK, build_packs, resolve_pack_rules
from clausecheck.rules import build_catalogue
from clausecheck.rules.base import Rule
from clausecheck.rules.load_rules import load_rule_pack, load_pack_definitions

logger = logging.getLogger(__name__)


@dataclass
class ReviewConfig:
    """Options for one review run."""
    pack: str = DEFAULT_PACK
    isolate: bool = True              # skip a failing rule instead of aborting
    rules_path: Optional[str] = None  # alternate YAML rule pack
    # LLM options
    use_llm: bool = False
    anthropic_api_key: Optional[str] = None
    llm_model: str = "claude-sonnet-4-20250514"
    max_llm_chars: int = MAX_REVIEW_CHARS


@dataclass
class ReviewResult:
    text: str
    pack: str
    rule_findings: List[Finding] = field(default_factory=list)
    ai_findings: List[Finding] = field(default_factory=list)
    failures: List[RuleFailure] = field(default_factory=list)
    ai_error: Optional[str] = None

    @property
    def findings(self) -> List[Finding]:
        return merge_findings(self.rule_findings, self.ai_findings)


def _rules_for(config: ReviewConfig) -> List[Rule]:
    if not config.rules_path:
        return resolve_pack_rules(config.pack)
    rule_pack = load_rule_pack(config.rules_path)
    packs = build_packs(build_catalogue(rule_pack), load_pack_definitions(rule_pack))
    for p in packs:
        if p.key == config.pack:
            return list(p.rules)
    return []


def review_text(text: str, config: Optional[ReviewConfig] = None) -> ReviewResult:
    config = config or ReviewConfig()
    result = ReviewResult(text=text or "", pack=config.pack)
    if not result.text.strip():
        logger.info("No document text; nothing to review")
        return result

    rules = _rules_for(config)
    if not rules:
        logger.warning(f"Unknown or empty rule pack '{config.pack}'; no rules will run")
    result.rule_findings = run_rules(result.text, rules, isolate=config.isolate, failures=result.failures)
    logger.info(f"Pack {config.pack}: {len(rules)} rules, {len(result.rule_findings)} findings")

    if config.use_llm:
        from clausecheck.llm import ClaudeClient, LLMConfig, AnalysisError
        client = ClaudeClient(LLMConfig(api_key=config.anthropic_api_key, model=config.llm_model))
        try:
            result.ai_findings = client.analyze_document(result.text, max_chars=config.max_llm_chars)
        except AnalysisError as e:
            # Rule findings stand on their own; the AI pass is an extra.
            logger.warning(f"AI analysis unavailable: {e}")
            result.ai_error = str(e)

    return result


def review_file(path: str, config: Optional[ReviewConfig] = None) -> ReviewResult:
    return review_text(extract_text(path), config)
