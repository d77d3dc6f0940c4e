from __future__ import annotations
import argparse
import json
import logging
import os
from pathlib import Path

from clausecheck.adapters import ExtractionError, extract_text
from clausecheck.packs import DEFAULT_PACK, get_rule_packs


def _add_llm_options(p: argparse.ArgumentParser, help_text: str) -> None:
    llm_group = p.add_argument_group("LLM Options")
    llm_group.add_argument("--use-llm", action="store_true", help=help_text)
    llm_group.add_argument(
        "--anthropic-api-key",
        default=os.environ.get("ANTHROPIC_API_KEY"),
        help="Anthropic API key (or set ANTHROPIC_API_KEY env var)"
    )
    llm_group.add_argument(
        "--llm-model",
        default="claude-sonnet-4-20250514",
        help="Claude model to use (default: claude-sonnet-4-20250514)"
    )


def _read(ap: argparse.ArgumentParser, path: str) -> str:
    try:
        return extract_text(path)
    except ExtractionError as e:
        ap.exit(1, f"error: {e}\n")


def _cmd_review(ap, args) -> None:
    from clausecheck.pipeline import ReviewConfig, review_text
    from clausecheck.report import build_payload, render_txt, write_json, write_html

    text = _read(ap, args.input)
    config = ReviewConfig(
        pack=args.pack,
        isolate=not args.fail_fast,
        rules_path=args.rules,
        use_llm=args.use_llm,
        anthropic_api_key=args.anthropic_api_key,
        llm_model=args.llm_model,
    )
    result = review_text(text, config)

    payload = build_payload(
        result.findings,
        pack=args.pack,
        source=str(Path(args.input).name),
        failures=[{"rule_id": f.rule_id, "error": f.error} for f in result.failures],
    )
    if result.ai_error:
        payload["ai_error"] = result.ai_error

    if args.json:
        write_json(args.json, payload)
    if args.html:
        write_html(args.html, payload)
    print(render_txt(payload))


def _cmd_packs(ap, args) -> None:
    for pack in get_rule_packs():
        print(f"{pack.key:<12} {pack.label:<12} {len(pack.rules):>3} rules  {', '.join(pack.rule_ids)}")


def _cmd_compare(ap, args) -> None:
    from clausecheck.compare import compare_documents

    baseline = _read(ap, args.baseline)
    new = _read(ap, args.new)
    findings = compare_documents(baseline, new)
    output = {"deterministic": [f.to_dict() for f in findings]}

    if args.use_llm:
        from clausecheck.llm import ClaudeClient, LLMConfig, AnalysisError
        client = ClaudeClient(LLMConfig(api_key=args.anthropic_api_key, model=args.llm_model))
        try:
            output["ai"] = [f.to_dict() for f in client.compare_documents(baseline, new)]
        except AnalysisError as e:
            output["ai_error"] = str(e)

    print(json.dumps(output, indent=2, ensure_ascii=False))


def _cmd_clause(ap, args) -> None:
    from clausecheck.clause_check import run_clause_checks

    output = {"deterministic": [f.to_dict() for f in run_clause_checks(args.text)]}

    if args.use_llm:
        from clausecheck.llm import ClaudeClient, LLMConfig, AnalysisError
        client = ClaudeClient(LLMConfig(api_key=args.anthropic_api_key, model=args.llm_model))
        try:
            output["ai"] = [f.to_dict() for f in client.analyze_clause(args.text)]
        except AnalysisError as e:
            output["ai_error"] = str(e)

    print(json.dumps(output, indent=2, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="clausecheck",
        description="ClauseCheck: deterministic contract review"
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    review = sub.add_parser("review", help="Run a rule pack over a .docx, .pdf or .txt agreement")
    review.add_argument("input", help="Path to the agreement")
    review.add_argument("--pack", default=DEFAULT_PACK, help=f"Rule pack key (default: {DEFAULT_PACK})")
    review.add_argument("--rules", default=None, help="Alternate YAML rule pack")
    review.add_argument("--json", default=None, help="Write the findings payload as JSON to this path")
    review.add_argument("--html", default=None, help="Write a printable HTML report to this path")
    review.add_argument(
        "--fail-fast",
        action="store_true",
        help="Abort on the first rule error instead of skipping the rule"
    )
    _add_llm_options(review, "Add AI findings (requires --anthropic-api-key or ANTHROPIC_API_KEY env var)")
    review.set_defaults(handler=_cmd_review)

    packs = sub.add_parser("packs", help="List the available rule packs")
    packs.set_defaults(handler=_cmd_packs)

    compare = sub.add_parser("compare", help="Compare a baseline agreement with a new draft")
    compare.add_argument("baseline", help="Baseline agreement")
    compare.add_argument("new", help="New agreement")
    _add_llm_options(compare, "Add an AI comparison (requires an Anthropic API key)")
    compare.set_defaults(handler=_cmd_compare)

    clause = sub.add_parser("clause", help="Check a single clause")
    clause.add_argument("text", help="Clause text")
    _add_llm_options(clause, "Add an AI clause review (requires an Anthropic API key)")
    clause.set_defaults(handler=_cmd_clause)

    return ap


def main(argv=None):
    ap = build_parser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    # Validate LLM options
    if getattr(args, "use_llm", False) and not args.anthropic_api_key:
        ap.error("--use-llm requires --anthropic-api-key or ANTHROPIC_API_KEY environment variable")

    args.handler(ap, args)


if __name__ == "__main__":
    main()
