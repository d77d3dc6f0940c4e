import pytest

from clausecheck.engine import run_rules, RuleFailure
from clausecheck.packs import build_pack, build_packs, get_pack, get_rule_packs, resolve_pack_rules
from clausecheck.rules import build_catalogue, get_catalogue
from clausecheck.rules.base import Rule
from clausecheck.rules.load_rules import load_rule_pack, load_pack_definitions

from tests.sample_agreement import SAMPLE_AGREEMENT


def _boom(text):
    raise ValueError("bad pattern")


def test_engine_is_deterministic():
    rules = get_catalogue()
    first = run_rules(SAMPLE_AGREEMENT, rules)
    second = run_rules(SAMPLE_AGREEMENT, rules)
    assert first == second
    assert first


def test_findings_follow_rule_order():
    rules = resolve_pack_rules("core")
    findings = run_rules(SAMPLE_AGREEMENT, rules)
    order = {r.id: i for i, r in enumerate(rules)}
    positions = [order[f.rule_id] for f in findings]
    assert positions == sorted(positions)


def test_every_span_is_valid_and_literal():
    text = SAMPLE_AGREEMENT
    findings = run_rules(text, [*get_catalogue(), *resolve_pack_rules("core")])
    spanned = [f for f in findings if f.start is not None]
    assert spanned
    for f in spanned:
        assert 0 <= f.start < f.end <= len(text)
        assert text[f.start:f.end] == f.matched_text
    for f in findings:
        if f.start is None:
            assert f.end is None


def test_ids_unique_within_a_run():
    findings = run_rules(SAMPLE_AGREEMENT, resolve_pack_rules("core"))
    ids = [f.id for f in findings]
    assert len(ids) == len(set(ids))


def test_empty_text_yields_no_findings():
    assert run_rules("", get_catalogue()) == []
    assert run_rules("   \n\t", resolve_pack_rules("core")) == []


def test_failing_rule_propagates_by_default():
    rules = [Rule(id="X-1", title="boom", severity="low", check=_boom), *get_catalogue()]
    with pytest.raises(ValueError):
        run_rules(SAMPLE_AGREEMENT, rules)


def test_failing_rule_is_skipped_when_isolated():
    failures = []
    rules = [Rule(id="X-1", title="boom", severity="low", check=_boom), *get_catalogue()]
    findings = run_rules(SAMPLE_AGREEMENT, rules, isolate=True, failures=failures)
    assert failures == [RuleFailure(rule_id="X-1", error="ValueError: bad pattern")]
    assert findings == run_rules(SAMPLE_AGREEMENT, get_catalogue())


def test_catalogue_is_cached():
    assert get_catalogue() is get_catalogue()
    assert [r.id for r in build_catalogue()] == [r.id for r in get_catalogue()]


def test_packs():
    assert [p.key for p in get_rule_packs()] == ["core", "definitions", "crossrefs", "clarity"]
    core = get_pack("core")
    assert core.label == "Core"
    assert core.rule_ids[0] == "R-101"
    assert "R-205" not in core.rule_ids
    assert get_pack("crossrefs").rule_ids == ["R-401"]
    assert get_pack("clarity").rule_ids == ["R-601", "R-602", "R-603"]


def test_unknown_pack_resolves_to_no_rules():
    assert get_pack("nope") is None
    assert resolve_pack_rules("nope") == []


def test_missing_rule_id_is_skipped():
    pack = build_pack("mix", "Mix", ["R-401", "R-999", "R-601"], get_catalogue())
    assert pack.rule_ids == ["R-401", "R-601"]


def test_removing_a_rule_only_affects_packs_that_use_it():
    definitions = load_pack_definitions(load_rule_pack())
    full = {p.key: p.rule_ids for p in build_packs(get_catalogue(), definitions)}
    trimmed_catalogue = [r for r in get_catalogue() if r.id != "R-401"]
    trimmed = {p.key: p.rule_ids for p in build_packs(trimmed_catalogue, definitions)}
    assert trimmed["crossrefs"] == []
    for key in ("core", "definitions", "clarity"):
        assert trimmed[key] == full[key]
