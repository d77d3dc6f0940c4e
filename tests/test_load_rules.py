from clausecheck.rules.load_rules import (
    load_rule_pack, load_required_sections, load_placeholder_patterns, load_stopwords, load_pack_definitions,
)


def test_default_rule_pack_tables():
    pack = load_rule_pack()
    sections = load_required_sections(pack)
    assert [s.rule_id for s in sections][:2] == ["R-201", "R-202"]
    assert "R-205" not in {s.rule_id for s in sections}

    placeholders = {p.rule_id: p for p in load_placeholder_patterns(pack)}
    assert placeholders["R-301"].pattern.flags & 2 == 0  # case sensitive
    assert placeholders["R-302"].pattern.search("tbd")
    assert placeholders["R-310"].category == "drafting-clarity"

    assert "agreement" in load_stopwords(pack)
    packs = load_pack_definitions(pack)
    assert packs[0].include_headline_placeholder
    assert not packs[1].include_headline_placeholder


def test_empty_pack_file(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    pack = load_rule_pack(str(path))
    assert pack == {}
    assert load_required_sections(pack) == []
    assert load_pack_definitions(pack) == []
