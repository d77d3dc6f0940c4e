from clausecheck.rules.clarity import (
    create_long_sentence_rule,
    create_conditional_phrase_density_rule,
    create_sole_and_absolute_discretion_rule,
)


def test_fifty_word_sentence_is_long():
    sentence = " ".join(["word"] * 49) + " end."
    text = "Short one. " + sentence
    findings = create_long_sentence_rule().run(text)
    assert len(findings) == 1
    f = findings[0]
    assert f.matched_text == sentence
    assert text[f.start:f.end] == sentence
    assert "50 words" in f.why


def test_forty_five_words_is_not_long():
    sentence = " ".join(["word"] * 44) + " end."
    assert create_long_sentence_rule().run(sentence) == []


def test_conditional_density():
    rule = create_conditional_phrase_density_rule()
    dense = "Subject to clause 2, provided that no default occurs and notwithstanding anything else, the Lender may act."
    assert len(rule.run(dense)) == 1
    assert rule.run("Subject to clause 2, the Lender may act provided that it is lawful.") == []


def test_every_discretion_phrase_is_reported():
    text = "The Lender may decide in its sole and absolute discretion. It may also, in its Sole and Absolute Discretion, refuse."
    findings = create_sole_and_absolute_discretion_rule().run(text)
    assert [f.id for f in findings] == ["R-603-1", "R-603-2"]
    assert all(text[f.start:f.end] == f.matched_text for f in findings)
    assert all(f.severity == "low" for f in findings)
