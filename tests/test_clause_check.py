from clausecheck.clause_check import run_clause_checks


def test_ids_share_one_counter():
    text = "The Bank may terminate for any reason at any time and the Borrower irrevocably waives any right to object."
    findings = run_clause_checks(text)
    assert [f.id for f in findings] == ["C-001-1", "C-003-2", "C-005-3"]
    assert [f.category for f in findings] == ["Discretion", "Waiver", "Safeguards"]
    for f in findings:
        assert text[f.start:f.end] == f.matched_text


def test_amendment_by_notice_without_consent():
    findings = run_clause_checks("The Lender may vary the Margin by written notice to the Borrower.")
    assert len(findings) == 1
    f = findings[0]
    assert f.id == "C-006-1"
    assert f.rule_title == "Unilateral amendment without consent"
    assert f.matched_text == "may vary"


def test_mutual_consent_wording_suppresses_amendment_check():
    text = "Either party may amend this clause by notice, provided the change is signed by both parties."
    assert all(not f.id.startswith("C-006") for f in run_clause_checks(text))


def test_open_ended_terms():
    findings = run_clause_checks("The fee is to be determined and may change from time to time.")
    assert [f.matched_text for f in findings] == ["to be determined", "from time to time"]
    assert all(f.severity == "medium" for f in findings)


def test_blank_clause():
    assert run_clause_checks("") == []
    assert run_clause_checks("   ") == []
