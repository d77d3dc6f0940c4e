from clausecheck.definitions import extract_definitions

TEXT = '"Loan" means the credit facility. “Borrower” means ABC Ltd. "loan" means something else.'


def test_terms_keyed_case_insensitively_in_order():
    defs = extract_definitions(TEXT)
    assert list(defs.keys()) == ["loan", "borrower"]
    assert defs["loan"].term == "Loan"
    assert defs["borrower"].term == "Borrower"


def test_every_occurrence_is_kept():
    loan = extract_definitions(TEXT)["loan"]
    assert len(loan.occurrences) == 2
    first, second = loan.occurrences
    assert first.index == 0
    assert first.matched_text == '"Loan" means'
    assert TEXT[second.index:second.index + len(second.matched_text)] == '"loan" means'


def test_no_definitions():
    assert extract_definitions("") == {}
    assert extract_definitions("The Loan is made available.") == {}
