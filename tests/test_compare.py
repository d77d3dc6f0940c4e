from clausecheck.compare import compare_documents, extract_clause_headings, extract_definition_snippets

BASELINE = (
    "1. Loans\nThe Lender makes the Loan available.\n\n"
    "Interest accrues at 5% per annum.\n\n"
    "This Agreement and its governing law is English law.\n\n"
    "2. Repayment\nThe Borrower repays on the Maturity Date.\n\n"
    '"Loan" means the facility.'
)

NEW = (
    "1. Loans\nThe Lender makes the Loan available.\n\n"
    "Interest accrues at 7% per annum.\n\n"
    "This Agreement and its governing law is New York law.\n\n"
    "The Lender may act in its sole discretion.\n\n"
    '"Facility" means the loan facility.'
)


def test_compare_documents():
    findings = compare_documents(BASELINE, NEW)
    assert [(f.id, f.severity, f.rule_title) for f in findings] == [
        ("CF-1", "high", "Governing law mismatch"),
        ("CF-2", "medium", "Interest clause mismatch"),
        ("CF-3", "high", "Unilateral amendment / discretion introduced"),
        ("CF-4", "medium", "Clause removed in new agreement"),
        ("CF-5", "medium", "Defined term missing in new agreement"),
        ("CF-6", "low", "New defined term not present in baseline"),
    ]
    assert findings[1].baseline_snippet == "Interest accrues at 5% per annum."
    assert findings[2].new_snippet == "The Lender may act in its sole discretion."
    assert findings[3].baseline_snippet == "2. Repayment"
    assert findings[5].new_snippet == '"Facility" means the loan facility.'


def test_identical_documents():
    assert compare_documents(BASELINE, BASELINE) == []


def test_whitespace_only_differences_are_ignored():
    reflowed = BASELINE.replace("Interest accrues at 5%", "Interest  accrues\nat 5%")
    assert compare_documents(BASELINE, reflowed) == []


def test_clause_headings():
    headings = extract_clause_headings("Clause 4.2 Fees\n4.2 again\n  5 Notices\nNot a heading 6")
    assert headings == {"4.2": "Clause 4.2 Fees", "5": "5 Notices"}


def test_definition_snippets():
    snippets = extract_definition_snippets('"Loan" means X.\n"loan" means Y.\n“Agent” means Z.')
    assert snippets == {"loan": '"Loan" means X.', "agent": "“Agent” means Z."}
