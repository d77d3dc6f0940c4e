from __future__ import annotations

MAX_REVIEW_CHARS = 14000
MAX_CLAUSE_CHARS = 4000
MAX_COMPARE_CHARS = 8000

SYSTEM_PROMPT = """You are an expert commercial agreement lawyer assisting with contract review.
You always answer with a single JSON array and nothing else: no markdown, no code fences,
no commentary before or after the array."""

REVIEW_PROMPT_TEMPLATE = """Analyze the following agreement text and identify genuine risks, drafting issues, and concerns that a lawyer would flag.

Return a JSON array of findings. Each finding must have exactly these fields:
- "title": short descriptive title (max 8 words)
- "severity": "high", "medium", or "low"
- "category": one of "commercial-risk", "drafting-clarity", "structural-completeness", "cross-reference-integrity"
- "why": clear explanation of the risk or issue (1-2 sentences)
- "suggestion": specific actionable suggestion to fix it (1-2 sentences)
- "matchedText": the specific clause text or phrase that triggered this finding (max 120 chars)
- "locationLabel": approximate location in the document (e.g. "Clause 3 - Amendments")

Rules:
- Return 3 to 8 findings maximum
- Focus only on genuine, substantive risks, not minor stylistic preferences
- Do not repeat findings from basic structural checks (like missing sections)
- Return ONLY a valid JSON array

Agreement text:
{text}"""

CLAUSE_PROMPT_TEMPLATE = """Analyse the following single clause and identify genuine legal and drafting risks. Focus on:
- Unfair or imbalanced obligations between the parties
- Vague, undefined or open-ended terms that create uncertainty
- Missing protections or safeguards (e.g. caps, carve-outs, notice requirements)
- Unilateral powers or discretions given to one party
- Waiver of rights or remedies
- Unusual or onerous obligations
- Potential enforceability issues

Return a JSON array of findings. Each finding must have exactly these fields:
- "title": short label for the issue (max 7 words)
- "severity": "high", "medium", or "low"
- "why": specific explanation of the risk referencing the actual clause language (2-3 sentences)
- "suggestion": concrete fix or safeguard to add (1-2 sentences)
- "matchedText": the exact phrase or wording in the clause that triggers this finding (max 100 chars)

Rules:
- Return 1 to 5 findings only
- Reference actual words from the clause in your findings
- If the clause appears balanced and well-drafted, return an empty array []
- Return ONLY a valid JSON array

Clause to analyse:
{text}"""

COMPARE_PROMPT_TEMPLATE = """You are doing a redline / comparison review of two versions of an agreement:
- BASELINE: the original / reference version
- NEW: the new or amended version

Identify the specific, meaningful differences between the two documents. Focus on:
- Clauses that have been added, removed, or changed in substance
- Changes to defined terms or their definitions
- Changes to party obligations, rights, or risk allocation
- Changes to governing law, jurisdiction, or dispute resolution
- Changes to payment terms, timelines, or thresholds
- Any new risks or protections introduced in the new version

Return a JSON array of findings. Each finding must have exactly these fields:
- "ruleTitle": short label for the type of change (max 8 words)
- "severity": "high", "medium", or "low", based on legal/commercial impact
- "why": specific explanation of what changed and why it matters (2-3 sentences)
- "suggestion": what to review or action to take (1-2 sentences)
- "baselineSnippet": the relevant excerpt from the BASELINE document (max 200 chars)
- "newSnippet": the relevant excerpt from the NEW document (max 200 chars), or null if something was removed

Rules:
- Return 3 to 10 findings
- Only flag genuinely meaningful differences, not whitespace or formatting changes
- If the documents appear identical, return an empty array []
- Return ONLY a valid JSON array

BASELINE DOCUMENT (first {baseline_len} chars):
{baseline}

NEW DOCUMENT (first {new_len} chars):
{new}"""


def build_review_prompt(text: str, max_chars: int = MAX_REVIEW_CHARS) -> str:
    return REVIEW_PROMPT_TEMPLATE.format(text=text[:max_chars])


def build_clause_prompt(text: str) -> str:
    return CLAUSE_PROMPT_TEMPLATE.format(text=text[:MAX_CLAUSE_CHARS])


def build_compare_prompt(baseline: str, new: str) -> str:
    baseline = baseline[:MAX_COMPARE_CHARS]
    new = new[:MAX_COMPARE_CHARS]
    return COMPARE_PROMPT_TEMPLATE.format(
        baseline_len=len(baseline), baseline=baseline, new_len=len(new), new=new,
    )
