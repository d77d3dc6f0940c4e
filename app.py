"""
ClauseCheck - Streamlit GUI

Upload or paste an agreement, run a rule pack, and triage the findings
against a highlighted view of the document.
Run with: streamlit run app.py
"""
import streamlit as st
import json
import os

from clausecheck.adapters import ExtractionError, extract_text_from_bytes
from clausecheck.clause_check import run_clause_checks
from clausecheck.compare import compare_documents
from clausecheck.findings import exclude_resolved, filter_findings, severity_counts
from clausecheck.highlight import find_search_matches, render_html
from clausecheck.packs import DEFAULT_PACK, get_rule_packs
from clausecheck.pipeline import ReviewConfig, review_text
from clausecheck.report import build_payload, render_report_html

SEVERITY_ICONS = {"high": "🔴", "medium": "🟠", "low": "🔵"}

HIGHLIGHT_CSS = """
<style>
.cc-doc { white-space: pre-wrap; font-family: Georgia, serif; font-size: 0.9rem; line-height: 1.6;
          max-height: 640px; overflow-y: auto; padding: 1rem; border: 1px solid #e5e7eb; border-radius: 0.75rem; }
.cc-doc mark { border-radius: 0.2rem; padding: 0 0.15rem; }
.cc-doc mark.severity-high { background: #fde68a; font-weight: 600; }
.cc-doc mark.severity-medium { background: #fed7aa; font-weight: 600; }
.cc-doc mark.severity-low { background: #bfdbfe; }
.cc-doc mark.search-hit { background: #e5e7eb; }
.cc-doc mark.search-active { outline: 1px solid #6b7280; background: #d1d5db; }
</style>
"""

st.set_page_config(
    page_title="ClauseCheck",
    page_icon="⚖️",
    layout="wide",
)

st.title("⚖️ ClauseCheck")
st.markdown("Deterministic contract review with optional AI analysis.")

# API Key input
api_key = st.text_input(
    "Anthropic API Key (optional)",
    type="password",
    help="Only needed for AI analysis",
    value=os.environ.get("ANTHROPIC_API_KEY", ""),
)


def _upload_text(uploaded) -> str:
    try:
        return extract_text_from_bytes(uploaded.getvalue(), uploaded.name)
    except ExtractionError as e:
        st.error(str(e))
        return ""


review_tab, compare_tab, clause_tab = st.tabs(["Review", "Compare", "Clause check"])

# --- Review -----------------------------------------------------------------

with review_tab:
    uploaded_file = st.file_uploader(
        "Drop your agreement here",
        type=["docx", "pdf", "txt"],
        help="Drag and drop a .docx or .pdf file or click to browse",
        key="review_upload",
    )
    pasted = st.text_area("...or paste the agreement text", height=150, key="review_paste")

    packs = get_rule_packs()
    pack_keys = [p.key for p in packs]
    col1, col2 = st.columns(2)
    pack_key = col1.selectbox(
        "Rule pack",
        options=pack_keys,
        index=pack_keys.index(DEFAULT_PACK) if DEFAULT_PACK in pack_keys else 0,
        format_func=lambda k: next(p.label for p in packs if p.key == k),
    )
    use_llm = col2.checkbox("Add AI analysis", value=False, disabled=not api_key)

    if st.button("Run checks", type="primary", use_container_width=True):
        text = _upload_text(uploaded_file) if uploaded_file else pasted
        with st.spinner("Running checks..."):
            result = review_text(text, ReviewConfig(
                pack=pack_key,
                use_llm=use_llm,
                anthropic_api_key=api_key or None,
            ))
        # Store in session state so results persist across re-runs
        st.session_state["result"] = result
        st.session_state["resolved"] = set()
        st.session_state["doc_name"] = uploaded_file.name if uploaded_file else "pasted text"

    if "result" in st.session_state:
        result = st.session_state["result"]
        resolved = st.session_state["resolved"]

        if not result.text.strip():
            st.info("No document loaded. Upload a file or paste text to get started.")
        else:
            if result.ai_error:
                st.warning(f"AI analysis unavailable: {result.ai_error}")
            for failure in result.failures:
                st.warning(f"Rule {failure.rule_id} was skipped: {failure.error}")

            open_findings = exclude_resolved(result.findings, resolved)
            counts = severity_counts(open_findings)
            c1, c2, c3, c4 = st.columns(4)
            c1.metric("Total", counts["total"])
            c2.metric("High", counts["high"])
            c3.metric("Medium", counts["medium"])
            c4.metric("Low", counts["low"])

            doc_col, findings_col = st.columns([3, 2])

            with findings_col:
                severity = st.radio(
                    "Severity", options=["all", "high", "medium", "low"], horizontal=True,
                    format_func=lambda s: s.capitalize(),
                )
                query = st.text_input("Filter findings")
                shown = filter_findings(open_findings, severity=severity, query=query)
                st.caption(f"{len(shown)} of {len(open_findings)} shown")

                for f in shown:
                    badge = " · AI" if f.source == "ai" else ""
                    with st.expander(f"{SEVERITY_ICONS.get(f.severity, '')} {f.rule_title}{badge}"):
                        st.markdown(f"**{f.rule_id}**" + (f" · {f.location_label}" if f.location_label else ""))
                        st.markdown(f"> {f.matched_text}")
                        st.markdown(f"**Why it matters:** {f.why}")
                        st.markdown(f"**Suggestion:** {f.suggestion}")
                        if st.button("Mark reviewed", key=f"resolve-{f.id}"):
                            resolved.add(f.id)
                            st.rerun()

                payload = build_payload(open_findings, pack=pack_key, source=st.session_state["doc_name"])
                st.download_button(
                    "📋 Findings report (HTML)",
                    render_report_html(payload),
                    file_name="clausecheck-report.html",
                    mime="text/html",
                )
                st.download_button(
                    "🧾 Findings (JSON)",
                    json.dumps(payload, indent=2, ensure_ascii=False),
                    file_name="clausecheck-findings.json",
                    mime="application/json",
                )

            with doc_col:
                search = st.text_input("Search document")
                matches = find_search_matches(result.text, search)
                active = 0
                if matches:
                    active = st.number_input(
                        f"Match (of {len(matches)})", min_value=1, max_value=len(matches), value=1,
                    ) - 1
                st.html(
                    HIGHLIGHT_CSS
                    + f'<div class="cc-doc">{render_html(result.text, open_findings, matches, active)}</div>'
                )

# --- Compare ----------------------------------------------------------------

with compare_tab:
    col1, col2 = st.columns(2)
    baseline_file = col1.file_uploader("Baseline agreement", type=["docx", "pdf", "txt"], key="baseline")
    new_file = col2.file_uploader("New agreement", type=["docx", "pdf", "txt"], key="new")

    if baseline_file and new_file and st.button("Compare", type="primary"):
        baseline_text = _upload_text(baseline_file)
        new_text = _upload_text(new_file)
        if baseline_text and new_text:
            findings = compare_documents(baseline_text, new_text)
            if not findings:
                st.success("No differences found by the deterministic checks.")
            for f in findings:
                with st.expander(f"{SEVERITY_ICONS.get(f.severity, '')} {f.rule_title}"):
                    st.markdown(f.why)
                    st.markdown(f"**Suggestion:** {f.suggestion}")
                    if f.baseline_snippet:
                        st.markdown("**Baseline**")
                        st.code(f.baseline_snippet, language=None)
                    if f.new_snippet:
                        st.markdown("**New**")
                        st.code(f.new_snippet, language=None)

# --- Clause check -------------------------------------------------------------

with clause_tab:
    clause_text = st.text_area("Paste a single clause", height=180, key="clause")
    if st.button("Check clause", type="primary"):
        findings = run_clause_checks(clause_text)
        if not findings:
            st.success("No issues found by the clause checks.")
        for f in findings:
            with st.expander(f"{SEVERITY_ICONS.get(f.severity, '')} {f.rule_title} · {f.category}"):
                st.markdown(f"> {f.matched_text}")
                st.markdown(f.why)
                st.markdown(f"**Suggestion:** {f.suggestion}")

# Footer
st.markdown("---")
st.markdown("*Findings are review aids, not legal advice.*")
