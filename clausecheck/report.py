from __future__ import annotations
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional, Sequence
import html
import json

from clausecheck.findings import severity_counts
from clausecheck.ir import Finding

MAX_TXT_FINDINGS = 60

_CELL = "padding:4px 8px; border-bottom:1px solid #ddd; font-size:11px;"

_HTML_TEMPLATE = """<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <title>ClauseCheck Findings Report</title>
    <style>
      body {{ font-family: system-ui, -apple-system, "Segoe UI", sans-serif; color: #111827; padding: 24px; }}
      h1 {{ font-size: 20px; margin-bottom: 4px; }}
      h2 {{ font-size: 14px; margin-top: 18px; margin-bottom: 6px; }}
      table {{ border-collapse: collapse; width: 100%; margin-top: 8px; }}
      th {{ text-align: left; font-size: 11px; text-transform: uppercase; letter-spacing: 0.12em; color: #6b7280; padding: 4px 8px; border-bottom: 1px solid #d1d5db; }}
    </style>
  </head>
  <body>
    <h1>ClauseCheck findings report</h1>
    <p style="font-size:11px; color:#4b5563;">Pack: {pack} &middot; Generated: {timestamp}</p>
    <h2>Summary</h2>
    <p style="font-size:11px;">Total findings: <strong>{total}</strong> (High: {high}, Medium: {medium}, Low: {low})</p>
    <h2>Details</h2>
    <table>
      <thead>
        <tr><th>Severity</th><th>Rule</th><th>Title</th><th>Location</th></tr>
      </thead>
      <tbody>{rows}
      </tbody>
    </table>
  </body>
</html>
"""


def build_payload(
    findings: Sequence[Finding],
    pack: str,
    source: Optional[str] = None,
    failures: Optional[List[Dict[str, str]]] = None,
) -> Dict[str, Any]:
    return {
        "source": source,
        "pack": pack,
        "timestamp_utc": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%SZ"),
        "counts": severity_counts(findings),
        "findings": [f.to_dict() for f in findings],
        "rule_failures": failures or [],
    }


def write_json(path: str, payload: Dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)


def write_html(path: str, payload: Dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_report_html(payload))


def render_txt(payload: Dict[str, Any]) -> str:
    lines: List[str] = []
    lines.append(f"ClauseCheck review - {payload.get('timestamp_utc')}")
    if payload.get("source"):
        lines.append(f"Document: {payload['source']}")
    lines.append(f"Pack: {payload.get('pack')}")
    lines.append("")
    c = payload.get("counts", {})
    lines.append(
        f"Findings: {c.get('total', 0)} (High: {c.get('high', 0)}, Medium: {c.get('medium', 0)}, Low: {c.get('low', 0)})"
    )
    lines.append("")
    findings = payload.get("findings", []) or []
    for fnd in findings[:MAX_TXT_FINDINGS]:
        tag = " [AI]" if fnd.get("source") == "ai" else ""
        lines.append(f"- [{fnd['severity'].upper()}] {fnd['rule_id']}{tag}: {fnd['rule_title']}")
        if fnd.get("location_label"):
            lines.append(f"    at: {fnd['location_label']}")
        lines.append(f"    {fnd['why']}")
    if len(findings) > MAX_TXT_FINDINGS:
        lines.append(f"... plus {len(findings) - MAX_TXT_FINDINGS} more.")
    for failure in payload.get("rule_failures", []) or []:
        lines.append(f"! Rule {failure['rule_id']} failed: {failure['error']}")
    return "\n".join(lines)


def _e(v: Any) -> str:
    return html.escape(str(v or ""))


def _row(fnd: Dict[str, Any]) -> str:
    return (
        f"\n        <tr>"
        f'<td style="{_CELL} white-space:nowrap;">{_e(fnd["severity"].upper())}</td>'
        f'<td style="{_CELL} white-space:nowrap;">{_e(fnd["rule_id"])}</td>'
        f'<td style="{_CELL}">{_e(fnd["rule_title"])}</td>'
        f'<td style="{_CELL}">{_e(fnd.get("location_label"))}</td>'
        f"</tr>"
        f"\n        <tr><td></td><td></td>"
        f'<td colspan="2" style="padding:4px 8px 8px; border-bottom:1px solid #eee; font-size:10px; color:#333;">'
        f"{_e(fnd['why'])}</td></tr>"
    )


def render_report_html(payload: Dict[str, Any]) -> str:
    """Printable HTML: summary counts, then a row per finding with its explanation."""
    c = payload.get("counts", {})
    return _HTML_TEMPLATE.format(
        pack=html.escape(str(payload.get("pack") or "")),
        timestamp=html.escape(str(payload.get("timestamp_utc") or "")),
        total=c.get("total", 0),
        high=c.get("high", 0),
        medium=c.get("medium", 0),
        low=c.get("low", 0),
        rows="".join(_row(f) for f in payload.get("findings", []) or []),
    )
