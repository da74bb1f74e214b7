"""
PassWarden Report Generator
============================

Self-contained HTML and JSON reports for a password analysis.  The HTML
page carries its own CSS and shows a strength gauge, the property table,
the detected patterns and every finding; the JSON document is the same
data for pipelines.

Reports contain only the masked password.

References:
    - OWASP Reporting Guidelines. https://owasp.org/www-community/
"""

from __future__ import annotations

import html
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from passwarden.analyzers.brute_force import format_combinations
from passwarden.core.models import PasswordAnalysis, Pattern
from shared.models import Finding, ScanResult

_GAUGE_COLOURS = ("#e5534b", "#e0823d", "#c69026", "#57ab5a", "#46954a")

_PAGE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>PassWarden Report - {title}</title>
<style>
body {{ font-family: system-ui, sans-serif; background: #1c2128; color: #cdd9e5;
       max-width: 960px; margin: 0 auto; padding: 2rem; line-height: 1.5; }}
h1, h2 {{ color: #6cb6ff; }}
.muted {{ color: #768390; font-size: 0.9rem; }}
.card {{ background: #22272e; border: 1px solid #444c56; border-radius: 6px;
        padding: 1rem 1.25rem; margin: 1rem 0; }}
.gauge {{ background: #2d333b; border-radius: 4px; height: 14px; }}
.gauge div {{ height: 14px; border-radius: 4px; }}
table {{ border-collapse: collapse; width: 100%; }}
td {{ border-bottom: 1px solid #444c56; padding: 0.3rem 0.5rem; }}
.finding {{ border-left: 4px solid #444c56; padding: 0.5rem 1rem; margin: 0.75rem 0; }}
.finding h3 {{ margin: 0 0 0.25rem; font-size: 1rem; }}
.severity-critical {{ border-color: #e5534b; }}
.severity-high {{ border-color: #e0823d; }}
.severity-medium {{ border-color: #c69026; }}
.severity-low {{ border-color: #6cb6ff; }}
.severity-info {{ border-color: #57ab5a; }}
pre {{ background: #2d333b; padding: 1rem; overflow-x: auto; font-size: 0.85rem; }}
</style>
</head>
<body>
<h1>PassWarden Report</h1>
<p class="muted">{title} &middot; generated {timestamp} &middot; v{version}</p>
{analysis}
<div class="card"><h2>Findings ({count})</h2>
<p>{summary}</p>
{findings}
</div>
{raw}
</body>
</html>
"""


def _esc(value: Any) -> str:
    return html.escape(str(value), quote=True)


class PassWardenReportGenerator:
    """Writes HTML and JSON reports for a :class:`~shared.models.ScanResult`.

    Args:
        version: PassWarden version stamped into every report.
    """

    def __init__(self, version: str) -> None:
        self._version = version

    # ------------------------------------------------------------------ #
    #  JSON
    # ------------------------------------------------------------------ #

    def build_json(self, result: ScanResult) -> dict[str, Any]:
        highest = result.highest_severity
        return {
            "report_metadata": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "tool": result.tool_name,
                "target": result.target,
                "version": self._version,
            },
            "summary": {
                "total_findings": len(result.findings),
                "severity_counts": result.severity_counts,
                "highest_severity": highest.value if highest else None,
                "duration_seconds": result.duration_seconds,
                "description": result.summary,
            },
            "findings": [f.model_dump(mode="json") for f in result.findings],
            "metadata": result.metadata,
        }

    def generate_json(self, result: ScanResult, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        text = json.dumps(self.build_json(result), indent=2, ensure_ascii=False, default=str)
        output_path.write_text(text, encoding="utf-8")
        return output_path

    # ------------------------------------------------------------------ #
    #  HTML
    # ------------------------------------------------------------------ #

    def generate_html(
        self,
        result: ScanResult,
        output_path: Path,
        title: Optional[str] = None,
    ) -> Path:
        """Render *result* as a standalone HTML page at *output_path*."""
        page = _PAGE.format(
            title=_esc(title or f"Analysis of {result.target}"),
            timestamp=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"),
            version=_esc(self._version),
            analysis=self._analysis_card(result.metadata),
            count=len(result.findings),
            summary=_esc(result.summary),
            findings="\n".join(self._finding_html(f) for f in result.findings)
            or '<p class="muted">No findings.</p>',
            raw=self._raw_card(result.metadata),
        )
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(page, encoding="utf-8")
        return output_path

    @staticmethod
    def _analysis_card(metadata: dict[str, Any]) -> str:
        """Gauge and property table, when *metadata* holds an analysis."""
        try:
            analysis = PasswordAnalysis.model_validate(metadata)
        except ValidationError:
            return ""

        strength = analysis.strength
        colour = _GAUGE_COLOURS[strength.score - 1]
        rows = [
            ("Password", analysis.password_masked),
            ("Length", analysis.length),
            ("Character set", analysis.char_set_size),
            ("Entropy", f"{strength.entropy:.2f} bits"),
            ("Patterns", ", ".join(p.label for p in analysis.patterns if p is not Pattern.NONE) or "none"),
            ("Breached", "not checked" if analysis.compromised is None else ("yes" if analysis.compromised else "no")),
        ]
        if analysis.crack_time is not None:
            estimate = analysis.crack_time
            rows.append(("Combinations", format_combinations(estimate.combinations)))
            rows.append(("Crack time", f"{estimate.value:.4g} {estimate.unit.value}"))

        table = "".join(f"<tr><td>{_esc(k)}</td><td>{_esc(v)}</td></tr>" for k, v in rows)
        return (
            '<div class="card"><h2>Strength</h2>'
            f"<p><strong>{_esc(strength.grade.label)}</strong> ({strength.score}/5)</p>"
            f'<div class="gauge"><div style="width:{strength.score * 20}%;background:{colour}"></div></div>'
            f"<table>{table}</table></div>"
        )

    @staticmethod
    def _finding_html(finding: Finding) -> str:
        parts = [
            f'<div class="finding {finding.severity.css_class}">',
            f"<h3>[{finding.severity.value}] {_esc(finding.title)}</h3>",
            f"<p>{_esc(finding.description)}</p>",
        ]
        if finding.recommendation:
            parts.append(f"<p><strong>Recommendation:</strong> {_esc(finding.recommendation)}</p>")
        if finding.references:
            parts.append(f'<p class="muted">{_esc("; ".join(finding.references))}</p>')
        parts.append("</div>")
        return "".join(parts)

    @staticmethod
    def _raw_card(metadata: dict[str, Any]) -> str:
        if not metadata:
            return ""
        dumped = json.dumps(metadata, indent=2, ensure_ascii=False, default=str)
        return f'<div class="card"><h2>Analysis Data</h2><pre>{_esc(dumped)}</pre></div>'
