"""HTML report generator using Jinja2 templates."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import jinja2


# ---------------------------------------------------------------------------
# Built-in HTML template (no external template file needed)
# ---------------------------------------------------------------------------

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Voice Quality Report: {{ title }}</title>
<style>
  :root { --bg: #F5F3EE; --card: #fff; --accent: #e94560; --text: #1a1a2e; }
  * { box-sizing: border-box; margin: 0; padding: 0; }
  body { font-family: 'Inter', system-ui, sans-serif; background: var(--bg);
         color: var(--text); line-height: 1.6; }
  .container { max-width: 960px; margin: 0 auto; padding: 24px; }
  header { background: var(--text); color: #fff; padding: 32px 0;
           border-bottom: 4px solid var(--accent); margin-bottom: 24px; }
  header h1 { font-size: 24px; font-weight: 700; }
  header .meta { font-size: 13px; color: #aaa; margin-top: 6px; }
  .card { background: var(--card); border-radius: 12px; padding: 20px;
          border: 1px solid #e0ddd5; margin-bottom: 20px; }
  .card h2 { font-size: 16px; margin-bottom: 12px; }
  .badge { display: inline-block; padding: 3px 10px; border-radius: 20px;
           font-size: 12px; font-weight: 600; }
  .badge.pass { background: #d4edda; color: #155724; }
  .badge.fail { background: #f8d7da; color: #721c24; }
  .badge.none { background: #eee; color: #555; }
  table { width: 100%; border-collapse: collapse; font-size: 13px; }
  th, td { text-align: left; padding: 8px 12px; border-bottom: 1px solid #eee; }
  th { font-weight: 600; color: #666; }
  .dimension { display: grid; grid-template-columns: repeat(auto-fill, minmax(200px, 1fr));
               gap: 14px; }
  .dim-card { padding: 16px; border-radius: 10px; background: #f9f7f2;
              border: 1px solid #e8e4db; }
  .dim-card .label { font-size: 12px; color: #888; }
  .dim-card .value { font-size: 22px; font-weight: 700; margin-top: 4px; }
</style>
</head>
<body>
<header>
  <div class="container">
    <h1>{{ title }}</h1>
    <div class="meta">Generated {{ timestamp }} &middot; session {{ "%.1f"|format(duration_s) }}s</div>
  </div>
</header>
<div class="container">
  <!-- Summary -->
  <div class="card">
    <h2>Summary</h2>
    <div class="dimension">
      <div class="dim-card">
        <div class="label">Responses</div>
        <div class="value">{{ total_responses }}</div>
      </div>
      <div class="dim-card">
        <div class="label">Errors</div>
        <div class="value">{{ error_count }}</div>
      </div>
      <div class="dim-card">
        <div class="label">Average Latency</div>
        <div class="value">{{ average_latency }}</div>
      </div>
      <div class="dim-card">
        <div class="label">Compliance</div>
        <div class="value">{{ status }}</div>
      </div>
    </div>
    <p style="margin-top: 12px;">{{ message }}</p>
  </div>

  <!-- Target assessment -->
  {% if dimensions %}
  <div class="card">
    <h2>Performance Targets</h2>
    <table>
      <thead><tr><th>Dimension</th><th>Status</th><th>Target</th><th>Actual</th><th>Rating</th></tr></thead>
      <tbody>
      {% for name, d in dimensions.items() %}
      <tr>
        <td>{{ name }}</td>
        <td><span class="badge {{ 'pass' if d.compliant else 'fail' }}">{{ 'PASS' if d.compliant else 'FAIL' }}</span></td>
        <td>{{ d.target }}</td>
        <td>{{ d.actual }}</td>
        <td>{{ d.rating }}</td>
      </tr>
      {% endfor %}
      </tbody>
    </table>
  </div>
  {% endif %}

  <!-- Metric groups -->
  {% for group, metrics in groups.items() %}
  <div class="card">
    <h2>{{ group }}</h2>
    {% if metrics %}
    <table>
      <tbody>
      {% for key, value in metrics.items() %}
      <tr><th>{{ key }}</th><td>{{ value }}</td></tr>
      {% endfor %}
      </tbody>
    </table>
    {% else %}
    <span class="badge none">measuring...</span>
    {% endif %}
  </div>
  {% endfor %}
</div>
</body>
</html>
"""

_GROUPS = {
    "Latency": "latency",
    "Connection": "connection",
    "Audio Quality": "audio_quality",
    "Conversation Flow": "conversation_flow",
}

_DIMENSIONS = ("latency", "connection", "audio_quality")


class HTMLReportGenerator:
    """Generate a self-contained HTML page from a monitor metrics report."""

    def __init__(self, title: str = "Voice Session Quality Report"):
        self.title = title
        self._template = jinja2.Environment(autoescape=True).from_string(_HTML_TEMPLATE)

    def render(self, report: dict[str, Any]) -> str:
        assessment = report.get("prd_assessment") or {}
        average = report.get("average_latency")

        groups = {
            heading: self._format_group(report.get(key))
            for heading, key in _GROUPS.items()
        }
        dimensions = {
            name: assessment[name] for name in _DIMENSIONS if name in assessment
        }

        return self._template.render(
            title=self.title,
            timestamp=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
            duration_s=(report.get("session_duration") or 0) / 1000,
            total_responses=report.get("total_responses", 0),
            error_count=report.get("error_count", 0),
            average_latency=f"{average:.0f}ms" if average is not None else "-",
            status=assessment.get("status", "-"),
            message=assessment.get("message", ""),
            dimensions=dimensions,
            groups=groups,
        )

    def generate(
        self,
        report: dict[str, Any],
        output_path: str | Path = "report.html",
    ) -> Path:
        output_path = Path(output_path)
        output_path.write_text(self.render(report), encoding="utf-8")
        return output_path

    @staticmethod
    def _format_group(metrics: dict[str, Any] | None) -> dict[str, str] | None:
        if metrics is None:
            return None
        formatted: dict[str, str] = {}
        for key, value in metrics.items():
            if isinstance(value, float):
                formatted[key] = f"{value:.2f}"
            elif isinstance(value, (list, dict)) and not value:
                formatted[key] = "-"
            else:
                formatted[key] = str(value)
        return formatted
