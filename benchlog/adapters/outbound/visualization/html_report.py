"""
HTML Report Generator Adapter

Implements IReportGenerator with standalone HTML documents.

Two report kinds:
- Runs report: run metadata, one tab per run, one card per suite with
  CSS bar charts of ns/op and B/op, plus a history chart for several runs
- Comparison report: regression/improvement counters, embedded charts and
  a details table
"""

from __future__ import annotations

import html
import logging
import webbrowser
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

from benchlog.application.ports.outbound.report_generator import IReportGenerator
from benchlog.application.services.display_service import format_value
from benchlog.domain.models import Benchmark, ComparisonResult, Run, Suite
from benchlog.domain.services.comparator import count_changes
from .charts import ChartGenerator, ChartOutput

logger = logging.getLogger(__name__)


# =============================================================================
# Formatting helpers
# =============================================================================

def format_bytes(v: float) -> str:
    if v >= 1 << 30:
        return f"{v / (1 << 30):.1f} GB"
    if v >= 1 << 20:
        return f"{v / (1 << 20):.1f} MB"
    if v >= 1 << 10:
        return f"{v / (1 << 10):.1f} KB"
    return f"{v:.0f} B"


def format_date(timestamp: int, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    return datetime.fromtimestamp(timestamp).strftime(fmt)


def _esc(text: str) -> str:
    return html.escape(text, quote=True)


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class ReportConfig:
    """Report configuration"""
    title: Optional[str] = None
    show_charts: bool = True
    min_bar_pct: float = 5.0
    # ratio of the suite maximum: <= fast, <= medium, above is slow
    bar_thresholds: Tuple[float, float] = field(default=(0.5, 0.8))


# =============================================================================
# Report Generator
# =============================================================================

class HtmlReportGenerator(IReportGenerator):
    """
    Generates standalone HTML reports for runs and comparisons.
    """

    def __init__(self, config: Optional[ReportConfig] = None, charts: Optional[ChartGenerator] = None):
        self.config = config or ReportConfig()
        self._charts = charts

    @property
    def charts(self) -> ChartGenerator:
        if self._charts is None:
            self._charts = ChartGenerator()
        return self._charts

    # ------------------------------------------------------------------
    # IReportGenerator
    # ------------------------------------------------------------------

    def generate_runs_report(self, runs: List[Run], threshold: float) -> str:
        title = self.config.title or "Benchmark Results"
        if not self.config.title and runs and runs[0].version:
            title = f"Benchmarks - {runs[0].version}"

        if not runs:
            content = self._generate_empty_state("No benchmark data available")
        else:
            sections = [self._generate_summary(runs[0])]
            if self.config.show_charts and len(runs) > 1:
                sections.append(self._generate_chart_section(
                    "History", [self.charts.plot_run_history(runs)]
                ))
            sections.append(self._generate_tabs(runs))
            content = "\n".join(sections)

        return self._generate_html(title, content)

    def generate_comparison_report(self, results: List[ComparisonResult], threshold: float) -> str:
        title = self.config.title or "Benchmark Comparison"

        if not results:
            content = self._generate_empty_state("No comparison data available")
        else:
            sections = [self._generate_comparison_summary(results, threshold)]
            if self.config.show_charts:
                sections.append(self._generate_chart_section("Performance Changes", [
                    self.charts.plot_time_changes(results, threshold),
                    self.charts.plot_memory_changes(results, threshold),
                    self.charts.plot_time_comparison(results),
                ]))
            sections.append(self._generate_comparison_table(results, threshold))
            content = "\n".join(sections)

        return self._generate_html(title, content)

    def save(self, document: str, output_path: Union[str, Path]) -> Path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document, encoding="utf-8")
        logger.debug("Wrote HTML report to %s", path)
        return path

    def open_in_browser(self, path: Union[str, Path]) -> None:
        abs_path = Path(path).resolve()
        webbrowser.open(f"file://{abs_path}")

    # ------------------------------------------------------------------
    # Runs report
    # ------------------------------------------------------------------

    def _generate_summary(self, run: Run) -> str:
        items = []
        if run.version:
            items.append(("Version", _esc(run.version)))
        if run.date > 0:
            items.append(("Date", format_date(run.date)))
        if run.tags:
            items.append(("Tags", _esc(", ".join(run.tags))))
        items.append(("Suites", str(len(run.suites))))
        items.append(("Benchmarks", str(run.benchmark_count)))

        metadata = "\n".join(
            f"""<div class="metadata-item">
            <span class="metadata-label">{label}:</span>
            <span class="metadata-value">{value}</span>
        </div>"""
            for label, value in items
        )

        return f"""
<section class="summary">
    <h2>Summary</h2>
    <div class="metadata">
{metadata}
    </div>
</section>"""

    def _run_title(self, run: Run, index: int) -> str:
        if run.version:
            return run.version
        if run.date > 0:
            return format_date(run.date, "%Y-%m-%d %H:%M")
        return f"Run {index + 1}"

    def _generate_tabs(self, runs: List[Run]) -> str:
        buttons = []
        panes = []
        for i, run in enumerate(runs):
            active = "active" if i == 0 else ""
            buttons.append(
                f'<button class="tab-btn {active}" data-tab="run-{i}">{_esc(self._run_title(run, i))}</button>'
            )
            cards = "\n".join(self._generate_suite_card(s) for s in run.suites)
            panes.append(f'<div id="run-{i}" class="tab-pane {active}">\n{cards}\n</div>')

        buttons_html = "".join(buttons)

        return f"""
<section class="tabs-section">
    <div class="tabs">{buttons_html}</div>
    <div class="tab-content">
{chr(10).join(panes)}
    </div>
</section>"""

    def _generate_suite_card(self, suite: Suite) -> str:
        time_bars = self._generate_bar_rows(
            suite.benchmarks,
            lambda b: b.ns_per_op,
            format_value,
            "No timing data available",
        )
        mem_bars = self._generate_bar_rows(
            suite.benchmarks,
            lambda b: b.mem.bytes_per_op if b.mem is not None else 0.0,
            format_bytes,
            "No memory data available",
        )
        go_badge = f'<span class="badge">{_esc(suite.go)}</span>' if suite.go else ""
        items = "\n".join(self._generate_benchmark_item(b) for b in suite.benchmarks)

        return f"""<div class="card">
    <div class="card-header">
        <h3>{_esc(suite.pkg)}</h3>
        <div class="suite-info">
            {go_badge}
            <span class="badge">{_esc(suite.goos)}/{_esc(suite.goarch)}</span>
        </div>
    </div>
    <div class="card-body">
        <div class="chart-section">
            <h4>Execution Time (ns/op)</h4>
            <div class="bar-chart">
{time_bars}
            </div>
        </div>
        <div class="chart-section">
            <h4>Memory Usage (B/op)</h4>
            <div class="bar-chart">
{mem_bars}
            </div>
        </div>
        <details class="benchmark-list">
            <summary>Benchmarks ({len(suite.benchmarks)})</summary>
{items}
        </details>
    </div>
</div>"""

    def _generate_bar_rows(
        self,
        benchmarks: List[Benchmark],
        metric: Callable[[Benchmark], float],
        formatter: Callable[[float], str],
        empty_message: str,
    ) -> str:
        values = [(b, metric(b)) for b in benchmarks]
        max_val = max((v for _, v in values), default=0.0)
        if max_val <= 0:
            return f"<p class='no-data'>{empty_message}</p>"

        counters: Dict[str, int] = {}
        rows = []
        for bench, value in values:
            if value <= 0:
                continue
            pct = max((value / max_val) * 100, self.config.min_bar_pct)
            css_class, shade = self._performance_class(value / max_val, counters)
            rows.append(f"""<div class="bar-row">
            <div class="bar-name">{_esc(bench.name)}</div>
            <div class="bar-track">
                <div class="bar {css_class}" style="width: {pct:.1f}%; {shade}"></div>
            </div>
            <div class="bar-value">{formatter(value)}</div>
        </div>""")
        return "\n".join(rows)

    def _performance_class(self, ratio: float, counters: Dict[str, int]) -> Tuple[str, str]:
        """CSS class by ratio to the maximum; repeated classes get lighter."""
        fast, medium = self.config.bar_thresholds
        if ratio <= fast:
            css_class = "bar-fast"
        elif ratio <= medium:
            css_class = "bar-medium"
        else:
            css_class = "bar-slow"

        index = counters.get(css_class, 0)
        counters[css_class] = index + 1
        lighten = min(index * 12, 48)
        shade = f"filter: brightness({100 + lighten}%);" if lighten else ""
        return css_class, shade

    def _generate_benchmark_item(self, bench: Benchmark) -> str:
        metrics = [("Runs", f"{bench.runs:,}")]
        if bench.ns_per_op > 0:
            metrics.append(("Time", f"{bench.ns_per_op:.2f} ns/op"))
        if bench.mem is not None:
            if bench.mem.bytes_per_op > 0:
                metrics.append(("Memory", f"{bench.mem.bytes_per_op:.0f} B/op"))
            if bench.mem.allocs_per_op > 0:
                metrics.append(("Allocs", f"{bench.mem.allocs_per_op:.0f} allocs/op"))
            if bench.mem.mb_per_sec > 0:
                metrics.append(("Throughput", f"{bench.mem.mb_per_sec:.2f} MB/s"))
        for unit, value in bench.custom.items():
            metrics.append((_esc(unit), f"{value:g}"))

        rendered = "\n".join(
            f'<div class="metric"><span class="metric-label">{label}:</span> '
            f'<span class="metric-value">{value}</span></div>'
            for label, value in metrics
        )
        return f"""<div class="benchmark-item">
    <div class="benchmark-name">{_esc(bench.name)}</div>
    <div class="benchmark-metrics">{rendered}</div>
</div>"""

    # ------------------------------------------------------------------
    # Comparison report
    # ------------------------------------------------------------------

    def _generate_comparison_summary(self, results: List[ComparisonResult], threshold: float) -> str:
        regressions, improvements = count_changes(results, threshold)
        return f"""
<section class="summary">
    <h2>Comparison Summary</h2>
    <p class="threshold">Threshold: {threshold:.1f}%</p>
    <div class="stats">
        <div class="stat-card">
            <div class="stat-value">{len(results)}</div>
            <div class="stat-label">Total Benchmarks</div>
        </div>
        <div class="stat-card stat-danger">
            <div class="stat-value">{regressions}</div>
            <div class="stat-label">Regressions</div>
        </div>
        <div class="stat-card stat-success">
            <div class="stat-value">{improvements}</div>
            <div class="stat-label">Improvements</div>
        </div>
    </div>
</section>"""

    def _generate_chart_section(self, heading: str, charts: List[Optional[ChartOutput]]) -> str:
        cards = "\n".join(
            f"""<div class="chart-card">
        <h3>{_esc(c.title)}</h3>
        <img src="data:image/png;base64,{c.png_base64}" alt="{_esc(c.title)}">
        <p class="chart-desc">{_esc(c.description)}</p>
    </div>"""
            for c in charts if c is not None
        )
        if not cards:
            return ""
        return f"""
<section class="charts">
    <h2>{_esc(heading)}</h2>
    <div class="chart-grid">
    {cards}
    </div>
</section>"""

    def _generate_comparison_table(self, results: List[ComparisonResult], threshold: float) -> str:
        rows = []
        for r in results:
            if r.is_regression(threshold):
                row_class = "regression"
            elif r.is_improvement(threshold):
                row_class = "improvement"
            else:
                row_class = ""
            mem_cells = (
                f"<td>{format_bytes(r.old_bytes)}</td><td>{format_bytes(r.new_bytes)}</td>"
                f"<td>{r.bytes_pct:+.1f}%</td>"
                if r.has_memory else "<td>-</td><td>-</td><td>-</td>"
            )
            allocs_cell = f"{r.old_allocs:.0f} → {r.new_allocs:.0f}" if (r.old_allocs or r.new_allocs) else "-"
            rows.append(
                f'<tr class="{row_class}"><td class="name">{_esc(r.name)}</td>'
                f"<td>{format_value(r.old_ns_per_op)}</td><td>{format_value(r.new_ns_per_op)}</td>"
                f"<td>{r.ns_per_op_pct:+.1f}%</td>{mem_cells}<td>{allocs_cell}</td></tr>"
            )

        return f"""
<section class="details">
    <h2>Details</h2>
    <table class="data-table">
        <thead>
            <tr><th>Benchmark</th><th>Time Old</th><th>Time New</th><th>Time Δ</th>
                <th>Mem Old</th><th>Mem New</th><th>Mem Δ</th><th>Allocs</th></tr>
        </thead>
        <tbody>
            {chr(10).join(rows)}
        </tbody>
    </table>
</section>"""

    # ------------------------------------------------------------------
    # Page
    # ------------------------------------------------------------------

    def _generate_empty_state(self, message: str) -> str:
        return f'<section class="empty-state"><p>{_esc(message)}</p></section>'

    def _generate_html(self, title: str, content: str) -> str:
        generated = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{_esc(title)}</title>
    <style>
{self._get_css()}
    </style>
</head>
<body>
    <div class="container">
        <header>
            <h1>{_esc(title)}</h1>
            <p class="timestamp">Generated: {generated}</p>
        </header>
{content}
    </div>
    <script>
{self._get_js()}
    </script>
</body>
</html>"""

    def _get_css(self) -> str:
        return """
        * { box-sizing: border-box; }
        body { margin: 0; font-family: -apple-system, 'Segoe UI', Roboto, sans-serif;
               background: #0f172a; color: #e2e8f0; }
        .container { max-width: 1200px; margin: 0 auto; padding: 24px; }
        header { border-bottom: 1px solid #334155; margin-bottom: 24px; }
        h1 { margin: 0 0 8px; }
        h2 { color: #93c5fd; }
        .timestamp, .threshold, .chart-desc, .no-data { color: #94a3b8; font-size: 0.9em; }
        .metadata { display: flex; flex-wrap: wrap; gap: 16px; }
        .metadata-item { background: #1e293b; padding: 10px 14px; border-radius: 8px; }
        .metadata-label { color: #94a3b8; margin-right: 6px; }
        .stats { display: grid; grid-template-columns: repeat(3, 1fr); gap: 16px; }
        .stat-card { background: #1e293b; border-radius: 8px; padding: 16px; text-align: center; }
        .stat-value { font-size: 2em; font-weight: bold; }
        .stat-danger .stat-value { color: #ef4444; }
        .stat-success .stat-value { color: #22c55e; }
        .tabs { display: flex; gap: 8px; margin-bottom: 16px; flex-wrap: wrap; }
        .tab-btn { background: #1e293b; color: #e2e8f0; border: 1px solid #334155;
                   border-radius: 6px; padding: 8px 14px; cursor: pointer; }
        .tab-btn.active { background: #3b82f6; border-color: #3b82f6; }
        .tab-pane { display: none; }
        .tab-pane.active { display: block; }
        .card, .chart-card { background: #1e293b; border-radius: 8px; padding: 16px; margin-bottom: 16px; }
        .card-header { display: flex; justify-content: space-between; align-items: center; }
        .badge { background: #334155; border-radius: 4px; padding: 2px 8px; margin-left: 6px; font-size: 0.85em; }
        .chart-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(420px, 1fr)); gap: 16px; }
        .chart-card img { max-width: 100%; }
        .bar-row { display: grid; grid-template-columns: 260px 1fr 90px; gap: 8px; align-items: center; margin: 4px 0; }
        .bar-name { overflow: hidden; text-overflow: ellipsis; white-space: nowrap; }
        .bar-track { background: #0f172a; border-radius: 4px; height: 14px; }
        .bar { height: 100%; border-radius: 4px; }
        .bar-fast { background: #22c55e; }
        .bar-medium { background: #eab308; }
        .bar-slow { background: #ef4444; }
        .bar-value { text-align: right; font-variant-numeric: tabular-nums; }
        .benchmark-item { border-top: 1px solid #334155; padding: 8px 0; }
        .benchmark-name { font-weight: bold; }
        .benchmark-metrics { display: flex; flex-wrap: wrap; gap: 12px; }
        .metric-label { color: #94a3b8; }
        .data-table { width: 100%; border-collapse: collapse; }
        .data-table th, .data-table td { padding: 6px 8px; border-bottom: 1px solid #334155; text-align: right; }
        .data-table th:first-child, .data-table td.name { text-align: left; }
        tr.regression td { color: #fca5a5; }
        tr.improvement td { color: #86efac; }
        .empty-state { text-align: center; padding: 48px; color: #94a3b8; }
"""

    def _get_js(self) -> str:
        return """
        document.querySelectorAll('.tab-btn').forEach(function (btn) {
            btn.addEventListener('click', function () {
                document.querySelectorAll('.tab-btn').forEach(function (b) { b.classList.remove('active'); });
                document.querySelectorAll('.tab-pane').forEach(function (p) { p.classList.remove('active'); });
                btn.classList.add('active');
                document.getElementById(btn.dataset.tab).classList.add('active');
            });
        });
"""
