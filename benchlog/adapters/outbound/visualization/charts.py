"""
Report Charts

Generates static charts (Base64 encoded PNGs) for the HTML report.
"""

import io
import base64
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

from benchlog.domain.models import ComparisonResult, Run

# Consistent Color Scheme
COLORS = {
    "REGRESSION": "#ef4444",  # Red
    "IMPROVEMENT": "#22c55e",  # Green
    "NEUTRAL": "#64748b",      # Slate
    "OLD": "#94a3b8",          # Light slate
    "NEW": "#3b82f6",          # Blue
}

MAX_LABEL_LEN = 40


@dataclass
class ChartOutput:
    title: str
    png_base64: str
    description: str = ""


def _short(label: str) -> str:
    return label if len(label) <= MAX_LABEL_LEN else "..." + label[-(MAX_LABEL_LEN - 3):]


def change_color(pct: float, threshold: float) -> str:
    if pct > threshold:
        return COLORS["REGRESSION"]
    if pct < -threshold:
        return COLORS["IMPROVEMENT"]
    return COLORS["NEUTRAL"]


class ChartGenerator:
    def __init__(self):
        self.logger = logging.getLogger(__name__)
        plt.style.use('ggplot')
        plt.rc('font', size=9)
        plt.rc('axes', titlesize=11)
        plt.rc('axes', labelsize=9)

    def _fig_to_base64(self, fig) -> str:
        """Convert matplotlib figure to base64 string."""
        buf = io.BytesIO()
        fig.savefig(buf, format='png', bbox_inches='tight', dpi=100)
        buf.seek(0)
        img_str = base64.b64encode(buf.read()).decode('utf-8')
        plt.close(fig)
        return img_str

    def _change_chart(self, labels: List[str], values: List[float], threshold: float,
                      title: str, description: str) -> ChartOutput:
        height = max(2.5, 0.35 * len(labels) + 1)
        fig, ax = plt.subplots(figsize=(8, height))
        y = np.arange(len(labels))
        ax.barh(y, values, color=[change_color(v, threshold) for v in values])
        ax.set_yticks(y)
        ax.set_yticklabels([_short(l) for l in labels])
        ax.invert_yaxis()
        ax.axvline(0, color="#333", linewidth=0.8)
        for limit in (threshold, -threshold):
            ax.axvline(limit, color="#999", linestyle="--", linewidth=0.8)
        ax.set_xlabel("Change (%)")
        ax.set_title(title)
        return ChartOutput(title, self._fig_to_base64(fig), description)

    def plot_time_changes(self, results: List[ComparisonResult], threshold: float) -> Optional[ChartOutput]:
        """Horizontal bars of the ns/op change per benchmark."""
        if not results:
            return None
        return self._change_chart(
            [r.name for r in results],
            [r.ns_per_op_pct for r in results],
            threshold,
            "Execution Time Changes",
            "Percentage change of ns/op, dashed lines mark the regression threshold.",
        )

    def plot_memory_changes(self, results: List[ComparisonResult], threshold: float) -> Optional[ChartOutput]:
        """Horizontal bars of the B/op change for benchmarks with memory data."""
        with_mem = [r for r in results if r.has_memory]
        if not with_mem:
            return None
        return self._change_chart(
            [r.name for r in with_mem],
            [r.bytes_pct for r in with_mem],
            threshold,
            "Memory Usage Changes",
            "Percentage change of B/op for benchmarks that report memory.",
        )

    def plot_time_comparison(self, results: List[ComparisonResult]) -> Optional[ChartOutput]:
        """Grouped bar chart of old vs new ns/op."""
        if not results:
            return None

        names = [_short(r.name) for r in results]
        x = np.arange(len(names))
        width = 0.4

        fig, ax = plt.subplots(figsize=(max(6, 0.6 * len(names) + 2), 4.5))
        ax.bar(x - width / 2, [r.old_ns_per_op for r in results], width, label='Before', color=COLORS["OLD"])
        ax.bar(x + width / 2, [r.new_ns_per_op for r in results], width, label='After', color=COLORS["NEW"])

        ax.set_ylabel('ns/op')
        ax.set_title("Execution Time: Before vs After")
        ax.set_xticks(x)
        ax.set_xticklabels(names, rotation=30, ha='right')
        ax.legend()

        return ChartOutput("Execution Time: Before vs After", self._fig_to_base64(fig),
                           "Absolute ns/op of both runs side by side.")

    def plot_run_history(self, runs: List[Run], max_series: int = 10) -> Optional[ChartOutput]:
        """Line chart of ns/op per benchmark across runs, oldest first."""
        if len(runs) < 2:
            return None

        ordered = sorted(runs, key=lambda r: r.date)
        series: Dict[str, List[float]] = {}
        for i, run in enumerate(ordered):
            for suite in run.suites:
                for bench in suite.benchmarks:
                    key = f"{suite.pkg}/{bench.name}"
                    points = series.setdefault(key, [np.nan] * len(ordered))
                    if bench.ns_per_op > 0 and np.isnan(points[i]):
                        points[i] = bench.ns_per_op

        if not series:
            return None
        if len(series) > max_series:
            self.logger.debug("History chart limited to %d of %d benchmarks", max_series, len(series))

        labels = [r.version or f"Run {i + 1}" for i, r in enumerate(ordered)]
        x = np.arange(len(ordered))
        fig, ax = plt.subplots(figsize=(8, 4.5))
        for name, points in list(series.items())[:max_series]:
            ax.plot(x, points, marker='o', label=_short(name))

        ax.set_xticks(x)
        ax.set_xticklabels(labels, rotation=30, ha='right')

        ax.set_ylabel('ns/op')
        ax.set_title("Execution Time History")
        ax.legend(fontsize=7, loc='best')
        ax.grid(True, linestyle='--', alpha=0.5)

        return ChartOutput("Execution Time History", self._fig_to_base64(fig),
                           "ns/op of each benchmark across stored runs.")
