"""
Unit Tests for benchlog.application.services.display_service
"""

import io

import pytest

from benchlog.application.services.display_service import (
    Colors,
    DisplayService,
    SortMode,
    format_percent,
    format_value,
    sort_bars,
)
from benchlog.domain.models import Run
from benchlog.domain.services.comparator import compare_runs


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def display(out):
    return DisplayService(out=out, width=80, color=False)


class TestFormatting:

    @pytest.mark.parametrize("value,expected", [
        (2_500_000, "2.5M"),
        (1052, "1.1K"),
        (245.5, "246"),
        (12.34, "12.3"),
        (1.234, "1.23"),
    ])
    def test_format_value(self, value, expected):
        assert format_value(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (20.0, "+20.0%"),
        (-150.0, "-150%"),
        (1.5, "+1.50%"),
        (0.0, "0.00%"),
    ])
    def test_format_percent(self, value, expected):
        assert format_percent(value) == expected


class TestColors:

    @pytest.mark.parametrize("value,color", [
        (100, Colors.RED),
        (91, Colors.RED),
        (90, Colors.YELLOW),
        (71, Colors.YELLOW),
        (70, Colors.GREEN),
        (10, Colors.GREEN),
    ])
    def test_load_color(self, value, color):
        assert DisplayService.load_color(value, 100) == color

    def test_change_color(self):
        assert DisplayService.change_color(6, 5) == Colors.RED
        assert DisplayService.change_color(-6, 5) == Colors.GREEN
        assert DisplayService.change_color(5, 5) == Colors.GRAY

    def test_colored_can_be_disabled(self, display):
        assert display.colored("x", Colors.RED) == "x"
        assert DisplayService().colored("x", Colors.RED) == f"{Colors.RED}x{Colors.RESET}"


class TestSortBars:

    BARS = [("b", 2.0), ("a", 3.0), ("c", 1.0)]

    @pytest.mark.parametrize("mode,expected", [
        (SortMode.NONE, ["b", "a", "c"]),
        (SortMode.NAME, ["a", "b", "c"]),
        (SortMode.NAME_DESC, ["c", "b", "a"]),
        (SortMode.VALUE, ["c", "b", "a"]),
        (SortMode.VALUE_DESC, ["a", "b", "c"]),
        ("value", ["c", "b", "a"]),
    ])
    def test_modes(self, mode, expected):
        assert [label for label, _ in sort_bars(self.BARS, mode)] == expected


class TestBarChart:

    def test_largest_bar_fills_width(self, display):
        lines = display.render_bar_chart([("a", 50.0), ("b", 100.0)], lambda v: Colors.GREEN)
        bar_max = 80 - 30 - 12 - 4
        assert lines[1].count("█") == bar_max
        assert lines[0].count("█") == bar_max // 2

    def test_tiny_values_get_one_block(self, display):
        lines = display.render_bar_chart([("a", 0.001), ("b", 100.0)], lambda v: Colors.GREEN)
        assert lines[0].count("█") == 1

    def test_zero_value_has_no_block(self, display):
        lines = display.render_bar_chart([("a", 0.0)], lambda v: Colors.GREEN)
        assert "█" not in lines[0]

    def test_empty(self, display):
        assert display.render_bar_chart([], lambda v: Colors.GREEN) == []


class TestDisplayRuns:

    def test_run_overview(self, display, out, baseline_run, current_run):
        display.display_runs([current_run, baseline_run], SortMode.NAME)
        text = out.getvalue()

        assert "Benchmark Results" in text
        assert "v1.1.0" in text
        assert "example.com/strings (linux/amd64)" in text
        assert "Execution Time (ns/op)" in text
        assert "Memory Usage (B/op)" in text
        assert "512 B/op" in text
        assert "All Benchmark Runs" in text
        assert text.index("Builder-8") < text.index("Concat-8")

    def test_no_runs(self, display, out):
        display.display_runs([])
        assert "No benchmark data available" in out.getvalue()

    def test_suite_without_metrics(self, display, out):
        run = Run.from_dict({"suites": [{"goos": "linux", "goarch": "amd64", "pkg": "p",
                                          "benchmarks": [{"name": "A", "runs": 1}]}]})
        display.display_suite_charts(run.suites[0])
        assert "No timing or memory data" in out.getvalue()

    def test_custom_metrics_are_listed(self, display, baseline_run):
        bench = baseline_run.suites[0].benchmarks[0]
        bench.custom["hits"] = 7.0
        assert "7 hits" in display.format_benchmark(bench)


class TestDisplayComparison:

    def test_comparison(self, display, out, baseline_run, current_run):
        display.display_comparison(compare_runs(baseline_run, current_run), 5.0)
        text = out.getvalue()

        assert "Benchmark Comparison" in text
        assert "Regressions:" in text
        assert "Time Changes" in text
        assert "+20.0%" in text
        assert "-20.0%" in text
        assert "example.com/sort/SortInts-8" in text

    def test_summary_counts(self, display, out, baseline_run, current_run):
        display.display_comparison_summary(compare_runs(baseline_run, current_run), 5.0)
        lines = out.getvalue().splitlines()
        assert any(line.split() == ["Regressions:", "1"] for line in lines)
        assert any(line.split() == ["Improvements:", "1"] for line in lines)

    def test_empty(self, display, out):
        display.display_comparison([], 5.0)
        assert "No comparison data available" in out.getvalue()
