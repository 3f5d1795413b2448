"""
Unit Tests for benchlog.adapters.outbound.export
"""

import json

import pytest

from benchlog.adapters.outbound.export import (
    format_comparison_json,
    format_comparison_table,
    format_delta,
)
from benchlog.adapters.outbound.export.comparison_exporter import TABLE_WIDTH, truncate
from benchlog.domain.models import ComparisonResult
from benchlog.domain.services.comparator import compare_runs


class TestFormatDelta:

    @pytest.mark.parametrize("pct,expected", [
        (0.0, "~0%"),
        (0.009, "~0%"),
        (-0.005, "~0%"),
        (20.0, "+20.0%"),
        (-12.345, "-12.3%"),
        (0.05, "+0.1%"),
    ])
    def test_format(self, pct, expected):
        assert format_delta(pct) == expected


class TestTable:

    def test_empty(self):
        assert format_comparison_table([], 5.0) == (
            "Benchmark Comparison Results:\n"
            + "=" * TABLE_WIDTH + "\n"
            + "\n"
            + "No benchmarks to compare.\n"
        )

    def test_layout(self, baseline_run, current_run):
        text = format_comparison_table(compare_runs(baseline_run, current_run), 5.0)
        lines = text.splitlines()

        assert lines[0] == "Benchmark Comparison Results:"
        assert lines[1] == "=" * 120
        assert lines[2] == ""
        assert lines[3].startswith("Benchmark" + " " * 41)
        assert "Time Δ%" in lines[3] and "Mem Δ%" in lines[3]
        assert lines[4] == "-" * 120
        assert lines[5].startswith("example.com/strings/Concat-8")
        assert "+20.0%" in lines[5]
        assert lines[-3] == "-" * 120
        assert lines[-2] == ""
        assert lines[-1] == (
            "Summary: 3 benchmarks compared, 1 REGRESSIONS detected (threshold: 5.0%), 1 improvements"
        )

    def test_row_columns(self):
        result = ComparisonResult(
            name="p/A", old_ns_per_op=100, new_ns_per_op=150, ns_per_op_pct=50.0,
            old_bytes=64, new_bytes=64,
        )
        row = format_comparison_table([result], 5.0).splitlines()[5]
        expected = (
            f"{'p/A':<50} {100:>12.0f} {150:>12.0f} {'+50.0%':>10} | "
            f"{64:>10.0f} {64:>10.0f} {'~0%':>10}"
        )
        assert row == expected

    def test_memory_columns_dash_without_data(self):
        row = format_comparison_table([ComparisonResult(name="p/A", old_ns_per_op=1)], 5.0).splitlines()[5]
        assert row.endswith(f"{'-':>10} {'-':>10} {'-':>10}")

    def test_summary_without_changes(self):
        text = format_comparison_table([ComparisonResult(name="p/A")], 5.0)
        assert text.splitlines()[-1] == "Summary: 1 benchmarks compared"

    def test_long_names_are_truncated(self):
        name = "example.com/" + "x" * 60
        row = format_comparison_table([ComparisonResult(name=name)], 5.0).splitlines()[5]
        assert row.startswith(name[:47] + "...")

    def test_truncate(self):
        assert truncate("short", 10) == "short"
        assert truncate("abcdefghijk", 8) == "abcde..."


class TestJson:

    def test_shape(self, baseline_run, current_run):
        data = json.loads(format_comparison_json(compare_runs(baseline_run, current_run)))
        assert len(data) == 3
        assert data[0]["name"] == "example.com/strings/Concat-8"
        assert data[0]["nsPerOpChange"] == pytest.approx(20.0)
        assert data[0]["oldAllocsPerOp"] == 8
        assert "allocsPerOpChange" not in data[0]
        assert "oldAllocsPerOp" not in data[2]

    def test_two_space_indent(self):
        text = format_comparison_json([ComparisonResult(name="p/A")])
        assert text.splitlines()[1] == "  {"

    def test_empty(self):
        assert json.loads(format_comparison_json([])) == []
