"""
Comparison Exporters

Plain-text table and JSON renderings of comparison results.
"""

import json
from typing import List

from benchlog.domain.models import ComparisonResult
from benchlog.domain.services.comparator import count_changes

TABLE_WIDTH = 120
NAME_WIDTH = 50


def format_delta(pct: float) -> str:
    """Signed percentage with one decimal, ``~0%`` for negligible changes."""
    if abs(pct) < 0.01:
        return "~0%"
    sign = "+" if pct >= 0 else ""
    return f"{sign}{pct:.1f}%"


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def format_comparison_table(results: List[ComparisonResult], threshold: float) -> str:
    """Fixed-width table of time and memory changes with a summary line."""
    lines = [
        "Benchmark Comparison Results:",
        "=" * TABLE_WIDTH,
        "",
    ]

    if not results:
        lines.append("No benchmarks to compare.")
        return "\n".join(lines) + "\n"

    lines.append(
        f"{'Benchmark':<{NAME_WIDTH}} {'Time Old':>12} {'Time New':>12} {'Time Δ%':>10} | "
        f"{'Mem Old':>10} {'Mem New':>10} {'Mem Δ%':>10}"
    )
    lines.append("-" * TABLE_WIDTH)

    for r in results:
        row = (
            f"{truncate(r.name, NAME_WIDTH):<{NAME_WIDTH}} "
            f"{r.old_ns_per_op:>12.0f} {r.new_ns_per_op:>12.0f} "
            f"{format_delta(r.ns_per_op_pct):>10} | "
        )
        if r.has_memory:
            row += f"{r.old_bytes:>10.0f} {r.new_bytes:>10.0f} {format_delta(r.bytes_pct):>10}"
        else:
            row += f"{'-':>10} {'-':>10} {'-':>10}"
        lines.append(row)

    lines.append("-" * TABLE_WIDTH)

    regressions, improvements = count_changes(results, threshold)
    summary = f"Summary: {len(results)} benchmarks compared"
    if regressions:
        summary += f", {regressions} REGRESSIONS detected (threshold: {threshold:.1f}%)"
    if improvements:
        summary += f", {improvements} improvements"
    lines.append("")
    lines.append(summary)

    return "\n".join(lines) + "\n"


def format_comparison_json(results: List[ComparisonResult]) -> str:
    """JSON array with one camelCase object per result."""
    return json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False)
