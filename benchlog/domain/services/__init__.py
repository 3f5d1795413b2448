"""
Domain Services Package

Parsing, comparison and run-set operations over the domain models.
"""

from .parser import BenchmarkParser, ParserState, LineKind, classify_line
from .comparator import compare_runs, compare_suites, count_changes
from .run_set import (
    merge_runs,
    sort_by_date,
    sort_by_date_descending,
    deduplicate_runs,
    filter_by_tag,
    filter_by_tags,
)

__all__ = [
    "BenchmarkParser",
    "ParserState",
    "LineKind",
    "classify_line",
    "compare_runs",
    "compare_suites",
    "count_changes",
    "merge_runs",
    "sort_by_date",
    "sort_by_date_descending",
    "deduplicate_runs",
    "filter_by_tag",
    "filter_by_tags",
]
