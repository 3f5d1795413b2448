"""
Run Set Utilities

Merge, sort, deduplicate and filter collections of runs. All functions
return new lists and leave their inputs untouched.
"""

from typing import Iterable, List, Sequence, Set, Tuple

from ..models import Run


def merge_runs(*run_lists: Iterable[Run]) -> List[Run]:
    """Concatenate run lists in order, without deduplication."""
    merged: List[Run] = []
    for runs in run_lists:
        merged.extend(runs)
    return merged


def sort_by_date(runs: Iterable[Run]) -> List[Run]:
    """Oldest first; runs with equal dates keep their relative order."""
    return sorted(runs, key=lambda r: r.date)


def sort_by_date_descending(runs: Iterable[Run]) -> List[Run]:
    """Newest first; runs with equal dates keep their relative order."""
    # reverse=True keeps sorted() stable for equal keys
    return sorted(runs, key=lambda r: r.date, reverse=True)


def deduplicate_runs(runs: Iterable[Run]) -> List[Run]:
    """Keep the first run for every ``(version, date)`` pair."""
    seen: Set[Tuple[str, int]] = set()
    unique: List[Run] = []
    for run in runs:
        key = (run.version, run.date)
        if key in seen:
            continue
        seen.add(key)
        unique.append(run)
    return unique


def filter_by_tag(runs: Iterable[Run], tag: str) -> List[Run]:
    return [run for run in runs if run.has_tag(tag)]


def filter_by_tags(runs: Iterable[Run], tags: Sequence[str]) -> List[Run]:
    """Runs carrying every one of ``tags``."""
    wanted = set(tags)
    return [run for run in runs if wanted.issubset(run.tags)]
