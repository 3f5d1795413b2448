"""
Run Comparator

Computes per-benchmark deltas between two runs. Suites are matched by
position and must agree on their package; benchmarks inside a suite pair
are matched by name. Benchmarks that only exist in one of the runs produce
no result.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from ..exceptions import SuiteCountMismatchError, SuitePackageMismatchError
from ..models import Benchmark, ComparisonResult, Run, Suite

logger = logging.getLogger(__name__)


def percent_change(old: float, new: float) -> Tuple[float, float]:
    """Return ``(diff, pct)``; both stay zero unless ``old`` is positive."""
    if old > 0:
        diff = new - old
        return diff, (diff / old) * 100
    return 0.0, 0.0


def compare_benchmarks(pkg: str, before: Benchmark, after: Benchmark) -> ComparisonResult:
    ns_diff, ns_pct = percent_change(before.ns_per_op, after.ns_per_op)

    mem_fields: Dict[str, float] = {}
    if before.mem is not None and after.mem is not None:
        bytes_diff, bytes_pct = percent_change(before.mem.bytes_per_op, after.mem.bytes_per_op)
        allocs_diff, allocs_pct = percent_change(before.mem.allocs_per_op, after.mem.allocs_per_op)
        mem_fields = {
            "old_bytes": before.mem.bytes_per_op,
            "new_bytes": after.mem.bytes_per_op,
            "bytes_diff": bytes_diff,
            "bytes_pct": bytes_pct,
            "old_allocs": before.mem.allocs_per_op,
            "new_allocs": after.mem.allocs_per_op,
            "allocs_diff": allocs_diff,
            "allocs_pct": allocs_pct,
        }

    return ComparisonResult(
        name=f"{pkg}/{before.name}",
        old_runs=before.runs,
        new_runs=after.runs,
        old_ns_per_op=before.ns_per_op,
        new_ns_per_op=after.ns_per_op,
        ns_per_op_diff=ns_diff,
        ns_per_op_pct=ns_pct,
        **mem_fields,
    )


def compare_suites(before: Suite, after: Suite) -> List[ComparisonResult]:
    """Compare benchmarks of two suites by name, in ``before`` order."""
    after_by_name: Dict[str, Benchmark] = {}
    for bench in after.benchmarks:
        after_by_name.setdefault(bench.name, bench)

    results = []
    for bench in before.benchmarks:
        counterpart = after_by_name.get(bench.name)
        if counterpart is None:
            continue
        results.append(compare_benchmarks(before.pkg, bench, counterpart))
    return results


def compare_runs(before: Run, after: Run) -> List[ComparisonResult]:
    """
    Compare two runs suite by suite.

    Raises:
        SuiteCountMismatchError: the runs have a different number of suites
        SuitePackageMismatchError: suites at the same index differ in package
    """
    if len(before.suites) != len(after.suites):
        raise SuiteCountMismatchError(len(before.suites), len(after.suites))

    # Validate every pair before producing output
    for index, (old, new) in enumerate(zip(before.suites, after.suites)):
        if old.pkg != new.pkg:
            raise SuitePackageMismatchError(index, old.pkg, new.pkg)

    results: List[ComparisonResult] = []
    for old, new in zip(before.suites, after.suites):
        results.extend(compare_suites(old, new))

    logger.debug("Compared %d suites, %d matching benchmarks", len(before.suites), len(results))
    return results


def count_changes(results: Iterable[ComparisonResult], threshold: float) -> Tuple[int, int]:
    """Count ``(regressions, improvements)``; a regression is never also an improvement."""
    regressions = improvements = 0
    for result in results:
        if result.is_regression(threshold):
            regressions += 1
        elif result.is_improvement(threshold):
            improvements += 1
    return regressions, improvements
