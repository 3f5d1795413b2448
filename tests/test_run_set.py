"""
Unit Tests for benchlog.domain.services.run_set
"""

from benchlog.domain.models import Run
from benchlog.domain.services.run_set import (
    deduplicate_runs,
    filter_by_tag,
    filter_by_tags,
    merge_runs,
    sort_by_date,
    sort_by_date_descending,
)


def run(version, date, tags=None):
    return Run(version=version, date=date, tags=list(tags or []))


class TestMerge:

    def test_concatenates_in_order(self):
        a = [run("a", 3), run("b", 1)]
        b = [run("c", 2)]
        assert [r.version for r in merge_runs(a, b)] == ["a", "b", "c"]

    def test_keeps_duplicates(self):
        r = run("a", 1)
        assert len(merge_runs([r], [r])) == 2

    def test_no_inputs(self):
        assert merge_runs() == []


class TestSort:

    def test_ascending(self):
        runs = [run("c", 3), run("a", 1), run("b", 2)]
        assert [r.version for r in sort_by_date(runs)] == ["a", "b", "c"]

    def test_ascending_is_stable(self):
        runs = [run("x", 2), run("first", 1), run("second", 1), run("third", 1)]
        assert [r.version for r in sort_by_date(runs)] == ["first", "second", "third", "x"]

    def test_descending_is_stable(self):
        runs = [run("first", 1), run("second", 1), run("new", 5)]
        assert [r.version for r in sort_by_date_descending(runs)] == ["new", "first", "second"]

    def test_input_untouched(self):
        runs = [run("b", 2), run("a", 1)]
        sort_by_date(runs)
        assert [r.version for r in runs] == ["b", "a"]


class TestDeduplicate:

    def test_first_occurrence_kept(self):
        first = run("v1", 100, tags=["first"])
        runs = [first, run("v1", 100, tags=["second"]), run("v2", 200)]

        unique = deduplicate_runs(runs)

        assert [(r.version, r.date) for r in unique] == [("v1", 100), ("v2", 200)]
        assert unique[0] is first

    def test_same_version_different_date_is_kept(self):
        assert len(deduplicate_runs([run("v1", 1), run("v1", 2)])) == 2


class TestFilter:

    def test_filter_by_tag_returns_every_match(self):
        runs = [run("a", 1, ["ci"]), run("b", 2), run("c", 3, ["ci", "nightly"])]
        assert [r.version for r in filter_by_tag(runs, "ci")] == ["a", "c"]

    def test_filter_by_tags_requires_all(self):
        runs = [run("a", 1, ["ci"]), run("b", 2, ["nightly", "ci"])]
        assert [r.version for r in filter_by_tags(runs, ["ci", "nightly"])] == ["b"]

    def test_untagged_run_never_matches(self):
        assert filter_by_tags([run("a", 1)], ["ci"]) == []
        assert filter_by_tag([run("a", 1)], "ci") == []
