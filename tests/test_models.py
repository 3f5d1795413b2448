"""
Unit Tests for benchlog.domain.models

Tests for:
    - run.py: Mem, Benchmark, Suite, Run persisted shape
    - comparison.py: ComparisonResult classification and JSON shape
"""

import dataclasses

import pytest

from benchlog.domain.models import Benchmark, ComparisonResult, Mem, Run, Suite


# =============================================================================
# Mem / Benchmark Tests
# =============================================================================

class TestMem:

    def test_zero_fields_are_omitted(self):
        assert Mem(bytes_per_op=128).to_dict() == {"bytesPerOp": 128}

    def test_all_zero_mem_is_empty_object(self):
        assert Mem().to_dict() == {}

    def test_from_dict_defaults_missing_fields(self):
        mem = Mem.from_dict({"allocsPerOp": 3})
        assert mem == Mem(bytes_per_op=0.0, allocs_per_op=3.0, mb_per_sec=0.0)


class TestBenchmark:

    def test_absent_mem_is_not_written(self):
        data = Benchmark(name="Foo", runs=10, ns_per_op=1.5).to_dict()
        assert data == {"name": "Foo", "runs": 10, "nsPerOp": 1.5}

    def test_present_zero_mem_survives_round_trip(self):
        """A measured-but-zero memory block stays distinct from 'not measured'."""
        bench = Benchmark(name="Foo", runs=1, mem=Mem())
        data = bench.to_dict()
        assert data["mem"] == {}

        restored = Benchmark.from_dict(data)
        assert restored.mem is not None
        assert restored.mem == Mem()

    def test_missing_mem_decodes_to_none(self):
        assert Benchmark.from_dict({"name": "Foo", "runs": 1}).mem is None

    def test_name_and_runs_always_written(self):
        assert Benchmark(name="Foo").to_dict() == {"name": "Foo", "runs": 0}

    def test_custom_metrics(self):
        bench = Benchmark(name="Foo", runs=1, custom={"widgets/op": 4.0})
        assert bench.to_dict()["custom"] == {"widgets/op": 4.0}
        assert Benchmark.from_dict(bench.to_dict()) == bench

    def test_ensure_mem_creates_once(self):
        bench = Benchmark(name="Foo")
        mem = bench.ensure_mem()
        mem.bytes_per_op = 64
        assert bench.ensure_mem() is mem
        assert bench.mem.bytes_per_op == 64


# =============================================================================
# Suite / Run Tests
# =============================================================================

class TestSuite:

    def test_required_keys_always_written(self):
        assert Suite().to_dict() == {"goos": "", "goarch": "", "pkg": "", "benchmarks": []}

    def test_optional_keys(self):
        suite = Suite(goos="linux", goarch="amd64", pkg="p", go="go1.22", short_path="./p")
        data = suite.to_dict()
        assert data["go"] == "go1.22"
        assert data["short_path"] == "./p"
        assert Suite.from_dict(data) == suite

    def test_get_benchmark_returns_first_match(self):
        first = Benchmark(name="Foo", runs=1)
        suite = Suite(benchmarks=[first, Benchmark(name="Foo", runs=2)])
        assert suite.get_benchmark("Foo") is first
        assert suite.get_benchmark("Bar") is None

    def test_label(self):
        assert Suite(goos="linux", goarch="arm64", pkg="p").label == "p (linux/arm64)"


class TestRun:

    def test_empty_metadata_is_omitted(self):
        assert Run().to_dict() == {"suites": []}

    def test_metadata_written(self, baseline_run):
        data = baseline_run.to_dict()
        assert data["version"] == "v1.0.0"
        assert data["date"] == 1700000000
        assert data["tags"] == ["ci"]
        assert len(data["suites"]) == 2

    def test_round_trip(self, baseline_run):
        assert Run.from_dict(baseline_run.to_dict()) == baseline_run

    def test_create_copies_inputs(self):
        suites = [Suite(pkg="p")]
        tags = ["a"]
        run = Run.create(suites, version="v1", date=5, tags=tags)
        suites.append(Suite(pkg="q"))
        tags.append("b")
        assert len(run.suites) == 1
        assert run.tags == ["a"]

    def test_create_without_tags(self):
        assert Run.create([]).tags == []

    def test_benchmark_count(self, baseline_run):
        assert baseline_run.benchmark_count == 3

    def test_has_tag(self, current_run):
        assert current_run.has_tag("nightly")
        assert not current_run.has_tag("release")


# =============================================================================
# ComparisonResult Tests
# =============================================================================

class TestComparisonResult:

    def test_regression_above_threshold(self):
        result = ComparisonResult(name="p/Foo", ns_per_op_pct=50.0)
        assert result.is_regression(10.0)
        assert not result.is_improvement(10.0)

    def test_threshold_is_strict(self):
        result = ComparisonResult(name="p/Foo", ns_per_op_pct=10.0)
        assert not result.is_regression(10.0)

    def test_allocs_count_as_regression(self):
        assert ComparisonResult(name="p/Foo", allocs_pct=25.0).is_regression(5.0)

    def test_allocs_do_not_count_as_improvement(self):
        result = ComparisonResult(name="p/Foo", allocs_pct=-50.0)
        assert not result.is_improvement(5.0)
        assert not result.is_regression(5.0)

    def test_bytes_improvement(self):
        assert ComparisonResult(name="p/Foo", bytes_pct=-20.0).is_improvement(5.0)

    def test_is_frozen(self):
        result = ComparisonResult(name="p/Foo")
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.ns_per_op_pct = 1.0

    def test_has_memory(self):
        assert ComparisonResult(name="p/Foo", new_bytes=8).has_memory
        assert not ComparisonResult(name="p/Foo").has_memory

    def test_to_dict_omits_zero_allocs(self):
        data = ComparisonResult(name="p/Foo", old_ns_per_op=100, new_ns_per_op=150, ns_per_op_pct=50).to_dict()
        assert data == {
            "name": "p/Foo",
            "oldNsPerOp": 100,
            "newNsPerOp": 150,
            "nsPerOpChange": 50,
            "oldBytesPerOp": 0.0,
            "newBytesPerOp": 0.0,
            "bytesPerOpChange": 0.0,
        }

    def test_to_dict_includes_nonzero_allocs_individually(self):
        data = ComparisonResult(name="p/Foo", old_allocs=2, new_allocs=2).to_dict()
        assert data["oldAllocsPerOp"] == 2
        assert data["newAllocsPerOp"] == 2
        assert "allocsPerOpChange" not in data
