"""
Shared fixtures: benchmark logs and runs.
"""

import pytest

from benchlog.domain.models import Benchmark, Mem, Run, Suite


SAMPLE_LOG = (
    "goos: linux\n"
    "goarch: amd64\n"
    "pkg: example.com/strings\n"
    "cpu: Intel(R) Core(TM) i7-9750H CPU @ 2.60GHz\n"
    "BenchmarkConcat-8   \t 1000000\t      1052 ns/op\t     512 B/op\t       8 allocs/op\n"
    "BenchmarkBuilder-8  \t 5000000\t       245.5 ns/op\t      64 B/op\t       1 allocs/op\n"
    "PASS\n"
    "ok  \texample.com/strings\t3.210s\n"
    "goos: linux\n"
    "goarch: amd64\n"
    "pkg: example.com/sort\n"
    "BenchmarkSortInts-8 \t  200000\t      6320 ns/op\n"
    "PASS\n"
    "ok  \texample.com/sort\t1.500s\n"
)


def make_benchmark(name, ns, bytes_per_op=None, allocs=None, runs=1000):
    mem = None
    if bytes_per_op is not None or allocs is not None:
        mem = Mem(bytes_per_op=bytes_per_op or 0.0, allocs_per_op=allocs or 0.0)
    return Benchmark(name=name, runs=runs, ns_per_op=ns, mem=mem)


def make_run(version, date, suites, tags=None):
    return Run(suites=suites, version=version, date=date, tags=list(tags or []))


@pytest.fixture
def sample_log():
    return SAMPLE_LOG


@pytest.fixture
def baseline_run():
    return make_run("v1.0.0", 1700000000, [
        Suite(goos="linux", goarch="amd64", pkg="example.com/strings", benchmarks=[
            make_benchmark("Concat-8", 1000.0, 512, 8),
            make_benchmark("Builder-8", 250.0, 64, 1),
        ]),
        Suite(goos="linux", goarch="amd64", pkg="example.com/sort", benchmarks=[
            make_benchmark("SortInts-8", 6000.0),
        ]),
    ], tags=["ci"])


@pytest.fixture
def current_run():
    """Concat regresses by 20%, Builder improves by 20%, SortInts moves 1%."""
    return make_run("v1.1.0", 1700086400, [
        Suite(goos="linux", goarch="amd64", pkg="example.com/strings", benchmarks=[
            make_benchmark("Concat-8", 1200.0, 512, 8),
            make_benchmark("Builder-8", 200.0, 64, 1),
        ]),
        Suite(goos="linux", goarch="amd64", pkg="example.com/sort", benchmarks=[
            make_benchmark("SortInts-8", 6060.0),
        ]),
    ], tags=["ci", "nightly"])
