"""
Run Domain Models

Record types for one benchmarking session: a Run owns its Suites, a Suite
owns its Benchmarks. The dictionaries produced by ``to_dict`` are the
persisted JSON shape; zero or empty optional fields are left out.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Mem:
    """Memory statistics of a benchmark. Zero means "not measured"."""
    bytes_per_op: float = 0.0
    allocs_per_op: float = 0.0
    mb_per_sec: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.bytes_per_op:
            data["bytesPerOp"] = self.bytes_per_op
        if self.allocs_per_op:
            data["allocsPerOp"] = self.allocs_per_op
        if self.mb_per_sec:
            data["mbPerSec"] = self.mb_per_sec
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Mem":
        return cls(
            bytes_per_op=float(data.get("bytesPerOp") or 0.0),
            allocs_per_op=float(data.get("allocsPerOp") or 0.0),
            mb_per_sec=float(data.get("mbPerSec") or 0.0),
        )


@dataclass
class Benchmark:
    """One named benchmark result."""
    name: str
    runs: int = 0
    ns_per_op: float = 0.0
    mem: Optional[Mem] = None
    custom: Dict[str, float] = field(default_factory=dict)

    def ensure_mem(self) -> Mem:
        """Return the memory block, creating it on first use."""
        if self.mem is None:
            self.mem = Mem()
        return self.mem

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "runs": self.runs}
        if self.ns_per_op:
            data["nsPerOp"] = self.ns_per_op
        if self.mem is not None:
            data["mem"] = self.mem.to_dict()
        if self.custom:
            data["custom"] = dict(self.custom)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Benchmark":
        mem = data.get("mem")
        return cls(
            name=data.get("name", ""),
            runs=int(data.get("runs") or 0),
            ns_per_op=float(data.get("nsPerOp") or 0.0),
            mem=Mem.from_dict(mem) if mem is not None else None,
            custom={k: float(v) for k, v in (data.get("custom") or {}).items()},
        )


@dataclass
class Suite:
    """Benchmarks of one package under one OS/architecture combination."""
    goos: str = ""
    goarch: str = ""
    pkg: str = ""
    go: str = ""
    short_path: str = ""
    benchmarks: List[Benchmark] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{self.pkg} ({self.goos}/{self.goarch})"

    def get_benchmark(self, name: str) -> Optional[Benchmark]:
        """First benchmark with the given name, if any."""
        for bench in self.benchmarks:
            if bench.name == name:
                return bench
        return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.go:
            data["go"] = self.go
        data["goos"] = self.goos
        data["goarch"] = self.goarch
        if self.short_path:
            data["short_path"] = self.short_path
        data["pkg"] = self.pkg
        data["benchmarks"] = [b.to_dict() for b in self.benchmarks]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Suite":
        return cls(
            go=data.get("go") or "",
            goos=data.get("goos") or "",
            goarch=data.get("goarch") or "",
            short_path=data.get("short_path") or "",
            pkg=data.get("pkg") or "",
            benchmarks=[Benchmark.from_dict(b) for b in data.get("benchmarks") or []],
        )


@dataclass
class Run:
    """A tagged, timestamped collection of suites from one session."""
    suites: List[Suite] = field(default_factory=list)
    version: str = ""
    date: int = 0
    tags: List[str] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        suites: List[Suite],
        version: str = "",
        date: int = 0,
        tags: Optional[List[str]] = None,
    ) -> "Run":
        """Wrap parsed suites with run metadata."""
        return cls(suites=list(suites), version=version, date=date, tags=list(tags or []))

    @property
    def benchmark_count(self) -> int:
        return sum(len(s.benchmarks) for s in self.suites)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.version:
            data["version"] = self.version
        if self.date:
            data["date"] = self.date
        if self.tags:
            data["tags"] = list(self.tags)
        data["suites"] = [s.to_dict() for s in self.suites]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Run":
        return cls(
            version=data.get("version") or "",
            date=int(data.get("date") or 0),
            tags=list(data.get("tags") or []),
            suites=[Suite.from_dict(s) for s in data.get("suites") or []],
        )
