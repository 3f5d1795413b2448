"""
Comparison Domain Model

Read-only projection pairing a "before" and "after" benchmark by name.
Holds copies of the numeric values, never references into the runs.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ComparisonResult:
    """Deltas between two measurements of the same benchmark."""
    name: str
    old_runs: int = 0
    new_runs: int = 0
    old_ns_per_op: float = 0.0
    new_ns_per_op: float = 0.0
    ns_per_op_diff: float = 0.0
    ns_per_op_pct: float = 0.0
    old_bytes: float = 0.0
    new_bytes: float = 0.0
    bytes_diff: float = 0.0
    bytes_pct: float = 0.0
    old_allocs: float = 0.0
    new_allocs: float = 0.0
    allocs_diff: float = 0.0
    allocs_pct: float = 0.0

    def is_regression(self, threshold: float) -> bool:
        """Time, bytes or allocs grew by more than ``threshold`` percent."""
        return (
            self.ns_per_op_pct > threshold
            or self.bytes_pct > threshold
            or self.allocs_pct > threshold
        )

    def is_improvement(self, threshold: float) -> bool:
        """Time or bytes shrank by more than ``threshold`` percent.

        Allocations are not considered, unlike in is_regression.
        """
        return self.ns_per_op_pct < -threshold or self.bytes_pct < -threshold

    @property
    def has_memory(self) -> bool:
        return self.old_bytes > 0 or self.new_bytes > 0

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "oldNsPerOp": self.old_ns_per_op,
            "newNsPerOp": self.new_ns_per_op,
            "nsPerOpChange": self.ns_per_op_pct,
            "oldBytesPerOp": self.old_bytes,
            "newBytesPerOp": self.new_bytes,
            "bytesPerOpChange": self.bytes_pct,
        }
        if self.old_allocs:
            data["oldAllocsPerOp"] = self.old_allocs
        if self.new_allocs:
            data["newAllocsPerOp"] = self.new_allocs
        if self.allocs_pct:
            data["allocsPerOpChange"] = self.allocs_pct
        return data
