"""
Domain Models Package

Pure domain entities with no infrastructure dependencies.
"""

from .run import Run, Suite, Benchmark, Mem
from .comparison import ComparisonResult

__all__ = [
    "Run",
    "Suite",
    "Benchmark",
    "Mem",
    "ComparisonResult",
]
