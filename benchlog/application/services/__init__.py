"""
Application Services Package
"""

from .benchmark_service import BenchmarkService
from .display_service import DisplayService, Colors, SortMode

__all__ = [
    "BenchmarkService",
    "DisplayService",
    "Colors",
    "SortMode",
]
