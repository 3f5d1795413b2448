"""
Persistence Adapters
"""

from .json_repository import JsonRunRepository, encode_runs, decode_runs
from .memory_repository import InMemoryRunRepository

__all__ = [
    "JsonRunRepository",
    "InMemoryRunRepository",
    "encode_runs",
    "decode_runs",
]
