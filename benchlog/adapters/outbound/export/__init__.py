"""
Export Adapters
"""

from .comparison_exporter import (
    format_comparison_table,
    format_comparison_json,
    format_delta,
)

__all__ = [
    "format_comparison_table",
    "format_comparison_json",
    "format_delta",
]
