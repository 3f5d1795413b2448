"""
Outbound Ports

Contracts for run storage and report generation.
"""

from .run_repository import IRunRepository
from .report_generator import IReportGenerator

__all__ = [
    "IRunRepository",
    "IReportGenerator",
]
