"""
Application Ports Package

Interfaces the application services depend on.
"""

from .outbound import IRunRepository, IReportGenerator

__all__ = [
    "IRunRepository",
    "IReportGenerator",
]
