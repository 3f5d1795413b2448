"""
Report Generator Port

Interface defining the contract for generating benchmark reports.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union

from benchlog.domain.models import ComparisonResult, Run


class IReportGenerator(ABC):
    """
    Outbound port for report generation.

    Defines the contract for rendering runs and comparisons regardless of
    output format (HTML, PDF, etc.).
    """

    @abstractmethod
    def generate_runs_report(self, runs: List[Run], threshold: float) -> str:
        """
        Render a report of one or more runs.

        Args:
            runs: Runs to display, first run is the primary one
            threshold: Regression threshold in percent

        Returns:
            The rendered document
        """
        pass

    @abstractmethod
    def generate_comparison_report(self, results: List[ComparisonResult], threshold: float) -> str:
        """
        Render a report of a comparison between two runs.

        Args:
            results: Comparison results in display order
            threshold: Regression threshold in percent

        Returns:
            The rendered document
        """
        pass

    @abstractmethod
    def save(self, document: str, output_path: Union[str, Path]) -> Path:
        """Write a rendered document and return its path."""
        pass
