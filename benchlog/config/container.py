"""
Dependency Injection Container

Wires ports to adapters and manages service lifecycle.
"""

from dataclasses import dataclass, field
from typing import Optional, IO

from .settings import Settings

# Import ports
from benchlog.application.ports.outbound.run_repository import IRunRepository

# Import adapters
from benchlog.adapters.outbound.persistence.json_repository import JsonRunRepository
from benchlog.adapters.outbound.visualization.html_report import HtmlReportGenerator

# Import domain and application services
from benchlog.domain.services.parser import BenchmarkParser
from benchlog.application.services.benchmark_service import BenchmarkService
from benchlog.application.services.display_service import DisplayService


@dataclass
class Container:
    """
    Dependency injection container.

    Wires hexagonal architecture components:
    - Ports define contracts
    - Adapters implement ports
    - Services orchestrate domain logic
    """
    settings: Settings = field(default_factory=Settings)

    _repository: Optional[IRunRepository] = field(default=None, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Container":
        """Create container from settings."""
        return cls(settings=settings)

    def run_repository(self) -> IRunRepository:
        """Get the run repository singleton."""
        if self._repository is None:
            self._repository = JsonRunRepository()
        return self._repository

    def parser(self) -> BenchmarkParser:
        return BenchmarkParser(max_line_length=self.settings.max_line_length)

    def benchmark_service(self) -> BenchmarkService:
        """Get benchmark service wired to the repository and parser."""
        return BenchmarkService(repository=self.run_repository(), parser=self.parser())

    def display_service(self, out: Optional[IO[str]] = None) -> DisplayService:
        """Get terminal display service."""
        return DisplayService(out=out, width=self.settings.terminal_width)

    def report_generator(self) -> HtmlReportGenerator:
        """Get HTML report generator."""
        return HtmlReportGenerator()
