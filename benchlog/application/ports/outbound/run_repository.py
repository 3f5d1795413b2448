"""
Run Repository Port

Interface defining the contract for persisting benchmark runs.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union

from benchlog.domain.exceptions import StorageError
from benchlog.domain.models import Run

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class IRunRepository(ABC):
    """
    Outbound port for run persistence.

    A location holds one ordered list of runs, read and written as a
    whole.
    """

    @abstractmethod
    def read_runs(self, path: PathLike) -> List[Run]:
        """
        Read every run stored at a location.

        Raises:
            StorageError: the location is missing, unreadable or malformed
        """
        pass

    @abstractmethod
    def write_runs(self, path: PathLike, runs: List[Run]) -> None:
        """Replace the runs stored at a location."""
        pass

    def append_run(self, path: PathLike, run: Run) -> None:
        """
        Add a run after the runs already stored at a location.

        Missing or unreadable locations start a fresh list.
        """
        try:
            runs = self.read_runs(path)
        except StorageError as e:
            logger.warning("Starting a new run list, existing runs not readable: %s", e)
            runs = []
        runs.append(run)
        self.write_runs(path, runs)

    @abstractmethod
    def loads(self, text: str) -> List[Run]:
        """
        Decode runs from their serialized text form.

        Raises:
            StorageError: the text is not a valid list of runs
        """
        pass

    @abstractmethod
    def dumps(self, runs: List[Run]) -> str:
        """Serialize runs to text."""
        pass
