"""
In-Memory Run Repository Adapter

Implements IRunRepository using in-memory storage for testing.
"""

import copy
import io
from pathlib import Path
from typing import Dict, List

from benchlog.application.ports.outbound.run_repository import IRunRepository, PathLike
from benchlog.domain.exceptions import StorageError
from benchlog.domain.models import Run
from .json_repository import decode_runs, encode_runs


class InMemoryRunRepository(IRunRepository):
    """
    In-memory adapter implementing IRunRepository.

    Useful for testing without touching the filesystem. Text encoding
    uses the JSON format of JsonRunRepository. Stored runs are
    deep-copied in both directions.
    """

    def __init__(self, files: Dict[str, List[Run]] = None) -> None:
        self.files: Dict[str, List[Run]] = {}
        for path, runs in (files or {}).items():
            self.write_runs(path, runs)

    def read_runs(self, path: PathLike) -> List[Run]:
        key = str(Path(path))
        if key not in self.files:
            raise StorageError("error opening file: no such file", path=key)
        return copy.deepcopy(self.files[key])

    def write_runs(self, path: PathLike, runs: List[Run]) -> None:
        self.files[str(Path(path))] = copy.deepcopy(list(runs))

    def loads(self, text: str) -> List[Run]:
        return decode_runs(io.StringIO(text))

    def dumps(self, runs: List[Run]) -> str:
        buf = io.StringIO()
        encode_runs(runs, buf)
        return buf.getvalue()
