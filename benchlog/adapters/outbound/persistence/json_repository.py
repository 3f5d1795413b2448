"""
JSON Run Repository Adapter

Implements IRunRepository with one JSON array of runs per file, read and
written as a whole.
"""

import io
import json
import logging
from pathlib import Path
from typing import IO, List

from benchlog.application.ports.outbound.run_repository import IRunRepository, PathLike
from benchlog.domain.exceptions import StorageError
from benchlog.domain.models import Run

logger = logging.getLogger(__name__)


def encode_runs(runs: List[Run], stream: IO[str]) -> None:
    """Write runs as an indented JSON array followed by a newline."""
    json.dump([run.to_dict() for run in runs], stream, indent=2)
    stream.write("\n")


def decode_runs(stream: IO[str]) -> List[Run]:
    """
    Read a JSON array of runs.

    Raises:
        StorageError: the content is not UTF-8 JSON, not an array of objects,
            or holds fields of the wrong type
    """
    try:
        data = json.load(stream)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise StorageError(f"error decoding JSON: {e}") from e

    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise StorageError("error decoding JSON: expected an array of run objects")
    try:
        return [Run.from_dict(item) for item in data]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise StorageError(f"error decoding JSON: invalid run data: {e}") from e


class JsonRunRepository(IRunRepository):
    """
    JSON file adapter implementing IRunRepository.
    """

    def read_runs(self, path: PathLike) -> List[Run]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                runs = decode_runs(f)
        except OSError as e:
            raise StorageError(f"error opening file: {e.strerror or e}", path=str(path)) from e
        except StorageError as e:
            raise StorageError(str(e), path=str(path)) from e

        logger.debug("Read %d runs from %s", len(runs), path)
        return runs

    def write_runs(self, path: PathLike, runs: List[Run]) -> None:
        output = Path(path)
        try:
            if output.parent != Path("."):
                output.parent.mkdir(parents=True, exist_ok=True)
            with open(output, "w", encoding="utf-8") as f:
                encode_runs(runs, f)
        except OSError as e:
            raise StorageError(f"error creating file: {e.strerror or e}", path=str(path)) from e

        logger.debug("Wrote %d runs to %s", len(runs), path)

    def loads(self, text: str) -> List[Run]:
        return decode_runs(io.StringIO(text))

    def dumps(self, runs: List[Run]) -> str:
        buf = io.StringIO()
        encode_runs(runs, buf)
        return buf.getvalue()
