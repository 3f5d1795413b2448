"""
Benchmark Service

Application service composing parsing, storage, comparison and run-set
operations for the CLI:

    parse    → log stream → Run → repository (write or append)
    compare  → two stored files → first run of each → ComparisonResults
    merge    → many stored files → one date-sorted run list
    view     → stored runs, or a raw log piped on stdin
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import IO, List, Optional, Sequence, Union

from benchlog.application.ports import IRunRepository
from benchlog.domain.exceptions import EmptyInputError, StorageError
from benchlog.domain.models import ComparisonResult, Run
from benchlog.domain.services import (
    BenchmarkParser,
    compare_runs,
    deduplicate_runs,
    filter_by_tags,
    merge_runs,
    sort_by_date,
    sort_by_date_descending,
)

PathLike = Union[str, Path]


class BenchmarkService:
    """
    Orchestrates benchmark log handling.

    Outbound port: IRunRepository (injected)
    """

    def __init__(self, repository: IRunRepository, parser: Optional[BenchmarkParser] = None) -> None:
        self._repo = repository
        self._parser = parser or BenchmarkParser()
        self._logger = logging.getLogger(__name__)

    @property
    def repository(self) -> IRunRepository:
        return self._repo

    # ------------------------------------------------------------------
    # Parse
    # ------------------------------------------------------------------

    def parse_run(
        self,
        stream: IO[str],
        version: str = "",
        date: Optional[int] = None,
        tags: Optional[Sequence[str]] = None,
        go_version: Optional[str] = None,
    ) -> Run:
        """
        Parse a benchmark log into a single run.

        Args:
            stream: text stream with ``go test -bench`` output
            version: version label of the run
            date: Unix timestamp, the current time when omitted
            tags: free-form labels
            go_version: toolchain version recorded on every suite

        Raises:
            ParseError: the log contains a malformed line
            EmptyInputError: the log contains no suite
        """
        suites = self._parser.parse(stream, go_version=go_version)
        if not suites:
            raise EmptyInputError("no benchmark suites found")

        if date is None:
            date = int(time.time())
        run = Run.create(suites, version=version, date=date, tags=list(tags or []))
        self._logger.info("Parsed run %r with %d suites", version, len(suites))
        return run

    def save_run(self, path: PathLike, run: Run, append: bool = False) -> None:
        """Write a run to ``path``, after the existing runs when appending."""
        if append:
            self._repo.append_run(path, run)
        else:
            self._repo.write_runs(path, [run])

    def read_runs(self, path: PathLike) -> List[Run]:
        """Read a stored file, rejecting files without runs."""
        runs = self._repo.read_runs(path)
        if not runs:
            raise EmptyInputError(f"no benchmark runs found in {path}")
        return runs

    def encode(self, runs: List[Run]) -> str:
        return self._repo.dumps(runs)

    # ------------------------------------------------------------------
    # Compare
    # ------------------------------------------------------------------

    def compare_files(self, before_path: PathLike, after_path: PathLike) -> List[ComparisonResult]:
        """
        Compare the first run stored in each of two files.

        Raises:
            StorageError: either file cannot be read
            EmptyInputError: either file holds no runs
            SuiteMismatchError: the runs do not share a suite layout
        """
        before = self._repo.read_runs(before_path)
        after = self._repo.read_runs(after_path)

        if not before or not after:
            raise EmptyInputError("no benchmark runs found in one or both files")

        results = compare_runs(before[0], after[0])
        self._logger.info("Compared %s against %s: %d results", after_path, before_path, len(results))
        return results

    # ------------------------------------------------------------------
    # Merge
    # ------------------------------------------------------------------

    def merge_files(
        self,
        paths: Sequence[PathLike],
        unique: bool = False,
        descending: bool = False,
        tags: Optional[Sequence[str]] = None,
    ) -> List[Run]:
        """
        Concatenate the runs of several files and sort them by date.

        Args:
            paths: files to read, in order; the first unreadable one stops the merge
            unique: drop later runs repeating a ``(version, date)`` pair
            descending: newest first instead of oldest first
            tags: keep only runs carrying every one of these tags
        """
        run_lists = []
        for path in paths:
            runs = self._repo.read_runs(path)
            self._logger.debug("Loaded %d runs from %s", len(runs), path)
            run_lists.append(runs)

        merged = merge_runs(*run_lists)
        if not merged:
            raise EmptyInputError("no runs found in input files")

        if unique:
            merged = deduplicate_runs(merged)
        if tags:
            merged = filter_by_tags(merged, tags)
        return sort_by_date_descending(merged) if descending else sort_by_date(merged)

    # ------------------------------------------------------------------
    # View input
    # ------------------------------------------------------------------

    def load_runs_or_log(self, text: str, go_version: Optional[str] = None) -> List[Run]:
        """
        Decode ``text`` as stored runs, or parse it as a raw benchmark log.

        A raw log becomes one run without metadata.
        """
        try:
            runs = self._repo.loads(text)
        except StorageError:
            runs = []
        if runs:
            return runs

        self._logger.debug("Input is not a run list, parsing it as a benchmark log")
        suites = self._parser.parse_text(text, go_version=go_version)
        if not suites:
            raise EmptyInputError("no benchmark runs found in input")
        return [Run.create(suites)]
