"""
Benchmark Log Parser

Turns the line-oriented output of a benchmark harness into Suite records.

The parser is a two-state machine:

    SCANNING  --goos:-->              IN_SUITE
    IN_SUITE  --PASS / FAIL / ok-->   SCANNING

Each line is first classified against a fixed set of prefixes
(``classify_line``); the current state decides what a class means.
Lines that match no marker are log noise and are ignored. Any malformed
benchmark line aborts the whole parse, so callers either get every suite
or an exception.
"""

import io
import logging
import re
from enum import Enum
from pathlib import Path
from typing import IO, Iterator, List, Optional, Tuple, Union

from ..exceptions import (
    InvalidBenchmarkFormatError,
    InvalidIterationCountError,
    InvalidMetricFormatError,
    InvalidMetricValueError,
    InvalidSectionHeaderError,
    LineTooLongError,
    ParseError,
)
from ..models import Benchmark, Suite

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINE_LENGTH = 4096

BENCHMARK_PREFIX = "Benchmark"

# Units stored on Benchmark and Mem, all non-negative
STANDARD_UNITS = ("ns/op", "B/op", "allocs/op", "MB/s")

_ITERATIONS_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class ParserState(str, Enum):
    SCANNING = "scanning"
    IN_SUITE = "in_suite"


class LineKind(str, Enum):
    SUITE_START = "suite_start"
    ARCH = "arch"
    PACKAGE = "package"
    BENCHMARK = "benchmark"
    TERMINATOR = "terminator"
    BLANK = "blank"
    OTHER = "other"


# (prefix, kind) checked in order against the raw line
LINE_MARKERS: Tuple[Tuple[str, LineKind], ...] = (
    ("goos:", LineKind.SUITE_START),
    ("goarch:", LineKind.ARCH),
    ("pkg:", LineKind.PACKAGE),
    (BENCHMARK_PREFIX, LineKind.BENCHMARK),
    ("PASS", LineKind.TERMINATOR),
    ("FAIL", LineKind.TERMINATOR),
    ("ok", LineKind.TERMINATOR),
)


def classify_line(line: str) -> LineKind:
    """Classify a line by its leading marker."""
    if not line:
        return LineKind.BLANK
    for prefix, kind in LINE_MARKERS:
        if line.startswith(prefix):
            return kind
    return LineKind.OTHER


def header_value(line: str) -> Optional[str]:
    """Value after the first ``": "`` of a header line, or None."""
    _, sep, value = line.partition(": ")
    if not sep:
        return None
    return value.strip()


class BenchmarkParser:
    """
    Parses benchmark logs into suites.

    The parser keeps no state between calls; the optional toolchain version
    is passed to each ``parse*`` call and stamped onto every suite it
    produces.
    """

    def __init__(self, max_line_length: int = DEFAULT_MAX_LINE_LENGTH):
        if max_line_length <= 0:
            raise ValueError("max_line_length must be positive")
        self.max_line_length = max_line_length

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def parse(self, stream: IO[str], go_version: Optional[str] = None) -> List[Suite]:
        """Parse a text stream, one line at a time."""
        suites: List[Suite] = []
        state = ParserState.SCANNING
        current: Optional[Suite] = None

        for line_number, line in self._read_lines(stream):
            kind = classify_line(line)

            if state is ParserState.SCANNING:
                if kind is LineKind.SUITE_START:
                    current = self._start_suite(line, line_number, go_version)
                    state = ParserState.IN_SUITE
                continue

            if kind is LineKind.TERMINATOR:
                suites.append(current)
                current = None
                state = ParserState.SCANNING
            elif kind is LineKind.ARCH:
                value = header_value(line)
                if value is not None:
                    current.goarch = value
            elif kind is LineKind.PACKAGE:
                value = header_value(line)
                if value is not None:
                    current.pkg = value
            elif kind is LineKind.BENCHMARK:
                current.benchmarks.append(self.parse_benchmark_line(line, line_number))

        # A suite without terminator is returned as-is
        if current is not None:
            suites.append(current)

        logger.debug(
            "Parsed %d suites with %d benchmarks",
            len(suites), sum(len(s.benchmarks) for s in suites),
        )
        return suites

    def parse_text(self, text: str, go_version: Optional[str] = None) -> List[Suite]:
        return self.parse(io.StringIO(text), go_version)

    def parse_bytes(self, data: bytes, go_version: Optional[str] = None) -> List[Suite]:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"invalid UTF-8 input: {e}") from e
        return self.parse_text(text, go_version)

    def parse_file(self, path: Union[str, Path], go_version: Optional[str] = None) -> List[Suite]:
        logger.debug("Parsing benchmark log %s", path)
        with open(path, "r", encoding="utf-8") as f:
            return self.parse(f, go_version)

    # ------------------------------------------------------------------
    # Line handling
    # ------------------------------------------------------------------

    def _read_lines(self, stream: IO[str]) -> Iterator[Tuple[int, str]]:
        # Room for the longest allowed line plus "\r\n"
        chunk = self.max_line_length + 2
        line_number = 0
        while True:
            try:
                raw = stream.readline(chunk)
            except UnicodeDecodeError as e:
                raise ParseError(f"invalid UTF-8 input: {e}", line_number=line_number + 1) from e
            if not raw:
                return
            line_number += 1
            line = raw[:-1] if raw.endswith("\n") else raw
            if line.endswith("\r"):
                line = line[:-1]
            if len(line) > self.max_line_length:
                raise LineTooLongError(self.max_line_length, line_number=line_number)
            yield line_number, line

    def _start_suite(self, line: str, line_number: int, go_version: Optional[str]) -> Suite:
        goos = header_value(line)
        if goos is None:
            raise InvalidSectionHeaderError(line, line_number=line_number)
        return Suite(goos=goos, go=go_version or "")

    def parse_benchmark_line(self, line: str, line_number: Optional[int] = None) -> Benchmark:
        """
        Parse one ``Benchmark<name>\\t<iterations>\\t<metric>...`` line.

        Raises:
            InvalidBenchmarkFormatError: fewer than three tab-separated fields
            InvalidIterationCountError: iteration field is not an integer >= 0
            InvalidMetricFormatError: metric field is not ``<value> <unit>``
            InvalidMetricValueError: metric value is not a number, or a
                negative value for a standard unit
        """
        parts = line.split("\t")
        if len(parts) < 3:
            raise InvalidBenchmarkFormatError(len(parts), line, line_number)

        name = parts[0].strip()
        if name.startswith(BENCHMARK_PREFIX):
            name = name[len(BENCHMARK_PREFIX):]
        bench = Benchmark(name=name)

        iterations = parts[1].strip()
        if not _ITERATIONS_RE.fullmatch(iterations) or int(iterations) < 0:
            raise InvalidIterationCountError(name, iterations, line, line_number)
        bench.runs = int(iterations)

        for part in parts[2:]:
            self._apply_metric(bench, part.strip(), line, line_number)

        return bench

    def _apply_metric(self, bench: Benchmark, metric: str, line: str, line_number: Optional[int]) -> None:
        value_str, sep, unit = metric.partition(" ")
        if not sep:
            raise InvalidMetricFormatError(bench.name, metric, line, line_number)
        if not _FLOAT_RE.fullmatch(value_str):
            raise InvalidMetricValueError(bench.name, metric, line, line_number)
        value = float(value_str)
        if value < 0 and unit in STANDARD_UNITS:
            raise InvalidMetricValueError(bench.name, metric, line, line_number)

        if unit == "ns/op":
            bench.ns_per_op = value
        elif unit == "B/op":
            bench.ensure_mem().bytes_per_op = value
        elif unit == "allocs/op":
            bench.ensure_mem().allocs_per_op = value
        elif unit == "MB/s":
            bench.ensure_mem().mb_per_sec = value
        else:
            bench.custom[unit] = value
