"""
Domain Exceptions

Error taxonomy for parsing benchmark logs, comparing runs and
reading/writing stored runs. Every error derives from BenchlogError so the
CLI can report any failure uniformly.
"""

from typing import Optional


class BenchlogError(Exception):
    """Base class for all benchlog errors."""


# =============================================================================
# Parsing
# =============================================================================

class ParseError(BenchlogError):
    """A benchmark log could not be parsed."""

    def __init__(self, message: str, line: Optional[str] = None, line_number: Optional[int] = None):
        self.line = line
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class LineTooLongError(ParseError):
    """A single line exceeds the parser's line buffer."""

    def __init__(self, limit: int, line_number: Optional[int] = None):
        self.limit = limit
        super().__init__(f"line too long (limit {limit} characters)", line_number=line_number)


class InvalidSectionHeaderError(ParseError):
    """A `goos:` line without the `: ` separator."""

    def __init__(self, line: str, line_number: Optional[int] = None):
        super().__init__(f"invalid goos line: {line}", line=line, line_number=line_number)


class MalformedBenchmarkLineError(ParseError):
    """A `Benchmark...` line that could not be turned into a record."""

    def __init__(self, reason: str, line: str, line_number: Optional[int] = None):
        self.reason = reason
        super().__init__(f"{reason}: {line!r}", line=line, line_number=line_number)


class InvalidBenchmarkFormatError(MalformedBenchmarkLineError):
    def __init__(self, field_count: int, line: str, line_number: Optional[int] = None):
        self.field_count = field_count
        super().__init__(
            f"invalid benchmark format: expected at least 3 fields, got {field_count}",
            line,
            line_number,
        )


class InvalidIterationCountError(MalformedBenchmarkLineError):
    def __init__(self, benchmark: str, value: str, line: str, line_number: Optional[int] = None):
        self.benchmark = benchmark
        self.value = value
        super().__init__(f"{benchmark}: could not parse runs {value!r}", line, line_number)


class InvalidMetricFormatError(MalformedBenchmarkLineError):
    def __init__(self, benchmark: str, metric: str, line: str, line_number: Optional[int] = None):
        self.benchmark = benchmark
        self.metric = metric
        super().__init__(f"{benchmark}: invalid metric format: {metric}", line, line_number)


class InvalidMetricValueError(MalformedBenchmarkLineError):
    def __init__(self, benchmark: str, metric: str, line: str, line_number: Optional[int] = None):
        self.benchmark = benchmark
        self.metric = metric
        super().__init__(f"{benchmark}: could not parse value in {metric!r}", line, line_number)


# =============================================================================
# Comparison
# =============================================================================

class ComparisonError(BenchlogError):
    """Two runs cannot be compared."""


class SuiteMismatchError(ComparisonError):
    """The suites of two runs do not line up."""


class SuiteCountMismatchError(SuiteMismatchError):
    def __init__(self, before_count: int, after_count: int):
        self.before_count = before_count
        self.after_count = after_count
        super().__init__(f"number of suites mismatch: {before_count} vs {after_count}")


class SuitePackageMismatchError(SuiteMismatchError):
    def __init__(self, index: int, before_pkg: str, after_pkg: str):
        self.index = index
        self.before_pkg = before_pkg
        self.after_pkg = after_pkg
        super().__init__(f"suite package mismatch at index {index}: {before_pkg} vs {after_pkg}")


# =============================================================================
# Input / storage
# =============================================================================

class EmptyInputError(BenchlogError):
    """No runs or suites were found where at least one is required."""


class StorageError(BenchlogError):
    """Stored runs could not be read, decoded or written."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{message} ({path})"
        super().__init__(message)
