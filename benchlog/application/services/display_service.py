"""
Display Application Service
"""
import sys
from datetime import datetime
from enum import Enum
from typing import IO, Callable, List, Optional, Tuple

from benchlog.domain.models import Benchmark, ComparisonResult, Run, Suite
from benchlog.domain.services.comparator import count_changes


class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    UNDERLINE = "\033[4m"
    RESET = "\033[0m"


class SortMode(str, Enum):
    """Ordering of bars in a chart."""
    NONE = "none"
    NAME = "name"
    NAME_DESC = "name-desc"
    VALUE = "value"
    VALUE_DESC = "value-desc"


Bar = Tuple[str, float]

LABEL_WIDTH = 30
VALUE_WIDTH = 12
MIN_BAR_WIDTH = 10


def format_value(v: float) -> str:
    """Compact number with K/M suffix."""
    if v >= 1_000_000:
        return f"{v / 1_000_000:.1f}M"
    if v >= 1000:
        return f"{v / 1000:.1f}K"
    if v >= 100:
        return f"{v:.0f}"
    if v >= 10:
        return f"{v:.1f}"
    return f"{v:.2f}"


def format_percent(v: float) -> str:
    if abs(v) >= 100:
        text = f"{v:.0f}"
    elif abs(v) >= 10:
        text = f"{v:.1f}"
    else:
        text = f"{v:.2f}"
    return ("+" if v > 0 else "") + text + "%"


def format_date(ts: int) -> str:
    if ts == 0:
        return "-"
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M:%S")


def truncate_name(name: str, max_len: int) -> str:
    if len(name) <= max_len:
        return name
    return name[:max_len - 3] + "..."


def sort_bars(bars: List[Bar], mode: SortMode) -> List[Bar]:
    """Return ``bars`` ordered by ``mode``; NONE keeps input order."""
    mode = SortMode(mode)
    if mode is SortMode.NAME:
        return sorted(bars, key=lambda b: b[0])
    if mode is SortMode.NAME_DESC:
        return sorted(bars, key=lambda b: b[0], reverse=True)
    if mode is SortMode.VALUE:
        return sorted(bars, key=lambda b: b[1])
    if mode is SortMode.VALUE_DESC:
        return sorted(bars, key=lambda b: b[1], reverse=True)
    return list(bars)


class DisplayService:
    """
    Service for formatting and displaying benchmark runs and comparisons in the terminal.
    """
    Colors = Colors

    def __init__(self, out: Optional[IO[str]] = None, width: int = 100, color: bool = True):
        self._out = out
        self.width = width
        self.color = color

    @property
    def out(self) -> IO[str]:
        return self._out or sys.stdout

    def emit(self, text: str = "") -> None:
        print(text, file=self.out)

    def colored(self, text: str, color: str, bold: bool = False) -> str:
        """Apply color to text."""
        if not self.color:
            return text
        style = Colors.BOLD if bold else ""
        return f"{style}{color}{text}{Colors.RESET}"

    @staticmethod
    def load_color(value: float, max_value: float) -> str:
        """Green up to 70% of the maximum, yellow up to 90%, red above."""
        if value > max_value * 0.9:
            return Colors.RED
        if value > max_value * 0.7:
            return Colors.YELLOW
        return Colors.GREEN

    @staticmethod
    def change_color(pct: float, threshold: float) -> str:
        if pct > threshold:
            return Colors.RED
        if pct < -threshold:
            return Colors.GREEN
        return Colors.GRAY

    def print_header(self, title: str, char: str = "=") -> None:
        """Print a formatted header."""
        self.emit(f"\n{self.colored(char * self.width, Colors.CYAN)}")
        self.emit(self.colored(f" {title} ".center(self.width), Colors.CYAN, bold=True))
        self.emit(self.colored(char * self.width, Colors.CYAN))

    def print_subheader(self, title: str, char: str = "-") -> None:
        """Print a formatted subheader."""
        self.emit(f"\n{self.colored(f' {title} ', Colors.WHITE, bold=True)}")
        self.emit(self.colored(char * self.width, Colors.GRAY))

    def render_bar_chart(
        self,
        bars: List[Bar],
        color_for: Callable[[float], str],
        formatter: Callable[[float], str] = format_value,
    ) -> List[str]:
        """Horizontal bars scaled to the largest absolute value."""
        if not bars:
            return []
        max_value = max(abs(v) for _, v in bars) or 1.0
        bar_max = max(self.width - LABEL_WIDTH - VALUE_WIDTH - 4, MIN_BAR_WIDTH)

        lines = []
        for label, value in bars:
            size = min(int(abs(value) / max_value * bar_max), bar_max)
            if size < 1 and value != 0:
                size = 1
            bar = self.colored("█" * size, color_for(value))
            padding = " " * (bar_max - size)
            lines.append(
                f"  {truncate_name(label, LABEL_WIDTH):<{LABEL_WIDTH}}{bar}{padding}{formatter(value):>{VALUE_WIDTH}}"
            )
        return lines

    # --- Runs Display ---

    def display_run_info(self, run: Run) -> None:
        self.print_subheader("Run Information")
        self.emit(f"  {'Version:':<12} {run.version or '-'}")
        self.emit(f"  {'Date:':<12} {format_date(run.date)}")
        self.emit(f"  {'Tags:':<12} {', '.join(run.tags) if run.tags else '-'}")
        self.emit(f"  {'Suites:':<12} {len(run.suites)}")
        self.emit(f"  {'Benchmarks:':<12} {run.benchmark_count}")

    def display_suite_charts(self, suite: Suite, sort_mode: SortMode = SortMode.NONE) -> None:
        """Execution time and memory bars for one suite."""
        self.print_subheader(suite.label)

        time_bars = [(b.name, b.ns_per_op) for b in suite.benchmarks if b.ns_per_op > 0]
        if time_bars:
            max_time = max(v for _, v in time_bars)
            self.emit(self.colored("  Execution Time (ns/op)", Colors.WHITE, bold=True))
            for line in self.render_bar_chart(sort_bars(time_bars, sort_mode),
                                              lambda v: self.load_color(v, max_time)):
                self.emit(line)

        mem_bars = [
            (b.name, b.mem.bytes_per_op) for b in suite.benchmarks
            if b.mem is not None and b.mem.bytes_per_op > 0
        ]
        if mem_bars:
            max_mem = max(v for _, v in mem_bars)
            self.emit(self.colored("  Memory Usage (B/op)", Colors.WHITE, bold=True))
            for line in self.render_bar_chart(sort_bars(mem_bars, sort_mode),
                                              lambda v: self.load_color(v, max_mem)):
                self.emit(line)

        if not time_bars and not mem_bars:
            self.emit(self.colored("  No timing or memory data", Colors.GRAY))

    def format_benchmark(self, bench: Benchmark) -> str:
        parts = [self.colored(bench.name, Colors.CYAN)]
        if bench.ns_per_op > 0:
            parts.append(f"{bench.ns_per_op:.2f} ns/op")
        if bench.mem is not None:
            if bench.mem.bytes_per_op > 0:
                parts.append(f"{bench.mem.bytes_per_op:.0f} B/op")
            if bench.mem.allocs_per_op > 0:
                parts.append(f"{bench.mem.allocs_per_op:.0f} allocs/op")
            if bench.mem.mb_per_sec > 0:
                parts.append(f"{bench.mem.mb_per_sec:.2f} MB/s")
        for unit, value in bench.custom.items():
            parts.append(f"{value:g} {unit}")
        return "  ".join(parts)

    def display_benchmark_list(self, suite: Suite) -> None:
        self.emit(self.colored(f"  {suite.pkg} ({len(suite.benchmarks)} benchmarks)", Colors.WHITE, bold=True))
        for bench in suite.benchmarks:
            self.emit(f"    {self.format_benchmark(bench)}")

    def display_runs(self, runs: List[Run], sort_mode: SortMode = SortMode.NONE) -> None:
        """Charts and listing of the first run, followed by an overview of all runs."""
        self.print_header("Benchmark Results")
        if not runs:
            self.emit(self.colored("  No benchmark data available", Colors.GRAY))
            return

        latest = runs[0]
        self.display_run_info(latest)
        for suite in latest.suites:
            if suite.benchmarks:
                self.display_suite_charts(suite, sort_mode)

        self.print_subheader("Benchmarks")
        for suite in latest.suites:
            self.display_benchmark_list(suite)

        if len(runs) > 1:
            self.print_subheader("All Benchmark Runs")
            for i, run in enumerate(runs, 1):
                meta = [p for p in (run.version, format_date(run.date) if run.date else "", ", ".join(run.tags)) if p]
                suites = ", ".join(f"{s.pkg} ({len(s.benchmarks)} benches)" for s in run.suites)
                self.emit(f"  {i}. {self.colored(' · '.join(meta) or '-', Colors.BLUE)}")
                self.emit(f"     {suites}")

    # --- Comparison Display ---

    def display_comparison_summary(self, results: List[ComparisonResult], threshold: float) -> None:
        regressions, improvements = count_changes(results, threshold)
        self.print_subheader("Summary")
        self.emit(f"  {'Total Benchmarks:':<20} {len(results)}")
        reg_color = Colors.RED if regressions else Colors.GREEN
        self.emit(f"  {'Regressions:':<20} {self.colored(str(regressions), reg_color, bold=True)}")
        self.emit(f"  {'Improvements:':<20} {self.colored(str(improvements), Colors.GREEN, bold=True)}")
        self.emit(f"  {'Threshold:':<20} {threshold:.1f}%")

    def display_time_changes(self, results: List[ComparisonResult], threshold: float,
                             sort_mode: SortMode = SortMode.NONE) -> None:
        self.print_subheader("Time Changes")
        bars = [(r.name, r.ns_per_op_pct) for r in results]
        for line in self.render_bar_chart(sort_bars(bars, sort_mode),
                                          lambda v: self.change_color(v, threshold),
                                          format_percent):
            self.emit(line)

    def display_comparison_table(self, results: List[ComparisonResult], threshold: float) -> None:
        self.print_subheader("Details")
        name_width = 35
        self.emit(f"  {'Benchmark':<{name_width}}{'Old':>12}{'New':>12}{'Delta':>10}{'Mem Δ':>10}")
        self.emit(self.colored("  " + "─" * (name_width + 44), Colors.GRAY))
        for r in results:
            delta_text = f"{r.ns_per_op_pct:+.1f}%"
            delta = self.colored(f"{delta_text:>10}", self.change_color(r.ns_per_op_pct, threshold))
            mem = f"{r.bytes_pct:+.1f}%" if r.has_memory else "-"
            self.emit(
                f"  {truncate_name(r.name, name_width):<{name_width}}"
                f"{r.old_ns_per_op:>12.0f}{r.new_ns_per_op:>12.0f}{delta}{mem:>10}"
            )

    def display_comparison(self, results: List[ComparisonResult], threshold: float,
                           sort_mode: SortMode = SortMode.NONE) -> None:
        self.print_header("Benchmark Comparison")
        if not results:
            self.emit(self.colored("  No comparison data available", Colors.GRAY))
            return
        self.display_comparison_summary(results, threshold)
        self.display_time_changes(results, threshold, sort_mode)
        self.display_comparison_table(results, threshold)
