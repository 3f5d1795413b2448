"""
benchlog CLI

Parse, store, merge, compare and view Go benchmark results.

Commands:
    parse    - Parse `go test -bench` output into JSON runs
    merge    - Merge several run files into one, sorted by date
    compare  - Compare the first run of two files
    view     - Show runs or a comparison in the terminal or as HTML
    version  - Print the version

Usage:
    go test -bench=. -benchmem | benchlog parse -o results.json --version v1.0.0
    benchlog compare baseline.json current.json --fail-on-regression
    benchlog view -f current.json -c baseline.json --web --open
"""
import argparse
import logging
import sys
from typing import List, Optional

from benchlog import __version__
from benchlog.adapters.outbound.export import format_comparison_json, format_comparison_table
from benchlog.application.services.display_service import SortMode
from benchlog.config import Container, Settings
from benchlog.domain.exceptions import BenchlogError, ParseError
from benchlog.domain.services.comparator import count_changes

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------------------------

def _split_tags(value: str) -> List[str]:
    return [t.strip() for t in value.split(",") if t.strip()]


def _read_stdin() -> str:
    try:
        return sys.stdin.read()
    except UnicodeDecodeError as e:
        raise ParseError(f"invalid UTF-8 input: {e}") from e


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="benchlog",
        description="Parse, store and compare Go benchmark results.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  go test -bench=. -benchmem | %(prog)s parse -o results.json
  go test -bench=. | %(prog)s parse --version=v1.0.0 --tags=ci --append -o history.json
  %(prog)s merge -o all.json a.json b.json --unique
  %(prog)s compare baseline.json current.json -t 10 --fail-on-regression
  %(prog)s view -f current.json -c baseline.json --web -o compare.html
  go test -bench=. -benchmem | %(prog)s view
""",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", metavar="FILE", help="YAML settings file")

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    # --- parse ---
    p = sub.add_parser("parse", help="Parse benchmark output into JSON")
    p.add_argument("--output", "-o", metavar="FILE", help="Output file (default: stdout)")
    p.add_argument("--version", dest="run_version", default="", help="Version label for this run")
    p.add_argument("--tags", type=_split_tags, default=[], help="Comma-separated tags for this run")
    p.add_argument("--append", action="store_true", help="Append to the existing output file")
    p.add_argument("--date", type=int, default=None, help="Unix timestamp of the run (default: now)")
    p.add_argument("--go-version", default=None, help="Go toolchain version recorded on every suite")
    p.add_argument("--input", "-i", metavar="FILE", help="Benchmark log to read (default: stdin)")

    # --- merge ---
    m = sub.add_parser("merge", help="Merge run files into one")
    m.add_argument("files", nargs="+", metavar="FILE", help="Run files to merge")
    m.add_argument("--output", "-o", metavar="FILE", help="Output file (default: stdout)")
    m.add_argument("--sort-desc", "-d", action="store_true", help="Newest runs first")
    m.add_argument("--unique", action="store_true", help="Drop runs repeating a version and date")
    m.add_argument("--tag", action="append", default=[], metavar="TAG",
                   help="Keep only runs with this tag (repeatable)")

    # --- compare ---
    c = sub.add_parser("compare", help="Compare two run files")
    c.add_argument("before", metavar="BEFORE", help="Baseline run file")
    c.add_argument("after", metavar="AFTER", help="Run file to check")
    c.add_argument("--threshold", "-t", type=float, default=None, help="Regression threshold in percent")
    c.add_argument("--format", "-f", choices=["table", "json"], default="table", help="Output format")
    c.add_argument("--fail-on-regression", action="store_true", help="Exit with status 1 on regressions")

    # --- view ---
    v = sub.add_parser("view", help="Show runs or a comparison")
    v.add_argument("--file", "-f", metavar="FILE", help="Run file to view (default: stdin)")
    v.add_argument("--compare", "-c", metavar="BASELINE", help="Compare FILE against this baseline")
    v.add_argument("--threshold", "-t", type=float, default=None, help="Regression threshold in percent")
    v.add_argument("--web", "-w", action="store_true", help="Generate an HTML report")
    v.add_argument("--output", "-o", metavar="HTML", help="HTML report path")
    v.add_argument("--open", action="store_true", help="Open the HTML report in a browser")
    v.add_argument("--sort", choices=[mode.value for mode in SortMode], default=SortMode.NONE.value,
                   help="Bar ordering in terminal charts")

    sub.add_parser("version", help="Print the version")

    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_parse(args: argparse.Namespace, container: Container) -> int:
    service = container.benchmark_service()

    if args.input:
        with open(args.input, "r", encoding="utf-8") as f:
            run = service.parse_run(f, args.run_version, args.date, args.tags, args.go_version)
    else:
        run = service.parse_run(sys.stdin, args.run_version, args.date, args.tags, args.go_version)

    if args.output:
        service.save_run(args.output, run, append=args.append)
        print(f"Parsed {len(run.suites)} benchmark suites to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(service.encode([run]))
    return 0


def cmd_merge(args: argparse.Namespace, container: Container) -> int:
    service = container.benchmark_service()
    runs = service.merge_files(args.files, unique=args.unique, descending=args.sort_desc, tags=args.tag)

    if args.output:
        service.repository.write_runs(args.output, runs)
        print(f"Merged {len(runs)} runs to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(service.encode(runs))
    return 0


def cmd_compare(args: argparse.Namespace, container: Container) -> int:
    threshold = args.threshold if args.threshold is not None else container.settings.threshold
    results = container.benchmark_service().compare_files(args.before, args.after)

    if args.format == "json":
        print(format_comparison_json(results))
    else:
        sys.stdout.write(format_comparison_table(results, threshold))

    regressions, _ = count_changes(results, threshold)
    if args.fail_on_regression and regressions > 0:
        logger.info("%d regressions above %.1f%%", regressions, threshold)
        return 1
    return 0


def cmd_view(args: argparse.Namespace, container: Container) -> int:
    settings = container.settings
    threshold = args.threshold if args.threshold is not None else settings.threshold
    service = container.benchmark_service()

    runs = results = None
    if args.compare:
        if not args.file:
            raise BenchlogError("--compare requires --file")
        results = service.compare_files(args.compare, args.file)
    elif args.file:
        runs = service.read_runs(args.file)
    else:
        runs = service.load_runs_or_log(_read_stdin())

    if args.web or args.output:
        generator = container.report_generator()
        if results is not None:
            document = generator.generate_comparison_report(results, threshold)
        else:
            document = generator.generate_runs_report(runs, threshold)
        path = generator.save(document, args.output or settings.report_path)
        print(f"HTML report written to {path}")
        if args.open or settings.open_browser:
            generator.open_in_browser(path)
        return 0

    display = container.display_service()
    if results is not None:
        display.display_comparison(results, threshold, SortMode(args.sort))
    else:
        display.display_runs(runs, SortMode(args.sort))
    return 0


def cmd_version(args: argparse.Namespace, container: Container) -> int:
    print(f"benchlog {__version__}")
    return 0


COMMANDS = {
    "parse": cmd_parse,
    "merge": cmd_merge,
    "compare": cmd_compare,
    "view": cmd_view,
    "version": cmd_version,
}


# ---------------------------------------------------------------------------
# Entry Point
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help(sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        container = Container.from_settings(Settings.load(args.config))
        return COMMANDS[args.command](args, container)
    except (BenchlogError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if args.verbose:
            logger.exception("%s failed", args.command)
        return 1


if __name__ == "__main__":
    sys.exit(main())
