#!/usr/bin/env python3
"""
CSV Comparator - Main Entry Point
Reconcile two tables by mapped columns and report the differences.
"""

import argparse
import dataclasses
import sys
import traceback
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from csvcompare import __version__
from csvcompare.adapters import ResultExporter, TableReader
from csvcompare.config import (
    ConfigManager,
    DatasetConfig,
    JobConfig,
    OutputConfig,
    create_sample_config,
)
from csvcompare.core import (
    ReconciliationResult,
    Reconciler,
    filter_rows,
    paginate,
    parse_mapping_args,
    suggest_mapping,
    validate_mapping,
)
from csvcompare.core.results import PAGE_SIZES, ResultFilter
from csvcompare.ui import ResultReporter
from csvcompare.utils.logger import configure_logging, get_logger


logger = get_logger()

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_DIFFERENCES = 2


class CompareJobRunner:
    """
    Runs one comparison job: read, map, reconcile, report, export.
    """

    def __init__(self, job: JobConfig, console: Optional[Console] = None,
                 reader: Optional[TableReader] = None,
                 exporter: Optional[ResultExporter] = None):
        """
        Initialize runner.

        Args:
            job: Job configuration
            console: Rich console for the report
            reader: Table reader (injectable for tests)
            exporter: Result exporter (injectable for tests)
        """
        self.job = job
        self.reporter = ResultReporter(console)
        self.reader = reader or TableReader()
        self.exporter = exporter or ResultExporter()

    def run(self) -> ReconciliationResult:
        """
        Run the job.

        Returns:
            ReconciliationResult of the run

        Raises:
            FileNotFoundError, FileReadError, MappingError, ExportError
        """
        job = self.job
        logger.info("runner.starting",
                   source=job.source.path,
                   compare=job.compare.path)

        source = self.reader.read(job.source.path, sheet=job.source.sheet,
                                  name=job.source.name)
        compare = self.reader.read(job.compare.path, sheet=job.compare.sheet,
                                   name=job.compare.name)

        mapping = job.mapping
        if job.auto_map and not len(mapping):
            mapping = suggest_mapping(source.headers, compare.headers)
        key_columns = job.key_columns or None
        validate_mapping(mapping, source.headers, compare.headers, key_columns)

        result = Reconciler(job.settings).reconcile(source, compare, mapping,
                                                    key_columns)

        self.reporter.print_summary(result.stats, source.name, compare.name)
        rows = filter_rows(result.rows, job.output.filter)
        page = paginate(rows, job.output.page, job.output.page_size)
        self.reporter.print_page(page, mapping)

        if job.output.export:
            self.exporter.export(result.rows, mapping, job.output.export)

        logger.info("runner.completed",
                   rows=len(result.rows),
                   has_differences=result.has_differences)
        return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CSV Comparator - reconcile two tables by mapped columns"
    )

    parser.add_argument("source", nargs="?", help="Source file (csv, tsv, xlsx, parquet)")
    parser.add_argument("compare", nargs="?", help="Compare file")

    parser.add_argument(
        "--config", "-c",
        help="Job configuration file (YAML); flags override its values"
    )
    parser.add_argument(
        "--map", "-m",
        action="append",
        default=[],
        metavar="SRC=CMP",
        help="Map a source column to a compare column (repeatable)"
    )
    parser.add_argument(
        "--key", "-k",
        action="append",
        default=[],
        metavar="COLUMN",
        help="Source column that identifies a record (repeatable; default: all mapped)"
    )
    parser.add_argument(
        "--auto-map",
        action="store_true",
        help="Suggest the mapping from header names when none is given"
    )
    parser.add_argument(
        "--precision", "-p",
        type=int,
        help="Numeric precision in decimal places (default: 2)"
    )
    parser.add_argument(
        "--case-sensitive",
        action="store_true",
        help="Compare text case-sensitively"
    )
    parser.add_argument(
        "--no-trim",
        action="store_true",
        help="Keep leading/trailing whitespace"
    )
    parser.add_argument(
        "--filter", "-f",
        choices=[f.value for f in ResultFilter],
        help="Rows to display (default: all)"
    )
    parser.add_argument("--page", type=int, help="Page to display (1-based)")
    parser.add_argument(
        "--per-page",
        type=int,
        help=f"Rows per page (usual values: {', '.join(map(str, PAGE_SIZES))})"
    )
    parser.add_argument("--export", "-o", help="Export all rows to .csv or .parquet")
    parser.add_argument(
        "--fail-on-diff",
        action="store_true",
        help=f"Exit with status {EXIT_DIFFERENCES} if any row is not a match"
    )
    parser.add_argument(
        "--create-sample",
        metavar="PATH",
        help="Write a sample job configuration and exit"
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Warnings and errors only")
    parser.add_argument("--log-file", help="Append JSON log entries to this file")

    parser.add_argument(
        "--version",
        action="version",
        version=f"CSV Comparator v{__version__}"
    )
    return parser


def build_job(args: argparse.Namespace) -> JobConfig:
    """
    Combine an optional job file with command line overrides.

    Raises:
        ConfigError: If no source/compare is available
    """
    if args.config:
        job = ConfigManager(Path(args.config)).load()
    else:
        if not args.source or not args.compare:
            raise ValueError("Both SOURCE and COMPARE are required without --config")
        job = JobConfig(source=DatasetConfig(args.source),
                        compare=DatasetConfig(args.compare))

    if args.source:
        job.source = DatasetConfig(args.source)
    if args.compare:
        job.compare = DatasetConfig(args.compare)
    if args.map:
        job.mapping = parse_mapping_args(args.map)
    if args.auto_map:
        job.auto_map = True
    if args.key:
        job.key_columns = list(args.key)

    settings = job.settings
    if args.precision is not None:
        settings = dataclasses.replace(settings, numeric_precision=args.precision)
    if args.case_sensitive:
        settings = dataclasses.replace(settings, ignore_case=False)
    if args.no_trim:
        settings = dataclasses.replace(settings, trim_whitespace=False)
    job.settings = settings

    output = job.output
    job.output = OutputConfig(
        export=args.export or output.export,
        filter=args.filter or output.filter,
        page=args.page if args.page is not None else output.page,
        page_size=args.per_page if args.per_page is not None else output.page_size,
    )
    return job


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    level = "DEBUG" if args.verbose else "WARNING" if args.quiet else "INFO"
    configure_logging(level, args.log_file)

    if args.create_sample:
        path = create_sample_config(Path(args.create_sample))
        print(f"Sample configuration created: {path}")
        return EXIT_OK

    try:
        job = build_job(args)
        result = CompareJobRunner(job, console=console).run()
    except (OSError, ValueError) as e:
        logger.error("cli.failed",
                    error=str(e),
                    traceback=traceback.format_exc() if args.verbose else None)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.fail_on_diff and result.has_differences:
        return EXIT_DIFFERENCES
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
