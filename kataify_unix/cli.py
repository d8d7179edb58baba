#!/usr/bin/env python3
"""
Kataify CLI - Turn annotated solution files into katas

Usage:
    kataify [kataify.yaml] [options]

Author: Kataify maintainers | 2026-10-18
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from kataify_core import (
    ConfigError,
    DryRunFileAccess,
    KataifyExitCode,
    KataMode,
    LocalFileAccess,
    load_config,
    parse_mapping_arg,
    run_kataify_sync,
)
from kataify_core.version import get_short_banner

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser for the kataify CLI."""
    parser = argparse.ArgumentParser(
        prog="kataify",
        description="Kataify - replace annotated code with kata lines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Kataify a single file
  kataify --map solutions/sum.spec.js:katas/sum.spec.js

  # Kataify a whole tree of test files
  kataify --source-dir solutions --dest-dir katas --pattern '*.spec.js'

  # Use a config file, preview only
  kataify kataify.yaml --dry-run

A kata line starts (after indentation) with '////'. Its text replaces the
line that follows it:

  ////const sum = undefined;
  const sum = a + b;

becomes

  const sum = undefined;
""",
    )

    parser.add_argument(
        "config", type=Path, nargs="?", help="Path to kataify.yaml (auto-detected if omitted)"
    )

    parser.add_argument(
        "--map",
        "-m",
        dest="mappings",
        action="append",
        default=[],
        metavar="SRC:DEST",
        help="Kataify SRC into DEST (repeatable)",
    )

    parser.add_argument(
        "--source-dir", type=Path, default=None, help="Directory of annotated files"
    )

    parser.add_argument(
        "--dest-dir", type=Path, default=None, help="Directory receiving the katas"
    )

    parser.add_argument(
        "--pattern",
        dest="patterns",
        action="append",
        default=None,
        help="File name glob under --source-dir (repeatable, default: *)",
    )

    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        help="Relative path glob to skip under --source-dir (repeatable)",
    )

    parser.add_argument(
        "--mode",
        choices=[m.value for m in KataMode],
        default=None,
        help="Lines replaced by a kata line (default: next_line)",
    )

    parser.add_argument(
        "--max-parallel",
        type=int,
        default=None,
        help="Max files processed at once (overrides config)",
    )

    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Skip remaining files after the first failure",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Read and kataify, but do not write anything",
    )

    parser.add_argument(
        "--json-report",
        type=Path,
        default=None,
        help="Save JSON report to file",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )

    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Suppress output (errors only)"
    )

    parser.add_argument(
        "--version", action="version", version=get_short_banner()
    )

    return parser


def main(argv: Optional[List[str]] = None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    root_logger = logging.getLogger()
    if args.quiet:
        root_logger.setLevel(logging.ERROR)
    elif args.verbose:
        root_logger.setLevel(logging.DEBUG)

    config_path = None
    if args.config:
        config_path = args.config.resolve()
        if not config_path.exists():
            logger.error(f"Config not found: {config_path}")
            sys.exit(KataifyExitCode.CONFIGURATION_ERROR.value)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(KataifyExitCode.CONFIGURATION_ERROR.value)

    if not args.quiet and not args.verbose:
        root_logger.setLevel(config.logging.level)

    # Apply CLI overrides
    if args.mode:
        config.transform.mode = args.mode
    if args.max_parallel is not None:
        if args.max_parallel < 1:
            logger.error("--max-parallel must be >= 1")
            sys.exit(KataifyExitCode.CONFIGURATION_ERROR.value)
        config.batch.max_parallel = args.max_parallel
    if args.fail_fast:
        config.batch.fail_fast = True
    if args.source_dir:
        config.source_dir = str(args.source_dir)
    if args.dest_dir:
        config.destination_dir = str(args.dest_dir)
    if args.patterns:
        config.patterns = args.patterns
    if args.exclude:
        config.exclude = args.exclude

    try:
        config.mappings.extend(parse_mapping_arg(m) for m in args.mappings)
        mappings = config.build_mappings()
    except (ValueError, ConfigError, NotADirectoryError) as e:
        logger.error(str(e))
        sys.exit(KataifyExitCode.CONFIGURATION_ERROR.value)

    if not mappings:
        logger.error("Nothing to kataify: give --map, --source-dir/--dest-dir or a config file")
        parser.print_usage(sys.stderr)
        sys.exit(KataifyExitCode.CONFIGURATION_ERROR.value)

    file_access = LocalFileAccess(
        encoding=config.batch.encoding,
        create_dirs=config.batch.create_dirs,
    )
    if args.dry_run:
        file_access = DryRunFileAccess(file_access)

    try:
        result = run_kataify_sync(
            mappings,
            file_access,
            mode=config.mode,
            max_parallel=config.batch.max_parallel,
            fail_fast=config.batch.fail_fast,
            verbose=args.verbose,
        )
        result.dry_run = args.dry_run

        if not args.quiet:
            result.print_summary()

        if args.json_report:
            result.save_json(args.json_report)
            logger.info(f"JSON report saved to: {args.json_report}")

        sys.exit(result.exit_code.value)

    except KeyboardInterrupt:
        logger.info("\nKataify cancelled by user")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Kataify failed: {e}", exc_info=args.verbose)
        sys.exit(KataifyExitCode.EXECUTION_ERROR.value)


if __name__ == "__main__":
    main()
