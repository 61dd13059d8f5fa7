"""
Command line entry point.

Usage: starguard [flags] <file|dir|dir/...> [...]
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from models import Issue
from starguard.config import CONFIG_FILE, ConfigError, find_config, load_config
from starguard.filesearch import find
from starguard.processor import Processor
from starguard.report import print_issues, write_checkstyle


REPORT_FORMATS = ("checkstyle",)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="starguard",
        description=(
            "Flag imports of GitHub repositories with too few stars. "
            "Also supports package syntax but will use it in relative path, i.e. ./pkg/..."
        ),
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files, directories or dir/... patterns (defaults to ./...).",
    )
    parser.add_argument(
        "-n",
        "--no-test",
        action="store_true",
        help="Don't lint test files.",
    )
    parser.add_argument(
        "-r",
        "--report",
        type=lambda value: value.strip().lower(),
        choices=REPORT_FORMATS,
        help="Report results to one of the following formats: checkstyle. "
        "A report file destination must also be specified.",
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="report_file",
        help="Report results to the specified file. A report type must also be specified.",
    )
    parser.add_argument(
        "-i",
        "--issues-exit-code",
        type=int,
        default=2,
        help="Exit code when issues were found (default: 2).",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=CONFIG_FILE,
        help=f"Config file name or path (default: {CONFIG_FILE}, then ~/{CONFIG_FILE}).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print every queried repository and its star count.",
    )
    return parser


def _stderr(message: str) -> None:
    print(message, file=sys.stderr)


def report_issues(
    issues: List[Issue],
    report: Optional[str],
    report_file: Optional[str],
    issues_exit_code: int,
) -> int:
    """
    Print issues and optionally write a report file.

    Returns:
        Process exit code
    """
    _stderr(f"info: found {len(issues)} issues")
    _stderr("")

    if report == "checkstyle":
        write_checkstyle(report_file, issues)

    print_issues(issues, sys.stdout)

    if issues:
        return issues_exit_code
    return 0


def run(argv: Optional[List[str]] = None) -> int:
    """
    Run starguard.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.report and not args.report_file:
        parser.error("a report file must be specified when a report is enabled")
    if args.report_file and not args.report:
        parser.error("a report type must be specified when a report file is enabled")

    cwd = Path.cwd()
    try:
        config = load_config(find_config(args.config, cwd=cwd))
    except ConfigError as e:
        _stderr(f"error: {e}")
        return 1

    file_names = find(cwd, args.no_test, args.paths)
    if args.verbose:
        _stderr(f"[INFO] linting {len(file_names)} files")

    processor = Processor(config, log=_stderr if args.verbose else None)
    issues = processor.process_files(file_names)

    try:
        return report_issues(issues, args.report, args.report_file, args.issues_exit_code)
    except OSError as e:
        _stderr(f"error: could not write report: {e}")
        return 1


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
