#!/usr/bin/env python3
"""
forganizer - CLI Entry Point
============================

Usage:
    python -m forganizer [-r] [-dry] [-exif] [-d DAYS] SRC DST

Example:
    python -m forganizer -r -d 30 /phone/camera /desktop/photoarchive
"""

import argparse
import sys
from pathlib import Path

from rich.console import Console

from .config import Options, load_env_defaults
from .errors import SourceDirectoryError
from .executor import organize
from .report import Reporter
from .utils import console, print_error, print_header, print_summary_table, print_warning

EPILOG = """
SRC - source directory
DST - root directory for organized files

Files are moved to DST/<year>/<month>/. A file whose content already exists
at its target is removed from SRC; a different file with the same name is
placed as name_1.ext, name_2.ext, ...
"""


def create_parser(defaults: dict | None = None) -> argparse.ArgumentParser:
    """
    Create the argument parser.

    Args:
        defaults: Option defaults (see config.load_env_defaults).
    """
    defaults = defaults or {}

    parser = argparse.ArgumentParser(
        prog="forganizer",
        description="Organize files into Year/Month folders by modification (or EXIF) date",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("src", nargs="?", type=Path, help="Source directory")
    parser.add_argument("dst", nargs="?", type=Path, help="Root directory for organized files")
    parser.add_argument("-r", "--recursive", action="store_true",
                        default=defaults.get("recursive", False),
                        help="Scan files recursively into SRC subdirectories")
    parser.add_argument("-d", "--days", type=int, metavar="DAYS",
                        default=defaults.get("days_older", 0),
                        help="Do not process files newer than DAYS days from now")
    parser.add_argument("-exif", "--exif", dest="exif", action="store_true",
                        default=defaults.get("use_exif", False),
                        help="Use EXIF capture date if possible")
    parser.add_argument("-dry", "--dry-run", dest="dry_run", action="store_true",
                        help="Dry run, do not modify files or directories, only print results")
    parser.add_argument("--hash", dest="hash_algorithm", metavar="ALGO",
                        default=defaults.get("hash_algorithm", "md5"),
                        help="Digest used to compare file contents (default: md5)")
    return parser


def run(args, out: Console | None = None) -> int:
    """Run an organize pass for parsed arguments. Returns the exit code."""
    out = out or console

    try:
        options = Options(
            recursive=args.recursive,
            dry_run=args.dry_run,
            days_older=args.days,
            use_exif=args.exif,
            hash_algorithm=args.hash_algorithm,
        )
    except ValueError as e:
        print_error(str(e), out)
        return 2

    mode = "DRY-RUN" if options.dry_run else "APPLY"
    print_header("forganizer", f"Source: {args.src}\nDestination: {args.dst}\nMode: {mode}", out)

    try:
        report = organize(args.src, args.dst, options, reporter=Reporter(out))
    except SourceDirectoryError as e:
        print_error(str(e), out)
        return 1
    except KeyboardInterrupt:
        out.print("\n[ABORT] Operation cancelled by user")
        return 130

    print_summary_table(report, out)

    if options.dry_run:
        print_warning("This was a DRY-RUN. No files were actually moved.", out)

    return 0


def main(argv: list[str] | None = None) -> int:
    parser = create_parser(load_env_defaults())
    args = parser.parse_args(argv)

    if args.src is None or args.dst is None:
        console.print("[bold red]Error:[/bold red] SRC or DST directories not set")
        console.print(parser.format_usage(), markup=False, soft_wrap=True, end="")
        return 0

    return run(args)


if __name__ == "__main__":
    sys.exit(main())
