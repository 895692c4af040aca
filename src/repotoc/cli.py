"""Command-line interface for repotoc."""

import argparse
import pathlib
import sys

from repotoc import __version__
from repotoc.constants import TOC_FILENAME
from repotoc.errors import TocError
from repotoc.models import Stats
from repotoc.output_generators import generate_toc, is_toc_current, write_toc


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its ``build`` and ``check`` subcommands."""
    parser = argparse.ArgumentParser(
        prog="repotoc",
        description="Generate a table of contents for your repo.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "directory",
        nargs="?",
        default=".",
        help=f"Directory to create {TOC_FILENAME} from.",
    )
    common.add_argument(
        "--show-missing",
        action="store_true",
        help="Show files and directories missing descriptions.",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed processing information.",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser(
        "build",
        parents=[common],
        help="Build the table of contents",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    subparsers.add_parser(
        "check",
        parents=[common],
        help="Check the table of contents is up to date",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    # Running without a subcommand builds
    parser.set_defaults(command="build", directory=".", show_missing=False, verbose=False)
    return parser


def print_missing(stats: Stats) -> None:
    for path in sorted(stats.missing):
        print(f"  {path}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the repotoc CLI.

    Returns:
        Process exit status: 0 on success, 1 on a stale TOC or a fatal error
    """
    args = build_parser().parse_args(argv)
    directory = pathlib.Path(args.directory)

    if not directory.is_dir():
        print(f"Error: Directory not found: {args.directory}", file=sys.stderr)
        return 1

    try:
        stats, toc = generate_toc(directory, args.verbose)
    except (TocError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    status = 0
    if args.command == "check":
        if not is_toc_current(directory, toc):
            print(f"{TOC_FILENAME} is out of date")
            status = 1
        elif args.verbose:
            print(f"✅ {TOC_FILENAME} is up to date")
    else:
        try:
            toc_path = write_toc(directory, toc)
        except OSError as e:
            print(f"Error: Could not write {TOC_FILENAME}: {e}", file=sys.stderr)
            return 1
        if args.verbose:
            print(f"📄 Output: {toc_path}")

    if args.show_missing:
        print_missing(stats)
    return status


if __name__ == "__main__":
    sys.exit(main())
