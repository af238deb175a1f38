"""Main CLI entry point for packdoc."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .. import __version__
from ..exceptions import PackdocError
from ..models.array import Array
from ..models.map import Map
from .inspect import inspect_file


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the packdoc CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="packdoc: compact binary document codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  packdoc --inspect reading.bin              Show the document tree with sizes
  packdoc --inspect samples.bin --array      Inspect an Array document
  packdoc --inspect reading.bin --extended   Print lossless extended JSON
  packdoc --version                          Show version
        """,
    )

    parser.add_argument(
        "--inspect",
        metavar="FILE",
        type=str,
        help="Decode a document file and show its structure and element sizes",
    )

    parser.add_argument(
        "--array",
        action="store_true",
        help="Treat the file as an Array document (default: Map)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the document as plain JSON",
    )

    parser.add_argument(
        "--extended",
        action="store_true",
        help="Print the document as lossless extended JSON",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"packdoc {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Handle --inspect
    if args.inspect:
        file_path = Path(args.inspect)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            inspect_file(
                file_path,
                kind=Array if args.array else Map,
                as_json=args.json,
                extended=args.extended,
            )
            return 0
        except (PackdocError, OSError) as e:
            print(f"Error inspecting file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
