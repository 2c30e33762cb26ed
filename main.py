from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from crucible_routing import ConstrainedPathSearch, Grid, MalformedInputError, UnreachableError
from crucible_routing.ConstrainedRouter import MAX_RUN
from crucible_routing.visualize import render_arrows

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Minimal heat loss from the top-left to the bottom-right of a digit grid."
    )
    parser.add_argument("input", help="grid file, or '-' for stdin")
    parser.add_argument("--max-run", type=int, default=MAX_RUN,
                        help="most consecutive steps allowed in one direction (default: %(default)s)")
    parser.add_argument("--min-run", type=int, default=1,
                        help="fewest steps before turning or stopping (default: %(default)s)")
    parser.add_argument("--render", action="store_true", help="print the path as arrows over the grid")
    parser.add_argument("--highlight", action="store_true", help="colour path cells when rendering")
    parser.add_argument("--log-level", default="ERROR",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    return parser


def read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    with open(source, "r", encoding="utf-8") as fh:
        return fh.read()


def main(argv: Optional[List[str]] = None) -> int:
    """Solve one grid and print its minimal cost; returns the process exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        grid = Grid.parse(read_input(args.input))
        result = ConstrainedPathSearch(grid, max_run=args.max_run, min_run=args.min_run).run()
    except (MalformedInputError, UnreachableError) as exc:
        logger.debug("Search failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.render:
        print(render_arrows(grid, result.path, highlight=args.highlight))
    print(result.cost)
    return 0


if __name__ == "__main__":
    sys.exit(main())
