# SPDX-License-Identifier: Apache-2.0
"""Command line entry point for timeglobe."""

from __future__ import annotations

import argparse
import sys

from timeglobe.visualization import register_cli as register_visualization


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timeglobe",
        description="Color geographic regions by time-varying data on a globe.",
    )
    subparsers = parser.add_subparsers(dest="command")
    register_visualization(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    func = getattr(ns, "func", None)
    if func is None:
        parser.print_help(sys.stderr)
        return 2
    return int(func(ns) or 0)


if __name__ == "__main__":
    raise SystemExit(main())
