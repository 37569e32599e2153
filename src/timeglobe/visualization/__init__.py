# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from typing import Any

from timeglobe.binding import available as available_visualizations


def register_cli(subparsers: Any) -> None:
    """Register visualization subcommands under a provided subparsers object."""

    from .cli_globe import handle_globe

    p = subparsers.add_parser(
        "globe",
        help="Write a deck.gl globe bundle for a dataset",
        description=(
            "Precompute per-region colors and tooltips for every year (and mode) "
            "and write a static globe bundle."
        ),
    )
    p.add_argument(
        "--viz",
        required=True,
        choices=sorted(v.slug for v in available_visualizations()),
        help="Visualization to render",
    )
    p.add_argument(
        "--features",
        required=True,
        action="append",
        help="GeoJSON FeatureCollection (repeatable)",
    )
    p.add_argument("--output", required=True, help="Output directory")
    p.add_argument("--target", default="deck-globe", help="Renderer slug")
    p.add_argument("--series-a", dest="series_a", help="Series A payload (life)")
    p.add_argument("--series-b", dest="series_b", help="Series B payload (life)")
    p.add_argument("--label-a", dest="label_a", default="Males")
    p.add_argument("--label-b", dest="label_b", default="Females")
    p.add_argument(
        "--skip-rows",
        dest="skip_rows",
        type=int,
        default=0,
        help="Caption lines before the year header (life)",
    )
    p.add_argument("--days", help="JSON mapping ISO alpha-2 code to days (travel)")
    p.add_argument(
        "--intervals", help="JSON mapping region code to [start, end] (annexation)"
    )
    p.add_argument("--start-year", dest="start_year", type=int)
    p.add_argument("--end-year", dest="end_year", type=int)
    p.add_argument(
        "--now-year",
        dest="now_year",
        type=int,
        help="Current year for open-ended ranges (defaults to today)",
    )
    p.add_argument("--title")
    p.add_argument("--width", type=int)
    p.add_argument("--height", type=int)
    p.add_argument("--verbose", action="store_true", help="Verbose logging")
    p.add_argument("--quiet", action="store_true", help="Quiet logging")
    p.set_defaults(func=handle_globe)


__all__ = ["register_cli"]
