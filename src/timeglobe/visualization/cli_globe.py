# SPDX-License-Identifier: Apache-2.0
"""CLI handler for ``timeglobe globe``."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Any

from timeglobe.binding import (
    AnnexationData,
    FeatureBinder,
    LifeData,
    TravelData,
)
from timeglobe.binding import create as create_visualization
from timeglobe.data.annexation import AnnexationDataError
from timeglobe.data.loader import (
    PayloadError,
    load_annexation,
    load_life_tables,
    load_travel_days,
)
from timeglobe.data.regions import ingest_features, read_feature_collection
from timeglobe.utils.cli_helpers import apply_verbosity_flags, configure_logging_from_env
from timeglobe.visualization.renderers import create, slugs


def _load_data(ns: Any) -> tuple[Any, set[str] | None]:
    """Return the dataset for ``ns.viz`` and the codes to keep (if filtered)."""

    if ns.viz == "life":
        if not ns.series_a or not ns.series_b:
            raise SystemExit("life requires --series-a and --series-b")
        series_a, series_b = load_life_tables(
            ns.series_a, ns.series_b, skip_rows=ns.skip_rows
        )
        return (
            LifeData(series_a, series_b, label_a=ns.label_a, label_b=ns.label_b),
            None,
        )
    if ns.viz == "travel":
        if not ns.days:
            raise SystemExit("travel requires --days")
        return TravelData(load_travel_days(ns.days)), None
    if not ns.intervals:
        raise SystemExit("annexation requires --intervals")
    intervals = load_annexation(ns.intervals)
    return AnnexationData(intervals), set(intervals)


def _renderer_options(ns: Any) -> dict[str, Any]:
    options: dict[str, Any] = {"labels": ns.viz == "annexation"}
    if ns.title:
        options["title"] = ns.title
    if ns.width is not None:
        options["width"] = ns.width
    if ns.height is not None:
        options["height"] = ns.height
    return options


def handle_globe(ns: Any) -> int:
    """Handle ``globe`` subcommand."""

    apply_verbosity_flags(ns)
    configure_logging_from_env()

    renderer_slugs = slugs()
    if ns.target not in renderer_slugs:
        raise SystemExit(
            f"Unknown globe renderer '{ns.target}'. Available: {', '.join(renderer_slugs)}"
        )

    visualization = create_visualization(ns.viz)
    now_year = ns.now_year if ns.now_year is not None else date.today().year

    try:
        data, keep = _load_data(ns)
        collections = [read_feature_collection(path) for path in ns.features]
    except (PayloadError, AnnexationDataError, OSError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc

    features = ingest_features(
        *collections, code_space=visualization.code_space, keep=keep
    )
    if not features:
        logging.warning("No features matched the %s dataset", ns.viz)

    start, end = visualization.year_range(data, now_year=now_year)
    if ns.start_year is not None:
        start = ns.start_year
    if ns.end_year is not None:
        end = ns.end_year
    if end < start:
        raise SystemExit(f"--end-year {end} precedes --start-year {start}")

    renderer = create(
        ns.target,
        binder=FeatureBinder(visualization),
        features=features,
        data=data,
        years=range(start, end + 1),
        **_renderer_options(ns),
    )
    bundle = renderer.build(output_dir=Path(ns.output))

    logging.info("Generated globe bundle at %s", bundle.index_html)
    logging.debug(
        "Bundle assets: %s",
        ", ".join(str(path.relative_to(bundle.output_dir)) for path in bundle.assets),
    )
    return 0
