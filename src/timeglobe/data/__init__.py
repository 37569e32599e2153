# SPDX-License-Identifier: Apache-2.0
"""Dataset models, parsers and loaders."""

from .annexation import AnnexationDataError, AnnexationInterval, parse_annexation
from .loader import (
    GenerationGate,
    PayloadError,
    fetch_text,
    fetch_text_async,
    load_annexation,
    load_life_tables,
    load_travel_days,
)
from .regions import (
    CodeSpace,
    Region,
    RegionFeature,
    ingest_features,
    read_feature_collection,
    region_of,
)
from .table import ScalarTable, parse_cell, parse_scalar_table, read_scalar_table
from .travel import parse_travel_days

__all__ = [
    "AnnexationDataError",
    "AnnexationInterval",
    "CodeSpace",
    "GenerationGate",
    "PayloadError",
    "Region",
    "RegionFeature",
    "ScalarTable",
    "fetch_text",
    "fetch_text_async",
    "ingest_features",
    "load_annexation",
    "load_life_tables",
    "load_travel_days",
    "parse_annexation",
    "parse_cell",
    "parse_scalar_table",
    "parse_travel_days",
    "read_feature_collection",
    "read_scalar_table",
    "region_of",
]
