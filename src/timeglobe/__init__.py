# SPDX-License-Identifier: Apache-2.0
"""Temporal color mapping for region choropleths on an interactive globe."""

from .binding import (
    AnnexationData,
    Binding,
    FeatureBinder,
    LifeData,
    RenderSnapshot,
    TravelData,
)
from .color import (
    EMPTY_DOMAIN,
    NEUTRAL_GRAY,
    AnnexationColorizer,
    ColorDomain,
    ComparisonMode,
    DivergingColorMapper,
    resolve_domain,
    resolve_values_domain,
)
from .data import (
    AnnexationInterval,
    GenerationGate,
    Region,
    RegionFeature,
    ScalarTable,
    ingest_features,
    parse_cell,
    parse_scalar_table,
)

__version__ = "0.1.0"

__all__ = [
    "EMPTY_DOMAIN",
    "NEUTRAL_GRAY",
    "AnnexationColorizer",
    "AnnexationData",
    "AnnexationInterval",
    "Binding",
    "ColorDomain",
    "ComparisonMode",
    "DivergingColorMapper",
    "FeatureBinder",
    "GenerationGate",
    "LifeData",
    "Region",
    "RegionFeature",
    "RenderSnapshot",
    "ScalarTable",
    "TravelData",
    "ingest_features",
    "parse_cell",
    "parse_scalar_table",
    "resolve_domain",
    "resolve_values_domain",
]
