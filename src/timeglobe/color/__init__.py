# SPDX-License-Identifier: Apache-2.0
"""Color domains, palettes and the annexation colorizer."""

from .annexation import (
    BLACK,
    GREEN_HUE,
    RED_HUE,
    TRANSPARENT,
    WHITE,
    AnnexationColorizer,
    RegionState,
)
from .domain import (
    EMPTY_DOMAIN,
    ColorDomain,
    ComparisonMode,
    resolve_domain,
    resolve_values_domain,
)
from .palette import NEUTRAL_GRAY, DivergingColorMapper, PaletteError, palette_color

__all__ = [
    "BLACK",
    "EMPTY_DOMAIN",
    "GREEN_HUE",
    "NEUTRAL_GRAY",
    "RED_HUE",
    "TRANSPARENT",
    "WHITE",
    "AnnexationColorizer",
    "ColorDomain",
    "ComparisonMode",
    "DivergingColorMapper",
    "PaletteError",
    "RegionState",
    "palette_color",
    "resolve_domain",
    "resolve_values_domain",
]
