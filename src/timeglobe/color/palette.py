# SPDX-License-Identifier: Apache-2.0
"""Diverging palette mapping for statistical choropleths."""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Any

import matplotlib
import numpy as np

from .domain import ColorDomain

RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]

NEUTRAL_GRAY: RGB = (150, 150, 150)
DEFAULT_PALETTE = "RdYlGn"
PALETTES = frozenset({"RdYlGn", "YlGn"})


class PaletteError(ValueError):
    """Raised for palettes outside the supported set."""


@lru_cache(maxsize=None)
def _colormap(name: str) -> Any:
    if name not in PALETTES:
        raise PaletteError(
            f"Unsupported palette '{name}'. Available: {', '.join(sorted(PALETTES))}"
        )
    return matplotlib.colormaps[name]


def palette_color(name: str, t: float) -> RGB:
    """Sample palette ``name`` at normalized position ``t`` (clamped to [0, 1])."""

    rgba = np.asarray(_colormap(name)(float(np.clip(t, 0.0, 1.0))), dtype=float)
    r, g, b = np.rint(rgba[:3] * 255.0).astype(int).tolist()
    return (r, g, b)


class DivergingColorMapper:
    """Map scalars within a :class:`ColorDomain` onto a palette.

    Values are normalized linearly from ``[min, max]`` to ``[0, 1]`` (or
    ``[1, 0]`` with ``invert``) and clamped. An empty domain or an undefined
    value yields ``fallback`` without consulting the palette. A degenerate
    domain (``min == max``) maps every value to the palette midpoint.
    """

    def __init__(
        self,
        domain: ColorDomain,
        *,
        palette: str = DEFAULT_PALETTE,
        invert: bool = False,
        fallback: RGB | RGBA = NEUTRAL_GRAY,
    ) -> None:
        _colormap(palette)
        self.domain = domain
        self.palette = palette
        self.invert = invert
        self.fallback = tuple(fallback)

    def normalize(self, value: float | None) -> float | None:
        if self.domain.is_empty or value is None or not math.isfinite(value):
            return None
        if self.domain.is_degenerate:
            return 0.5
        t = (value - self.domain.min) / self.domain.span
        t = float(np.clip(t, 0.0, 1.0))
        return 1.0 - t if self.invert else t

    def __call__(self, value: float | None) -> tuple[int, ...]:
        t = self.normalize(value)
        if t is None:
            return self.fallback
        return palette_color(self.palette, t)

    def endpoints(self) -> tuple[RGB, RGB]:
        """Palette colors at normalized 0 and 1."""
        return palette_color(self.palette, 0.0), palette_color(self.palette, 1.0)
