# SPDX-License-Identifier: Apache-2.0
"""Hue/lightness coloring of regions by how long they were controlled.

For a selected year ``Y`` and ``epoch`` (the earliest start year in the
dataset):

* still controlled (no end year, or end year >= ``Y``): red hue, lightness
  ``(start - epoch) / (Y - epoch)``, so regions annexed earlier are darker;
* liberated (end year < ``Y``): green hue, lightness
  ``1 - (end - start) / (Y - epoch)``, so shorter occupations are lighter;
* not yet annexed (``Y`` < start) or absent from the dataset: excluded.

At ``Y == epoch`` the ratios are undefined; controlled regions take
:data:`MIN_LIGHTNESS` and liberated ones :data:`MAX_LIGHTNESS`.
"""

from __future__ import annotations

import colorsys
import enum
from collections.abc import Mapping
from dataclasses import dataclass

from timeglobe.data.annexation import AnnexationInterval

RED_HUE = 0.0
GREEN_HUE = 142.0
RED_SATURATION = 0.72
GREEN_SATURATION = 0.76
MIN_LIGHTNESS = 0.0
MAX_LIGHTNESS = 1.0

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
TRANSPARENT = (0, 0, 0, 0)


class RegionState(str, enum.Enum):
    EXCLUDED = "excluded"
    CONTROLLED = "controlled"
    LIBERATED = "liberated"


@dataclass(frozen=True, slots=True)
class HSL:
    h: float
    s: float
    l: float  # noqa: E741

    def to_rgb(self) -> tuple[int, int, int]:
        r, g, b = colorsys.hls_to_rgb((self.h % 360.0) / 360.0, self.l, self.s)
        return (round(r * 255), round(g * 255), round(b * 255))


def _clamp(value: float) -> float:
    return min(MAX_LIGHTNESS, max(MIN_LIGHTNESS, value))


class AnnexationColorizer:
    """Pure color rules over a fixed set of annexation intervals."""

    def __init__(self, intervals: Mapping[str, AnnexationInterval]) -> None:
        self.intervals = intervals
        self.epoch: int | None = min(
            (iv.start for iv in intervals.values()), default=None
        )

    def state(self, code: str, year: int) -> RegionState:
        interval = self.intervals.get(code)
        if interval is None or year < interval.start:
            return RegionState.EXCLUDED
        if interval.end is not None and interval.end < year:
            return RegionState.LIBERATED
        return RegionState.CONTROLLED

    def active_codes(self, year: int) -> frozenset[str]:
        """Codes of regions whose start year is not after ``year``."""
        return frozenset(
            code for code, iv in self.intervals.items() if iv.start <= year
        )

    def hsl(self, code: str, year: int) -> HSL | None:
        interval = self.intervals.get(code)
        if interval is None or self.epoch is None or year < interval.start:
            return None
        elapsed = year - self.epoch
        if interval.end is not None and interval.end < year:
            if elapsed == 0:
                lightness = MAX_LIGHTNESS
            else:
                lightness = 1.0 - (interval.end - interval.start) / elapsed
            return HSL(GREEN_HUE, GREEN_SATURATION, _clamp(lightness))
        if elapsed == 0:
            lightness = MIN_LIGHTNESS
        else:
            lightness = (interval.start - self.epoch) / elapsed
        return HSL(RED_HUE, RED_SATURATION, _clamp(lightness))

    def lightness(self, code: str, year: int) -> float | None:
        color = self.hsl(code, year)
        return None if color is None else color.l

    def fill_color(self, code: str, year: int) -> tuple[int, ...]:
        color = self.hsl(code, year)
        if color is None:
            return TRANSPARENT
        return color.to_rgb()

    def contrast_color(self, code: str, year: int) -> tuple[int, int, int]:
        """Black over light fills (lightness > 0.5), white otherwise."""
        lightness = self.lightness(code, year)
        if lightness is not None and lightness > 0.5:
            return BLACK
        return WHITE
