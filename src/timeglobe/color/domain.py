# SPDX-License-Identifier: Apache-2.0
"""Color domains resolved from sparse tables under a comparison mode."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable
from dataclasses import dataclass

from timeglobe.data.table import ScalarTable


class ComparisonMode(str, enum.Enum):
    """How two series combine into one effective value per region and year."""

    SERIES_A = "a"
    SERIES_B = "b"
    DIFFERENCE = "diff"

    def combine(
        self,
        series_a: ScalarTable,
        series_b: ScalarTable | None,
        code: str,
        year: int,
    ) -> float | None:
        """Return the effective value or ``None`` when it is not defined.

        ``DIFFERENCE`` is ``b - a`` and needs both observations.
        """
        if self is ComparisonMode.SERIES_A:
            return series_a.value(code, year)
        if series_b is None:
            return None
        if self is ComparisonMode.SERIES_B:
            return series_b.value(code, year)
        a = series_a.value(code, year)
        b = series_b.value(code, year)
        if a is None or b is None:
            return None
        return b - a

    @classmethod
    def parse(cls, value: str | ComparisonMode) -> ComparisonMode:
        if isinstance(value, ComparisonMode):
            return value
        token = str(value).strip().lower()
        aliases = {
            "a": cls.SERIES_A,
            "series_a": cls.SERIES_A,
            "males": cls.SERIES_A,
            "b": cls.SERIES_B,
            "series_b": cls.SERIES_B,
            "females": cls.SERIES_B,
            "diff": cls.DIFFERENCE,
            "difference": cls.DIFFERENCE,
        }
        try:
            return aliases[token]
        except KeyError as exc:
            raise ValueError(f"unknown comparison mode: {value}") from exc


@dataclass(frozen=True, slots=True)
class ColorDomain:
    """Closed range of observed values; ``EMPTY_DOMAIN`` when nothing was seen."""

    min: float
    max: float
    empty: bool = False

    @property
    def is_empty(self) -> bool:
        return self.empty

    @property
    def is_degenerate(self) -> bool:
        return not self.empty and self.min == self.max

    @property
    def span(self) -> float:
        return 0.0 if self.empty else self.max - self.min

    def as_tuple(self) -> tuple[float, float] | None:
        return None if self.empty else (self.min, self.max)


EMPTY_DOMAIN = ColorDomain(0.0, 0.0, empty=True)


def resolve_values_domain(
    values: Iterable[float | None], *, include_zero: bool = False
) -> ColorDomain:
    """Return the finite min/max of ``values`` or :data:`EMPTY_DOMAIN`.

    With ``include_zero`` the lower bound is anchored at zero (and the upper
    bound at least zero) once any value is defined.
    """

    lo = math.inf
    hi = -math.inf
    for value in values:
        if value is None or not math.isfinite(value):
            continue
        lo = min(lo, value)
        hi = max(hi, value)
    if lo > hi:
        return EMPTY_DOMAIN
    if include_zero:
        lo = min(lo, 0.0)
        hi = max(hi, 0.0)
    return ColorDomain(float(lo), float(hi))


def resolve_domain(
    series_a: ScalarTable,
    series_b: ScalarTable | None = None,
    mode: ComparisonMode = ComparisonMode.SERIES_A,
) -> ColorDomain:
    """Scan every (region, year) pair of the tables under ``mode``.

    The keys scanned are the union of both tables, so the result does not
    depend on iteration order or on which table a region appears in.
    """

    mode = ComparisonMode.parse(mode)
    keys: set[tuple[str, int]] = {(code, year) for code, year, _ in series_a.cells()}
    if series_b is not None:
        keys.update((code, year) for code, year, _ in series_b.cells())
    return resolve_values_domain(
        mode.combine(series_a, series_b, code, year) for code, year in keys
    )
