# SPDX-License-Identifier: Apache-2.0
"""Per-visualization color and tooltip policies.

A visualization turns a :class:`RenderSnapshot` into a :class:`FeatureStyle`
of pure per-region callables and declares which snapshot fields those
callables read (``depends_on``). The binder caches on exactly those fields.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import OrderedDict
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

from timeglobe.color.annexation import WHITE, AnnexationColorizer
from timeglobe.color.domain import (
    ColorDomain,
    ComparisonMode,
    resolve_domain,
    resolve_values_domain,
)
from timeglobe.color.palette import NEUTRAL_GRAY, DivergingColorMapper
from timeglobe.data.regions import CodeSpace, Region

from .snapshot import AnnexationData, LifeData, RenderSnapshot, TravelData

Color = tuple[int, ...]

_DataT = TypeVar("_DataT")

TRAVEL_FALLBACK: Color = (180, 180, 180)


@dataclass(frozen=True)
class FeatureStyle:
    """Pure callables over canonical regions for one snapshot."""

    fill: Callable[[Region], Color]
    tooltip: Callable[[Region], str | None]
    line: Callable[[Region], Color] = lambda _region: WHITE
    text: Callable[[Region], Color] = lambda _region: WHITE
    visible: Callable[[Region], bool] = lambda _region: True


class Visualization(ABC):
    slug: str = ""
    description: str = ""
    depends_on: tuple[str, ...] = ("year", "mode", "data")
    code_space: CodeSpace = CodeSpace.ALPHA2
    fallback: Color = NEUTRAL_GRAY

    @abstractmethod
    def style(self, snapshot: RenderSnapshot) -> FeatureStyle:
        """Build the color/tooltip callables for ``snapshot``."""

    def modes(self) -> tuple[ComparisonMode | None, ...]:
        """Modes offered by the UI for this visualization."""
        return (None,)

    def year_range(self, snapshot_data: object, *, now_year: int) -> tuple[int, int]:
        """Slider bounds for ``snapshot_data``."""
        return now_year, now_year

    def _dataset(self, data: object, expected: type[_DataT]) -> _DataT:
        if not isinstance(data, expected):
            raise TypeError(
                f"{self.slug} visualization requires {expected.__name__}, "
                f"got {type(data).__name__}"
            )
        return data


_VisT = TypeVar("_VisT", bound=Visualization)

_REGISTRY: dict[str, type[Visualization]] = {}


def register(cls: type[_VisT]) -> type[_VisT]:
    """Register ``cls`` keyed by its ``slug`` attribute."""

    if not issubclass(cls, Visualization):
        raise TypeError("visualization must inherit Visualization")
    if not cls.slug:
        raise ValueError("visualization slug must be non-empty")
    if cls.slug in _REGISTRY:
        raise ValueError(f"visualization slug already registered: {cls.slug}")
    _REGISTRY[cls.slug] = cls
    return cls


def get(slug: str) -> type[Visualization]:
    try:
        return _REGISTRY[slug]
    except KeyError as exc:
        raise KeyError(f"unknown visualization slug: {slug}") from exc


def create(slug: str) -> Visualization:
    return get(slug)()


def available() -> Iterable[type[Visualization]]:
    return _REGISTRY.values()


def _fmt(value: float | None) -> str:
    return "n/a" if value is None else f"{value:.2f}"


def _fmt_days(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


@register
class LifeVisualization(Visualization):
    """Two demographic series and their difference on a red-yellow-green palette.

    The domain spans every year of the selected mode so colors stay
    comparable while the year slider moves. ``DIFFERENCE`` is inverted.
    """

    slug = "life"
    description = "Life expectancy by sex, or the gap between the two."
    depends_on = ("year", "mode", "data")
    code_space = CodeSpace.ALPHA3
    fallback = NEUTRAL_GRAY
    palette = "RdYlGn"

    def __init__(self, *, domain_cache_size: int = 16) -> None:
        self._domains: OrderedDict[tuple[str, str], ColorDomain] = OrderedDict()
        self._domain_cache_size = domain_cache_size

    def modes(self) -> tuple[ComparisonMode | None, ...]:
        return (ComparisonMode.SERIES_A, ComparisonMode.SERIES_B, ComparisonMode.DIFFERENCE)

    def year_range(self, snapshot_data: object, *, now_year: int) -> tuple[int, int]:
        years = self._dataset(snapshot_data, LifeData).years()
        if not years:
            return now_year, now_year
        return years[0], years[-1]

    def domain(self, data: LifeData, mode: ComparisonMode) -> ColorDomain:
        key = (data.fingerprint, mode.value)
        cached = self._domains.get(key)
        if cached is not None:
            self._domains.move_to_end(key)
            return cached
        resolved = resolve_domain(data.series_a, data.series_b, mode)
        self._domains[key] = resolved
        while len(self._domains) > self._domain_cache_size:
            self._domains.popitem(last=False)
        return resolved

    def style(self, snapshot: RenderSnapshot) -> FeatureStyle:
        data = self._dataset(snapshot.data, LifeData)
        mode = ComparisonMode.parse(snapshot.mode or ComparisonMode.DIFFERENCE)
        year = snapshot.year
        mapper = DivergingColorMapper(
            self.domain(data, mode),
            palette=self.palette,
            invert=mode is ComparisonMode.DIFFERENCE,
            fallback=self.fallback,
        )

        def fill(region: Region) -> Color:
            return mapper(mode.combine(data.series_a, data.series_b, region.code, year))

        def tooltip(region: Region) -> str | None:
            a = data.series_a.value(region.code, year)
            b = data.series_b.value(region.code, year)
            diff = ComparisonMode.DIFFERENCE.combine(
                data.series_a, data.series_b, region.code, year
            )
            return (
                f"{region.name}\n{year}\n"
                f"{data.label_a}: {_fmt(a)}\n"
                f"{data.label_b}: {_fmt(b)}\n"
                f"Difference: {_fmt(diff)}"
            )

        return FeatureStyle(fill=fill, tooltip=tooltip)


@register
class TravelVisualization(Visualization):
    """Days spent per country on a yellow-green scale anchored at zero."""

    slug = "travel"
    description = "Days spent in each country."
    depends_on = ("data",)
    fallback = TRAVEL_FALLBACK
    palette = "YlGn"

    def style(self, snapshot: RenderSnapshot) -> FeatureStyle:
        data = self._dataset(snapshot.data, TravelData)
        days = data.days
        mapper = DivergingColorMapper(
            resolve_values_domain(days.values(), include_zero=True),
            palette=self.palette,
            fallback=self.fallback,
        )

        def fill(region: Region) -> Color:
            return mapper(days.get(region.code))

        def tooltip(region: Region) -> str | None:
            value = days.get(region.code)
            if value is None:
                return f"{region.name}\nno data"
            return f"{region.name}\n{_fmt_days(value)} days"

        return FeatureStyle(fill=fill, tooltip=tooltip)


@register
class AnnexationVisualization(Visualization):
    """Territories colored by year of conquest and, if any, liberation."""

    slug = "annexation"
    description = "Territories by year of conquest."
    depends_on = ("year", "data")
    fallback = (0, 0, 0, 0)

    def year_range(self, snapshot_data: object, *, now_year: int) -> tuple[int, int]:
        data = self._dataset(snapshot_data, AnnexationData)
        starts = [iv.start for iv in data.intervals.values()]
        return (min(starts), now_year) if starts else (now_year, now_year)

    def style(self, snapshot: RenderSnapshot) -> FeatureStyle:
        data = self._dataset(snapshot.data, AnnexationData)
        colorizer = AnnexationColorizer(data.intervals)
        year = snapshot.year
        active = colorizer.active_codes(year)

        def tooltip(region: Region) -> str | None:
            interval = data.intervals.get(region.code)
            if interval is None:
                return None
            return f"{region.name}\n{interval.label()}"

        return FeatureStyle(
            fill=lambda region: colorizer.fill_color(region.code, year),
            tooltip=tooltip,
            text=lambda region: colorizer.contrast_color(region.code, year),
            visible=lambda region: region.code in active,
        )
