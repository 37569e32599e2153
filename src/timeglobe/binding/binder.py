# SPDX-License-Identifier: Apache-2.0
"""Bind render snapshots to per-feature renderer callbacks.

``FeatureBinder.bind`` returns a :class:`Binding` whose callbacks follow the
renderer contract: ``fill_color_of(feature) -> [r, g, b(, a)]`` and
``tooltip_of(picked) -> {"text": ...} | None``. Bindings are memoized in an
explicit table keyed by the visualization slug plus the snapshot fields the
visualization declares in ``depends_on``; changing any other field reuses
the cached binding.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from timeglobe.data.regions import Region, RegionFeature, region_of

from .snapshot import RenderSnapshot
from .visualizations import Color, FeatureStyle, Visualization
from .visualizations import create as create_visualization

LOGGER = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 256


class CacheInfo(NamedTuple):
    hits: int
    misses: int
    size: int
    max_size: int


@dataclass(frozen=True, eq=False)
class Binding:
    """Renderer callbacks shared by every snapshot with the same cache key."""

    visualization: Visualization
    style: FeatureStyle
    update_triggers: dict[str, Any] = field(default_factory=dict)

    def _region(self, obj: Any) -> Region | None:
        return region_of(obj, code_space=self.visualization.code_space)

    def fill_color_of(self, feature: Any) -> Color:
        region = self._region(feature)
        if region is None:
            return self.visualization.fallback
        return self.style.fill(region)

    def line_color_of(self, feature: Any) -> Color:
        region = self._region(feature)
        if region is None:
            return self.style.line(Region(code="", name=""))
        return self.style.line(region)

    def text_color_of(self, feature: Any) -> Color:
        region = self._region(feature)
        if region is None:
            return self.style.text(Region(code="", name=""))
        return self.style.text(region)

    def tooltip_of(self, picked: Any) -> dict[str, str] | None:
        """Tooltip for a picked object, or ``None`` without recognized properties."""
        region = self._region(picked)
        if region is None:
            return None
        text = self.style.tooltip(region)
        return None if text is None else {"text": text}

    def is_visible(self, feature: Any) -> bool:
        region = self._region(feature)
        return region is not None and self.style.visible(region)

    def select(self, features: Iterable[RegionFeature]) -> list[RegionFeature]:
        """Features to hand to the renderer for this snapshot."""
        return [f for f in features if self.style.visible(f.region)]


class FeatureBinder:
    """Memoizing factory of :class:`Binding` objects for one visualization."""

    def __init__(
        self,
        visualization: Visualization | str,
        *,
        max_entries: int = DEFAULT_CACHE_SIZE,
    ) -> None:
        if isinstance(visualization, str):
            visualization = create_visualization(visualization)
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.visualization = visualization
        self._max_entries = max_entries
        self._cache: OrderedDict[tuple[Any, ...], Binding] = OrderedDict()
        self._hits = 0
        self._misses = 0

    @property
    def depends_on(self) -> tuple[str, ...]:
        return self.visualization.depends_on

    def cache_key(self, snapshot: RenderSnapshot) -> tuple[Any, ...]:
        return (self.visualization.slug, *snapshot.key_for(self.depends_on))

    def update_triggers(self, snapshot: RenderSnapshot) -> dict[str, Any]:
        """Values of the declared dependencies; a host re-renders when any differ."""
        return dict(zip(self.depends_on, snapshot.key_for(self.depends_on)))

    def bind(self, snapshot: RenderSnapshot) -> Binding:
        key = self.cache_key(snapshot)
        cached = self._cache.get(key)
        if cached is not None:
            self._hits += 1
            self._cache.move_to_end(key)
            return cached
        self._misses += 1
        LOGGER.debug("Binding %s for %s", self.visualization.slug, key[1:])
        binding = Binding(
            visualization=self.visualization,
            style=self.visualization.style(snapshot),
            update_triggers=self.update_triggers(snapshot),
        )
        self._cache[key] = binding
        while len(self._cache) > self._max_entries:
            self._cache.popitem(last=False)
        return binding

    def clear(self) -> None:
        self._cache.clear()
        self._hits = 0
        self._misses = 0

    def cache_info(self) -> CacheInfo:
        return CacheInfo(self._hits, self._misses, len(self._cache), self._max_entries)
