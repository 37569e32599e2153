# SPDX-License-Identifier: Apache-2.0
"""Region identity for GeoJSON features.

Features arrive with one of two property conventions: Natural Earth country
shapes (``ISO_A2``/``ISO_A3`` + ``ADMIN``) or geoBoundaries subdivision
shapes (``shapeISO`` + ``shapeName``). Both are resolved once, at ingestion,
into a canonical :class:`Region` so color and tooltip functions never branch
on property keys.
"""

from __future__ import annotations

import enum
import json
from collections.abc import Container, Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from timeglobe.utils.io_utils import read_text

# Natural Earth marks countries without an assigned ISO code this way.
MISSING_CODES = frozenset({"", "-99", "-1"})


class CodeSpace(str, enum.Enum):
    """Code families that may not be mixed within one lookup."""

    ALPHA2 = "alpha2"  # ISO 3166-1 alpha-2 and ISO 3166-2 subdivisions
    ALPHA3 = "alpha3"


@dataclass(frozen=True, slots=True)
class PropertyConvention:
    label: str
    code_key: str
    name_key: str

    def matches(self, properties: Mapping[str, Any]) -> bool:
        return self.code_key in properties

    def resolve(self, properties: Mapping[str, Any]) -> Region | None:
        code = str(properties.get(self.code_key) or "").strip()
        if code in MISSING_CODES:
            return None
        name = str(properties.get(self.name_key) or code)
        return Region(code=code, name=name)


NATURAL_EARTH_A2 = PropertyConvention("natural-earth", "ISO_A2", "ADMIN")
NATURAL_EARTH_A3 = PropertyConvention("natural-earth", "ISO_A3", "ADMIN")
GEOBOUNDARIES = PropertyConvention("geoboundaries", "shapeISO", "shapeName")

CONVENTIONS: dict[CodeSpace, tuple[PropertyConvention, ...]] = {
    CodeSpace.ALPHA2: (NATURAL_EARTH_A2, GEOBOUNDARIES),
    CodeSpace.ALPHA3: (NATURAL_EARTH_A3,),
}


@dataclass(frozen=True, slots=True)
class Region:
    code: str
    name: str


@dataclass(frozen=True, slots=True)
class RegionFeature:
    """A GeoJSON feature paired with its resolved region identity."""

    region: Region
    feature: Mapping[str, Any]

    @property
    def code(self) -> str:
        return self.region.code

    @property
    def name(self) -> str:
        return self.region.name


def resolve_region(
    properties: Mapping[str, Any] | None,
    *,
    code_space: CodeSpace = CodeSpace.ALPHA2,
) -> Region | None:
    """Return the canonical region for ``properties`` or ``None``."""

    if not isinstance(properties, Mapping):
        return None
    for convention in CONVENTIONS[code_space]:
        if convention.matches(properties):
            return convention.resolve(properties)
    return None


def region_of(obj: Any, *, code_space: CodeSpace = CodeSpace.ALPHA2) -> Region | None:
    """Resolve a region from a RegionFeature, GeoJSON feature or pick info.

    Pick info mappings carry the picked feature under ``object``, as deck.gl
    does.
    """

    if isinstance(obj, RegionFeature):
        return obj.region
    if isinstance(obj, Region):
        return obj
    if not isinstance(obj, Mapping):
        return None
    if "object" in obj:
        return region_of(obj.get("object"), code_space=code_space)
    return resolve_region(obj.get("properties"), code_space=code_space)


def _iter_features(collections: Iterable[Mapping[str, Any]]) -> Iterator[Mapping[str, Any]]:
    for collection in collections:
        if collection.get("type") == "Feature":
            yield collection
            continue
        yield from collection.get("features") or []


def ingest_features(
    *collections: Mapping[str, Any],
    code_space: CodeSpace = CodeSpace.ALPHA2,
    keep: Container[str] | None = None,
) -> list[RegionFeature]:
    """Flatten feature collections into resolved :class:`RegionFeature` items.

    Features with no resolvable code are dropped, as are features whose code
    is not in ``keep`` when given. Input order is preserved.
    """

    out: list[RegionFeature] = []
    for feature in _iter_features(collections):
        region = resolve_region(feature.get("properties"), code_space=code_space)
        if region is None:
            continue
        if keep is not None and region.code not in keep:
            continue
        out.append(RegionFeature(region=region, feature=feature))
    return out


def read_feature_collection(path_or_dash: str | Path) -> dict[str, Any]:
    """Read a GeoJSON FeatureCollection from disk or stdin."""

    data = json.loads(read_text(path_or_dash))
    if not isinstance(data, dict) or data.get("type") not in {
        "FeatureCollection",
        "Feature",
    }:
        raise ValueError(f"Not a GeoJSON feature collection: {path_or_dash}")
    return data
