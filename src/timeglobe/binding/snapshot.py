# SPDX-License-Identifier: Apache-2.0
"""Render snapshots and the immutable datasets they carry."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from timeglobe.color.domain import ComparisonMode
from timeglobe.data.annexation import AnnexationInterval
from timeglobe.data.table import ScalarTable

SNAPSHOT_FIELDS = ("year", "mode", "data")


def _digest(items: Mapping[str, object]) -> str:
    h = hashlib.sha256()
    for key in sorted(items):
        h.update(f"{key}={items[key]!r}\n".encode())
    return h.hexdigest()


@dataclass(frozen=True)
class LifeData:
    """Two demographic series over the same code space (e.g. males, females)."""

    series_a: ScalarTable
    series_b: ScalarTable
    label_a: str = "Males"
    label_b: str = "Females"
    fingerprint: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        digest = hashlib.sha256(
            "|".join(
                (
                    self.series_a.fingerprint,
                    self.series_b.fingerprint,
                    self.label_a,
                    self.label_b,
                )
            ).encode()
        ).hexdigest()
        object.__setattr__(self, "fingerprint", digest)

    def years(self) -> list[int]:
        return sorted(set(self.series_a.years()) | set(self.series_b.years()))


@dataclass(frozen=True)
class TravelData:
    days: Mapping[str, float]
    fingerprint: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "days", MappingProxyType(dict(self.days)))
        object.__setattr__(self, "fingerprint", _digest(self.days))

    def __hash__(self) -> int:
        return hash(self.fingerprint)


@dataclass(frozen=True)
class AnnexationData:
    intervals: Mapping[str, AnnexationInterval]
    fingerprint: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "intervals", MappingProxyType(dict(self.intervals)))
        object.__setattr__(
            self,
            "fingerprint",
            _digest({k: v.as_list() for k, v in self.intervals.items()}),
        )

    def __hash__(self) -> int:
        return hash(self.fingerprint)


Dataset = LifeData | TravelData | AnnexationData


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything that determines the colors and tooltips of one frame."""

    year: int
    data: Dataset
    mode: ComparisonMode | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "year", int(self.year))
        if self.mode is not None:
            object.__setattr__(self, "mode", ComparisonMode.parse(self.mode))

    def replace(self, **changes: object) -> RenderSnapshot:
        values = {"year": self.year, "data": self.data, "mode": self.mode}
        values.update(changes)
        return RenderSnapshot(**values)  # type: ignore[arg-type]

    def key_for(self, fields: tuple[str, ...]) -> tuple[object, ...]:
        """Cache key restricted to ``fields``; data is keyed by fingerprint."""
        parts: list[object] = []
        for name in fields:
            if name == "data":
                parts.append(self.data.fingerprint)
            elif name == "mode":
                parts.append(self.mode.value if self.mode is not None else None)
            else:
                parts.append(getattr(self, name))
        return tuple(parts)
