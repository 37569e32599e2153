# SPDX-License-Identifier: Apache-2.0
"""Annexation intervals: the years a region came under and left control.

The dataset document maps region codes to ``[start]`` (still controlled) or
``[start, end]`` (controlled from ``start``, liberated at ``end``).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

LOGGER = logging.getLogger(__name__)


class AnnexationDataError(ValueError):
    """Raised when an annexation document is not a code -> years mapping."""


@dataclass(frozen=True, slots=True)
class AnnexationInterval:
    start: int
    end: int | None = None

    @classmethod
    def from_sequence(cls, years: Any) -> AnnexationInterval:
        if isinstance(years, (str, bytes)) or not isinstance(years, (list, tuple)):
            raise ValueError(f"expected a list of years, got {years!r}")
        if len(years) not in (1, 2):
            raise ValueError(f"expected 1 or 2 years, got {len(years)}")
        if any(isinstance(y, bool) or not isinstance(y, int) for y in years):
            raise ValueError(f"years must be integers: {years!r}")
        start = years[0]
        end = years[1] if len(years) == 2 else None
        if end is not None and end < start:
            raise ValueError(f"end year {end} precedes start year {start}")
        return cls(start=start, end=end)

    @property
    def liberated(self) -> bool:
        return self.end is not None

    def label(self) -> str:
        """``"1700-1800"`` or ``"1700-"`` for a region still controlled."""
        return f"{self.start}-{self.end if self.end is not None else ''}"

    def as_list(self) -> list[int]:
        return [self.start] if self.end is None else [self.start, self.end]


def parse_annexation(document: Any) -> Mapping[str, AnnexationInterval]:
    """Build an immutable code -> interval mapping from a decoded document.

    Entries that are not 1- or 2-element integer arrays are skipped with a
    warning; a document that is not a mapping raises
    :class:`AnnexationDataError`.
    """

    if not isinstance(document, Mapping):
        raise AnnexationDataError("annexation dataset must be a JSON object")
    intervals: dict[str, AnnexationInterval] = {}
    for code, years in document.items():
        try:
            intervals[str(code)] = AnnexationInterval.from_sequence(years)
        except ValueError as exc:
            LOGGER.warning("Skipping annexation entry %s: %s", code, exc)
    return MappingProxyType(intervals)


def loads_annexation(text: str) -> Mapping[str, AnnexationInterval]:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise AnnexationDataError(f"annexation dataset is not valid JSON: {exc}") from exc
    return parse_annexation(document)
