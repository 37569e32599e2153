# SPDX-License-Identifier: Apache-2.0
"""Travel-day counts per country (ISO alpha-2 -> days)."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

LOGGER = logging.getLogger(__name__)


def parse_travel_days(document: Any) -> Mapping[str, float]:
    """Return an immutable code -> days mapping; non-numeric entries are dropped."""

    if not isinstance(document, Mapping):
        raise ValueError("travel dataset must be a JSON object")
    days: dict[str, float] = {}
    for code, value in document.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            LOGGER.warning("Skipping travel entry %s: %r is not a number", code, value)
            continue
        if not math.isfinite(value):
            continue
        days[str(code)] = value
    return MappingProxyType(days)


def loads_travel_days(text: str) -> Mapping[str, float]:
    return parse_travel_days(json.loads(text))
