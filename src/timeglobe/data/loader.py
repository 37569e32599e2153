# SPDX-License-Identifier: Apache-2.0
"""Payload fetching and stale-result protection.

Fetching is the only asynchronous boundary: a payload is read once from a
local path or an ``http(s)`` URL with no retry policy. A fetch that fails
leaves its visualization without data. Results are applied through a
:class:`GenerationGate` so a slow fetch cannot overwrite the result of a
newer one.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Generic, TypeVar

from timeglobe.data.annexation import AnnexationInterval, loads_annexation
from timeglobe.data.table import ScalarTable, parse_scalar_table
from timeglobe.data.travel import loads_travel_days
from timeglobe.utils.io_utils import read_text

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

_REQUESTS: Any | None = None


class PayloadError(Exception):
    """Raised when a payload cannot be fetched."""


def _import_requests():  # pragma: no cover - import guard
    """Import and cache the `requests` module lazily."""
    global _REQUESTS
    if _REQUESTS is not None:
        return _REQUESTS
    import requests as _req

    _REQUESTS = _req
    return _REQUESTS


def _is_remote(source: str | Path) -> bool:
    return isinstance(source, str) and source.lower().startswith(
        ("http://", "https://")
    )


def fetch_text(source: str | Path, *, timeout: int = 60) -> str:
    """Return the text of ``source`` (local path, ``-`` or http(s) URL)."""

    if _is_remote(source):
        requests = _import_requests()
        try:
            resp = requests.get(str(source), timeout=timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise PayloadError(f"Failed to fetch {source}: {exc}") from exc
        try:
            return resp.content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise PayloadError(f"{source} is not UTF-8 text: {exc}") from exc
    try:
        return read_text(source)
    except UnicodeDecodeError as exc:
        raise PayloadError(f"{source} is not UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise PayloadError(f"Failed to read {source}: {exc}") from exc


async def fetch_text_async(source: str | Path, *, timeout: int = 60) -> str:
    """Asynchronous wrapper around :func:`fetch_text`."""

    return await asyncio.to_thread(fetch_text, source, timeout=timeout)


class GenerationGate(Generic[T]):
    """Last-issued-wins holder for asynchronously loaded values.

    Call :meth:`begin` before starting a fetch and pass the returned
    generation to :meth:`apply` with the result. A result is applied only if
    no newer generation has been issued since, so superseded fetches are
    dropped regardless of completion order.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._issued = 0
        self._applied = 0
        self._value: T | None = None

    def begin(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def apply(self, generation: int, value: T) -> bool:
        with self._lock:
            if generation != self._issued or generation <= self._applied:
                LOGGER.debug(
                    "Dropping stale result for generation %d (latest %d)",
                    generation,
                    self._issued,
                )
                return False
            self._applied = generation
            self._value = value
            return True

    @property
    def current(self) -> T | None:
        with self._lock:
            return self._value

    @property
    def generation(self) -> int:
        """Generation of the value currently applied (0 when none)."""
        with self._lock:
            return self._applied


def load_life_tables(
    series_a: str | Path,
    series_b: str | Path,
    *,
    skip_rows: int = 0,
) -> tuple[ScalarTable, ScalarTable]:
    """Fetch and parse the two series of a demographic dataset."""

    tables = tuple(
        parse_scalar_table(fetch_text(src), skip_rows=skip_rows)
        for src in (series_a, series_b)
    )
    LOGGER.info(
        "Loaded demographic series: %d and %d regions", len(tables[0]), len(tables[1])
    )
    return tables[0], tables[1]


def load_travel_days(source: str | Path) -> Mapping[str, float]:
    return loads_travel_days(fetch_text(source))


def load_annexation(source: str | Path) -> Mapping[str, AnnexationInterval]:
    return loads_annexation(fetch_text(source))
