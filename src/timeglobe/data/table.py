# SPDX-License-Identifier: Apache-2.0
"""Sparse region x year tables parsed from semicolon-delimited payloads.

Payload layout::

    <caption>;<caption>;1960;1961;1962
    <ignored>;RUS;68,1;;0
    <ignored>;FIN;69,0;69,2;69,5

Year labels start at column 2 of the header line. Each data line carries
the region code in column 1 and one cell per header year. Cells use ``,``
as the decimal separator and may be empty. An empty or malformed cell is
an absent observation; ``0`` is a present observation.
"""

from __future__ import annotations

import hashlib
import logging
import math
import re
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from timeglobe.utils.io_utils import read_text

LOGGER = logging.getLogger(__name__)

DELIMITER = ";"
FIRST_YEAR_COLUMN = 2
CODE_COLUMN = 1

_NUMBER_RX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


def parse_cell(cell: str | None) -> float | None:
    """Return the numeric value of ``cell`` or ``None`` when absent or malformed."""

    if cell is None:
        return None
    token = cell.strip().strip('"').strip()
    if not token:
        return None
    token = token.replace(",", ".")
    if not _NUMBER_RX.match(token):
        LOGGER.debug("Ignoring malformed cell %r", cell)
        return None
    value = float(token)
    if not math.isfinite(value):
        return None
    return value


def _parse_year(label: str) -> int | None:
    token = label.strip().strip('"').strip()
    try:
        return int(token)
    except ValueError:
        return None


def _clean_code(cell: str) -> str:
    return cell.strip().strip('"').strip()


class ScalarTable(Mapping[str, Mapping[int, float]]):
    """Immutable sparse lookup ``region code -> year -> value``."""

    __slots__ = ("_rows", "_fingerprint")

    def __init__(self, rows: Mapping[str, Mapping[int, float]] | None = None) -> None:
        frozen: dict[str, Mapping[int, float]] = {}
        for code, series in (rows or {}).items():
            clean = {
                int(year): float(value)
                for year, value in series.items()
                if value is not None and math.isfinite(float(value))
            }
            if clean:
                frozen[str(code)] = MappingProxyType(clean)
        self._rows: Mapping[str, Mapping[int, float]] = MappingProxyType(frozen)
        self._fingerprint = _digest(self._rows)

    def __getitem__(self, code: str) -> Mapping[int, float]:
        return self._rows[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"ScalarTable(regions={len(self)}, fingerprint={self._fingerprint[:12]})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ScalarTable):
            return self._fingerprint == other._fingerprint
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash(self._fingerprint)

    @property
    def fingerprint(self) -> str:
        """Content digest, stable across processes; used as a cache key."""
        return self._fingerprint

    def value(self, code: str, year: int) -> float | None:
        """Return the observation for ``(code, year)`` or ``None`` when absent."""
        series = self._rows.get(code)
        if series is None:
            return None
        return series.get(year)

    def has(self, code: str, year: int) -> bool:
        return self.value(code, year) is not None

    def years(self) -> list[int]:
        """Sorted list of every year with at least one observation."""
        seen: set[int] = set()
        for series in self._rows.values():
            seen.update(series)
        return sorted(seen)

    def cells(self) -> Iterator[tuple[str, int, float]]:
        for code, series in self._rows.items():
            for year, value in series.items():
                yield code, year, value


def _digest(rows: Mapping[str, Mapping[int, float]]) -> str:
    h = hashlib.sha256()
    for code in sorted(rows):
        h.update(code.encode("utf-8"))
        h.update(b"\x00")
        for year in sorted(rows[code]):
            h.update(f"{year}={rows[code][year]!r};".encode())
        h.update(b"\n")
    return h.hexdigest()


def _lines(text: str) -> Iterable[str]:
    for line in text.splitlines():
        if line.strip():
            yield line


def parse_scalar_table(
    text: str,
    *,
    skip_rows: int = 0,
    first_year_column: int = FIRST_YEAR_COLUMN,
) -> ScalarTable:
    """Parse a semicolon-delimited payload into a :class:`ScalarTable`.

    Parameters
    ----------
    text:
        Raw payload text.
    skip_rows:
        Number of non-blank caption lines preceding the year header.
    first_year_column:
        Column index of the first year label in the header line.

    Parsing never aborts on a single cell: malformed cells are absent, header
    labels that are not integers disable their column, and lines without a
    region code are skipped.
    """

    lines = iter(_lines(text.lstrip("\ufeff")))
    for _ in range(skip_rows):
        if next(lines, None) is None:
            return ScalarTable()
    header = next(lines, None)
    if header is None:
        return ScalarTable()

    columns: list[tuple[int, int]] = []
    for idx, label in enumerate(header.split(DELIMITER)):
        if idx < first_year_column:
            continue
        year = _parse_year(label)
        if year is None:
            LOGGER.debug("Header column %d is not a year: %r", idx, label)
            continue
        columns.append((idx, year))

    rows: dict[str, dict[int, float]] = {}
    for lineno, line in enumerate(lines, start=skip_rows + 2):
        cells = line.split(DELIMITER)
        if len(cells) <= CODE_COLUMN:
            LOGGER.debug("Line %d has no region code column", lineno)
            continue
        code = _clean_code(cells[CODE_COLUMN])
        if not code:
            continue
        series = rows.setdefault(code, {})
        for idx, year in columns:
            if idx >= len(cells):
                break
            value = parse_cell(cells[idx])
            if value is not None:
                series[year] = value

    table = ScalarTable(rows)
    LOGGER.debug("Parsed scalar table with %d regions", len(table))
    return table


def read_scalar_table(
    path_or_dash: str | Path,
    *,
    skip_rows: int = 0,
    first_year_column: int = FIRST_YEAR_COLUMN,
) -> ScalarTable:
    """Read and parse a payload from a local path or ``-`` for stdin."""

    return parse_scalar_table(
        read_text(path_or_dash),
        skip_rows=skip_rows,
        first_year_column=first_year_column,
    )
