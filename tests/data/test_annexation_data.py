# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import logging

import pytest

from timeglobe.data.annexation import (
    AnnexationDataError,
    AnnexationInterval,
    loads_annexation,
    parse_annexation,
)


def test_interval_from_sequence() -> None:
    assert AnnexationInterval.from_sequence([1700]) == AnnexationInterval(1700)
    assert AnnexationInterval.from_sequence([1700, 1800]) == AnnexationInterval(1700, 1800)
    assert AnnexationInterval(1700).label() == "1700-"
    assert AnnexationInterval(1700, 1800).label() == "1700-1800"
    assert AnnexationInterval(1700, 1800).liberated
    assert not AnnexationInterval(1700).liberated


@pytest.mark.parametrize(
    "years", [[], [1, 2, 3], ["1700"], [1700.5], "1700", 1700, [1800, 1700], [True]]
)
def test_interval_rejects_malformed(years) -> None:
    with pytest.raises(ValueError):
        AnnexationInterval.from_sequence(years)


def test_parse_skips_bad_entries(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        intervals = parse_annexation({"A": [1700], "B": [1, 2, 3], "C": [1600, 1650]})
    assert set(intervals) == {"A", "C"}
    assert intervals["C"].end == 1650
    assert "Skipping annexation entry B" in caplog.text


def test_parse_rejects_non_mapping() -> None:
    with pytest.raises(AnnexationDataError):
        parse_annexation([["A", 1700]])
    with pytest.raises(AnnexationDataError):
        loads_annexation("{not json")


def test_parsed_mapping_is_read_only() -> None:
    intervals = loads_annexation('{"RU-MOS": [1147]}')
    with pytest.raises(TypeError):
        intervals["X"] = AnnexationInterval(1)  # type: ignore[index]
