# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import math

import pytest

from timeglobe.color.annexation import (
    BLACK,
    GREEN_HUE,
    RED_HUE,
    TRANSPARENT,
    WHITE,
    AnnexationColorizer,
    RegionState,
)
from timeglobe.data.annexation import AnnexationInterval as Interval


def _colorizer(**intervals: Interval) -> AnnexationColorizer:
    return AnnexationColorizer({k.replace("_", "-"): v for k, v in intervals.items()})


def test_epoch_is_earliest_start() -> None:
    colorizer = _colorizer(RU_MOS=Interval(1700), RU_TVE=Interval(1750))
    assert colorizer.epoch == 1700
    assert AnnexationColorizer({}).epoch is None


def test_oldest_controlled_region_is_darkest() -> None:
    colorizer = _colorizer(RU_MOS=Interval(1700))
    assert colorizer.state("RU-MOS", 1900) is RegionState.CONTROLLED
    assert colorizer.lightness("RU-MOS", 1900) == 0.0
    assert colorizer.fill_color("RU-MOS", 1900) == (0, 0, 0)
    assert colorizer.contrast_color("RU-MOS", 1900) == WHITE


def test_later_annexations_are_lighter() -> None:
    colorizer = _colorizer(RU_MOS=Interval(1700), RU_TVE=Interval(1750))
    assert colorizer.lightness("RU-TVE", 1800) == pytest.approx(0.5)
    assert colorizer.hsl("RU-TVE", 1800).h == RED_HUE


def test_liberated_region_is_green() -> None:
    colorizer = _colorizer(FI=Interval(1700, 1800))
    assert colorizer.state("FI", 1900) is RegionState.LIBERATED
    assert colorizer.hsl("FI", 1900).h == GREEN_HUE
    assert colorizer.lightness("FI", 1900) == pytest.approx(0.5)
    assert colorizer.fill_color("FI", 1900) == (31, 224, 102)
    assert colorizer.contrast_color("FI", 1900) == WHITE


def test_end_year_is_still_controlled() -> None:
    colorizer = _colorizer(FI=Interval(1700, 1800))
    assert colorizer.state("FI", 1800) is RegionState.CONTROLLED
    assert colorizer.state("FI", 1801) is RegionState.LIBERATED


def test_short_occupation_is_light_with_black_text() -> None:
    colorizer = _colorizer(RU_MOS=Interval(1700), EE=Interval(1880, 1890))
    assert colorizer.lightness("EE", 1900) == pytest.approx(0.95)
    assert colorizer.contrast_color("EE", 1900) == BLACK


def test_selected_year_equal_to_epoch_is_defined() -> None:
    colorizer = _colorizer(RU_MOS=Interval(1700), RU_TVE=Interval(1750))
    lightness = colorizer.lightness("RU-MOS", 1700)
    assert lightness is not None and not math.isnan(lightness)
    assert 0.0 <= lightness <= 1.0
    assert colorizer.fill_color("RU-MOS", 1700) == (0, 0, 0)


def test_lightness_stays_in_unit_interval() -> None:
    colorizer = _colorizer(
        A=Interval(1500), B=Interval(1600, 1610), C=Interval(1501, 1900)
    )
    for year in range(1500, 2000, 7):
        for code in ("A", "B", "C"):
            lightness = colorizer.lightness(code, year)
            if lightness is not None:
                assert 0.0 <= lightness <= 1.0


def test_not_yet_annexed_and_unknown_are_excluded() -> None:
    colorizer = _colorizer(RU_MOS=Interval(1700), RU_TVE=Interval(1750))
    assert colorizer.state("RU-TVE", 1749) is RegionState.EXCLUDED
    assert colorizer.fill_color("RU-TVE", 1749) == TRANSPARENT
    assert colorizer.lightness("RU-TVE", 1749) is None
    assert colorizer.state("XX", 1900) is RegionState.EXCLUDED
    assert colorizer.fill_color("XX", 1900) == TRANSPARENT


def test_active_codes_by_start_year() -> None:
    colorizer = _colorizer(RU_MOS=Interval(1700), RU_TVE=Interval(1750))
    assert colorizer.active_codes(1699) == frozenset()
    assert colorizer.active_codes(1700) == {"RU-MOS"}
    assert colorizer.active_codes(1750) == {"RU-MOS", "RU-TVE"}
