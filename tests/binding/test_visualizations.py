# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import pytest

from timeglobe.binding import (
    TRAVEL_FALLBACK,
    AnnexationData,
    LifeData,
    RenderSnapshot,
    TravelData,
    Visualization,
    available,
    create,
    get,
    register,
)
from timeglobe.color.annexation import TRANSPARENT
from timeglobe.color.domain import ComparisonMode
from timeglobe.color.palette import NEUTRAL_GRAY, palette_color
from timeglobe.data.annexation import parse_annexation
from timeglobe.data.regions import Region
from timeglobe.data.table import parse_scalar_table


@pytest.fixture
def life_data(males_csv: str, females_csv: str) -> LifeData:
    return LifeData(parse_scalar_table(males_csv), parse_scalar_table(females_csv))


RUSSIA = Region("RUS", "Russia")
FINLAND = Region("FIN", "Finland")
NORWAY = Region("NOR", "Norway")


def test_registry_lists_builtin_visualizations() -> None:
    assert {cls.slug for cls in available()} >= {"life", "travel", "annexation"}
    assert isinstance(create("travel"), Visualization)
    with pytest.raises(KeyError):
        get("weather")


def test_registry_rejects_duplicates() -> None:
    class Clash(Visualization):
        slug = "life"

        def style(self, snapshot):  # pragma: no cover - never bound
            raise NotImplementedError

    with pytest.raises(ValueError):
        register(Clash)


def test_life_tooltip(life_data: LifeData) -> None:
    style = create("life").style(
        RenderSnapshot(2000, life_data, ComparisonMode.SERIES_A)
    )
    assert style.tooltip(RUSSIA) == (
        "Russia\n2000\nMales: 59.00\nFemales: 72.30\nDifference: 13.30"
    )


def test_life_tooltip_marks_missing_values(life_data: LifeData) -> None:
    style = create("life").style(RenderSnapshot(2002, life_data, "a"))
    text = style.tooltip(FINLAND)
    assert "Males: n/a" in text
    assert "Females: 81.60" in text
    assert text.endswith("Difference: n/a")


def test_life_missing_region_uses_gray(life_data: LifeData) -> None:
    viz = create("life")
    for mode in viz.modes():
        style = viz.style(RenderSnapshot(2000, life_data, mode))
        assert style.fill(NORWAY) == NEUTRAL_GRAY


def test_life_difference_is_inverted(life_data: LifeData) -> None:
    viz = create("life")
    snapshot = RenderSnapshot(2000, life_data, ComparisonMode.DIFFERENCE)
    domain = viz.domain(life_data, ComparisonMode.DIFFERENCE)
    assert domain.min == pytest.approx(81.0 - 74.2)
    assert domain.max == pytest.approx(71.9 - 58.5)
    style = viz.style(snapshot)
    # Finland has the smallest gap, which lands on the green end.
    assert style.fill(FINLAND) == palette_color("RdYlGn", 1.0)


def test_life_domain_spans_all_years(life_data: LifeData) -> None:
    viz = create("life")
    domain = viz.domain(life_data, ComparisonMode.SERIES_A)
    assert (domain.min, domain.max) == (58.5, 74.6)
    assert viz.domain(life_data, ComparisonMode.SERIES_A) is domain


def test_life_default_mode_is_difference(life_data: LifeData) -> None:
    viz = create("life")
    implicit = viz.style(RenderSnapshot(2000, life_data))
    explicit = viz.style(RenderSnapshot(2000, life_data, "diff"))
    assert implicit.fill(RUSSIA) == explicit.fill(RUSSIA)


def test_life_year_range(life_data: LifeData) -> None:
    viz = create("life")
    assert viz.year_range(life_data, now_year=2024) == (2000, 2002)
    empty = LifeData(parse_scalar_table(""), parse_scalar_table(""))
    assert viz.year_range(empty, now_year=2024) == (2024, 2024)


def test_travel_colors_and_tooltips() -> None:
    data = TravelData({"FI": 30, "NO": 0})
    style = create("travel").style(RenderSnapshot(2020, data))
    assert style.fill(Region("NO", "Norway")) == palette_color("YlGn", 0.0)
    assert style.fill(Region("NO", "Norway")) != TRAVEL_FALLBACK
    assert style.fill(Region("FI", "Finland")) == palette_color("YlGn", 1.0)
    assert style.fill(Region("EE", "Estonia")) == TRAVEL_FALLBACK
    assert style.tooltip(Region("FI", "Finland")) == "Finland\n30 days"
    assert style.tooltip(Region("NO", "Norway")) == "Norway\n0 days"
    assert style.tooltip(Region("EE", "Estonia")) == "Estonia\nno data"


def test_travel_fractional_days() -> None:
    style = create("travel").style(RenderSnapshot(2020, TravelData({"FI": 2.5})))
    assert style.tooltip(Region("FI", "Finland")) == "Finland\n2.5 days"


def test_annexation_style(annexation_years: dict) -> None:
    data = AnnexationData(parse_annexation(annexation_years))
    viz = create("annexation")
    style = viz.style(RenderSnapshot(1720, data))
    moscow = Region("RU-MOS", "Moscow Oblast")
    tver = Region("RU-TVE", "Tver Oblast")
    assert style.visible(moscow)
    assert not style.visible(tver)
    assert style.fill(tver) == TRANSPARENT
    assert style.tooltip(moscow) == "Moscow Oblast\n1700-"
    assert style.tooltip(Region("FI", "Finland")) == "Finland\n1800-1900"
    assert style.tooltip(Region("NO", "Norway")) is None
    assert viz.year_range(data, now_year=2024) == (1700, 2024)


def test_year_range_rejects_wrong_dataset() -> None:
    with pytest.raises(TypeError, match="LifeData"):
        create("life").year_range(TravelData({}), now_year=2024)
    with pytest.raises(TypeError, match="AnnexationData"):
        create("annexation").year_range(TravelData({}), now_year=2024)
