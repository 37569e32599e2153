# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import json
from pathlib import Path

import pytest

MALES_CSV = """\
Country;Code;2000;2001;2002
Russia;RUS;59,0;58,9;58,5
Finland;FIN;74,2;74,6;
Nowhere;XXX;;;
"""

FEMALES_CSV = """\
Country;Code;2000;2001;2002
Russia;RUS;72,3;72,2;71,9
Finland;FIN;81,0;81,5;81,6
"""


def _square(lon: float, lat: float, size: float = 1.0) -> dict:
    ring = [
        [lon, lat],
        [lon + size, lat],
        [lon + size, lat + size],
        [lon, lat + size],
        [lon, lat],
    ]
    return {"type": "Polygon", "coordinates": [ring]}


def _feature(props: dict, lon: float, lat: float) -> dict:
    return {"type": "Feature", "properties": props, "geometry": _square(lon, lat)}


@pytest.fixture
def males_csv() -> str:
    return MALES_CSV


@pytest.fixture
def females_csv() -> str:
    return FEMALES_CSV


@pytest.fixture
def countries_a3() -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            _feature({"ISO_A3": "RUS", "ADMIN": "Russia"}, 40.0, 55.0),
            _feature({"ISO_A3": "FIN", "ADMIN": "Finland"}, 25.0, 62.0),
            _feature({"ISO_A3": "NOR", "ADMIN": "Norway"}, 10.0, 61.0),
            _feature({"ISO_A3": "-99", "ADMIN": "Somaliland"}, 45.0, 9.0),
        ],
    }


@pytest.fixture
def countries_a2() -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            _feature({"ISO_A2": "FI", "ADMIN": "Finland"}, 25.0, 62.0),
            _feature({"ISO_A2": "NO", "ADMIN": "Norway"}, 10.0, 61.0),
            _feature({"ISO_A2": "EE", "ADMIN": "Estonia"}, 25.0, 58.0),
        ],
    }


@pytest.fixture
def subdivisions() -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            _feature({"shapeISO": "RU-MOS", "shapeName": "Moscow Oblast"}, 37.0, 55.0),
            _feature({"shapeISO": "RU-TVE", "shapeName": "Tver Oblast"}, 35.0, 57.0),
        ],
    }


@pytest.fixture
def annexation_years() -> dict:
    return {
        "RU-MOS": [1700],
        "RU-TVE": [1750],
        "FI": [1800, 1900],
    }


@pytest.fixture
def write_json(tmp_path: Path):
    def _write(name: str, payload: object) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
