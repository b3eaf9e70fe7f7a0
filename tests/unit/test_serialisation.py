"""
Tests of `epiregions.serialisation`
"""

import datetime as dt
import json
import re
from contextlib import nullcontext as does_not_raise

import pytest

from epiregions.coordinate import Coordinate
from epiregions.exceptions import UnrecognisedValueError
from epiregions.region import Level, Region
from epiregions.serialisation import (
    dump_region_json,
    load_region_json,
    region_from_dict,
    region_to_dict,
)
from epiregions.statistic import Report, Statistic
from epiregions.timeseries import TimeSeries


def get_leaf():
    return Region(
        level=Level.PROVINCE,
        name="Hubei",
        parent_name="China",
        location=Coordinate(30.97, 112.27),
        report=Report(dt.datetime(2020, 3, 4, 12, 30), Statistic(120, 10, 2)),
        time_series=TimeSeries(
            {"2020-03-03": Statistic(100, 8, 1), "2020-03-02": Statistic(90, 5, 1)}
        ),
    )


def test_region_to_dict_leaf():
    res = region_to_dict(get_leaf())

    assert res == {
        "level": 3,
        "name": "Hubei",
        "parentName": "China",
        "location": {"latitude": 30.97, "longitude": 112.27},
        "report": {
            "lastUpdate": "2020-03-04T12:30:00",
            "stat": {"confirmedCount": 120, "recoveredCount": 10, "deathCount": 2},
        },
        "timeSeries": {
            "series": {
                "2020-03-02": {
                    "confirmedCount": 90,
                    "recoveredCount": 5,
                    "deathCount": 1,
                },
                "2020-03-03": {
                    "confirmedCount": 100,
                    "recoveredCount": 8,
                    "deathCount": 1,
                },
            }
        },
        "subRegions": [],
    }
    # Dates are written in ascending order
    assert list(res["timeSeries"]["series"]) == ["2020-03-02", "2020-03-03"]


def test_region_to_dict_unknowns():
    res = region_to_dict(Region.world())

    assert res["parentName"] is None
    assert res["report"] is None
    assert res["timeSeries"] is None
    assert res["subRegions"] == []


def test_region_from_dict_leaf():
    leaf = get_leaf()

    res = region_from_dict(region_to_dict(leaf))

    assert res == leaf
    assert res.location == leaf.location
    assert res.report == leaf.report
    assert res.time_series == leaf.time_series


def test_region_from_dict_recomputes_interior():
    china = Region.join([get_leaf()], assign=True)
    encoded = region_to_dict(china)
    # Whatever is stored for interior regions is ignored
    encoded["report"]["stat"]["confirmedCount"] = 1

    res = region_from_dict(encoded)

    assert res.name == "China"
    assert res.level == Level.COUNTRY
    assert len(res.sub_regions) == 1
    assert res.report.stat.confirmed_count == 120
    assert res.time_series == get_leaf().time_series


def test_region_from_dict_minimal():
    res = region_from_dict(
        {
            "level": 1,
            "name": "Worldwide",
            "location": {"latitude": 0, "longitude": 0},
        }
    )

    assert res == Region.world()
    assert res.report is None
    assert res.sub_regions == ()


@pytest.mark.parametrize(
    "level, exp",
    (
        pytest.param(1, does_not_raise(), id="world"),
        pytest.param(2, does_not_raise(), id="country"),
        pytest.param(3, does_not_raise(), id="province"),
        pytest.param(
            4,
            pytest.raises(
                UnrecognisedValueError,
                match=re.escape(
                    "4 is not a recognised value for level. known_values=[1, 2, 3]"
                ),
            ),
            id="too-fine",
        ),
        pytest.param(
            "province",
            pytest.raises(
                UnrecognisedValueError,
                match=re.escape("'province' is not a recognised value for level."),
            ),
            id="name-instead-of-value",
        ),
    ),
)
def test_region_from_dict_level(level, exp):
    encoded = region_to_dict(get_leaf())
    encoded["level"] = level

    with exp:
        res = region_from_dict(encoded)
        assert res.level == level


def test_region_from_dict_missing_key():
    encoded = region_to_dict(get_leaf())
    encoded.pop("name")

    with pytest.raises(KeyError):
        region_from_dict(encoded)


def test_json_file(tmp_path):
    world = Region.world()
    world.sub_regions = [Region.join([get_leaf()], assign=True)]
    out_file = tmp_path / "world.json"

    dump_region_json(world, out_file)

    # Plain JSON, readable without us
    raw = json.loads(out_file.read_text())
    assert raw["subRegions"][0]["subRegions"][0]["name"] == "Hubei"

    res = load_region_json(out_file)
    assert res == world
    assert res.report == world.report
    assert res.sub_regions[0].sub_regions[0].time_series == get_leaf().time_series
