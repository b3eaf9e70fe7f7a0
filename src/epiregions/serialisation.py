"""
Serialisation of region trees to and from JSON-compatible dictionaries

Keys follow the field names of the data model
(e.g. `parentName`, `timeSeries`, `subRegions`).
Daily changes are derived, so they are not serialised.
"""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any

from epiregions.coordinate import Coordinate
from epiregions.exceptions import UnrecognisedValueError
from epiregions.region import Level, Region
from epiregions.statistic import Report, Statistic
from epiregions.timeseries import TimeSeries
from epiregions.typing import JSONDict


def statistic_to_dict(stat: Statistic) -> JSONDict:
    """
    Convert a [Statistic][(p).statistic.] to a dictionary
    """
    return {
        "confirmedCount": stat.confirmed_count,
        "recoveredCount": stat.recovered_count,
        "deathCount": stat.death_count,
    }


def statistic_from_dict(d: JSONDict) -> Statistic:
    """
    Initialise a [Statistic][(p).statistic.] from a dictionary
    """
    return Statistic(
        confirmed_count=d["confirmedCount"],
        recovered_count=d["recoveredCount"],
        death_count=d["deathCount"],
    )


def report_to_dict(report: Report) -> JSONDict:
    """
    Convert a [Report][(p).statistic.] to a dictionary
    """
    return {
        "lastUpdate": report.last_update.isoformat(),
        "stat": statistic_to_dict(report.stat),
    }


def report_from_dict(d: JSONDict) -> Report:
    """
    Initialise a [Report][(p).statistic.] from a dictionary
    """
    return Report(
        last_update=dt.datetime.fromisoformat(d["lastUpdate"]),
        stat=statistic_from_dict(d["stat"]),
    )


def time_series_to_dict(time_series: TimeSeries) -> JSONDict:
    """
    Convert a [TimeSeries][(p).timeseries.] to a dictionary

    Dates become ISO-format keys, in ascending order.
    """
    return {
        "series": {
            d.isoformat(): statistic_to_dict(time_series.series[d])
            for d in time_series.dates
        }
    }


def time_series_from_dict(d: JSONDict) -> TimeSeries:
    """
    Initialise a [TimeSeries][(p).timeseries.] from a dictionary
    """
    return TimeSeries(
        series={k: statistic_from_dict(v) for k, v in d["series"].items()}
    )


def coordinate_to_dict(coordinate: Coordinate) -> JSONDict:
    """
    Convert a [Coordinate][(p).coordinate.] to a dictionary
    """
    return {"latitude": coordinate.latitude, "longitude": coordinate.longitude}


def coordinate_from_dict(d: JSONDict) -> Coordinate:
    """
    Initialise a [Coordinate][(p).coordinate.] from a dictionary
    """
    return Coordinate(latitude=float(d["latitude"]), longitude=float(d["longitude"]))


def _level_from_value(value: Any) -> Level:
    try:
        return Level(value)
    except ValueError as exc:
        raise UnrecognisedValueError(
            unrecognised_value=value,
            name="level",
            known_values=[v.value for v in Level],
        ) from exc


def region_to_dict(region: Region) -> JSONDict:
    """
    Convert a region, and all its descendants, to a dictionary

    Parameters
    ----------
    region
        Region to convert

    Returns
    -------
    :
        JSON-compatible dictionary.
        Unknown reports and time series are `None`.
    """
    return {
        "level": region.level.value,
        "name": region.name,
        "parentName": region.parent_name,
        "location": coordinate_to_dict(region.location),
        "report": None if region.report is None else report_to_dict(region.report),
        "timeSeries": (
            None
            if region.time_series is None
            else time_series_to_dict(region.time_series)
        ),
        "subRegions": [region_to_dict(r) for r in region.sub_regions],
    }


def region_from_dict(d: JSONDict) -> Region:
    """
    Initialise a region, and all its descendants, from a dictionary

    Interior regions' reports and time series are recomputed from their children
    (whatever is stored for them is ignored),
    so the result always satisfies the tree's aggregation rules.

    Parameters
    ----------
    d
        Dictionary, as produced by [region_to_dict][(m).]

    Returns
    -------
    :
        Region

    Raises
    ------
    UnrecognisedValueError
        The level is not a known level

    KeyError
        A required key is missing
    """
    report = d.get("report")
    time_series = d.get("timeSeries")
    res = Region(
        level=_level_from_value(d["level"]),
        name=d["name"],
        parent_name=d.get("parentName"),
        location=coordinate_from_dict(d["location"]),
        report=None if report is None else report_from_dict(report),
        time_series=None if time_series is None else time_series_from_dict(time_series),
    )

    sub_regions = d.get("subRegions", [])
    if sub_regions:
        res.sub_regions = [region_from_dict(sr) for sr in sub_regions]

    return res


def dump_region_json(region: Region, path: Path, indent: int | None = 2) -> None:
    """
    Write a region tree to a JSON file

    Parameters
    ----------
    region
        Root of the tree to write

    path
        File to write to

    indent
        Indentation passed to [json.dump][]
    """
    with open(path, "w") as fh:
        json.dump(region_to_dict(region), fh, indent=indent)


def load_region_json(path: Path) -> Region:
    """
    Load a region tree from a JSON file written by [dump_region_json][(m).]

    Parameters
    ----------
    path
        File to read

    Returns
    -------
    :
        Root of the loaded tree
    """
    with open(path) as fh:
        return region_from_dict(json.load(fh))
