"""
Code to support our tests

This is here, rather than in our `tests` directory
because of the issues that come
when you turn your tests into a package using `__init__.py` files
(for details, see https://docs.pytest.org/en/7.1.x/explanation/goodpractices.html#choosing-an-import-mode).
"""

from __future__ import annotations

import datetime as dt
import itertools
from collections.abc import Sequence

from epiregions.coordinate import Coordinate
from epiregions.region import Level, Region
from epiregions.statistic import Report, Statistic
from epiregions.timeseries import TimeSeries

DEFAULT_LAST_UPDATE = dt.datetime(2020, 3, 4, 12, 0)
"""
Last update time used for reports unless something else is requested
"""

_LOCATION_COUNTER = itertools.count(start=1)


def make_time_series(
    stats: Sequence[tuple[int, int, int]],
    end: dt.date | None = None,
) -> TimeSeries:
    """
    Make a time series with one entry per day

    Parameters
    ----------
    stats
        Confirmed, recovered and death counts for each day, oldest first

    end
        Date of the last entry. Defaults to yesterday.

    Returns
    -------
    :
        Time series ending at `end`
    """
    if end is None:
        end = dt.date.today() - dt.timedelta(days=1)

    n_days = len(stats)
    series = {
        end - dt.timedelta(days=n_days - 1 - i): Statistic(*counts)
        for i, counts in enumerate(stats)
    }

    return TimeSeries(series=series)


def make_report(
    confirmed: int,
    recovered: int = 0,
    deaths: int = 0,
    last_update: dt.datetime = DEFAULT_LAST_UPDATE,
) -> Report:
    """
    Make a report
    """
    return Report(
        last_update=last_update,
        stat=Statistic(
            confirmed_count=confirmed, recovered_count=recovered, death_count=deaths
        ),
    )


def make_leaf(  # noqa: PLR0913
    name: str,
    parent_name: str | None = "Country",
    level: Level = Level.PROVINCE,
    location: Coordinate | None = None,
    report: Report | None = None,
    time_series: TimeSeries | None = None,
) -> Region:
    """
    Make a leaf region

    Parameters
    ----------
    name
        Name of the region

    parent_name
        Name of the region's parent

    level
        Level of the region

    location
        Location. If not supplied, a location not used by any other leaf
        made with this function is used
        (so leaves don't compare equal by location by accident).

    report
        Report to attach

    time_series
        Time series to attach

    Returns
    -------
    :
        Leaf region
    """
    if location is None:
        n = next(_LOCATION_COUNTER)
        location = Coordinate(latitude=n * 1e-3, longitude=n * 1e-3)

    return Region(
        level=level,
        name=name,
        parent_name=parent_name,
        location=location,
        report=report,
        time_series=time_series,
    )
