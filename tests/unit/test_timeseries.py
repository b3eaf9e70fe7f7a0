"""
Tests of `epiregions.timeseries`
"""

import datetime as dt
import re

import pandas as pd
import pytest

from epiregions.statistic import Statistic
from epiregions.timeseries import TimeSeries, to_date


def test_keys_converted_to_dates():
    res = TimeSeries(
        {"2020-03-02": Statistic(2, 0, 0), dt.date(2020, 3, 1): Statistic(1, 0, 0)}
    )

    assert res.series == {
        dt.date(2020, 3, 1): Statistic(1, 0, 0),
        dt.date(2020, 3, 2): Statistic(2, 0, 0),
    }
    assert res.dates == [dt.date(2020, 3, 1), dt.date(2020, 3, 2)]
    assert res.latest_date == dt.date(2020, 3, 2)


def test_latest_date_empty():
    assert TimeSeries({}).latest_date is None
    assert TimeSeries({}).dates == []


@pytest.mark.parametrize(
    "value, exp",
    (
        pytest.param("2020-03-04", dt.date(2020, 3, 4), id="iso-string"),
        pytest.param(dt.date(2020, 3, 4), dt.date(2020, 3, 4), id="date"),
        pytest.param(
            dt.datetime(2020, 3, 4, 23, 59), dt.date(2020, 3, 4), id="datetime"
        ),
        pytest.param(
            pd.Timestamp("2020-03-04 06:00"), dt.date(2020, 3, 4), id="timestamp"
        ),
    ),
)
def test_to_date(value, exp):
    assert to_date(value) == exp


def test_to_frame():
    ts = TimeSeries(
        {"2020-03-02": Statistic(20, 2, 1), "2020-03-01": Statistic(10, 1, 0)}
    )

    res = ts.to_frame()

    exp = pd.DataFrame(
        [[10, 1, 0], [20, 2, 1]],
        columns=["confirmed", "recovered", "deaths"],
        index=pd.Index([dt.date(2020, 3, 1), dt.date(2020, 3, 2)], name="date"),
    )
    pd.testing.assert_frame_equal(res, exp, check_dtype=False)


def test_from_frame_timestamps():
    df = pd.DataFrame(
        [[10, 1, 0], [20, 2, 1]],
        columns=["confirmed", "recovered", "deaths"],
        index=pd.DatetimeIndex(["2020-03-01", "2020-03-02"], name="date"),
    )

    res = TimeSeries.from_frame(df)

    assert res == TimeSeries(
        {"2020-03-01": Statistic(10, 1, 0), "2020-03-02": Statistic(20, 2, 1)}
    )


def test_from_frame_missing_columns():
    df = pd.DataFrame(
        [[10, 1]], columns=["confirmed", "recovered"], index=["2020-03-01"]
    )

    with pytest.raises(AssertionError, match=re.escape("Missing columns: ['deaths']")):
        TimeSeries.from_frame(df)


def test_join_union_of_dates():
    a = TimeSeries(
        {"2020-03-01": Statistic(1, 0, 0), "2020-03-02": Statistic(2, 1, 0)}
    )
    b = TimeSeries(
        {"2020-03-02": Statistic(10, 5, 1), "2020-03-03": Statistic(12, 6, 1)}
    )

    res = TimeSeries.join([a, b])

    assert res == TimeSeries(
        {
            "2020-03-01": Statistic(1, 0, 0),
            "2020-03-02": Statistic(12, 6, 1),
            "2020-03-03": Statistic(12, 6, 1),
        }
    )


def test_join_skips_missing():
    a = TimeSeries({"2020-03-01": Statistic(1, 0, 0)})

    assert TimeSeries.join([None, a, None]) == a


@pytest.mark.parametrize(
    "serieses",
    (
        pytest.param([], id="empty"),
        pytest.param([None, None], id="only-none"),
    ),
)
def test_join_nothing(serieses):
    assert TimeSeries.join(serieses) is None
