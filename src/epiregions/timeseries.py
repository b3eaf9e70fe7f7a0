"""
Date-keyed history of statistics

Internally, a [TimeSeries][(m).] is a plain mapping from date to
[Statistic][(p).statistic.Statistic].
For anything tabular (joining, analysis, plotting)
we move to a [pd.DataFrame][pandas.DataFrame] of the following shape:

```python
            confirmed  recovered  deaths
date
2020-03-01        100         10       1
2020-03-02        120         15       2
```
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Mapping

import pandas as pd
from attrs import field, frozen

from epiregions.statistic import Statistic
from epiregions.typing import DATE_LIKE

FRAME_COLUMNS: tuple[str, str, str] = ("confirmed", "recovered", "deaths")
"""
Columns of the [pd.DataFrame][pandas.DataFrame] representation of a time series
"""

FRAME_INDEX_NAME: str = "date"
"""
Name of the index of the [pd.DataFrame][pandas.DataFrame] representation
"""


def to_date(value: DATE_LIKE) -> dt.date:
    """
    Convert a value to a [dt.date][datetime.date]

    Parameters
    ----------
    value
        Value to convert. Datetimes are truncated to their date.

    Returns
    -------
    :
        `value` as a date

    Examples
    --------
    >>> to_date("2020-03-04")
    datetime.date(2020, 3, 4)
    >>> to_date(dt.datetime(2020, 3, 4, 18, 30))
    datetime.date(2020, 3, 4)
    """
    if isinstance(value, dt.datetime):
        return value.date()

    if isinstance(value, dt.date):
        return value

    return dt.date.fromisoformat(value)


def _convert_series(series: Mapping[DATE_LIKE, Statistic]) -> dict[dt.date, Statistic]:
    return {to_date(k): v for k, v in series.items()}


@frozen
class TimeSeries:
    """
    History of statistics for a region, at most one statistic per date
    """

    series: dict[dt.date, Statistic] = field(converter=_convert_series)
    """
    Statistic for each date
    """

    @property
    def dates(self) -> list[dt.date]:
        """
        Dates in the series, in ascending order
        """
        return sorted(self.series)

    @property
    def latest_date(self) -> dt.date | None:
        """
        Most recent date in the series, `None` if the series is empty
        """
        return max(self.series, default=None)

    def to_frame(self) -> pd.DataFrame:
        """
        Convert to a [pd.DataFrame][pandas.DataFrame]

        Returns
        -------
        :
            Frame indexed by date (ascending),
            with one column per count (see [FRAME_COLUMNS][(m).]).
        """
        dates = self.dates
        res = pd.DataFrame(
            [
                [
                    self.series[d].confirmed_count,
                    self.series[d].recovered_count,
                    self.series[d].death_count,
                ]
                for d in dates
            ],
            columns=list(FRAME_COLUMNS),
            index=pd.Index(dates, name=FRAME_INDEX_NAME),
            dtype=int,
        )

        return res

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> TimeSeries:
        """
        Initialise from a [pd.DataFrame][pandas.DataFrame]

        Parameters
        ----------
        df
            Frame in the shape produced by [to_frame][(c).to_frame].
            The index can contain anything [to_date][(m).] understands
            (timestamps are fine too).

        Returns
        -------
        :
            Initialised time series

        Raises
        ------
        AssertionError
            `df` does not have the expected columns
        """
        missing = set(FRAME_COLUMNS).difference(df.columns)
        if missing:
            msg = f"Missing columns: {sorted(missing)}. {df.columns=}"
            raise AssertionError(msg)

        series = {
            to_date(idx): Statistic(
                confirmed_count=int(row["confirmed"]),
                recovered_count=int(row["recovered"]),
                death_count=int(row["deaths"]),
            )
            for idx, row in df.iterrows()
        }

        return cls(series=series)

    @classmethod
    def join(cls, serieses: Iterable[TimeSeries | None]) -> TimeSeries | None:
        """
        Join a collection of time series into a single time series

        The result covers the union of all dates.
        On each date, the statistics of the series which have that date are summed
        (series without that date are skipped, not treated as zero).

        Parameters
        ----------
        serieses
            Time series to join. `None` entries are skipped.

        Returns
        -------
        :
            Joined time series, `None` if there is nothing to join.

        Examples
        --------
        >>> a = TimeSeries({"2020-03-01": Statistic(1, 0, 0)})
        >>> b = TimeSeries(
        ...     {"2020-03-01": Statistic(2, 1, 0), "2020-03-02": Statistic(5, 1, 1)}
        ... )
        >>> joined = TimeSeries.join([a, None, b])
        >>> joined.to_frame()  # doctest: +NORMALIZE_WHITESPACE
                    confirmed  recovered  deaths
        date
        2020-03-01          3          1       0
        2020-03-02          5          1       1
        """
        present = [s for s in serieses if s is not None]
        if not present:
            return None

        if len(present) == 1:
            return cls(series=dict(present[0].series))

        frames = [s.to_frame() for s in present]
        joined = pd.concat(frames).groupby(level=FRAME_INDEX_NAME).sum()

        return cls.from_frame(joined)
