"""
Regions, the nodes of the world → country → province tree

Leaf regions carry their own [Report][(p).statistic.Report]
and [TimeSeries][(p).timeseries.TimeSeries].
Interior regions never author these themselves,
they are always the join of their children's
(recomputed whenever [Region.sub_regions][(m).Region.sub_regions] is assigned).
"""

from __future__ import annotations

import datetime as dt
import enum
import logging
import threading
from collections.abc import Iterable

import numpy as np
from attrs import define, field, setters

from epiregions.change import Change
from epiregions.coordinate import Coordinate
from epiregions.statistic import Report, Statistic
from epiregions.timeseries import TimeSeries

LOGGER = logging.getLogger(__name__)

WORLD_NAME: str = "Worldwide"
"""
Name of the world region
"""

UNKNOWN_PARENT_NAME: str = "N/A"
"""
Name given to a joined region when its children don't know their parent
"""

MISSING_PARENT_LONG_NAME: str = "-"
"""
Placeholder for the parent in a province's long name when it has no parent name
"""

STALE_AFTER_DAYS: int = 2
"""
Age (in whole days) at which a time series' latest entry is too old for daily changes
"""


class Level(enum.IntEnum):
    """
    How coarse a region is

    Ordered from coarsest to finest.
    """

    WORLD = 1
    COUNTRY = 2
    PROVINCE = 3
    """Could also be a state or a city"""

    @property
    def parent(self) -> Level:
        """
        The next coarser level

        Examples
        --------
        >>> Level.PROVINCE.parent
        <Level.COUNTRY: 2>
        >>> Level.WORLD.parent
        <Level.WORLD: 1>
        """
        return Level(max(Level.WORLD.value, self.value - 1))


class _CacheState(enum.Enum):
    STALE = "stale"


def _growth_percent(current: int, previous: int) -> float:
    # Zero baselines give non-finite values, callers filter them
    with np.errstate(divide="ignore", invalid="ignore"):
        return float((np.float64(current) / np.float64(previous) - 1.0) * 100.0)


def derive_daily_change(
    report: Report,
    time_series: TimeSeries,
    today: dt.date,
    stale_after_days: int = STALE_AFTER_DAYS,
) -> Change | None:
    """
    Derive the change since yesterday from a report and a time series

    The baseline is normally the latest entry of `time_series`.
    If that entry already has the same confirmed count as `report`
    (i.e. today's snapshot has already been appended to the history),
    the entry before it is used instead.

    Parameters
    ----------
    report
        Current report

    time_series
        History

    today
        Date against which to judge how old the history is

    stale_after_days
        If the latest entry of `time_series` is at least this many days old,
        the history is considered stale

    Returns
    -------
    :
        Change since the baseline.
        `None` if the history is empty, stale
        or too short to find a baseline.
    """
    dates = time_series.dates
    if not dates:
        return None

    last_date = dates.pop()
    age_days = (today - last_date).days
    if age_days >= stale_after_days:
        LOGGER.debug(
            "Latest time series entry is stale. %s is %s days before %s",
            last_date,
            age_days,
            today,
        )
        return None

    baseline: Statistic = time_series.series[last_date]
    current = report.stat
    if current.confirmed_count == baseline.confirmed_count:
        if not dates:
            return None

        baseline = time_series.series[dates.pop()]

    return Change(
        new_confirmed=current.confirmed_count - baseline.confirmed_count,
        new_recovered=current.recovered_count - baseline.recovered_count,
        new_deaths=current.death_count - baseline.death_count,
        confirmed_growth_percent=_growth_percent(
            current.confirmed_count, baseline.confirmed_count
        ),
        recovered_growth_percent=_growth_percent(
            current.recovered_count, baseline.recovered_count
        ),
        deaths_growth_percent=_growth_percent(
            current.death_count, baseline.death_count
        ),
    )


@define(eq=False)
class Region:
    """
    A node in the geographic tree

    Equality is an OR over two keys:
    two regions are equal if their level, parent name and name all match
    or if their locations are equal.
    Ordering compares confirmed counts (a missing report counts as zero).
    Because of the OR, there is no consistent hash, so regions are unhashable.

    Level, name, parent name and location are set at construction
    and can't be changed afterwards.
    """

    level: Level = field(converter=Level, on_setattr=setters.frozen)
    """
    Level of the region
    """

    name: str = field(on_setattr=setters.frozen)
    """
    Display name (not necessarily unique)
    """

    parent_name: str | None = field(on_setattr=setters.frozen)
    """
    Name of the enclosing region, `None` for the world and for joined regions
    """

    location: Coordinate = field(on_setattr=setters.frozen)
    """
    Location of the region
    """

    _report: Report | None = field(default=None)
    _time_series: TimeSeries | None = field(default=None)
    _sub_regions: tuple[Region, ...] = field(init=False, factory=tuple, repr=False)
    _daily_change: Change | None | _CacheState = field(
        init=False, default=_CacheState.STALE, repr=False
    )
    _lock: threading.Lock = field(init=False, factory=threading.Lock, repr=False)

    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def world(cls) -> Region:
        """
        Create a new, empty world region
        """
        return cls(
            level=Level.WORLD,
            name=WORLD_NAME,
            parent_name=None,
            location=Coordinate.zero(),
        )

    @classmethod
    def join(
        cls, sub_regions: Iterable[Region], assign: bool = False
    ) -> Region | None:
        """
        Create the parent of a collection of regions

        The parent's level is one coarser than the first region's,
        its name is the first region's parent name
        and its location is the centre of all the regions' locations.

        Parameters
        ----------
        sub_regions
            Regions to join

        assign
            If `True`, also assign `sub_regions` as the parent's children
            (which computes the parent's report and time series).

            Otherwise, the parent has no children, report or time series
            until the caller assigns [sub_regions][(c).sub_regions].

        Returns
        -------
        :
            Parent region, `None` if `sub_regions` is empty
        """
        children = list(sub_regions)
        if not children:
            return None

        first = children[0]
        res = cls(
            level=first.level.parent,
            name=(
                first.parent_name
                if first.parent_name is not None
                else UNKNOWN_PARENT_NAME
            ),
            parent_name=None,
            location=Coordinate.center(of=[c.location for c in children]),
        )
        if assign:
            res.sub_regions = children

        return res

    @property
    def report(self) -> Report | None:
        """
        Current report, `None` if unknown

        Assigning is ignored for regions with sub-regions,
        their report is always joined from the sub-regions' reports.
        """
        return self._report

    @report.setter
    def report(self, report: Report | None) -> None:
        if self._sub_regions:
            LOGGER.debug(
                "Ignoring report assigned to %s, it is joined from its sub-regions",
                self.long_name,
            )
            return

        with self._lock:
            self._report = report
            self._daily_change = _CacheState.STALE

    @property
    def time_series(self) -> TimeSeries | None:
        """
        History of the region's statistics, `None` if unknown

        Assigning is ignored for regions with sub-regions,
        their time series is always joined from the sub-regions' time series.
        """
        return self._time_series

    @time_series.setter
    def time_series(self, time_series: TimeSeries | None) -> None:
        if self._sub_regions:
            LOGGER.debug(
                "Ignoring time series assigned to %s, "
                "it is joined from its sub-regions",
                self.long_name,
            )
            return

        with self._lock:
            self._time_series = time_series
            self._daily_change = _CacheState.STALE

    @property
    def sub_regions(self) -> tuple[Region, ...]:
        """
        Children of the region

        Assigning children recomputes the region's report and time series
        from the children's (children without them are skipped).
        """
        return self._sub_regions

    @sub_regions.setter
    def sub_regions(self, sub_regions: Iterable[Region]) -> None:
        children = tuple(sub_regions)
        report = Report.join(c.report for c in children)
        time_series = TimeSeries.join(c.time_series for c in children)
        with self._lock:
            self._sub_regions = children
            self._report = report
            self._time_series = time_series
            self._daily_change = _CacheState.STALE

    @property
    def daily_change(self) -> Change | None:
        """
        Change since yesterday, `None` if it can't be determined

        Computed on first access and cached
        until `report`, `time_series` or `sub_regions` is next assigned.
        Mutating a child after this has been read does not invalidate it,
        use [invalidate_daily_change][(c).] for that.
        """
        with self._lock:
            if self._daily_change is _CacheState.STALE:
                self._daily_change = self.compute_daily_change()

            return self._daily_change

    def invalidate_daily_change(self) -> None:
        """
        Forget the cached daily change, it is recomputed on next access
        """
        with self._lock:
            self._daily_change = _CacheState.STALE

    def compute_daily_change(self, today: dt.date | None = None) -> Change | None:
        """
        Compute the change since yesterday, without caching

        Parameters
        ----------
        today
            Reference date for deciding whether the history is stale.
            If not supplied, the current local date is used
            and children's cached changes are re-used.
            If supplied, children's changes are also recomputed with `today`.

        Returns
        -------
        :
            For an interior region, the sum of its children's changes
            (children without a change are skipped).
            For a leaf, the change derived from its report and time series
            (see [derive_daily_change][(m).]).
            `None` if it can't be determined.
        """
        if self._sub_regions:
            if today is None:
                sub_changes = [c.daily_change for c in self._sub_regions]
            else:
                sub_changes = [
                    c.compute_daily_change(today=today) for c in self._sub_regions
                ]

            return Change.sum(sub_changes)

        if self._report is None or self._time_series is None:
            return None

        if today is None:
            today = dt.date.today()

        return derive_daily_change(self._report, self._time_series, today=today)

    @property
    def is_country(self) -> bool:
        """
        Whether this region is a country
        """
        return self.level == Level.COUNTRY

    @property
    def is_province(self) -> bool:
        """
        Whether this region is a province (or state, or city)
        """
        return self.level == Level.PROVINCE

    @property
    def long_name(self) -> str:
        """
        Name, qualified with the parent's name for provinces
        """
        if not self.is_province:
            return self.name

        parent = (
            self.parent_name
            if self.parent_name is not None
            else MISSING_PARENT_LONG_NAME
        )
        return f"{self.name}, {parent}"

    def find(self, region: Region) -> Region | None:
        """
        Find a region equal to `region`

        Only this region and its direct children are searched.

        Parameters
        ----------
        region
            Region to look for

        Returns
        -------
        :
            This region or the first direct child equal to `region`,
            `None` if there is no such region.
        """
        if region == self:
            return self

        return next((c for c in self._sub_regions if c == region), None)

    @property
    def _confirmed_count(self) -> int:
        if self._report is None:
            return 0

        return self._report.stat.confirmed_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Region):
            return NotImplemented

        same_identity = (self.level, self.parent_name, self.name) == (
            other.level,
            other.parent_name,
            other.name,
        )
        return same_identity or self.location == other.location

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Region):
            return NotImplemented

        return self._confirmed_count < other._confirmed_count

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Region):
            return NotImplemented

        return self._confirmed_count <= other._confirmed_count

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Region):
            return NotImplemented

        return self._confirmed_count > other._confirmed_count

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Region):
            return NotImplemented

        return self._confirmed_count >= other._confirmed_count
