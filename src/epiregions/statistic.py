"""
Case statistics and reports

A [Statistic][(m).] is a bare set of counts.
A [Report][(m).] is a statistic plus when it was last updated.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable

from attrs import field, frozen, validators

_non_negative_int = [validators.instance_of(int), validators.ge(0)]


def _percent_of(numerator: int, denominator: int) -> float:
    if denominator == 0:
        return float("nan")

    return numerator / denominator * 100


@frozen
class Statistic:
    """
    Counts of confirmed, recovered and fatal cases
    """

    confirmed_count: int = field(validator=_non_negative_int)
    """
    Number of confirmed cases (cumulative)
    """

    recovered_count: int = field(validator=_non_negative_int)
    """
    Number of recovered cases (cumulative)
    """

    death_count: int = field(validator=_non_negative_int)
    """
    Number of deaths (cumulative)
    """

    @property
    def active_count(self) -> int:
        """
        Number of cases which are neither recovered nor fatal
        """
        return self.confirmed_count - self.recovered_count - self.death_count

    @property
    def recovered_percent(self) -> float:
        """
        Recovered cases as a percentage of confirmed cases

        `nan` if there are no confirmed cases.
        """
        return _percent_of(self.recovered_count, self.confirmed_count)

    @property
    def death_percent(self) -> float:
        """
        Deaths as a percentage of confirmed cases

        `nan` if there are no confirmed cases.
        """
        return _percent_of(self.death_count, self.confirmed_count)

    @property
    def active_percent(self) -> float:
        """
        Active cases as a percentage of confirmed cases

        `nan` if there are no confirmed cases.
        """
        return _percent_of(self.active_count, self.confirmed_count)

    @classmethod
    def join(cls, stats: Iterable[Statistic | None]) -> Statistic | None:
        """
        Sum a collection of statistics

        Parameters
        ----------
        stats
            Statistics to sum. `None` entries are skipped.

        Returns
        -------
        :
            Component-wise sum of `stats`,
            `None` if there is nothing to sum.

        Examples
        --------
        >>> Statistic.join([Statistic(3, 1, 0), None, Statistic(4, 2, 1)])
        Statistic(confirmed_count=7, recovered_count=3, death_count=1)
        >>> Statistic.join([]) is None
        True
        """
        present = [s for s in stats if s is not None]
        if not present:
            return None

        return cls(
            confirmed_count=sum(s.confirmed_count for s in present),
            recovered_count=sum(s.recovered_count for s in present),
            death_count=sum(s.death_count for s in present),
        )


@frozen
class Report:
    """
    Current snapshot of the statistics for a region
    """

    last_update: dt.datetime = field(validator=validators.instance_of(dt.datetime))
    """
    When the underlying data was last updated
    """

    stat: Statistic = field(validator=validators.instance_of(Statistic))
    """
    Statistic at `last_update`
    """

    @classmethod
    def join(cls, reports: Iterable[Report | None]) -> Report | None:
        """
        Join a collection of reports into a single report

        Parameters
        ----------
        reports
            Reports to join. `None` entries are skipped, not treated as zero.

        Returns
        -------
        :
            Report whose statistic is the sum of the input statistics
            and whose `last_update` is the most recent of the inputs.
            `None` if there is nothing to join.
        """
        present = [r for r in reports if r is not None]
        if not present:
            return None

        stat = Statistic.join(r.stat for r in present)
        if stat is None:  # pragma: no cover
            raise AssertionError("Unreachable, `present` is not empty")

        return cls(last_update=max(r.last_update for r in present), stat=stat)
