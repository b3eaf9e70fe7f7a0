"""
Day-over-day changes
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
from attrs import frozen


def _finite_mean(values: Iterable[float]) -> float:
    arr = np.asarray(list(values), dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        return float("nan")

    return float(np.mean(arr))


@frozen
class Change:
    """
    Change in a region's statistics since the previous day

    Growth percentages can be non-finite
    (when the previous day's count was zero).
    They are not special-cased here,
    filtering them is left to whatever presents them.
    """

    new_confirmed: int
    """
    New confirmed cases
    """

    new_recovered: int
    """
    New recoveries
    """

    new_deaths: int
    """
    New deaths
    """

    confirmed_growth_percent: float
    """
    Growth in confirmed cases, as a percentage of the previous day's count
    """

    recovered_growth_percent: float
    """
    Growth in recoveries, as a percentage of the previous day's count
    """

    deaths_growth_percent: float
    """
    Growth in deaths, as a percentage of the previous day's count
    """

    @classmethod
    def sum(cls, changes: Iterable[Change | None]) -> Change | None:
        """
        Combine the changes of several regions

        New counts are summed.
        Growth percentages can't be summed,
        so each is the mean of the finite input percentages
        (`nan` if none of them are finite).

        Parameters
        ----------
        changes
            Changes to combine. `None` entries are skipped, not treated as zero.

        Returns
        -------
        :
            Combined change, `None` if there is nothing to combine.

        Examples
        --------
        >>> Change.sum(
        ...     [
        ...         Change(5, 1, 0, 10.0, 5.0, float("inf")),
        ...         None,
        ...         Change(7, 3, 1, 20.0, 15.0, 50.0),
        ...     ]
        ... )
        Change(new_confirmed=12, new_recovered=4, new_deaths=1, confirmed_growth_percent=15.0, recovered_growth_percent=10.0, deaths_growth_percent=50.0)
        """  # noqa: E501
        present = [c for c in changes if c is not None]
        if not present:
            return None

        return cls(
            new_confirmed=sum(c.new_confirmed for c in present),
            new_recovered=sum(c.new_recovered for c in present),
            new_deaths=sum(c.new_deaths for c in present),
            confirmed_growth_percent=_finite_mean(
                c.confirmed_growth_percent for c in present
            ),
            recovered_growth_percent=_finite_mean(
                c.recovered_growth_percent for c in present
            ),
            deaths_growth_percent=_finite_mean(
                c.deaths_growth_percent for c in present
            ),
        )
