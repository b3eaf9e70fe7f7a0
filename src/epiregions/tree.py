"""
Building and walking region trees
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Iterator

import numpy as np
import pandas as pd

from epiregions.region import Region

LOGGER = logging.getLogger(__name__)


def build_world(leaves: Iterable[Region]) -> Region:
    """
    Build a world → country → province tree from leaf regions

    Province-level leaves are grouped by their parent name
    and each group is joined into a country.
    Country-level leaves are attached to the world as they are.
    If a country-level leaf has the same name as a country
    built from provinces, the one built from provinces is kept.

    Parameters
    ----------
    leaves
        Leaf regions (provinces and countries).
        Anything at the world level is ignored.

    Returns
    -------
    :
        World region, whose children are the countries
        sorted by confirmed count (largest first)
    """
    provinces_by_country: defaultdict[str | None, list[Region]] = defaultdict(list)
    countries: list[Region] = []
    for leaf in leaves:
        if leaf.is_province:
            provinces_by_country[leaf.parent_name].append(leaf)
        elif leaf.is_country:
            countries.append(leaf)
        else:
            LOGGER.debug("Ignoring %s, it is at the %s level", leaf.name, leaf.level)

    joined_countries = []
    for provinces in provinces_by_country.values():
        country = Region.join(provinces, assign=True)
        if country is None:  # pragma: no cover
            raise AssertionError("Unreachable, groups are never empty")

        joined_countries.append(country)

    joined_names = {c.name for c in joined_countries}
    for country in countries:
        if country.name in joined_names:
            LOGGER.debug(
                "Dropping country-level %s, it is already built from its provinces",
                country.name,
            )
            continue

        joined_countries.append(country)

    world = Region.world()
    world.sub_regions = sorted(joined_countries, reverse=True)

    return world


def iter_regions(root: Region) -> Iterator[Region]:
    """
    Iterate over a tree, depth-first

    Parameters
    ----------
    root
        Root of the tree

    Yields
    ------
    :
        `root`, then each child followed by its own descendants
    """
    yield root
    for sub_region in root.sub_regions:
        yield from iter_regions(sub_region)


def regions_to_frame(root: Region) -> pd.DataFrame:
    """
    Tabulate the current statistics and daily changes of a tree

    Parameters
    ----------
    root
        Root of the tree

    Returns
    -------
    :
        One row per region (in [iter_regions][(m).] order),
        indexed by level, parent name and name.
        Missing values (unknown reports or changes) are NaN.
    """
    columns = [
        "confirmed",
        "recovered",
        "deaths",
        "new_confirmed",
        "new_recovered",
        "new_deaths",
    ]
    index_tuples = []
    rows = []
    for region in iter_regions(root):
        index_tuples.append(
            (region.level.name.lower(), region.parent_name, region.name)
        )

        if region.report is None:
            stat_values = [np.nan] * 3
        else:
            stat = region.report.stat
            stat_values = [stat.confirmed_count, stat.recovered_count, stat.death_count]

        change = region.daily_change
        if change is None:
            change_values = [np.nan] * 3
        else:
            change_values = [
                change.new_confirmed,
                change.new_recovered,
                change.new_deaths,
            ]

        rows.append([*stat_values, *change_values])

    res = pd.DataFrame(
        rows,
        columns=columns,
        index=pd.MultiIndex.from_tuples(
            index_tuples, names=["level", "parent_name", "name"]
        ),
        dtype=float,
    )

    return res
