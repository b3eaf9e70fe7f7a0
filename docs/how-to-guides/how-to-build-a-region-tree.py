# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.16.6
#   kernelspec:
#     display_name: Python 3 (ipykernel)
#     language: python
#     name: python3
# ---

# %% [markdown]
# # How to build a region tree
#
# Here we go through building a world → country → province tree
# from leaf-level observations
# and reading aggregated statistics and daily changes off it.

# %% [markdown]
# ## Imports

# %%
import datetime as dt

from epiregions.coordinate import Coordinate
from epiregions.region import Level, Region
from epiregions.statistic import Report, Statistic
from epiregions.timeseries import TimeSeries
from epiregions.tree import build_world, regions_to_frame

# %% [markdown]
# ## Leaves
#
# Leaves carry a current report and a daily history.
# In practice, these come from whatever data source you use.
# Here we just make some up.

# %%
today = dt.date.today()
now = dt.datetime.now()


def history(*confirmed: int) -> TimeSeries:
    """Make a history with one entry per day, ending yesterday"""
    return TimeSeries(
        {
            today - dt.timedelta(days=len(confirmed) - i): Statistic(c, 0, 0)
            for i, c in enumerate(confirmed)
        }
    )


leaves = [
    Region(
        level=Level.PROVINCE,
        name="Hubei",
        parent_name="China",
        location=Coordinate(30.97, 112.27),
        report=Report(now, Statistic(120, 10, 2)),
        time_series=history(90, 100),
    ),
    Region(
        level=Level.PROVINCE,
        name="Henan",
        parent_name="China",
        location=Coordinate(33.88, 113.61),
        report=Report(now, Statistic(30, 1, 0)),
        # The latest entry already matches the report,
        # so the entry before it is used as the baseline
        time_series=history(20, 30),
    ),
    Region(
        level=Level.COUNTRY,
        name="France",
        parent_name=None,
        location=Coordinate(46.23, 2.21),
        report=Report(now, Statistic(200, 12, 4)),
        time_series=history(150, 180),
    ),
]

# %% [markdown]
# ## The tree
#
# `build_world` groups provinces into countries
# and hangs everything off a world region.
# Each interior region's report and time series
# are the join of its children's.

# %%
world = build_world(leaves)
[(r.name, r.report.stat.confirmed_count) for r in world.sub_regions]

# %% [markdown]
# Daily changes are computed when first read.
# Interior regions sum their children's changes.

# %%
world.daily_change

# %% [markdown]
# The whole tree can be tabulated for further analysis.

# %%
regions_to_frame(world)
