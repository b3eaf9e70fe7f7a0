"""
Tests of `epiregions.region.Level`
"""

import pytest

from epiregions.region import Level


@pytest.mark.parametrize(
    "level, exp",
    (
        pytest.param(Level.WORLD, Level.WORLD, id="world-clamped"),
        pytest.param(Level.COUNTRY, Level.WORLD, id="country"),
        pytest.param(Level.PROVINCE, Level.COUNTRY, id="province"),
    ),
)
def test_parent(level, exp):
    assert level.parent == exp


def test_parent_idempotent_at_root():
    assert Level.WORLD.parent.parent == Level.WORLD


def test_order():
    assert Level.WORLD < Level.COUNTRY < Level.PROVINCE
    assert sorted([Level.PROVINCE, Level.WORLD, Level.COUNTRY]) == [
        Level.WORLD,
        Level.COUNTRY,
        Level.PROVINCE,
    ]
