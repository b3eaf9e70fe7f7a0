"""
Re-useable fixtures etc. for tests

The pandas display fixture lives in the root `conftest.py`
so that it applies to the doctests too.

See https://docs.pytest.org/en/7.1.x/reference/fixtures.html#conftest-py-sharing-fixtures-across-multiple-files
"""

import datetime as dt

import pytest


@pytest.fixture
def today():
    return dt.date(2020, 3, 10)
