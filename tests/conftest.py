"""Shared fixtures for maintenance core tests."""

from datetime import date
from zoneinfo import ZoneInfo

import pytest

from maintenance_core.utils import dt_utils

# Fixed "today" so every test is deterministic
TODAY = date(2026, 10, 18)


@pytest.fixture(autouse=True)
def reset_default_timezone():
    """Run every test in UTC and restore the previous default afterwards."""
    original = dt_utils.get_default_timezone()
    dt_utils.set_default_timezone(ZoneInfo("UTC"))
    yield
    dt_utils.set_default_timezone(original)


@pytest.fixture
def today() -> date:
    """Return the fixed reference day."""
    return TODAY
