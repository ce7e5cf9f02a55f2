"""Shared test fixtures."""

from datetime import date

import pytest

from tourney.config import Settings
from tourney.models.schedule import ScheduleParams
from tourney.models.team import Team


@pytest.fixture
def settings() -> Settings:
    """Test settings with defaults."""
    return Settings(tourney_env="test", database_url="sqlite+aiosqlite:///:memory:")


@pytest.fixture
def make_teams():
    """Factory: ``make_teams(4)`` → teams A, B, C, D (ids ``t-a`` …)."""

    def _make(count: int) -> list[Team]:
        return [Team(id=f"t-{chr(97 + i)}", name=chr(65 + i)) for i in range(count)]

    return _make


@pytest.fixture
def params() -> ScheduleParams:
    """Single round, Saturday 6 Sep 2025, 13:00, one day per round."""
    return ScheduleParams(start_date=date(2025, 9, 6), venue="Nyayo Stadium")
