"""Tests for application settings."""

from datetime import date, time

import pytest
from pydantic import ValidationError

from tourney.config import Settings, parse_kickoff
from tourney.models.standings import PointsSystem


def test_default_settings(settings):
    assert settings.tourney_env == "test"
    assert settings.tourney_default_kickoff == "13:00"
    assert settings.tourney_round_interval_days == 7
    assert settings.tourney_form_window == 5
    assert settings.points_system() == PointsSystem()


def test_env_override(monkeypatch):
    monkeypatch.setenv("TOURNEY_DEFAULT_VENUE", "Kasarani")
    monkeypatch.setenv("TOURNEY_WEEKENDS_ONLY", "true")
    s = Settings(tourney_env="test")
    assert s.tourney_default_venue == "Kasarani"
    assert s.tourney_weekends_only is True


@pytest.mark.parametrize("value", ["1300", "25:00", "noon", "13:60"])
def test_bad_kickoff(value):
    with pytest.raises(ValidationError):
        Settings(tourney_env="test", tourney_default_kickoff=value)


def test_parse_kickoff():
    assert parse_kickoff("09:30") == time(9, 30)


def test_bad_env():
    with pytest.raises(ValidationError, match="tourney_env"):
        Settings(tourney_env="staging")


def test_bad_points():
    with pytest.raises(ValidationError, match="win >= draw >= loss"):
        Settings(tourney_env="test", tourney_points_win=1, tourney_points_draw=2)


def test_custom_points(settings):
    s = settings.model_copy(update={"tourney_points_win": 2})
    assert s.points_system() == PointsSystem(win=2, draw=1, loss=0)


class TestScheduleParams:
    def test_defaults_flow_through(self, settings):
        params = settings.schedule_params(date(2025, 9, 6))
        assert params.start_date == date(2025, 9, 6)
        assert params.kickoff_time == time(13, 0)
        assert params.venue is None
        assert params.round_interval_days == 7
        assert params.max_matches_before_date_advance is None
        assert params.matchday_policy == "any"

    def test_overrides_win(self, settings):
        params = settings.schedule_params(
            date(2025, 9, 6),
            kickoff_time=time(15, 0),
            venue="Kasarani",
            double_round=True,
            max_matches_before_date_advance=2,
        )
        assert params.kickoff_time == time(15, 0)
        assert params.venue == "Kasarani"
        assert params.double_round is True
        assert params.max_matches_before_date_advance == 2

    def test_none_override_keeps_default(self):
        s = Settings(tourney_env="test", tourney_default_venue="Nyayo Stadium")
        params = s.schedule_params(date(2025, 9, 6), venue=None)
        assert params.venue == "Nyayo Stadium"

    def test_weekends_flag(self):
        s = Settings(tourney_env="test", tourney_weekends_only=True)
        assert s.schedule_params(date(2025, 9, 6)).matchday_policy == "weekends"
