"""Application settings via pydantic-settings. Loads from environment and .env file."""

from __future__ import annotations

from datetime import date, time

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

from tourney.models.schedule import ScheduleParams
from tourney.models.standings import PointsSystem

VALID_ENVS = frozenset({"development", "test", "production"})


def parse_kickoff(value: str) -> time:
    """Parse an ``HH:MM`` kickoff string."""
    try:
        hours, minutes = (int(part) for part in value.split(":"))
        return time(hours, minutes)
    except ValueError as exc:
        msg = f"kickoff must be HH:MM, got {value!r}"
        raise ValueError(msg) from exc


class Settings(BaseSettings):
    """Tourney application configuration.

    All values can be overridden via environment variables or .env file.
    """

    # Database
    database_url: str = "sqlite+aiosqlite:///tourney.db"

    # Environment
    tourney_env: str = "development"

    # Fixture defaults
    tourney_default_kickoff: str = "13:00"
    tourney_default_venue: str | None = None
    tourney_round_interval_days: int = 7
    tourney_date_advance_days: int = 1
    tourney_max_matches_per_day: int | None = None
    tourney_weekends_only: bool = False

    # Standings
    tourney_form_window: int = 5
    tourney_points_win: int = 3
    tourney_points_draw: int = 1
    tourney_points_loss: int = 0

    # Logging
    tourney_log_level: str = "INFO"

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}

    @field_validator("tourney_default_kickoff")
    @classmethod
    def _check_kickoff(cls, value: str) -> str:
        parse_kickoff(value)
        return value

    @field_validator("tourney_env")
    @classmethod
    def _check_env(cls, value: str) -> str:
        if value not in VALID_ENVS:
            msg = f"tourney_env must be one of {sorted(VALID_ENVS)}, got {value!r}"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def _check_points(self) -> Settings:
        """Reject point tables where a draw beats a win."""
        win = self.tourney_points_win
        draw = self.tourney_points_draw
        loss = self.tourney_points_loss
        if not win >= draw >= loss >= 0:
            msg = f"points must satisfy win >= draw >= loss >= 0, got {win}/{draw}/{loss}"
            raise ValueError(msg)
        return self

    def points_system(self) -> PointsSystem:
        return PointsSystem(
            win=self.tourney_points_win,
            draw=self.tourney_points_draw,
            loss=self.tourney_points_loss,
        )

    def schedule_params(self, start_date: date, **overrides: object) -> ScheduleParams:
        """Build ScheduleParams from configured defaults plus per-call overrides."""
        values: dict[str, object] = {
            "start_date": start_date,
            "kickoff_time": parse_kickoff(self.tourney_default_kickoff),
            "venue": self.tourney_default_venue,
            "max_matches_before_date_advance": self.tourney_max_matches_per_day,
            "date_advance_days": self.tourney_date_advance_days,
            "round_interval_days": self.tourney_round_interval_days,
            "matchday_policy": "weekends" if self.tourney_weekends_only else "any",
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ScheduleParams.model_validate(values)
