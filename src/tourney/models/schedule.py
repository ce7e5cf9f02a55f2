"""Schedule generation parameters."""

from __future__ import annotations

from datetime import date, time
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MatchdayPolicy = Literal["any", "weekends"]


class ScheduleParams(BaseModel):
    """Inputs that control dates, kickoff time and venue of generated fixtures.

    ``max_matches_before_date_advance`` caps how many fixtures of one round
    share a calendar day. ``None`` puts the whole round on one day.
    """

    model_config = ConfigDict(frozen=True)

    start_date: date
    kickoff_time: time = time(13, 0)
    venue: str | None = None
    double_round: bool = False
    max_matches_before_date_advance: int | None = Field(default=None, ge=1)
    date_advance_days: int = Field(default=1, ge=1)
    round_interval_days: int = Field(default=7, ge=1)
    matchday_policy: MatchdayPolicy = "any"
    stage_id: str = ""
