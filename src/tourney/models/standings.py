"""Output types of the standings aggregator."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from tourney.models.team import UNGROUPED, GroupTag

FormResult = Literal["W", "D", "L"]


class PointsSystem(BaseModel):
    """League points awarded per result."""

    model_config = ConfigDict(frozen=True)

    win: int = Field(default=3, ge=0)
    draw: int = Field(default=1, ge=0)
    loss: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _ordered(self) -> PointsSystem:
        if not self.win >= self.draw >= self.loss:
            msg = (
                "points must satisfy win >= draw >= loss, "
                f"got {self.win}/{self.draw}/{self.loss}"
            )
            raise ValueError(msg)
        return self


class TeamRecord(BaseModel):
    """Results split by venue side (home or away)."""

    model_config = ConfigDict(frozen=True)

    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0


class StandingsRow(BaseModel):
    """One team's line in a group table. Rebuilt on every computation.

    ``home_record`` and ``away_record`` always sum to the overall totals.
    """

    model_config = ConfigDict(frozen=True)

    team_id: str
    team_name: str
    group: GroupTag = UNGROUPED
    rank: int = Field(ge=1)
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0
    form: tuple[FormResult, ...] = ()
    home_record: TeamRecord = TeamRecord()
    away_record: TeamRecord = TeamRecord()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    @computed_field  # type: ignore[prop-decorator]
    @property
    def form_string(self) -> str:
        return "".join(self.form)
