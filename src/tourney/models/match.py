"""Fixture, Match, and Round models.

A Fixture is what the schedule generator emits: an unplayed pairing with a
date, time and venue. A Match is a fixture (or any externally entered
pairing) once the outside world has attached a status and scores to it.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MatchStatus(StrEnum):
    UNSCHEDULED = "unscheduled"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Fixture(BaseModel):
    """A generated, not-yet-played match."""

    model_config = ConfigDict(frozen=True)

    id: str
    round_number: int = Field(ge=1)
    leg: int = Field(ge=1, le=2, default=1)
    home_team_id: str
    away_team_id: str
    kickoff: datetime
    venue: str | None = None
    group_id: str | None = None

    @model_validator(mode="after")
    def _distinct_teams(self) -> Fixture:
        if self.home_team_id == self.away_team_id:
            msg = f"fixture {self.id} pairs team {self.home_team_id} with itself"
            raise ValueError(msg)
        return self

    def to_match(self) -> Match:
        """Return the unplayed Match record for this fixture."""
        return Match(
            id=self.id,
            home_team_id=self.home_team_id,
            away_team_id=self.away_team_id,
            status=MatchStatus.SCHEDULED,
            kickoff=self.kickoff,
            round_number=self.round_number,
            leg=self.leg,
            venue=self.venue,
            group_id=self.group_id,
        )


class Match(BaseModel):
    """A match record as supplied by the persistence layer.

    Team references may be missing while results are still being entered;
    the standings aggregator skips such records instead of failing.
    """

    id: str
    home_team_id: str | None = None
    away_team_id: str | None = None
    home_score: int | None = Field(default=None, ge=0)
    away_score: int | None = Field(default=None, ge=0)
    status: MatchStatus = MatchStatus.SCHEDULED
    kickoff: datetime | None = None
    round_number: int | None = None
    leg: int | None = None
    venue: str | None = None
    group_id: str | None = None

    @property
    def is_countable(self) -> bool:
        """True when the match counts towards standings."""
        return (
            self.status == MatchStatus.COMPLETED
            and self.home_score is not None
            and self.away_score is not None
        )


class Round(BaseModel):
    """All fixtures sharing a round number.

    ``resting_team_ids`` lists the team(s) given the bye this round.
    """

    model_config = ConfigDict(frozen=True)

    number: int = Field(ge=1)
    name: str
    leg: int = 1
    fixtures: tuple[Fixture, ...] = ()
    resting_team_ids: tuple[str, ...] = ()

    @property
    def team_ids(self) -> list[str]:
        ids: list[str] = []
        for f in self.fixtures:
            ids.extend((f.home_team_id, f.away_team_id))
        return ids
