"""Precondition errors raised by the scheduling core."""

from __future__ import annotations


class TourneyError(Exception):
    """Base class for errors the caller must fix by correcting its input."""


class InsufficientTeamsError(TourneyError, ValueError):
    """Fewer teams than a round-robin (or a group draw) needs."""

    def __init__(self, team_count: int, required: int = 2) -> None:
        self.team_count = team_count
        self.required = required
        super().__init__(f"need at least {required} teams, got {team_count}")


class DuplicateTeamError(TourneyError, ValueError):
    """The same team id was entered more than once."""

    def __init__(self, team_id: str) -> None:
        self.team_id = team_id
        super().__init__(f"team {team_id} appears more than once")
