"""Team, Group, and group-membership tags.

A team belongs to at most one group per stage. Teams without an assignment
are tagged ``Ungrouped`` rather than filed under a magic group id.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Team(BaseModel):
    """A team entered in a tournament. Owned by the roster, read-only here."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)


class Group(BaseModel):
    """A partition of teams within a tournament stage."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str


class Grouped(BaseModel):
    """Tag for teams assigned to a named group."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["grouped"] = "grouped"
    group_id: str

    def __str__(self) -> str:
        return self.group_id


class Ungrouped(BaseModel):
    """Tag for teams with no group assignment (the implicit single group)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["ungrouped"] = "ungrouped"

    def __str__(self) -> str:
        return "ungrouped"


GroupTag = Annotated[Grouped | Ungrouped, Field(discriminator="kind")]

UNGROUPED = Ungrouped()


def group_key_for(team_id: str, assignments: Mapping[str, str] | None) -> Grouped | Ungrouped:
    """Return the group tag for *team_id* given a team→group mapping."""
    if assignments:
        group_id = assignments.get(team_id)
        if group_id:
            return Grouped(group_id=group_id)
    return UNGROUPED
