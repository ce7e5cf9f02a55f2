"""Tournament snapshots: YAML loading and demo roster generation.

A snapshot is everything the scheduling core needs for one stage: the
roster, the groups, the team→group assignments and the match records.

Supports two flows:
1. Load from YAML (hand-authored or exported from the database)
2. Generate a deterministic demo roster programmatically
"""

from __future__ import annotations

import uuid
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

from tourney.core.groups import draw_groups
from tourney.models.match import Match
from tourney.models.team import Group, Team


class TournamentSnapshot(BaseModel):
    """Static input for one scheduling/standings run."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = "Tourney"
    teams: list[Team] = Field(default_factory=list)
    groups: list[Group] = Field(default_factory=list)
    assignments: dict[str, str] = Field(default_factory=dict)
    matches: list[Match] = Field(default_factory=list)

    @model_validator(mode="after")
    def _assignments_reference_known_groups(self) -> TournamentSnapshot:
        group_ids = {g.id for g in self.groups}
        for team_id, group_id in self.assignments.items():
            if group_id not in group_ids:
                msg = f"team {team_id} assigned to unknown group {group_id}"
                raise ValueError(msg)
        return self


DEMO_TEAM_NAMES = [
    "Kisumu Lakers",
    "Nakuru Flamingos",
    "Mombasa Mariners",
    "Eldoret Harriers",
    "Thika Falcons",
    "Nyeri Highlanders",
    "Machakos Rangers",
    "Kakamega Homeboyz",
    "Garissa Camels",
    "Kericho Tea Pickers",
    "Malindi Sharks",
    "Naivasha Hippos",
]


def generate_demo_snapshot(
    num_teams: int = 8,
    group_count: int = 0,
    seed: int = 42,
) -> TournamentSnapshot:
    """Build a deterministic demo roster, optionally drawn into groups."""
    teams: list[Team] = []
    for idx in range(num_teams):
        name = DEMO_TEAM_NAMES[idx] if idx < len(DEMO_TEAM_NAMES) else f"Team {idx + 1}"
        team_id = str(uuid.uuid5(uuid.NAMESPACE_DNS, f"team-{seed}-{idx}"))
        teams.append(Team(id=team_id, name=name))

    groups: list[Group] = []
    assignments: dict[str, str] = {}
    if group_count:
        groups, assignments = draw_groups(teams, group_count)

    return TournamentSnapshot(
        id=str(uuid.uuid5(uuid.NAMESPACE_DNS, f"tournament-{seed}")),
        name="Demo Cup",
        teams=teams,
        groups=groups,
        assignments=assignments,
    )


def save_snapshot_yaml(snapshot: TournamentSnapshot, path: Path) -> None:
    """Save a snapshot to YAML."""
    data = snapshot.model_dump(mode="json")
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def load_snapshot_yaml(path: Path) -> TournamentSnapshot:
    """Load a snapshot from YAML."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return TournamentSnapshot.model_validate(data or {})
