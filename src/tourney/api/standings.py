"""Standings API endpoint."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, HTTPException

from tourney.api.deps import RepoDep, SettingsDep
from tourney.core.standings import compute_standings, standings_as_dicts
from tourney.models.team import Grouped

router = APIRouter(prefix="/api/tournaments", tags=["standings"])


@router.get("/{tournament_id}/standings")
async def get_standings(
    tournament_id: str,
    repo: RepoDep,
    settings: SettingsDep,
    as_of: datetime | None = None,
) -> dict:
    """Get standings for a tournament, one table per group.

    Recomputed from the stored match snapshot on every request. ``as_of``
    gives the table as it stood at that moment.
    """
    tournament = await repo.get_tournament(tournament_id)
    if tournament is None:
        raise HTTPException(404, "Tournament not found")

    teams, assignments = await repo.load_roster(tournament_id)
    matches = await repo.load_matches(tournament_id)
    groups = {g.id: g.name for g in await repo.get_groups_for_tournament(tournament_id)}

    tables = compute_standings(
        teams,
        assignments,
        matches,
        points=settings.points_system(),
        form_window=settings.tourney_form_window,
        as_of=as_of,
    )

    return {
        "data": [
            {
                "group_id": key.group_id if isinstance(key, Grouped) else None,
                "group_name": groups.get(key.group_id) if isinstance(key, Grouped) else None,
                "standings": standings_as_dicts(rows),
            }
            for key, rows in tables.items()
        ],
    }
