"""Fixture generation and listing endpoints."""

from __future__ import annotations

import logging
from datetime import date, time

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from tourney.api.deps import RepoDep, SettingsDep
from tourney.core.errors import TourneyError
from tourney.core.groups import generate_group_schedules
from tourney.core.schedule_times import format_kickoff
from tourney.db.models import MatchRow
from tourney.models.match import Round

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tournaments", tags=["fixtures"])


class GenerateFixturesRequest(BaseModel):
    """Request body for generating a tournament's round-robin fixtures.

    Unset fields fall back to the configured defaults.
    """

    start_date: date
    kickoff_time: time | None = None
    venue: str | None = None
    double_round: bool = False
    max_matches_before_date_advance: int | None = Field(default=None, ge=1)
    weekends_only: bool | None = None
    replace: bool = False


def _round_payload(rnd: Round) -> dict:
    return {
        "number": rnd.number,
        "name": rnd.name,
        "leg": rnd.leg,
        "resting_team_ids": list(rnd.resting_team_ids),
        "fixtures": [f.model_dump(mode="json") for f in rnd.fixtures],
    }


def _match_payload(row: MatchRow) -> dict:
    return {
        "id": row.id,
        "round_number": row.round_number,
        "leg": row.leg,
        "group_id": row.group_id,
        "home_team_id": row.home_team_id,
        "away_team_id": row.away_team_id,
        "kickoff": row.kickoff.isoformat() if row.kickoff else None,
        "kickoff_display": format_kickoff(row.kickoff) if row.kickoff else None,
        "venue": row.venue,
        "status": row.status,
        "home_score": row.home_score,
        "away_score": row.away_score,
    }


@router.post("/{tournament_id}/fixtures")
async def generate_fixtures(
    tournament_id: str,
    body: GenerateFixturesRequest,
    repo: RepoDep,
    settings: SettingsDep,
) -> dict:
    """Generate and store round-robin fixtures for every group.

    Refuses to overwrite existing fixtures unless ``replace`` is set, since
    results may already be recorded against them.
    """
    tournament = await repo.get_tournament(tournament_id)
    if tournament is None:
        raise HTTPException(404, "Tournament not found")

    existing = await repo.count_matches(tournament_id)
    if existing and not body.replace:
        raise HTTPException(409, f"Tournament already has {existing} fixtures")

    policy = None
    if body.weekends_only is not None:
        policy = "weekends" if body.weekends_only else "any"
    params = settings.schedule_params(
        body.start_date,
        kickoff_time=body.kickoff_time,
        venue=body.venue,
        double_round=body.double_round,
        max_matches_before_date_advance=body.max_matches_before_date_advance,
        matchday_policy=policy,
        stage_id=tournament_id,
    )

    teams, assignments = await repo.load_roster(tournament_id)
    try:
        schedules = generate_group_schedules(teams, assignments, params)
    except TourneyError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if existing:
        await repo.delete_matches_for_tournament(tournament_id)
        logger.info("fixtures_replaced tournament=%s removed=%d", tournament_id, existing)

    groups_payload = []
    for key, rounds in schedules.items():
        await repo.store_rounds(tournament_id, rounds)
        groups_payload.append(
            {
                "group_id": getattr(key, "group_id", None),
                "rounds": [_round_payload(r) for r in rounds],
            }
        )

    return {"data": {"tournament_id": tournament_id, "groups": groups_payload}}


@router.get("/{tournament_id}/fixtures")
async def list_fixtures(tournament_id: str, repo: RepoDep) -> dict:
    """List stored fixtures grouped by round number."""
    tournament = await repo.get_tournament(tournament_id)
    if tournament is None:
        raise HTTPException(404, "Tournament not found")

    rows = await repo.get_matches_for_tournament(tournament_id)
    rounds: dict[int, dict] = {}
    for row in rows:
        entry = rounds.setdefault(
            row.round_number,
            {"number": row.round_number, "name": row.round_name, "matches": []},
        )
        entry["matches"].append(_match_payload(row))
    return {"data": [rounds[n] for n in sorted(rounds)]}
