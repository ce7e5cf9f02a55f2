"""Match result entry endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from tourney.api.deps import RepoDep
from tourney.models.match import MatchStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matches", tags=["matches"])


class RecordResultRequest(BaseModel):
    """Final score for a match."""

    home_score: int = Field(ge=0)
    away_score: int = Field(ge=0)


@router.put("/{match_id}/result")
async def record_result(match_id: str, body: RecordResultRequest, repo: RepoDep) -> dict:
    """Record (or correct) the final score and mark the match completed."""
    match = await repo.get_match(match_id)
    if match is None:
        raise HTTPException(404, "Match not found")
    if match.status == MatchStatus.CANCELLED:
        raise HTTPException(409, "Match was cancelled")

    row = await repo.record_result(match_id, body.home_score, body.away_score)
    logger.info(
        "result_recorded match=%s score=%d-%d",
        match_id,
        body.home_score,
        body.away_score,
    )
    return {
        "data": {
            "id": row.id,  # type: ignore[union-attr]
            "status": row.status,  # type: ignore[union-attr]
            "home_score": row.home_score,  # type: ignore[union-attr]
            "away_score": row.away_score,  # type: ignore[union-attr]
        },
    }
