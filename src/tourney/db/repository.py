"""Repository pattern for database access.

Wraps SQLAlchemy async sessions and converts rows into the value objects
the scheduling core consumes (``Team``, ``Match``) so the core never sees
ORM objects.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tourney.db.models import GroupRow, MatchRow, TeamRow, TournamentRow
from tourney.models.match import Match, MatchStatus, Round
from tourney.models.team import Team


class Repository:
    """Async repository for all database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # --- Tournaments ---

    async def create_tournament(self, name: str) -> TournamentRow:
        row = TournamentRow(name=name)
        self.session.add(row)
        await self.session.flush()
        return row

    async def get_tournament(self, tournament_id: str) -> TournamentRow | None:
        return await self.session.get(TournamentRow, tournament_id)

    # --- Groups / Teams ---

    async def create_group(
        self,
        tournament_id: str,
        name: str,
        group_id: str | None = None,
    ) -> GroupRow:
        row = GroupRow(tournament_id=tournament_id, name=name)
        if group_id:
            row.id = group_id
        self.session.add(row)
        await self.session.flush()
        return row

    async def get_groups_for_tournament(self, tournament_id: str) -> list[GroupRow]:
        stmt = (
            select(GroupRow)
            .where(GroupRow.tournament_id == tournament_id)
            .order_by(GroupRow.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_team(
        self,
        tournament_id: str,
        name: str,
        group_id: str | None = None,
        seed: int = 0,
    ) -> TeamRow:
        row = TeamRow(tournament_id=tournament_id, name=name, group_id=group_id, seed=seed)
        self.session.add(row)
        await self.session.flush()
        return row

    async def get_teams_for_tournament(self, tournament_id: str) -> list[TeamRow]:
        """Teams in seed order (then insertion order), which seeds pairing."""
        stmt = (
            select(TeamRow)
            .where(TeamRow.tournament_id == tournament_id)
            .order_by(TeamRow.seed, TeamRow.created_at, TeamRow.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def assign_team_group(self, team_id: str, group_id: str | None) -> TeamRow | None:
        row = await self.session.get(TeamRow, team_id)
        if row is None:
            return None
        row.group_id = group_id
        await self.session.flush()
        return row

    async def load_roster(self, tournament_id: str) -> tuple[list[Team], dict[str, str]]:
        """Return the roster as core ``Team`` values plus the group assignments."""
        rows = await self.get_teams_for_tournament(tournament_id)
        teams = [Team(id=r.id, name=r.name) for r in rows]
        assignments = {r.id: r.group_id for r in rows if r.group_id}
        return teams, assignments

    # --- Fixtures / Matches ---

    async def count_matches(self, tournament_id: str) -> int:
        stmt = select(func.count()).select_from(MatchRow).where(
            MatchRow.tournament_id == tournament_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def delete_matches_for_tournament(self, tournament_id: str) -> None:
        await self.session.execute(delete(MatchRow).where(MatchRow.tournament_id == tournament_id))
        await self.session.flush()

    async def store_rounds(self, tournament_id: str, rounds: Sequence[Round]) -> list[MatchRow]:
        """Persist generated fixtures as ``scheduled`` match rows."""
        rows: list[MatchRow] = []
        for rnd in rounds:
            for fixture in rnd.fixtures:
                row = MatchRow(
                    id=fixture.id,
                    tournament_id=tournament_id,
                    group_id=fixture.group_id,
                    round_number=fixture.round_number,
                    round_name=rnd.name,
                    leg=fixture.leg,
                    home_team_id=fixture.home_team_id,
                    away_team_id=fixture.away_team_id,
                    kickoff=fixture.kickoff,
                    venue=fixture.venue,
                    status=MatchStatus.SCHEDULED.value,
                )
                self.session.add(row)
                rows.append(row)
        await self.session.flush()
        return rows

    async def get_match(self, match_id: str) -> MatchRow | None:
        return await self.session.get(MatchRow, match_id)

    async def get_matches_for_tournament(self, tournament_id: str) -> list[MatchRow]:
        stmt = (
            select(MatchRow)
            .where(MatchRow.tournament_id == tournament_id)
            .order_by(MatchRow.round_number, MatchRow.group_id, MatchRow.kickoff, MatchRow.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def load_matches(self, tournament_id: str) -> list[Match]:
        """Return match rows as core ``Match`` values."""
        rows = await self.get_matches_for_tournament(tournament_id)
        return [
            Match(
                id=r.id,
                home_team_id=r.home_team_id,
                away_team_id=r.away_team_id,
                home_score=r.home_score,
                away_score=r.away_score,
                status=MatchStatus(r.status),
                kickoff=r.kickoff,
                round_number=r.round_number,
                leg=r.leg,
                venue=r.venue,
                group_id=r.group_id,
            )
            for r in rows
        ]

    async def record_result(
        self,
        match_id: str,
        home_score: int,
        away_score: int,
    ) -> MatchRow | None:
        """Store final scores and mark the match completed."""
        row = await self.session.get(MatchRow, match_id)
        if row is None:
            return None
        row.home_score = home_score
        row.away_score = away_score
        row.status = MatchStatus.COMPLETED.value
        await self.session.flush()
        return row
