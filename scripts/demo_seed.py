"""Seed a Tourney tournament, play rounds, and print standings for demo purposes.

Usage:
    python scripts/demo_seed.py seed [TEAMS] [GROUPS]  # Create tournament + teams + fixtures
    python scripts/demo_seed.py play [N]               # Record random results for N rounds
    python scripts/demo_seed.py status                 # Print fixtures and standings
    python scripts/demo_seed.py export PATH            # Write a YAML snapshot

Uses a local SQLite database (demo_tourney.db).
"""

from __future__ import annotations

import asyncio
import os
import random
import sys
from datetime import date, timedelta
from pathlib import Path

from sqlalchemy import select

from tourney.config import Settings
from tourney.core.groups import generate_group_schedules
from tourney.core.schedule_times import format_kickoff
from tourney.core.seeding import TournamentSnapshot, generate_demo_snapshot, save_snapshot_yaml
from tourney.core.standings import compute_standings
from tourney.db.engine import create_engine, create_tables, get_session
from tourney.db.models import TournamentRow
from tourney.db.repository import Repository
from tourney.models.match import MatchStatus

DEMO_DB = os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///demo_tourney.db")


async def _current_tournament(repo: Repository) -> TournamentRow | None:
    result = await repo.session.execute(
        select(TournamentRow).order_by(TournamentRow.created_at.desc()).limit(1)
    )
    return result.scalar_one_or_none()


async def seed(num_teams: int, group_count: int) -> None:
    """Create a tournament from the demo roster and generate its fixtures."""
    settings = Settings(database_url=DEMO_DB)
    engine = create_engine(DEMO_DB)
    await create_tables(engine)

    snapshot = generate_demo_snapshot(num_teams=num_teams, group_count=group_count)
    async with get_session(engine) as session:
        repo = Repository(session)
        tournament = await repo.create_tournament(snapshot.name)

        group_ids: dict[str, str] = {}
        for group in snapshot.groups:
            row = await repo.create_group(tournament.id, group.name)
            group_ids[group.id] = row.id

        for idx, team in enumerate(snapshot.teams):
            group_id = snapshot.assignments.get(team.id)
            await repo.create_team(
                tournament.id,
                team.name,
                group_id=group_ids.get(group_id) if group_id else None,
                seed=idx,
            )

        teams, assignments = await repo.load_roster(tournament.id)
        start = date.today() + timedelta(days=1)
        params = settings.schedule_params(start, stage_id=tournament.id, double_round=True)
        schedules = generate_group_schedules(teams, assignments, params)
        for rounds in schedules.values():
            await repo.store_rounds(tournament.id, rounds)

        total = await repo.count_matches(tournament.id)
        print(f"Tournament: {tournament.name} ({tournament.id})")
        print(f"  {len(teams)} teams, {len(snapshot.groups) or 1} group(s), {total} fixtures")

    await engine.dispose()


async def play(rounds_to_play: int) -> None:
    """Record random results for the next unplayed rounds."""
    engine = create_engine(DEMO_DB)
    async with get_session(engine) as session:
        repo = Repository(session)
        tournament = await _current_tournament(repo)
        if tournament is None:
            print("No tournament found. Run 'seed' first.")
            return

        pending = [
            m for m in await repo.get_matches_for_tournament(tournament.id)
            if m.status == MatchStatus.SCHEDULED
        ]
        round_numbers = sorted({m.round_number for m in pending})[:rounds_to_play]
        rng = random.Random(len(pending))
        for match in pending:
            if match.round_number in round_numbers:
                await repo.record_result(match.id, rng.randint(0, 4), rng.randint(0, 3))
        print(f"Played round(s): {', '.join(str(n) for n in round_numbers) or 'none left'}")

    await engine.dispose()


async def status() -> None:
    """Print the fixture list and current standings."""
    settings = Settings(database_url=DEMO_DB)
    engine = create_engine(DEMO_DB)
    async with get_session(engine) as session:
        repo = Repository(session)
        tournament = await _current_tournament(repo)
        if tournament is None:
            print("No tournament found. Run 'seed' first.")
            return

        teams, assignments = await repo.load_roster(tournament.id)
        names = {t.id: t.name for t in teams}
        matches = await repo.load_matches(tournament.id)

        print(f"\n=== {tournament.name} ===")
        for m in matches:
            home = names.get(m.home_team_id or "", "?")
            away = names.get(m.away_team_id or "", "?")
            score = f"{m.home_score}-{m.away_score}" if m.is_countable else "vs"
            when = format_kickoff(m.kickoff) if m.kickoff else "TBD"
            print(f"  R{m.round_number:<3} {home:>22} {score:^5} {away:<22} {when}")

        tables = compute_standings(
            teams,
            assignments,
            matches,
            points=settings.points_system(),
            form_window=settings.tourney_form_window,
        )
        for key, rows in tables.items():
            print(f"\n--- {key} ---")
            header = f"{'P':>2} {'W':>2} {'D':>2} {'L':>2} {'GD':>4} {'Pts':>4}"
            print(f"  {'#':>2} {'Team':<22} {header}  Form")
            for r in rows:
                print(
                    f"  {r.rank:>2} {r.team_name:<22} {r.played:>2} {r.won:>2} {r.drawn:>2}"
                    f" {r.lost:>2} {r.goal_difference:>4} {r.points:>4}  {r.form_string}"
                )

    await engine.dispose()


async def export(path: Path) -> None:
    """Write the current tournament as a YAML snapshot."""
    engine = create_engine(DEMO_DB)
    async with get_session(engine) as session:
        repo = Repository(session)
        tournament = await _current_tournament(repo)
        if tournament is None:
            print("No tournament found. Run 'seed' first.")
            return

        teams, assignments = await repo.load_roster(tournament.id)
        groups = await repo.get_groups_for_tournament(tournament.id)
        snapshot = TournamentSnapshot.model_validate(
            {
                "id": tournament.id,
                "name": tournament.name,
                "teams": teams,
                "groups": [{"id": g.id, "name": g.name} for g in groups],
                "assignments": assignments,
                "matches": await repo.load_matches(tournament.id),
            }
        )
        save_snapshot_yaml(snapshot, path)
        print(f"Snapshot written to {path}")

    await engine.dispose()


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        return

    cmd = sys.argv[1]
    if cmd == "seed":
        num_teams = int(sys.argv[2]) if len(sys.argv) > 2 else 6
        group_count = int(sys.argv[3]) if len(sys.argv) > 3 else 0
        asyncio.run(seed(num_teams, group_count))
    elif cmd == "play":
        n = int(sys.argv[2]) if len(sys.argv) > 2 else 1
        asyncio.run(play(n))
    elif cmd == "status":
        asyncio.run(status())
    elif cmd == "export":
        if len(sys.argv) < 3:
            print("Usage: demo_seed.py export PATH")
            return
        asyncio.run(export(Path(sys.argv[2])))
    else:
        print(f"Unknown command: {cmd}")
        print(__doc__)


if __name__ == "__main__":
    main()
