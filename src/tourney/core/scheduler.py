"""Round-robin schedule generation.

Generates a schedule where every team meets every other team exactly once
(or twice, home and away, with ``double_round``). Uses the circle method
(polygon scheduling): positions ``0..n-2`` rotate around a fixed pivot at
position ``n-1``.

Terminology:
  - **round**: one set of fixtures in which no team appears twice. With
    N teams (even) a round has N/2 fixtures; a full pass takes N-1 rounds.
  - **bye**: a placeholder added when N is odd. Whoever is paired with it
    rests that round, so each round has (N-1)/2 fixtures.
  - **leg**: one pass over all pairings. The second leg replays the first
    with home and away swapped.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import datetime

from tourney.core.errors import DuplicateTeamError, InsufficientTeamsError
from tourney.core.schedule_times import MatchdayClock
from tourney.models.match import Fixture, Match, Round
from tourney.models.schedule import ScheduleParams
from tourney.models.team import Team

logger = logging.getLogger(__name__)

BYE = None

_FIXTURE_NAMESPACE = uuid.UUID("4f1c8a52-6c1e-4d38-9a0b-3f2f6f9d2e71")


def circle_pairings(size: int) -> list[list[tuple[int, int]]]:
    """Return the (home, away) position pairs for each round of one leg.

    ``size`` must be even. Round ``r`` pairs slot ``m`` as
    ``(r + m) mod (size-1)`` against ``(size-1-m+r) mod (size-1)``; for
    ``m == 0`` those coincide, so the away side is the pivot ``size-1``.
    """
    last = size - 1
    rounds: list[list[tuple[int, int]]] = []
    for r in range(last):
        pairs: list[tuple[int, int]] = []
        for m in range(size // 2):
            home = (r + m) % last
            away = (last - m + r) % last
            if m == 0:
                away = last
            pairs.append((home, away))
        rounds.append(pairs)
    return rounds


def _fixture_id(stage_id: str, round_number: int, home_id: str, away_id: str) -> str:
    return str(uuid.uuid5(_FIXTURE_NAMESPACE, f"{stage_id}:{round_number}:{home_id}:{away_id}"))


def round_name(round_number: int, rounds_per_leg: int) -> str:
    """``"Round 3"`` for the first leg, ``"Round 3 (Return)"`` for the second."""
    if round_number <= rounds_per_leg:
        return f"Round {round_number}"
    return f"Round {round_number - rounds_per_leg} (Return)"


def _validate_teams(teams: Sequence[Team]) -> None:
    if len(teams) < 2:
        raise InsufficientTeamsError(len(teams))
    seen: set[str] = set()
    for team in teams:
        if team.id in seen:
            raise DuplicateTeamError(team.id)
        seen.add(team.id)


def generate_schedule(teams: Sequence[Team], params: ScheduleParams) -> list[Round]:
    """Generate a round-robin schedule using the circle method.

    Team order seeds the pairing; it does not imply ranking. Calling this
    twice with the same teams (in the same order) and params returns an
    identical schedule, fixture ids included.

    Args:
        teams: Teams to schedule, at least two, ids unique.
        params: Dates, kickoff time, venue and single/double round.

    Returns:
        Rounds numbered from 1. With ``double_round`` the reverse leg follows
        as rounds ``n..2(n-1)``.

    Raises:
        InsufficientTeamsError: fewer than two teams.
        DuplicateTeamError: a team id appears twice.
    """
    _validate_teams(teams)

    slots: list[Team | None] = list(teams)
    if len(slots) % 2:
        slots.append(BYE)
    size = len(slots)
    pairings = circle_pairings(size)
    rounds_per_leg = len(pairings)
    legs = 2 if params.double_round else 1

    clock = MatchdayClock(params)
    rounds: list[Round] = []

    for leg in range(1, legs + 1):
        for index, pairs in enumerate(pairings):
            round_number = (leg - 1) * rounds_per_leg + index + 1
            if rounds:
                clock.next_round()

            fixtures: list[Fixture] = []
            resting: list[str] = []
            for home_pos, away_pos in pairs:
                home, away = slots[home_pos], slots[away_pos]
                if home is BYE or away is BYE:
                    resting.append((away if home is BYE else home).id)  # type: ignore[union-attr]
                    continue
                if leg == 2:
                    home, away = away, home
                kickoff = datetime.combine(clock.fixture_date(), params.kickoff_time)
                fixtures.append(
                    Fixture(
                        id=_fixture_id(params.stage_id, round_number, home.id, away.id),
                        round_number=round_number,
                        leg=leg,
                        home_team_id=home.id,
                        away_team_id=away.id,
                        kickoff=kickoff,
                        venue=params.venue,
                    )
                )

            rounds.append(
                Round(
                    number=round_number,
                    name=round_name(round_number, rounds_per_leg),
                    leg=leg,
                    fixtures=tuple(fixtures),
                    resting_team_ids=tuple(resting),
                )
            )

    logger.info(
        "schedule_generated stage=%s teams=%d rounds=%d fixtures=%d",
        params.stage_id or "-",
        len(teams),
        len(rounds),
        sum(len(r.fixtures) for r in rounds),
    )
    return rounds


def flatten_fixtures(rounds: Sequence[Round]) -> list[Fixture]:
    """All fixtures in round order."""
    return [f for r in rounds for f in r.fixtures]


def fixtures_to_matches(rounds: Sequence[Round]) -> list[Match]:
    """Convert generated rounds into unplayed ``scheduled`` match records."""
    return [f.to_match() for f in flatten_fixtures(rounds)]
