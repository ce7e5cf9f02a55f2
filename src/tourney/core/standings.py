"""League standings from completed match results.

All functions are pure: the table is rebuilt from scratch on every call
from the roster, the group assignments and the match snapshot, so calling
twice with the same inputs gives the same tables.

Results are folded in kickoff order, which fixes the order of each team's
form guide no matter in which order results were entered.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from tourney.core.groups import partition_teams
from tourney.models.match import Match
from tourney.models.standings import (
    FormResult,
    PointsSystem,
    StandingsRow,
    TeamRecord,
)
from tourney.models.team import Grouped, Team, Ungrouped, group_key_for

logger = logging.getLogger(__name__)

DEFAULT_FORM_WINDOW = 5


@dataclass
class _SideTally:
    """Running totals for the games a team played on one side."""

    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0

    def add(self, scored: int, conceded: int) -> None:
        self.played += 1
        self.goals_for += scored
        self.goals_against += conceded
        if scored > conceded:
            self.won += 1
        elif scored < conceded:
            self.lost += 1
        else:
            self.drawn += 1

    def to_record(self) -> TeamRecord:
        return TeamRecord(
            played=self.played,
            won=self.won,
            drawn=self.drawn,
            lost=self.lost,
            goals_for=self.goals_for,
            goals_against=self.goals_against,
        )


@dataclass
class _Tally:
    """Running totals for one team during a single computation."""

    team: Team
    group: Grouped | Ungrouped
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0
    form: list[FormResult] = field(default_factory=list)
    home: _SideTally = field(default_factory=_SideTally)
    away: _SideTally = field(default_factory=_SideTally)

    def record(self, scored: int, conceded: int, points: PointsSystem, *, is_home: bool) -> None:
        self.played += 1
        self.goals_for += scored
        self.goals_against += conceded
        (self.home if is_home else self.away).add(scored, conceded)
        if scored > conceded:
            self.won += 1
            self.points += points.win
            self.form.append("W")
        elif scored < conceded:
            self.lost += 1
            self.points += points.loss
            self.form.append("L")
        else:
            self.drawn += 1
            self.points += points.draw
            self.form.append("D")

    def sort_key(self) -> tuple[int, int, int, str, str, str]:
        return (
            -self.points,
            -(self.goals_for - self.goals_against),
            -self.goals_for,
            self.team.name.casefold(),
            self.team.name,
            self.team.id,
        )


def _as_utc(moment: datetime) -> datetime:
    return moment.replace(tzinfo=UTC) if moment.tzinfo is None else moment


def _kickoff_key(match: Match) -> tuple[bool, datetime, str]:
    if match.kickoff is None:
        return (True, datetime.min.replace(tzinfo=UTC), match.id)
    return (False, _as_utc(match.kickoff), match.id)


def _usable_matches(
    matches: Iterable[Match],
    tallies: Mapping[str, _Tally],
    as_of: datetime | None = None,
) -> list[Match]:
    """Countable matches whose teams exist and share a group, in kickoff order.

    With *as_of*, matches kicking off after the cutoff (or with no kickoff)
    are left out.
    """
    cutoff = _as_utc(as_of) if as_of is not None else None
    usable: list[Match] = []
    for match in matches:
        if not match.is_countable:
            continue
        if cutoff is not None and (match.kickoff is None or _as_utc(match.kickoff) > cutoff):
            continue
        home_id, away_id = match.home_team_id, match.away_team_id
        if home_id not in tallies or away_id not in tallies:
            logger.warning(
                "standings_skip_unknown_team match=%s home=%s away=%s",
                match.id,
                home_id,
                away_id,
            )
            continue
        if home_id == away_id:
            logger.warning("standings_skip_self_match match=%s team=%s", match.id, home_id)
            continue
        if tallies[home_id].group != tallies[away_id].group:
            logger.warning(
                "standings_skip_cross_group match=%s home_group=%s away_group=%s",
                match.id,
                tallies[home_id].group,
                tallies[away_id].group,
            )
            continue
        usable.append(match)
    return sorted(usable, key=_kickoff_key)


def compute_standings(
    teams: Sequence[Team] | None,
    group_assignments: Mapping[str, str] | None = None,
    matches: Iterable[Match] = (),
    *,
    points: PointsSystem | None = None,
    form_window: int = DEFAULT_FORM_WINDOW,
    as_of: datetime | None = None,
) -> dict[Grouped | Ungrouped, list[StandingsRow]]:
    """Compute one ranked table per group.

    Teams without an assignment share the ``UNGROUPED`` table. Only
    completed matches with both scores count. Matches naming an unknown
    team, pitting a team against itself, or spanning two groups are logged
    and skipped.

    Ordering: points, goal difference, goals scored (all descending), then
    team name ascending, ignoring case. With no results yet this is
    alphabetical order over zeroed rows.

    Args:
        teams: The full roster for the stage.
        group_assignments: team_id → group_id. ``None`` or empty means a
            single table.
        matches: Match snapshot, any order.
        points: Points per win/draw/loss (default 3/1/0).
        form_window: How many recent results to keep in ``form``.
        as_of: Historical cutoff. Only matches kicking off at or before it
            count. Naive datetimes are read as UTC.

    Returns:
        Group tag → rows ranked from 1.
    """
    if teams is None:
        msg = "compute_standings requires a team list"
        raise ValueError(msg)
    if form_window < 0:
        msg = f"form_window must be non-negative, got {form_window}"
        raise ValueError(msg)
    points = points or PointsSystem()

    tallies: dict[str, _Tally] = {}
    roster: list[Team] = []
    for team in teams:
        if team.id in tallies:
            logger.warning("standings_skip_duplicate_team team=%s", team.id)
            continue
        tallies[team.id] = _Tally(team=team, group=group_key_for(team.id, group_assignments))
        roster.append(team)

    for match in _usable_matches(matches, tallies, as_of):
        home = tallies[match.home_team_id]  # type: ignore[index]
        away = tallies[match.away_team_id]  # type: ignore[index]
        home_score, away_score = match.home_score or 0, match.away_score or 0
        home.record(home_score, away_score, points, is_home=True)
        away.record(away_score, home_score, points, is_home=False)

    tables: dict[Grouped | Ungrouped, list[StandingsRow]] = {}
    for key, members in partition_teams(roster, group_assignments).items():
        ordered = sorted((tallies[t.id] for t in members), key=_Tally.sort_key)
        tables[key] = [
            StandingsRow(
                team_id=tally.team.id,
                team_name=tally.team.name,
                group=key,
                rank=position,
                played=tally.played,
                won=tally.won,
                drawn=tally.drawn,
                lost=tally.lost,
                goals_for=tally.goals_for,
                goals_against=tally.goals_against,
                points=tally.points,
                form=tuple(tally.form[-form_window:]) if form_window else (),
                home_record=tally.home.to_record(),
                away_record=tally.away.to_record(),
            )
            for position, tally in enumerate(ordered, start=1)
        ]
    return tables


def standings_for_group(
    teams: Sequence[Team],
    matches: Iterable[Match],
    *,
    points: PointsSystem | None = None,
    form_window: int = DEFAULT_FORM_WINDOW,
    as_of: datetime | None = None,
) -> list[StandingsRow]:
    """Single-table convenience wrapper: every team in one group."""
    tables = compute_standings(
        teams, None, matches, points=points, form_window=form_window, as_of=as_of
    )
    return next(iter(tables.values()))


def standings_as_dicts(rows: Sequence[StandingsRow]) -> list[dict]:
    """JSON-ready rows (group tag flattened to ``group_id``)."""
    out: list[dict] = []
    for row in rows:
        data = row.model_dump(exclude={"group"})
        data["group_id"] = row.group.group_id if isinstance(row.group, Grouped) else None
        data["form"] = list(row.form)
        out.append(data)
    return out
