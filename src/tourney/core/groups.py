"""Group draws and per-group schedules.

Group stages are a set of independent round-robins, one per group. This
module partitions the roster and runs the generator once per group.
"""

from __future__ import annotations

import logging
import string
from collections.abc import Mapping, Sequence
from typing import Literal

from tourney.core.errors import InsufficientTeamsError
from tourney.core.scheduler import generate_schedule
from tourney.models.match import Round
from tourney.models.schedule import ScheduleParams
from tourney.models.team import UNGROUPED, Group, Grouped, Team, Ungrouped, group_key_for

logger = logging.getLogger(__name__)

DrawStrategy = Literal["snake", "sequential"]


def _group_name(index: int) -> str:
    letters = string.ascii_uppercase
    if index < len(letters):
        return f"Group {letters[index]}"
    return f"Group {index + 1}"


def draw_groups(
    teams: Sequence[Team],
    group_count: int,
    strategy: DrawStrategy = "snake",
) -> tuple[list[Group], dict[str, str]]:
    """Distribute teams (in seed order) across ``group_count`` groups.

    ``snake`` deals 1→N then N→1 so top seeds are spread evenly;
    ``sequential`` deals 1→N repeatedly.

    Returns:
        The groups and a team_id → group_id mapping.
    """
    if group_count < 1:
        msg = f"group_count must be at least 1, got {group_count}"
        raise ValueError(msg)
    if len(teams) < group_count * 2:
        raise InsufficientTeamsError(len(teams), required=group_count * 2)

    groups = [Group(id=f"group_{i + 1}", name=_group_name(i)) for i in range(group_count)]
    assignments: dict[str, str] = {}
    for position, team in enumerate(teams):
        lap, offset = divmod(position, group_count)
        if strategy == "snake" and lap % 2 == 1:
            offset = group_count - 1 - offset
        assignments[team.id] = groups[offset].id
    return groups, assignments


def partition_teams(
    teams: Sequence[Team],
    assignments: Mapping[str, str] | None,
) -> dict[Grouped | Ungrouped, list[Team]]:
    """Split teams by group tag, keeping roster order inside each group.

    Named groups come first, sorted by id. The ungrouped bucket comes last
    and only appears when it holds teams, or when there are no teams at all.
    """
    buckets: dict[Grouped | Ungrouped, list[Team]] = {}
    for team in teams:
        buckets.setdefault(group_key_for(team.id, assignments), []).append(team)

    ordered: dict[Grouped | Ungrouped, list[Team]] = {}
    named = sorted((k for k in buckets if isinstance(k, Grouped)), key=lambda k: k.group_id)
    for key in named:
        ordered[key] = buckets[key]
    if UNGROUPED in buckets or not ordered:
        ordered[UNGROUPED] = buckets.get(UNGROUPED, [])
    return ordered


def generate_group_schedules(
    teams: Sequence[Team],
    assignments: Mapping[str, str] | None,
    params: ScheduleParams,
) -> dict[Grouped | Ungrouped, list[Round]]:
    """Run the round-robin generator independently for every group.

    Each group gets its own ``stage_id`` namespace so fixture ids never
    collide, and every fixture carries its ``group_id``.
    """
    schedules: dict[Grouped | Ungrouped, list[Round]] = {}
    for key, members in partition_teams(teams, assignments).items():
        group_id = key.group_id if isinstance(key, Grouped) else None
        group_params = params.model_copy(
            update={"stage_id": f"{params.stage_id}:{group_id or 'ungrouped'}"}
        )
        rounds = generate_schedule(members, group_params)
        if group_id is not None:
            rounds = [
                r.model_copy(
                    update={
                        "fixtures": tuple(
                            f.model_copy(update={"group_id": group_id}) for f in r.fixtures
                        )
                    }
                )
                for r in rounds
            ]
        schedules[key] = rounds
        logger.info("group_schedule_generated group=%s teams=%d", key, len(members))
    return schedules
