"""Tests for group draws and per-group schedules."""

from collections import Counter

import pytest

from tourney.core.errors import InsufficientTeamsError
from tourney.core.groups import draw_groups, generate_group_schedules, partition_teams
from tourney.core.scheduler import flatten_fixtures
from tourney.models.team import UNGROUPED, Grouped


class TestDrawGroups:
    def test_snake_draw(self, make_teams):
        groups, assignments = draw_groups(make_teams(8), 2)
        assert [g.id for g in groups] == ["group_1", "group_2"]
        assert [g.name for g in groups] == ["Group A", "Group B"]
        assert assignments == {
            "t-a": "group_1",
            "t-b": "group_2",
            "t-c": "group_2",
            "t-d": "group_1",
            "t-e": "group_1",
            "t-f": "group_2",
            "t-g": "group_2",
            "t-h": "group_1",
        }

    def test_sequential_draw(self, make_teams):
        _, assignments = draw_groups(make_teams(6), 3, strategy="sequential")
        assert [assignments[f"t-{c}"] for c in "abcdef"] == [
            "group_1",
            "group_2",
            "group_3",
            "group_1",
            "group_2",
            "group_3",
        ]

    def test_uneven_sizes_differ_by_at_most_one(self, make_teams):
        _, assignments = draw_groups(make_teams(11), 3)
        sizes = Counter(assignments.values())
        assert max(sizes.values()) - min(sizes.values()) <= 1
        assert sum(sizes.values()) == 11

    def test_zero_groups(self, make_teams):
        with pytest.raises(ValueError, match="group_count"):
            draw_groups(make_teams(4), 0)

    def test_too_few_teams_per_group(self, make_teams):
        with pytest.raises(InsufficientTeamsError) as exc_info:
            draw_groups(make_teams(5), 3)
        assert exc_info.value.required == 6


class TestPartitionTeams:
    def test_named_groups_sorted_then_ungrouped(self, make_teams):
        teams = make_teams(5)
        buckets = partition_teams(teams, {"t-a": "g2", "t-b": "g1", "t-c": "g2"})
        assert list(buckets) == [Grouped(group_id="g1"), Grouped(group_id="g2"), UNGROUPED]
        assert [t.id for t in buckets[Grouped(group_id="g2")]] == ["t-a", "t-c"]
        assert [t.id for t in buckets[UNGROUPED]] == ["t-d", "t-e"]

    def test_empty_ungrouped_bucket_omitted(self, make_teams):
        buckets = partition_teams(make_teams(2), {"t-a": "g1", "t-b": "g1"})
        assert list(buckets) == [Grouped(group_id="g1")]

    def test_no_assignments(self, make_teams):
        buckets = partition_teams(make_teams(3), None)
        assert list(buckets) == [UNGROUPED]

    def test_blank_group_id_counts_as_ungrouped(self, make_teams):
        buckets = partition_teams(make_teams(2), {"t-a": ""})
        assert list(buckets) == [UNGROUPED]


class TestGroupSchedules:
    def test_each_group_is_its_own_round_robin(self, make_teams, params):
        teams = make_teams(8)
        _, assignments = draw_groups(teams, 2)
        schedules = generate_group_schedules(teams, assignments, params)

        assert list(schedules) == [Grouped(group_id="group_1"), Grouped(group_id="group_2")]
        for key, rounds in schedules.items():
            fixtures = flatten_fixtures(rounds)
            assert len(fixtures) == 6
            for f in fixtures:
                assert f.group_id == key.group_id
                assert assignments[f.home_team_id] == key.group_id
                assert assignments[f.away_team_id] == key.group_id

    def test_fixture_ids_unique_across_groups(self, make_teams, params):
        teams = make_teams(8)
        _, assignments = draw_groups(teams, 2)
        schedules = generate_group_schedules(teams, assignments, params)
        ids = [f.id for rounds in schedules.values() for f in flatten_fixtures(rounds)]
        assert len(ids) == len(set(ids))

    def test_ungrouped_fixtures_have_no_group(self, make_teams, params):
        schedules = generate_group_schedules(make_teams(4), None, params)
        assert list(schedules) == [UNGROUPED]
        assert all(f.group_id is None for f in flatten_fixtures(schedules[UNGROUPED]))

    def test_lonely_group_rejected(self, make_teams, params):
        teams = make_teams(3)
        with pytest.raises(InsufficientTeamsError):
            generate_group_schedules(teams, {"t-a": "g1", "t-b": "g1", "t-c": "g2"}, params)
