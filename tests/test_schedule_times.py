"""Tests for match-day alignment and the date cursor."""

from datetime import date, datetime

import pytest

from tourney.core.schedule_times import MatchdayClock, align_matchday, format_kickoff
from tourney.models.schedule import ScheduleParams


class TestAlignMatchday:
    def test_any_policy_keeps_day(self):
        assert align_matchday(date(2025, 9, 3), "any") == date(2025, 9, 3)

    @pytest.mark.parametrize(
        ("day", "expected"),
        [
            (date(2025, 9, 1), date(2025, 9, 6)),  # Monday → Saturday
            (date(2025, 9, 5), date(2025, 9, 6)),  # Friday → Saturday
            (date(2025, 9, 6), date(2025, 9, 6)),  # Saturday stays
            (date(2025, 9, 7), date(2025, 9, 7)),  # Sunday stays
        ],
    )
    def test_weekends_policy(self, day, expected):
        assert align_matchday(day, "weekends") == expected

    def test_unknown_policy(self):
        with pytest.raises(ValueError, match="unknown matchday policy"):
            align_matchday(date(2025, 9, 1), "fortnightly")  # type: ignore[arg-type]


class TestMatchdayClock:
    def test_uncapped_round_shares_one_day(self):
        clock = MatchdayClock(ScheduleParams(start_date=date(2025, 9, 6)))
        assert [clock.fixture_date() for _ in range(5)] == [date(2025, 9, 6)] * 5

    def test_cap_advances_within_round(self):
        clock = MatchdayClock(
            ScheduleParams(
                start_date=date(2025, 9, 6),
                max_matches_before_date_advance=2,
                date_advance_days=2,
            )
        )
        days = [clock.fixture_date() for _ in range(5)]
        assert days == [
            date(2025, 9, 6),
            date(2025, 9, 6),
            date(2025, 9, 8),
            date(2025, 9, 8),
            date(2025, 9, 10),
        ]

    def test_next_round_uses_interval(self):
        clock = MatchdayClock(ScheduleParams(start_date=date(2025, 9, 6)))
        clock.fixture_date()
        assert clock.next_round() == date(2025, 9, 13)
        assert clock.fixture_date() == date(2025, 9, 13)

    def test_next_round_resets_slate_count(self):
        clock = MatchdayClock(
            ScheduleParams(start_date=date(2025, 9, 6), max_matches_before_date_advance=1)
        )
        clock.fixture_date()
        clock.next_round()
        assert clock.fixture_date() == date(2025, 9, 13)

    def test_start_date_is_aligned(self):
        clock = MatchdayClock(
            ScheduleParams(start_date=date(2025, 9, 2), matchday_policy="weekends")
        )
        assert clock.current == date(2025, 9, 6)


class TestFormatKickoff:
    def test_format(self):
        assert format_kickoff(datetime(2025, 9, 6, 13, 0)) == "Sat 6 Sep 2025, 13:00"

    def test_no_leading_zero_on_day(self):
        assert format_kickoff(datetime(2025, 10, 4, 9, 30)) == "Sat 4 Oct 2025, 09:30"
