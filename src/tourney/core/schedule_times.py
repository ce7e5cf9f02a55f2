"""Match-day arithmetic for generated fixtures.

The generator does not know about calendars. It asks a ``MatchdayClock``
for the date of each fixture, and the clock applies the configured
date-advance rules:

  - every round starts on its own match day;
  - inside a round, the date moves on by ``date_advance_days`` after every
    ``max_matches_before_date_advance`` fixtures (a slate of a few games
    per calendar day);
  - the next round starts ``round_interval_days`` after the previous one,
    or the day after the last slate if the round overran that.

A matchday policy may reject some days. ``"weekends"`` only accepts
Saturdays and Sundays.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from tourney.models.schedule import MatchdayPolicy, ScheduleParams

_SATURDAY = 5
_SUNDAY = 6


def align_matchday(day: date, policy: MatchdayPolicy = "any") -> date:
    """Return the first acceptable match day on or after *day*."""
    if policy == "any":
        return day
    if policy == "weekends":
        weekday = day.weekday()
        if weekday in (_SATURDAY, _SUNDAY):
            return day
        return day + timedelta(days=_SATURDAY - weekday)
    msg = f"unknown matchday policy: {policy!r}"
    raise ValueError(msg)


class MatchdayClock:
    """Date cursor shared by all rounds of one generation run."""

    def __init__(self, params: ScheduleParams) -> None:
        self._params = params
        self._round_start = align_matchday(params.start_date, params.matchday_policy)
        self._current = self._round_start
        self._assigned_in_round = 0

    @property
    def current(self) -> date:
        return self._current

    def fixture_date(self) -> date:
        """Return the date for the next fixture of the current round."""
        cap = self._params.max_matches_before_date_advance
        if cap is not None and self._assigned_in_round and self._assigned_in_round % cap == 0:
            self._current = align_matchday(
                self._current + timedelta(days=self._params.date_advance_days),
                self._params.matchday_policy,
            )
        self._assigned_in_round += 1
        return self._current

    def next_round(self) -> date:
        """Move the cursor to the first match day of the following round."""
        earliest = self._round_start + timedelta(days=self._params.round_interval_days)
        after_last = self._current + timedelta(days=1)
        self._round_start = align_matchday(max(earliest, after_last), self._params.matchday_policy)
        self._current = self._round_start
        self._assigned_in_round = 0
        return self._round_start


def format_kickoff(dt: datetime) -> str:
    """Format a kickoff as ``"Sat 6 Sep 2025, 13:00"``."""
    return f"{dt.strftime('%a')} {dt.day} {dt.strftime('%b %Y, %H:%M')}"
