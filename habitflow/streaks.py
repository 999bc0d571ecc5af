"""Streak engine: completion checks, consecutive-day streaks, todo/done split.

Everything here is a pure function of its arguments. The reference day is
always passed in; nothing reads the wall clock.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Iterable, Sequence

from habitflow.models import Habit

MAX_STREAK_DAYS = 365

_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_day(value: str | date) -> date | None:
    """Parse a 'YYYY-MM-DD' string into a date; None if malformed."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DAY_RE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def previous_day(day: date) -> date:
    return day - timedelta(days=1)


def valid_days(history: Iterable[str]) -> set[date]:
    """Deduplicate a done history into calendar dates, dropping malformed entries."""
    out = set()
    for value in history:
        d = parse_day(value)
        if d is not None:
            out.add(d)
    return out


def _day_str(day: str | date) -> str:
    return day.isoformat() if isinstance(day, date) else day


def is_done_on(habit: Habit, day: str | date) -> bool:
    """True if *day* is in the habit's done history."""
    return _day_str(day) in habit.done_history


def current_streak(habit: Habit, today: str | date) -> int:
    """Count consecutive done days ending today, or yesterday if today is still open.

    The walk is capped at MAX_STREAK_DAYS steps.
    """
    ref = parse_day(today)
    if ref is None:
        raise ValueError(f"Invalid reference date: {today!r}")
    if not habit.done_history:
        return 0

    days = valid_days(habit.done_history)
    cursor = ref if ref in days else previous_day(ref)

    streak = 0
    for _ in range(MAX_STREAK_DAYS):
        if cursor not in days:
            break
        streak += 1
        cursor = previous_day(cursor)
    return streak


def best_streak(habits: Iterable[Habit], today: str | date) -> int:
    """Highest current streak across all habits; 0 when there are none."""
    return max((current_streak(h, today) for h in habits), default=0)


def partition(habits: Sequence[Habit], today: str | date) -> tuple[list[Habit], list[Habit]]:
    """Split habits into (todo, done) for *today*, keeping their relative order."""
    todo: list[Habit] = []
    done: list[Habit] = []
    for h in habits:
        (done if is_done_on(h, today) else todo).append(h)
    return todo, done
