"""Dashboard view assembly: everything a front-end needs to draw the board."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from habitflow.models import DashboardView, Habit, HabitCard
from habitflow.streaks import best_streak, current_streak, is_done_on, partition

EMPTY_TODO_TEXT = "All habits done!"
EMPTY_DONE_TEXT = "No habits completed today"


def streak_label(streak: int) -> str:
    """'' for no streak, '1 day', 'N days' otherwise."""
    if streak <= 0:
        return ""
    return f"{streak} day{'s' if streak > 1 else ''}"


def progress_pct(done_count: int, total: int) -> int:
    if not total:
        return 0
    return round(done_count / total * 100)


def build_card(habit: Habit, today: str | date) -> HabitCard:
    streak = current_streak(habit, today)
    return HabitCard(
        habit=habit,
        done=is_done_on(habit, today),
        streak=streak,
        streak_label=streak_label(streak),
    )


def build_dashboard(habits: Sequence[Habit], today: str | date) -> DashboardView:
    """Recompute the full board for *today*. Nothing is cached between calls."""
    todo, done = partition(habits, today)
    day = today.isoformat() if isinstance(today, date) else today
    return DashboardView(
        today=day,
        todo=[build_card(h, today) for h in todo],
        done=[build_card(h, today) for h in done],
        total=len(habits),
        done_count=len(done),
        todo_count=len(todo),
        best_streak=best_streak(habits, today),
        progress_pct=progress_pct(len(done), len(habits)),
    )
