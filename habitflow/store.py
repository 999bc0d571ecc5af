"""HabitStore: the ordered in-memory habit collection and its mutations."""

from __future__ import annotations

import logging
import secrets
import string
import time
from typing import Callable, Iterable, Iterator

from habitflow.errors import ValidationError
from habitflow.models import CATEGORIES, EMOJIS, MIN_NAME_LENGTH, Habit, ToggleResult
from habitflow.streaks import current_streak, parse_day
from habitflow.workspace import today_str

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


# ── Validation ────────────────────────────────────────────────


def validate_name(name: str | None) -> list[str]:
    """Validate a habit name and return list of errors (empty if valid)."""
    if len((name or "").strip()) < MIN_NAME_LENGTH:
        return [f"Name must be at least {MIN_NAME_LENGTH} characters"]
    return []


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    out = []
    while n:
        n, r = divmod(n, 36)
        out.append(_BASE36[r])
    return "".join(reversed(out))


def new_habit_id() -> str:
    """Millisecond timestamp in base 36 plus four random base-36 characters."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(4))
    return _to_base36(int(time.time() * 1000)) + suffix


# ── Store ─────────────────────────────────────────────────────


class HabitStore:
    """Owns the habit list. Unknown ids are silently ignored by every mutation."""

    def __init__(
        self,
        habits: Iterable[Habit] | None = None,
        clock: Callable[[], str] | None = None,
    ) -> None:
        self._habits: list[Habit] = list(habits or [])
        self._clock = clock or today_str

    @property
    def habits(self) -> list[Habit]:
        """Snapshot of the collection in insertion order."""
        return list(self._habits)

    def __len__(self) -> int:
        return len(self._habits)

    def __iter__(self) -> Iterator[Habit]:
        return iter(list(self._habits))

    def __contains__(self, habit_id: object) -> bool:
        return any(h.id == habit_id for h in self._habits)

    def find(self, habit_id: str) -> Habit | None:
        for h in self._habits:
            if h.id == habit_id:
                return h
        return None

    def _unique_id(self) -> str:
        habit_id = new_habit_id()
        while habit_id in self:
            habit_id = new_habit_id()
        return habit_id

    def create(
        self,
        name: str,
        emoji: str = EMOJIS[0],
        category: str = CATEGORIES[0],
    ) -> Habit:
        """Append a new habit. Raises ValidationError if the name is too short."""
        errors = validate_name(name)
        if errors:
            raise ValidationError(errors)

        habit = Habit(
            id=self._unique_id(),
            name=name.strip(),
            emoji=emoji,
            category=category,
            done_history=[],
            created_at=self._clock(),
        )
        self._habits.append(habit)
        logger.debug("Created habit %s (%s)", habit.id, habit.name)
        return habit

    def update(self, habit_id: str, name: str, emoji: str, category: str) -> None:
        """Overwrite name, emoji and category. History and creation date stay as they are."""
        errors = validate_name(name)
        if errors:
            raise ValidationError(errors)

        habit = self.find(habit_id)
        if habit is None:
            logger.debug("Update ignored, no habit %s", habit_id)
            return
        habit.name = name.strip()
        habit.emoji = emoji
        habit.category = category
        logger.debug("Updated habit %s", habit_id)

    def delete(self, habit_id: str) -> None:
        before = len(self._habits)
        self._habits = [h for h in self._habits if h.id != habit_id]
        if len(self._habits) != before:
            logger.debug("Deleted habit %s", habit_id)

    def toggle_done(self, habit_id: str, today: str) -> ToggleResult | None:
        """Mark or unmark *today*. Returns None when the id is unknown.

        Raises ValueError for a malformed *today*, before anything changes.
        """
        habit = self.find(habit_id)
        if habit is None:
            logger.debug("Toggle ignored, no habit %s", habit_id)
            return None

        if parse_day(today) is None:
            raise ValueError(f"Invalid reference date: {today!r}")

        if today in habit.done_history:
            habit.done_history = [d for d in habit.done_history if d != today]
            logger.debug("Unmarked habit %s for %s", habit_id, today)
            return ToggleResult(action="unmarked")

        habit.done_history.append(today)
        streak = current_streak(habit, today)
        logger.debug("Marked habit %s for %s (streak %d)", habit_id, today, streak)
        return ToggleResult(action="marked", streak=streak)
