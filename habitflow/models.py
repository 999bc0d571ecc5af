"""Typed dataclasses for the HabitFlow data model.

All persisted models use from_dict/to_dict for JSON serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# Single-codepoint glyphs only; compound emoji with variation selectors
# render inconsistently across terminals and fonts.
EMOJIS = [
    "🧘", "🏃", "📚", "💧", "🥗", "💪", "🎯", "🎨", "🎸", "🌿",
    "😴", "🧠", "💊", "🚴", "🧹", "📝", "🌅", "🍎", "⭐", "🔑",
]

CATEGORIES = ["Health", "Focus", "Fitness", "Mindset", "Learning", "Routine", "Nutrition"]

MIN_NAME_LENGTH = 2


# ── Habit ─────────────────────────────────────────────────────


@dataclass
class Habit:
    id: str = ""
    name: str = ""
    emoji: str = EMOJIS[0]
    category: str = CATEGORIES[0]
    done_history: list[str] = field(default_factory=list)  # YYYY-MM-DD, logically a set
    created_at: str = ""  # YYYY-MM-DD

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Habit:
        history = d.get("doneHistory", d.get("done_history")) or []
        if not isinstance(history, (list, tuple)):
            history = []
        return cls(
            id=str(d.get("id") or ""),
            name=str(d.get("name", "")).strip(),
            emoji=str(d.get("emoji") or EMOJIS[0]),
            category=str(d.get("category") or CATEGORIES[0]),
            done_history=[str(day) for day in history],
            created_at=str(d.get("createdAt", d.get("created_at", "")) or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "emoji": self.emoji,
            "category": self.category,
            "doneHistory": list(self.done_history),
            "createdAt": self.created_at,
        }


# ── Toggle ────────────────────────────────────────────────────


@dataclass
class ToggleResult:
    action: str = ""  # marked, unmarked
    streak: int | None = None

    @property
    def marked(self) -> bool:
        return self.action == "marked"

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"action": self.action}
        if self.streak is not None:
            d["streak"] = self.streak
        return d


# ── Dashboard ─────────────────────────────────────────────────


@dataclass
class HabitCard:
    """One habit as the board shows it for a given day."""

    habit: Habit
    done: bool = False
    streak: int = 0
    streak_label: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self.habit.to_dict()
        d["done"] = self.done
        d["streak"] = self.streak
        d["streakLabel"] = self.streak_label
        return d


@dataclass
class DashboardView:
    today: str = ""
    todo: list[HabitCard] = field(default_factory=list)
    done: list[HabitCard] = field(default_factory=list)
    total: int = 0
    done_count: int = 0
    todo_count: int = 0
    best_streak: int = 0
    progress_pct: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "today": self.today,
            "todo": [c.to_dict() for c in self.todo],
            "done": [c.to_dict() for c in self.done],
            "total": self.total,
            "doneCount": self.done_count,
            "todoCount": self.todo_count,
            "bestStreak": self.best_streak,
            "progressPct": self.progress_pct,
        }
