"""Short user-facing messages shown after each action."""

from __future__ import annotations

from datetime import date

from habitflow.models import ToggleResult


def toggle_message(result: ToggleResult) -> str:
    if not result.marked:
        return "Unmarked ↩"
    if result.streak and result.streak > 1:
        return f"🔥 {result.streak} days in a row!"
    return "✓ Habit completed!"


def created_message() -> str:
    return "✦ Habit created!"


def updated_message() -> str:
    return "✎ Habit updated"


def deleted_message() -> str:
    return "Habit removed"


def validation_warning(errors: list[str]) -> str:
    """Prefix the first validation error for display."""
    return "Warning: " + (errors[0] if errors else "Invalid input")


def today_label(day: date) -> str:
    """Header label such as 'SUN, FEB 22'."""
    return f"{day.strftime('%a')}, {day.strftime('%b')} {day.day}".upper()
