"""Tests for habitflow/feedback.py: user-facing messages."""

from datetime import date

from habitflow.feedback import (
    created_message,
    deleted_message,
    today_label,
    toggle_message,
    updated_message,
    validation_warning,
)
from habitflow.models import ToggleResult
from habitflow.store import validate_name


def test_toggle_message():
    assert toggle_message(ToggleResult(action="unmarked")) == "Unmarked ↩"
    assert toggle_message(ToggleResult(action="marked", streak=1)) == "✓ Habit completed!"
    assert toggle_message(ToggleResult(action="marked", streak=4)) == "🔥 4 days in a row!"


def test_crud_messages():
    assert created_message() == "✦ Habit created!"
    assert updated_message() == "✎ Habit updated"
    assert deleted_message() == "Habit removed"


def test_validation_warning_from_caller_check():
    errors = validate_name("x")
    assert validation_warning(errors) == "Warning: Name must be at least 2 characters"
    assert validation_warning([]) == "Warning: Invalid input"


def test_today_label():
    assert today_label(date(2026, 2, 22)) == "SUN, FEB 22"
    assert today_label(date(2024, 6, 10)) == "MON, JUN 10"
