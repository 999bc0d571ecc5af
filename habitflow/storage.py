"""Persistence for HabitFlow: the whole collection as one JSON document.

The file holds ``{"habitflow_habits": [...]}``. Loading never fails: a
missing, blank or corrupt file yields an empty collection, and records
without a usable name are dropped. Records with a missing or repeated id
get a fresh one so ids stay unique across the collection.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from habitflow.fileio import read_json, write_json_atomic
from habitflow.models import MIN_NAME_LENGTH, Habit
from habitflow.store import new_habit_id
from habitflow.workspace import habits_path

logger = logging.getLogger(__name__)

STORAGE_KEY = "habitflow_habits"


def _usable(record: Any) -> bool:
    if not isinstance(record, dict):
        return False
    name = record.get("name")
    return isinstance(name, str) and len(name.strip()) >= MIN_NAME_LENGTH


def _ensure_unique_ids(habits: list[Habit]) -> None:
    taken = {h.id for h in habits}
    seen: set[str] = set()
    for h in habits:
        if not h.id or h.id in seen:
            old = h.id
            h.id = new_habit_id()
            while h.id in taken:
                h.id = new_habit_id()
            logger.warning("Habit %r had missing or duplicate id %r; reassigned %s", h.name, old, h.id)
            taken.add(h.id)
        seen.add(h.id)


def habits_from_document(data: Any) -> list[Habit]:
    """Turn a decoded document into habits, skipping anything malformed."""
    if data is None:
        return []
    if not isinstance(data, dict) or not isinstance(data.get(STORAGE_KEY), list):
        logger.warning("Unexpected habits document shape; starting empty")
        return []

    records = data[STORAGE_KEY]
    habits = [Habit.from_dict(r) for r in records if _usable(r)]
    dropped = len(records) - len(habits)
    if dropped:
        logger.warning("Dropped %d unusable habit record(s)", dropped)
    _ensure_unique_ids(habits)
    return habits


class HabitStorage:
    """Loads and saves the habit collection under a workspace root."""

    def __init__(self, root: Path | None = None) -> None:
        self.path = habits_path(root)

    def load_all(self) -> list[Habit]:
        try:
            data = read_json(self.path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Could not read %s (%s); starting empty", self.path, e)
            return []
        return habits_from_document(data)

    def save_all(self, habits: Iterable[Habit]) -> None:
        write_json_atomic(self.path, {STORAGE_KEY: [h.to_dict() for h in habits]})
        logger.debug("Saved habits to %s", self.path)
