"""Shared test fixtures for HabitFlow tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with settings and a few stored habits."""
    root = tmp_path / "workspace"
    (root / "habitflow").mkdir(parents=True)

    # Settings
    settings = {"timezone": "UTC", "log_level": "DEBUG"}
    (root / "habitflow" / "settings.yaml").write_text(
        yaml.dump(settings, default_flow_style=False), encoding="utf-8"
    )

    # Habits
    habits = {
        "habitflow_habits": [
            {
                "id": "water",
                "name": "Drink Water",
                "emoji": "💧",
                "category": "Health",
                "doneHistory": ["2024-06-08", "2024-06-09"],
                "createdAt": "2024-06-01",
            },
            {
                "id": "read",
                "name": "Read 20 pages",
                "emoji": "📚",
                "category": "Learning",
                "doneHistory": ["2024-06-10"],
                "createdAt": "2024-06-05",
            },
            {
                "id": "stretch",
                "name": "Stretch",
                "emoji": "🧘",
                "category": "Fitness",
                "doneHistory": [],
                "createdAt": "2024-06-07",
            },
        ],
    }
    (root / "habitflow" / "habits.json").write_text(
        json.dumps(habits, indent=2, ensure_ascii=False), encoding="utf-8"
    )

    # Set env var
    os.environ["HABITFLOW_ROOT"] = str(root)
    yield root
    # Cleanup
    if "HABITFLOW_ROOT" in os.environ:
        del os.environ["HABITFLOW_ROOT"]

