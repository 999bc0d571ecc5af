"""Workspace root, settings, timezone and path helpers for HabitFlow."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from habitflow.fileio import read_yaml

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: dict[str, Any] = {
    "timezone": "UTC",
    "log_level": "INFO",
}


def workspace_root() -> Path:
    """Get the workspace root directory (contains habitflow/)."""
    return Path(
        os.environ.get("HABITFLOW_ROOT", str(Path.home() / "habitflow"))
    ).expanduser().resolve()


# ── Path helpers ──────────────────────────────────────────────

def habits_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "habitflow" / "habits.json"


def settings_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "habitflow" / "settings.yaml"


def log_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "habitflow" / "habitflow.log"


# ── Settings & clock ──────────────────────────────────────────

def load_settings(root: Path | None = None) -> dict[str, Any]:
    """Read settings.yaml merged over the defaults. Unknown keys are kept."""
    settings = dict(DEFAULT_SETTINGS)
    path = settings_path(root)
    try:
        settings.update(read_yaml(path))
    except yaml.YAMLError as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
    return settings


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """Get user's timezone from settings.yaml, defaulting to UTC."""
    name = load_settings(root).get("timezone") or "UTC"
    try:
        return ZoneInfo(str(name))
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")


def today_str(root: Path | None = None) -> str:
    """Get today's date string (YYYY-MM-DD) in user's timezone."""
    tz = get_user_timezone(root)
    return datetime.now(tz).date().isoformat()
