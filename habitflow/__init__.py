"""HabitFlow core library: habit store, streak engine and persistence.

Public API re-exports for convenient imports:
    from habitflow import HabitStore, current_streak, build_dashboard, ...
"""

# Workspace, settings & clock
from habitflow.workspace import (
    workspace_root,
    load_settings,
    get_user_timezone,
    today_str,
    habits_path,
    settings_path,
    log_path,
)

# File I/O
from habitflow.fileio import (
    read_text,
    read_json,
    read_yaml,
    write_json_atomic,
)

# Errors
from habitflow.errors import HabitFlowError, ValidationError

# Models
from habitflow.models import (
    EMOJIS,
    CATEGORIES,
    MIN_NAME_LENGTH,
    Habit,
    ToggleResult,
    HabitCard,
    DashboardView,
)

# Streaks
from habitflow.streaks import (
    MAX_STREAK_DAYS,
    parse_day,
    is_done_on,
    current_streak,
    best_streak,
    partition,
)

# Store
from habitflow.store import HabitStore, validate_name

# Persistence
from habitflow.storage import HabitStorage

# Views & feedback
from habitflow.views import build_dashboard, streak_label
from habitflow.feedback import (
    toggle_message,
    created_message,
    updated_message,
    deleted_message,
    validation_warning,
    today_label,
)

# Logging
from habitflow.log import setup_logging
