from __future__ import annotations

import logging
import os
import secrets
import threading
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, status
from fastapi.responses import HTMLResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from habitflow import (
    CATEGORIES,
    EMOJIS,
    HabitStorage,
    HabitStore,
    ValidationError,
    build_dashboard,
    created_message,
    deleted_message,
    load_settings,
    parse_day,
    setup_logging,
    today_label,
    today_str as _today_str,
    toggle_message,
    updated_message,
    workspace_root as _workspace_root,
)
from habitflow.models import DashboardView, HabitCard
from habitflow.views import EMPTY_DONE_TEXT, EMPTY_TODO_TEXT

logger = logging.getLogger(__name__)

# Serializes load -> mutate -> save; sync endpoints run in a thread pool.
_store_lock = threading.Lock()


# ── HTML helpers ──────────────────────────────────────────────

def _escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _render_card(card: HabitCard) -> str:
    h = card.habit
    streak = f'<span class="streak">{_escape(card.streak_label)}</span>' if card.streak else ""
    return (
        f'<li class="card{" is-done" if card.done else ""}" data-id="{_escape(h.id)}">'
        f'<span class="emoji">{_escape(h.emoji)}</span> '
        f'<span class="name">{_escape(h.name)}</span> '
        f'<span class="category">{_escape(h.category)}</span> {streak}'
        "</li>"
    )


def _render_column(title: str, cards: list[HabitCard], empty_text: str) -> str:
    if cards:
        body = "<ul>" + "".join(_render_card(c) for c in cards) + "</ul>"
    else:
        body = f'<div class="empty-state">{_escape(empty_text)}</div>'
    return f'<section><h2>{_escape(title)} ({len(cards)})</h2>{body}</section>'


def _render_board(view: DashboardView) -> str:
    day = parse_day(view.today)
    label = today_label(day) if day else view.today
    return f"""<!doctype html>
<html>
<head><meta charset="utf-8"><title>HabitFlow</title></head>
<body>
<header>
  <h1>HabitFlow</h1>
  <div class="today">{_escape(label)}</div>
  <div class="stats">
    <span>Total: {view.total}</span>
    <span>Done: {view.done_count}</span>
    <span>Best streak: {view.best_streak}</span>
    <span>Progress: {view.progress_pct}%</span>
  </div>
</header>
<main>
{_render_column("To do", view.todo, EMPTY_TODO_TEXT)}
{_render_column("Done", view.done, EMPTY_DONE_TEXT)}
</main>
</body>
</html>
"""


# ── App & auth ────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_logging(load_settings().get("log_level", "INFO"))
    logger.info("Serving habits from %s", _workspace_root())
    yield


app = FastAPI(title="HabitFlow", version="0.1.0", lifespan=lifespan)

security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("HABITFLOW_USERNAME", "")
    expected_password = os.environ.get("HABITFLOW_PASSWORD", "")

    if credentials is None:
        if not expected_username or not expected_password:
            return "guest"
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    if not expected_username or not expected_password:
        return "guest"

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


# ── Store access ──────────────────────────────────────────────

def _open_store() -> tuple[HabitStore, HabitStorage, str]:
    root = _workspace_root()
    storage = HabitStorage(root)
    today = _today_str(root)
    store = HabitStore(storage.load_all(), clock=lambda: today)
    return store, storage, today


def _form_fields(payload: dict[str, Any]) -> tuple[str, str, str]:
    name = str(payload.get("name", "") or "")
    emoji = str(payload.get("emoji") or EMOJIS[0])
    category = str(payload.get("category") or CATEGORIES[0])
    return name, emoji, category


def _bad_request(e: ValidationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.to_dict())


# ── Endpoints ─────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/", response_class=HTMLResponse)
def index(username: str = Depends(get_current_user)) -> HTMLResponse:
    store, _storage, today = _open_store()
    return HTMLResponse(_render_board(build_dashboard(store.habits, today)))


@app.get("/api/options")
def api_options(username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Emoji and category choices for the new/edit form."""
    return {"emojis": EMOJIS, "categories": CATEGORIES}


@app.get("/api/habits")
def api_list_habits(username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Board view: todo/done partitions, streaks, counts, best streak."""
    store, _storage, today = _open_store()
    return build_dashboard(store.habits, today).to_dict()


@app.post("/api/habits")
def api_create_habit(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    name, emoji, category = _form_fields(payload)
    with _store_lock:
        store, storage, _today = _open_store()
        try:
            habit = store.create(name, emoji, category)
        except ValidationError as e:
            raise _bad_request(e) from e
        storage.save_all(store.habits)
    return {"ok": True, "habit": habit.to_dict(), "message": created_message()}


@app.put("/api/habits/{habit_id}")
def api_update_habit(habit_id: str, payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    name, emoji, category = _form_fields(payload)
    with _store_lock:
        store, storage, _today = _open_store()
        try:
            store.update(habit_id, name, emoji, category)
        except ValidationError as e:
            raise _bad_request(e) from e
        storage.save_all(store.habits)
        habit = store.find(habit_id)
    return {
        "ok": True,
        "habit": habit.to_dict() if habit else None,
        "message": updated_message(),
    }


@app.delete("/api/habits/{habit_id}")
def api_delete_habit(habit_id: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    with _store_lock:
        store, storage, _today = _open_store()
        store.delete(habit_id)
        storage.save_all(store.habits)
    return {"ok": True, "habit_id": habit_id, "message": deleted_message()}


@app.post("/api/habits/{habit_id}/toggle")
def api_toggle_habit(habit_id: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    with _store_lock:
        store, storage, today = _open_store()
        result = store.toggle_done(habit_id, today)
        if result is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"ok": False, "habit_id": habit_id})
        storage.save_all(store.habits)
    return {"ok": True, **result.to_dict(), "message": toggle_message(result)}
