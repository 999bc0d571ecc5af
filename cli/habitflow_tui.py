#!/usr/bin/env python3
"""HabitFlow TUI: two-column habit board powered by Textual."""

from __future__ import annotations

import logging
import sys
from datetime import date

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    Label,
    ListItem,
    ListView,
    Select,
    Static,
)

from habitflow import (
    CATEGORIES,
    EMOJIS,
    Habit,
    HabitStorage,
    HabitStore,
    ValidationError,
    build_dashboard,
    created_message,
    deleted_message,
    load_settings,
    log_path,
    setup_logging,
    today_label,
    today_str,
    toggle_message,
    updated_message,
    validate_name,
    validation_warning,
    workspace_root,
)
from habitflow.models import HabitCard
from habitflow.views import EMPTY_DONE_TEXT, EMPTY_TODO_TEXT

logger = logging.getLogger("habitflow.tui")


# ── Stylesheet ─────────────────────────────────────────────────

CSS = """
Screen {
    background: $surface;
}

#stats-bar {
    height: 1;
    background: $primary-background;
    color: $text;
    padding: 0 2;
}

#board {
    height: 1fr;
}

.column {
    width: 1fr;
    min-width: 30;
    padding: 0 1;
}

#todo-column {
    border-right: tall $primary-background-darken-2;
}

.section-title {
    text-style: bold;
    color: $text;
    margin: 1 0 0 0;
    padding: 0 1;
}

.habit-list {
    height: 1fr;
}

.habit-row.is-done {
    opacity: 60%;
}

.empty-state {
    color: $text-muted;
}

HabitForm {
    align: center middle;
}

#form {
    width: 60;
    height: auto;
    padding: 1 2;
    border: thick $primary;
    background: $panel;
}

#form-buttons {
    height: auto;
    margin: 1 0 0 0;
}
"""


# ── Custom widgets ─────────────────────────────────────────────


class HabitRow(ListItem):
    """One habit card: emoji, name, category and streak."""

    def __init__(self, card: HabitCard, **kwargs) -> None:
        super().__init__(**kwargs)
        self.habit_id = card.habit.id
        self.card = card

    def compose(self) -> ComposeResult:
        h = self.card.habit
        text = f"{h.emoji}  {h.name}  [{h.category}]"
        if self.card.streak_label:
            text += f"  🔥 {self.card.streak_label}"
        yield Label(text, markup=False)

    def on_mount(self) -> None:
        self.add_class("habit-row")
        if self.card.done:
            self.add_class("is-done")


# ── Screens ────────────────────────────────────────────────────


class HabitForm(ModalScreen[tuple[str, str, str] | None]):
    """New/edit form. Dismisses with (name, emoji, category) or None."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+s", "save", "Save"),
    ]

    def __init__(self, habit: Habit | None = None) -> None:
        super().__init__()
        self._habit = habit

    def compose(self) -> ComposeResult:
        h = self._habit
        yield Vertical(
            Label("Edit Habit" if h else "New Habit", classes="section-title"),
            Input(value=h.name if h else "", placeholder="Habit name", id="name-input"),
            Select(
                [(e, e) for e in EMOJIS],
                value=h.emoji if h and h.emoji in EMOJIS else EMOJIS[0],
                allow_blank=False,
                id="emoji-select",
            ),
            Select(
                [(c, c) for c in CATEGORIES],
                value=h.category if h and h.category in CATEGORIES else CATEGORIES[0],
                allow_blank=False,
                id="category-select",
            ),
            Horizontal(
                Button("Save", variant="primary", id="save"),
                Button("Cancel", id="cancel"),
                id="form-buttons",
            ),
            id="form",
        )

    def on_mount(self) -> None:
        self.query_one("#name-input", Input).focus()

    @on(Button.Pressed, "#save")
    @on(Input.Submitted, "#name-input")
    def action_save(self) -> None:
        name = self.query_one("#name-input", Input).value
        errors = validate_name(name)
        if errors:
            self.app.notify(validation_warning(errors), severity="warning")
            self.query_one("#name-input", Input).focus()
            return
        emoji = str(self.query_one("#emoji-select", Select).value)
        category = str(self.query_one("#category-select", Select).value)
        self.dismiss((name, emoji, category))

    @on(Button.Pressed, "#cancel")
    def action_cancel(self) -> None:
        self.dismiss(None)


# ── Main app ───────────────────────────────────────────────────


class HabitFlowApp(App):
    """HabitFlow daily habit board."""

    TITLE = "HabitFlow"
    CSS = CSS

    BINDINGS = [
        Binding("n", "new_habit", "New"),
        Binding("e", "edit_habit", "Edit"),
        Binding("space", "toggle_done", "Done/Undo"),
        Binding("x", "delete_habit", "Delete"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, storage: HabitStorage | None = None) -> None:
        super().__init__()
        self._root = workspace_root()
        self._storage = storage or HabitStorage(self._root)
        self._store = HabitStore(self._storage.load_all(), clock=self._today)

    def _today(self) -> str:
        return today_str(self._root)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="stats-bar")
        yield Horizontal(
            Vertical(
                Label("To do", id="todo-title", classes="section-title"),
                ListView(id="todo-list", classes="habit-list"),
                id="todo-column",
                classes="column",
            ),
            Vertical(
                Label("Done", id="done-title", classes="section-title"),
                ListView(id="done-list", classes="habit-list"),
                id="done-column",
                classes="column",
            ),
            id="board",
        )
        yield Footer()

    async def on_mount(self) -> None:
        await self._refresh_board()
        self.query_one("#todo-list", ListView).focus()

    async def _refresh_board(self) -> None:
        """Recompute the dashboard and rebuild both columns."""
        today = self._today()
        view = build_dashboard(self._store.habits, today)

        self.sub_title = today_label(date.fromisoformat(today))
        self.query_one("#stats-bar", Static).update(
            f"Total {view.total}  ·  Done {view.done_count}  ·  "
            f"Best streak {view.best_streak}  ·  {view.progress_pct}%"
        )
        self.query_one("#todo-title", Label).update(f"To do ({view.todo_count})")
        self.query_one("#done-title", Label).update(f"Done ({view.done_count})")

        await self._fill("#todo-list", view.todo, EMPTY_TODO_TEXT)
        await self._fill("#done-list", view.done, EMPTY_DONE_TEXT)

    async def _fill(self, selector: str, cards: list[HabitCard], empty_text: str) -> None:
        list_view = self.query_one(selector, ListView)
        await list_view.clear()
        if not cards:
            await list_view.append(ListItem(Label(empty_text), classes="empty-state"))
            return
        await list_view.extend(HabitRow(card) for card in cards)

    def _selected_habit_id(self) -> str | None:
        focused = self.focused
        if not isinstance(focused, ListView) or focused.highlighted_child is None:
            return None
        return getattr(focused.highlighted_child, "habit_id", None)

    def _persist(self) -> None:
        self._storage.save_all(self._store.habits)

    # ── Actions ────────────────────────────────────────────────

    async def action_toggle_done(self) -> None:
        habit_id = self._selected_habit_id()
        if habit_id is None:
            return
        result = self._store.toggle_done(habit_id, self._today())
        if result is None:
            return
        self._persist()
        await self._refresh_board()
        self.notify(toggle_message(result))

    async def action_delete_habit(self) -> None:
        habit_id = self._selected_habit_id()
        if habit_id is None:
            return
        self._store.delete(habit_id)
        self._persist()
        await self._refresh_board()
        self.notify(deleted_message())

    def action_new_habit(self) -> None:
        if isinstance(self.screen, HabitForm):
            return
        self.push_screen(HabitForm(), self._on_created)

    def action_edit_habit(self) -> None:
        habit_id = self._selected_habit_id()
        habit = self._store.find(habit_id) if habit_id else None
        if habit is None:
            return

        async def _on_edited(fields: tuple[str, str, str] | None) -> None:
            if fields is None:
                return
            try:
                self._store.update(habit.id, *fields)
            except ValidationError as e:
                self.notify(validation_warning(e.errors), severity="warning")
                return
            self._persist()
            await self._refresh_board()
            self.notify(updated_message())

        self.push_screen(HabitForm(habit), _on_edited)

    async def _on_created(self, fields: tuple[str, str, str] | None) -> None:
        if fields is None:
            return
        try:
            self._store.create(*fields)
        except ValidationError as e:
            self.notify(validation_warning(e.errors), severity="warning")
            return
        self._persist()
        await self._refresh_board()
        self.notify(created_message())


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    root = workspace_root()
    if not root.exists():
        print(f"Workspace not found: {root}")
        print("Set HABITFLOW_ROOT or create the directory first.")
        sys.exit(1)

    setup_logging(load_settings(root).get("log_level", "INFO"), log_file=log_path(root))
    logger.info("Starting HabitFlow TUI in %s", root)
    app = HabitFlowApp()
    app.run()


if __name__ == "__main__":
    main()
