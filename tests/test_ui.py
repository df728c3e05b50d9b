# tests/test_ui.py

from __future__ import annotations

import curses

import pytest

from tasklist.models import Task, TaskStatus
from tasklist.theme import Theme
from tasklist.ui import InputMode, UIState, draw, input_line, list_title, task_line, visible_window

from .helpers import FakeScreen


def test_list_title_shows_one_decimal() -> None:
    assert list_title(50.0) == "Todo List (d: delete, D: remove done, Space: toggle) 50.0% Complete"
    assert list_title(200 / 3).endswith("66.7% Complete")


@pytest.mark.parametrize(
    "status, expected",
    [
        (TaskStatus.UNDONE, "[ ] buy milk"),
        (TaskStatus.PENDING, "[-] buy milk"),
        (TaskStatus.DONE, "[x] buy milk"),
    ],
)
def test_task_line_markers(status: TaskStatus, expected: str) -> None:
    assert task_line(Task("buy milk", status)) == expected


def test_input_line_per_mode() -> None:
    state = UIState(input="abc")
    assert input_line(state) == ""
    state.mode = InputMode.ADD
    assert input_line(state) == "New Task: abc"
    state.mode = InputMode.EDIT
    assert input_line(state) == "Edit Task: abc"
    state.mode = InputMode.FILTER
    assert input_line(state) == "Filter: abc"


def test_visible_window_scrolls_to_selection() -> None:
    assert visible_window(0, 3, 10) == (0, 3)
    assert visible_window(0, 20, 5) == (0, 5)
    assert visible_window(7, 20, 5) == (3, 8)
    assert visible_window(19, 20, 5) == (15, 20)
    assert visible_window(0, 0, 5) == (0, 0)
    assert visible_window(2, 4, 0) == (0, 0)


def test_message_expiry_is_strictly_after_duration() -> None:
    state = UIState()
    state.show("hi", now=10.0)
    state.expire_message(13.0, 3.0)
    assert state.message is not None
    state.expire_message(13.01, 3.0)
    assert state.message is None


def test_theme_without_color_still_dims_done() -> None:
    theme = Theme({"undone": "red"}, enabled=False)
    assert theme.status_attr(TaskStatus.UNDONE) == curses.A_NORMAL
    assert theme.status_attr(TaskStatus.DONE) == curses.A_DIM


class AccentTheme(Theme):
    """Color attributes without a live curses screen."""

    ACCENT = 1 << 8  # color pair 1 bits

    def attr(self, key: str) -> int:
        return self.ACCENT if key == "accent" else 0


def test_draw_uses_accent_for_box_titles() -> None:
    screen = FakeScreen([])
    state = UIState()
    state.show("Saved", now=0.0)
    draw(screen, [Task("a")], 0.0, state, AccentTheme({}))

    titled = {text: attr for y, x, text, attr in screen.texts if x == 1 and y in (0, 18, 21)}
    assert titled[list_title(0.0)] == curses.A_BOLD | AccentTheme.ACCENT
    assert titled["Input"] == curses.A_BOLD | AccentTheme.ACCENT
    assert titled["Status"] == curses.A_BOLD | AccentTheme.ACCENT
