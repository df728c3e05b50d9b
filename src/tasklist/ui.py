"""Rendering: a stateless projection of tasks + UI state onto the screen.

Layout (top to bottom): task list box, input box (3 rows), status box (3 rows).
The text helpers here are plain functions so they can be checked without a
terminal; ``draw`` is the only part that touches curses.
"""
from __future__ import annotations
import curses
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from tasklist.models import Task
from tasklist.theme import Theme

LIST_HELP = "d: delete, D: remove done, Space: toggle"
HIGHLIGHT_SYMBOL = "> "
BOX_HEIGHT = 3
MIN_LIST_HEIGHT = 5


class InputMode(Enum):
    VIEW = "view"
    ADD = "add"
    EDIT = "edit"
    FILTER = "filter"
    CONFIRM_RESET = "confirm-reset"


INPUT_PROMPTS = {
    InputMode.ADD: "New Task: ",
    InputMode.EDIT: "Edit Task: ",
    InputMode.FILTER: "Filter: ",
}


@dataclass
class StatusMessage:
    text: str
    shown_at: float


@dataclass
class UIState:
    """Transient driver state; never persisted."""
    mode: InputMode = InputMode.VIEW
    input: str = ""
    filter: str = ""
    selected: int = 0
    message: Optional[StatusMessage] = None

    def show(self, text: str, now: float) -> None:
        self.message = StatusMessage(text, now)

    def expire_message(self, now: float, seconds: float) -> None:
        if self.message is not None and now - self.message.shown_at > seconds:
            self.message = None


# -------------------- text helpers --------------------
def list_title(percentage: float) -> str:
    return f"Todo List ({LIST_HELP}) {percentage:.1f}% Complete"


def task_line(task: Task) -> str:
    return f"{task.status.marker} {task.description}"


def input_line(state: UIState) -> str:
    prompt = INPUT_PROMPTS.get(state.mode)
    if prompt is None:
        return ""
    return prompt + state.input


def visible_window(selected: int, count: int, height: int) -> Tuple[int, int]:
    """Slice [start, end) of ``count`` rows that fits ``height`` and shows ``selected``."""
    if height <= 0 or count <= 0:
        return 0, 0
    if count <= height:
        return 0, count
    start = min(max(0, selected - height + 1), count - height)
    return start, start + height


# -------------------- drawing --------------------
def draw(stdscr: "curses.window", tasks: Sequence[Task], percentage: float,
         state: UIState, theme: Theme) -> None:
    stdscr.erase()
    height, width = stdscr.getmaxyx()
    list_height = max(MIN_LIST_HEIGHT, height - 2 * BOX_HEIGHT)
    try:
        _draw_list(stdscr, 0, list_height, width, tasks, percentage, state, theme)
        _draw_box(stdscr, list_height, width, "Input", input_line(state),
                  theme.attr("pending"), theme.accent())
        message = state.message.text if state.message else ""
        _draw_box(stdscr, list_height + BOX_HEIGHT, width, "Status", message,
                  theme.attr("done"), theme.accent())
    except curses.error:
        # Terminal smaller than the layout; whatever fit is shown.
        pass
    stdscr.refresh()


def _frame(stdscr: "curses.window", top: int, rows: int, width: int, title: str,
           title_attr: int = 0) -> None:
    inner = max(0, width - 2)
    stdscr.addstr(top, 0, "┌" + "─" * inner + "┐")
    for r in range(1, rows - 1):
        stdscr.addstr(top + r, 0, "│")
        stdscr.addstr(top + r, width - 1, "│")
    stdscr.insstr(top + rows - 1, 0, "└" + "─" * inner + "┘")
    if title:
        stdscr.addnstr(top, 1, title, inner, curses.A_BOLD | title_attr)


def _draw_box(stdscr: "curses.window", top: int, width: int, title: str,
              text: str, attr: int, title_attr: int = 0) -> None:
    _frame(stdscr, top, BOX_HEIGHT, width, title, title_attr)
    if text:
        stdscr.addnstr(top + 1, 1, text, max(0, width - 2), attr)


def _draw_list(stdscr: "curses.window", top: int, rows: int, width: int,
               tasks: Sequence[Task], percentage: float, state: UIState,
               theme: Theme) -> None:
    _frame(stdscr, top, rows, width, list_title(percentage), theme.accent())
    inner_width = max(0, width - 2)
    start, end = visible_window(state.selected, len(tasks), rows - 2)
    for row, idx in enumerate(range(start, end), start=1):
        task = tasks[idx]
        attr = theme.status_attr(task.status)
        if idx == state.selected:
            text = HIGHLIGHT_SYMBOL + task_line(task)
            attr |= curses.A_BOLD
        else:
            text = " " * len(HIGHLIGHT_SYMBOL) + task_line(task)
        stdscr.addnstr(top + row, 1, text, inner_width, attr)
