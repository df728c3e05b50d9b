"""Color & style helpers for the curses renderer.

Decisions:
- Status colors follow the classic traffic-light scheme (red/yellow/green).
- Colors come from settings (env var > .env > default); NO_COLOR disables them.
- Done rows are always dimmed, with or without color support.
"""
from __future__ import annotations
import curses
from typing import Dict, Mapping

from tasklist.models import TaskStatus

COLOR_NAMES: Dict[str, int] = {
    "black": curses.COLOR_BLACK,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
    "default": -1,
}

PAIR_IDS: Dict[str, int] = {"undone": 1, "pending": 2, "done": 3, "accent": 4}

STATUS_KEYS: Dict[TaskStatus, str] = {
    TaskStatus.UNDONE: "undone",
    TaskStatus.PENDING: "pending",
    TaskStatus.DONE: "done",
}


class Theme:
    def __init__(self, colors: Mapping[str, str], enabled: bool = True):
        self.colors: Dict[str, str] = dict(colors)
        self.enabled: bool = enabled
        self._ready: bool = False

    def init(self) -> None:
        """Register color pairs; requires an initialised curses screen."""
        if not self.enabled or not curses.has_colors():
            self.enabled = False
            return
        curses.start_color()
        curses.use_default_colors()
        for key, pair_id in PAIR_IDS.items():
            fg = COLOR_NAMES.get(self.colors.get(key, "default"), -1)
            curses.init_pair(pair_id, fg, -1)
        self._ready = True

    def attr(self, key: str) -> int:
        if not (self.enabled and self._ready):
            return curses.A_NORMAL
        return curses.color_pair(PAIR_IDS[key])

    def status_attr(self, status: TaskStatus) -> int:
        base = self.attr(STATUS_KEYS[status])
        if status is TaskStatus.DONE:
            base |= curses.A_DIM
        return base

    def accent(self) -> int:
        return self.attr("accent")
