"""Interactive driver: key dispatch, UI mode transitions, save-after-mutation.

Key map (view mode):
  q quit | j/k or arrows move | Space toggle done | - toggle pending
  o add | i edit | / filter | d delete | D remove done | b backup | r reset
Input modes: Enter commits, Esc or Ctrl-C cancels, Backspace deletes.
"""
import curses
import logging
import time
from typing import Callable, List, Optional, Union

from tasklist.config import Settings
from tasklist.models import Task
from tasklist.storage import Storage
from tasklist.store import TaskStore
from tasklist.theme import Theme
from tasklist.ui import InputMode, UIState, draw

logger = logging.getLogger(__name__)

Key = Union[str, int]

ESC = "\x1b"
CTRL_C = "\x03"
ENTER_KEYS = {"\n", "\r", curses.KEY_ENTER, 10, 13}
BACKSPACE_KEYS = {curses.KEY_BACKSPACE, "\b", "\x7f", 127, 8}
DOWN_KEYS = {"j", curses.KEY_DOWN}
UP_KEYS = {"k", curses.KEY_UP}


class App:
    def __init__(self, store: TaskStore, storage: Storage, settings: Settings,
                 clock: Callable[[], float] = time.monotonic):
        self.store: TaskStore = store
        self.storage: Storage = storage
        self.settings: Settings = settings
        self.state: UIState = UIState()
        self.clock = clock
        self.theme = Theme(settings.colors, enabled=not settings.no_color)

    # -------------------- loop --------------------
    def run(self, stdscr: "curses.window") -> None:
        """Main loop: expire message, redraw, poll one key, dispatch."""
        curses.curs_set(0)
        curses.raw()  # deliver Ctrl-C as a key so it can cancel input
        curses.set_escdelay(25)
        stdscr.keypad(True)
        stdscr.timeout(self.settings.poll_ms)
        self.theme.init()
        while True:
            self.tick()
            draw(stdscr, self.visible_tasks(), self.store.completion_percentage(),
                 self.state, self.theme)
            try:
                key = stdscr.get_wch()
            except curses.error:
                continue  # poll timeout
            if not self.handle_key(key):
                break
        logger.info("Quit with %d tasks", len(self.store))

    def tick(self) -> None:
        self.state.expire_message(self.clock(), self.settings.message_seconds)

    def notify(self, text: str) -> None:
        self.state.show(text, self.clock())

    # -------------------- helpers --------------------
    def visible_tasks(self) -> List[Task]:
        return self.store.filter(self.state.filter)

    def selected_task(self) -> Optional[Task]:
        tasks = self.visible_tasks()
        if 0 <= self.state.selected < len(tasks):
            return tasks[self.state.selected]
        return None

    def selected_index(self) -> Optional[int]:
        """Store position of the highlighted row, resolved by task id."""
        task = self.selected_task()
        if task is None:
            return None
        return self.store.index_of(task.id)

    def _clamp_selection(self) -> None:
        count = len(self.visible_tasks())
        self.state.selected = max(0, min(self.state.selected, count - 1))

    def save(self) -> bool:
        ok = self.storage.save_tasks(self.store.get_tasks())
        if not ok:
            self.notify("Save failed.")
        return ok

    def _begin_input(self, mode: InputMode, initial: str = "") -> None:
        self.state.mode = mode
        self.state.input = initial

    def _end_input(self) -> None:
        self.state.mode = InputMode.VIEW
        self.state.input = ""

    # -------------------- dispatch --------------------
    def handle_key(self, key: Key) -> bool:
        """Apply one key press. Returns False when the app should exit."""
        mode = self.state.mode
        if mode is InputMode.VIEW:
            return self._handle_view_key(key)
        if mode is InputMode.CONFIRM_RESET:
            self._handle_confirm_key(key)
            return True
        self._handle_input_key(key)
        return True

    def _handle_view_key(self, key: Key) -> bool:
        if key == "q":
            return False
        if key in DOWN_KEYS:
            self._move_down()
        elif key in UP_KEYS:
            self._move_up()
        elif key == " ":
            self._toggle_done()
        elif key == "-":
            self._toggle_pending()
        elif key == "o":
            self._begin_input(InputMode.ADD)
        elif key == "i":
            task = self.selected_task()
            self._begin_input(InputMode.EDIT, task.description if task else "")
        elif key == "/":
            self._begin_input(InputMode.FILTER)
        elif key == "d":
            self._delete_selected()
        elif key == "D":
            self._remove_done()
        elif key == "b":
            self._backup()
        elif key == "r":
            self.state.mode = InputMode.CONFIRM_RESET
            self.notify("Press 'y' to confirm reset, 'n' to cancel.")
        return True

    def _handle_input_key(self, key: Key) -> None:
        if key in (ESC, CTRL_C):
            self._end_input()
        elif key in ENTER_KEYS:
            self._commit_input()
        elif key in BACKSPACE_KEYS:
            self.state.input = self.state.input[:-1]
        elif isinstance(key, str) and key.isprintable():
            self.state.input += key

    def _handle_confirm_key(self, key: Key) -> None:
        if key == "y":
            self._reset()
        elif key in ("n", ESC):
            self.state.mode = InputMode.VIEW
            self.notify("Reset canceled.")

    # -------------------- commands --------------------
    def _move_down(self) -> None:
        if self.state.selected + 1 < len(self.visible_tasks()):
            self.state.selected += 1

    def _move_up(self) -> None:
        if self.state.selected > 0:
            self.state.selected -= 1

    def _toggle_done(self) -> None:
        index = self.selected_index()
        if index is None:
            return
        self.store.toggle_done(index)
        self.save()

    def _toggle_pending(self) -> None:
        index = self.selected_index()
        if index is None:
            return
        self.store.toggle_pending(index)
        self.save()

    def _delete_selected(self) -> None:
        count = len(self.visible_tasks())
        index = self.selected_index()
        if index is None:
            return
        self.store.delete(index)
        self.save()
        self.notify("Task deleted.")
        if self.state.selected >= count - 1 and self.state.selected > 0:
            self.state.selected -= 1

    def _remove_done(self) -> None:
        self.store.remove_completed()
        self.save()
        self.notify("Completed tasks removed.")
        self.state.selected = 0

    def _commit_input(self) -> None:
        mode, text = self.state.mode, self.state.input
        if mode is InputMode.ADD:
            task = self.selected_task()
            reference_status = task.status if task else None
            reference_index = self.selected_index()
            if self.store.create(text, reference_status, reference_index):
                self.store.reorder()
                self.save()
        elif mode is InputMode.EDIT:
            index = self.selected_index()
            if index is not None and text.strip():
                self.store.edit(index, text)
                self.save()
        elif mode is InputMode.FILTER:
            self.state.filter = text
            self._clamp_selection()
        self._end_input()

    def _backup(self) -> None:
        if self.storage.backup() is not None:
            self.notify("Backup created successfully!")
        else:
            self.notify("Backup failed.")

    def _reset(self) -> None:
        self.state.mode = InputMode.VIEW
        if self.storage.reset():
            self.store = TaskStore()
            self.state.selected = 0
            self.notify("Backup created and todo list reset.")
        else:
            self.notify("Backup failed. Reset canceled.")
