# tests/helpers.py

from __future__ import annotations

from tasklist.models import TaskStatus
from tasklist.store import TaskStore


class FakeClock:
    """Monotonic clock stand-in; advance() moves time forward."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_store(*items: tuple[str, TaskStatus]) -> TaskStore:
    return TaskStore([{"description": d, "status": s.value} for d, s in items])


def descriptions(store: TaskStore) -> list[str]:
    return [t.description for t in store.tasks]


def statuses(store: TaskStore) -> list[TaskStatus]:
    return [t.status for t in store.tasks]


class FakeScreen:
    """Minimal curses window: swallows drawing, replays scripted keys."""

    def __init__(self, keys: list, size: tuple[int, int] = (24, 80)) -> None:
        self.keys = list(keys)
        self.size = size
        self.texts: list[tuple] = []

    def getmaxyx(self) -> tuple[int, int]:
        return self.size

    def get_wch(self):
        return self.keys.pop(0)

    def keypad(self, flag: bool) -> None:
        pass

    def timeout(self, ms: int) -> None:
        pass

    def erase(self) -> None:
        pass

    def refresh(self) -> None:
        pass

    def addstr(self, *args) -> None:
        pass

    def addnstr(self, y: int, x: int, text: str, n: int, attr: int = 0) -> None:
        self.texts.append((y, x, text[:n], attr))

    def insstr(self, *args) -> None:
        pass
