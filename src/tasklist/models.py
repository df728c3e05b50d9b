"""Data models for the terminal task list.

Statuses persist under their capitalised names ("Undone", "Pending", "Done")
so files written by earlier releases load unchanged.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TaskStatus(Enum):
    UNDONE = "Undone"
    PENDING = "Pending"
    DONE = "Done"

    @property
    def rank(self) -> int:
        """Sort position: undone first, then pending, then done."""
        return _RANKS[self]

    @property
    def marker(self) -> str:
        return _MARKERS[self]

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["TaskStatus"]:
        """Map a stored value (case-insensitive) to a status, or None."""
        if not raw:
            return None
        for status in cls:
            if status.value.lower() == str(raw).strip().lower():
                return status
        return None


_RANKS = {TaskStatus.UNDONE: 0, TaskStatus.PENDING: 1, TaskStatus.DONE: 2}
_MARKERS = {TaskStatus.UNDONE: "[ ]", TaskStatus.PENDING: "[-]", TaskStatus.DONE: "[x]"}


@dataclass
class Task:
    """A single to-do item.

    Fields:
        description: Free text, never empty once stored.
        status: One of TaskStatus.UNDONE / PENDING / DONE.
        created_at: ISO timestamp set at creation (None for legacy records).
        id: Session-local handle assigned by the store; not persisted.
    """
    description: str
    status: TaskStatus = TaskStatus.UNDONE
    created_at: Optional[str] = None
    id: int = 0

    def to_record(self) -> dict:
        return {
            'description': self.description,
            'status': self.status.value,
            'created_at': self.created_at,
        }

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.id}, description={self.description}, status={self.status.value})"
