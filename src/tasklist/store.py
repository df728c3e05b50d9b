"""Task collection: ordering, status transitions, compound add, queries.

The store holds one ordered list. Positions are plain list indices; every
task also carries a session-local integer id so callers working from a
filtered view can find the task again after the list is re-sorted.
"""
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional, Iterable, Mapping, Any
import logging

from tasklist.models import Task, TaskStatus

logger = logging.getLogger(__name__)

COMPOUND_NAME_SEP = ": "
COMPOUND_ITEM_SEP = "; "

# Both tables must cover every TaskStatus.
DONE_TRANSITIONS: Dict[TaskStatus, TaskStatus] = {
    TaskStatus.UNDONE: TaskStatus.DONE,
    TaskStatus.PENDING: TaskStatus.UNDONE,
    TaskStatus.DONE: TaskStatus.UNDONE,
}
PENDING_TRANSITIONS: Dict[TaskStatus, TaskStatus] = {
    TaskStatus.UNDONE: TaskStatus.PENDING,
    TaskStatus.PENDING: TaskStatus.UNDONE,
    TaskStatus.DONE: TaskStatus.PENDING,
}


def split_compound(description: str) -> List[str]:
    """Expand "name: a; b; c" into ["name: a", "name: b", "name: c"].

    Anything without both separators comes back as a single description.
    """
    if COMPOUND_NAME_SEP not in description or COMPOUND_ITEM_SEP not in description:
        return [description]
    name, _, rest = description.partition(COMPOUND_NAME_SEP)
    return [f"{name.strip()}: {segment.strip()}" for segment in rest.split(";")]


class TaskStore:
    def __init__(self, records: Optional[Iterable[Mapping[str, Any]]] = None):
        self.tasks: List[Task] = []
        self._next_id: int = 1
        if records:
            self._load_records(records)

    # -------------------- loading --------------------
    def _load_records(self, records: Iterable[Mapping[str, Any]]) -> None:
        for raw in records:
            if not isinstance(raw, dict):
                continue
            raw_description = raw.get('description')
            if not raw_description:
                continue
            status = TaskStatus.parse(raw.get('status'))
            if status is None:
                logger.warning("Unknown status %r for %r; treating as Undone",
                               raw.get('status'), raw_description)
                status = TaskStatus.UNDONE
            created_at = raw.get('created_at')
            self.tasks.append(Task(
                description=str(raw_description),
                status=status,
                created_at=str(created_at) if created_at else None,
                id=self._allocate_id(),
            ))
        logger.debug("Loaded %d tasks", len(self.tasks))

    # -------------------- id management --------------------
    def _allocate_id(self) -> int:
        nid = self._next_id
        self._next_id += 1
        return nid

    # -------------------- queries --------------------
    def filter(self, query: str) -> List[Task]:
        """Tasks whose description contains ``query`` literally, in list order.

        Returns copies; positions in the result are not store indices. Use
        ``index_of`` with the copy's id to act on the underlying task.
        """
        return [replace(t) for t in self.tasks if query in t.description]

    def index_of(self, task_id: int) -> Optional[int]:
        for idx, task in enumerate(self.tasks):
            if task.id == task_id:
                return idx
        return None

    def find_by_description(self, description: str) -> Optional[int]:
        """Position of the first task with exactly this description.

        Ambiguous when descriptions repeat: the earliest match wins.
        """
        for idx, task in enumerate(self.tasks):
            if task.description == description:
                return idx
        return None

    def counts(self) -> Dict[TaskStatus, int]:
        result = {status: 0 for status in TaskStatus}
        for task in self.tasks:
            result[task.status] += 1
        return result

    def completion_percentage(self) -> float:
        """Done share of done+undone tasks; pending tasks are not counted."""
        counts = self.counts()
        done = counts[TaskStatus.DONE]
        total = done + counts[TaskStatus.UNDONE]
        if total == 0:
            return 0.0
        return done / total * 100.0

    # -------------------- task operations --------------------
    def create(self, description: str,
               reference_status: Optional[TaskStatus] = None,
               reference_index: Optional[int] = None) -> List[Task]:
        """Insert one task, or several for the "name: a; b" shorthand.

        New tasks go right after the reference task when it is undone or
        pending, otherwise right after the last undone task.
        """
        if not description or not description.strip():
            return []
        status = TaskStatus.PENDING if reference_status is TaskStatus.PENDING else TaskStatus.UNDONE
        if reference_status in (TaskStatus.PENDING, TaskStatus.UNDONE) and reference_index is not None:
            position = reference_index + 1
        else:
            position = self._after_last_undone()
        created: List[Task] = []
        now = datetime.now().astimezone().isoformat()
        for text in split_compound(description):
            task = Task(description=text, status=status, created_at=now, id=self._allocate_id())
            self.tasks.insert(position, task)
            position += 1
            created.append(task)
        logger.debug("Created %d task(s) from %r", len(created), description)
        return created

    def _after_last_undone(self) -> int:
        for idx in range(len(self.tasks) - 1, -1, -1):
            if self.tasks[idx].status is TaskStatus.UNDONE:
                return idx + 1
        return 0

    def _get(self, index: int) -> Optional[Task]:
        if 0 <= index < len(self.tasks):
            return self.tasks[index]
        return None

    def delete(self, index: int) -> None:
        task = self._get(index)
        if task is None:
            return
        self.tasks.pop(index)
        logger.debug("Deleted %r", task.description)

    def remove_completed(self) -> None:
        before = len(self.tasks)
        self.tasks = [t for t in self.tasks if t.status is not TaskStatus.DONE]
        logger.debug("Removed %d done task(s)", before - len(self.tasks))

    def edit(self, index: int, new_description: str) -> None:
        task = self._get(index)
        if task is None:
            return
        task.description = new_description

    def toggle_done(self, index: int) -> None:
        self._transition(index, DONE_TRANSITIONS)

    def toggle_pending(self, index: int) -> None:
        self._transition(index, PENDING_TRANSITIONS)

    def _transition(self, index: int, table: Mapping[TaskStatus, TaskStatus]) -> None:
        task = self._get(index)
        if task is None:
            return
        old = task.status
        task.status = table[old]
        logger.debug("%r: %s -> %s", task.description, old.value, task.status.value)
        self.reorder()

    def reorder(self) -> None:
        """Stable sort by status rank (undone, pending, done)."""
        self.tasks.sort(key=lambda t: t.status.rank)

    # -------------------- serialization --------------------
    def get_tasks(self) -> List[Dict[str, Any]]:
        return [t.to_record() for t in self.tasks]

    def __len__(self) -> int:
        return len(self.tasks)

    def __str__(self) -> str:
        counts = self.counts()
        return (f'Undone: {counts[TaskStatus.UNDONE]} tasks, '
                f'Pending: {counts[TaskStatus.PENDING]} tasks, '
                f'Done: {counts[TaskStatus.DONE]} tasks')
