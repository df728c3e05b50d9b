"""Persistence helpers (load/save/backup/reset) for the task list.

On-disk format is a pretty-printed object ``{"tasks": [record, ...]}``; a
bare JSON array, an empty file, or a missing file are accepted on load.
"""
import json
import logging
import shutil
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

TaskRecord = Dict[str, Any]


class StorageError(Exception):
    """The task file exists but could not be read or parsed."""


class Storage:
    def __init__(self, path: Path):
        self.path = Path(path)

    def load_tasks(self) -> List[TaskRecord]:
        """Read task records from disk.

        Missing or empty file -> []. Unreadable or malformed -> StorageError.
        """
        if not self.path.exists():
            return []
        try:
            text = self.path.read_text(encoding='utf-8')
        except OSError as exc:
            raise StorageError(f"could not read {self.path}: {exc}") from exc
        if not text.strip():
            return []
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise StorageError(f"could not parse {self.path}: {exc}") from exc
        if isinstance(data, dict) and isinstance(data.get('tasks'), list):
            records = data['tasks']
        elif isinstance(data, list):
            records = data
        else:
            raise StorageError(f"{self.path} must hold {{'tasks': [...]}} or [...]")
        logger.info("Loaded %d records from %s", len(records), self.path)
        return records

    def save_tasks(self, records: List[TaskRecord]) -> bool:
        """Persist records (pretty-printed). Returns False if the write failed."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump({'tasks': records}, f, indent=2, ensure_ascii=False)
        except OSError:
            logger.exception("Failed to save tasks to %s", self.path)
            return False
        logger.debug("Saved %d records to %s", len(records), self.path)
        return True

    def backup_path(self, day: Optional[date] = None) -> Path:
        day = day or date.today()
        return self.path.with_name(f"{self.path.stem}.{day.isoformat()}{self.path.suffix}")

    def backup(self, day: Optional[date] = None) -> Optional[Path]:
        """Copy the task file next to itself, dated; None on failure."""
        target = self.backup_path(day)
        try:
            shutil.copyfile(self.path, target)
        except OSError as exc:
            logger.warning("Backup of %s failed: %s", self.path, exc)
            return None
        logger.info("Backed up %s to %s", self.path, target)
        return target

    def reset(self, day: Optional[date] = None) -> bool:
        """Back up, then empty the task file. Nothing is cleared if the backup fails."""
        if self.backup(day) is None:
            return False
        return self.save_tasks([])
