"""Main entry point for the terminal task list."""
import argparse
import curses
import logging
from pathlib import Path
from typing import Optional, Sequence

from tasklist import __version__
from tasklist.cli import App
from tasklist.config import load_settings
from tasklist.logging_setup import setup_logging
from tasklist.storage import Storage, StorageError
from tasklist.store import TaskStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todo", description="Terminal task list.")
    parser.add_argument("--file", type=Path, help="task file (default: $TODO_FILE or ~/todo.json)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_app(file: Optional[Path] = None) -> App:
    """Load settings and tasks; a broken task file yields an empty list plus a warning."""
    settings = load_settings()
    if file is not None:
        settings.todo_file = file.expanduser()
    setup_logging(settings.log_dir, settings.log_level)
    storage = Storage(settings.todo_file)
    warning = None
    try:
        records = storage.load_tasks()
    except StorageError as exc:
        logger.warning("Starting with an empty list: %s", exc)
        records = []
        warning = "Could not load tasks; starting empty."
    store = TaskStore(records)
    store.reorder()
    app = App(store, storage, settings)
    if warning:
        app.notify(warning)
    logger.info("Started with %d tasks from %s (%s)", len(store), settings.todo_file, store)
    return app


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    app = build_app(args.file)
    try:
        curses.wrapper(app.run)
    except KeyboardInterrupt:
        # Every mutating command has already saved; quitting writes nothing.
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
