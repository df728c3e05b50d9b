"""Terminal task list: undone / pending / done tasks kept in a JSON file."""

__version__ = "0.1.0"
