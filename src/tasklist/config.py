"""Settings loaded from environment variables and an optional .env file.

Priority: real env var > .env entry > default. The .env file is looked up in
the current directory unless a path is given; malformed lines are skipped.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

ENV_PREFIX = "TODO"

COLOR_KEYS = ("undone", "pending", "done", "accent")
DEFAULT_COLORS: Dict[str, str] = {
    "undone": "red",
    "pending": "yellow",
    "done": "green",
    "accent": "cyan",
}
KNOWN_COLORS = {"black", "red", "green", "yellow", "blue", "magenta", "cyan", "white", "default"}


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


@dataclass
class Settings:
    todo_file: Path = field(default_factory=lambda: Path.home() / "todo.json")
    message_seconds: float = 3.0
    poll_ms: int = 200
    log_dir: Path = field(default_factory=lambda: Path.home() / ".local" / "state" / "tasklist")
    log_level: str = "INFO"
    colors: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COLORS))
    no_color: bool = False


def read_dotenv(path: Path) -> Dict[str, str]:
    """Parse KEY=VALUE lines; comments and blank lines ignored."""
    values: Dict[str, str] = {}
    if not path.exists():
        return values
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return values
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        values[k.strip()] = v.strip().strip('"').strip("'")
    return values


def _float(raw: Optional[str], default: float) -> float:
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _int(raw: Optional[str], default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def load_settings(env: Optional[Mapping[str, str]] = None,
                  dotenv_path: Optional[Path] = None) -> Settings:
    env = os.environ if env is None else env
    dotenv = read_dotenv(dotenv_path or Path.cwd() / ".env")

    def get(name: str) -> Optional[str]:
        value = env.get(name)
        if value is None or value.strip() == "":
            value = dotenv.get(name)
        return value

    settings = Settings()
    raw_file = get(_k("FILE"))
    if raw_file:
        settings.todo_file = Path(raw_file).expanduser()
    settings.message_seconds = _float(get(_k("MESSAGE_SECONDS")), settings.message_seconds)
    settings.poll_ms = _int(get(_k("POLL_MS")), settings.poll_ms)
    raw_log_dir = get(_k("LOG_DIR"))
    if raw_log_dir:
        settings.log_dir = Path(raw_log_dir).expanduser()
    raw_level = (get(_k("LOG_LEVEL")) or "").strip().upper()
    if raw_level in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        settings.log_level = raw_level
    for key in COLOR_KEYS:
        raw_color = (get(_k(f"{key.upper()}_COLOR")) or "").strip().lower()
        if raw_color in KNOWN_COLORS:
            settings.colors[key] = raw_color
    settings.no_color = env.get("NO_COLOR") is not None
    return settings
