"""Configuration management for Tasktracker."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

TASKTRACKER_HOME = Path(os.environ.get("TASKTRACKER_HOME", Path.home() / ".tasktracker"))
CONFIG_FILE = TASKTRACKER_HOME / "config" / "tasktracker.conf"
DATA_DIR = TASKTRACKER_HOME / "data"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Tasktracker configuration."""

    tasks_file: Path = field(default_factory=lambda: DATA_DIR / "tasks.json")
    search_limit: int = 10
    log_level: str = "WARNING"
    backup_on_write: bool = False


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from tasktracker.conf (KEY = value lines)."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "tasks_file":
                if value:
                    config.tasks_file = Path(value).expanduser()
            case "search_limit":
                try:
                    limit = int(value)
                except ValueError:
                    limit = -1
                if limit >= 0:
                    config.search_limit = limit
                else:
                    logger.warning(f"Ignoring invalid SEARCH_LIMIT: {value!r}")
            case "log_level":
                if value.upper() in LOG_LEVELS:
                    config.log_level = value.upper()
                else:
                    logger.warning(f"Ignoring invalid LOG_LEVEL: {value!r}")
            case "backup_on_write":
                config.backup_on_write = value.lower() in ("1", "true", "yes", "on")
            case _:
                logger.warning(f"Unknown config key: {key}")

    return config
