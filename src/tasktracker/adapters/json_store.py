"""JSON file task store adapter."""

import json
import logging
import shutil
from pathlib import Path

from tasktracker.core.errors import StoreIOError

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    Whole-collection JSON file storage.

    Implements TaskStore protocol. The file holds one JSON array of task
    records; a missing file reads as an empty collection.
    """

    def __init__(self, file_path: Path | str, backup_on_write: bool = False):
        self.file_path = Path(file_path).expanduser()
        self.backup_on_write = backup_on_write

    @property
    def backup_path(self) -> Path:
        return self.file_path.with_name(self.file_path.name + ".backup")

    def exists(self) -> bool:
        """Check if the store file exists."""
        return self.file_path.exists()

    def read(self) -> list[dict]:
        """Read all records. Raises StoreIOError on unreadable or malformed content."""
        try:
            text = self.file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"No task file at {self.file_path}, starting empty")
            self._ensure_dir()
            return []
        except OSError as e:
            raise StoreIOError(f"Cannot read {self.file_path}: {e}") from e

        if not text.strip():
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StoreIOError(f"Malformed task file {self.file_path}: {e}") from e

        if not isinstance(data, list):
            raise StoreIOError(f"Malformed task file {self.file_path}: expected a JSON array")

        logger.debug(f"Read {len(data)} records from {self.file_path}")
        return data

    def write(self, records: list[dict]) -> None:
        """
        Replace the stored collection.

        Writes to a temporary file next to the target, then renames it into
        place, so a failed write leaves the previous file intact.
        """
        if self.backup_on_write:
            self.backup()

        tmp_path = self.file_path.with_name(self.file_path.name + ".tmp")
        try:
            self._ensure_dir()
            tmp_path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")
            tmp_path.replace(self.file_path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StoreIOError(f"Cannot write {self.file_path}: {e}") from e

        logger.debug(f"Wrote {len(records)} records to {self.file_path}")

    def backup(self) -> Path | None:
        """Copy the current file to <file>.backup. Returns None if there is nothing to copy."""
        if not self.exists():
            return None
        try:
            shutil.copyfile(self.file_path, self.backup_path)
        except OSError as e:
            raise StoreIOError(f"Cannot back up {self.file_path}: {e}") from e
        return self.backup_path

    def _ensure_dir(self) -> None:
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreIOError(f"Cannot create {self.file_path.parent}: {e}") from e
