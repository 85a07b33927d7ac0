"""Task import formats: JSON array and CSV with a header row."""

import csv
import io
import json
from enum import Enum
from pathlib import Path

from tasktracker.core.errors import StoreIOError, ValidationError
from tasktracker.core.tasks import Priority


class ImportFormat(Enum):
    JSON = "json"
    CSV = "csv"


def _read(path: Path) -> str:
    if not path.exists():
        raise ValidationError(f"File not found: {path}")
    if not path.is_file():
        raise ValidationError(f"Path is not a file: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise StoreIOError(f"Cannot read {path}: {e}") from e


def _split_tags(value: str | None) -> list[str]:
    if not value:
        return []
    return [t.strip() for t in value.split(";") if t.strip()]


def parse_json_items(text: str) -> list[dict]:
    """
    Turn a JSON array into create payloads.

    Each payload has description, deadline, priority and tags keys; unknown
    priorities become medium.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise ValidationError("JSON file must contain an array of tasks")

    items = []
    for entry in data:
        if not isinstance(entry, dict):
            entry = {}
        tags = entry.get("tags")
        items.append(
            {
                "description": entry.get("description") or "",
                "deadline": entry.get("deadline") or None,
                "priority": Priority.normalize(entry.get("priority")),
                "tags": tags if isinstance(tags, list) else [],
            }
        )
    return items


def parse_csv_items(text: str) -> list[dict]:
    """
    Turn CSV rows into create payloads.

    Header names are case-insensitive; describe/due/importance are accepted
    as aliases, and tags are ';'-separated. Rows with no values are skipped.
    """
    reader = csv.DictReader(io.StringIO(text))
    reader.fieldnames = [h.strip().lower() for h in reader.fieldnames or []]

    items = []
    for row in reader:
        row = {k: (v or "").strip() for k, v in row.items() if k}
        if not any(row.values()):
            continue
        items.append(
            {
                "description": row.get("description") or row.get("describe") or "",
                "deadline": row.get("deadline") or row.get("due") or None,
                "priority": Priority.normalize(row.get("priority") or row.get("importance")),
                "tags": _split_tags(row.get("tags")),
            }
        )

    if not items:
        raise ValidationError("CSV file must have at least a header and one data row")
    return items


def load_import_file(path: Path | str, fmt: ImportFormat) -> list[dict]:
    """Read and parse an import file into create payloads."""
    text = _read(Path(path).expanduser())
    if fmt is ImportFormat.CSV:
        return parse_csv_items(text)
    return parse_json_items(text)
