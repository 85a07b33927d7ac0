"""Adapters - I/O implementations of ports."""

from .json_store import JsonFileStore
from .json_repository import JsonTaskRepository
from .exporters import ExportFormat, export_tasks
from .importers import ImportFormat, load_import_file

__all__ = [
    "JsonFileStore",
    "JsonTaskRepository",
    "ExportFormat",
    "export_tasks",
    "ImportFormat",
    "load_import_file",
]
