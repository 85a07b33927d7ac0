"""Task store interface."""

from typing import Protocol


class TaskStore(Protocol):
    """Interface for persisting the whole task collection as raw records."""

    def read(self) -> list[dict]:
        """Read every stored record. A missing store reads as empty."""
        ...

    def write(self, records: list[dict]) -> None:
        """Replace the stored collection with records."""
        ...
