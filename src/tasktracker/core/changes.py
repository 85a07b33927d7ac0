"""Create and update payloads passed from workflows to a repository."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .tasks import Priority, Status


class _Unset(Enum):
    UNSET = "unset"


# Marks a deadline left untouched by an update; None clears it.
UNSET = _Unset.UNSET


@dataclass
class TaskCreate:
    """Validated data for a new task."""

    description: str
    deadline: datetime | None = None
    priority: Priority | None = None
    tags: list[str] = field(default_factory=list)


@dataclass
class TaskUpdate:
    """
    Partial update. None leaves a field untouched, except deadline where
    UNSET leaves it untouched and None removes it. Tags replace the whole
    list.
    """

    description: str | None = None
    status: Status | None = None
    priority: Priority | None = None
    deadline: datetime | None | _Unset = UNSET
    tags: list[str] | None = None

    def is_empty(self) -> bool:
        return (
            self.description is None
            and self.status is None
            and self.priority is None
            and self.deadline is UNSET
            and self.tags is None
        )
