"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from .errors import ValidationError


class Status(Enum):
    """Task lifecycle status."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, value: "Status | str") -> "Status":
        """Parse a user-supplied status, rejecting unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValidationError(f"Invalid status '{value}'. Must be: {choices}") from None

    @classmethod
    def normalize(cls, value: object) -> "Status":
        """Lenient parse for stored records: unknown values become TODO."""
        try:
            return cls.parse(value) if value is not None else cls.TODO
        except ValidationError:
            return cls.TODO


class Priority(Enum):
    """Task priority level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: "Priority | str") -> "Priority":
        """Parse a user-supplied priority, rejecting unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValidationError(f"Invalid priority '{value}'. Must be: {choices}") from None

    @classmethod
    def normalize(cls, value: object) -> "Priority":
        """Lenient parse for stored and imported records: unknown values become MEDIUM."""
        if not value:
            return cls.MEDIUM
        try:
            return cls.parse(value)
        except ValidationError:
            return cls.MEDIUM


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into a naive local datetime.

    Accepts a trailing 'Z' and explicit offsets; aware values are converted
    to local time. A bare date (YYYY-MM-DD) becomes local midnight.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid timestamp: {value!r}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        if len(text) == 10:
            return datetime.combine(date.fromisoformat(text), datetime.min.time())
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid timestamp: {value!r}") from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_deadline(value: "str | datetime | date") -> datetime:
    """Parse a deadline given as YYYY-MM-DD or ISO format."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    try:
        return parse_timestamp(value)
    except ValidationError:
        raise ValidationError(
            f"Invalid deadline '{value}'. Use YYYY-MM-DD or ISO format"
        ) from None


def normalize_tags(tags: "list[str] | str | None") -> list[str]:
    """
    Clean a tag list: trim, drop empties and duplicates, keep first-seen order.

    A string is treated as comma-separated tags.
    """
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    if not isinstance(tags, (list, tuple)):
        raise ValidationError("Tags must be a list of strings")

    cleaned: list[str] = []
    for tag in tags:
        if not isinstance(tag, str):
            raise ValidationError("Tags must be a list of strings")
        tag = tag.strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


@dataclass
class Task:
    """A tracked task and its status transitions."""

    id: int
    description: str
    status: Status = Status.TODO
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    deadline: datetime | None = None
    priority: Priority = Priority.MEDIUM
    tags: list[str] = field(default_factory=list)

    def touch(self, now: datetime | None = None) -> None:
        """Stamp updated_at, never earlier than created_at."""
        now = now or datetime.now()
        self.updated_at = max(now, self.created_at)

    def mark_in_progress(self, now: datetime | None = None) -> None:
        self.update_status(Status.IN_PROGRESS, now)

    def mark_done(self, now: datetime | None = None) -> None:
        self.update_status(Status.DONE, now)

    def update_status(self, status: Status, now: datetime | None = None) -> None:
        self.status = status
        self.touch(now)

    def update_description(self, description: str, now: datetime | None = None) -> None:
        self.description = description
        self.touch(now)

    def update_priority(self, priority: Priority, now: datetime | None = None) -> None:
        self.priority = priority
        self.touch(now)

    def set_deadline(self, deadline: datetime | None, now: datetime | None = None) -> None:
        """Set the deadline, or clear it with None."""
        self.deadline = deadline
        self.touch(now)

    def add_tag(self, tag: str, now: datetime | None = None) -> None:
        """Add a tag. Adding one that is already present changes nothing."""
        tag = tag.strip()
        if not tag:
            raise ValidationError("Tag cannot be empty")
        if tag not in self.tags:
            self.tags.append(tag)
            self.touch(now)

    def remove_tag(self, tag: str, now: datetime | None = None) -> None:
        self.tags = [t for t in self.tags if t != tag.strip()]
        self.touch(now)

    def replace_tags(self, tags: list[str], now: datetime | None = None) -> None:
        self.tags = normalize_tags(tags)
        self.touch(now)

    def is_overdue(self, now: datetime | None = None) -> bool:
        """Deadline strictly in the past and not done."""
        if self.deadline is None or self.status is Status.DONE:
            return False
        now = now or datetime.now()
        return now > self.deadline

    def is_due_today(self, today: date | None = None) -> bool:
        """Deadline falls on today's calendar date."""
        if self.deadline is None:
            return False
        today = today or date.today()
        return self.deadline.date() == today

    def to_record(self) -> dict:
        """Serialize to the JSON store record shape."""
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "priority": self.priority.value,
            "tags": list(self.tags),
        }

    @classmethod
    def from_record(cls, data: dict) -> "Task":
        """
        Decode a stored record.

        Missing priority/tags default; unknown status/priority normalize to
        the defaults. Raises ValidationError for anything else malformed.
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Task record must be an object, got {type(data).__name__}")

        task_id = data.get("id")
        if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id <= 0:
            raise ValidationError(f"Invalid task id: {task_id!r}")

        description = data.get("description")
        if not isinstance(description, str) or not description.strip():
            raise ValidationError(f"Task {task_id} has an empty description")

        created_at = parse_timestamp(data.get("createdAt"))
        updated_at = parse_timestamp(data.get("updatedAt", data.get("createdAt")))

        deadline = None
        if data.get("deadline"):
            deadline = parse_timestamp(data["deadline"])

        return cls(
            id=task_id,
            description=description.strip(),
            status=Status.normalize(data.get("status")),
            created_at=created_at,
            updated_at=max(updated_at, created_at),
            deadline=deadline,
            priority=Priority.normalize(data.get("priority")),
            tags=normalize_tags(data.get("tags") or []),
        )


@dataclass
class TaskFilters:
    """Conjunctive filter set. Unset fields impose no constraint."""

    status: Status | None = None
    priority: Priority | None = None
    tag: str | None = None
    overdue: bool = False
    due_today: bool = False

    def is_empty(self) -> bool:
        return not (self.status or self.priority or self.tag or self.overdue or self.due_today)


def filter_by_status(tasks: list[Task], status: Status) -> list[Task]:
    """Filter tasks to one status."""
    return [t for t in tasks if t.status is status]


def filter_by_priority(tasks: list[Task], priority: Priority) -> list[Task]:
    """Filter tasks to one priority."""
    return [t for t in tasks if t.priority is priority]


def filter_by_tag(tasks: list[Task], tag: str) -> list[Task]:
    """Filter tasks carrying a tag (exact match)."""
    return [t for t in tasks if tag in t.tags]


def filter_overdue(tasks: list[Task], now: datetime | None = None) -> list[Task]:
    """Filter to overdue tasks only."""
    now = now or datetime.now()
    return [t for t in tasks if t.is_overdue(now)]


def filter_due_today(tasks: list[Task], today: date | None = None) -> list[Task]:
    """Filter to tasks due on today's calendar date."""
    today = today or date.today()
    return [t for t in tasks if t.is_due_today(today)]


def apply_filters(
    tasks: list[Task],
    filters: TaskFilters,
    now: datetime | None = None,
) -> list[Task]:
    """
    Apply every set field of a TaskFilters (AND).

    Pure function - no I/O. Storage order is preserved.
    """
    now = now or datetime.now()
    if filters.status:
        tasks = filter_by_status(tasks, filters.status)
    if filters.priority:
        tasks = filter_by_priority(tasks, filters.priority)
    if filters.tag:
        tasks = filter_by_tag(tasks, filters.tag)
    if filters.overdue:
        tasks = filter_overdue(tasks, now)
    if filters.due_today:
        tasks = filter_due_today(tasks, now.date())
    return tasks


def next_id(tasks: list[Task]) -> int:
    """Next sequential id: 1 for an empty collection, else max + 1."""
    if not tasks:
        return 1
    return max(t.id for t in tasks) + 1
