"""Task record models.

Defines the closed TaskStatus enum and the Task dataclass persisted as one
``.td`` file per task.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from uuid import UUID, uuid4


class TaskStatus(StrEnum):
    """Task lifecycle states."""

    TODO = "todo"
    DOING = "doing"
    DONE = "done"

    @classmethod
    def parse(cls, value: str) -> TaskStatus:
        """Parse a status token case-insensitively.

        Raises:
            ValueError: If ``value`` is not one of todo, doing, done.
        """
        token = value.strip().lower()
        try:
            return cls(token)
        except ValueError:
            expected = ", ".join(status.value for status in cls)
            raise ValueError(f"Invalid status '{value}'. Expected one of {expected}.") from None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_tags(raw: str | None) -> list[str]:
    """Split a comma-separated tag list, trimming each element.

    Elements that are empty after trimming are dropped.
    """
    if raw is None:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


@dataclass
class Task:
    """A single unit of work.

    Attributes:
        title: Short human-readable summary
        id: UUID4, assigned at creation and never reused
        status: Current lifecycle state
        created_at: Creation time (UTC)
        updated_at: Last modification time, None until the task is changed
        tags: Ordered tag list
        description: Free-form body text
    """

    title: str
    id: UUID = field(default_factory=uuid4)
    status: TaskStatus = TaskStatus.TODO
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime | None = None
    tags: list[str] = field(default_factory=list)
    description: str = ""

    @classmethod
    def new(cls, title: str, description: str | None = None, tags: str | None = None) -> Task:
        """Create a TODO task from command-line style arguments.

        Args:
            title: Task title
            description: Optional body text (empty when omitted)
            tags: Optional comma-separated tag list
        """
        return cls(
            title=title,
            tags=parse_tags(tags),
            description=description or "",
        )
