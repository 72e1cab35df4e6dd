"""Task record and request payload models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from taskboard.models.base import RecordModel


class TaskStatus(str, Enum):
    """Workflow state of a task."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Relative importance of a task."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with millisecond precision.

    >>> format_timestamp(datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc))
    '2024-05-01T08:30:00.000Z'
    """
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Task(RecordModel):
    """A stored task record.

    Instances are immutable. The store is the only place that creates them.
    """

    id: str
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at", when_used="json")
    def _serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)


class TaskPatch(RecordModel):
    """Explicit partial update for a task.

    Fields left unset are not part of the patch and never touch the stored
    value. Setting a field to an empty string is a real change.
    """

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the fields that were explicitly supplied."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class _TaskRequest(BaseModel):
    # Clients may echo back read-only fields (id, createdAt); ignore them.
    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = Field(default=None, description="pending, in-progress or completed")
    priority: TaskPriority | None = Field(default=None, description="low, medium or high")


class TaskCreateRequest(_TaskRequest):
    """Body of ``POST /api/tasks``. Only ``title`` is mandatory."""


class TaskUpdateRequest(_TaskRequest):
    """Body of ``PUT /api/tasks/{id}``. Any subset of fields."""

    def to_patch(self) -> TaskPatch:
        """Build a patch holding only the fields the client actually sent."""
        supplied = self.model_dump(exclude_unset=True, exclude_none=True)
        if "title" in supplied:
            supplied["title"] = supplied["title"].strip()
        return TaskPatch(**supplied)


__all__ = [
    "Task",
    "TaskCreateRequest",
    "TaskPatch",
    "TaskPriority",
    "TaskStatus",
    "TaskUpdateRequest",
    "format_timestamp",
]
