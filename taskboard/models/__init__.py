"""Pydantic models for task records and API payloads."""

from taskboard.models.tasks import (
    Task,
    TaskCreateRequest,
    TaskPatch,
    TaskPriority,
    TaskStatus,
    TaskUpdateRequest,
)

__all__ = [
    "Task",
    "TaskCreateRequest",
    "TaskPatch",
    "TaskPriority",
    "TaskStatus",
    "TaskUpdateRequest",
]
