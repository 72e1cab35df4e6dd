"""In-memory task store.

The store is the single source of truth for task records. It trusts its
caller: no field validation happens here, the API layer owns that.

Thread-safety:
- every public method holds one lock for its whole duration
- stored records are frozen models, an update swaps in a new instance
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from taskboard.models.tasks import Task, TaskPatch, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def new_task_id() -> str:
    """Return a fresh random 128-bit identifier."""
    return str(uuid.uuid4())


class TaskStore:
    """Keyed collection of task records, in insertion order."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize an empty store.

        Args:
            clock: Returns the current time; defaults to UTC wall clock
        """
        self._clock = clock or _utcnow
        self._lock = threading.Lock()
        self._tasks: dict[str, Task] = {}

    def list_tasks(self) -> list[Task]:
        with self._lock:
            return list(self._tasks.values())

    def get_task(self, task_id: str) -> Task | None:
        with self._lock:
            return self._tasks.get(task_id)

    def create_task(
        self,
        *,
        title: str,
        description: str | None = None,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
    ) -> Task:
        """Create and store a new task.

        Absent optional fields get their defaults: empty description,
        ``pending`` status and ``medium`` priority.
        """
        with self._lock:
            task_id = new_task_id()
            while task_id in self._tasks:
                task_id = new_task_id()

            now = self._clock()
            task = Task(
                id=task_id,
                title=title,
                description=description if description is not None else "",
                status=status if status is not None else TaskStatus.PENDING,
                priority=priority if priority is not None else TaskPriority.MEDIUM,
                created_at=now,
                updated_at=now,
            )
            self._tasks[task.id] = task

        logger.info(
            "Task created id=%s status=%s priority=%s",
            task.id,
            task.status.value,
            task.priority.value,
        )
        return task

    def update_task(self, task_id: str, patch: TaskPatch) -> Task | None:
        """Merge a partial update into an existing task.

        Returns None without side effects when the id is unknown. ``id``
        and ``created_at`` always come from the stored record, and
        ``updated_at`` is refreshed even when the patch is empty.
        """
        changes = patch.changes()
        with self._lock:
            existing = self._tasks.get(task_id)
            if existing is None:
                logger.debug("Update skipped, task not found id=%s", task_id)
                return None

            # Never move backwards, even if the wall clock does.
            updated_at = max(self._clock(), existing.updated_at)
            updated = existing.model_copy(
                update={
                    **changes,
                    "id": existing.id,
                    "created_at": existing.created_at,
                    "updated_at": updated_at,
                }
            )
            self._tasks[task_id] = updated

        logger.info("Task updated id=%s fields=%s", task_id, sorted(changes))
        return updated

    def delete_task(self, task_id: str) -> bool:
        """Remove a task. Returns False if there was nothing to remove."""
        with self._lock:
            removed = self._tasks.pop(task_id, None)

        if removed is None:
            logger.debug("Delete skipped, task not found id=%s", task_id)
            return False
        logger.info("Task deleted id=%s", task_id)
        return True

    def clear(self) -> None:
        """Drop every record. Test support only, not exposed over HTTP."""
        with self._lock:
            self._tasks.clear()

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)
