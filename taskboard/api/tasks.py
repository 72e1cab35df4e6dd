"""Task CRUD endpoints.

This router is the only validation boundary: the store trusts whatever it
is handed, so every constraint is checked here before the store is called.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from taskboard.core.errors import TASK_NOT_FOUND, TITLE_EMPTY, TITLE_REQUIRED
from taskboard.models.tasks import Task, TaskCreateRequest, TaskUpdateRequest
from taskboard.services.task_store import TaskStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_task_store(request: Request) -> TaskStore:
    """Return the store owned by the running application."""
    return request.app.state.task_store


def _not_found(task_id: str) -> HTTPException:
    logger.debug("Task not found id=%s", task_id)
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)


@router.get("", response_model=list[Task])
async def list_tasks(store: TaskStore = Depends(get_task_store)) -> list[Task]:
    """List all tasks in insertion order."""
    return store.list_tasks()


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> Task:
    """Get a single task."""
    task = store.get_task(task_id)
    if task is None:
        raise _not_found(task_id)
    return task


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreateRequest | None = None,
    store: TaskStore = Depends(get_task_store),
) -> Task:
    """Create a task. Title is required; everything else has a default."""
    payload = payload or TaskCreateRequest()
    title = (payload.title or "").strip()
    if not title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=TITLE_REQUIRED)

    return store.create_task(
        title=title,
        description=payload.description,
        status=payload.status,
        priority=payload.priority,
    )


@router.put("/{task_id}", response_model=Task)
async def update_task(
    task_id: str,
    payload: TaskUpdateRequest | None = None,
    store: TaskStore = Depends(get_task_store),
) -> Task:
    """Apply a partial update. Omitted fields keep their stored values."""
    payload = payload or TaskUpdateRequest()
    if payload.title is not None and not payload.title.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=TITLE_EMPTY)

    task = store.update_task(task_id, payload.to_patch())
    if task is None:
        raise _not_found(task_id)
    return task


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> Response:
    """Delete a task permanently."""
    if not store.delete_task(task_id):
        raise _not_found(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
