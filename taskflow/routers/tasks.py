from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse

from ..errors import StoreError
from ..schemas.task import TaskCreated, TaskPayload, TaskRead
from ..services.task_service import SortMode, TaskService

router = APIRouter()


def get_task_service(request: Request) -> TaskService:
    """Dependency returning the process-wide service opened at startup."""
    service = getattr(request.app.state, "task_service", None)
    if service is None:
        raise StoreError("Task store is unavailable.")
    return service


@router.get("/tasks", response_model=List[TaskRead])
def list_tasks(
    sort: Optional[str] = None,
    service: TaskService = Depends(get_task_service),
):
    """List every task, newest first, or by due date with ``?sort=date``."""
    return service.list_tasks(SortMode.from_query(sort))


@router.post("/tasks", response_model=TaskCreated, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskPayload,
    service: TaskService = Depends(get_task_service),
):
    """Create a pending task and return its new id."""
    task = service.create_task(payload.title, payload.due_date)
    return TaskCreated(id=task.id, message="Task created successfully!")


@router.put("/tasks/{task_id}/done", response_class=PlainTextResponse)
def complete_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
):
    """Mark a task as completed."""
    service.complete_task(task_id)
    return "Task marked as completed."


@router.put("/tasks/{task_id}", response_class=PlainTextResponse)
def update_task(
    task_id: int,
    payload: TaskPayload,
    service: TaskService = Depends(get_task_service),
):
    """Overwrite a task's title and due date."""
    service.update_task(task_id, payload.title, payload.due_date)
    return "Task updated successfully."


@router.delete("/tasks/{task_id}", response_class=PlainTextResponse)
def delete_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
):
    """Delete a task for good."""
    service.delete_task(task_id)
    return "Task deleted successfully."
