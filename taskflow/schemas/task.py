from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional

from ..models.task import TaskStatus


class TaskPayload(BaseModel):
    """Body of create and update requests.

    Both fields are optional here so that missing input reaches the service
    and is reported as a validation failure with a readable message.
    """
    title: Optional[str] = None
    due_date: Optional[str] = None


class TaskRead(BaseModel):
    """Task record as returned by the API."""
    id: int
    title: str
    due_date: date
    created_at: datetime
    status: TaskStatus

    class Config:
        from_attributes = True


class TaskCreated(BaseModel):
    """Response of a successful create."""
    id: int
    message: str
