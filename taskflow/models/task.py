from sqlmodel import SQLModel, Field
from datetime import date, datetime, timezone
from typing import Optional
import enum


class TaskStatus(str, enum.Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class Task(SQLModel, table=True):
    """Task record.

    ``id`` is assigned by the store and never reused, ``created_at`` is set on
    insertion, and ``status`` only moves from PENDING to COMPLETED.
    """
    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(sa_column_kwargs={"nullable": False})
    due_date: date = Field(index=True)
    created_at: datetime = Field(default_factory=utcnow, index=True)
    status: TaskStatus = Field(default=TaskStatus.PENDING, sa_column_kwargs={"nullable": False})
