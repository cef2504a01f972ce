"""Pure rendering of task records into a list view.

The whole view is recomputed from the fetched records every time; nothing is
patched in place.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional, Tuple, Union

from ..models.task import TaskStatus
from ..schemas.task import TaskRead

DATE_DISPLAY_FORMAT = "%d/%m/%Y"
EMPTY_PLACEHOLDER = "No tasks yet."


@dataclass(frozen=True)
class TaskRow:
    id: int
    title: str
    created: str
    due: str
    due_iso: str
    status_class: str
    status_label: str
    can_complete: bool


@dataclass(frozen=True)
class ListView:
    rows: Tuple[TaskRow, ...] = field(default_factory=tuple)
    placeholder: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def row(self, task_id: int) -> Optional[TaskRow]:
        for row in self.rows:
            if row.id == task_id:
                return row
        return None


def format_date(value: Union[date, datetime]) -> str:
    return value.strftime(DATE_DISPLAY_FORMAT)


def render_task(task: TaskRead) -> TaskRow:
    completed = task.status == TaskStatus.COMPLETED
    return TaskRow(
        id=task.id,
        title=task.title,
        created=format_date(task.created_at),
        due=format_date(task.due_date),
        due_iso=task.due_date.isoformat(),
        status_class="completed" if completed else "pending",
        status_label=task.status.value,
        can_complete=not completed,
    )


def render_tasks(tasks: Iterable[TaskRead]) -> ListView:
    rows = tuple(render_task(task) for task in tasks)
    if not rows:
        return ListView(placeholder=EMPTY_PLACEHOLDER)
    return ListView(rows=rows)
