import enum
import logging
import re
from contextlib import contextmanager
from datetime import date
from typing import Iterator, List, Optional, Tuple, Union

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..database import get_session
from ..errors import NotFoundError, StoreError, ValidationError
from ..models import Task, TaskStatus
from ..models.task import utcnow

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Title and due date are required."
INVALID_DATE_MESSAGE = "Due date must be a valid date (YYYY-MM-DD)."

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# Signed 64-bit range of an SQL INTEGER key.
MAX_TASK_ID = 2**63 - 1


class SortMode(str, enum.Enum):
    BY_CREATION = "by_creation"
    BY_DUE_DATE = "by_due_date"

    @classmethod
    def from_query(cls, sort: Optional[str]) -> "SortMode":
        """``sort=date`` selects due date order; anything else is creation order."""
        return cls.BY_DUE_DATE if sort == "date" else cls.BY_CREATION


def _validate(title: Optional[str], due_date: Union[str, date, None]) -> Tuple[str, date]:
    title = title.strip() if title else ""
    if not title or not due_date:
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    if isinstance(due_date, date):
        return title, due_date
    due_date = due_date.strip()
    if not _ISO_DATE.fullmatch(due_date):
        raise ValidationError(INVALID_DATE_MESSAGE)
    try:
        return title, date.fromisoformat(due_date)
    except ValueError:
        raise ValidationError(INVALID_DATE_MESSAGE) from None


class TaskService:
    """The five task operations over the store.

    The engine is opened once per process and handed in; every call uses its own
    session, so no transaction spans two operations.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        with get_session(self.engine) as session:
            try:
                yield session
            except SQLAlchemyError as exc:
                session.rollback()
                logger.exception("Store error while %s tasks", action)
                raise StoreError(f"Internal server error while {action} tasks.") from exc

    def _get_or_raise(self, session: Session, task_id: int) -> Task:
        # Ids outside the key range cannot exist and would overflow the driver.
        if not -MAX_TASK_ID - 1 <= task_id <= MAX_TASK_ID:
            raise NotFoundError(task_id)
        task = session.get(Task, task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def list_tasks(self, sort_mode: SortMode = SortMode.BY_CREATION) -> List[Task]:
        if sort_mode == SortMode.BY_DUE_DATE:
            order = (Task.due_date.asc(), Task.id.asc())
        else:
            order = (Task.created_at.desc(), Task.id.desc())

        with self._session("listing") as session:
            return list(session.exec(select(Task).order_by(*order)).all())

    def create_task(self, title: Optional[str], due_date: Union[str, date, None]) -> Task:
        title, parsed_due = _validate(title, due_date)

        with self._session("creating") as session:
            task = Task(
                title=title,
                due_date=parsed_due,
                status=TaskStatus.PENDING,
                created_at=utcnow(),
            )
            session.add(task)
            session.commit()
            session.refresh(task)
            logger.info("Created task %s", task.id)
            return task

    def complete_task(self, task_id: int) -> Task:
        with self._session("completing") as session:
            task = self._get_or_raise(session, task_id)
            # Repeating the call on a completed task is accepted and changes nothing.
            task.status = TaskStatus.COMPLETED
            session.add(task)
            session.commit()
            session.refresh(task)
            logger.info("Completed task %s", task_id)
            return task

    def update_task(
        self,
        task_id: int,
        title: Optional[str],
        due_date: Union[str, date, None],
    ) -> Task:
        title, parsed_due = _validate(title, due_date)

        with self._session("updating") as session:
            task = self._get_or_raise(session, task_id)
            task.title = title
            task.due_date = parsed_due
            session.add(task)
            session.commit()
            session.refresh(task)
            logger.info("Updated task %s", task_id)
            return task

    def delete_task(self, task_id: int) -> None:
        with self._session("deleting") as session:
            task = self._get_or_raise(session, task_id)
            session.delete(task)
            session.commit()
            logger.info("Deleted task %s", task_id)
