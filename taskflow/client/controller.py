from __future__ import annotations

import enum
import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional

from .api import TaskApiClient
from .confirm import ConfirmationGate
from .render import ListView, render_tasks

logger = logging.getLogger(__name__)

SORT_BY_DUE_DATE_LABEL = "Sort by due date"
DISABLE_SORT_LABEL = "Disable sorting"
EDIT_LABEL = "Edit"
SAVE_LABEL = "Save"

CONFIRM_COMPLETE = "Are you sure you want to mark this task as completed?"
CONFIRM_DELETE = "Are you sure you want to delete this task?"


class ItemMode(str, enum.Enum):
    VIEWING = "viewing"
    EDITING = "editing"


@dataclass
class ItemState:
    mode: ItemMode = ItemMode.VIEWING
    draft_title: str = ""
    draft_due_date: str = ""


@dataclass(frozen=True)
class Feedback:
    message: str
    is_error: bool = False


class TaskListController:
    """UI state for the task list.

    Holds the sort mode and each item's view/edit state, talks to the API, and
    re-renders the whole list after every successful mutation. No action raises
    on a failed call; failures land in ``feedback`` and the last good view stays.
    """

    def __init__(
        self,
        api: TaskApiClient,
        gate: ConfirmationGate,
        feedback_limit: int = 50,
    ):
        self.api = api
        self.gate = gate
        self.sort_by_date = False
        self.view = ListView()
        self.items: Dict[int, ItemState] = {}
        self.feedback: Deque[Feedback] = deque(maxlen=feedback_limit)

    # -- feedback -----------------------------------------------------------

    def notify(self, message: str, is_error: bool = False) -> None:
        if is_error:
            logger.warning("Feedback (error): %s", message)
        else:
            logger.info("Feedback: %s", message)
        self.feedback.append(Feedback(message, is_error))

    @property
    def last_feedback(self) -> Optional[Feedback]:
        return self.feedback[-1] if self.feedback else None

    # -- labels -------------------------------------------------------------

    @property
    def sort_label(self) -> str:
        """Label of the sort toggle; names what pressing it will do."""
        return DISABLE_SORT_LABEL if self.sort_by_date else SORT_BY_DUE_DATE_LABEL

    def mode(self, task_id: int) -> ItemMode:
        state = self.items.get(task_id)
        return state.mode if state else ItemMode.VIEWING

    def action_label(self, task_id: int) -> str:
        return SAVE_LABEL if self.mode(task_id) == ItemMode.EDITING else EDIT_LABEL

    # -- loading ------------------------------------------------------------

    async def reload(self) -> bool:
        result = await self.api.list_tasks(sort_by_date=self.sort_by_date)
        if not result.ok:
            logger.error("Could not load tasks: %s", result.error.message)
            self.notify("Could not load the tasks.", is_error=True)
            return False
        self.render(result.value)
        return True

    def render(self, tasks: List) -> ListView:
        self.view = render_tasks(tasks)
        self.items = {row.id: ItemState() for row in self.view.rows}
        return self.view

    async def toggle_sort(self) -> bool:
        self.sort_by_date = not self.sort_by_date
        return await self.reload()

    # -- create -------------------------------------------------------------

    async def submit_new(self, title: str, due_date: str) -> bool:
        """Create a task from the form. Returns True when the form should be reset."""
        if not title or not due_date:
            self.notify("Title and due date cannot be empty.", is_error=True)
            return False

        result = await self.api.create_task(title, due_date)
        if not result.ok:
            self.notify("Could not add the task.", is_error=True)
            return False

        await self.reload()
        self.notify("Task added successfully!")
        return True

    # -- edit ---------------------------------------------------------------

    def enter_edit(self, task_id: int) -> bool:
        row = self.view.row(task_id)
        if row is None:
            return False
        self.items[task_id] = ItemState(
            mode=ItemMode.EDITING,
            draft_title=row.title,
            draft_due_date=row.due_iso,
        )
        return True

    def set_draft(
        self,
        task_id: int,
        title: Optional[str] = None,
        due_date: Optional[str] = None,
    ) -> None:
        state = self.items.get(task_id)
        if state is None or state.mode != ItemMode.EDITING:
            raise KeyError(f"task {task_id} is not being edited")
        if title is not None:
            state.draft_title = title
        if due_date is not None:
            state.draft_due_date = due_date

    async def commit_edit(self, task_id: int) -> bool:
        state = self.items.get(task_id)
        if state is None or state.mode != ItemMode.EDITING:
            return False

        if not state.draft_title or not state.draft_due_date:
            self.notify("Title and due date cannot be empty.", is_error=True)
            return False

        result = await self.api.update_task(task_id, state.draft_title, state.draft_due_date)
        if not result.ok:
            self.notify("Could not edit the task.", is_error=True)
            return False

        await self.reload()
        self.notify("Task edited successfully!")
        return True

    async def press_edit_button(self, task_id: int) -> bool:
        if self.mode(task_id) == ItemMode.EDITING:
            return await self.commit_edit(task_id)
        return self.enter_edit(task_id)

    # -- complete / delete --------------------------------------------------

    async def complete(self, task_id: int) -> bool:
        if not await self.gate.ask(CONFIRM_COMPLETE):
            return False

        result = await self.api.complete_task(task_id)
        if not result.ok:
            self.notify("Could not complete the task.", is_error=True)
            return False

        await self.reload()
        self.notify("Task marked as completed.")
        return True

    async def delete(self, task_id: int) -> bool:
        if not await self.gate.ask(CONFIRM_DELETE):
            return False

        result = await self.api.delete_task(task_id)
        if not result.ok:
            self.notify("Could not delete the task.", is_error=True)
            return False

        await self.reload()
        self.notify("Task deleted successfully.")
        return True
