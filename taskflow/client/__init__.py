from .api import ApiError, ApiResult, TaskApiClient
from .confirm import ConfirmationGate, PromptUnavailable
from .controller import Feedback, ItemMode, ItemState, TaskListController
from .render import ListView, TaskRow, render_tasks

__all__ = [
    "ApiError",
    "ApiResult",
    "TaskApiClient",
    "ConfirmationGate",
    "PromptUnavailable",
    "Feedback",
    "ItemMode",
    "ItemState",
    "TaskListController",
    "ListView",
    "TaskRow",
    "render_tasks",
]
