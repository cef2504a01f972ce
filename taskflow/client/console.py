"""Line-oriented console front-end for the task list."""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Optional

from .confirm import PromptUnavailable
from .controller import ItemMode, TaskListController

HELP_TEXT = """Commands:
  add <YYYY-MM-DD> <title>   create a task
  done <id>                  mark a task as completed
  del <id>                   delete a task
  edit <id>                  start editing a task (same as pressing Edit)
  title <id> <text>          change the title being edited
  due <id> <YYYY-MM-DD>      change the due date being edited
  save <id>                  save the edit (same as pressing Save)
  sort                       toggle sorting by due date
  reload                     fetch the list again
  help                       show this text
  quit                       leave"""


async def read_stdin(prompt: str) -> Optional[str]:
    """Read one line without blocking the event loop; ``None`` on end of input."""
    try:
        return await asyncio.to_thread(input, prompt)
    except EOFError:
        return None


class ConsolePrompter:
    """Rich confirmation prompt for the console."""

    def __init__(
        self,
        read_line: Callable[[str], Awaitable[Optional[str]]] = read_stdin,
        write: Callable[[str], None] = print,
    ):
        self.read_line = read_line
        self.write = write

    async def ask(self, message: str) -> bool:
        self.write(f"+-- Confirm {'-' * max(0, len(message) - 8)}")
        self.write(f"| {message}")
        answer = await self.read_line("| [y]es / [n]o: ")
        if answer is None:
            raise PromptUnavailable()
        return answer.strip().lower() in {"y", "yes"}


class ConsoleApp:
    def __init__(
        self,
        controller: TaskListController,
        read_line: Callable[[str], Awaitable[Optional[str]]] = read_stdin,
        write: Callable[[str], None] = print,
    ):
        self.controller = controller
        self.read_line = read_line
        self.write = write
        self._last_shown = 0

    def draw(self) -> None:
        view = self.controller.view
        self.write("")
        self.write(f"[{self.controller.sort_label}]")
        if view.is_empty:
            self.write(view.placeholder or "")
        for row in view.rows:
            state = self.controller.items.get(row.id)
            if state is not None and state.mode == ItemMode.EDITING:
                title, due = f"<{state.draft_title}>", f"<{state.draft_due_date}>"
            else:
                title, due = row.title, row.due
            actions = ["Complete"] if row.can_complete else []
            actions += [self.controller.action_label(row.id), "Delete"]
            self.write(
                f"#{row.id:<4} {row.status_label:<9} {title}  "
                f"(due {due}, created {row.created})  [{' | '.join(actions)}]"
            )
        self._show_feedback()

    def _show_feedback(self) -> None:
        entries = list(self.controller.feedback)
        for entry in entries[self._last_shown:]:
            prefix = "!" if entry.is_error else "*"
            self.write(f"{prefix} {entry.message}")
        self._last_shown = len(entries)

    async def run(self) -> None:
        await self.controller.reload()
        self.draw()
        while True:
            line = await self.read_line("> ")
            if line is None:
                break
            line = line.strip()
            if not line:
                continue
            if line in ("quit", "exit"):
                break
            await self.handle(line)
            self.draw()

    async def handle(self, line: str) -> None:
        command, _, rest = line.partition(" ")
        args = rest.split()
        controller = self.controller

        if command == "help":
            self.write(HELP_TEXT)
        elif command == "reload":
            await controller.reload()
        elif command == "sort":
            await controller.toggle_sort()
        elif command == "add":
            due, _, title = rest.strip().partition(" ")
            await controller.submit_new(title.strip(), due)
        elif command in ("done", "del", "edit", "save", "title", "due"):
            task_id = self._task_id(args)
            if task_id is None:
                return
            if command == "done":
                await controller.complete(task_id)
            elif command == "del":
                await controller.delete(task_id)
            elif command == "edit":
                if controller.mode(task_id) == ItemMode.EDITING:
                    self.write(f"Task {task_id} is already being edited.")
                elif not await controller.press_edit_button(task_id):
                    self.write(f"No task {task_id} in the list.")
            elif command == "save":
                if controller.mode(task_id) != ItemMode.EDITING:
                    self.write(f"Task {task_id} is not being edited.")
                else:
                    await controller.press_edit_button(task_id)
            else:
                self._set_draft(command, task_id, rest.strip().partition(" ")[2])
        else:
            self.write(f"Unknown command: {command}. Type 'help'.")

    def _set_draft(self, command: str, task_id: int, value: str) -> None:
        try:
            if command == "title":
                self.controller.set_draft(task_id, title=value)
            else:
                self.controller.set_draft(task_id, due_date=value.strip())
        except KeyError:
            self.write(f"Task {task_id} is not being edited.")

    def _task_id(self, args: List[str]) -> Optional[int]:
        if not args or not args[0].lstrip("#").isdigit():
            self.write("Expected a task id.")
            return None
        return int(args[0].lstrip("#"))
