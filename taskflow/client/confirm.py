from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)

AFFIRMATIVE = {"y", "yes"}


class PromptUnavailable(Exception):
    """Raised by a prompter that cannot show its prompt right now."""


class Prompter(Protocol):
    async def ask(self, message: str) -> bool: ...


def _native_confirm(fallback: Callable[[str], str], message: str) -> bool:
    answer = fallback(f"{message} [y/N] ")
    return answer.strip().lower() in AFFIRMATIVE


class ConfirmationGate:
    """Yes/no prompt shown before completing or deleting a task.

    With a rich ``prompter`` the caller is suspended until the user answers.
    Without one (or when it raises ``PromptUnavailable``) the gate degrades to a
    blocking native confirmation through ``fallback``.
    """

    def __init__(
        self,
        prompter: Optional[Prompter] = None,
        fallback: Callable[[str], str] = input,
    ):
        self.prompter = prompter
        self.fallback = fallback
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    async def ask(self, message: str) -> bool:
        async with self._lock:
            if self.prompter is not None:
                try:
                    return bool(await self.prompter.ask(message))
                except PromptUnavailable:
                    logger.info("Rich prompt unavailable, using native confirmation")
            try:
                return _native_confirm(self.fallback, message)
            except EOFError:
                return False
