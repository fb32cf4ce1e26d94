"""Confirmation prompts for destructive and bulk actions.

A confirmer is awaited before the mutation and answers True (OK) or False
(Cancel). Declining is a normal outcome, not an error.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Protocol


logger = logging.getLogger(__name__)


class Confirmer(Protocol):
    """Asks the user to confirm an action."""

    async def confirm(self, message: str) -> bool:
        """Return True if the user accepted the prompt."""
        ...


class StaticConfirmer:
    """Answers every prompt with a fixed choice and remembers the prompts.

    Used by the HTTP surface, where the client sends the answer along with the
    request.
    """

    def __init__(self, *, answer: bool) -> None:
        self.answer = answer
        self.prompts: list[str] = []

    async def confirm(self, message: str) -> bool:
        self.prompts.append(message)
        logger.debug("Confirmation prompt answered", extra={"prompt": message, "answer": self.answer})
        return self.answer


class CallbackConfirmer:
    """Delegates prompts to an async callback (e.g. a modal dialog)."""

    def __init__(self, callback: Callable[[str], Awaitable[bool]]) -> None:
        self._callback = callback

    async def confirm(self, message: str) -> bool:
        return bool(await self._callback(message))
