"""
Thread-safe buffer of pending commands.
"""

import threading
import uuid
from typing import Any, Callable, Iterable, List

from .commands import Command


def _new_uid() -> str:
    return str(uuid.uuid4())


class CommandBuffer:
    """
    Ordered queue of commands waiting to be sent.

    Commands leave the buffer in insertion order; that order is the only
    way to match a response element to its command, so the list is never
    handed out for mutation. ``drain_all`` swaps in a new list under the
    lock, so every append lands in exactly one drained batch.
    """

    def __init__(self, uid_factory: Callable[[], str] = _new_uid):
        self._lock = threading.Lock()
        self._commands: List[Command] = []
        self._uid_factory = uid_factory

    def append(self, request: Any) -> Command:
        """Give the request a fresh uid and queue it."""
        # Generate outside the lock; a failing factory leaves the buffer untouched
        command = Command.create(request, self._uid_factory())
        with self._lock:
            self._commands.append(command)
        return command

    def extend(self, commands: Iterable[Command]) -> None:
        """Queue already built commands, keeping their uids."""
        commands = list(commands)
        with self._lock:
            self._commands.extend(commands)

    def drain_all(self) -> List[Command]:
        """Remove and return all queued commands."""
        with self._lock:
            commands, self._commands = self._commands, []
        return commands

    def clear(self) -> None:
        with self._lock:
            self._commands = []

    def is_empty(self) -> bool:
        with self._lock:
            return not self._commands

    def __len__(self) -> int:
        with self._lock:
            return len(self._commands)
