"""Single-reader FIFO event queue."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Generic, TypeVar

E = TypeVar("E")


@dataclass(frozen=True)
class GameOverEvent:
    """Emitted on wall or self collision."""


class EventQueue(Generic[E]):
    """Events are appended by producers and drained in order by one reader."""

    def __init__(self) -> None:
        self._queue: deque[E] = deque()

    def __len__(self) -> int:
        return len(self._queue)

    def send(self, event: E) -> None:
        self._queue.append(event)

    def drain(self) -> list[E]:
        """Remove and return every pending event, oldest first."""
        events = list(self._queue)
        self._queue.clear()
        return events
