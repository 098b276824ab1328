"""Cooperative deferred-execution primitives."""

from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Optional, Protocol


class Scheduler(Protocol):
    """Anything that can run a callback after the current execution turn."""

    def defer(self, callback: Callable[[], None]) -> None:
        ...


class QueueScheduler:
    """
    FIFO scheduler drained explicitly by its host.

    Callbacks deferred while a turn is running are queued behind it and only
    run on the next turn, so a self-rescheduling task hands control back to
    the host between every step.
    """

    def __init__(self) -> None:
        self._queue: Deque[Callable[[], None]] = deque()

    def defer(self, callback: Callable[[], None]) -> None:
        self._queue.append(callback)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def run_pending(self) -> int:
        """Run the callbacks queued before this call; return how many ran."""
        count = len(self._queue)
        for _ in range(count):
            callback = self._queue.popleft()
            callback()
        return count

    def run_until_idle(self, max_turns: Optional[int] = None) -> int:
        """Keep running turns until the queue is empty; return the turn count."""
        turns = 0
        while self._queue:
            if max_turns is not None and turns >= max_turns:
                break
            self.run_pending()
            turns += 1
        return turns


__all__ = ["Scheduler", "QueueScheduler"]
