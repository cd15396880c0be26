"""
One-shot delayed actions drained by the frame loop.

Every event carries a guard that is checked when it comes due, so an action
scheduled for a state the game has already left is dropped instead of run.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Optional, Tuple


class EventQueue:
    """Deadline-ordered queue of (due_ms, action, guard)"""

    def __init__(self):
        self._heap: List[Tuple[float, int, Callable[[], None], Optional[Callable[[], bool]]]] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def schedule(self, now_ms: float, delay_ms: float, action: Callable[[], None],
                 guard: Optional[Callable[[], bool]] = None):
        heapq.heappush(self._heap, (now_ms + delay_ms, next(self._counter), action, guard))

    def clear(self):
        self._heap = []

    def drain(self, now_ms: float) -> int:
        """Run every due event whose guard still holds; returns how many ran"""
        ran = 0
        while self._heap and self._heap[0][0] <= now_ms:
            _, _, action, guard = heapq.heappop(self._heap)
            if guard is not None and not guard():
                continue
            action()
            ran += 1
        return ran
