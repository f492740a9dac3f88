"""Priority queue of dongle requests, ordered by FIFO or EDF scheduling."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator


class Scheduler(enum.Enum):
    """Policy deciding which pending request is served first."""

    FIFO = "fifo"
    EDF = "edf"


@dataclass(frozen=True)
class Request:
    """A coder's request for its pair of dongles."""

    coder_id: int
    arrival_t: int = 0
    deadline_t: int = 0


class HeapFullError(Exception):
    """Raised when pushing onto a heap that has reached its capacity."""


def find_preference(a: Request, b: Request, scheduler: Scheduler) -> bool:
    """Return True if request ``a`` should be served before request ``b``."""
    if scheduler is Scheduler.EDF:
        key_a, key_b = a.deadline_t, b.deadline_t
    else:
        key_a, key_b = a.arrival_t, b.arrival_t
    if key_a != key_b:
        return key_a < key_b
    return a.coder_id < b.coder_id


class RequestHeap:
    """Bounded binary heap of requests; the preferred request sits on top."""

    def __init__(self, capacity: int, scheduler: Scheduler) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self.scheduler = scheduler
        self._items: list[Request] = []

    def _prefers(self, i: int, j: int) -> bool:
        return find_preference(self._items[i], self._items[j], self.scheduler)

    def _swap(self, i: int, j: int) -> None:
        self._items[i], self._items[j] = self._items[j], self._items[i]

    def _sift_up(self, index: int) -> None:
        while index > 0:
            parent = (index - 1) // 2
            if not self._prefers(index, parent):
                break
            self._swap(index, parent)
            index = parent

    def _sift_down(self, index: int) -> None:
        size = len(self._items)
        while True:
            left, right = 2 * index + 1, 2 * index + 2
            best = index
            if left < size and self._prefers(left, best):
                best = left
            if right < size and self._prefers(right, best):
                best = right
            if best == index:
                break
            self._swap(index, best)
            index = best

    def push(self, req: Request) -> None:
        """Insert a request; raise HeapFullError when at capacity."""
        if len(self._items) >= self.capacity:
            raise HeapFullError("heap is full")
        self._items.append(req)
        self._sift_up(len(self._items) - 1)

    def peek(self) -> Request | None:
        """Return the preferred request, or None when the heap is empty."""
        return self._items[0] if self._items else None

    def remove(self, coder_id: int) -> bool:
        """Remove the first request of ``coder_id``; return whether one was found."""
        if coder_id <= 0:
            raise ValueError("coder id must be positive")
        for index, req in enumerate(self._items):
            if req.coder_id == coder_id:
                last = self._items.pop()
                if index < len(self._items):
                    self._items[index] = last
                    self._sift_up(index)
                    self._sift_down(index)
                return True
        return False

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Request]:
        """Iterate over the requests in internal heap order."""
        return iter(list(self._items))