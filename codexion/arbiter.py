"""Shared dongles and the global arbiter that hands out dongle pairs in turn."""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator

from codexion.heap import Request, RequestHeap, Scheduler, find_preference
from codexion.timing import now_ms


class Dongle:
    """A dongle shared by two neighbouring coders."""

    def __init__(self, dongle_id: int, now: int) -> None:
        self.dongle_id = dongle_id
        self.next_available_t = now
        self.is_taken = False
        self.lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"Dongle(id={self.dongle_id}, taken={self.is_taken}, "
            f"next_available_t={self.next_available_t})"
        )


@contextmanager
def lock_pair(a: Dongle, b: Dongle) -> Iterator[None]:
    """Hold the locks of both dongles, taken in id order to avoid deadlock."""
    if a is b:
        with a.lock:
            yield
        return
    first, second = (b, a) if a.dongle_id > b.dongle_id else (a, b)
    with first.lock:
        with second.lock:
            yield


def take_both_if_ready(left: Dongle, right: Dongle, now: int) -> int:
    """Try to take both dongles at time ``now``.

    Returns 0 when both were taken, -1 when either is held by someone else,
    and otherwise the milliseconds left until both have cooled down.
    """
    with lock_pair(left, right):
        if left.is_taken or right.is_taken:
            return -1
        wait = max(left.next_available_t - now, right.next_available_t - now)
        if wait <= 0:
            left.is_taken = True
            right.is_taken = True
            return 0
        return wait


class Arbiter:
    """Queue of pending requests that grants dongle pairs by scheduler order."""

    def __init__(self, scheduler: Scheduler, capacity: int) -> None:
        self.scheduler = scheduler
        self.heap = RequestHeap(capacity, scheduler)
        self.seats: dict[int, tuple[Dongle, Dongle]] = {}
        self._requests: dict[int, Request] = {}
        self._cond = threading.Condition()

    def add_seat(self, coder_id: int, left: Dongle, right: Dongle) -> None:
        """Record which two dongles the coder ``coder_id`` works with."""
        if coder_id <= 0:
            raise ValueError("coder id must be positive")
        with self._cond:
            self.seats[coder_id] = (left, right)

    def register(self, req: Request) -> None:
        """Queue a request and wake every waiting coder.

        Raises HeapFullError when the queue is already at capacity.
        """
        with self._cond:
            self.heap.push(req)
            self._requests[req.coder_id] = req
            self._cond.notify_all()

    def _has_ready_higher(self, own: Request, other: Request, now: int) -> bool:
        if other.coder_id == own.coder_id:
            return False
        if find_preference(own, other, self.scheduler):
            return False
        seat = self.seats.get(other.coder_id)
        if seat is None:
            return False
        left, right = seat
        with lock_pair(left, right):
            if left.is_taken or right.is_taken:
                return False
            left_ready = left.next_available_t
            right_ready = right.next_available_t
        return left_ready <= now and right_ready <= now

    def _highest_ready(self, coder_id: int, now: int) -> bool:
        own = self._requests.get(coder_id, Request(coder_id))
        return not any(
            self._has_ready_higher(own, other, now) for other in self.heap
        )

    def is_highest_ready(self, coder_id: int, now: int) -> bool:
        """True unless a preferred queued coder could take its dongles at ``now``."""
        with self._cond:
            return self._highest_ready(coder_id, now)

    def acquire(self, coder_id: int, should_stop: Callable[[], bool]) -> bool:
        """Block until the coder holds both its dongles.

        Returns True once both are taken, or False if ``should_stop()`` turned
        true first; in either case the coder's request leaves the queue.
        Anyone changing what ``should_stop`` reports must call wake_all.
        """
        left, right = self.seats[coder_id]
        with self._cond:
            while not should_stop():
                if self.heap.peek() is None or not self._highest_ready(
                    coder_id, now_ms()
                ):
                    self._cond.wait()
                    continue
                wait = take_both_if_ready(left, right, now_ms())
                if wait == 0:
                    self.heap.remove(coder_id)
                    self._cond.notify_all()
                    return True
                if wait < 0:
                    self._cond.wait()
                else:
                    self._cond.release()
                    try:
                        time.sleep(wait / 1000)
                    finally:
                        self._cond.acquire()
            self.heap.remove(coder_id)
            return False

    def release(self, dongle: Dongle, cooldown: int) -> None:
        """Put a dongle down; it becomes usable again after ``cooldown`` ms."""
        with dongle.lock:
            dongle.is_taken = False
            dongle.next_available_t = now_ms() + cooldown
        self.wake_all()

    def wake_all(self) -> None:
        """Wake every coder waiting in acquire so it re-checks its state."""
        with self._cond:
            self._cond.notify_all()