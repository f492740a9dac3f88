"""The coding simulation: coders sharing dongles, watched by a burnout monitor."""

from __future__ import annotations

import enum
import sys
import threading
import time
from dataclasses import dataclass, field
from typing import TextIO

from codexion.arbiter import Arbiter, Dongle
from codexion.heap import Request
from codexion.parsing import Config
from codexion.timing import now_ms, precise_sleep

_POLL_SECONDS = 0.0005


class Event(enum.Enum):
    """Something a coder does that is written to the log."""

    COMPILING = "is compiling"
    DEBUGGING = "is debugging"
    REFACTORING = "is refactoring"
    TOOK_DONGLE_1 = "has taken a dongle"
    TOOK_DONGLE_2 = "has taken a dongle"
    BURNED_OUT = "burned out"


def format_event(event: Event, elapsed: int, coder_id: int) -> str:
    """Render one log line (without the trailing newline)."""
    return f"{elapsed:6d} {coder_id:3d} {event.value}"


@dataclass(eq=False)
class Coder:
    """One coder sitting between two dongles."""

    coder_id: int
    left: Dongle
    right: Dongle
    last_compile_t: int
    compile_count: int = 0
    work_done: bool = False
    request: Request = field(default=None)  # type: ignore[assignment]
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        if self.request is None:
            self.request = Request(self.coder_id)


class Simulation:
    """A run of coders who compile, debug and refactor until done or burned out."""

    def __init__(self, config: Config, out: TextIO | None = None) -> None:
        config.validate()
        self.config = config
        self.out = out if out is not None else sys.stdout
        self.burned_out: int | None = None
        self._state = threading.Lock()
        self._out_lock = threading.Lock()
        self._ready = threading.Event()
        self._end = False
        self._active = 0
        self._done = 0
        self._started = False

        self.start_t = now_ms()
        n = config.n_coders
        self.dongles = [Dongle(i, now_ms()) for i in range(n)]
        self.arbiter = Arbiter(config.scheduler, n)
        self.coders: list[Coder] = []
        for pos in range(n):
            here = self.dongles[pos]
            nxt = self.dongles[(pos + 1) % n]
            left, right = (here, nxt) if pos % 2 == 0 else (nxt, here)
            coder = Coder(pos + 1, left, right, last_compile_t=self.start_t)
            self.coders.append(coder)
            self.arbiter.add_seat(coder.coder_id, left, right)

    @property
    def finished(self) -> bool:
        """Whether the simulation has been told to end."""
        with self._state:
            return self._end

    def run(self) -> None:
        """Start every coder and the monitor, and return once all have stopped."""
        if self._started:
            raise RuntimeError("simulation has already been run")
        self._started = True
        threads = [
            threading.Thread(
                target=self._coder_routine, args=(coder,), name=f"coder-{coder.coder_id}"
            )
            for coder in self.coders
        ]
        for thread in threads:
            thread.start()
        self._ready.set()
        analyser = threading.Thread(target=self._analyse, name="analyser")
        analyser.start()
        for thread in threads:
            thread.join()
        self.signal_end()
        analyser.join()

    def signal_end(self) -> None:
        """Mark the simulation as ended and wake every waiting coder."""
        with self._state:
            self._end = True
        self.arbiter.wake_all()

    def mark_done(self, coder: Coder) -> None:
        """Record that ``coder`` compiled enough; end the run when all have."""
        with coder.lock:
            coder.work_done = True
        with self._state:
            self._done += 1
            count = self._done
        if count == self.config.n_coders:
            self.signal_end()

    def log(self, event: Event, coder: Coder) -> None:
        """Write an event line; only burnouts are written once the run has ended."""
        elapsed = now_ms() - self.start_t
        with self._out_lock:
            if event is Event.BURNED_OUT or not self.finished:
                self.out.write(format_event(event, elapsed, coder.coder_id) + "\n")
                self.out.flush()

    def _work_done(self, coder: Coder) -> bool:
        with coder.lock:
            return coder.work_done

    def _sleep(self, millisec: int) -> None:
        precise_sleep(millisec, lambda: self.finished)

    def _build_request(self, coder: Coder) -> Request:
        with coder.lock:
            deadline = coder.last_compile_t + self.config.burn_time
            req = Request(coder.coder_id, now_ms(), deadline)
            coder.request = req
        return req

    def _lone_coder(self, coder: Coder) -> None:
        self.log(Event.TOOK_DONGLE_1, coder)
        while not self.finished:
            time.sleep(_POLL_SECONDS)

    def _release_both(self, coder: Coder) -> None:
        cooldown = self.config.cooldown_time
        self.arbiter.release(coder.left, cooldown)
        self.arbiter.release(coder.right, cooldown)

    def compile(self, coder: Coder) -> bool:
        """Take both dongles and compile once.

        Returns False when the dongles could not be obtained because the run
        stopped, True otherwise.
        """
        if self.finished:
            return True
        if self.config.n_coders == 1:
            self._lone_coder(coder)
        self.arbiter.register(self._build_request(coder))
        stop = lambda: self.finished or self._work_done(coder)  # noqa: E731
        if not self.arbiter.acquire(coder.coder_id, stop):
            return False
        self.log(Event.TOOK_DONGLE_1, coder)
        self.log(Event.TOOK_DONGLE_2, coder)
        if self.finished:
            self._release_both(coder)
            return True
        with coder.lock:
            coder.compile_count += 1
            count = coder.compile_count
        self.log(Event.COMPILING, coder)
        with coder.lock:
            coder.last_compile_t = now_ms()
        self._sleep(self.config.compile_time)
        if count == self.config.n_compiles:
            self.mark_done(coder)
        self._release_both(coder)
        return True

    def _coder_routine(self, coder: Coder) -> None:
        self._ready.wait()
        with self._state:
            self._active += 1
        if coder.coder_id % 2 == 0:
            time.sleep(0.001)
        while not self.finished:
            if self._work_done(coder):
                break
            if not self.compile(coder):
                return
            if self._work_done(coder):
                break
            if not self.finished:
                self.log(Event.DEBUGGING, coder)
                self._sleep(self.config.debug_time)
                self.log(Event.REFACTORING, coder)
                self._sleep(self.config.refactor_time)

    def _all_active(self) -> bool:
        with self._state:
            return self._active == self.config.n_coders

    def _is_burned_out(self, coder: Coder) -> bool:
        with coder.lock:
            if coder.work_done:
                return False
            last = coder.last_compile_t
        if last == 0:
            return False
        return now_ms() - last > self.config.burn_time

    def _analyse(self) -> None:
        while not self._all_active():
            time.sleep(_POLL_SECONDS)
        while not self.finished:
            for coder in self.coders:
                if self.finished:
                    break
                if self._is_burned_out(coder):
                    self.signal_end()
                    self.burned_out = coder.coder_id
                    self.log(Event.BURNED_OUT, coder)
            time.sleep(_POLL_SECONDS)