"""
Deferred-callback scheduling for game engines.

Engines never sleep. When a rule needs a pause (for example letting the
player look at two cards before they are resolved) the engine asks a
Scheduler to run a callback later. Hosts pick the implementation:

- ManualScheduler: virtual clock advanced explicitly (tests, terminal host)
- AsyncioScheduler: real delays on a running asyncio event loop
"""

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple


class ScheduledTask:
    """Handle for a callback registered with a Scheduler."""

    def __init__(self, callback: Callable[[], None], due: float):
        self._callback = callback
        self.due = due
        self._cancelled = False
        self._fired = False
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()

    def run(self) -> None:
        """Invoke the callback at most once, unless cancelled."""
        if not self.pending:
            return
        self._fired = True
        self._callback()

    def __repr__(self):
        state = "cancelled" if self._cancelled else "fired" if self._fired else "pending"
        return f"ScheduledTask(due={self.due:.3f}, {state})"


class Scheduler(ABC):
    """Port used by engines to defer work."""

    @abstractmethod
    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        """
        Run ``callback`` once after ``delay`` seconds.

        Args:
            delay: Delay in seconds (>= 0)
            callback: Zero-argument callable

        Returns:
            ScheduledTask that can be cancelled before it fires
        """
        pass


class ManualScheduler(Scheduler):
    """
    Scheduler driven by an explicit virtual clock.

    Nothing fires until the owner calls advance() or run_all(). Tasks due
    at the same instant fire in the order they were scheduled.

    Example:
        scheduler = ManualScheduler()
        scheduler.schedule(0.8, resolve)
        scheduler.advance(0.5)   # nothing yet
        scheduler.advance(0.3)   # resolve() runs
    """

    def __init__(self):
        self.now = 0.0
        self._queue: List[Tuple[float, int, ScheduledTask]] = []
        self._counter = itertools.count()

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        task = ScheduledTask(callback, self.now + delay)
        heapq.heappush(self._queue, (task.due, next(self._counter), task))
        return task

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, task in self._queue if task.pending)

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward and fire every task that became due.

        Callbacks may schedule new tasks; those fire too if they fall inside
        the advanced window.

        Returns:
            Number of callbacks that ran
        """
        if seconds < 0:
            raise ValueError(f"cannot move the clock backwards ({seconds})")
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            self.now = max(self.now, due)
            if task.pending:
                task.run()
                fired += 1
        self.now = target
        return fired

    def run_all(self) -> int:
        """Fire every pending task, advancing the clock as far as needed."""
        fired = 0
        while self._queue:
            due, _, task = heapq.heappop(self._queue)
            self.now = max(self.now, due)
            if task.pending:
                task.run()
                fired += 1
        return fired


class AsyncioScheduler(Scheduler):
    """Scheduler backed by ``loop.call_later``."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        loop = self._loop or asyncio.get_running_loop()
        task = ScheduledTask(callback, loop.time() + delay)
        task._handle = loop.call_later(delay, task.run)
        return task
