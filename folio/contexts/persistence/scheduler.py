"""
Debounce scheduling with an injectable clock.

A clock provides ``now()`` and ``call_later(delay, callback)``; the returned
handle has ``cancel()``. All callbacks run on the caller's thread.

- ManualClock: time moves only when ``advance()`` is called (tests, and
  synchronous front ends that flush before exit)
- AsyncioClock: delegates to an asyncio event loop

A DebouncedChannel holds at most one pending timer. Scheduling again cancels
the pending timer and restarts the delay, so a burst of triggers produces a
single action once the channel has been quiet for ``delay`` seconds.
"""

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Tuple


class TimerHandle:
    """Handle for a callback scheduled on a ManualClock."""

    def __init__(self, deadline: float, callback: Callable[[], None]):
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def when(self) -> float:
        return self.deadline


class ManualClock:
    """
    Fake clock whose time only moves through advance().

    Timers due at the same deadline fire in the order they were scheduled.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._timers: List[Tuple[float, int, TimerHandle]] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self._now + max(delay, 0.0), callback)
        heapq.heappush(self._timers, (handle.deadline, next(self._sequence), handle))
        return handle

    def advance(self, seconds: float) -> int:
        """
        Move time forward, firing every timer that falls due.

        Args:
            seconds: Amount of time to advance (must not be negative)

        Returns:
            Number of callbacks fired
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance time backwards: {seconds}")

        target = self._now + seconds
        fired = 0
        while self._timers and self._timers[0][0] <= target:
            deadline, _, handle = heapq.heappop(self._timers)
            if handle.cancelled:
                continue
            self._now = deadline
            handle.callback()
            fired += 1
        self._now = target
        return fired

    def pending(self) -> int:
        """Number of timers scheduled and not cancelled."""
        return sum(1 for _, _, handle in self._timers if not handle.cancelled)


class AsyncioClock:
    """
    Clock backed by an asyncio event loop (loop.time / loop.call_later).

    Without an explicit loop it must be created from inside a running loop.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop or asyncio.get_running_loop()

    def now(self) -> float:
        return self.loop.time()

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)


class DebouncedChannel:
    """
    Single-slot cancel-and-restart timer for one logical save channel.

    Args:
        name: Channel name, used in log messages (e.g., "document")
        clock: ManualClock, AsyncioClock, or anything with now()/call_later()
        delay: Quiet period in seconds before the action runs
        action: Callable run when the quiet period elapses
    """

    def __init__(self, name: str, clock, delay: float, action: Callable[[], None]):
        if delay < 0:
            raise ValueError(f"Debounce delay must not be negative, got {delay}")
        self.name = name
        self.clock = clock
        self.delay = delay
        self.action = action
        self._handle = None
        self._deadline: Optional[float] = None

    @property
    def pending_deadline(self) -> Optional[float]:
        """Clock time at which the pending action fires, or None."""
        return self._deadline

    @property
    def is_pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> float:
        """
        Cancel any pending timer and start a new one.

        Returns:
            Deadline of the newly scheduled action
        """
        self.cancel()
        self._deadline = self.clock.now() + self.delay
        self._handle = self.clock.call_later(self.delay, self._fire)
        return self._deadline

    def cancel(self) -> bool:
        """Cancel the pending timer. Returns True if one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        self._deadline = None
        return True

    def flush(self) -> bool:
        """Run the pending action immediately. Returns True if one was pending."""
        if not self.cancel():
            return False
        self.action()
        return True

    def _fire(self) -> None:
        self._handle = None
        self._deadline = None
        self.action()
