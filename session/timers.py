"""
Timer hosts for the move scheduler.

A timer host runs a callback once after a delay on the host's event loop
and can cancel it again. All hosts are single-threaded: callbacks run on
the same thread that processes user input.
"""

import heapq
import itertools
import logging
from typing import Any, Callable, Dict, List, Tuple


log = logging.getLogger("timers")

Callback = Callable[[], None]


class TimerHost:
    """Interface used by MoveScheduler."""

    def call_later(self, delay: float, callback: Callback) -> Any:
        """Run callback once after delay seconds. Returns a timer id."""
        raise NotImplementedError

    def cancel(self, timer_id: Any) -> None:
        """Cancel a timer. Must be a no-op for fired or cancelled timers."""
        raise NotImplementedError


class TkTimerHost(TimerHost):
    """Timers on the Tk main loop via after / after_cancel."""

    def __init__(self, widget):
        self.widget = widget

    def call_later(self, delay: float, callback: Callback) -> str:
        return self.widget.after(int(delay * 1000), callback)

    def cancel(self, timer_id: str) -> None:
        try:
            self.widget.after_cancel(timer_id)
        except Exception as e:
            # Tk raises once the interpreter is gone (window closed)
            log.debug("after_cancel(%s) failed: %s", timer_id, e)


class AsyncioTimerHost(TimerHost):
    """Timers on an asyncio event loop via call_later."""

    def __init__(self, loop):
        self.loop = loop

    def call_later(self, delay: float, callback: Callback):
        return self.loop.call_later(delay, callback)

    def cancel(self, timer_id) -> None:
        timer_id.cancel()


class ManualTimerHost(TimerHost):
    """
    A virtual clock for tests and headless simulation.

    Nothing fires until advance() or run_all() is called. Due timers fire
    in due-time order, ties in scheduling order.

    Set fire_cancelled=True to also deliver timers that were cancelled,
    which mimics a firing that was already queued on the event loop
    when cancel() ran.
    """

    def __init__(self, fire_cancelled: bool = False):
        self.now = 0.0
        self.fire_cancelled = fire_cancelled
        self._queue: List[Tuple[float, int, Callback]] = []
        self._cancelled: Dict[int, bool] = {}
        self._ids = itertools.count(1)

    def call_later(self, delay: float, callback: Callback) -> int:
        timer_id = next(self._ids)
        heapq.heappush(self._queue, (self.now + delay, timer_id, callback))
        return timer_id

    def cancel(self, timer_id: int) -> None:
        self._cancelled[timer_id] = True

    @property
    def pending(self) -> int:
        """Number of queued timers that will still fire."""
        return sum(1 for _, timer_id, _ in self._queue if self._will_fire(timer_id))

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward and fire everything that became due.

        Returns:
            Number of callbacks run.
        """
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, timer_id, callback = heapq.heappop(self._queue)
            self.now = due
            if self._will_fire(timer_id):
                callback()
                fired += 1
            self._cancelled.pop(timer_id, None)
        self.now = target
        return fired

    def run_all(self) -> int:
        """Fire every queued timer, including ones scheduled while firing."""
        fired = 0
        while self._queue:
            fired += self.advance(self._queue[0][0] - self.now)
        return fired

    def _will_fire(self, timer_id: int) -> bool:
        return self.fire_cancelled or not self._cancelled.get(timer_id, False)
