from __future__ import annotations

import heapq
import itertools
import logging
import random
import time
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class TimerHandle:
    """Cancel token for one scheduled callback."""

    def __init__(self, callback: Callback, deadline: float, interval: Optional[float] = None) -> None:
        self.callback = callback
        self.deadline = deadline
        self.interval = interval
        self.delay = 0.0
        self.cancelled = False
        self.fired = False

    @property
    def active(self) -> bool:
        return not self.cancelled and not (self.fired and self.interval is None)

    def cancel(self) -> None:
        self.cancelled = True


class TickClock:
    """Cooperative scheduler driven by ``pump()`` from the host loop.

    Times are milliseconds from the injected ``now_fn``. Late repeating
    timers fire once per elapsed interval so engines always see whole ticks.
    """

    def __init__(self, now_fn: Optional[Callable[[], float]] = None) -> None:
        self._now = now_fn or _monotonic_ms
        self._heap: List[Tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return float(self._now())

    def _push(self, handle: TimerHandle) -> TimerHandle:
        heapq.heappush(self._heap, (handle.deadline, next(self._seq), handle))
        return handle

    def every(self, interval_ms: float, callback: Callback) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError("interval must be positive")
        return self._push(TimerHandle(callback, self.now() + interval_ms, float(interval_ms)))

    def after(self, delay_ms: float, callback: Callback) -> TimerHandle:
        handle = TimerHandle(callback, self.now() + max(0.0, float(delay_ms)))
        handle.delay = max(0.0, float(delay_ms))
        return self._push(handle)

    def after_random(
        self,
        lo_ms: float,
        hi_ms: float,
        callback: Callback,
        rng: Optional[random.Random] = None,
    ) -> TimerHandle:
        """One-shot delay sampled uniformly from ``[lo_ms, hi_ms)``."""
        r = (rng or random).random()
        return self.after(lo_ms + r * (hi_ms - lo_ms), callback)

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._heap if h.active)

    def pump(self, now: Optional[float] = None) -> int:
        """Run every callback due at ``now``. Returns how many fired."""
        now = self.now() if now is None else float(now)
        fired = 0
        while self._heap and self._heap[0][0] <= now:
            _, _, handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            handle.fired = True
            if handle.interval is not None:
                handle.deadline += handle.interval
                self._push(handle)
            handle.callback()
            fired += 1
        return fired

    def cancel_all(self) -> None:
        for _, _, handle in self._heap:
            handle.cancel()
        self._heap.clear()

    def scope(self) -> "TimerScope":
        return TimerScope(self)


class TimerScope:
    """Timers owned by one game session; ``close()`` is the teardown path."""

    def __init__(self, clock: TickClock) -> None:
        self.clock = clock
        self.closed = False
        self._handles: List[TimerHandle] = []

    def _track(self, handle: TimerHandle) -> TimerHandle:
        self._handles = [h for h in self._handles if h.active]
        self._handles.append(handle)
        return handle

    def _inert(self) -> TimerHandle:
        logger.debug("timer requested on a closed scope")
        handle = TimerHandle(lambda: None, float("inf"))
        handle.cancel()
        return handle

    def every(self, interval_ms: float, callback: Callback) -> TimerHandle:
        if self.closed:
            return self._inert()
        return self._track(self.clock.every(interval_ms, callback))

    def after(self, delay_ms: float, callback: Callback) -> TimerHandle:
        if self.closed:
            return self._inert()
        return self._track(self.clock.after(delay_ms, callback))

    def after_random(
        self,
        lo_ms: float,
        hi_ms: float,
        callback: Callback,
        rng: Optional[random.Random] = None,
    ) -> TimerHandle:
        if self.closed:
            return self._inert()
        return self._track(self.clock.after_random(lo_ms, hi_ms, callback, rng))

    @property
    def pending(self) -> int:
        return sum(1 for h in self._handles if h.active)

    def cancel_all(self) -> None:
        for handle in self._handles:
            handle.cancel()
        self._handles.clear()

    def close(self) -> None:
        self.cancel_all()
        self.closed = True


__all__ = ["TickClock", "TimerScope", "TimerHandle"]
