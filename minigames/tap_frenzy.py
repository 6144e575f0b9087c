from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from .constants import TAP_COST, TAP_DURATIONS, TAP_TICK_MS, TAP_UNITS_PER_SEC
from .engine import Engine
from .enums import GameId
from .models import RoundState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TapSnapshot:
    state: RoundState
    duration: int
    budget: int
    count: int
    best: Optional[int]
    is_new_best: bool
    started_at: Optional[float] = None

    @property
    def seconds_left(self) -> float:
        return self.budget / TAP_UNITS_PER_SEC


class TapCounterEngine(Engine):
    """Count taps before the budget runs out; every tap burns extra budget.

    The budget is held in tenths of a second. Best scores are kept per
    selectable duration.
    """

    game_id = GameId.CLICKER
    ACTIONS = {
        "start": ("start", False),
        "tap": ("tap", False),
        "press": ("tap", False),
        "select": ("select_duration", True),
    }

    def __init__(
        self,
        *args,
        durations: Sequence[int] = TAP_DURATIONS,
        duration: Optional[int] = None,
        tick_ms: int = TAP_TICK_MS,
        tap_cost: int = TAP_COST,
        **kwargs,
    ) -> None:
        self.durations = tuple(durations)
        self.duration = duration if duration in self.durations else self.durations[0]
        super().__init__(*args, **kwargs)
        self.tick_ms = tick_ms
        self.tap_cost = tap_cost
        self.state = RoundState.IDLE
        self.budget = self.duration * TAP_UNITS_PER_SEC
        self.count = 0
        self.ticks = 0
        self.is_new_best = False

    def load_best(self) -> Any:
        return self.store.load(self.game_id, self.duration)

    def commit_best(self, value: Any, variant_key: Any = None) -> bool:
        return super().commit_best(value, self.duration if variant_key is None else variant_key)

    def select_duration(self, seconds: int) -> bool:
        if self.state is RoundState.PLAYING or seconds not in self.durations:
            return False
        self.duration = seconds
        self.budget = seconds * TAP_UNITS_PER_SEC
        self.best = self.load_best()
        return True

    def start(self) -> None:
        if self.state is RoundState.PLAYING:
            return
        self.timers.cancel_all()
        self.count = 0
        self.ticks = 0
        self.is_new_best = False
        self.budget = self.duration * TAP_UNITS_PER_SEC
        self.state = RoundState.PLAYING
        self.started_at = self.clock.now()
        self.timers.every(self.tick_ms, self._tick)

    def _tick(self) -> None:
        if self.state is not RoundState.PLAYING:
            return
        self.ticks += 1
        self.budget = max(0, self.budget - 1)
        if self.budget == 0:
            self._finish()

    def tap(self) -> None:
        if self.state is not RoundState.PLAYING or self.budget <= 0:
            return
        self.count += 1
        self.budget = max(0, self.budget - self.tap_cost)
        if self.budget == 0:
            self._finish()

    def _finish(self) -> None:
        self.timers.cancel_all()
        self.state = RoundState.FINISHED
        previous = self.best
        self.commit_best(self.count)
        self.is_new_best = self.count > (previous if previous is not None else 0)
        logger.debug("tap frenzy %ss finished with %d taps", self.duration, self.count)

    def snapshot(self) -> TapSnapshot:
        return TapSnapshot(
            self.state, self.duration, self.budget, self.count, self.best, self.is_new_best,
            started_at=self.started_at,
        )


__all__ = ["TapCounterEngine", "TapSnapshot"]
