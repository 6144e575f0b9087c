from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .constants import REACTION_DELAY_MAX_MS, REACTION_DELAY_MIN_MS, REACTION_TIERS
from .engine import Engine
from .enums import GameId
from .models import ReactionState

logger = logging.getLogger(__name__)

TOO_EARLY = "TOO_EARLY"


def rate_reaction(ms: int) -> str:
    for limit, label in REACTION_TIERS:
        if ms < limit:
            return label
    return "practice"


@dataclass(frozen=True)
class ReactionSnapshot:
    state: ReactionState
    result: Optional[Union[int, str]]
    rating: Optional[str]
    best: Optional[int]
    is_new_best: bool
    started_at: Optional[float] = None


class ReactionEngine(Engine):
    game_id = GameId.REACTION
    lower_is_better = True
    ACTIONS = {"press": ("press", False), "start": ("press", False)}

    def __init__(self, *args, delay_min_ms: int = REACTION_DELAY_MIN_MS,
                 delay_max_ms: int = REACTION_DELAY_MAX_MS, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.delay_min_ms = delay_min_ms
        self.delay_max_ms = delay_max_ms
        self.state = ReactionState.WAITING
        self.result: Optional[Union[int, str]] = None
        self.is_new_best = False
        self.go_at: Optional[float] = None

    def start(self) -> None:
        self.timers.cancel_all()
        self.result = None
        self.is_new_best = False
        self.go_at = None
        self.state = ReactionState.READY
        self.started_at = self.clock.now()
        handle = self.timers.after_random(self.delay_min_ms, self.delay_max_ms, self._on_go, self.rng)
        logger.debug("reaction armed, stimulus in %.0fms", handle.delay)

    def _on_go(self) -> None:
        if self.state is not ReactionState.READY:
            return
        self.state = ReactionState.GO
        self.go_at = self.clock.now()

    def press(self) -> None:
        if self.state is ReactionState.WAITING:
            self.start()
        elif self.state is ReactionState.READY:
            self.timers.cancel_all()
            self.state = ReactionState.WAITING
            self.result = TOO_EARLY
        elif self.state is ReactionState.GO:
            elapsed = int(round(self.clock.now() - (self.go_at or 0.0)))
            self.result = elapsed
            self.state = ReactionState.RESULT
            self.is_new_best = self.commit_best(elapsed)
        elif self.state is ReactionState.RESULT:
            self.start()

    def snapshot(self) -> ReactionSnapshot:
        rating = rate_reaction(self.result) if isinstance(self.result, int) else None
        return ReactionSnapshot(
            self.state, self.result, rating, self.best, self.is_new_best, started_at=self.started_at
        )


__all__ = ["ReactionEngine", "ReactionSnapshot", "TOO_EARLY", "rate_reaction"]
