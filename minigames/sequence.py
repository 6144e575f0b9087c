from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .constants import (
    MEMORY_GAP_MS,
    MEMORY_LEAD_IN_MS,
    MEMORY_ROUND_PAUSE_MS,
    MEMORY_SHOW_MS,
    SEQUENCE_SYMBOLS,
)
from .engine import Engine
from .enums import GameId
from .models import SequenceState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SequenceSnapshot:
    state: SequenceState
    length: int
    lit: Optional[str]
    progress: int
    score: int
    best: Optional[int]
    is_new_best: bool
    started_at: Optional[float] = None


class SequenceMemoryEngine(Engine):
    """Simon-style memory game: watch the pads light up, then repeat them."""

    game_id = GameId.MEMORY
    ACTIONS = {"start": ("start", False), "press": ("press", True)}

    def __init__(
        self,
        *args,
        symbols: Sequence[str] = SEQUENCE_SYMBOLS,
        lead_in_ms: int = MEMORY_LEAD_IN_MS,
        show_ms: int = MEMORY_SHOW_MS,
        gap_ms: int = MEMORY_GAP_MS,
        round_pause_ms: int = MEMORY_ROUND_PAUSE_MS,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.symbols = tuple(symbols)
        self.lead_in_ms = lead_in_ms
        self.show_ms = show_ms
        self.gap_ms = gap_ms
        self.round_pause_ms = round_pause_ms

        self.state = SequenceState.IDLE
        self.sequence: List[str] = []
        self.replay: List[str] = []
        self.lit: Optional[str] = None
        self.score = 0
        self.is_new_best = False

    def start(self) -> None:
        if self.state in (SequenceState.SHOWING, SequenceState.PLAYING):
            return
        self.timers.cancel_all()
        self.sequence = [self.rng.choice(self.symbols)]
        self.replay = []
        self.score = 0
        self.is_new_best = False
        self.started_at = self.clock.now()
        self._show(self.lead_in_ms)

    # ---- playback ----

    def _show(self, lead_ms: int) -> None:
        self.state = SequenceState.SHOWING
        self.lit = None
        self.timers.after(lead_ms, lambda: self._light(0))

    def _light(self, i: int) -> None:
        if i >= len(self.sequence):
            self.lit = None
            self.state = SequenceState.PLAYING
            return
        self.lit = self.sequence[i]
        self.timers.after(self.show_ms, lambda: self._unlight(i))

    def _unlight(self, i: int) -> None:
        self.lit = None
        self.timers.after(self.gap_ms, lambda: self._light(i + 1))

    # ---- input ----

    def press(self, symbol: str) -> None:
        if self.state is not SequenceState.PLAYING or symbol not in self.symbols:
            return
        self.replay.append(symbol)
        idx = len(self.replay) - 1
        if self.sequence[idx] != symbol:
            self.state = SequenceState.LOST
            self.is_new_best = self.commit_best(self.score)
            logger.debug("memory lost after %d rounds", self.score)
            return

        if len(self.replay) == len(self.sequence):
            self.score += 1
            self.replay = []
            self.sequence.append(self.rng.choice(self.symbols))
            self._show(self.round_pause_ms + self.lead_in_ms)

    def snapshot(self) -> SequenceSnapshot:
        return SequenceSnapshot(
            self.state,
            len(self.sequence),
            self.lit,
            len(self.replay),
            self.score,
            self.best,
            self.is_new_best,
            started_at=self.started_at,
        )


__all__ = ["SequenceMemoryEngine", "SequenceSnapshot"]
