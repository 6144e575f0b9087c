from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from .constants import (
    SHOOTER_ARENA_SIZE,
    SHOOTER_MAX_COMBO,
    SHOOTER_ROUND_SEC,
    SHOOTER_SPAWN_MS,
    SHOOTER_SWEEP_MS,
    SHOOTER_X_RANGE,
    SHOOTER_Y_RANGE,
)
from .engine import Engine
from .enums import GameId
from .models import TARGET_SIZES, RoundState, Target, TargetSize

logger = logging.getLogger(__name__)

COUNTDOWN_MS = 1000


@dataclass(frozen=True)
class ShooterSnapshot:
    state: RoundState
    time_left: int
    score: int
    combo: int
    multiplier: int
    targets: Tuple[Target, ...]
    last_hit: Optional[Tuple[int, int]]
    best: Optional[int]
    is_new_best: bool
    started_at: Optional[float] = None


class TargetSpawnEngine(Engine):
    """Timed shooting gallery.

    Live targets sit in an arena keyed by id. Each carries its own expiry
    deadline; a single sweep timer removes the stale ones, and any expiry
    breaks the combo.
    """

    game_id = GameId.FPS
    ACTIONS = {
        "start": ("start", False),
        "hit": ("hit", True),
        "miss": ("miss", False),
        "shoot": ("shoot_at", True),
    }

    def __init__(
        self,
        *args,
        round_sec: int = SHOOTER_ROUND_SEC,
        spawn_ms: int = SHOOTER_SPAWN_MS,
        sweep_ms: int = SHOOTER_SWEEP_MS,
        arena_size: Tuple[int, int] = SHOOTER_ARENA_SIZE,
        sizes: Sequence[TargetSize] = TARGET_SIZES,
        max_combo: int = SHOOTER_MAX_COMBO,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.round_sec = round_sec
        self.spawn_ms = spawn_ms
        self.sweep_ms = sweep_ms
        self.arena_size = (int(arena_size[0]), int(arena_size[1]))
        self.sizes = tuple(sizes)
        self.max_combo = max_combo

        self.state = RoundState.IDLE
        self.targets: Dict[int, Target] = {}
        self._ids = itertools.count(1)
        self.score = 0
        self.combo = 0
        self.time_left = round_sec
        self.last_hit: Optional[Tuple[int, int]] = None
        self.is_new_best = False

    @property
    def multiplier(self) -> int:
        return min(self.combo, self.max_combo)

    def start(self) -> None:
        if self.state is RoundState.PLAYING:
            return
        self.timers.cancel_all()
        self.targets.clear()
        self.score = 0
        self.combo = 0
        self.last_hit = None
        self.is_new_best = False
        self.time_left = self.round_sec
        self.state = RoundState.PLAYING
        self.started_at = self.clock.now()
        self.timers.every(COUNTDOWN_MS, self._countdown)
        self.timers.every(self.spawn_ms, self.spawn)
        self.timers.every(self.sweep_ms, self.sweep)
        self.spawn()

    # ---- timers ----

    def _countdown(self) -> None:
        if self.state is not RoundState.PLAYING:
            return
        self.time_left -= 1
        if self.time_left <= 0:
            self._finish()

    def _pick_size(self) -> TargetSize:
        total = sum(s.weight for s in self.sizes)
        r = self.rng.random() * total
        acc = 0.0
        for size in self.sizes:
            acc += size.weight
            if r < acc:
                return size
        return self.sizes[-1]

    def spawn(self) -> Optional[Target]:
        if self.state is not RoundState.PLAYING:
            return None
        size = self._pick_size()
        x = SHOOTER_X_RANGE[0] + self.rng.random() * (SHOOTER_X_RANGE[1] - SHOOTER_X_RANGE[0])
        y = SHOOTER_Y_RANGE[0] + self.rng.random() * (SHOOTER_Y_RANGE[1] - SHOOTER_Y_RANGE[0])
        target = Target(next(self._ids), x, y, size, self.clock.now() + size.lifetime_ms)
        self.targets[target.id] = target
        return target

    def sweep(self) -> int:
        now = self.clock.now()
        expired = [tid for tid, t in self.targets.items() if t.expires_at <= now]
        for tid in expired:
            del self.targets[tid]
        if expired:
            self.combo = 0
        return len(expired)

    # ---- input ----

    def hit(self, target_id: int) -> int:
        """Credit a hit on a live target. Returns the points awarded."""
        if self.state is not RoundState.PLAYING:
            return 0
        target = self.targets.pop(target_id, None)
        if target is None:
            return 0
        if target.expires_at <= self.clock.now():
            self.combo = 0
            return 0
        self.combo += 1
        points = target.value * self.multiplier
        self.score += points
        self.last_hit = (target.id, points)
        self.cue("shoot")
        return points

    def miss(self) -> None:
        if self.state is RoundState.PLAYING:
            self.combo = 0

    def shoot_at(self, pos: Tuple[float, float]) -> int:
        if self.state is not RoundState.PLAYING:
            return 0
        x, y = pos
        # latest spawned is drawn on top
        for target in reversed(list(self.targets.values())):
            if target.contains(x, y, self.arena_size):
                return self.hit(target.id)
        self.miss()
        return 0

    def _finish(self) -> None:
        self.timers.cancel_all()
        self.targets.clear()
        self.state = RoundState.FINISHED
        self.is_new_best = self.commit_best(self.score)
        logger.debug("shooter round over with %d points", self.score)

    def snapshot(self) -> ShooterSnapshot:
        return ShooterSnapshot(
            self.state,
            self.time_left,
            self.score,
            self.combo,
            self.multiplier,
            tuple(self.targets.values()),
            self.last_hit,
            self.best,
            self.is_new_best,
            started_at=self.started_at,
        )


__all__ = ["TargetSpawnEngine", "ShooterSnapshot", "COUNTDOWN_MS"]
