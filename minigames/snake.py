from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Sequence, Set, Tuple, Union

from .constants import (
    SNAKE_FOOD_MAX_SAMPLES,
    SNAKE_FOOD_POINTS,
    SNAKE_GRID_SIZE,
    SNAKE_TICK_MS,
)
from .engine import Engine
from .enums import Direction, GameId
from .models import Cell, RoundState

logger = logging.getLogger(__name__)


def default_start_body(grid_size: int) -> Tuple[Cell, ...]:
    """Three cells facing right, a quarter in from the left wall, mid-height."""
    hx = max(2, grid_size // 4)
    y = grid_size // 2
    return ((hx, y), (hx - 1, y), (hx - 2, y))


@dataclass(frozen=True)
class SnakeSnapshot:
    state: RoundState
    body: Tuple[Cell, ...]
    food: Optional[Cell]
    direction: Direction
    score: int
    best: Optional[int]
    won: bool
    is_new_best: bool
    started_at: Optional[float] = None


class GridSnakeEngine(Engine):
    """Classic snake on a square grid, one cell per tick.

    Steering is buffered in ``pending`` and committed at the next tick; a
    reversal of the committed direction is refused at input time and again
    at commit time. When no free cell is left for food the round ends as a
    win.
    """

    game_id = GameId.SNAKE
    ACTIONS = {"start": ("start", False), "steer": ("steer", True)}

    def __init__(
        self,
        *args,
        grid_size: int = SNAKE_GRID_SIZE,
        tick_ms: int = SNAKE_TICK_MS,
        food_points: int = SNAKE_FOOD_POINTS,
        start_body: Optional[Sequence[Cell]] = None,
        start_direction: Direction = Direction.RIGHT,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.grid_size = grid_size
        self.tick_ms = tick_ms
        self.food_points = food_points
        self.start_body = tuple(start_body) if start_body is not None else default_start_body(grid_size)
        self.start_direction = start_direction

        self.state = RoundState.IDLE
        self.body: Deque[Cell] = deque(self.start_body)
        self.occupied: Set[Cell] = set(self.body)
        self.direction = start_direction
        self.pending = start_direction
        self.food: Optional[Cell] = None
        self.score = 0
        self.won = False
        self.is_new_best = False

    def start(self) -> None:
        if self.state is RoundState.PLAYING:
            return
        self.timers.cancel_all()
        self.body = deque(self.start_body)
        self.occupied = set(self.body)
        self.direction = self.start_direction
        self.pending = self.start_direction
        self.score = 0
        self.won = False
        self.is_new_best = False
        self.food = self._spawn_food()
        self.state = RoundState.PLAYING
        self.started_at = self.clock.now()
        if self.food is None:
            self._game_over(won=True)
            return
        self.timers.every(self.tick_ms, self.step)

    @property
    def head(self) -> Cell:
        return self.body[0]

    def _in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size

    def _spawn_food(self) -> Optional[Cell]:
        n = self.grid_size
        if len(self.occupied) >= n * n:
            return None
        for _ in range(SNAKE_FOOD_MAX_SAMPLES):
            cell = (self.rng.randrange(n), self.rng.randrange(n))
            if cell not in self.occupied:
                return cell
        # crowded board: pick among what is left
        free = [(x, y) for y in range(n) for x in range(n) if (x, y) not in self.occupied]
        return self.rng.choice(free) if free else None

    def steer(self, direction: Union[Direction, str]) -> bool:
        if self.state is not RoundState.PLAYING:
            return False
        if not isinstance(direction, Direction):
            try:
                direction = Direction(str(direction).upper())
            except ValueError:
                return False
        if direction is self.direction.opposite:
            return False
        self.pending = direction
        return True

    def step(self) -> None:
        if self.state is not RoundState.PLAYING:
            return
        if self.pending is not self.direction.opposite:
            self.direction = self.pending
        dx, dy = self.direction.delta
        hx, hy = self.head
        new_head = (hx + dx, hy + dy)

        if not self._in_bounds(new_head) or new_head in self.occupied:
            self._game_over()
            return

        self.body.appendleft(new_head)
        self.occupied.add(new_head)
        if new_head == self.food:
            self.score += self.food_points
            self.cue("eat")
            self.food = self._spawn_food()
            if self.food is None:
                self._game_over(won=True)
        else:
            tail = self.body.pop()
            self.occupied.discard(tail)

    def _game_over(self, won: bool = False) -> None:
        self.timers.cancel_all()
        self.state = RoundState.FINISHED
        self.won = won
        self.cue("game_over")
        self.is_new_best = self.commit_best(self.score)
        logger.debug("snake over: score=%d length=%d won=%s", self.score, len(self.body), won)

    def snapshot(self) -> SnakeSnapshot:
        return SnakeSnapshot(
            self.state,
            tuple(self.body),
            self.food,
            self.direction,
            self.score,
            self.best,
            self.won,
            self.is_new_best,
            started_at=self.started_at,
        )


__all__ = ["GridSnakeEngine", "SnakeSnapshot", "default_start_body"]
