from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Dict, Optional, Tuple

from .clock import TickClock
from .enums import GameId
from .input_queue import InputEvent
from .score_store import ScoreStore

logger = logging.getLogger(__name__)

SoundCue = Callable[[str], None]


class Engine(ABC):
    """One mini-game session.

    Subclasses declare ``game_id`` and an ``ACTIONS`` table mapping input
    action names to ``(method name, takes_value)``; ``handle_input`` routes
    through it and ignores unknown actions and events whose value does not
    fit the handler. All timers go through ``self.timers`` so that
    ``teardown`` silences the session completely.
    """

    game_id: ClassVar[GameId]
    lower_is_better: ClassVar[bool] = False
    ACTIONS: ClassVar[Dict[str, Tuple[str, bool]]] = {}

    def __init__(
        self,
        clock: TickClock,
        store: ScoreStore,
        *,
        rng: Optional[random.Random] = None,
        sfx: Optional[SoundCue] = None,
    ) -> None:
        self.clock = clock
        self.timers = clock.scope()
        self.store = store
        self.rng = rng or random.Random()
        self._sfx = sfx
        self.started_at: Optional[float] = None
        self.best = self.load_best()

    # ---- scores ----

    def load_best(self) -> Any:
        return self.store.load(self.game_id)

    def commit_best(self, value: Any, variant_key: Any = None) -> bool:
        wrote = self.store.save(self.game_id, value, variant_key, lower_is_better=self.lower_is_better)
        if wrote:
            self.best = value
        return wrote

    # ---- side effects ----

    def cue(self, name: str) -> None:
        if self._sfx is None:
            return
        try:
            self._sfx(name)
        except Exception:
            logger.exception("sound cue %r failed", name)

    # ---- lifecycle ----

    @abstractmethod
    def start(self) -> None:
        ...

    @abstractmethod
    def snapshot(self) -> Any:
        ...

    def handle_input(self, event: InputEvent) -> None:
        route = self.ACTIONS.get(event.action)
        if route is None:
            logger.debug("%s ignores action %r", self.game_id.value, event.action)
            return
        name, takes_value = route
        if takes_value != (event.value is not None):
            logger.debug("%s ignores %r: value %r does not fit", self.game_id.value, event.action, event.value)
            return
        handler = getattr(self, name)
        if takes_value:
            handler(event.value)
        else:
            handler()

    def teardown(self) -> None:
        self.timers.close()


__all__ = ["Engine", "SoundCue"]
