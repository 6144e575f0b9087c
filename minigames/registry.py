from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type, Union

from .catalog import GameCatalogClient, record_play
from .clock import TickClock
from .engine import Engine, SoundCue
from .enums import GameId
from .idle import IdleEconomyEngine
from .input_queue import InputEvent
from .reaction import ReactionEngine
from .score_store import ScoreStore
from .sequence import SequenceMemoryEngine
from .shooter import TargetSpawnEngine
from .snake import GridSnakeEngine
from .tap_frenzy import TapCounterEngine

logger = logging.getLogger(__name__)


@dataclass
class GameProfile:
    key: GameId
    label: str
    order: int
    factory: Type[Engine]
    autostart: bool = False


DEFAULT_PROFILES: List[GameProfile] = [
    GameProfile(GameId.REACTION, "Lightning Reflexes", 0, ReactionEngine),
    GameProfile(GameId.MEMORY, "Mind Maze", 1, SequenceMemoryEngine),
    GameProfile(GameId.CLICKER, "Tap Frenzy", 2, TapCounterEngine),
    GameProfile(GameId.SNAKE, "Snake", 3, GridSnakeEngine),
    GameProfile(GameId.COOKIE, "Cookie Clicker", 4, IdleEconomyEngine, autostart=True),
    GameProfile(GameId.FPS, "Zombie Shooter", 5, TargetSpawnEngine),
]


class GameRegistry:
    def __init__(self, profiles: List[GameProfile], *, initial_key: Optional[GameId] = None) -> None:
        self.games = sorted(list(profiles), key=lambda profile: profile.order)
        try:
            self.idx = next(i for i, game in enumerate(self.games) if game.key == initial_key)
        except StopIteration:
            self.idx = 0

    def current(self) -> GameProfile:
        return self.games[self.idx]

    def get(self, key: Union[GameId, str]) -> GameProfile:
        try:
            key = GameId(key)
        except ValueError:
            raise KeyError(key) from None
        for profile in self.games:
            if profile.key is key:
                return profile
        raise KeyError(key)

    def next_index(self, delta: int) -> Optional[int]:
        target = self.idx + (1 if delta > 0 else -1)
        if 0 <= target < len(self.games):
            return target
        return None

    def set_index(self, index: int) -> None:
        if 0 <= index < len(self.games):
            self.idx = index


class Arcade:
    """Keeps at most one engine alive.

    ``launch`` tears the previous session down (cancelling its timers)
    before the next engine is built, and bumps the catalogue play count.
    """

    def __init__(
        self,
        clock: TickClock,
        store: ScoreStore,
        *,
        registry: Optional[GameRegistry] = None,
        catalog: Optional[GameCatalogClient] = None,
        settings: Optional[Dict[GameId, Dict[str, Any]]] = None,
        rng: Optional[random.Random] = None,
        sfx: Optional[SoundCue] = None,
    ) -> None:
        self.clock = clock
        self.store = store
        self.registry = registry or GameRegistry(DEFAULT_PROFILES)
        self.catalog = catalog
        self.settings = settings or {}
        self.rng = rng
        self.sfx = sfx
        self.engine: Optional[Engine] = None
        self.profile: Optional[GameProfile] = None

    def launch(self, key: Union[GameId, str]) -> Engine:
        profile = self.registry.get(key)
        self.close()
        engine = profile.factory(
            self.clock,
            self.store,
            rng=self.rng,
            sfx=self.sfx,
            **self.settings.get(profile.key, {}),
        )
        self.engine = engine
        self.profile = profile
        if self.catalog is not None:
            record_play(self.catalog, profile.key.value)
        if profile.autostart:
            engine.start()
        logger.info("launched %s", profile.key.value)
        return engine

    def close(self) -> None:
        if self.engine is None:
            return
        logger.debug("closing %s", self.engine.game_id.value)
        self.engine.teardown()
        self.engine = None
        self.profile = None

    def reset_best(self, key: Union[GameId, str]) -> None:
        """Forget the stored record(s) for one game, every variant included."""
        profile = self.registry.get(key)
        self.store.reset(profile.key)
        if self.engine is not None and self.engine.game_id is profile.key:
            self.engine.best = self.engine.load_best()
        logger.info("reset best score for %s", profile.key.value)

    def dispatch(self, event: InputEvent) -> None:
        if self.engine is None:
            return
        try:
            self.engine.handle_input(event)
        except Exception:
            logger.exception("%s failed on %r", self.engine.game_id.value, event)

    def pump(self, now: Optional[float] = None) -> int:
        try:
            return self.clock.pump(now)
        except Exception:
            logger.exception("timer callback failed")
            return 0

    def snapshot(self) -> Any:
        return self.engine.snapshot() if self.engine is not None else None


__all__ = ["GameProfile", "GameRegistry", "Arcade", "DEFAULT_PROFILES"]
