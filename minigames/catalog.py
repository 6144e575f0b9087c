"""Game catalogue contract.

The real catalogue lives in a remote record store; the core only needs to
list, filter and update records. ``InMemoryCatalog`` implements the same
contract for the offline cabinet and for tests.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameRecord:
    id: str
    title: str
    category: str
    play_count: int = 0
    description: str = ""
    game_url: Optional[str] = None
    thumbnail: Optional[str] = None


Predicate = Callable[[GameRecord], bool]


class GameCatalogClient(ABC):
    @abstractmethod
    def list(self, sort_key: str = "title", limit: Optional[int] = None) -> List[GameRecord]:
        """Records ordered by ``sort_key``; a leading ``-`` sorts descending."""

    @abstractmethod
    def filter(self, predicate: Optional[Predicate] = None, **fields: Any) -> List[GameRecord]:
        ...

    @abstractmethod
    def update(self, game_id: str, fields: Dict[str, Any]) -> GameRecord:
        ...

    def get(self, game_id: str) -> Optional[GameRecord]:
        found = self.filter(id=game_id)
        return found[0] if found else None


class InMemoryCatalog(GameCatalogClient):
    def __init__(self, records: Iterable[GameRecord] = ()) -> None:
        self._records: Dict[str, GameRecord] = {r.id: r for r in records}

    def list(self, sort_key: str = "title", limit: Optional[int] = None) -> List[GameRecord]:
        reverse = sort_key.startswith("-")
        field_name = sort_key.lstrip("-")
        records = list(self._records.values())
        # unset optional fields go last in either direction
        present = [r for r in records if getattr(r, field_name) is not None]
        missing = [r for r in records if getattr(r, field_name) is None]
        rows = sorted(present, key=lambda r: getattr(r, field_name), reverse=reverse) + missing
        return rows if limit is None else rows[: max(0, limit)]

    def filter(self, predicate: Optional[Predicate] = None, **fields: Any) -> List[GameRecord]:
        out = []
        for record in self._records.values():
            if any(getattr(record, k) != v for k, v in fields.items()):
                continue
            if predicate is not None and not predicate(record):
                continue
            out.append(record)
        return out

    def update(self, game_id: str, fields: Dict[str, Any]) -> GameRecord:
        record = self._records[game_id]
        unknown = set(fields) - set(asdict(record))
        if unknown:
            raise KeyError(f"unknown fields: {sorted(unknown)}")
        updated = replace(record, **fields)
        self._records[game_id] = updated
        return updated


def record_play(client: GameCatalogClient, game_id: str) -> Optional[GameRecord]:
    """Bump ``play_count`` once for a new play session."""
    record = client.get(game_id)
    if record is None:
        logger.debug("no catalog record for %s", game_id)
        return None
    return client.update(game_id, {"play_count": record.play_count + 1})


def most_played(client: GameCatalogClient, limit: int = 10) -> List[GameRecord]:
    return client.list("-play_count", limit)


DEFAULT_CATALOG: List[GameRecord] = [
    GameRecord("reaction", "Lightning Reflexes", "arcade", description="Click the moment the screen turns green."),
    GameRecord("memory", "Mind Maze", "puzzle", description="Repeat the growing colour sequence."),
    GameRecord("clicker", "Tap Frenzy", "arcade", description="Tap as fast as you can, but every tap burns time."),
    GameRecord("snake", "Snake", "arcade", description="Eat the apples, avoid the walls and yourself."),
    GameRecord("cookie", "Cookie Clicker", "strategy", description="Bake cookies and buy helpers that bake for you."),
    GameRecord("fps", "Zombie Shooter", "action", description="Shoot the zombies before they vanish."),
]


__all__ = [
    "GameRecord",
    "GameCatalogClient",
    "InMemoryCatalog",
    "record_play",
    "most_played",
    "DEFAULT_CATALOG",
]
