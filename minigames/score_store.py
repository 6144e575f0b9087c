"""Durable best-score storage shared by every game.

The on-disk layout is a single JSON document::

    {
      "scores": {"snake": 120, "clicker": {"10": 41, "50": 180}},
      "saves":  {"cookie": {...}}
    }

``scores`` holds one number per game id, or a mapping of variant key to
number for parameterized games. ``saves`` holds whole per-game records for
games whose lifecycle is load/save rather than win/loss.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

Number = Union[int, float]


def _key(value: Any) -> str:
    # GameId is a str enum; use its value rather than its repr
    return str(getattr(value, "value", value))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ScoreStore:
    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path
        self._data: Dict[str, Dict[str, Any]] = self._read()

    # ---- scores ----

    def load(self, game_id: Any, variant_key: Any = None) -> Optional[Number]:
        entry = self._data["scores"].get(_key(game_id))
        if variant_key is not None:
            entry = entry.get(_key(variant_key)) if isinstance(entry, dict) else None
        return entry if _is_number(entry) else None

    def save(
        self,
        game_id: Any,
        value: Number,
        variant_key: Any = None,
        *,
        lower_is_better: bool = False,
    ) -> bool:
        """Store ``value`` if it beats the current record. Returns True when written."""
        current = self.load(game_id, variant_key)
        if current is not None:
            better = value < current if lower_is_better else value > current
            if not better:
                return False

        scores = self._data["scores"]
        gid = _key(game_id)
        if variant_key is None:
            scores[gid] = value
        else:
            bucket = scores.get(gid)
            if not isinstance(bucket, dict):
                bucket = scores[gid] = {}
            bucket[_key(variant_key)] = value
        logger.info("new record for %s%s: %s", gid, f"[{_key(variant_key)}]" if variant_key is not None else "", value)
        self._write()
        return True

    def reset(self, game_id: Any = None) -> None:
        if game_id is None:
            self._data["scores"].clear()
        else:
            self._data["scores"].pop(_key(game_id), None)
        self._write()

    # ---- whole-record saves ----

    def load_state(self, game_id: Any) -> Optional[Dict[str, Any]]:
        state = self._data["saves"].get(_key(game_id))
        return json.loads(json.dumps(state)) if isinstance(state, dict) else None

    def save_state(self, game_id: Any, state: Dict[str, Any]) -> None:
        self._data["saves"][_key(game_id)] = json.loads(json.dumps(state))
        self._write()

    # ---- file I/O ----

    def _read(self) -> Dict[str, Dict[str, Any]]:
        empty: Dict[str, Dict[str, Any]] = {"scores": {}, "saves": {}}
        if not self.path:
            return empty
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError:
            return empty
        except (OSError, ValueError) as exc:
            logger.warning("score file %s unreadable, starting fresh: %s", self.path, exc)
            return empty
        if not isinstance(raw, dict):
            logger.warning("score file %s has no top-level object, starting fresh", self.path)
            return empty
        for section in ("scores", "saves"):
            if isinstance(raw.get(section), dict):
                empty[section] = raw[section]
        return empty

    def _write(self) -> None:
        if not self.path:
            return
        tmp = f"{self.path}.tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except OSError as exc:
            logger.warning("could not write score file %s: %s", self.path, exc)


__all__ = ["ScoreStore"]
