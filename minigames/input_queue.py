from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, List


@dataclass(frozen=True)
class InputEvent:
    action: str
    value: Any = None


class InputQueue:
    def __init__(self) -> None:
        self._q: Deque[InputEvent] = deque()

    def push(self, action: str, value: Any = None) -> None:
        self._q.append(InputEvent(action, value))

    def pop_all(self) -> list[InputEvent]:
        out: List[InputEvent] = list(self._q)
        self._q.clear()
        return out


__all__ = ["InputEvent", "InputQueue"]
