from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto
from typing import Dict, Tuple


class Scene(Enum):
    MENU = auto()
    GAME = auto()


class ReactionState(Enum):
    WAITING = auto()
    READY = auto()
    GO = auto()
    RESULT = auto()


class SequenceState(Enum):
    IDLE = auto()
    SHOWING = auto()
    PLAYING = auto()
    LOST = auto()


class RoundState(Enum):
    """Shared by the timed games: tap frenzy, snake and the shooter."""
    IDLE = auto()
    PLAYING = auto()
    FINISHED = auto()


Cell = Tuple[int, int]


@dataclass(frozen=True)
class TargetSize:
    name: str
    pixels: int
    value: int
    lifetime_ms: int
    weight: float


# Smaller targets are worth more and vanish sooner.
TARGET_SIZES: Tuple[TargetSize, ...] = (
    TargetSize("small", 40, 30, 1500, 0.30),
    TargetSize("medium", 55, 20, 2000, 0.35),
    TargetSize("large", 70, 10, 2500, 0.35),
)


@dataclass
class Target:
    id: int
    x: float
    y: float
    size: TargetSize
    expires_at: float

    @property
    def value(self) -> int:
        return self.size.value

    def contains(self, x: float, y: float, arena: Tuple[int, int]) -> bool:
        """Hit-test a normalized point against the target's on-screen circle."""
        w, h = arena
        dx = (x - self.x) * w
        dy = (y - self.y) * h
        r = self.size.pixels / 2
        return dx * dx + dy * dy <= r * r


@dataclass(frozen=True)
class UpgradeSpec:
    kind: str
    label: str
    base_cost: int
    per_second: Decimal
    per_click: int = 0


UPGRADES: Dict[str, UpgradeSpec] = {
    "cursor": UpgradeSpec("cursor", "Cursor", 15, Decimal("0.1"), per_click=1),
    "grandma": UpgradeSpec("grandma", "Grandma", 100, Decimal("1")),
    "farm": UpgradeSpec("farm", "Farm", 500, Decimal("5")),
}


__all__ = [
    "Scene",
    "ReactionState",
    "SequenceState",
    "RoundState",
    "Cell",
    "TargetSize",
    "TARGET_SIZES",
    "Target",
    "UpgradeSpec",
    "UPGRADES",
]
