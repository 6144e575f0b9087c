from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import pygame

from .constants import SEQUENCE_SYMBOLS


@dataclass(frozen=True)
class Pad:
    name: str
    color: tuple[int, int, int]
    key: int

    def lit_color(self) -> tuple[int, int, int]:
        r, g, b = (min(255, c + 90) for c in self.color)
        return (r, g, b)


_COLORS = {
    "red": (239, 68, 68),
    "blue": (59, 130, 246),
    "green": (34, 197, 94),
    "yellow": (234, 179, 8),
}

# Number keys 1-4 select the pads in alphabet order.
PADS: Dict[str, Pad] = {
    name: Pad(name, _COLORS[name], pygame.K_1 + i) for i, name in enumerate(SEQUENCE_SYMBOLS)
}

PAD_BY_KEY: Dict[int, str] = {pad.key: pad.name for pad in PADS.values()}

__all__ = ["Pad", "PADS", "PAD_BY_KEY"]
