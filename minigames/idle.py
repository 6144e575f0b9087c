from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Any, Dict, Mapping, Optional

from .constants import IDLE_AUTOSAVE_TICKS, IDLE_COST_GROWTH, IDLE_TICK_MS
from .engine import Engine
from .enums import GameId
from .models import UPGRADES, UpgradeSpec

logger = logging.getLogger(__name__)

# exact ratio (23/20) so large powers never lose digits
GROWTH = Fraction(IDLE_COST_GROWTH)


def upgrade_cost(base_cost: int, owned: int) -> int:
    """Price of the next unit: ceil(base_cost * 1.15 ** owned)."""
    exact = base_cost * GROWTH ** owned
    return -(-exact.numerator // exact.denominator)


def format_amount(value: Decimal) -> str:
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return str(int(value))


@dataclass(frozen=True)
class IdleSnapshot:
    resource: Decimal
    per_action_yield: int
    per_second_yield: Decimal
    upgrades: Mapping[str, int]
    costs: Mapping[str, int]
    running: bool
    started_at: Optional[float] = None


class IdleEconomyEngine(Engine):
    game_id = GameId.COOKIE
    ACTIONS = {
        "start": ("start", False),
        "click": ("click", False),
        "press": ("click", False),
        "buy": ("buy", True),
    }

    def __init__(
        self,
        *args,
        upgrades: Mapping[str, UpgradeSpec] = UPGRADES,
        tick_ms: int = IDLE_TICK_MS,
        autosave_ticks: int = IDLE_AUTOSAVE_TICKS,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.specs: Dict[str, UpgradeSpec] = dict(upgrades)
        self.tick_ms = tick_ms
        self.autosave_ticks = max(1, autosave_ticks)
        self.running = False
        self.ticks = 0
        self._reset_state()
        self.load()

    def load_best(self) -> Any:
        # open-ended game: no best score, the whole state is persisted instead
        return None

    def _reset_state(self) -> None:
        self.resource = Decimal(0)
        self.per_action_yield = 1
        self.per_second_yield = Decimal(0)
        self.owned: Dict[str, int] = {kind: 0 for kind in self.specs}

    @property
    def per_tick_yield(self) -> Decimal:
        return self.per_second_yield * Decimal(self.tick_ms) / Decimal(1000)

    # ---- persistence ----

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resource": str(self.resource),
            "per_action_yield": self.per_action_yield,
            "per_second_yield": str(self.per_second_yield),
            "upgrades": dict(self.owned),
        }

    def load(self) -> bool:
        raw = self.store.load_state(self.game_id)
        if raw is None:
            return False
        try:
            resource = Decimal(str(raw["resource"]))
            per_action = raw["per_action_yield"]
            per_second = Decimal(str(raw["per_second_yield"]))
            owned_raw = raw["upgrades"]
            if not (resource.is_finite() and per_second.is_finite()):
                raise ValueError("non-finite amount")
            if resource < 0 or per_second < 0:
                raise ValueError("negative amount")
            if isinstance(per_action, bool) or not isinstance(per_action, int) or per_action < 1:
                raise ValueError("bad per-action yield")
            if not isinstance(owned_raw, dict):
                raise ValueError("bad upgrades")
            owned = {kind: 0 for kind in self.specs}
            for kind, count in owned_raw.items():
                if kind not in owned:
                    continue
                if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                    raise ValueError(f"bad count for {kind}")
                owned[kind] = count
        except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
            logger.warning("discarding corrupt %s save: %s", self.game_id.value, exc)
            self._reset_state()
            return False
        self.resource = resource
        self.per_action_yield = per_action
        self.per_second_yield = per_second
        self.owned = owned
        return True

    def save(self) -> None:
        self.store.save_state(self.game_id, self.to_dict())

    # ---- lifecycle ----

    def start(self) -> None:
        if self.running:
            return
        self.running = True
        self.started_at = self.clock.now()
        self.timers.every(self.tick_ms, self._tick)

    def _tick(self) -> None:
        if self.per_second_yield > 0:
            self.resource += self.per_tick_yield
        self.ticks += 1
        if self.ticks % self.autosave_ticks == 0:
            self.save()

    def teardown(self) -> None:
        super().teardown()
        self.running = False
        self.save()

    # ---- input ----

    def cost(self, kind: str) -> int:
        return upgrade_cost(self.specs[kind].base_cost, self.owned[kind])

    def can_afford(self, kind: str) -> bool:
        return kind in self.specs and self.resource >= self.cost(kind)

    def click(self) -> None:
        self.resource += self.per_action_yield
        self.save()

    def buy(self, kind: str) -> bool:
        if kind not in self.specs:
            logger.debug("unknown upgrade %r", kind)
            return False
        price = self.cost(kind)
        if self.resource < price:
            return False
        spec = self.specs[kind]
        self.resource -= price
        self.owned[kind] += 1
        self.per_second_yield += spec.per_second
        self.per_action_yield += spec.per_click
        self.save()
        return True

    def snapshot(self) -> IdleSnapshot:
        costs = {kind: self.cost(kind) for kind in self.specs}
        return IdleSnapshot(
            self.resource,
            self.per_action_yield,
            self.per_second_yield,
            dict(self.owned),
            costs,
            self.running,
            started_at=self.started_at,
        )


__all__ = ["IdleEconomyEngine", "IdleSnapshot", "upgrade_cost", "format_amount"]
