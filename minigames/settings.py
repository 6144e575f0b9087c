# minigames/settings.py
from __future__ import annotations
from typing import Any, Dict

from .enums import GameId

# ------------- snapshot (runtime) -------------

def make_runtime_settings(CFG: Dict[str, Any]) -> Dict[GameId, Dict[str, Any]]:
    """Per-game engine keyword arguments, snapshotted from CFG."""
    g = CFG["games"]
    arena = g["fps"]["arena_size"]
    return {
        GameId.REACTION: {
            "delay_min_ms": int(g["reaction"]["delay_min_ms"]),
            "delay_max_ms": int(g["reaction"]["delay_max_ms"]),
        },
        GameId.MEMORY: {
            "lead_in_ms":     int(g["memory"]["lead_in_ms"]),
            "show_ms":        int(g["memory"]["show_ms"]),
            "gap_ms":         int(g["memory"]["gap_ms"]),
            "round_pause_ms": int(g["memory"]["round_pause_ms"]),
        },
        GameId.CLICKER: {
            "durations": tuple(int(d) for d in g["clicker"]["durations"]),
            "tick_ms":   int(g["clicker"]["tick_ms"]),
            "tap_cost":  int(g["clicker"]["tap_cost"]),
        },
        GameId.SNAKE: {
            "grid_size":   int(g["snake"]["grid_size"]),
            "tick_ms":     int(g["snake"]["tick_ms"]),
            "food_points": int(g["snake"]["food_points"]),
        },
        GameId.FPS: {
            "round_sec":  int(g["fps"]["round_sec"]),
            "spawn_ms":   int(g["fps"]["spawn_ms"]),
            "sweep_ms":   int(g["fps"]["sweep_ms"]),
            "arena_size": (int(arena[0]), int(arena[1])),
        },
        GameId.COOKIE: {
            "tick_ms":        int(g["cookie"]["tick_ms"]),
            "autosave_ticks": int(g["cookie"]["autosave_ticks"]),
        },
    }
