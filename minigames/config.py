# minigames/config.py
from __future__ import annotations
import json, logging, os
from typing import Dict, Any

from pathlib import Path
PKG_DIR = Path(__file__).resolve().parent

logger = logging.getLogger(__name__)

def _abs(path: str) -> str:
    # leave absolute paths untouched
    p = Path(path)
    return str(p) if p.is_absolute() else str((PKG_DIR / p).resolve())

PACKAGE_DIR = os.path.dirname(__file__)
CONFIG_PATH = os.path.join(PACKAGE_DIR, "config.json")

DEFAULT_CFG: Dict[str, Any] = {
    "display": {"fullscreen": False, "fps": 60, "windowed_size": [960, 720]},
    "audio": {
        "music": "assets/music.ogg",
        "music_volume": 0.3,
        "sfx_volume": 0.5,
        "sfx": {
            "eat": "assets/sfx/eat.ogg",
            "game_over": "assets/sfx/game_over.ogg",
            "shoot": "assets/sfx/shoot.ogg",
        },
    },
    "logging": {"level": "INFO"},
    "scores_path": "scores.json",
    "games": {
        "reaction": {"delay_min_ms": 2000, "delay_max_ms": 5000},
        "memory": {"lead_in_ms": 500, "show_ms": 400, "gap_ms": 200, "round_pause_ms": 800},
        "clicker": {"durations": [10, 50, 100], "tick_ms": 100, "tap_cost": 2},
        "snake": {"grid_size": 20, "tick_ms": 100, "food_points": 10},
        "fps": {"round_sec": 30, "spawn_ms": 800, "sweep_ms": 50, "arena_size": [800, 450]},
        "cookie": {"tick_ms": 100, "autosave_ticks": 10},
    },
}

def _deepcopy(obj):
    return json.loads(json.dumps(obj))

def _merge(dst: dict, src: dict) -> dict:
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            _merge(dst[k], v)
        else:
            dst[k] = v
    return dst

def _clamp_int(d: dict, key: str, lo: int, hi: int, default: int) -> None:
    try:
        d[key] = int(max(lo, min(hi, int(d.get(key, default)))))
    except (TypeError, ValueError):
        d[key] = default

def _sanitize_cfg(cfg: dict) -> dict:
    d = cfg["display"]
    _clamp_int(d, "fps", 30, 240, 60)
    ws = d.get("windowed_size", [960, 720])
    if isinstance(ws, (list, tuple)) and len(ws) == 2 and all(isinstance(x, (int, float)) for x in ws):
        w, h = max(320, min(10000, int(ws[0]))), max(240, min(10000, int(ws[1])))
        d["windowed_size"] = [w, h]
    else:
        d["windowed_size"] = [960, 720]
    d["fullscreen"] = bool(d.get("fullscreen", False))

    a = cfg.setdefault("audio", {})
    a["music_volume"] = float(max(0.0, min(1.0, a.get("music_volume", 0.3))))
    a["sfx_volume"]   = float(max(0.0, min(1.0, a.get("sfx_volume",   0.5))))

    lg = cfg.setdefault("logging", {})
    level = str(lg.get("level", "INFO")).upper()
    lg["level"] = level if level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL") else "INFO"

    g = cfg["games"]
    r = g["reaction"]
    _clamp_int(r, "delay_min_ms", 100, 60000, 2000)
    _clamp_int(r, "delay_max_ms", r["delay_min_ms"] + 1, 120000, 5000)

    m = g["memory"]
    for key, default in (("lead_in_ms", 500), ("show_ms", 400), ("gap_ms", 200), ("round_pause_ms", 800)):
        _clamp_int(m, key, 0, 10000, default)
    m["show_ms"] = max(1, m["show_ms"])

    c = g["clicker"]
    durs = c.get("durations")
    if isinstance(durs, list) and durs and all(isinstance(x, int) and x > 0 for x in durs):
        c["durations"] = sorted(set(durs))
    else:
        c["durations"] = [10, 50, 100]
    _clamp_int(c, "tick_ms", 10, 1000, 100)
    _clamp_int(c, "tap_cost", 0, 100, 2)

    s = g["snake"]
    _clamp_int(s, "grid_size", 4, 100, 20)
    _clamp_int(s, "tick_ms", 20, 2000, 100)
    _clamp_int(s, "food_points", 1, 1000, 10)

    f = g["fps"]
    _clamp_int(f, "round_sec", 1, 600, 30)
    _clamp_int(f, "spawn_ms", 50, 10000, 800)
    _clamp_int(f, "sweep_ms", 10, 1000, 50)
    arena = f.get("arena_size", [800, 450])
    if not (isinstance(arena, (list, tuple)) and len(arena) == 2 and all(isinstance(x, (int, float)) and x > 0 for x in arena)):
        f["arena_size"] = [800, 450]

    k = g["cookie"]
    _clamp_int(k, "tick_ms", 10, 1000, 100)
    _clamp_int(k, "autosave_ticks", 1, 10000, 10)

    audio = cfg.get("audio", {})
    for key, v in list(audio.items()):
        if isinstance(v, str):
            audio[key] = _abs(v)
    for key, v in list(audio.get("sfx", {}).items()):
        if isinstance(v, str):
            audio["sfx"][key] = _abs(v)
    if isinstance(cfg.get("scores_path"), str):
        cfg["scores_path"] = _abs(cfg["scores_path"])
    cfg["config_path"] = str(Path(CONFIG_PATH).resolve())
    return cfg

def save_config(partial_cfg: dict, path: str = CONFIG_PATH) -> None:
    try:
        with open(path, "r", encoding="utf-8") as f:
            base = json.load(f)
        if not isinstance(base, dict): base = {}
    except (OSError, ValueError):
        base = {}
    merged = _merge(base, partial_cfg)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(merged, f, ensure_ascii=False, indent=2)
    except OSError as exc:
        logger.warning("could not write config %s: %s", path, exc)

def load_config(path: str = CONFIG_PATH) -> dict:
    cfg = _deepcopy(DEFAULT_CFG)
    try:
        with open(path, "r", encoding="utf-8") as f:
            user = json.load(f)
        if isinstance(user, dict):
            _merge(cfg, user)
        else:
            logger.warning("ignoring config %s: top level is not an object", path)
    except FileNotFoundError:
        save_config(cfg, path)
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
    try:
        return _sanitize_cfg(cfg)
    except (KeyError, TypeError, AttributeError) as exc:
        logger.warning("config %s has a broken layout (%s), using defaults", path, exc)
        return _sanitize_cfg(_deepcopy(DEFAULT_CFG))

CFG = load_config()
