from __future__ import annotations

from .config import CFG


_G = CFG["games"]


# --- Palette ----------------------------------------------------------------
BG = (15, 23, 42)                # menu / game background
INK = (235, 235, 235)            # primary text colour
DIM = (140, 150, 170)            # secondary text
ACCENT = (255, 210, 90)          # highlights, new-best banners

# Reaction screen colours per state
REACTION_COLORS = {
    "WAITING": (30, 41, 59),
    "READY":   (185, 28, 28),
    "GO":      (22, 163, 74),
    "RESULT":  (8, 145, 178),
}

SNAKE_HEAD = (34, 197, 94)
SNAKE_BODY = (74, 222, 128)
SNAKE_FOOD = (239, 68, 68)
TARGET_COLOR = (132, 204, 22)

# --- Display ----------------------------------------------------------------
FPS = int(CFG.get("display", {}).get("fps", 60))
WINDOWED_DEFAULT_SIZE = tuple(CFG.get("display", {}).get("windowed_size", (960, 720)))
FONT_SIZE_TITLE = 48
FONT_SIZE_BODY = 28
FONT_SIZE_SMALL = 20

# --- Reaction ---------------------------------------------------------------
REACTION_DELAY_MIN_MS = int(_G["reaction"]["delay_min_ms"])
REACTION_DELAY_MAX_MS = int(_G["reaction"]["delay_max_ms"])
REACTION_TIERS = ((150, "inhuman"), (200, "lightning"), (300, "good"))

# --- Sequence memory --------------------------------------------------------
MEMORY_LEAD_IN_MS = int(_G["memory"]["lead_in_ms"])
MEMORY_SHOW_MS = int(_G["memory"]["show_ms"])
MEMORY_GAP_MS = int(_G["memory"]["gap_ms"])
MEMORY_ROUND_PAUSE_MS = int(_G["memory"]["round_pause_ms"])
SEQUENCE_SYMBOLS = ("red", "blue", "green", "yellow")

# --- Tap frenzy -------------------------------------------------------------
TAP_DURATIONS = tuple(_G["clicker"]["durations"])
TAP_TICK_MS = int(_G["clicker"]["tick_ms"])
TAP_COST = int(_G["clicker"]["tap_cost"])
TAP_UNITS_PER_SEC = 10           # budget is tracked in tenths of a second

# --- Snake ------------------------------------------------------------------
SNAKE_GRID_SIZE = int(_G["snake"]["grid_size"])
SNAKE_TICK_MS = int(_G["snake"]["tick_ms"])
SNAKE_FOOD_POINTS = int(_G["snake"]["food_points"])
SNAKE_FOOD_MAX_SAMPLES = 64      # rejection samples before enumerating free cells

# --- Shooter ----------------------------------------------------------------
SHOOTER_ROUND_SEC = int(_G["fps"]["round_sec"])
SHOOTER_SPAWN_MS = int(_G["fps"]["spawn_ms"])
SHOOTER_SWEEP_MS = int(_G["fps"]["sweep_ms"])
SHOOTER_ARENA_SIZE = tuple(_G["fps"]["arena_size"])
SHOOTER_MAX_COMBO = 5
SHOOTER_X_RANGE = (0.15, 0.85)
SHOOTER_Y_RANGE = (0.20, 0.80)

# --- Idle economy -----------------------------------------------------------
IDLE_TICK_MS = int(_G["cookie"]["tick_ms"])
IDLE_AUTOSAVE_TICKS = int(_G["cookie"]["autosave_ticks"])
IDLE_COST_GROWTH = "1.15"
