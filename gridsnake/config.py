"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
"""

import os

# ── Window & Grid ─────────────────────────────────────────────────
GRID_SIZE       = 20
CELL            = 24
PANEL_H         = 64
FOOTER_H        = 36
GAME_W = GAME_H = GRID_SIZE * CELL
OFFSET_X        = 12
OFFSET_Y        = PANEL_H + 8
WIDTH           = GAME_W + 2 * OFFSET_X
HEIGHT          = OFFSET_Y + GAME_H + FOOTER_H
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
BG          = (17,  24,  39)
CELL_COL    = (20,  26,  40)
GRID_COL    = (55,  65,  81)
HEAD_COL    = (74,  222, 128)
BODY_COL    = (22,  163, 74)
FOOD_COL    = (239, 68,  68)
SCORE_COL   = (74,  222, 128)
LEVEL_COL   = (250, 204, 21)
BEST_COL    = (192, 132, 252)
UI_COL      = (156, 163, 175)
PANEL_BG    = (31,  41,  55)
BORDER_COL  = (74,  222, 128)

# ── Gameplay ──────────────────────────────────────────────────────
INITIAL_SNAKE     = ((10, 10),)
INITIAL_DIRECTION = (1, 0)
INITIAL_FOOD      = (15, 15)
INITIAL_SPEED     = 150      # ms between ticks
SPEED_STEP        = 15       # ms shaved off per level
MIN_SPEED         = 50
FOOD_POINTS       = 10       # multiplied by the current level
POINTS_PER_LEVEL  = 50
FOOD_SAMPLE_LIMIT = 4 * GRID_SIZE * GRID_SIZE

# ── Game States ───────────────────────────────────────────────────
STATE_MENU    = "menu"
STATE_PLAYING = "playing"
STATE_PAUSED  = "paused"
STATE_OVER    = "gameOver"

# ── Persistence ───────────────────────────────────────────────────
HIGH_SCORE_PATH = os.environ.get(
    "GRIDSNAKE_HIGHSCORE",
    os.path.join(os.path.expanduser("~"), ".gridsnake_highscore"),
)
