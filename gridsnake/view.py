"""
view.py — View layer.

Draws one frame from a read-only session Snapshot:
  - Pre-rendered grid surface (drawn once, blitted every frame)
  - Cells classified by the model as head / body / food / empty
  - Glowing head and pulsing food
  - HUD panel with score, level and best score
  - Speed multiplier and progress bar while playing
  - Menu, paused and game-over overlays

Public API:
    GameView(screen)       — bind to a pygame surface
    view.render(snapshot)  — draw the current frame
"""

import math
import pygame

from .config import (
    WIDTH, PANEL_H, GAME_W, GAME_H,
    OFFSET_X, OFFSET_Y, CELL, GRID_SIZE,
    BG, CELL_COL, GRID_COL, HEAD_COL, BODY_COL, FOOD_COL,
    SCORE_COL, LEVEL_COL, BEST_COL, UI_COL, PANEL_BG, BORDER_COL,
    INITIAL_SPEED, MIN_SPEED, SPEED_STEP,
    STATE_MENU, STATE_OVER, STATE_PAUSED, STATE_PLAYING,
)
from .model import GameData
from .session import Snapshot

OVERLAYS = {
    STATE_MENU:   "menu",
    STATE_PAUSED: "paused",
    STATE_OVER:   "game_over",
}


# ─────────────────────── colour helpers ──────────────────────────
def _lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def _with_alpha(color: tuple, alpha: int) -> tuple:
    return (*color[:3], max(0, min(255, alpha)))


def _brighten(color: tuple, factor: float) -> tuple:
    return tuple(min(255, int(c * factor)) for c in color[:3])


def speed_multiplier(speed: int) -> int:
    return round((INITIAL_SPEED - speed + MIN_SPEED) / SPEED_STEP)


def speed_progress(speed: int) -> float:
    """0.0 at the starting speed, 1.0 at the floor."""
    return min(1.0, (INITIAL_SPEED - speed) / (INITIAL_SPEED - MIN_SPEED))


def overlay_for(state: str):
    """Name of the overlay drawn over the board in `state`, or None."""
    return OVERLAYS.get(state)


def is_new_high_score(data: GameData) -> bool:
    return data.score > 0 and data.score == data.high_score


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete game frame from a session Snapshot."""

    # ── Construction ─────────────────────────────────────────────
    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._init_fonts()
        self._build_static_surfaces()

        # For food pulse and overlay title animation
        self._anim_tick: int = 0

    # ── Main entry ───────────────────────────────────────────────
    def render(self, snapshot: Snapshot) -> None:
        self._anim_tick += 1
        state, data = snapshot

        # ── Base layers
        self.screen.fill(BG)
        self.screen.blit(self._grid_surf, (OFFSET_X, OFFSET_Y))

        # ── Game content
        self._draw_cells(data)

        # ── Chrome
        self._draw_border()
        self._draw_panel(data)
        if state == STATE_PLAYING:
            self._draw_speed(data.speed)

        # ── State overlays
        overlay = overlay_for(state)
        if overlay is not None:
            getattr(self, f"_draw_{overlay}_overlay")(data)

        pygame.display.flip()

    # ── Static surface pre-builds ─────────────────────────────────
    def _build_static_surfaces(self) -> None:
        self._grid_surf = pygame.Surface((GAME_W, GAME_H))
        self._grid_surf.fill(BG)
        for gy in range(GRID_SIZE):
            for gx in range(GRID_SIZE):
                rect = (gx * CELL, gy * CELL, CELL, CELL)
                pygame.draw.rect(self._grid_surf, CELL_COL, rect)
                pygame.draw.rect(self._grid_surf, GRID_COL, rect, 1)

    # ── Cells ────────────────────────────────────────────────────
    def _draw_cells(self, data: GameData) -> None:
        if data.food is not None:
            self._draw_food(data.food)
        # Body first so the head glow sits on top
        for pos in data.snake[1:]:
            pygame.draw.rect(self.screen, BODY_COL, self._cell_rect(pos).inflate(-2, -2))
        self._draw_head(data.head)

    @staticmethod
    def _cell_rect(pos) -> pygame.Rect:
        return pygame.Rect(OFFSET_X + pos[0] * CELL, OFFSET_Y + pos[1] * CELL, CELL, CELL)

    def _draw_head(self, pos) -> None:
        rect = self._cell_rect(pos)
        glow_size = CELL
        glow = pygame.Surface((glow_size * 2, glow_size * 2), pygame.SRCALPHA)
        for gr in range(glow_size, 0, -2):
            a = int(30 * (gr / glow_size) ** 0.6)
            pygame.draw.circle(glow, _with_alpha(HEAD_COL, a), (glow_size, glow_size), gr)
        self.screen.blit(glow, (rect.centerx - glow_size, rect.centery - glow_size),
                         special_flags=pygame.BLEND_RGBA_ADD)
        pygame.draw.rect(self.screen, HEAD_COL, rect.inflate(-2, -2), border_radius=3)

    def _draw_food(self, food) -> None:
        pulse = 0.75 + 0.25 * math.sin(self._anim_tick * 0.10)
        cx, cy = self._cell_rect(food).center
        r = max(2, int((CELL / 2 - 2) * pulse))

        glow_r = r + 8
        glow = pygame.Surface((glow_r * 2, glow_r * 2), pygame.SRCALPHA)
        for gr in range(glow_r, r, -1):
            a = int(80 * (1 - (gr - r) / (glow_r - r)) * pulse)
            pygame.draw.circle(glow, _with_alpha(FOOD_COL, a), (glow_r, glow_r), gr)
        self.screen.blit(glow, (cx - glow_r, cy - glow_r))
        pygame.draw.circle(self.screen, FOOD_COL, (cx, cy), r)

    # ── Border ───────────────────────────────────────────────────
    def _draw_border(self) -> None:
        pygame.draw.rect(self.screen, BORDER_COL,
                         (OFFSET_X - 2, OFFSET_Y - 2, GAME_W + 4, GAME_H + 4), 2,
                         border_radius=4)

    # ── HUD Panel ─────────────────────────────────────────────────
    def _draw_panel(self, data: GameData) -> None:
        pygame.draw.rect(self.screen, PANEL_BG, (OFFSET_X, 6, GAME_W, PANEL_H - 12),
                         border_radius=6)
        columns = [
            ("Score", data.score, SCORE_COL),
            ("Level", data.level, LEVEL_COL),
            ("Best", data.high_score, BEST_COL),
        ]
        col_w = GAME_W // len(columns)
        for i, (label, value, color) in enumerate(columns):
            cx = OFFSET_X + col_w * i + col_w // 2
            num = self.font_big.render(str(value), True, color)
            self.screen.blit(num, num.get_rect(center=(cx, 24)))
            lab = self.font_tiny.render(label, True, UI_COL)
            self.screen.blit(lab, lab.get_rect(center=(cx, 46)))

    def _draw_speed(self, speed: int) -> None:
        cy = OFFSET_Y + GAME_H + 12
        txt = self.font_tiny.render(f"Speed: {speed_multiplier(speed)}x", True, UI_COL)
        self.screen.blit(txt, txt.get_rect(center=(WIDTH // 2, cy)))

        bar_w, bar_h = 128, 4
        bx = WIDTH // 2 - bar_w // 2
        by = cy + 10
        pygame.draw.rect(self.screen, GRID_COL, (bx, by, bar_w, bar_h), border_radius=2)
        fill = int(bar_w * speed_progress(speed))
        if fill > 0:
            color = _lerp_color(HEAD_COL, FOOD_COL, speed_progress(speed))
            pygame.draw.rect(self.screen, color, (bx, by, fill, bar_h), border_radius=2)

    # ── Overlay infrastructure ────────────────────────────────────
    def _draw_overlay_base(self) -> None:
        surf = pygame.Surface((GAME_W, GAME_H), pygame.SRCALPHA)
        surf.fill((0, 0, 0, 205))
        self.screen.blit(surf, (OFFSET_X, OFFSET_Y))

    def _draw_animated_title(self, title: str, color: tuple,
                              cy: int, font: pygame.font.Font) -> int:
        pulse = 0.82 + 0.18 * math.sin(self._anim_tick * 0.05)
        surf = font.render(title, True, _brighten(color, pulse))
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, cy + surf.get_height() // 2)))
        return cy + surf.get_height() + 14

    def _draw_text_line(self, text: str, color: tuple,
                        cy: int, font: pygame.font.Font) -> int:
        if not text:
            return cy + 10
        surf = font.render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, cy)))
        return cy + surf.get_height() + 8

    # ── State overlays ────────────────────────────────────────────
    def _draw_menu_overlay(self, data: GameData) -> None:
        self._draw_overlay_base()
        cy = OFFSET_Y + GAME_H // 2 - 70
        cy = self._draw_animated_title("READY?", SCORE_COL, cy, self.font_title)
        cy = self._draw_text_line("Press SPACE or ENTER to start", (210, 210, 220), cy, self.font_med)
        cy += 12
        cy = self._draw_text_line("Eat red food to grow and score points", UI_COL, cy, self.font_tiny)
        self._draw_text_line("Avoid walls and your own tail", UI_COL, cy, self.font_tiny)

    def _draw_paused_overlay(self, data: GameData) -> None:
        self._draw_overlay_base()
        cy = OFFSET_Y + GAME_H // 2 - 36
        cy = self._draw_animated_title("PAUSED", LEVEL_COL, cy, self.font_title)
        self._draw_text_line("Press SPACE to continue", (210, 210, 220), cy, self.font_med)

    def _draw_game_over_overlay(self, data: GameData) -> None:
        self._draw_overlay_base()
        cy = OFFSET_Y + GAME_H // 2 - 80
        cy = self._draw_animated_title("GAME OVER", FOOD_COL, cy, self.font_title)
        cy = self._draw_text_line(f"Score: {data.score}", SCORE_COL, cy, self.font_big)
        if is_new_high_score(data):
            cy = self._draw_text_line("NEW HIGH SCORE!", LEVEL_COL, cy, self.font_small)
        cy += 6
        self._draw_text_line("Press SPACE or ENTER to play again", (210, 210, 220), cy, self.font_med)

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        specs = [
            ("font_title", "courier", 36, True),
            ("font_big",   "courier", 24, True),
            ("font_med",   "courier", 15, False),
            ("font_small", "courier", 14, True),
            ("font_tiny",  "courier", 12, False),
        ]
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except Exception:
                setattr(self, attr, pygame.font.SysFont(None, size))
