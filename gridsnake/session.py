"""
session.py — Session layer.

Owns the lifecycle state machine (menu → playing → paused → gameOver),
decides when a simulation tick fires, and routes host commands into the
model. Knows nothing about pygame, keys, pixels or sound.

The host calls exactly two things:
    handle_event(command)  — a discrete command from the table below
    frame(now_ms)          — the repeating time signal
Both return the side signals raised while processing, for the audio layer.
"""

import random
from dataclasses import replace
from typing import NamedTuple

from .config import (
    INITIAL_FOOD,
    STATE_MENU, STATE_PLAYING, STATE_PAUSED, STATE_OVER,
)
from .model import (
    Direction, GameData, Collision, GAME_OVER,
    advance, new_game, request_direction,
)

# ── Commands ──────────────────────────────────────────────────────
MOVE_UP      = "move_up"
MOVE_DOWN    = "move_down"
MOVE_LEFT    = "move_left"
MOVE_RIGHT   = "move_right"
TOGGLE_PAUSE = "toggle_pause"
START        = "start"
RESTART      = "restart"

MOVES = {
    MOVE_UP:    Direction.UP,
    MOVE_DOWN:  Direction.DOWN,
    MOVE_LEFT:  Direction.LEFT,
    MOVE_RIGHT: Direction.RIGHT,
}


class Snapshot(NamedTuple):
    state: str
    data: GameData


class SessionController:
    """
    Top-level session. Holds the current GameData and replaces it whole
    after every tick; the only fields it patches itself are a fresh game
    on restart, the high score on game over, and the final score of a
    full-grid win.
    """

    def __init__(self, store, rng=None):
        self._store = store
        self._rng = rng if rng is not None else random.Random()
        self.state: str = STATE_MENU
        self.data: GameData = new_game(
            self._rng, high_score=max(0, store.load()), food=INITIAL_FOOD,
        )
        self.final_score: int = 0
        self._last_tick = None

    # ── Public API ───────────────────────────────────────────────
    def snapshot(self) -> Snapshot:
        """Read-only (state, data) pair for the view and HUD."""
        return Snapshot(self.state, self.data)

    def handle_event(self, command: str) -> list[str]:
        """
        Apply one host command. Commands that do not fit the current
        lifecycle state are ignored.
        """
        if command in MOVES:
            if self.state == STATE_PLAYING:
                self.data = request_direction(self.data, MOVES[command])
        elif command == START:
            if self.state == STATE_MENU:
                self._enter_playing()
        elif command == TOGGLE_PAUSE:
            if self.state == STATE_PLAYING:
                self._leave_playing(STATE_PAUSED)
            elif self.state == STATE_PAUSED:
                self._enter_playing()
        elif command == RESTART:
            if self.state == STATE_OVER:
                self._reset()
        return []

    def frame(self, now_ms: int) -> list[str]:
        """
        Time signal. Fires at most one tick per call; a late frame drops
        the backlog instead of catching up.
        """
        if self.state != STATE_PLAYING:
            return []
        if self._last_tick is None:
            self._last_tick = now_ms
            return []
        if now_ms - self._last_tick < self.data.speed:
            return []

        self._last_tick = now_ms
        outcome = advance(self.data, self._rng)
        if isinstance(outcome, Collision):
            return self._game_over(outcome)
        self.data = outcome.data
        return list(outcome.signals)

    # ── Private helpers ──────────────────────────────────────────
    def _enter_playing(self) -> None:
        """Start or resume ticking."""
        self.state = STATE_PLAYING
        # Baseline is taken from the next frame
        self._last_tick = None

    def _leave_playing(self, state: str) -> None:
        """Stop ticking. Safe to call more than once."""
        self.state = state
        self._last_tick = None

    def _game_over(self, outcome: Collision) -> list[str]:
        """Enter gameOver, record a new best score, report the end signals."""
        self.final_score = outcome.final_score
        self._leave_playing(STATE_OVER)
        if outcome.board_cleared:
            # Full-grid win: the last bite scored but produced no next state
            self.data = replace(self.data, score=outcome.final_score)
        if outcome.final_score > self.data.high_score:
            self.data = replace(self.data, high_score=outcome.final_score)
            self._store.save(outcome.final_score)
        return list(outcome.signals) + [GAME_OVER]

    def _reset(self) -> None:
        """Fresh game back in the menu; the best score carries over."""
        self.data = new_game(self._rng, high_score=self.data.high_score)
        self.final_score = 0
        self.state = STATE_MENU
        self._last_tick = None
