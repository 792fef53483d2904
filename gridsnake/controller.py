"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Translate raw keyboard events into session commands.
  - Feed the frame clock to the session; it decides when the snake moves.
  - Hand side signals to the sound board and snapshots to the view.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the Model / Session's job).

The controller is the only layer that imports pygame directly for events.
"""

import sys
import pygame

from .audio import SAMPLE_RATE, SoundBoard
from .config import (
    WIDTH, HEIGHT, FPS,
    STATE_MENU, STATE_PLAYING, STATE_PAUSED, STATE_OVER,
)
from .session import (
    SessionController,
    MOVE_UP, MOVE_DOWN, MOVE_LEFT, MOVE_RIGHT,
    TOGGLE_PAUSE, START, RESTART,
)
from .storage import HighScoreStore
from .view import GameView

DIRECTION_KEYS = {
    pygame.K_UP:    MOVE_UP,
    pygame.K_w:     MOVE_UP,
    pygame.K_DOWN:  MOVE_DOWN,
    pygame.K_s:     MOVE_DOWN,
    pygame.K_LEFT:  MOVE_LEFT,
    pygame.K_a:     MOVE_LEFT,
    pygame.K_RIGHT: MOVE_RIGHT,
    pygame.K_d:     MOVE_RIGHT,
}

CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE)


class GameController:
    """
    Owns the main loop.
    Glues Session <-> View <-> SoundBoard without them knowing about each other.
    """

    def __init__(self, store=None):
        pygame.mixer.pre_init(SAMPLE_RATE, -16, 1)
        pygame.init()
        self.screen  = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Snake")
        self.clock   = pygame.time.Clock()
        self.session = SessionController(store if store is not None else HighScoreStore())
        self.view    = GameView(self.screen)
        self.sounds  = SoundBoard()

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        while True:
            self.clock.tick(FPS)
            self._handle_events()
            self.sounds.play(self.session.frame(pygame.time.get_ticks()))
            self.view.render(self.session.snapshot())

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        """Drain the pygame queue: window close quits, key presses dispatch."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)

    def _handle_keydown(self, key: int) -> None:
        """Quit keys act at once; everything else becomes a session command."""
        # Q / ESC quit from any state
        if key in (pygame.K_q, pygame.K_ESCAPE):
            self._quit()

        command = self._command_for(key, self.session.state)
        if command is not None:
            self.sounds.play(self.session.handle_event(command))

    # ── Key mapping ───────────────────────────────────────────────
    @staticmethod
    def _command_for(key: int, state: str):
        """
        Map a raw key to a session command, or None.
        SPACE and ENTER mean different things depending on the lifecycle
        state, the same way the overlays describe them.
        """
        if key in DIRECTION_KEYS:
            return DIRECTION_KEYS[key]
        if key == pygame.K_p:
            return TOGGLE_PAUSE
        if key == pygame.K_r:
            return RESTART

        if state == STATE_MENU and key in CONFIRM_KEYS:
            return START
        if state == STATE_OVER and key in CONFIRM_KEYS:
            return RESTART
        if state in (STATE_PLAYING, STATE_PAUSED) and key == pygame.K_SPACE:
            return TOGGLE_PAUSE
        return None

    # ── Utilities ─────────────────────────────────────────────────
    def _quit(self) -> None:
        """Silence the mixer, shut pygame down and exit the process."""
        self.sounds.stop()
        pygame.quit()
        sys.exit()
