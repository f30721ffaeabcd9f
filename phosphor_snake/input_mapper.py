# --- START OF FILE phosphor_snake/input_mapper.py ---

import logging
from enum import Enum
from typing import Callable, Optional

import pygame

from phosphor_snake.grid import Direction
from phosphor_snake.snake_game import SnakeGame, GamePhase

logger = logging.getLogger(__name__)

# ---------------- Constants ---------------- #
SWIPE_THRESHOLD = 0.04 # Minimum finger travel, as a fraction of the window


class Action(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    START = "start"
    TOGGLE_SOUND = "toggle_sound"
    QUIT = "quit"


MOVE_ACTIONS = {
    Action.UP: Direction.UP,
    Action.DOWN: Direction.DOWN,
    Action.LEFT: Direction.LEFT,
    Action.RIGHT: Direction.RIGHT,
}

KEY_BINDINGS = {
    pygame.K_UP: Action.UP, pygame.K_w: Action.UP,
    pygame.K_DOWN: Action.DOWN, pygame.K_s: Action.DOWN,
    pygame.K_LEFT: Action.LEFT, pygame.K_a: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT, pygame.K_d: Action.RIGHT,
    pygame.K_SPACE: Action.START, pygame.K_RETURN: Action.START, pygame.K_KP_ENTER: Action.START,
    pygame.K_m: Action.TOGGLE_SOUND,
    pygame.K_ESCAPE: Action.QUIT,
}


def swipe_action(dx: float, dy: float, threshold: float = SWIPE_THRESHOLD) -> Optional[Action]:
    """Direction of a swipe from its normalized travel, None if it was a tap."""
    if max(abs(dx), abs(dy)) < threshold:
        return None
    if abs(dx) > abs(dy):
        return Action.RIGHT if dx > 0 else Action.LEFT
    return Action.DOWN if dy > 0 else Action.UP


class InputMapper:
    """
    Turns raw input into game operations.

    Movement while the game is over restarts it first, then forwards the direction.
    START begins a game from idle or over and is ignored while running.
    """

    def __init__(self, game: SnakeGame, on_toggle_sound: Optional[Callable[[], None]] = None,
                 on_first_interaction: Optional[Callable[[], None]] = None):
        self.game = game
        self.on_toggle_sound = on_toggle_sound
        self.on_first_interaction = on_first_interaction
        self.quit_requested = False
        self._interacted = False
        self._finger_down = None
        self.board_rect = None # Set by the host so pointer presses can be hit-tested

    def _note_interaction(self):
        # Audio devices may only start after a user gesture
        if not self._interacted:
            self._interacted = True
            if self.on_first_interaction is not None:
                self.on_first_interaction()

    def handle_action(self, action: Action):
        self._note_interaction()

        if action in MOVE_ACTIONS:
            if self.game.phase is GamePhase.OVER:
                self.game.reset()
            self.game.request_direction(MOVE_ACTIONS[action])
        elif action is Action.START:
            if self.game.phase is not GamePhase.RUNNING:
                self.game.reset()
        elif action is Action.TOGGLE_SOUND:
            if self.on_toggle_sound is not None:
                self.on_toggle_sound()
        elif action is Action.QUIT:
            logger.info("Quit requested.")
            self.quit_requested = True

    def handle_event(self, event) -> Optional[Action]:
        """
        Maps one pygame event. Returns the action taken, if any.
        """
        action = None
        if event.type == pygame.QUIT:
            action = Action.QUIT
        elif event.type == pygame.KEYDOWN:
            action = KEY_BINDINGS.get(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            # Clicking the board starts a game when none is running
            on_board = self.board_rect is None or self.board_rect.collidepoint(event.pos)
            if on_board and self.game.phase is not GamePhase.RUNNING:
                action = Action.START
            else:
                self._note_interaction()
        elif event.type == pygame.FINGERDOWN:
            self._finger_down = (event.x, event.y)
            self._note_interaction()
        elif event.type == pygame.FINGERUP and self._finger_down is not None:
            start_x, start_y = self._finger_down
            self._finger_down = None
            action = swipe_action(event.x - start_x, event.y - start_y)
            if action is None and self.game.phase is not GamePhase.RUNNING:
                action = Action.START # A tap starts the game like a click

        if action is not None:
            self.handle_action(action)
        return action

# --- END OF FILE phosphor_snake/input_mapper.py ---
