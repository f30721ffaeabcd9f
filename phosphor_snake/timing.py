# --- START OF FILE phosphor_snake/timing.py ---

import logging
from typing import Dict

from phosphor_snake.snake_game import SnakeGame, GameEvent, SCORE_PER_LEVEL

logger = logging.getLogger(__name__)

# ---------------- Constants ---------------- #
BASE_STEP_MS = 165 # Step duration at level 1
MIN_STEP_MS = 70 # Fastest the snake will ever move
SPEED_STEP = 7 # Milliseconds shaved off per level


def step_duration_ms(score: int) -> int:
    """Milliseconds per logical step. Drops by SPEED_STEP every SCORE_PER_LEVEL points, floored at MIN_STEP_MS."""
    decrease = (score // SCORE_PER_LEVEL) * SPEED_STEP
    return max(MIN_STEP_MS, BASE_STEP_MS - decrease)


class StepClock:
    """
    Converts variable-rate frame callbacks into fixed-duration game steps.

    The host calls on_frame(timestamp_ms) once per displayed frame. Elapsed time
    goes into an accumulator which is drained in whole steps while the game runs.
    """

    def __init__(self, game: SnakeGame):
        self.game = game
        self.accumulator = 0.0
        self.last_timestamp = None
        self.animation_phase = 0.0 # Free-running value for pulsing effects
        # A new game starts with an empty accumulator
        game.subscribe(self._on_game_event)

    def _on_game_event(self, event: GameEvent, payload: Dict):
        if event is GameEvent.RESET:
            self.accumulator = 0.0

    def clear(self):
        """Forgets the previous frame so the next one counts as the first."""
        self.accumulator = 0.0
        self.last_timestamp = None

    def on_frame(self, timestamp_ms: float) -> int:
        """
        Feeds one frame timestamp. Runs zero or more game steps.
        Returns the number of steps taken during this frame.
        """
        if self.last_timestamp is None:
            self.last_timestamp = timestamp_ms
        delta = timestamp_ms - self.last_timestamp
        self.last_timestamp = timestamp_ms
        self.animation_phase = timestamp_ms

        if delta < 0:
            logger.warning(f"Frame timestamp went backwards by {-delta} ms. Ignoring this frame's delta.")
            delta = 0

        if not self.game.running:
            return 0

        self.accumulator += delta
        current_step_ms = step_duration_ms(self.game.score)

        steps = 0
        while self.accumulator >= current_step_ms:
            self.game.step()
            self.accumulator -= current_step_ms
            steps += 1
            # Never step a finished game
            if not self.game.running:
                break

        return steps

# --- END OF FILE phosphor_snake/timing.py ---
