# --- START OF FILE phosphor_snake/snake_game.py ---

import random
import logging # Use logging for warnings/errors
from collections import deque
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from phosphor_snake.grid import Grid, Direction, Cell, GRID_SIZE

logger = logging.getLogger(__name__)

# ---------------- Constants ---------------- #
INITIAL_SNAKE_LENGTH = 3
SCORE_PER_LEVEL = 4 # Points needed to reach the next level / speed plateau


class GamePhase(Enum):
    IDLE = "idle" # Before the first start
    RUNNING = "running"
    OVER = "over" # After a collision, until the next reset


class GameEvent(Enum):
    RESET = "reset"
    ATE_FRUIT = "ate_fruit"
    HIGH_SCORE = "high_score" # Carries the value to persist
    COLLIDED = "collided"
    GAME_OVER = "game_over" # Terminal event with the final score


class GameSnapshot(NamedTuple):
    """Read-only view of the simulation handed to the presentation layer."""
    snake: Tuple[Cell, ...] # Tail first, head last
    fruit: Optional[Cell]
    direction: Direction
    grid_size: int
    phase: GamePhase
    score: int
    high_score: int
    level: int


Listener = Callable[[GameEvent, Dict], None]


def level_from_score(score: int) -> int:
    """Level shown to the player, derived from the score and never stored."""
    return 1 + score // SCORE_PER_LEVEL


# --------------------- SnakeGame Class --------------------- #
class SnakeGame:
    """
    The simulation engine. Owns the snake, the fruit, the score and the game phase.

    The snake is a deque of cells ordered tail first, head last. It only changes
    through step(). Every observable change is announced to subscribed listeners
    (persistence, audio, HUD) as a GameEvent; a failing listener is logged and
    never interrupts the tick.
    """

    def __init__(self, grid_size: int = GRID_SIZE, high_score: int = 0, rng: Optional[random.Random] = None):
        """
        Args:
            grid_size (int): Cells per side of the board.
            high_score (int): Best score from previous sessions.
            rng (random.Random): Source for fruit placement. Pass a seeded instance for reproducible games.
        """
        self.grid = Grid(grid_size)
        self.rng = rng if rng is not None else random.Random()
        self.high_score = max(0, int(high_score))
        self._listeners: List[Listener] = []
        # Fruit placement draws this many candidates before scanning for free cells
        self.spawn_attempt_limit = self.grid.area * 2

        # Internal game state variables (initialized in reset)
        self.snake = deque()
        self.fruit: Optional[Cell] = None
        self.direction = Direction.RIGHT
        self.pending_direction = Direction.RIGHT
        self.score = 0
        self.phase = GamePhase.IDLE
        self._place_start_snake()

    # --- Events ---

    def subscribe(self, listener: Listener):
        """Registers `listener(event, payload)` for every GameEvent."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: GameEvent, **payload):
        for listener in list(self._listeners):
            try:
                listener(event, payload)
            except Exception as e:
                logger.error(f"Listener {listener!r} failed on {event.value}: {e}", exc_info=True)

    # --- Core Game Methods ---

    @property
    def head(self) -> Cell:
        return self.snake[-1]

    @property
    def level(self) -> int:
        return level_from_score(self.score)

    @property
    def running(self) -> bool:
        return self.phase is GamePhase.RUNNING

    def _place_start_snake(self):
        # Three segments centered on the board, heading right
        mid = self.grid.center()
        self.snake = deque((mid - i, mid) for i in range(INITIAL_SNAKE_LENGTH - 1, -1, -1))

    def reset(self):
        """Starts a fresh game: centered 3-segment snake moving right, score 0, new fruit."""
        self._place_start_snake()
        self.direction = Direction.RIGHT
        self.pending_direction = Direction.RIGHT
        self.score = 0
        self.phase = GamePhase.RUNNING
        self.spawn_fruit()
        logger.info(f"New game started on a {self.grid.size}x{self.grid.size} grid. High score: {self.high_score}")
        self._emit(GameEvent.RESET)

    def request_direction(self, direction: Direction) -> bool:
        """
        Queues `direction` for the next step.
        Ignored unless the game is running, and ignored when it is the opposite of
        the direction applied on the last step (the pending one does not count).
        Returns True if the request was accepted.
        """
        if self.phase is not GamePhase.RUNNING:
            return False
        if direction is self.direction.opposite:
            logger.debug(f"Rejected reversal from {self.direction.name} to {direction.name}")
            return False
        self.pending_direction = direction
        return True

    def step(self):
        """
        Advances the snake by one cell. Does nothing unless the game is running.
        Collision is checked against the whole body, tail included, before the
        tail moves away.
        """
        if self.phase is not GamePhase.RUNNING:
            return

        self.direction = self.pending_direction
        next_head = self.grid.neighbour(self.head, self.direction)

        # --- Check Collisions ---
        if not self.grid.in_bounds(next_head):
            self._emit(GameEvent.COLLIDED, cell=next_head, reason="wall")
            self.end_game()
            return
        if next_head in self.snake:
            self._emit(GameEvent.COLLIDED, cell=next_head, reason="self")
            self.end_game()
            return

        # --- Move Snake ---
        self.snake.append(next_head)

        if next_head == self.fruit:
            self.score += 1
            logger.debug(f"Fruit eaten at {next_head}. Score: {self.score}")
            self._update_high_score()
            self.spawn_fruit()
            self._emit(GameEvent.ATE_FRUIT, score=self.score)
        else:
            # No fruit, so the tail moves along
            self.snake.popleft()

    def end_game(self):
        """Moves to the terminal phase and announces the final score."""
        self.phase = GamePhase.OVER
        self._update_high_score()
        logger.info(f"Game over. Score: {self.score}, high score: {self.high_score}")
        self._emit(GameEvent.GAME_OVER, score=self.score, high_score=self.high_score)

    def _update_high_score(self):
        if self.score > self.high_score:
            self.high_score = self.score
            self._emit(GameEvent.HIGH_SCORE, high_score=self.high_score)

    # --- Fruit ---

    def spawn_fruit(self):
        """
        Places the fruit on a uniformly random cell not covered by the snake.
        Draws random candidates first; after spawn_attempt_limit misses it picks from
        the list of free cells instead. A full board leaves no fruit at all.
        """
        size = self.grid.size
        for _ in range(self.spawn_attempt_limit):
            candidate = (self.rng.randrange(size), self.rng.randrange(size))
            if candidate not in self.snake:
                self.fruit = candidate
                return

        free = self.grid.free_cells(self.snake)
        if not free:
            logger.warning("No free cell left for fruit. The board is full.")
            self.fruit = None
            return
        logger.warning(f"Random fruit placement gave up after {self.spawn_attempt_limit} draws, picking from {len(free)} free cells.")
        self.fruit = self.rng.choice(free)

    # --- Read-only views ---

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            snake=tuple(self.snake),
            fruit=self.fruit,
            direction=self.direction,
            grid_size=self.grid.size,
            phase=self.phase,
            score=self.score,
            high_score=self.high_score,
            level=self.level,
        )

# --- END OF FILE phosphor_snake/snake_game.py ---
