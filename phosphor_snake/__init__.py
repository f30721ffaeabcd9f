"""
Phosphor Pit Snake: a single-screen arcade snake game.

The simulation (grid, engine, step clock) has no pygame dependency. Rendering,
sound, storage and input live behind the adapters in `phosphor_snake.adapters`.
"""

from phosphor_snake.grid import Grid, Direction, GRID_SIZE
from phosphor_snake.snake_game import SnakeGame, GamePhase, GameEvent, GameSnapshot, level_from_score
from phosphor_snake.timing import StepClock, step_duration_ms

__all__ = [
    'Grid', 'Direction', 'GRID_SIZE',
    'SnakeGame', 'GamePhase', 'GameEvent', 'GameSnapshot', 'level_from_score',
    'StepClock', 'step_duration_ms',
]
