import os
import random
from collections import deque

# Headless pygame for every test module
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from phosphor_snake.grid import Direction
from phosphor_snake.snake_game import SnakeGame, GamePhase


class EventRecorder:
    """Listener that keeps every (event, payload) it receives."""

    def __init__(self):
        self.events = []

    def __call__(self, event, payload):
        self.events.append((event, dict(payload)))

    def kinds(self):
        return [event for event, _ in self.events]


def place(game, snake, direction=Direction.RIGHT, fruit=None, score=0):
    """Puts a running game into an exact position. `snake` is tail first."""
    game.snake = deque(snake)
    game.direction = direction
    game.pending_direction = direction
    game.fruit = fruit
    game.score = score
    game.phase = GamePhase.RUNNING
    return game


@pytest.fixture
def game():
    return SnakeGame(rng=random.Random(1234))


@pytest.fixture
def recorder(game):
    rec = EventRecorder()
    game.subscribe(rec)
    return rec
