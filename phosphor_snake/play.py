# --- START OF FILE phosphor_snake/play.py ---

import random
import logging
import argparse

import pygame

from phosphor_snake.grid import GRID_SIZE
from phosphor_snake.snake_game import SnakeGame, GameEvent
from phosphor_snake.timing import StepClock
from phosphor_snake.input_mapper import InputMapper
from phosphor_snake.adapters.audio import PygameAudio, NullAudio, SoundBoard
from phosphor_snake.adapters.persistence import FileHighScoreStore, MemoryHighScoreStore, DEFAULT_STORE_PATH
from phosphor_snake.adapters.renderer import PygameRenderer, CELL_SIZE

# --- Basic Logging Configuration ---
log_format = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
logger = logging.getLogger(__name__)

DEFAULT_FPS = 60 # Display refresh target; game speed is independent of it
WINDOW_TITLE = "Phosphor Pit Snake"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Phosphor Pit Snake.")
    parser.add_argument("--grid-size", type=int, default=GRID_SIZE, help=f"Cells per side of the board (default: {GRID_SIZE})")
    parser.add_argument("--cell-size", type=int, default=CELL_SIZE, help=f"Pixels per cell (default: {CELL_SIZE})")
    parser.add_argument("-fps", "--fps", type=int, default=DEFAULT_FPS, help=f"Rendering FPS (default: {DEFAULT_FPS})")
    parser.add_argument("--high-score-file", type=str, default=DEFAULT_STORE_PATH, help=f"Where the high score is kept (default: {DEFAULT_STORE_PATH})")
    parser.add_argument("--no-save", action="store_true", help="Keep the high score in memory only")
    parser.add_argument("--mute", action="store_true", help="Start with sound off")
    parser.add_argument("--seed", type=int, default=None, help="Seed for fruit placement")
    parser.add_argument("-l", "--loglevel", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], help="Set logging level (default: INFO)")
    return parser


class HighScoreWriter:
    """Forwards HIGH_SCORE events to the store."""

    def __init__(self, store):
        self.store = store

    def __call__(self, event: GameEvent, payload):
        if event is GameEvent.HIGH_SCORE:
            self.store.write_high_score(payload["high_score"])


def play(args):
    logger.info("--- Starting Phosphor Pit Snake ---")
    logger.info(f" Grid: {args.grid_size}x{args.grid_size}, cell {args.cell_size}px")
    logger.info(f" Target FPS: {args.fps}")

    store = MemoryHighScoreStore() if args.no_save else FileHighScoreStore(args.high_score_file, background=True)
    rng = random.Random(args.seed) if args.seed is not None else None

    game = SnakeGame(grid_size=args.grid_size, high_score=store.read_high_score(), rng=rng)
    clock_driver = StepClock(game)
    game.subscribe(HighScoreWriter(store))

    pygame.init()
    try:
        screen = pygame.display.set_mode(PygameRenderer.window_size(args.grid_size, args.cell_size))
        pygame.display.set_caption(WINDOW_TITLE)
    except pygame.error as e:
        logger.critical(f"Failed to set Pygame display mode: {e}", exc_info=True)
        store.close()
        pygame.quit()
        return 1

    audio = PygameAudio()
    if not audio.available:
        audio = NullAudio()
    sounds = SoundBoard(audio, sound_on=not args.mute)
    game.subscribe(sounds.on_game_event)

    renderer = PygameRenderer(screen, args.grid_size, args.cell_size)
    mapper = InputMapper(game, on_toggle_sound=sounds.toggle,
                         on_first_interaction=getattr(audio, "ensure_ready", None))
    mapper.board_rect = renderer.board_rect

    frame_clock = pygame.time.Clock()
    try:
        while not mapper.quit_requested:
            for event in pygame.event.get():
                mapper.handle_event(event)

            clock_driver.on_frame(pygame.time.get_ticks())
            renderer.render(game.snapshot(), clock_driver.animation_phase, sounds.sound_on)
            pygame.display.flip()
            frame_clock.tick(args.fps)
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        logger.info(f"Session finished. High score: {game.high_score}")
        store.close()
        audio.close()
        pygame.quit()
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.loglevel.upper(), logging.INFO), format=log_format)
    return play(args)


if __name__ == '__main__':
    raise SystemExit(main())

# --- END OF FILE phosphor_snake/play.py ---
