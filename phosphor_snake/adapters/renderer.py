# --- START OF FILE phosphor_snake/adapters/renderer.py ---

import math
import logging

import pygame

from phosphor_snake.adapters.base_adapter import RenderAdapter
from phosphor_snake.grid import Direction
from phosphor_snake.snake_game import GamePhase, GameSnapshot

# ---------------- Constants ---------------- #
CELL_SIZE = 20 # Pixels per grid cell
HUD_HEIGHT = 36 # Strip above the board for score / level / sound
BACKGROUND_COLOR = (6, 11, 8)
HUD_COLOR = (10, 20, 14)
GRID_LINE_COLOR = (58, 194, 136, 31) # ~12% alpha
FRUIT_COLOR = (255, 142, 47)
FRUIT_GLOW_COLOR = (255, 132, 40, 90)
FRUIT_HIGHLIGHT_COLOR = (255, 238, 204, 166)
HEAD_COLOR = (180, 255, 121)
HEAD_GLOW_COLOR = (175, 255, 122, 80)
BODY_COLOR = (89, 209, 127)
BODY_GLOW_COLOR = (100, 231, 150, 50)
HEAD_EYE_COLOR = (23, 36, 19)
BODY_EYE_COLOR = (22, 33, 24, 128)
TEXT_COLOR = (200, 255, 214)
LABEL_COLOR = (255, 142, 47)
OVERLAY_COLOR = (0, 0, 0, 170)
FONT_SIZE = 20
TITLE_FONT_SIZE = 34
EYE_SIZE = 3


def fruit_pulse(animation_phase: float) -> float:
    """Scale factor for the fruit, oscillating between 0.71 and 0.97."""
    return 0.84 + math.sin(animation_phase / 140) * 0.13


def overlay_lines(snapshot: GameSnapshot):
    """Text shown over the board as (label, headline, hint), or None while the game runs."""
    if snapshot.phase is GamePhase.IDLE:
        return ("INSERT CREDIT", "PHOSPHOR PIT SNAKE", "Press START to begin.")
    if snapshot.phase is GamePhase.OVER:
        return ("SYSTEM FAIL", f"{snapshot.score} PTS", "Press START or SPACE to run it back.")
    return None


def hud_text(snapshot: GameSnapshot, sound_on: bool) -> str:
    return (f"SCORE {snapshot.score}   HIGH {snapshot.high_score}   LEVEL {snapshot.level}"
            f"   SOUND: {'ON' if sound_on else 'OFF'}")


class PygameRenderer(RenderAdapter):
    """
    Draws the board, fruit, snake, HUD strip and overlay onto a pygame surface.
    Reads a GameSnapshot and never touches the game itself.
    """

    def __init__(self, surface: pygame.Surface, grid_size: int, cell_size: int = CELL_SIZE, logger=None):
        super().__init__(logger)
        if cell_size < 1:
            raise ValueError(f"Cell size must be positive, got {cell_size}")
        self.surface = surface
        self.grid_size = grid_size
        self.cell_size = cell_size
        self.board_size = grid_size * cell_size
        self.board_rect = pygame.Rect(0, HUD_HEIGHT, self.board_size, self.board_size)

        if not pygame.font.get_init():
            pygame.font.init()
        try:
            self.font = pygame.font.SysFont('Courier New', FONT_SIZE, bold=True)
            self.title_font = pygame.font.SysFont('Courier New', TITLE_FONT_SIZE, bold=True)
        except (pygame.error, OSError):
            self._log(logging.WARNING, "System font not found. Using default Pygame font.")
            self.font = pygame.font.Font(None, FONT_SIZE + 4)
            self.title_font = pygame.font.Font(None, TITLE_FONT_SIZE + 4)

        # Grid lines never change, draw them once
        self._grid_layer = self._build_grid_layer()

    @staticmethod
    def window_size(grid_size: int, cell_size: int = CELL_SIZE):
        board = grid_size * cell_size
        return (board, board + HUD_HEIGHT)

    def cell_rect(self, cell, inset=0) -> pygame.Rect:
        x, y = cell
        return pygame.Rect(self.board_rect.x + x * self.cell_size + inset,
                           self.board_rect.y + y * self.cell_size + inset,
                           self.cell_size - 2 * inset, self.cell_size - 2 * inset)

    def _build_grid_layer(self) -> pygame.Surface:
        layer = pygame.Surface((self.board_size + 1, self.board_size + 1), pygame.SRCALPHA)
        for i in range(self.grid_size + 1):
            pos = i * self.cell_size
            pygame.draw.line(layer, GRID_LINE_COLOR, (pos, 0), (pos, self.board_size))
            pygame.draw.line(layer, GRID_LINE_COLOR, (0, pos), (self.board_size, pos))
        return layer

    def _glow(self, rect: pygame.Rect, color, spread: int):
        """Soft halo behind a cell: a translucent rect grown by `spread` pixels."""
        halo = pygame.Surface((rect.width + spread * 2, rect.height + spread * 2), pygame.SRCALPHA)
        pygame.draw.rect(halo, color, halo.get_rect(), border_radius=spread)
        self.surface.blit(halo, (rect.x - spread, rect.y - spread))

    # --- Drawing ---

    def render(self, snapshot: GameSnapshot, animation_phase: float, sound_on: bool = True):
        self.surface.fill(HUD_COLOR)
        self.surface.fill(BACKGROUND_COLOR, self.board_rect)
        self.surface.blit(self._grid_layer, self.board_rect.topleft)

        if snapshot.fruit is not None:
            self.draw_fruit(snapshot.fruit, animation_phase)
        self.draw_snake(snapshot.snake, snapshot.direction)
        self.draw_hud(snapshot, sound_on)

        lines = overlay_lines(snapshot)
        if lines is not None:
            self.draw_overlay(*lines)

    def draw_fruit(self, fruit, animation_phase: float):
        size = self.cell_size * fruit_pulse(animation_phase)
        offset = (self.cell_size - size) / 2
        cell = self.cell_rect(fruit)
        rect = pygame.Rect(round(cell.x + offset), round(cell.y + offset), max(1, round(size)), max(1, round(size)))

        self._glow(rect, FRUIT_GLOW_COLOR, max(2, self.cell_size // 4))
        pygame.draw.rect(self.surface, FRUIT_COLOR, rect)

        highlight = pygame.Surface((max(1, round(size * 0.26)), max(1, round(size * 0.26))), pygame.SRCALPHA)
        highlight.fill(FRUIT_HIGHLIGHT_COLOR)
        self.surface.blit(highlight, (rect.x + round(size * 0.2), rect.y + round(size * 0.2)))

    def draw_snake(self, snake, direction: Direction):
        last = len(snake) - 1
        for index, segment in enumerate(snake):
            is_head = index == last
            rect = self.cell_rect(segment, inset=1)

            self._glow(rect, HEAD_GLOW_COLOR if is_head else BODY_GLOW_COLOR, 4 if is_head else 2)
            pygame.draw.rect(self.surface, HEAD_COLOR if is_head else BODY_COLOR, rect)
            self._draw_eyes(self.cell_rect(segment), direction, HEAD_EYE_COLOR if is_head else BODY_EYE_COLOR)

    def _draw_eyes(self, cell: pygame.Rect, direction: Direction, color):
        # Every segment gets the marks; the head's are the dark, visible ones
        size = self.cell_size
        if direction in (Direction.LEFT, Direction.RIGHT):
            eye_x = cell.x + size - 7 if direction is Direction.RIGHT else cell.x + 4
            eyes = ((eye_x, cell.y + 6), (eye_x, cell.y + size - 9))
        else:
            eye_y = cell.y + size - 7 if direction is Direction.DOWN else cell.y + 4
            eyes = ((cell.x + 6, eye_y), (cell.x + size - 9, eye_y))

        eye = pygame.Surface((EYE_SIZE, EYE_SIZE), pygame.SRCALPHA)
        eye.fill(color)
        for pos in eyes:
            self.surface.blit(eye, pos)

    def draw_hud(self, snapshot: GameSnapshot, sound_on: bool):
        text = self.font.render(hud_text(snapshot, sound_on), True, TEXT_COLOR)
        self.surface.blit(text, (8, (HUD_HEIGHT - text.get_height()) // 2))

    def draw_overlay(self, label: str, headline: str, hint: str):
        shade = pygame.Surface(self.board_rect.size, pygame.SRCALPHA)
        shade.fill(OVERLAY_COLOR)
        self.surface.blit(shade, self.board_rect.topleft)

        center_x = self.board_rect.centerx
        center_y = self.board_rect.centery
        rows = (
            (self.font.render(label, True, LABEL_COLOR), -TITLE_FONT_SIZE),
            (self.title_font.render(headline, True, HEAD_COLOR), 0),
            (self.font.render(hint, True, TEXT_COLOR), TITLE_FONT_SIZE),
        )
        for surface, dy in rows:
            self.surface.blit(surface, surface.get_rect(center=(center_x, center_y + dy)))

# --- END OF FILE phosphor_snake/adapters/renderer.py ---
