"""
External collaborators of the game: durable high score, tone playback and drawing.
"""

from .base_adapter import BaseAdapter, HighScoreStore, AudioAdapter, RenderAdapter

__all__ = ['BaseAdapter', 'HighScoreStore', 'AudioAdapter', 'RenderAdapter']
