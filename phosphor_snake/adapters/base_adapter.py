# --- START OF FILE phosphor_snake/adapters/base_adapter.py ---

from abc import ABC, abstractmethod
import os
import logging


class BaseAdapter(ABC):
    """ Common plumbing for the collaborators the game talks to (storage, sound, screen). """
    def __init__(self, logger=None):
        # Use the passed logger or one named after the concrete class
        self.logger = logger if logger else logging.getLogger(type(self).__name__)

    def _log(self, level, msg, *args, **kwargs):
        """Logs a message using the adapter's logger."""
        if self.logger:
            self.logger.log(level, msg, *args, **kwargs)

    def _ensure_dir_exists(self, file_path):
        directory = os.path.dirname(file_path)
        if directory and not os.path.exists(directory):
            try:
                os.makedirs(directory, exist_ok=True)
                self._log(logging.DEBUG, f"Created directory: {directory}")
            except OSError as e:
                self._log(logging.ERROR, f"Error creating directory {directory}: {e}", exc_info=True)

    def close(self):
        """Releases resources. Adapters without any keep the default."""
        pass


class HighScoreStore(BaseAdapter):
    """ Durable storage for the single high-score integer. """

    @abstractmethod
    def read_high_score(self) -> int:
        """Returns the stored high score, 0 if absent or invalid. Never raises."""
        pass

    @abstractmethod
    def write_high_score(self, value: int):
        """Stores `value`. Fire-and-forget: failures are logged, never raised."""
        pass


class AudioAdapter(BaseAdapter):
    """ Fire-and-forget tone playback. """

    @abstractmethod
    def play_tone(self, frequency_hz: float, duration_s: float, gain: float, waveform: str):
        pass

    @property
    def available(self) -> bool:
        return True


class RenderAdapter(BaseAdapter):
    """ Consumes one GameSnapshot per frame. Produces no feedback into the simulation. """

    @abstractmethod
    def render(self, snapshot, animation_phase: float, sound_on: bool = True):
        pass

# --- END OF FILE phosphor_snake/adapters/base_adapter.py ---
