# --- START OF FILE phosphor_snake/adapters/audio.py ---

import threading
import logging
from typing import Callable, Dict

import numpy as np
import pygame

from phosphor_snake.adapters.base_adapter import AudioAdapter
from phosphor_snake.snake_game import GameEvent

logger = logging.getLogger(__name__)

# ---------------- Constants ---------------- #
SAMPLE_RATE = 22050
WAVEFORMS = ("sine", "square", "triangle", "sawtooth")
ENVELOPE_FLOOR = 0.0001 # Exponential ramps cannot start from zero
ATTACK_S = 0.01
RELEASE_TAIL_S = 0.02 # Oscillator keeps running briefly after the decay

# (frequency_hz, duration_s, gain, waveform, delay_s)
EAT_CUE = ((610, 0.06, 0.08, "square", 0.0), (780, 0.05, 0.07, "triangle", 0.036))
GAME_OVER_CUE = ((220, 0.18, 0.1, "sawtooth", 0.0), (140, 0.22, 0.08, "triangle", 0.07))
SOUND_ON_CUE = ((520, 0.05, 0.06, "triangle", 0.0),)


def synthesize_tone(frequency_hz, duration_s, gain, waveform="square", sample_rate=SAMPLE_RATE) -> np.ndarray:
    """
    Builds a mono int16 buffer for one tone.
    Envelope rises exponentially to `gain` in ATTACK_S, decays to ENVELOPE_FLOOR at
    `duration_s`, and the buffer runs RELEASE_TAIL_S past that.
    """
    if waveform not in WAVEFORMS:
        raise ValueError(f"Unknown waveform '{waveform}'. Expected one of {WAVEFORMS}")
    gain = max(ENVELOPE_FLOOR, min(1.0, float(gain)))
    duration_s = max(ATTACK_S * 2, float(duration_s))

    n = max(1, int(sample_rate * (duration_s + RELEASE_TAIL_S)))
    t = np.arange(n) / sample_rate
    cycles = t * frequency_hz

    if waveform == "sine":
        wave = np.sin(2 * np.pi * cycles)
    elif waveform == "square":
        wave = np.where((cycles % 1.0) < 0.5, 1.0, -1.0)
    elif waveform == "triangle":
        wave = 4.0 * np.abs((cycles % 1.0) - 0.5) - 1.0
    else: # sawtooth
        wave = 2.0 * (cycles % 1.0) - 1.0

    # Exponential attack then exponential decay, silent after the decay ends
    attack = ENVELOPE_FLOOR * (gain / ENVELOPE_FLOOR) ** np.clip(t / ATTACK_S, 0.0, 1.0)
    decay_progress = np.clip((t - ATTACK_S) / (duration_s - ATTACK_S), 0.0, 1.0)
    decay = gain * (ENVELOPE_FLOOR / gain) ** decay_progress
    envelope = np.where(t < ATTACK_S, attack, decay)
    envelope[t > duration_s] = 0.0

    return (wave * envelope * 32767).astype(np.int16)


class NullAudio(AudioAdapter):
    """Used when no audio device is available. Every call is a no-op."""

    def play_tone(self, frequency_hz, duration_s, gain, waveform):
        pass

    @property
    def available(self) -> bool:
        return False


class PygameAudio(AudioAdapter):
    """Plays synthesized tones through pygame.mixer."""

    def __init__(self, logger=None):
        super().__init__(logger)
        self._available = False
        self._channels = 1
        self._sample_rate = SAMPLE_RATE
        self._cache: Dict[tuple, "pygame.mixer.Sound"] = {}
        self.ensure_ready()

    def ensure_ready(self) -> bool:
        """Initializes the mixer on first use. Safe to call repeatedly."""
        if self._available:
            return True
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=512)
            self._sample_rate, _, self._channels = pygame.mixer.get_init()
            self._available = True
            self._log(logging.DEBUG, f"Mixer ready: {self._sample_rate} Hz, {self._channels} channel(s)")
        except pygame.error as e:
            self._log(logging.WARNING, f"Audio unavailable, continuing without sound: {e}")
            self._available = False
        return self._available

    @property
    def available(self) -> bool:
        return self._available

    def _sound_for(self, frequency_hz, duration_s, gain, waveform):
        key = (frequency_hz, duration_s, gain, waveform)
        sound = self._cache.get(key)
        if sound is None:
            samples = synthesize_tone(frequency_hz, duration_s, gain, waveform, self._sample_rate)
            if self._channels > 1:
                # Mixer expects one column per channel
                samples = np.repeat(samples[:, np.newaxis], self._channels, axis=1)
            sound = pygame.sndarray.make_sound(np.ascontiguousarray(samples))
            self._cache[key] = sound
        return sound

    def play_tone(self, frequency_hz, duration_s, gain, waveform):
        if not self._available:
            return
        if waveform not in WAVEFORMS:
            # May run on a timer thread, so never raise from here
            self._log(logging.WARNING, f"Ignoring tone with unknown waveform '{waveform}'")
            return
        try:
            self._sound_for(frequency_hz, duration_s, gain, waveform).play()
        except pygame.error as e:
            self._log(logging.WARNING, f"Could not play tone {frequency_hz} Hz: {e}")

    def close(self):
        if self._available and pygame.mixer.get_init() is not None:
            pygame.mixer.quit()
        self._available = False


def _schedule_with_timer(delay_s: float, callback: Callable[[], None]):
    timer = threading.Timer(delay_s, callback)
    timer.daemon = True
    timer.start()


class SoundBoard:
    """
    Maps game events to tone cues and owns the mute flag.

    The mute flag is checked right before each tone starts, so a delayed tone
    queued before muting stays silent. Tones already playing are left alone.
    """

    def __init__(self, audio: AudioAdapter, sound_on: bool = True,
                 schedule: Callable[[float, Callable[[], None]], None] = _schedule_with_timer):
        self.audio = audio
        self.sound_on = sound_on
        self._schedule = schedule

    def on_game_event(self, event: GameEvent, payload: Dict):
        if event is GameEvent.ATE_FRUIT:
            self.play_cue(EAT_CUE)
        elif event is GameEvent.GAME_OVER:
            self.play_cue(GAME_OVER_CUE)

    def play_cue(self, cue):
        for frequency_hz, duration_s, gain, waveform, delay_s in cue:
            if delay_s > 0:
                self._schedule(delay_s, lambda f=frequency_hz, d=duration_s, g=gain, w=waveform: self._play(f, d, g, w))
            else:
                self._play(frequency_hz, duration_s, gain, waveform)

    def _play(self, frequency_hz, duration_s, gain, waveform):
        if not self.sound_on:
            return
        self.audio.play_tone(frequency_hz, duration_s, gain, waveform)

    def toggle(self) -> bool:
        """Flips the mute flag. Switching sound on plays a short confirmation tone."""
        self.sound_on = not self.sound_on
        logger.info(f"Sound {'on' if self.sound_on else 'off'}")
        if self.sound_on:
            self.play_cue(SOUND_ON_CUE)
        return self.sound_on

# --- END OF FILE phosphor_snake/adapters/audio.py ---
