import logging

import numpy as np
import pygame
import pytest

from phosphor_snake.adapters.audio import (
    synthesize_tone, SoundBoard, NullAudio, PygameAudio, EAT_CUE, GAME_OVER_CUE, SOUND_ON_CUE,
    SAMPLE_RATE, RELEASE_TAIL_S, WAVEFORMS,
)
from phosphor_snake.snake_game import GameEvent


class RecordingAudio(NullAudio):
    def __init__(self):
        super().__init__()
        self.played = []

    def play_tone(self, frequency_hz, duration_s, gain, waveform):
        self.played.append((frequency_hz, duration_s, gain, waveform))


class ManualScheduler:
    """Holds delayed callbacks until the test runs them."""

    def __init__(self):
        self.pending = []

    def __call__(self, delay_s, callback):
        self.pending.append((delay_s, callback))

    def run_all(self):
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


@pytest.mark.parametrize("waveform", WAVEFORMS)
def test_tone_length_and_peak(waveform):
    samples = synthesize_tone(440, 0.1, 0.08, waveform)
    assert samples.dtype == np.int16
    assert len(samples) == int(SAMPLE_RATE * (0.1 + RELEASE_TAIL_S))
    assert np.abs(samples).max() <= int(0.08 * 32767) + 1
    assert np.abs(samples).max() > 0


def test_tone_is_silent_after_duration():
    samples = synthesize_tone(300, 0.05, 0.1, "square")
    tail = samples[int(SAMPLE_RATE * 0.05) + 2:]
    assert not tail.any()


def test_unknown_waveform_rejected():
    with pytest.raises(ValueError):
        synthesize_tone(440, 0.1, 0.1, "kazoo")


def test_eat_cue_plays_immediately_then_delayed():
    audio = RecordingAudio()
    scheduler = ManualScheduler()
    board = SoundBoard(audio, schedule=scheduler)
    board.on_game_event(GameEvent.ATE_FRUIT, {"score": 1})
    assert audio.played == [(610, 0.06, 0.08, "square")]
    assert [delay for delay, _ in scheduler.pending] == [0.036]
    scheduler.run_all()
    assert audio.played[-1] == (780, 0.05, 0.07, "triangle")


def test_game_over_cue():
    audio = RecordingAudio()
    scheduler = ManualScheduler()
    board = SoundBoard(audio, schedule=scheduler)
    board.on_game_event(GameEvent.GAME_OVER, {"score": 0, "high_score": 0})
    scheduler.run_all()
    assert audio.played == [cue[:4] for cue in GAME_OVER_CUE]


def test_muted_board_plays_nothing():
    audio = RecordingAudio()
    board = SoundBoard(audio, sound_on=False, schedule=ManualScheduler())
    board.on_game_event(GameEvent.ATE_FRUIT, {"score": 1})
    assert audio.played == []


def test_mute_checked_before_delayed_tone_starts():
    audio = RecordingAudio()
    scheduler = ManualScheduler()
    board = SoundBoard(audio, schedule=scheduler)
    board.on_game_event(GameEvent.ATE_FRUIT, {"score": 1})
    board.toggle()
    scheduler.run_all()
    assert audio.played == [EAT_CUE[0][:4]]


def test_toggle_on_plays_confirmation():
    audio = RecordingAudio()
    board = SoundBoard(audio, sound_on=False, schedule=ManualScheduler())
    assert board.toggle() is True
    assert audio.played == [SOUND_ON_CUE[0][:4]]
    assert board.toggle() is False
    assert len(audio.played) == 1


def test_other_events_are_silent():
    audio = RecordingAudio()
    board = SoundBoard(audio, schedule=ManualScheduler())
    board.on_game_event(GameEvent.RESET, {})
    board.on_game_event(GameEvent.HIGH_SCORE, {"high_score": 3})
    assert audio.played == []


def test_null_audio_is_unavailable():
    audio = NullAudio()
    assert not audio.available
    audio.play_tone(440, 0.1, 0.1, "sine")


class FakeSound:
    def __init__(self, samples):
        self.samples = samples
        self.plays = 0

    def play(self):
        self.plays += 1


@pytest.fixture
def real_mixer():
    yield
    if pygame.mixer.get_init() is not None:
        pygame.mixer.quit()


@pytest.fixture
def stereo_mixer(monkeypatch):
    """Pretends a 2-channel mixer is running and keeps every Sound that gets built."""
    built = []

    def make_sound(samples):
        sound = FakeSound(samples)
        built.append(sound)
        return sound

    def no_init(*args, **kwargs):
        raise AssertionError("mixer already running, init must not be called")

    monkeypatch.setattr(pygame.mixer, "get_init", lambda: (22050, -16, 2))
    monkeypatch.setattr(pygame.mixer, "init", no_init)
    monkeypatch.setattr(pygame.sndarray, "make_sound", make_sound)
    return built


def test_pygame_audio_plays_and_caches_one_sound_per_tone(real_mixer):
    audio = PygameAudio()
    assert audio.available
    assert pygame.mixer.get_init() is not None

    audio.play_tone(440, 0.05, 0.05, "square")
    audio.play_tone(440, 0.05, 0.05, "square")
    audio.play_tone(660, 0.05, 0.05, "triangle")
    assert len(audio._cache) == 2


def test_pygame_audio_is_silent_after_close(real_mixer):
    audio = PygameAudio()
    audio.play_tone(440, 0.05, 0.05, "sine")
    audio.close()
    assert not audio.available
    assert pygame.mixer.get_init() is None

    audio.play_tone(880, 0.05, 0.05, "sine")
    assert len(audio._cache) == 1


def test_mixer_failure_leaves_audio_unavailable(monkeypatch):
    def broken_init(*args, **kwargs):
        raise pygame.error("No available audio device")

    def no_sound(samples):
        raise AssertionError("no sound should be built without a mixer")

    monkeypatch.setattr(pygame.mixer, "get_init", lambda: None)
    monkeypatch.setattr(pygame.mixer, "init", broken_init)
    monkeypatch.setattr(pygame.sndarray, "make_sound", no_sound)

    audio = PygameAudio()
    assert not audio.available
    assert not audio.ensure_ready()
    audio.play_tone(440, 0.05, 0.05, "square")
    assert audio._cache == {}


def test_stereo_mixer_gets_one_column_per_channel(stereo_mixer):
    audio = PygameAudio()
    assert audio.available
    audio.play_tone(610, 0.06, 0.08, "square")

    assert len(stereo_mixer) == 1
    samples = stereo_mixer[0].samples
    assert samples.ndim == 2
    assert samples.shape[1] == 2
    assert samples.shape[0] == int(22050 * (0.06 + RELEASE_TAIL_S))
    assert np.array_equal(samples[:, 0], samples[:, 1])
    assert samples.flags["C_CONTIGUOUS"]
    assert stereo_mixer[0].plays == 1


def test_unknown_waveform_is_logged_not_raised(stereo_mixer, caplog):
    audio = PygameAudio()
    with caplog.at_level(logging.WARNING):
        audio.play_tone(440, 0.05, 0.05, "kazoo")
    assert stereo_mixer == []
    assert "kazoo" in caplog.text
