"""Tests for everglow.audio.sounds: lookups, tone synthesis, music state and the disabled board."""

import sys
from pathlib import Path

import numpy as np
import pygame
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from everglow.audio.sounds import EVENT_EFFECTS, SoundBoard, SoundEffect, find_sound_file, tone_samples
from everglow.game.events import FeedbackEvent


class TestSoundFiles:
    def test_find_sound_file(self, tmp_path):
        assert find_sound_file(tmp_path, "sfx_collision") is None
        (tmp_path / "sfx_collision.ogg").write_bytes(b"")
        assert find_sound_file(tmp_path, "sfx_collision") == tmp_path / "sfx_collision.ogg"

    def test_every_feedback_event_has_an_effect(self):
        assert set(EVENT_EFFECTS) == set(FeedbackEvent)

    def test_effect_volumes(self):
        assert SoundEffect.LANE_SHIFT.value.volume == 0.55
        assert SoundEffect.COLLISION.value.volume == 0.9


class TestToneSamples:
    def test_mono(self):
        samples = tone_samples(440.0, 100, 22050, 1)
        assert samples.shape == (2205,)
        assert samples.dtype == np.int16
        assert np.abs(samples).max() <= 32767

    def test_stereo(self):
        samples = tone_samples(440.0, 50, 44100, 2)
        assert samples.shape == (2205, 2)
        assert np.array_equal(samples[:, 0], samples[:, 1])


class TestDisabledSoundBoard:
    def test_calls_are_noops(self, tmp_path):
        board = SoundBoard(tmp_path, enabled=False)
        assert board.enabled is False
        board.play(SoundEffect.COLLISION)
        board.handle([FeedbackEvent.COLLISION, FeedbackEvent.LANE_SHIFT])
        board.sync_music("playing")
        board.sync_music("paused")
        board.stop_music()
        board.release()


class FakeMusic:
    """Records calls made on pygame.mixer.music."""

    def __init__(self, pos=-1):
        self.pos = pos
        self.calls = []
        self.fail = False

    def get_pos(self):
        return self.pos

    def play(self, loops=0):
        if self.fail:
            raise pygame.error("no device")
        self.calls.append(("play", loops))
        self.pos = 1

    def pause(self):
        self.calls.append(("pause",))

    def unpause(self):
        self.calls.append(("unpause",))

    def stop(self):
        self.calls.append(("stop",))
        self.pos = -1


@pytest.fixture
def music(monkeypatch):
    fake = FakeMusic()
    monkeypatch.setattr(pygame.mixer, "music", fake)
    return fake


@pytest.fixture
def board(tmp_path):
    board = SoundBoard(tmp_path, enabled=False)
    board._music_loaded = True
    return board


class TestMusic:
    def test_first_play_loops_forever(self, board, music):
        board.sync_music("playing")
        assert music.calls == [("play", -1)]

    def test_repeated_state_is_ignored(self, board, music):
        board.sync_music("playing")
        board.sync_music("playing")
        board.ensure_music_playing()
        assert music.calls == [("play", -1)]

    def test_pause_then_resume_unpauses(self, board, music):
        board.sync_music("playing")
        board.sync_music("paused")
        board.sync_music("playing")
        assert music.calls == [("play", -1), ("pause",), ("unpause",)]

    def test_stop_restarts_from_the_top(self, board, music):
        board.sync_music("playing")
        board.sync_music("stopped")
        board.sync_music("playing")
        assert music.calls == [("play", -1), ("stop",), ("play", -1)]

    def test_pause_when_idle_does_nothing(self, board, music):
        board.pause_music()
        assert music.calls == []

    def test_reset_position_stops_even_when_idle(self, board, music):
        board.pause_music(reset_position=True)
        assert music.calls == [("stop",)]

    def test_playback_error_is_reported(self, board, music, capsys):
        music.fail = True
        board.ensure_music_playing()
        assert "[audio] Music playback failed" in capsys.readouterr().out
        music.fail = False
        board.ensure_music_playing()
        assert music.calls == [("play", -1)]

    def test_no_track_means_no_calls(self, tmp_path, music):
        board = SoundBoard(tmp_path, enabled=False)
        board.sync_music("playing")
        board.sync_music("paused")
        assert music.calls == []
