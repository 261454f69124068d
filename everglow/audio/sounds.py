from __future__ import annotations

"""
Sound effects and background music on pygame.mixer.

Everything here is best-effort: a missing audio device or sound file turns the
matching call into a no-op instead of interrupting the game loop.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import numpy as np
import pygame

from everglow.game.events import FeedbackEvent

MUSIC_VOLUME = 0.38
SOUND_EXTENSIONS = (".wav", ".ogg")
MUSIC_TRACK = "game_music_loop"


@dataclass(frozen=True)
class EffectSpec:
    resource_name: str
    volume: float
    tone_hz: float  # synthesized fallback when the file is missing
    tone_ms: int


class SoundEffect(Enum):
    LANE_SHIFT = EffectSpec("sfx_lane_shift", 0.55, 660.0, 60)
    COLLISION = EffectSpec("sfx_collision", 0.9, 110.0, 320)
    HIGH_SCORE = EffectSpec("sfx_high_score", 0.8, 880.0, 260)
    UI_CONFIRM = EffectSpec("sfx_ui_confirm", 0.7, 523.0, 90)
    UI_CANCEL = EffectSpec("sfx_ui_back", 0.6, 330.0, 90)


EVENT_EFFECTS = {
    FeedbackEvent.LANE_SHIFT: SoundEffect.LANE_SHIFT,
    FeedbackEvent.COLLISION: SoundEffect.COLLISION,
    FeedbackEvent.HIGH_SCORE: SoundEffect.HIGH_SCORE,
    FeedbackEvent.UI_CONFIRM: SoundEffect.UI_CONFIRM,
    FeedbackEvent.UI_CANCEL: SoundEffect.UI_CANCEL,
}


def find_sound_file(sound_dir: Path, resource_name: str) -> Path | None:
    for ext in SOUND_EXTENSIONS:
        candidate = Path(sound_dir) / f"{resource_name}{ext}"
        if candidate.exists():
            return candidate
    return None


def tone_samples(freq_hz: float, duration_ms: int, sample_rate: int, channels: int) -> np.ndarray:
    """Sine tone with a linear fade-out, as int16 samples shaped for the mixer."""
    n = max(1, int(sample_rate * duration_ms / 1000))
    t = np.arange(n) / sample_rate
    envelope = np.linspace(1.0, 0.0, n)
    wave = (np.sin(2 * np.pi * freq_hz * t) * envelope * 0.6 * 32767).astype(np.int16)
    if channels > 1:
        wave = np.repeat(wave[:, None], channels, axis=1)
    return np.ascontiguousarray(wave)


class SoundBoard:
    """Owns loaded effects and the looping background track."""

    def __init__(self, sound_dir: Path, enabled: bool = True):
        self.sound_dir = Path(sound_dir)
        self.enabled = False
        self._sounds: dict[SoundEffect, pygame.mixer.Sound | None] = {}
        self._music_loaded = False
        self._music_playing = False
        self._music_state = "stopped"

        if not enabled:
            return
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as exc:
            print(f"[audio] Mixer unavailable, continuing without sound: {exc}")
            return

        self.enabled = True
        self._sounds = {effect: self._load_effect(effect.value) for effect in SoundEffect}
        self._music_loaded = self._load_music()

    def _load_effect(self, spec: EffectSpec):
        path = find_sound_file(self.sound_dir, spec.resource_name)
        try:
            if path is not None:
                sound = pygame.mixer.Sound(str(path))
            else:
                sample_rate, _size, channels = pygame.mixer.get_init()
                samples = tone_samples(spec.tone_hz, spec.tone_ms, sample_rate, channels)
                sound = pygame.sndarray.make_sound(samples)
        except (pygame.error, ValueError) as exc:
            print(f"[audio] Could not load {spec.resource_name}: {exc}")
            return None
        sound.set_volume(spec.volume)
        return sound

    def _load_music(self) -> bool:
        path = find_sound_file(self.sound_dir, MUSIC_TRACK)
        if path is None:
            return False
        try:
            pygame.mixer.music.load(str(path))
            pygame.mixer.music.set_volume(MUSIC_VOLUME)
        except pygame.error as exc:
            print(f"[audio] Could not load music {path}: {exc}")
            return False
        return True

    # ── Effects ─────────────────────────

    def play(self, effect: SoundEffect) -> None:
        sound = self._sounds.get(effect)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as exc:
            print(f"[audio] Playback failed for {effect.name}: {exc}")

    def handle(self, events) -> None:
        """Play the effect for each feedback event."""
        for event in events:
            effect = EVENT_EFFECTS.get(event)
            if effect is not None:
                self.play(effect)

    # ── Music ───────────────────────────

    def ensure_music_playing(self) -> None:
        if not self._music_loaded or self._music_playing:
            return
        try:
            if pygame.mixer.music.get_pos() > 0:
                pygame.mixer.music.unpause()
            else:
                pygame.mixer.music.play(loops=-1)
            self._music_playing = True
        except pygame.error as exc:
            print(f"[audio] Music playback failed: {exc}")

    def pause_music(self, reset_position: bool = False) -> None:
        if not self._music_loaded:
            return
        try:
            if reset_position:
                pygame.mixer.music.stop()
            elif self._music_playing:
                pygame.mixer.music.pause()
        except pygame.error as exc:
            print(f"[audio] Could not pause music: {exc}")
        self._music_playing = False

    def stop_music(self) -> None:
        self.pause_music(reset_position=True)

    def sync_music(self, music_state: str) -> None:
        """Follow the session's music state: "playing", "paused" or "stopped"."""
        if music_state == self._music_state:
            return
        self._music_state = music_state
        if music_state == "playing":
            self.ensure_music_playing()
        elif music_state == "paused":
            self.pause_music()
        else:
            self.stop_music()

    def release(self) -> None:
        if not self.enabled:
            return
        self.stop_music()
        self._sounds.clear()
        self._music_loaded = False
        pygame.mixer.quit()
        self.enabled = False
