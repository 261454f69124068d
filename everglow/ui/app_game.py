#!/usr/bin/env python3
from __future__ import annotations
"""
EVERGLOW: endless lane dodge
Slide between three lanes, let the blocks fall past, chase the best score.

Requirements:
    pip install pygame numpy
"""

import random
import sys
import time

import pygame

from everglow.app.session import GameSession
from everglow.audio.sounds import SoundBoard
from everglow.config.loader import load_settings
from everglow.config.schema import Settings
from everglow.game.engine import BASE_SPEED
from everglow.storage.high_score import HighScoreStore
from everglow.ui.render import (
    WIDTH, HEIGHT,
    draw_course,
    draw_game_over,
    draw_menu,
    draw_scoreboard,
    make_default_stripes,
)

LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE)
MENU_KEYS = (pygame.K_ESCAPE, pygame.K_m)


def _load_fonts():
    try:
        return {
            "score": pygame.font.SysFont("Courier New", 30, bold=True),
            "title": pygame.font.SysFont("Courier New", 52, bold=True),
            "sub": pygame.font.SysFont("Courier New", 17),
            "tiny": pygame.font.SysFont("Courier New", 12),
        }
    except Exception:
        return {k: pygame.font.SysFont(None, v) for k, v in {
            "score": 30, "title": 52, "sub": 17, "tiny": 12,
        }.items()}


def handle_key(session: GameSession, key: int) -> list:
    """Translate one key press into a session transition; returns its feedback events."""
    if session.show_menu:
        if key in CONFIRM_KEYS:
            return session.start()
        return []
    if key in MENU_KEYS:
        return session.open_menu()
    if session.is_game_over:
        if key in CONFIRM_KEYS:
            return session.restart()
        return []
    if key in LEFT_KEYS:
        return session.move(-1)
    if key in RIGHT_KEYS:
        return session.move(1)
    return []


def run_game(settings: Settings) -> int:
    """Open the window and play until the user quits. Returns the best score."""
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("EVERGLOW")
    clock = pygame.time.Clock()
    fonts = _load_fonts()

    store = HighScoreStore(settings.paths.high_score_file)
    session = GameSession.from_store(store, rng=random.Random(time.time_ns()))
    audio = SoundBoard(settings.paths.sound_dir, enabled=settings.audio_enabled)
    print(f"[game] High score {session.state.high_score} loaded from {store.path}")

    stripes = make_default_stripes()
    blink = 0
    running = True

    pygame.key.set_repeat(0, 0)
    clock.tick(settings.fps)

    try:
        while running:
            delta_seconds = clock.tick(settings.fps) / 1000.0
            blink += 1

            # ── Events ──────────────────────
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_q:
                        running = False
                    else:
                        audio.handle(handle_key(session, event.key))

            # ── Update ──────────────────────
            audio.handle(session.tick(delta_seconds))
            audio.sync_music(session.music_state)
            if session.is_playing:
                for s in stripes:
                    s.update(session.state.speed / BASE_SPEED)

            # ── Draw ────────────────────────
            state = session.state
            draw_course(screen, state, stripes)
            draw_scoreboard(screen, fonts, state, session.is_highlighting_high_score)
            if session.show_menu:
                draw_menu(screen, fonts, state.high_score, blink)
            elif session.is_game_over:
                draw_game_over(screen, fonts, state, session.is_new_high_score, blink)

            pygame.display.flip()
    finally:
        session.close()
        audio.release()
        pygame.quit()

    print(f"[game] Closed. Best score: {session.state.high_score}")
    return session.state.high_score


def main():
    settings = load_settings()
    run_game(settings)
    sys.exit(0)


if __name__ == "__main__":
    main()
