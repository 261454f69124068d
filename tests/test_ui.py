"""Tests for the pygame front-end helpers that do not need a window."""

import random
import sys
from pathlib import Path

import pygame

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from everglow.app.session import GameSession
from everglow.game.events import FeedbackEvent
from everglow.ui.app_game import handle_key
from everglow.ui.render import COURSE_TOP, HEIGHT, LANE_CENTERS, course_to_pixels, obstacle_color


class TestRenderGeometry:
    def test_course_mapping(self):
        assert course_to_pixels(0.0) == COURSE_TOP
        assert course_to_pixels(1.0) == HEIGHT

    def test_lane_centers_ordered(self):
        assert LANE_CENTERS == sorted(LANE_CENTERS)
        assert len(LANE_CENTERS) == 3

    def test_obstacle_color_stable(self):
        assert obstacle_color(4) == obstacle_color(4)
        assert obstacle_color(0) != obstacle_color(1)


class TestHandleKey:
    def test_menu_keys(self):
        session = GameSession(rng=random.Random(0))
        assert handle_key(session, pygame.K_LEFT) == []
        assert handle_key(session, pygame.K_RETURN) == [FeedbackEvent.UI_CONFIRM]
        assert session.is_playing

    def test_lane_keys(self):
        session = GameSession(rng=random.Random(0))
        session.start()
        assert handle_key(session, pygame.K_a) == [FeedbackEvent.LANE_SHIFT]
        assert handle_key(session, pygame.K_LEFT) == []
        assert handle_key(session, pygame.K_d) == [FeedbackEvent.LANE_SHIFT]
        assert session.state.player_lane == 1

    def test_escape_opens_menu(self):
        session = GameSession(rng=random.Random(0))
        session.start()
        assert handle_key(session, pygame.K_ESCAPE) == [FeedbackEvent.UI_CANCEL]
        assert session.show_menu
