from __future__ import annotations

"""Pygame rendering primitives for the Everglow play-field and overlays."""

import pygame

from everglow.game.engine import (
    LANE_COUNT,
    OBSTACLE_HEIGHT_FRACTION,
    PLAYER_CENTER_Y,
    PLAYER_RADIUS_FRACTION,
    GameState,
)

WIDTH, HEIGHT = 480, 720

HUD_H = 72
COURSE_TOP = HUD_H
COURSE_H = HEIGHT - HUD_H
ROAD_LEFT = 60
ROAD_RIGHT = 420
LANE_WIDTH = (ROAD_RIGHT - ROAD_LEFT) // LANE_COUNT
LANE_CENTERS = [ROAD_LEFT + LANE_WIDTH * i + LANE_WIDTH // 2 for i in range(LANE_COUNT)]
STRIPE_SPEED = 5.0

# Palette
C_BG = (8, 8, 20)
C_ROAD = (16, 16, 34)
C_KERB = (24, 22, 44)
C_STRIPE = (48, 44, 86)
C_EDGE = (70, 60, 120)
C_WHITE = (255, 255, 255)
C_DIM = (150, 150, 180)
C_PLAYER = (120, 255, 220)
C_GOLD = (255, 205, 90)
C_OBS = [(255, 80, 140), (255, 150, 60), (150, 90, 255)]


def course_to_pixels(top: float) -> int:
    """Map a normalized course coordinate to a screen y coordinate."""
    return int(COURSE_TOP + top * COURSE_H)


def obstacle_color(obstacle_id: int):
    """Stable colour per obstacle id, so a block keeps its colour across frames."""
    return C_OBS[obstacle_id % len(C_OBS)]


def draw_glow_rect(surf, rect, color, radius=10, spread=16):
    x, y, w, h = rect
    glow = pygame.Surface((w + spread * 2, h + spread * 2), pygame.SRCALPHA)
    pygame.draw.rect(glow, (*color, 45), (spread, spread, w, h), border_radius=radius + 4)
    surf.blit(glow, (x - spread, y - spread))
    pygame.draw.rect(surf, color, rect, border_radius=radius)


def draw_obstacle(surf, obstacle) -> None:
    w = LANE_WIDTH - 24
    h = int(OBSTACLE_HEIGHT_FRACTION * COURSE_H)
    cx = LANE_CENTERS[obstacle.lane]
    y = course_to_pixels(obstacle.top)
    color = obstacle_color(obstacle.id)
    draw_glow_rect(surf, (cx - w // 2, y, w, h), color)
    pygame.draw.rect(surf, (20, 10, 30), (cx - w // 2 + 8, y + 10, w - 16, 12), border_radius=4)


def draw_player(surf, lane: int, crashed: bool = False) -> None:
    cx = LANE_CENTERS[lane]
    cy = course_to_pixels(PLAYER_CENTER_Y)
    r = int(PLAYER_RADIUS_FRACTION * COURSE_H)
    color = C_OBS[0] if crashed else C_PLAYER

    gs = r * 2
    glow = pygame.Surface((gs * 2, gs * 2), pygame.SRCALPHA)
    pygame.draw.circle(glow, (*color, 40), (gs, gs), gs)
    pygame.draw.circle(glow, (*color, 70), (gs, gs), int(r * 1.4))
    surf.blit(glow, (cx - gs, cy - gs))
    pygame.draw.circle(surf, color, (cx, cy), r)
    pygame.draw.circle(surf, C_WHITE, (cx - r // 3, cy - r // 3), max(2, r // 4))


class Stripe:
    """Animated lane-divider stripe."""

    def __init__(self, x, y):
        self.x, self.y = x, float(y)

    def update(self, speed_scale=1.0):
        self.y += STRIPE_SPEED * speed_scale
        if self.y > HEIGHT + 40:
            self.y -= HEIGHT - COURSE_TOP + 80

    def draw(self, surf):
        pygame.draw.rect(surf, C_STRIPE, (self.x - 2, int(self.y), 4, 38))


def make_default_stripes() -> list[Stripe]:
    return [
        Stripe(ROAD_LEFT + LANE_WIDTH * li, y)
        for li in range(1, LANE_COUNT)
        for y in range(COURSE_TOP, HEIGHT + 100, 90)
    ]


def draw_road_background(screen) -> None:
    """Draw the road background (kerbs, road, edges)."""
    screen.fill(C_BG)
    pygame.draw.rect(screen, C_KERB, (0, COURSE_TOP, ROAD_LEFT, COURSE_H))
    pygame.draw.rect(screen, C_KERB, (ROAD_RIGHT, COURSE_TOP, WIDTH - ROAD_RIGHT, COURSE_H))
    pygame.draw.rect(screen, C_ROAD, (ROAD_LEFT, COURSE_TOP, ROAD_RIGHT - ROAD_LEFT, COURSE_H))
    pygame.draw.line(screen, C_EDGE, (ROAD_LEFT, COURSE_TOP), (ROAD_LEFT, HEIGHT), 2)
    pygame.draw.line(screen, C_EDGE, (ROAD_RIGHT, COURSE_TOP), (ROAD_RIGHT, HEIGHT), 2)


def draw_course(screen, state: GameState, stripes) -> None:
    draw_road_background(screen)
    clip = screen.get_clip()
    screen.set_clip((0, COURSE_TOP, WIDTH, COURSE_H))
    for s in stripes:
        s.draw(screen)
    for o in state.obstacles:
        draw_obstacle(screen, o)
    draw_player(screen, state.player_lane, crashed=not state.is_running)
    screen.set_clip(clip)


def text_centered(screen, font, text, color, cx, cy):
    surf = font.render(text, True, color)
    screen.blit(surf, (cx - surf.get_width() // 2, cy - surf.get_height() // 2))
    return surf


def draw_scoreboard(screen, fonts, state: GameState, highlight_high_score: bool) -> None:
    text_centered(screen, fonts["tiny"], "SCORE", C_DIM, WIDTH // 4, 20)
    text_centered(screen, fonts["score"], f"{state.score:04d}", C_WHITE, WIDTH // 4, 46)
    best_color = C_GOLD if highlight_high_score else C_WHITE
    text_centered(screen, fonts["tiny"], "BEST", C_DIM, WIDTH * 3 // 4, 20)
    text_centered(screen, fonts["score"], f"{state.high_score:04d}", best_color, WIDTH * 3 // 4, 46)
    text_centered(screen, fonts["tiny"], f"LV {state.level}", C_DIM, WIDTH // 2, 46)


def _dim(screen, alpha=155):
    dim = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
    dim.fill((0, 0, 0, alpha))
    screen.blit(dim, (0, 0))


def draw_menu(screen, fonts, high_score: int, blink: int) -> None:
    _dim(screen, 190)
    text_centered(screen, fonts["title"], "EVERGLOW", C_PLAYER, WIDTH // 2, HEIGHT // 2 - 90)
    if high_score > 0:
        text_centered(screen, fonts["sub"], f"best {high_score}", C_GOLD, WIDTH // 2, HEIGHT // 2 - 30)
    if blink % 60 < 42:
        text_centered(screen, fonts["sub"], "press enter to start", C_DIM, WIDTH // 2, HEIGHT // 2 + 40)
    text_centered(screen, fonts["sub"], "← →  or  A D  to switch lanes", C_DIM, WIDTH // 2, HEIGHT // 2 + 80)


def draw_game_over(screen, fonts, state: GameState, is_new_high_score: bool, blink: int) -> None:
    _dim(screen)
    text_centered(screen, fonts["title"], "GAME OVER", C_PLAYER, WIDTH // 2, HEIGHT // 2 - 90)
    text_centered(screen, fonts["score"], f"{state.score:04d}", C_WHITE, WIDTH // 2, HEIGHT // 2 - 20)
    if is_new_high_score and state.score > 0:
        text_centered(screen, fonts["sub"], "new best", C_GOLD, WIDTH // 2, HEIGHT // 2 + 22)
    else:
        text_centered(screen, fonts["sub"], f"best {state.high_score}", C_DIM, WIDTH // 2, HEIGHT // 2 + 22)
    if blink % 60 < 42:
        text_centered(screen, fonts["sub"], "enter to retry  ·  m for menu", C_DIM, WIDTH // 2, HEIGHT // 2 + 60)
