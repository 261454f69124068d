"""
Pure game logic for EVERGLOW, with no pygame dependency.
Used by the session controller, the pygame front-end and the headless simulator.

Positions are normalized course coordinates: 0 is the top of the play-field,
1 is the exit line at the bottom.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

# ─────────────────────────────────────────
# Constants
# ─────────────────────────────────────────
LANE_COUNT = 3

OBSTACLE_HEIGHT_FRACTION = 0.18
PLAYER_RADIUS_FRACTION = 0.08
PLAYER_CENTER_Y = 0.82
PLAYER_TOP = PLAYER_CENTER_Y - PLAYER_RADIUS_FRACTION
PLAYER_BOTTOM = PLAYER_CENTER_Y + PLAYER_RADIUS_FRACTION

MAX_TIME_STEP = 0.16

BASE_SPEED = 0.55
SPEED_STEP = 0.09

SPAWN_START_INTERVAL = 0.65
SPAWN_INTERVAL_STEP = 0.05
MIN_SPAWN_INTERVAL = 0.32
INITIAL_SPAWN_TIMER = SPAWN_START_INTERVAL * 0.6

SCORE_PER_LEVEL = 8


def speed_for_level(level: int) -> float:
    """Course heights per second travelled by obstacles at ``level``."""
    return BASE_SPEED + (level - 1) * SPEED_STEP


def spawn_interval_for_level(level: int) -> float:
    """Seconds between spawns at ``level``, never below MIN_SPAWN_INTERVAL."""
    return max(MIN_SPAWN_INTERVAL, SPAWN_START_INTERVAL - (level - 1) * SPAWN_INTERVAL_STEP)


def level_for_score(score: int) -> int:
    return score // SCORE_PER_LEVEL + 1


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


# ─────────────────────────────────────────
# Game objects
# ─────────────────────────────────────────

@dataclass(frozen=True)
class Obstacle:
    id: int
    lane: int
    top: float

    @property
    def bottom(self) -> float:
        return self.top + OBSTACLE_HEIGHT_FRACTION

    def overlaps_player(self, player_lane: int) -> bool:
        """Closed-interval overlap with the player band; touching counts."""
        return (
            self.lane == player_lane
            and self.top <= PLAYER_BOTTOM
            and self.bottom >= PLAYER_TOP
        )


@dataclass(frozen=True)
class GameState:
    player_lane: int = LANE_COUNT // 2
    obstacles: tuple[Obstacle, ...] = ()
    elapsed: float = 0.0
    score: int = 0
    high_score: int = 0
    level: int = 1
    spawn_timer: float = INITIAL_SPAWN_TIMER
    is_running: bool = True
    session: int = 0
    next_obstacle_id: int = 0

    @property
    def speed(self) -> float:
        return speed_for_level(self.level)

    @property
    def spawn_interval(self) -> float:
        return spawn_interval_for_level(self.level)

    def move(self, direction: int) -> "GameState":
        """Shift one lane left (negative) or right (positive).

        Returns ``self`` unchanged when the run is over, ``direction`` is 0,
        or the player is already at the edge in that direction, so callers
        can detect "no lane change" by identity or by comparing lanes.
        """
        if not self.is_running or direction == 0:
            return self
        new_lane = min(max(self.player_lane + _sign(direction), 0), LANE_COUNT - 1)
        if new_lane == self.player_lane:
            return self
        return replace(self, player_lane=new_lane)

    def restart(self) -> "GameState":
        """Fresh run keeping the high score; bumps ``session``."""
        return GameState(high_score=self.high_score, session=self.session + 1)

    def advance(self, delta_seconds: float, rng) -> "GameState":
        """Advance the simulation by one frame.

        Args:
            delta_seconds: wall-clock seconds since the previous frame; clamped
                to [0, MAX_TIME_STEP].
            rng: random source with ``randint(a, b)``, e.g. ``random.Random``.
                Only used to pick spawn lanes.

        Returns:
            A new GameState, or ``self`` when the run is already over.
        """
        if not self.is_running:
            return self

        time_step = min(max(delta_seconds, 0.0), MAX_TIME_STEP)
        speed = self.speed  # previous level

        score = self.score
        survivors: list[Obstacle] = []
        for obstacle in self.obstacles:
            moved = replace(obstacle, top=obstacle.top + speed * time_step)
            if moved.top >= 1.0:
                score += 1
            else:
                survivors.append(moved)

        high_score = max(self.high_score, score)
        level = level_for_score(score)
        interval = spawn_interval_for_level(level)

        # Several spawns can happen in one step when the interval is short
        timer = self.spawn_timer - time_step
        next_id = self.next_obstacle_id
        while timer <= 0.0:
            survivors.append(Obstacle(
                id=next_id,
                lane=rng.randint(0, LANE_COUNT - 1),
                top=-OBSTACLE_HEIGHT_FRACTION,
            ))
            next_id += 1
            timer += interval

        collision = any(o.overlaps_player(self.player_lane) for o in survivors)

        return replace(
            self,
            obstacles=tuple(survivors),
            elapsed=self.elapsed + time_step,
            score=score,
            high_score=high_score,
            level=level,
            spawn_timer=timer,
            is_running=not collision,
            next_obstacle_id=next_id,
        )

    def nearest_obstacles(self) -> list[float]:
        """Return normalized distance to nearest obstacle in each lane. 1.0 = no obstacle."""
        distances = [1.0] * LANE_COUNT
        for o in self.obstacles:
            if o.top < PLAYER_TOP:  # only obstacles still above the player band
                dist = PLAYER_TOP - o.bottom
                dist = max(dist, 0.0)
                if dist < distances[o.lane]:
                    distances[o.lane] = dist
        return distances

    def encode(self) -> dict:
        """Encode current state as dict for replays and reports."""
        return {
            "lane": self.player_lane,
            "obs": [[o.id, o.lane, round(o.top, 4)] for o in self.obstacles],
            "score": self.score,
            "high_score": self.high_score,
            "level": self.level,
            "elapsed": round(self.elapsed, 4),
            "alive": self.is_running,
            "session": self.session,
        }


# Functional spelling of the transitions: move(state, direction), etc.
move = GameState.move
restart = GameState.restart
advance = GameState.advance
