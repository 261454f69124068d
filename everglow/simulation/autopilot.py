from __future__ import annotations

"""Autopilot policies that pick a lane decision (-1, 0, 1) from a GameState."""

import random
from typing import Protocol

from everglow.game.engine import LANE_COUNT, GameState

DANGER_DISTANCE = 0.35
EMERGENCY_DISTANCE = 0.15


class Policy(Protocol):
    name: str

    def decide(self, state: GameState) -> int: ...


class StayPolicy:
    """Never changes lane."""

    name = "stay"

    def decide(self, state: GameState) -> int:
        return 0


class RandomPolicy:
    name = "random"

    def __init__(self, seed=None):
        self.rng = random.Random(seed)

    def decide(self, state: GameState) -> int:
        return self.rng.choice((-1, 0, 1))


class GreedyDodgePolicy:
    """Steps toward the adjacent lane with the most room once the current lane gets tight."""

    name = "greedy"

    def __init__(self, danger_distance: float = DANGER_DISTANCE):
        self.danger_distance = danger_distance

    def decide(self, state: GameState) -> int:
        distances = state.nearest_obstacles()
        lane = state.player_lane
        current = distances[lane]
        if current >= self.danger_distance:
            return 0

        best_dir, best_dist = 0, current
        for direction in (-1, 1):
            neighbour = lane + direction
            if 0 <= neighbour < LANE_COUNT and distances[neighbour] > best_dist:
                best_dir, best_dist = direction, distances[neighbour]
        return best_dir


class SmoothDecisionFilter:
    """Prevents jittery lane changes by requiring a consistent target lane before switching.

    The filter remembers the lane it is steering toward, not the last step, so a
    completed dodge is never repeated once the policy goes back to 0.
    """

    def __init__(self, min_hold=2):
        self.target_lane: int | None = None
        self.hold_counter = 0
        self.min_hold = min_hold

    def filter(self, raw_decision, lane, min_dist=1.0):
        """Return the step (-1, 0, 1) that moves ``lane`` toward the held target."""
        wanted = min(max(lane + raw_decision, 0), LANE_COUNT - 1)
        target = lane if self.target_lane is None else self.target_lane

        # Emergency override: take the new lane immediately
        if min_dist < EMERGENCY_DISTANCE:
            target = wanted
            self.hold_counter = 0
        elif wanted != target:
            self.hold_counter += 1
            if self.hold_counter >= self.min_hold:
                target = wanted
                self.hold_counter = 0
        else:
            self.hold_counter = 0

        self.target_lane = target
        return (target > lane) - (target < lane)


_POLICIES = {
    "stay": StayPolicy,
    "greedy": GreedyDodgePolicy,
    "random": RandomPolicy,
}


def load_policy(name: str, *, seed=None) -> Policy:
    try:
        factory = _POLICIES[name]
    except KeyError as exc:
        raise ValueError(f"Unknown policy: {name!r}. Expected one of {sorted(_POLICIES)}") from exc
    if factory is RandomPolicy:
        return factory(seed)
    return factory()


def available_policies() -> list[str]:
    return sorted(_POLICIES)
