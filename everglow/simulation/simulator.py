#!/usr/bin/env python3
"""Headless game simulator: runs one game with an autopilot, records replay frames."""

from __future__ import annotations

import random

from everglow.game.engine import GameState
from everglow.simulation.autopilot import SmoothDecisionFilter, load_policy

DEFAULT_FPS = 60
DECISIONS_PER_SECOND = 8


def simulate(policy, seed=0, *, fps=DEFAULT_FPS, max_seconds=180.0, record_every=2):
    """
    Run one headless game.

    Args:
        policy: object with ``decide(state) -> -1 | 0 | 1``.
        seed: seeds the spawn random source for deterministic replay.
        fps: fixed frame rate; each frame advances ``1 / fps`` seconds.
        max_seconds: safety limit on simulated time.
        record_every: keep every n-th frame in ``frames``.

    Returns:
        dict: {
            'alive_time': float (simulated seconds survived),
            'score': int,
            'level': int,
            'seed': int,
            'frames': list of GameState.encode() dicts with a 'decision' key
        }
    """
    rng = random.Random(seed)
    state = GameState()
    frames = []
    smooth_filter = SmoothDecisionFilter(min_hold=2)
    frame_dt = 1.0 / fps
    decision_interval = max(1, fps // DECISIONS_PER_SECOND)
    max_frames = int(max_seconds * fps)

    frame = 0
    decision = 0
    while state.is_running and frame < max_frames:
        if frame % decision_interval == 0:
            raw = policy.decide(state)
            decision = smooth_filter.filter(raw, state.player_lane, min(state.nearest_obstacles()))
            state = state.move(decision)

        if frame % record_every == 0:
            record = state.encode()
            record["frame"] = frame
            record["decision"] = decision
            frames.append(record)

        state = state.advance(frame_dt, rng)
        frame += 1

    # Record final frame on crash or timeout
    if not frames or frames[-1]["frame"] != frame:
        final = state.encode()
        final["frame"] = frame
        final["decision"] = decision
        frames.append(final)

    return {
        "alive_time": round(state.elapsed, 4),
        "score": state.score,
        "level": state.level,
        "seed": seed,
        "frames": frames,
    }


def simulate_batch(policy_name, seeds, *, fps=DEFAULT_FPS, max_seconds=180.0):
    """Run several simulations sequentially with a fresh policy per seed.

    Used by the runner's worker processes.
    """
    return [
        simulate(load_policy(policy_name, seed=seed), seed=seed, fps=fps, max_seconds=max_seconds)
        for seed in seeds
    ]


if __name__ == "__main__":
    result = simulate(load_policy("greedy"), seed=42)
    print(f"Alive time: {result['alive_time']:.1f} sec, score {result['score']}, level {result['level']}")
    print(f"Frames recorded: {len(result['frames'])}")
