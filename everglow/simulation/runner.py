from __future__ import annotations

"""Parallel simulation runner: many autopilot games fanned out over worker processes."""

import multiprocessing
import random
import time
from itertools import islice
from pathlib import Path
from typing import Any

import numpy as np

from everglow.config.schema import Settings
from everglow.core.results import save_summary_json
from everglow.simulation.simulator import simulate_batch


def _run_seed_batch(args):
    """Worker function: run one chunk of seeds for a policy."""
    policy_name, seeds, fps, max_seconds = args
    return simulate_batch(policy_name, seeds, fps=fps, max_seconds=max_seconds)


def _chunked(items, chunk_size):
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")
    it = iter(items)
    while True:
        chunk = list(islice(it, chunk_size))
        if not chunk:
            return
        yield chunk


def aggregate_runs(runs: list[dict[str, Any]]) -> dict[str, Any]:
    """Summary statistics over simulate() results."""
    if not runs:
        raise ValueError("cannot aggregate an empty list of runs")
    alive_times = np.array([r["alive_time"] for r in runs], dtype=float)
    scores = np.array([r["score"] for r in runs], dtype=float)
    levels = np.array([r["level"] for r in runs], dtype=float)
    return {
        "n_sims": len(runs),
        "avg_alive": float(np.mean(alive_times)),
        "std_alive": float(np.std(alive_times)),
        "min_alive": float(np.min(alive_times)),
        "max_alive": float(np.max(alive_times)),
        "avg_score": float(np.mean(scores)),
        "std_score": float(np.std(scores)),
        "max_score": int(np.max(scores)),
        "avg_level": float(np.mean(levels)),
    }


def run_simulations(
    settings: Settings,
    policy_name: str | None = None,
    *,
    n_sims: int | None = None,
    batch_size: int | None = None,
    seeds: list[int] | None = None,
) -> dict[str, Any]:
    """Run repeated simulations for one policy and aggregate metrics."""
    policy_name = policy_name or settings.policy
    if seeds is None:
        n_sims = n_sims or settings.sims_per_run
        seeds = random.sample(range(100_000), n_sims)
    else:
        n_sims = len(seeds)
    batch_size = batch_size or settings.batch_size

    all_runs: list[dict[str, Any]] = []
    n_batches = (n_sims + batch_size - 1) // batch_size

    for batch_idx in range(n_batches):
        batch_seeds = seeds[batch_idx * batch_size:(batch_idx + 1) * batch_size]

        worker_count = max(1, min(len(batch_seeds), settings.sim_workers))
        seeds_per_worker = max(1, (len(batch_seeds) + worker_count - 1) // worker_count)
        args_list = [
            (policy_name, seed_chunk, settings.fps, settings.max_sim_seconds)
            for seed_chunk in _chunked(batch_seeds, seeds_per_worker)
        ]

        if worker_count == 1:
            batch_results = [_run_seed_batch(args) for args in args_list]
        else:
            with multiprocessing.Pool(processes=worker_count) as pool:
                batch_results = pool.map(_run_seed_batch, args_list)

        for worker_runs in batch_results:
            all_runs.extend(worker_runs)

        avg_so_far = sum(r["alive_time"] for r in all_runs) / len(all_runs)
        print(
            f"  Batch {batch_idx + 1}/{n_batches} complete "
            f"({len(all_runs)}/{n_sims} sims, running avg: {avg_so_far:.1f}s)"
        )

    return {"policy": policy_name, **aggregate_runs(all_runs), "runs": all_runs}


def save_summary(path: Path, results: dict[str, Any]) -> Path:
    """Save results without per-frame replay data."""
    summary = {k: v for k, v in results.items() if k != "runs"}
    summary["alive_times"] = [r["alive_time"] for r in results.get("runs", [])]
    summary["scores"] = [r["score"] for r in results.get("runs", [])]
    summary["seeds"] = [r["seed"] for r in results.get("runs", [])]
    return save_summary_json(path, summary)


def run_and_save(settings: Settings, policy_name: str | None = None, *, n_sims: int | None = None) -> dict[str, Any]:
    policy_name = policy_name or settings.policy
    print("\n" + "=" * 50)
    print(f"SIMULATION: {policy_name} autopilot")
    print("=" * 50)
    start = time.time()
    results = run_simulations(settings, policy_name, n_sims=n_sims)
    print(f"  Time: {time.time() - start:.1f}s")

    path = save_summary(settings.paths.results_file, results)

    print("\n" + "=" * 50)
    print("RESULTS")
    print("=" * 50)
    print(f"  alive: avg = {results['avg_alive']:.1f}s (+/- {results['std_alive']:.1f}), "
          f"best = {results['max_alive']:.1f}s")
    print(f"  score: avg = {results['avg_score']:.1f}, best = {results['max_score']}")
    print(f"  Saved: {path}")
    return results
