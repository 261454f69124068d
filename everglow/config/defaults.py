"""Shared configuration defaults for Everglow."""
from __future__ import annotations

import multiprocessing as _mp
from pathlib import Path

from .schema import Paths, Settings

# Directories
PROJECT_DIR = Path(__file__).resolve().parents[2]
DATA_DIR = Path.home() / ".everglow"
SOUND_DIR = Path(__file__).resolve().parents[1] / "assets" / "sounds"

# High score lives under a single key in this file
HIGH_SCORE_PREFS_NAME = "everglow_prefs.json"
HIGH_SCORE_PREF_KEY = "high_score"

# Display
FPS = 60
AUDIO_ENABLED = True

# Headless simulation settings
POLICY = "greedy"
SIMS_PER_RUN = 20
SIM_WORKERS = max(2, _mp.cpu_count() - 2)
BATCH_SIZE = 10
MAX_SIM_SECONDS = 180.0  # safety limit per simulated game


def build_paths(data_dir: Path = DATA_DIR) -> Paths:
    data_dir = Path(data_dir)
    results_dir = data_dir / "results"
    return Paths(
        data_dir=data_dir,
        high_score_file=data_dir / HIGH_SCORE_PREFS_NAME,
        results_dir=results_dir,
        results_file=results_dir / "simulation_summary.json",
        sound_dir=SOUND_DIR,
    )


def default_settings() -> Settings:
    return Settings(
        paths=build_paths(),
        fps=FPS,
        audio_enabled=AUDIO_ENABLED,
        policy=POLICY,
        sims_per_run=SIMS_PER_RUN,
        sim_workers=SIM_WORKERS,
        batch_size=BATCH_SIZE,
        max_sim_seconds=MAX_SIM_SECONDS,
    )
