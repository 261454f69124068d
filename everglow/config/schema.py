from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path


@dataclass(frozen=True)
class Paths:
    data_dir: Path
    high_score_file: Path
    results_dir: Path
    results_file: Path
    sound_dir: Path

    def ensure_dirs(self) -> None:
        for p in (self.data_dir, self.results_dir):
            p.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class Settings:
    paths: Paths

    fps: int
    audio_enabled: bool

    policy: str
    sims_per_run: int
    sim_workers: int
    batch_size: int
    max_sim_seconds: float

    def with_overrides(self, **kwargs) -> "Settings":
        return replace(self, **kwargs)
