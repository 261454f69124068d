from __future__ import annotations

import importlib.util
from dataclasses import dataclass

from everglow.config.schema import Settings
from everglow.simulation.autopilot import available_policies


@dataclass(frozen=True)
class Check:
    name: str
    ok: bool
    detail: str


def _has_module(name: str) -> bool:
    return importlib.util.find_spec(name) is not None


def run_doctor(settings: Settings) -> list[Check]:
    checks: list[Check] = []
    checks.append(Check("policy", settings.policy in available_policies(), f"policy={settings.policy}"))
    checks.append(Check("pygame", _has_module("pygame"), "required for the game window and audio"))
    checks.append(Check("numpy", _has_module("numpy"), "required for simulation stats and tone synthesis"))

    paths = settings.paths
    checks.append(Check("data_dir", paths.data_dir.exists(), str(paths.data_dir)))
    checks.append(Check("results_dir", paths.results_dir.exists(), str(paths.results_dir)))
    checks.append(Check("sound_dir", paths.sound_dir.exists(), f"{paths.sound_dir} (optional, tones are synthesized otherwise)"))
    return checks
