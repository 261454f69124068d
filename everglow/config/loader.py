from __future__ import annotations

from pathlib import Path

from .defaults import build_paths, default_settings
from .schema import Settings


def load_settings(
    *,
    data_dir: str | Path | None = None,
    audio: bool | None = None,
    policy: str | None = None,
    ensure_dirs: bool = True,
) -> Settings:
    """Load runtime settings, defaulting to values from the defaults module."""
    settings = default_settings()
    if data_dir is not None:
        settings = settings.with_overrides(paths=build_paths(Path(data_dir).expanduser()))
    if audio is not None:
        settings = settings.with_overrides(audio_enabled=audio)
    if policy is not None:
        settings = settings.with_overrides(policy=policy)
    if ensure_dirs:
        settings.paths.ensure_dirs()
    return settings
