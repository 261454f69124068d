from __future__ import annotations

"""Versioned JSON summaries of simulation runs."""

import json
from pathlib import Path
from typing import Any

SCHEMA_VERSION = 1

# Keys every run summary carries; `everglow report` prints them in this order.
SUMMARY_KEYS = ("policy", "n_sims", "avg_alive", "std_alive", "max_alive", "avg_score", "max_score", "avg_level")


def save_summary_json(path: Path, summary: dict[str, Any]) -> Path:
    missing = [key for key in SUMMARY_KEYS if key not in summary]
    if missing:
        raise ValueError(f"Run summary is missing {missing}")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump({"schema_version": SCHEMA_VERSION, **summary}, f, indent=2)
    return path


def load_summary_json(path: Path) -> dict[str, Any]:
    """Read a summary written by ``save_summary_json``.

    Raises ValueError for malformed JSON, another schema version or missing keys.
    """
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not hold a run summary")
    version = data.get("schema_version")
    if version != SCHEMA_VERSION:
        raise ValueError(f"{path} has schema_version {version!r}, expected {SCHEMA_VERSION}")
    missing = [key for key in SUMMARY_KEYS if key not in data]
    if missing:
        raise ValueError(f"{path} is missing {missing}")
    return data
