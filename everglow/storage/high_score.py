from __future__ import annotations

"""Best-effort persistence of the single integer high score."""

import json
import threading
from pathlib import Path

from everglow.config.defaults import HIGH_SCORE_PREF_KEY


class HighScoreStore:
    """Reads and writes ``{"high_score": N}`` in one small JSON file.

    Failures are reported and swallowed: a broken disk must never stop a run.
    ``save_in_background`` keeps the write off the caller's thread; ``wait``
    joins the pending writer before shutdown.
    """

    def __init__(self, path: str | Path, key: str = HIGH_SCORE_PREF_KEY):
        self.path = Path(path)
        self.key = key
        self._last_saved: int | None = None
        self._lock = threading.Lock()
        self._writer: threading.Thread | None = None

    def load(self) -> int:
        """Return the stored high score, 0 if not found or unreadable."""
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except FileNotFoundError:
            self._last_saved = 0
            return 0
        except (OSError, ValueError) as exc:
            print(f"[highscore] Could not read {self.path}: {exc}")
            return 0

        value = data.get(self.key, 0) if isinstance(data, dict) else 0
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            print(f"[highscore] Ignoring invalid value {value!r} in {self.path}")
            value = 0
        self._last_saved = value
        return value

    def save(self, score: int) -> bool:
        """Persist ``score`` if it beats the last known value.

        Returns True when the file was written.
        """
        with self._lock:
            if self._last_saved is None:
                self.load()
            if score <= (self._last_saved or 0):
                return False
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
                with open(tmp_path, "w") as f:
                    json.dump({self.key: int(score)}, f)
                tmp_path.replace(self.path)
            except OSError as exc:
                print(f"[highscore] Could not save {score} to {self.path}: {exc}")
                return False
            self._last_saved = int(score)
            return True

    def save_in_background(self, score: int) -> threading.Thread:
        thread = threading.Thread(target=self.save, args=(score,), daemon=True)
        thread.start()
        self._writer = thread
        return thread

    def wait(self, timeout: float | None = None) -> None:
        if self._writer is not None:
            self._writer.join(timeout)
            self._writer = None

    def reset(self) -> bool:
        """Remove the stored file. Returns False when it could not be removed."""
        self.wait()
        with self._lock:
            try:
                self.path.unlink()
            except FileNotFoundError:
                pass
            except OSError as exc:
                print(f"[highscore] Could not reset {self.path}: {exc}")
                return False
            self._last_saved = 0
            return True
