from __future__ import annotations

"""
Screen flow around the simulation core: menu -> playing -> game over.

GameSession owns the single mutable slot holding the latest GameState. Every
call reads that state, computes the next one and publishes it before
returning, so input handling and the frame loop never see a half-applied step.
"""

import random

from everglow.game.engine import GameState
from everglow.game.events import FeedbackEvent, diff_states

HIGH_SCORE_HIGHLIGHT_SECONDS = 1.4


class GameSession:
    def __init__(self, *, high_score: int = 0, rng: random.Random | None = None, store=None):
        self.rng = rng if rng is not None else random.Random()
        self.store = store
        self.state = GameState(high_score=high_score)
        self.show_menu = True
        self.latest_high_score_session = -1
        self.highlight_remaining = 0.0
        self.unsaved_high_score: int | None = None

    @classmethod
    def from_store(cls, store, *, rng: random.Random | None = None) -> "GameSession":
        return cls(high_score=store.load(), rng=rng, store=store)

    # ── Derived view state ──────────────

    @property
    def is_playing(self) -> bool:
        return not self.show_menu and self.state.is_running

    @property
    def is_game_over(self) -> bool:
        return not self.show_menu and not self.state.is_running

    @property
    def is_new_high_score(self) -> bool:
        return self.latest_high_score_session == self.state.session

    @property
    def is_highlighting_high_score(self) -> bool:
        return self.highlight_remaining > 0.0

    @property
    def music_state(self) -> str:
        if self.show_menu:
            return "stopped"
        return "playing" if self.state.is_running else "paused"

    # ── Transitions ─────────────────────

    def start(self) -> list[FeedbackEvent]:
        """Leave the menu with a fresh run."""
        if not self.show_menu:
            return []
        self._publish(self.state.restart())
        self.show_menu = False
        return [FeedbackEvent.UI_CONFIRM]

    def restart(self) -> list[FeedbackEvent]:
        """Start over from the game-over screen."""
        if not self.is_game_over:
            return []
        self._publish(self.state.restart())
        return [FeedbackEvent.UI_CONFIRM]

    def open_menu(self) -> list[FeedbackEvent]:
        if self.show_menu:
            return []
        self.show_menu = True
        self.highlight_remaining = 0.0
        self.flush_high_score()
        return [FeedbackEvent.UI_CANCEL]

    def move(self, direction: int) -> list[FeedbackEvent]:
        if self.show_menu:
            return []
        return self._publish(self.state.move(direction))

    def tick(self, delta_seconds: float) -> list[FeedbackEvent]:
        """Advance one frame; ``delta_seconds`` is the raw wall-clock delta."""
        if self.highlight_remaining > 0.0:
            self.highlight_remaining = max(0.0, self.highlight_remaining - max(delta_seconds, 0.0))
        if not self.is_playing:
            return []
        return self._publish(self.state.advance(delta_seconds, self.rng))

    def _publish(self, new_state: GameState) -> list[FeedbackEvent]:
        previous, self.state = self.state, new_state
        if new_state.session != previous.session:
            self.highlight_remaining = 0.0
        events = diff_states(previous, new_state)
        if FeedbackEvent.HIGH_SCORE in events:
            self._on_high_score(new_state)
        if FeedbackEvent.COLLISION in events:
            self.flush_high_score()
        return events

    def _on_high_score(self, state: GameState) -> None:
        if self.latest_high_score_session != state.session and state.score > 0:
            self.highlight_remaining = HIGH_SCORE_HIGHLIGHT_SECONDS
        self.latest_high_score_session = state.session
        self.unsaved_high_score = state.high_score

    # ── Persistence ─────────────────────

    def flush_high_score(self) -> None:
        """Hand the newest unsaved record to the store's background writer."""
        if self.store is None or self.unsaved_high_score is None:
            return
        self.store.save_in_background(self.unsaved_high_score)
        self.unsaved_high_score = None

    def close(self) -> None:
        """Persist any pending record and wait for the writer; call on quit."""
        self.flush_high_score()
        if self.store is not None:
            self.store.wait()
