"""Feedback cues derived by comparing consecutive game states."""

from __future__ import annotations

from enum import Enum

from everglow.game.engine import GameState


class FeedbackEvent(str, Enum):
    LANE_SHIFT = "lane_shift"
    COLLISION = "collision"
    HIGH_SCORE = "high_score"
    # Menu navigation, raised by the session controller rather than diff_states
    UI_CONFIRM = "ui_confirm"
    UI_CANCEL = "ui_cancel"


def diff_states(previous: GameState, current: GameState) -> list[FeedbackEvent]:
    """List the cues a transition from ``previous`` to ``current`` should trigger.

    A restart (different ``session``) never counts as a lane shift even though
    the player snaps back to the middle lane.
    """
    if previous is current:
        return []
    events: list[FeedbackEvent] = []
    if previous.session == current.session and previous.player_lane != current.player_lane:
        events.append(FeedbackEvent.LANE_SHIFT)
    if previous.is_running and not current.is_running:
        events.append(FeedbackEvent.COLLISION)
    if current.high_score > previous.high_score:
        events.append(FeedbackEvent.HIGH_SCORE)
    return events
