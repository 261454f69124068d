from .engine import (
    GameState,
    Obstacle,
    LANE_COUNT,
    OBSTACLE_HEIGHT_FRACTION,
    PLAYER_CENTER_Y,
    PLAYER_RADIUS_FRACTION,
    advance,
    move,
    restart,
)
from .events import FeedbackEvent, diff_states

__all__ = [
    'GameState', 'Obstacle', 'FeedbackEvent',
    'LANE_COUNT', 'OBSTACLE_HEIGHT_FRACTION', 'PLAYER_CENTER_Y', 'PLAYER_RADIUS_FRACTION',
    'advance', 'move', 'restart', 'diff_states',
]
