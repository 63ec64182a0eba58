"""
BrainWave Focus Sessions

Session lifecycle, efficiency scoring and cross-session statistics.

    NOT_STARTED -> ACTIVE -> PAUSED <-> ACTIVE -> ENDED
"""

from .models import SessionState, SessionRecord, SessionStats
from .machine import FocusSessionMachine
from .efficiency import score_efficiency
from .stats import aggregate_session_stats

__all__ = [
    # Models
    "SessionState",
    "SessionRecord",
    "SessionStats",
    # State machine
    "FocusSessionMachine",
    # Functions
    "score_efficiency",
    "aggregate_session_stats",
]
