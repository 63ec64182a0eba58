"""
Session Statistics Aggregator

Reduces a user's completed sessions to plain arithmetic means and
totals. No weighting.
"""

from typing import Iterable, Optional

from brainwave.shared.rounding import round_half_up, round_half_up_to

from .models import SessionRecord, SessionStats


def aggregate_session_stats(sessions: Iterable[SessionRecord]) -> Optional[SessionStats]:
    """
    Summarize completed sessions.

    Sessions that are not completed are ignored.

    Returns:
        SessionStats, or None when there is no completed session
    """
    completed = [s for s in sessions if s.completed]
    if not completed:
        return None

    count = len(completed)
    total_duration = sum(s.total_duration or 0 for s in completed)
    total_breaks = sum(s.concentration_breaks for s in completed)
    total_efficiency = sum(s.efficiency or 0 for s in completed)

    return SessionStats(
        total_sessions=count,
        average_duration_minutes=round_half_up(total_duration / count / 60),
        average_breaks=round_half_up_to(total_breaks / count, 1),
        average_efficiency=round_half_up(total_efficiency / count),
        total_focus_time_minutes=round_half_up(total_duration / 60),
    )
