"""
Focus Session Models

A SessionRecord is created at session start, mutated only by the lapse
and end transitions, and never deleted.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_ALPHA_FREQUENCY = 10


class SessionState(str, Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    PAUSED = "paused"
    ENDED = "ended"


class SessionRecord(BaseModel):
    """
    One focus session.

    total_duration and efficiency are set iff completed is true.
    """
    session_id: str
    user_id: Optional[str] = Field(
        default=None,
        description="Owner; existence is not enforced"
    )
    state: SessionState = SessionState.NOT_STARTED
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    concentration_breaks: int = Field(default=0, ge=0)
    total_duration: Optional[int] = Field(
        default=None,
        ge=0,
        description="Seconds between start and end"
    )
    efficiency: Optional[int] = Field(default=None, ge=0, le=100)
    completed: bool = False
    alpha_frequency: int = Field(
        default=DEFAULT_ALPHA_FREQUENCY,
        description="Refocus tone (Hz) snapshotted from the user's profile at start"
    )


class SessionStats(BaseModel):
    """Summary over a user's completed sessions."""
    total_sessions: int
    average_duration_minutes: int
    average_breaks: float
    average_efficiency: int
    total_focus_time_minutes: int
