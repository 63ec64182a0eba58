"""
Focus Session State Machine

States:
    NOT_STARTED -> ACTIVE -> PAUSED <-> ACTIVE -> ENDED

A lapse pauses the session and cues the refocus tone; refocusing stops
the tone and resumes. ENDED is terminal. A rejected transition raises
InvalidStateError before anything on the record is touched.

The elapsed-time display is driven by explicit advance() calls from any
clock source and only accrues while ACTIVE.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Set

from brainwave.audio.tone import ToneEmitter
from brainwave.shared.errors import InvalidStateError
from brainwave.shared.rounding import round_half_up

from .efficiency import score_efficiency
from .models import SessionRecord, SessionState

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FocusSessionMachine:
    """Lifecycle of a single SessionRecord."""

    def __init__(
        self,
        record: SessionRecord,
        tone: ToneEmitter,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.record = record
        self.tone = tone
        self._clock = clock or utc_now
        self._elapsed_s: float = 0.0

    @property
    def state(self) -> SessionState:
        return self.record.state

    @property
    def elapsed_seconds(self) -> int:
        """Seconds spent ACTIVE since start, as seen by advance()."""
        return int(self._elapsed_s)

    # ---------- Transitions ----------
    def start(self) -> SessionRecord:
        self._require({SessionState.NOT_STARTED}, "start")
        self.record.start_time = self._clock()
        self.record.concentration_breaks = 0
        self.record.completed = False
        self.record.state = SessionState.ACTIVE
        self._elapsed_s = 0.0
        logger.info(f"Session {self.record.session_id} started for user {self.record.user_id}")
        return self.record

    def record_lapse(self) -> SessionRecord:
        """
        Count a concentration lapse and cue the refocus tone.

        A lapse reported while already PAUSED is still counted and re-cues
        the tone; the session stays PAUSED.
        The tone is cued before the record changes, so an emitter failure
        leaves the record untouched.
        """
        self._require({SessionState.ACTIVE, SessionState.PAUSED}, "record a lapse")
        self.tone.play_tone(self.record.alpha_frequency)
        self.record.concentration_breaks += 1
        self.record.state = SessionState.PAUSED
        logger.info(
            f"Session {self.record.session_id} lapse #{self.record.concentration_breaks}"
        )
        return self.record

    def record_refocus(self) -> SessionRecord:
        self._require({SessionState.PAUSED}, "refocus")
        self.tone.stop_tone()
        self.record.state = SessionState.ACTIVE
        return self.record

    def end(self) -> SessionRecord:
        self._require({SessionState.ACTIVE, SessionState.PAUSED}, "end")
        end_time = self._clock()
        elapsed = (end_time - self.record.start_time).total_seconds()
        total_duration = max(0, round_half_up(elapsed))
        self.tone.stop_tone()

        self.record.end_time = end_time
        self.record.total_duration = total_duration
        self.record.efficiency = score_efficiency(
            total_duration, self.record.concentration_breaks
        )
        self.record.completed = True
        self.record.state = SessionState.ENDED
        logger.info(
            f"Session {self.record.session_id} ended: {total_duration}s, "
            f"{self.record.concentration_breaks} breaks, efficiency {self.record.efficiency}"
        )
        return self.record

    # ---------- Elapsed display ----------
    def advance(self, delta_seconds: float) -> int:
        """
        Advance the elapsed-time display.

        No-op unless ACTIVE; negative deltas are ignored.

        Returns:
            elapsed_seconds after the tick
        """
        if self.record.state == SessionState.ACTIVE and delta_seconds > 0:
            self._elapsed_s += delta_seconds
        return self.elapsed_seconds

    def minutes_remaining(self, max_concentration: int) -> int:
        """Countdown against the profile's concentration span."""
        return max(0, max_concentration - self.elapsed_seconds // 60)

    # ---------- Internals ----------
    def _require(self, allowed: Set[SessionState], action: str) -> None:
        if self.record.state not in allowed:
            logger.warning(
                f"Rejected '{action}' for session {self.record.session_id} "
                f"in state {self.record.state.value}"
            )
            raise InvalidStateError(
                f"Cannot {action} session {self.record.session_id} "
                f"in state '{self.record.state.value}'"
            )
