"""
BrainWave Orchestrator

Wires the pure scoring layer, the session state machine, the record
store and the tone emitter into the user-visible operations:

    analyze -> start_session -> record_lapse / record_refocus -> end_session
    get_stats / list_sessions on demand

Usage:
    from brainwave.orchestrate import get_orchestrator

    orchestrator = get_orchestrator()
    result = orchestrator.analyze(lifestyle)
"""

import logging
import os
import uuid
from datetime import datetime
from threading import Lock
from typing import Any, Callable, Dict, List, Optional, Union

from brainwave.audio.tone import LoggingToneEmitter, ToneEmitter
from brainwave.profile.calculate import calculate_focus_profile
from brainwave.profile.models import (
    AnalysisResult,
    LifestyleInput,
    UserRecord,
    validate_lifestyle,
)
from brainwave.profile.recommend import generate_recommendations
from brainwave.session.machine import FocusSessionMachine, utc_now
from brainwave.session.models import (
    DEFAULT_ALPHA_FREQUENCY,
    SessionRecord,
    SessionStats,
)
from brainwave.session.stats import aggregate_session_stats
from brainwave.shared.errors import NotFoundError
from brainwave.store.records import InMemoryRecordStore, JsonFileRecordStore, RecordStore

logger = logging.getLogger(__name__)

RECENT_SESSIONS_LIMIT = 10


def new_user_id() -> str:
    return f"user_{uuid.uuid4().hex[:12]}"


def new_session_id() -> str:
    return f"session_{uuid.uuid4().hex[:12]}"


class FocusOrchestrator:
    """Coordinator over the record store; holds only per-session transition locks."""

    def __init__(
        self,
        store: RecordStore,
        tone: Optional[ToneEmitter] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store
        self.tone = tone or LoggingToneEmitter()
        self.clock = clock or utc_now
        self._locks_guard = Lock()
        self._session_locks: Dict[str, Lock] = {}

    # ---------- Profile ----------
    def analyze(
        self,
        lifestyle: Union[LifestyleInput, Dict[str, Any]],
        user_id: Optional[str] = None,
    ) -> AnalysisResult:
        """
        Compute profile + recommendations and persist them as the user's latest analysis.

        Raw answer dicts are validated first and raise InvalidInputError.
        """
        if not isinstance(lifestyle, LifestyleInput):
            lifestyle = validate_lifestyle(lifestyle)
        user_id = user_id or new_user_id()
        profile = calculate_focus_profile(lifestyle)
        recommendations = generate_recommendations(lifestyle, profile)

        now = self.clock()
        self.store.upsert_user(UserRecord(
            user_id=user_id,
            lifestyle=lifestyle,
            profile=profile,
            created_at=now,
            updated_at=now,
        ))
        logger.info(
            f"Analyzed user {user_id}: {profile.max_concentration} min span, "
            f"{profile.alpha_frequency} Hz"
        )
        return AnalysisResult(
            user_id=user_id,
            profile=profile,
            recommendations=recommendations,
        )

    def get_user(self, user_id: str) -> UserRecord:
        user = self.store.find_user(user_id)
        if user is None:
            logger.warning(f"User {user_id} not found")
            raise NotFoundError(f"User {user_id} not found")
        return user

    # ---------- Sessions ----------
    def start_session(self, user_id: Optional[str]) -> SessionRecord:
        """
        Open a new ACTIVE session.

        The user is not required to exist; without a stored profile the
        session falls back to the default refocus tone.
        """
        alpha_frequency = DEFAULT_ALPHA_FREQUENCY
        if user_id:
            user = self.store.find_user(user_id)
            if user is not None:
                alpha_frequency = user.profile.alpha_frequency

        record = SessionRecord(
            session_id=new_session_id(),
            user_id=user_id,
            alpha_frequency=alpha_frequency,
        )
        self._machine(record).start()
        self.store.append_session(record)
        return record

    def record_lapse(self, session_id: str) -> SessionRecord:
        return self._transition(session_id, FocusSessionMachine.record_lapse)

    def record_refocus(self, session_id: str) -> SessionRecord:
        return self._transition(session_id, FocusSessionMachine.record_refocus)

    def end_session(self, session_id: str) -> SessionRecord:
        record = self._transition(session_id, FocusSessionMachine.end)
        with self._locks_guard:
            self._session_locks.pop(session_id, None)
        return record

    def list_sessions(self, user_id: str, limit: int = RECENT_SESSIONS_LIMIT) -> List[SessionRecord]:
        """Most recent completed sessions, newest first."""
        return self.store.list_sessions(user_id, completed_only=True, limit=limit)

    def get_stats(self, user_id: str) -> Optional[SessionStats]:
        sessions = self.store.list_sessions(user_id, completed_only=True)
        return aggregate_session_stats(sessions)

    # ---------- Internals ----------
    def _machine(self, record: SessionRecord) -> FocusSessionMachine:
        return FocusSessionMachine(record, self.tone, clock=self.clock)

    def _session_lock(self, session_id: str) -> Lock:
        with self._locks_guard:
            return self._session_locks.setdefault(session_id, Lock())

    def _transition(
        self,
        session_id: str,
        action: Callable[[FocusSessionMachine], SessionRecord],
    ) -> SessionRecord:
        """
        Load, transition and persist one session under its own lock.

        Concurrent requests on the same session run one after another, so
        a lapse cannot overwrite a concurrent end or lose another lapse.
        """
        with self._session_lock(session_id):
            machine = self._load(session_id)
            action(machine)
            self.store.update_session(machine.record)
            return machine.record

    def _load(self, session_id: str) -> FocusSessionMachine:
        record = self.store.find_session(session_id)
        if record is None:
            logger.warning(f"Session {session_id} not found")
            raise NotFoundError(f"Session {session_id} not found")
        return self._machine(record)


# ============================================
# Process-wide instance
# ============================================

_instance: Optional[FocusOrchestrator] = None
_instance_lock = Lock()


def build_store_from_env() -> RecordStore:
    """
    BRAINWAVE_STORE=json (default) uses BRAINWAVE_DATA_DIR (default ./data);
    BRAINWAVE_STORE=memory keeps everything in process.
    """
    backend = os.getenv("BRAINWAVE_STORE", "json").lower()
    if backend == "memory":
        return InMemoryRecordStore()
    if backend != "json":
        logger.warning(f"Unknown BRAINWAVE_STORE '{backend}', using json")
    return JsonFileRecordStore(os.getenv("BRAINWAVE_DATA_DIR", "data"))


def get_orchestrator() -> FocusOrchestrator:
    """FastAPI dependency returning the shared orchestrator."""
    global _instance
    if _instance is None:
        with _instance_lock:
            if _instance is None:
                _instance = FocusOrchestrator(build_store_from_env())
    return _instance


def reset_orchestrator() -> None:
    """Drop the shared instance (tests, config reload)."""
    global _instance
    with _instance_lock:
        _instance = None
