"""
BrainWave Record Store

Persistence for user analyses and focus sessions. The core only needs
find / upsert / append / update / list semantics with last-write-wins;
no transactions.

Implementations:
- JsonFileRecordStore: users.json + sessions.json, read-all/write-all
- InMemoryRecordStore: process-local dicts (tests, ephemeral deploys)
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from threading import RLock
from typing import Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from brainwave.profile.models import UserRecord
from brainwave.session.models import SessionRecord
from brainwave.shared.errors import InvalidStateError, NotFoundError, RecordStoreError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _newest_first(sessions: List[SessionRecord]) -> List[SessionRecord]:
    return sorted(sessions, key=lambda s: s.start_time or _EPOCH, reverse=True)


def _ensure_not_completed(stored: SessionRecord) -> None:
    if stored.completed:
        raise InvalidStateError(f"Session {stored.session_id} is already completed")


class RecordStore(ABC):
    """Storage contract used by the orchestrator."""

    backend: str = "abstract"

    @abstractmethod
    def find_user(self, user_id: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    def upsert_user(self, user: UserRecord) -> UserRecord:
        """Overwrite by user_id, keeping the first created_at."""

    @abstractmethod
    def find_session(self, session_id: str) -> Optional[SessionRecord]:
        ...

    @abstractmethod
    def append_session(self, session: SessionRecord) -> None:
        ...

    @abstractmethod
    def update_session(self, session: SessionRecord) -> None:
        """
        Overwrite by session_id.

        Raises NotFoundError for an unknown id and InvalidStateError when the
        stored session is already completed.
        """

    @abstractmethod
    def list_sessions(
        self,
        user_id: str,
        completed_only: bool = False,
        limit: Optional[int] = None,
    ) -> List[SessionRecord]:
        """A user's sessions, newest start_time first."""

    def describe(self) -> Dict[str, str]:
        return {"backend": self.backend}


class InMemoryRecordStore(RecordStore):
    """Dict-backed store. Records are copied in and out."""

    backend = "memory"

    def __init__(self):
        self._lock = RLock()
        self._users: Dict[str, UserRecord] = {}
        self._sessions: Dict[str, SessionRecord] = {}

    def find_user(self, user_id: str) -> Optional[UserRecord]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy(deep=True) if user else None

    def upsert_user(self, user: UserRecord) -> UserRecord:
        with self._lock:
            existing = self._users.get(user.user_id)
            if existing is not None:
                user = user.model_copy(update={"created_at": existing.created_at})
            self._users[user.user_id] = user.model_copy(deep=True)
            return user

    def find_session(self, session_id: str) -> Optional[SessionRecord]:
        with self._lock:
            session = self._sessions.get(session_id)
            return session.model_copy(deep=True) if session else None

    def append_session(self, session: SessionRecord) -> None:
        with self._lock:
            if session.session_id in self._sessions:
                raise RecordStoreError(f"Session {session.session_id} already exists")
            self._sessions[session.session_id] = session.model_copy(deep=True)

    def update_session(self, session: SessionRecord) -> None:
        with self._lock:
            existing = self._sessions.get(session.session_id)
            if existing is None:
                raise NotFoundError(f"Session {session.session_id} not found")
            _ensure_not_completed(existing)
            self._sessions[session.session_id] = session.model_copy(deep=True)

    def list_sessions(
        self,
        user_id: str,
        completed_only: bool = False,
        limit: Optional[int] = None,
    ) -> List[SessionRecord]:
        with self._lock:
            matches = [
                s.model_copy(deep=True)
                for s in self._sessions.values()
                if s.user_id == user_id and (s.completed or not completed_only)
            ]
        matches = _newest_first(matches)
        return matches[:limit] if limit is not None else matches


class JsonFileRecordStore(RecordStore):
    """
    Read-all/write-all JSON files under a data directory.

    Every read-modify-write runs under one lock so concurrent requests in
    this process cannot lose each other's updates.
    """

    backend = "json"

    USERS_FILE = "users.json"
    SESSIONS_FILE = "sessions.json"

    def __init__(self, data_dir):
        self.data_dir = Path(data_dir)
        self.users_path = self.data_dir / self.USERS_FILE
        self.sessions_path = self.data_dir / self.SESSIONS_FILE
        self._lock = RLock()
        self._initialize()

    def _initialize(self) -> None:
        """Create the data directory and empty collections if missing."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            for path in (self.users_path, self.sessions_path):
                if not path.exists():
                    path.write_text("[]", encoding="utf-8")
        except OSError as e:
            raise RecordStoreError(f"Cannot initialize store at {self.data_dir}: {e}") from e
        logger.info(f"JSON record store initialized at {self.data_dir}")

    def describe(self) -> Dict[str, str]:
        return {"backend": self.backend, "data_dir": str(self.data_dir)}

    # ---------- File I/O ----------
    def _read(self, path: Path, model: Type[ModelT]) -> List[ModelT]:
        if not path.exists():
            return []
        try:
            raw = json.loads(path.read_text(encoding="utf-8") or "[]")
            return [model.model_validate(item) for item in raw]
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Failed to read {path}: {e}")
            raise RecordStoreError(f"Unreadable record file {path.name}") from e

    def _write(self, path: Path, records: List[BaseModel]) -> None:
        payload = json.dumps(
            [r.model_dump(mode="json") for r in records],
            indent=2,
        )
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, path)
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise RecordStoreError(f"Cannot write record file {path.name}") from e

    # ---------- Users ----------
    def find_user(self, user_id: str) -> Optional[UserRecord]:
        with self._lock:
            for user in self._read(self.users_path, UserRecord):
                if user.user_id == user_id:
                    return user
        return None

    def upsert_user(self, user: UserRecord) -> UserRecord:
        with self._lock:
            users = self._read(self.users_path, UserRecord)
            for index, existing in enumerate(users):
                if existing.user_id == user.user_id:
                    user = user.model_copy(update={"created_at": existing.created_at})
                    users[index] = user
                    break
            else:
                users.append(user)
            self._write(self.users_path, users)
        return user

    # ---------- Sessions ----------
    def find_session(self, session_id: str) -> Optional[SessionRecord]:
        with self._lock:
            for session in self._read(self.sessions_path, SessionRecord):
                if session.session_id == session_id:
                    return session
        return None

    def append_session(self, session: SessionRecord) -> None:
        with self._lock:
            sessions = self._read(self.sessions_path, SessionRecord)
            if any(s.session_id == session.session_id for s in sessions):
                raise RecordStoreError(f"Session {session.session_id} already exists")
            sessions.append(session)
            self._write(self.sessions_path, sessions)

    def update_session(self, session: SessionRecord) -> None:
        with self._lock:
            sessions = self._read(self.sessions_path, SessionRecord)
            for index, existing in enumerate(sessions):
                if existing.session_id == session.session_id:
                    _ensure_not_completed(existing)
                    sessions[index] = session
                    break
            else:
                raise NotFoundError(f"Session {session.session_id} not found")
            self._write(self.sessions_path, sessions)

    def list_sessions(
        self,
        user_id: str,
        completed_only: bool = False,
        limit: Optional[int] = None,
    ) -> List[SessionRecord]:
        with self._lock:
            sessions = self._read(self.sessions_path, SessionRecord)
        matches = [
            s for s in sessions
            if s.user_id == user_id and (s.completed or not completed_only)
        ]
        matches = _newest_first(matches)
        return matches[:limit] if limit is not None else matches
