"""
Record Store Tests

Both backends must honour the same contract:
- upsert preserves created_at
- find returns None for unknown ids
- update of an unknown session raises NotFoundError
- update of a completed session raises InvalidStateError
- list is newest-first, optionally completed-only and capped
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from brainwave.profile.calculate import calculate_focus_profile
from brainwave.profile.models import LifestyleInput, UserRecord
from brainwave.session.models import SessionRecord, SessionState
from brainwave.shared.errors import InvalidStateError, NotFoundError, RecordStoreError
from brainwave.store.records import InMemoryRecordStore, JsonFileRecordStore


T0 = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


def make_user(user_id="user_a", stress=3, at=T0) -> UserRecord:
    lifestyle = LifestyleInput(
        age=30,
        sleep_hours=8,
        stress_level=stress,
        exercise_frequency="weekly",
        caffeine="low",
        screen_time=5,
    )
    return UserRecord(
        user_id=user_id,
        lifestyle=lifestyle,
        profile=calculate_focus_profile(lifestyle),
        created_at=at,
        updated_at=at,
    )


def make_session(session_id, user_id="user_a", minutes_after=0, completed=False) -> SessionRecord:
    return SessionRecord(
        session_id=session_id,
        user_id=user_id,
        state=SessionState.ENDED if completed else SessionState.ACTIVE,
        start_time=T0 + timedelta(minutes=minutes_after),
        total_duration=600 if completed else None,
        efficiency=100 if completed else None,
        completed=completed,
    )


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryRecordStore()
    return JsonFileRecordStore(tmp_path / "data")


class TestUsers:

    def test_find_unknown(self, store):
        assert store.find_user("nobody") is None

    def test_insert_and_find(self, store):
        store.upsert_user(make_user())
        found = store.find_user("user_a")
        assert found is not None
        assert found.profile.alpha_frequency == 12

    def test_upsert_preserves_created_at(self, store):
        store.upsert_user(make_user(stress=3, at=T0))
        later = T0 + timedelta(days=2)
        stored = store.upsert_user(make_user(stress=9, at=later))

        found = store.find_user("user_a")
        assert stored.created_at == T0
        assert found.created_at == T0
        assert found.updated_at == later
        assert found.lifestyle.stress_level == 9
        assert found.profile.alpha_frequency == 8

    def test_one_record_per_user(self, store):
        store.upsert_user(make_user("user_a"))
        store.upsert_user(make_user("user_a"))
        store.upsert_user(make_user("user_b"))
        assert store.find_user("user_b") is not None
        assert store.find_user("user_a").user_id == "user_a"


class TestSessions:

    def test_append_and_find(self, store):
        store.append_session(make_session("s1"))
        found = store.find_session("s1")
        assert found.state is SessionState.ACTIVE
        assert found.start_time == T0

    def test_find_unknown(self, store):
        assert store.find_session("missing") is None

    def test_duplicate_append_rejected(self, store):
        store.append_session(make_session("s1"))
        with pytest.raises(RecordStoreError):
            store.append_session(make_session("s1"))

    def test_update_overwrites(self, store):
        session = make_session("s1")
        store.append_session(session)
        session.concentration_breaks = 3
        store.update_session(session)
        assert store.find_session("s1").concentration_breaks == 3

    def test_update_refuses_completed_session(self, store):
        store.append_session(make_session("s1", completed=True))
        reopened = make_session("s1")
        reopened.concentration_breaks = 4

        with pytest.raises(InvalidStateError):
            store.update_session(reopened)
        assert store.find_session("s1").completed is True
        assert store.find_session("s1").concentration_breaks == 0

    def test_update_unknown(self, store):
        with pytest.raises(NotFoundError):
            store.update_session(make_session("ghost"))

    def test_returned_record_is_detached(self, store):
        store.append_session(make_session("s1"))
        found = store.find_session("s1")
        found.concentration_breaks = 9
        assert store.find_session("s1").concentration_breaks == 0

    def test_list_newest_first(self, store):
        store.append_session(make_session("old", minutes_after=0, completed=True))
        store.append_session(make_session("new", minutes_after=90, completed=True))
        store.append_session(make_session("mid", minutes_after=45))
        store.append_session(make_session("other", user_id="user_b", minutes_after=10))

        assert [s.session_id for s in store.list_sessions("user_a")] == ["new", "mid", "old"]
        assert [
            s.session_id for s in store.list_sessions("user_a", completed_only=True)
        ] == ["new", "old"]
        assert [s.session_id for s in store.list_sessions("user_a", limit=1)] == ["new"]
        assert store.list_sessions("nobody") == []


class TestJsonFileStore:

    def test_initializes_empty_collections(self, tmp_path):
        store = JsonFileRecordStore(tmp_path / "fresh")
        assert json.loads(store.users_path.read_text()) == []
        assert json.loads(store.sessions_path.read_text()) == []

    def test_persists_across_instances(self, tmp_path):
        first = JsonFileRecordStore(tmp_path)
        first.upsert_user(make_user())
        first.append_session(make_session("s1", completed=True))

        second = JsonFileRecordStore(tmp_path)
        assert second.find_user("user_a").profile == first.find_user("user_a").profile
        assert second.find_session("s1").completed is True

    def test_corrupt_file_raises(self, tmp_path):
        store = JsonFileRecordStore(tmp_path)
        store.sessions_path.write_text("{not json")
        with pytest.raises(RecordStoreError):
            store.find_session("s1")

    def test_describe(self, tmp_path):
        assert JsonFileRecordStore(tmp_path).describe() == {
            "backend": "json",
            "data_dir": str(tmp_path),
        }
