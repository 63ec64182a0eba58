"""Shared fixtures: a controllable clock and a tone emitter that records calls."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from brainwave.audio.tone import ToneEmitter


class FakeClock:
    """Callable clock; tick() moves time forward."""

    def __init__(self, start: datetime = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def tick(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingToneEmitter(ToneEmitter):
    def __init__(self):
        self.calls = []

    def play_tone(self, frequency_hz: int) -> None:
        self.calls.append(("play", frequency_hz))

    def stop_tone(self) -> None:
        self.calls.append(("stop", None))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tone():
    return RecordingToneEmitter()
