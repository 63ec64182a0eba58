"""
Refocus Tone Emitter

The session machine only needs to start and stop a tone at a given
frequency. Both calls are fire-and-forget and idempotent: stopping when
nothing plays is a no-op.
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class ToneEmitter(ABC):
    """Side-effect collaborator for alpha wave cues."""

    @abstractmethod
    def play_tone(self, frequency_hz: int) -> None:
        ...

    @abstractmethod
    def stop_tone(self) -> None:
        ...


class LoggingToneEmitter(ToneEmitter):
    """
    Default emitter for the API process.

    Playback happens on the client and one emitter serves every session,
    so the server keeps no playback state and only logs each cue.
    """

    def play_tone(self, frequency_hz: int) -> None:
        logger.debug(f"Alpha tone cue: play {frequency_hz} Hz")

    def stop_tone(self) -> None:
        logger.debug("Alpha tone cue: stop")
