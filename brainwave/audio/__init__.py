"""
BrainWave Audio Cues

Alpha wave tone triggers used while a focus session is paused.
"""

from .tone import ToneEmitter, LoggingToneEmitter

__all__ = [
    "ToneEmitter",
    "LoggingToneEmitter",
]
