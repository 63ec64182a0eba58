"""
BrainWave Record Store

Isolates persistence behind RecordStore so the JSON-file store can be
swapped for another backend without touching the core.
"""

from .records import RecordStore, InMemoryRecordStore, JsonFileRecordStore

__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
    "JsonFileRecordStore",
]
