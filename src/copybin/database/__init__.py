"""
History persistence for Copybin.

Provides store classes for the supported storage backends.
"""

from copybin.database.base import HistoryStore
from copybin.database.json_store import JsonFileStore
from copybin.database.records import StoredEntry, dump_entries, load_entries

__all__ = [
    'HistoryStore',
    'JsonFileStore',
    'StoredEntry',
    'dump_entries',
    'load_entries',
]
