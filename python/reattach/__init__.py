"""
reattach package.

Remembers the processes a debugger was attached to (process path, user and
server) in a small most-recently-used history, persisted to a key/value
store, so they can be attached to again. Use ``python -m reattach`` or the
``reattach`` console script to launch the CLI.
"""

from __future__ import annotations

from .history import ReAttachHistory, TargetList
from .repository import HistoryRepository
from .store import JsonFileStore, MemoryStore, StoreError
from .target import Target, TargetFormatError

__all__ = [
    "ReAttachHistory",
    "TargetList",
    "HistoryRepository",
    "JsonFileStore",
    "MemoryStore",
    "StoreError",
    "Target",
    "TargetFormatError",
]
__version__ = "0.1.0"
