"""Shared constants for the ReAttach history and CLI."""

from __future__ import annotations

from pathlib import Path

# Number of targets remembered; writer and reader must agree on it.
HISTORY_SIZE = 10

STORE_GROUP = "ReAttach"
HISTORY_SLOT_PREFIX = "ReAttachHistoryItem"

DEFAULT_STORE_PATH = Path.home() / ".reattach" / "history.json"
DEFAULT_COMMAND_HISTORY_PATH = Path.home() / ".reattach-cmd-history"

STORE_ENV = "REATTACH_STORE"
LOG_LEVEL_ENV = "REATTACH_LOG"

DEFAULT_POLL_INTERVAL = 0.5


def slot_key(index: int) -> str:
    """Return the 1-based slot name used for history entry *index*."""
    return f"{HISTORY_SLOT_PREFIX}{int(index)}"


__all__ = [
    "HISTORY_SIZE",
    "STORE_GROUP",
    "HISTORY_SLOT_PREFIX",
    "DEFAULT_STORE_PATH",
    "DEFAULT_COMMAND_HISTORY_PATH",
    "STORE_ENV",
    "LOG_LEVEL_ENV",
    "DEFAULT_POLL_INTERVAL",
    "slot_key",
]
