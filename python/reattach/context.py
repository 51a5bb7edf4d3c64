"""CLI context: configuration plus lazily created history and session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .history import ReAttachHistory
from .processes import ProcessSource
from .repository import HistoryRepository
from .session import ReAttachSession
from .store import JsonFileStore, MemoryStore, PersistenceStore

LOGGER = logging.getLogger("reattach.context")


@dataclass
class ReAttachContext:
    """Holds shared CLI state."""

    store_path: Optional[Path] = None
    json_output: bool = False
    poll_interval: Optional[float] = None
    _store: Optional[PersistenceStore] = field(default=None, init=False, repr=False)
    _history: Optional[ReAttachHistory] = field(default=None, init=False, repr=False)
    _session: Optional[ReAttachSession] = field(default=None, init=False, repr=False)

    def ensure_store(self) -> PersistenceStore:
        if self._store is None:
            if self.store_path is None:
                self._store = MemoryStore()
            else:
                self._store = JsonFileStore(self.store_path)
        return self._store

    def ensure_history(self) -> ReAttachHistory:
        """Create the history and load it from the store on first use."""
        if self._history is not None:
            return self._history
        history = ReAttachHistory(HistoryRepository(self.ensure_store()))
        if not history.load():
            LOGGER.debug("history store %s had no entries", self.store_label)
        self._history = history
        return history

    def ensure_session(self) -> ReAttachSession:
        if self._session is not None:
            return self._session
        session = ReAttachSession(self.ensure_history(), ProcessSource())
        if self.poll_interval is not None:
            session.poll_interval = self.poll_interval
        self._session = session
        return session

    @property
    def history(self) -> Optional[ReAttachHistory]:
        return self._history

    @property
    def session(self) -> Optional[ReAttachSession]:
        return self._session

    @property
    def store_label(self) -> str:
        return str(self.store_path) if self.store_path is not None else "(memory)"

    def shutdown(self) -> None:
        """Detach everything still attached and persist the history."""
        session = self._session
        if session and session.attached:
            session.detach()
        elif self._history is not None and not self._history.save():
            LOGGER.warning("failed to save history to %s", self.store_label)
