"""Attach bookkeeping shared by the CLI commands."""

from __future__ import annotations

import logging
import time
from typing import Dict, List, Optional, Protocol

from .constants import DEFAULT_POLL_INTERVAL
from .history import ReAttachHistory
from .target import Target

LOGGER = logging.getLogger("reattach.session")


class ReAttachError(RuntimeError):
    """Raised when an attach, detach or reattach request cannot be served."""


class TargetSource(Protocol):
    def list_targets(self) -> List[Target]: ...

    def get(self, pid: int) -> Optional[Target]: ...

    def find(self, target: Target) -> Optional[Target]: ...


class ReAttachSession:
    """Records attached targets in the history and resolves entries back to processes."""

    def __init__(
        self,
        history: ReAttachHistory,
        processes: TargetSource,
        *,
        autosave: bool = True,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self.history = history
        self.processes = processes
        self.autosave = autosave
        self.poll_interval = poll_interval
        self.attached: Dict[int, Target] = {}

    def attach(self, pid: int) -> Target:
        """Attach to the running process *pid*."""
        target = self.processes.get(pid)
        if target is None:
            raise ReAttachError(f"no process with pid {pid}")
        return self._attach_target(target)

    def reattach(self, index: int = 0, *, wait: float = 0.0) -> Target:
        """Attach to a running instance of history entry *index* (0 = most recent).

        With *wait* > 0 the process list is polled until the process shows up
        or the timeout expires.
        """
        items = self.history.items
        if not 0 <= index < len(items):
            raise ReAttachError(f"no history entry #{index + 1}")
        entry = items[index]
        if not entry.is_local:
            raise ReAttachError(f"{entry} runs on {entry.server_name}; only local processes can be resolved")
        deadline = time.monotonic() + max(0.0, float(wait or 0.0))
        candidate = self.processes.find(entry)
        while candidate is None:
            if time.monotonic() >= deadline:
                raise ReAttachError(f"{entry} is not running")
            time.sleep(self.poll_interval)
            candidate = self.processes.find(entry)
        if candidate.engine is None:
            candidate.engine = entry.engine
        return self._attach_target(candidate)

    def detach(self, pid: Optional[int] = None) -> List[Target]:
        """Detach from *pid*, or from every attached target when omitted."""
        if pid is None:
            detached = list(self.attached.values())
            self.attached.clear()
        else:
            target = self.attached.pop(pid, None)
            detached = [target] if target is not None else []
        for target in detached:
            target.is_attached = False
        stale = self.history.mark_detached(pid)
        if pid is not None and not detached and not stale:
            raise ReAttachError(f"pid {pid} is not attached")
        self._persist()
        return detached + stale

    def _attach_target(self, target: Target) -> Target:
        target.is_attached = True
        self.attached[target.process_id] = target
        self.history.add_first(target)
        LOGGER.debug("attached to %s pid=%s", target, target.process_id)
        self._persist()
        return target

    def _persist(self) -> None:
        if not self.autosave:
            return
        if not self.history.save():
            LOGGER.warning("failed to save attach history")


__all__ = ["ReAttachError", "ReAttachSession", "TargetSource"]
