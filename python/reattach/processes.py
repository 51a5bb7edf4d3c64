"""Live process enumeration used to resolve attach targets."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import psutil

from .target import Target

LOGGER = logging.getLogger("reattach.processes")

_ATTRS = ["pid", "exe", "name", "username"]


class ProcessSource:
    """Enumerates debuggable local processes as targets."""

    def __init__(self, *, include_unnamed: bool = False) -> None:
        self.include_unnamed = include_unnamed

    def list_targets(self) -> List[Target]:
        targets: List[Target] = []
        for proc in psutil.process_iter(attrs=_ATTRS, ad_value=None):
            target = self._to_target(proc.info)
            if target is not None:
                targets.append(target)
        return targets

    def get(self, pid: int) -> Optional[Target]:
        try:
            proc = psutil.Process(int(pid))
            info = proc.as_dict(attrs=_ATTRS, ad_value=None)
        except (psutil.NoSuchProcess, psutil.ZombieProcess, ValueError):
            return None
        except psutil.AccessDenied as exc:
            LOGGER.debug("access denied for pid %s: %s", pid, exc)
            return None
        return self._to_target(info)

    def find(self, target: Target) -> Optional[Target]:
        """Return a running process matching *target*, preferring the same pid."""
        if not target.is_local:
            return None
        return pick_candidate(target, self.list_targets())

    def _to_target(self, info: dict) -> Optional[Target]:
        pid = info.get("pid")
        if pid is None:
            return None
        path = info.get("exe") or ""
        if not path:
            if not self.include_unnamed:
                return None
            path = info.get("name") or ""
        return Target(int(pid), path, info.get("username") or "")


def pick_candidate(target: Target, candidates: Iterable[Target]) -> Optional[Target]:
    matches = [candidate for candidate in candidates if target.matches_process(candidate)]
    if not matches:
        return None
    for candidate in matches:
        if candidate.process_id == target.process_id:
            return candidate
    return matches[0]


__all__ = ["ProcessSource", "pick_candidate"]
