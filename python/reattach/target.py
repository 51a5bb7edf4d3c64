"""Attach targets remembered by the ReAttach history."""

from __future__ import annotations

import json
import ntpath
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


class TargetFormatError(ValueError):
    """Raised when a stored history entry cannot be decoded."""


@dataclass(eq=False)
class Target:
    """One attachable process, identified by path, user and server.

    Equality ignores the process id and attach state so that a process
    restarted under a new pid maps onto the same history entry.
    """

    process_id: int
    process_path: str
    process_user: str
    server_name: str = ""
    is_attached: bool = False
    engine: Any = None
    process_name: str = field(default="", init=False)

    def __post_init__(self) -> None:
        if self.process_path is None:
            self.process_path = ""
        self.process_user = self.process_user or ""
        self.server_name = self.server_name or ""
        self.process_name = _derive_name(self.process_path)

    @property
    def is_local(self) -> bool:
        return not self.server_name

    def _identity(self) -> Tuple[str, str, str]:
        return (
            self.process_path.lower(),
            self.process_user.lower(),
            self.server_name.lower(),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Target):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def matches_process(self, other: Optional["Target"]) -> bool:
        """Return True when *other* is a live instance of this entry."""
        return other is not None and self == other

    def display_name(self) -> str:
        if self.is_local:
            return f"{self.process_name} ({self.process_user})"
        return f"{self.process_name} ({self.process_user}@{self.server_name})"

    def __str__(self) -> str:
        return self.display_name()

    # ------------------------------------------------------------------
    # Slot encoding
    # ------------------------------------------------------------------
    def as_dict(self) -> Dict[str, Any]:
        """Serialize the target using the persisted field names."""
        return {
            "ProcessId": self.process_id,
            "ProcessName": self.process_name,
            "ProcessPath": self.process_path,
            "ProcessUser": self.process_user,
            "ServerName": self.server_name,
            "IsAttached": self.is_attached,
            "IsLocal": self.is_local,
            "Engine": self.engine,
        }

    def to_json(self) -> str:
        return json.dumps(self.as_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Target":
        """
        Rebuild a target from its persisted dictionary.

        ``IsLocal`` is ignored since it is derived from ``ServerName``. A
        stored ``ProcessName`` is kept as-is; when missing it is derived
        from the path again.

        Raises:
            TargetFormatError: If required fields are missing or mistyped.
        """
        if not isinstance(data, dict):
            raise TargetFormatError("history entry must be a JSON object")
        path = data.get("ProcessPath")
        if not isinstance(path, str):
            raise TargetFormatError("ProcessPath must be a string")
        pid = data.get("ProcessId", 0)
        if isinstance(pid, bool) or not isinstance(pid, int):
            raise TargetFormatError("ProcessId must be an integer")
        attached = data.get("IsAttached", False)
        if not isinstance(attached, bool):
            raise TargetFormatError("IsAttached must be a boolean")
        target = cls(
            pid,
            path,
            _optional_text(data, "ProcessUser"),
            _optional_text(data, "ServerName"),
            is_attached=attached,
            engine=data.get("Engine"),
        )
        name = data.get("ProcessName")
        if name is not None:
            if not isinstance(name, str):
                raise TargetFormatError("ProcessName must be a string")
            target.process_name = name
        return target

    @classmethod
    def from_json(cls, text: str) -> "Target":
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as exc:
            raise TargetFormatError(f"invalid history entry: {exc}") from exc
        return cls.from_dict(data)


def _derive_name(path: Any) -> str:
    try:
        return ntpath.basename(path)
    except (TypeError, ValueError, AttributeError):
        return path


def _optional_text(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TargetFormatError(f"{key} must be a string")
    return value


__all__ = ["Target", "TargetFormatError"]
