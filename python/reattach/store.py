"""Key/value persistence backends for the ReAttach history."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Optional, Protocol

LOGGER = logging.getLogger("reattach.store")


class StoreError(RuntimeError):
    """Raised when a store cannot read or write its backing data."""


class StoreGroup(Protocol):
    """Open handle on one named group of string slots."""

    def get_value(self, slot: str) -> Optional[str]: ...

    def set_value(self, slot: str, value: str) -> None: ...

    def delete_value(self, slot: str) -> None: ...

    def close(self) -> None: ...


class PersistenceStore(Protocol):
    def open_group(self, name: str, *, writable: bool = False) -> Optional[StoreGroup]: ...


class _DictGroup:
    """Group handle over a plain dict; ``on_close`` runs when the handle closes."""

    def __init__(self, values: Dict[str, str], *, writable: bool, on_close=None) -> None:
        self._values = values
        self._writable = writable
        self._on_close = on_close
        self.closed = False

    def get_value(self, slot: str) -> Optional[str]:
        self._check_open()
        value = self._values.get(slot)
        return value if isinstance(value, str) else None

    def set_value(self, slot: str, value: str) -> None:
        self._check_writable()
        self._values[slot] = str(value)

    def delete_value(self, slot: str) -> None:
        self._check_writable()
        self._values.pop(slot, None)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self._on_close is not None:
            self._on_close(self._values)

    def _check_open(self) -> None:
        if self.closed:
            raise StoreError("group handle is closed")

    def _check_writable(self) -> None:
        self._check_open()
        if not self._writable:
            raise StoreError("group was opened read-only")


class MemoryStore:
    """In-memory store, used for tests and sessions without a backing file."""

    def __init__(self, groups: Optional[Dict[str, Dict[str, str]]] = None, *, fail_open: bool = False) -> None:
        self.groups: Dict[str, Dict[str, str]] = {name: dict(values) for name, values in (groups or {}).items()}
        self.fail_open = fail_open

    def open_group(self, name: str, *, writable: bool = False) -> Optional[_DictGroup]:
        if self.fail_open:
            return None
        values = self.groups.get(name)
        if values is None:
            if not writable:
                return None
            values = self.groups.setdefault(name, {})
        return _DictGroup(values, writable=writable)


class JsonFileStore:
    """Groups of string slots kept in a single JSON document on disk.

    Writable handles buffer their changes and flush them when closed, using
    a temporary file and an atomic replace. A corrupt document reads as
    empty so the history starts fresh instead of failing.
    """

    def __init__(self, path: Path | str) -> None:
        self._lock = threading.Lock()
        self.path = Path(path).expanduser()

    # ------------------------------------------------------------------ helpers

    def _read(self) -> Dict[str, Dict[str, str]]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StoreError(f"cannot read {self.path}: {exc}") from exc
        try:
            payload = json.loads(raw.decode("utf-8"))
        except ValueError:
            LOGGER.debug("ignoring corrupt store file %s", self.path)
            return {}
        if not isinstance(payload, dict):
            return {}
        return {str(name): values for name, values in payload.items() if isinstance(values, dict)}

    def _write(self, groups: Dict[str, Dict[str, str]]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(groups, indent=2, sort_keys=True), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            raise StoreError(f"cannot write {self.path}: {exc}") from exc

    def _commit(self, name: str, values: Dict[str, str]) -> None:
        with self._lock:
            groups = self._read()
            groups[name] = dict(values)
            self._write(groups)

    # ----------------------------------------------------------------- public API

    def open_group(self, name: str, *, writable: bool = False) -> Optional[_DictGroup]:
        with self._lock:
            groups = self._read()
        values = groups.get(name)
        if values is None:
            if not writable:
                return None
            values = {}
        on_close = (lambda data: self._commit(name, data)) if writable else None
        return _DictGroup(dict(values), writable=writable, on_close=on_close)


__all__ = ["StoreError", "StoreGroup", "PersistenceStore", "MemoryStore", "JsonFileStore"]
