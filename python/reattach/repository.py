"""Slot-based persistence of the ReAttach history."""

from __future__ import annotations

import logging
from typing import Optional

from .constants import HISTORY_SIZE, STORE_GROUP, slot_key
from .history import TargetList
from .store import PersistenceStore, StoreGroup
from .target import Target, TargetFormatError

LOGGER = logging.getLogger("reattach.repository")


class HistoryRepository:
    """Reads and writes history entries as numbered slots of one store group.

    Entry ``i`` (1-based, most recent first) lives in slot
    ``ReAttachHistoryItem<i>``. Saving deletes the slots past the current
    entry count so older entries cannot come back on the next load.
    """

    def __init__(
        self,
        store: PersistenceStore,
        *,
        group: str = STORE_GROUP,
        capacity: int = HISTORY_SIZE,
    ) -> None:
        self.store = store
        self.group = group
        self.capacity = capacity

    def load_targets(self) -> Optional[TargetList]:
        """Return the stored targets, or None when the group is missing or unreadable."""
        try:
            handle = self.store.open_group(self.group, writable=False)
        except Exception as exc:
            LOGGER.warning("cannot open history group %r: %s", self.group, exc)
            return None
        if handle is None:
            return None
        targets = TargetList(self.capacity)
        try:
            for index in range(1, self.capacity + 1):
                target = self._read_slot(handle, slot_key(index))
                if target is not None:
                    targets.append(target)
        finally:
            self._close(handle)
        return targets

    def save_targets(self, targets: TargetList) -> bool:
        """Write *targets* into the group; False if any slot update failed."""
        try:
            handle = self.store.open_group(self.group, writable=True)
        except Exception as exc:
            LOGGER.warning("cannot create history group %r: %s", self.group, exc)
            return False
        if handle is None:
            return False
        items = list(targets)[: self.capacity]
        ok = True
        try:
            for index in range(1, self.capacity + 1):
                slot = slot_key(index)
                try:
                    if index <= len(items):
                        handle.set_value(slot, items[index - 1].to_json())
                    else:
                        handle.delete_value(slot)
                except Exception as exc:
                    LOGGER.warning("failed to update history slot %s: %s", slot, exc)
                    ok = False
        finally:
            if not self._close(handle):
                ok = False
        return ok

    @staticmethod
    def _read_slot(handle: StoreGroup, slot: str) -> Optional[Target]:
        try:
            raw = handle.get_value(slot)
        except Exception as exc:
            LOGGER.debug("failed to read history slot %s: %s", slot, exc)
            return None
        if raw is None:
            return None
        try:
            return Target.from_json(raw)
        except TargetFormatError:
            return None

    @staticmethod
    def _close(handle: StoreGroup) -> bool:
        try:
            handle.close()
        except Exception as exc:
            LOGGER.warning("failed to close history group: %s", exc)
            return False
        return True


__all__ = ["HistoryRepository"]
