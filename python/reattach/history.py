"""Most-recently-used history of attach targets."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Protocol

from .constants import HISTORY_SIZE
from .target import Target

LOGGER = logging.getLogger("reattach.history")


class TargetList:
    """Bounded, deduplicating target list ordered most-recent-first."""

    def __init__(self, capacity: int = HISTORY_SIZE) -> None:
        self.capacity = max(1, int(capacity or 1))
        self._items: List[Target] = []

    def add_first(self, target: Target) -> None:
        """Insert *target* at the front, replacing an equal entry and trimming the tail."""
        self._items = [item for item in self._items if item != target]
        self._items.insert(0, target)
        del self._items[self.capacity :]

    def append(self, target: Target) -> bool:
        """Add *target* at the tail if it is new and there is room left."""
        if len(self._items) >= self.capacity or target in self._items:
            return False
        self._items.append(target)
        return True

    def find(self, target: Target) -> Optional[Target]:
        for item in self._items:
            if item == target:
                return item
        return None

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> List[Target]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Target]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Target:
        return self._items[index]

    def __contains__(self, target: object) -> bool:
        return target in self._items

    def __repr__(self) -> str:
        return f"TargetList(capacity={self.capacity}, items={self._items!r})"


class TargetRepository(Protocol):
    def load_targets(self) -> Optional[TargetList]: ...

    def save_targets(self, targets: TargetList) -> bool: ...


class ReAttachHistory:
    """Owns the MRU target list and moves it to and from a repository."""

    def __init__(self, repository: TargetRepository, *, capacity: int = HISTORY_SIZE) -> None:
        self.repository = repository
        self.capacity = capacity
        self.items = TargetList(capacity)
        self.loaded = False

    def add_first(self, target: Target) -> None:
        self.items.add_first(target)

    def find(self, target: Target) -> Optional[Target]:
        return self.items.find(target)

    def clear(self) -> None:
        self.items.clear()

    def mark_detached(self, pid: Optional[int] = None) -> List[Target]:
        """Clear the attached flag for *pid* (or every entry) and return the changed targets."""
        changed: List[Target] = []
        for item in self.items:
            if not item.is_attached:
                continue
            if pid is not None and item.process_id != pid:
                continue
            item.is_attached = False
            changed.append(item)
        return changed

    def load(self) -> bool:
        """Replace the items with the stored list; False when nothing was stored."""
        self.loaded = True
        try:
            targets = self.repository.load_targets()
        except Exception as exc:
            LOGGER.warning("history load failed: %s", exc)
            targets = None
        if targets is None:
            LOGGER.debug("no stored history, starting empty")
            self.items = TargetList(self.capacity)
            return False
        items = TargetList(self.capacity)
        for target in targets:
            items.append(target)
        self.items = items
        return True

    def save(self) -> bool:
        try:
            return bool(self.repository.save_targets(self.items))
        except Exception as exc:
            LOGGER.warning("history save failed: %s", exc)
            return False


__all__ = ["TargetList", "TargetRepository", "ReAttachHistory"]
