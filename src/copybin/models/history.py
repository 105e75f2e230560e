from __future__ import annotations

from datetime import datetime
from threading import RLock
from typing import Iterable, List, Optional

from copybin.models.entry import ClipboardEntry


class ClipboardHistory:
    """Ordered, bounded clipboard history, newest first.

    Text entries replace any earlier entry with the same content. Image
    entries arriving within ``image_window`` seconds of an image already at
    the front are dropped, since a single copy often surfaces as several
    pasteboard changes.
    """

    def __init__(
        self,
        max_items: int = 100,
        image_window: float = 1.0,
        entries: Optional[Iterable[ClipboardEntry]] = None,
    ) -> None:
        if max_items <= 0:
            raise ValueError("max_items must be > 0")
        self._max_items = max_items
        self._image_window = image_window
        self._items: List[ClipboardEntry] = list(entries or [])[:max_items]
        self._lock = RLock()

    @property
    def max_items(self) -> int:
        return self._max_items

    def add_text(self, entry: ClipboardEntry) -> None:
        with self._lock:
            self._items = [item for item in self._items if item.is_image or item.content != entry.content]
            self._push_front(entry)

    def add_image(self, entry: ClipboardEntry) -> bool:
        with self._lock:
            if self.is_recent_image(entry.created_at):
                return False
            self._push_front(entry)
            return True

    def is_recent_image(self, now: datetime) -> bool:
        with self._lock:
            if not self._items:
                return False
            front = self._items[0]
            if not front.is_image:
                return False
            return (now - front.created_at).total_seconds() < self._image_window

    def remove(self, entry_id: str) -> bool:
        with self._lock:
            remaining = [item for item in self._items if item.entry_id != entry_id]
            removed = len(remaining) != len(self._items)
            self._items = remaining
            return removed

    def get(self, entry_id: str) -> Optional[ClipboardEntry]:
        with self._lock:
            for item in self._items:
                if item.entry_id == entry_id:
                    return item
            return None

    def clear(self) -> None:
        with self._lock:
            self._items = []

    def items(self) -> List[ClipboardEntry]:
        with self._lock:
            return list(self._items)

    def _push_front(self, entry: ClipboardEntry) -> None:
        self._items.insert(0, entry)
        del self._items[self._max_items:]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self):
        return iter(self.items())
