"""Clipboard history service.

Polls the pasteboard on a background thread, turns new content into history
entries and writes the history back to its store once mutations settle.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Union

from copybin.clipboard.base import PasteboardSource, Snapshot
from copybin.config import HistoryConfig
from copybin.database.base import HistoryStore
from copybin.exceptions import HistoryLoadError, HistoryStoreError, PasteboardReadError
from copybin.models.entry import ClipboardEntry
from copybin.models.history import ClipboardHistory
from copybin.utils.debounce import Debouncer
from copybin.utils.thumbnail import make_thumbnail

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeenText:
    text: str


@dataclass(frozen=True)
class SeenImage:
    data: bytes


# Last pasteboard content the poll loop acted on.
LastSeen = Union[None, SeenText, SeenImage]

HistoryListener = Callable[[List[ClipboardEntry]], None]


class ClipboardService:
    """Owns the clipboard history and keeps it in sync with the pasteboard."""

    def __init__(
        self,
        pasteboard: PasteboardSource,
        store: HistoryStore,
        config: Optional[HistoryConfig] = None,
        clock: Callable[[], datetime] = datetime.now,
        auto_register: bool = False,
    ) -> None:
        """Load stored history and prepare the poll loop.

        Args:
            pasteboard: Source the poll loop reads and ``copy`` writes.
            store: Backend the history is loaded from and saved to.
            config: Intervals and limits; defaults to ``HistoryConfig()``.
            clock: Returns the timestamp stamped on new entries.
            auto_register: When ``True`` polling starts immediately.
        """
        self.config = config or HistoryConfig()
        self.pasteboard = pasteboard
        self.store = store
        self._clock = clock
        self._lock = threading.RLock()
        self._stop_event = threading.Event()
        self._poll_thread: Optional[threading.Thread] = None
        self._is_running = False
        self._last_seen: LastSeen = None
        self._listeners: List[HistoryListener] = []
        self._persister = Debouncer(self.config.persist_delay, self._save, name="copybin-persist")
        self.history = ClipboardHistory(
            max_items=self.config.max_items,
            image_window=self.config.image_window,
            entries=self._load(),
        )

        if auto_register:
            self.start()

    @property
    def entries(self) -> List[ClipboardEntry]:
        return self.history.items()

    @property
    def last_seen(self) -> LastSeen:
        return self._last_seen

    @property
    def is_running(self) -> bool:
        return self._is_running

    def get(self, entry_id: str) -> Optional[ClipboardEntry]:
        return self.history.get(entry_id)

    def add_listener(self, listener: HistoryListener) -> None:
        """Register a callback that receives the history after every change."""
        self._listeners.append(listener)

    # ---------------------------------------------------------------------
    # Lifecycle management
    # ---------------------------------------------------------------------
    def start(self) -> None:
        with self._lock:
            if self._is_running:
                logger.debug("ClipboardService already running")
                return

            logger.info("Starting clipboard polling (interval=%ss)", self.config.poll_interval)
            self._stop_event.clear()
            self._is_running = True
            self._poll_thread = threading.Thread(
                target=self._poll_loop, name="copybin-poll", daemon=True)
            self._poll_thread.start()

    def stop(self) -> None:
        """Stop polling and write out any pending history change."""
        with self._lock:
            was_running = self._is_running
            self._is_running = False
            self._stop_event.set()

        if was_running:
            logger.info("Stopping clipboard polling")
        if self._poll_thread is not None:
            self._poll_thread.join(timeout=1.0)
            self._poll_thread = None

        self.flush()

    def run_forever(self) -> None:
        try:
            if not self._is_running:
                self.start()

            while not self._stop_event.wait(timeout=self.config.poll_interval):
                continue
        except KeyboardInterrupt:
            logger.info("ClipboardService interrupted by user")
        finally:
            self.stop()

    def flush(self) -> bool:
        """Write a pending history change now instead of waiting for the debounce."""
        return self._persister.flush()

    # ---------------------------------------------------------------------
    # Capture
    # ---------------------------------------------------------------------
    def _poll_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.poll_once()
            except Exception:
                logger.exception("Error while polling the pasteboard")
            self._stop_event.wait(self.config.poll_interval)

    def poll_once(self) -> Optional[ClipboardEntry]:
        """Check the pasteboard once and record anything new.

        An image on the pasteboard takes priority over text, and only one
        entry is produced per call. Returns the inserted entry, if any.
        """
        with self._lock:
            try:
                snapshot = self.pasteboard.read_snapshot()
            except PasteboardReadError as exc:
                logger.debug("Pasteboard unreadable, skipping tick: %s", exc)
                return None

            if snapshot.image:
                seen = SeenImage(snapshot.image)
                if seen == self._last_seen:
                    return None
                self._last_seen = seen
                return self.insert_image(snapshot.image)

            if snapshot.text:
                seen = SeenText(snapshot.text)
                if seen == self._last_seen:
                    return None
                self._last_seen = seen
                return self.insert_text(snapshot.text)

        return None

    # ---------------------------------------------------------------------
    # Mutations
    # ---------------------------------------------------------------------
    def insert_text(self, content: str) -> Optional[ClipboardEntry]:
        if not content:
            return None

        with self._lock:
            entry = ClipboardEntry.from_text(content, self._clock())
            self.history.add_text(entry)
            logger.info("Clipboard captured: %s", entry.kind.value)
            self._changed()
        return entry

    def insert_image(self, data: bytes) -> Optional[ClipboardEntry]:
        with self._lock:
            now = self._clock()
            if self.history.is_recent_image(now):
                logger.debug("Image capture within %ss of the previous one, skipped",
                             self.config.image_window)
                return None

            entry = ClipboardEntry.from_image(self._thumbnail(data), now)
            self.history.add_image(entry)
            logger.info("Clipboard captured: %s (%d bytes)", entry.kind.value, len(entry.image_data))
            self._changed()
        return entry

    def delete(self, entry_id: str) -> bool:
        with self._lock:
            removed = self.history.remove(entry_id)
            if removed:
                logger.debug("Deleted entry %s", entry_id)
            self._changed()
        return removed

    def clear_all(self) -> None:
        with self._lock:
            self.history.clear()
            logger.info("Clipboard history cleared")
            self._changed()

    def copy(self, entry: ClipboardEntry) -> bool:
        """Put ``entry`` back on the pasteboard without re-capturing it."""
        if entry.is_image and entry.image_data:
            written = Snapshot(image=entry.image_data)
        else:
            written = Snapshot(text=entry.content)

        with self._lock:
            ok = self.pasteboard.write(written)
            if not ok:
                logger.warning("Could not copy entry %s to the pasteboard", entry.entry_id)
                return False

            # The pasteboard may re-encode what it was given, so remember
            # what it actually holds now.
            try:
                current = self.pasteboard.read_snapshot()
            except PasteboardReadError:
                current = written
            self._last_seen = self._seen_from(current) or self._seen_from(written)
        return True

    # ---------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------
    @staticmethod
    def _seen_from(snapshot: Snapshot) -> LastSeen:
        if snapshot.image:
            return SeenImage(snapshot.image)
        if snapshot.text:
            return SeenText(snapshot.text)
        return None

    def _thumbnail(self, data: bytes) -> bytes:
        try:
            return make_thumbnail(
                data,
                max_dimension=self.config.thumbnail_max_dimension,
                quality=self.config.thumbnail_quality,
            )
        except Exception as exc:
            logger.warning("Thumbnail failed, storing original image bytes: %s", exc)
            return data

    def _changed(self) -> None:
        snapshot = self.history.items()
        self._persister.trigger(snapshot)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Error while notifying history listener")

    def _load(self) -> List[ClipboardEntry]:
        try:
            return self.store.load()
        except HistoryLoadError as exc:
            logger.warning("Starting with empty history: %s", exc)
            return []

    def _save(self, entries: List[ClipboardEntry]) -> None:
        try:
            self.store.save(entries)
        except HistoryStoreError:
            logger.exception("Failed to persist clipboard history")
        except Exception:
            logger.exception("Unexpected error while persisting clipboard history")

    # ---------------------------------------------------------------------
    # Context manager helpers
    # ---------------------------------------------------------------------
    def __enter__(self) -> "ClipboardService":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
