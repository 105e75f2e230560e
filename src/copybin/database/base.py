from abc import ABC, abstractmethod
from typing import Iterable, List

from copybin.models.entry import ClipboardEntry


class HistoryStore(ABC):
    """Persistence backend for the clipboard history."""

    @abstractmethod
    def load(self) -> List[ClipboardEntry]:
        """Return the stored history, newest first.

        Raises ``HistoryLoadError`` when the stored data cannot be read.
        """

    @abstractmethod
    def save(self, entries: Iterable[ClipboardEntry]) -> None:
        """Replace the stored history. Raises ``HistoryStoreError`` on failure."""

    def close(self) -> None:
        pass
