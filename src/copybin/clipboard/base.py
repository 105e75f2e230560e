import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """What the pasteboard held at one instant."""
    text: Optional[str] = None
    image: Optional[bytes] = None

    @property
    def is_empty(self) -> bool:
        return not self.image and not self.text


class PasteboardSource(ABC):

    @abstractmethod
    def read_snapshot(self) -> Snapshot:
        """Read the current pasteboard contents.

        Raises ``PasteboardReadError`` when the pasteboard is inaccessible.
        """

    @abstractmethod
    def _write_text(self, text: str) -> bool:
        pass

    @abstractmethod
    def _write_image(self, data: bytes) -> bool:
        pass

    def write(self, snapshot: Snapshot) -> bool:
        try:
            if snapshot.image:
                return self._write_image(snapshot.image)
            if snapshot.text is not None:
                return self._write_text(snapshot.text)
        except Exception:
            logger.exception("Failed to write to pasteboard")
        return False
