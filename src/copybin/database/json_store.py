import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

from copybin.config import default_store_path
from copybin.database.base import HistoryStore
from copybin.database.records import dump_entries, load_entries
from copybin.exceptions import HistoryLoadError, HistoryStoreError
from copybin.models.entry import ClipboardEntry

logger = logging.getLogger(__name__)


class JsonFileStore(HistoryStore):
    """Keeps the history as a single JSON document on disk."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else default_store_path()

    def load(self) -> List[ClipboardEntry]:
        if not self.path.exists():
            logger.debug("No history file at %s", self.path)
            return []

        try:
            document = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise HistoryLoadError(f"Cannot read {self.path}: {e}") from e

        entries = load_entries(document)
        logger.info("Loaded %d history entries from %s", len(entries), self.path)
        return entries

    def save(self, entries: Iterable[ClipboardEntry]) -> None:
        tmp_name = None
        try:
            document = dump_entries(entries)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(document)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except (OSError, ValueError) as e:
            raise HistoryStoreError(f"Cannot write {self.path}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.remove(tmp_name)
                except OSError:
                    pass
        logger.debug("Saved history to %s", self.path)
