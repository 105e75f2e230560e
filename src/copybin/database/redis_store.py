import logging
from typing import Iterable, List, Optional

import redis

from copybin.config import RedisConfig
from copybin.database.base import HistoryStore
from copybin.database.records import dump_entries, load_entries
from copybin.exceptions import HistoryLoadError, HistoryStoreError
from copybin.models.entry import ClipboardEntry

logger = logging.getLogger(__name__)


class RedisHistoryStore(HistoryStore):
    """Keeps the history document under a single Redis key."""

    def __init__(self, client: Optional[redis.Redis] = None,
                 config: Optional[RedisConfig] = None):
        self.config = config or RedisConfig.from_env()
        self.key = self.config.key
        self.client = client or redis.Redis(
            host=self.config.host,
            port=self.config.port,
            db=self.config.db,
            password=self.config.password,
            decode_responses=self.config.decode_responses,
        )

    @classmethod
    def from_uri(cls, uri: str) -> "RedisHistoryStore":
        return cls(config=RedisConfig.from_uri(uri))

    def load(self) -> List[ClipboardEntry]:
        try:
            document = self.client.get(self.key)
        except redis.RedisError as e:
            raise HistoryLoadError(f"Cannot read {self.key!r} from Redis: {e}") from e

        if document is None:
            return []
        if isinstance(document, bytes):
            document = document.decode("utf-8", errors="replace")

        entries = load_entries(document)
        logger.info("Loaded %d history entries from redis key %s", len(entries), self.key)
        return entries

    def save(self, entries: Iterable[ClipboardEntry]) -> None:
        try:
            self.client.set(self.key, dump_entries(entries))
        except (redis.RedisError, ValueError) as e:
            raise HistoryStoreError(f"Cannot write {self.key!r} to Redis: {e}") from e

    def close(self) -> None:
        self.client.close()
