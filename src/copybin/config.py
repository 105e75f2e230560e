from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv


def default_store_path() -> Path:
    return Path.home() / ".copybin" / "history.json"


def _to_bool(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class HistoryConfig:
    """Tunables for the capture loop, retention and persistence."""

    poll_interval: float = 1.0
    max_items: int = 100
    image_window: float = 1.0
    persist_delay: float = 0.5
    thumbnail_max_dimension: int = 360
    thumbnail_quality: float = 0.65
    store_path: Path = field(default_factory=default_store_path)
    redis_uri: Optional[str] = None

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be > 0")
        if self.max_items <= 0:
            raise ValueError("max_items must be > 0")
        if self.image_window < 0:
            raise ValueError("image_window must be >= 0")
        if self.persist_delay < 0:
            raise ValueError("persist_delay must be >= 0")
        if self.thumbnail_max_dimension <= 0:
            raise ValueError("thumbnail_max_dimension must be > 0")
        if not 0 < self.thumbnail_quality <= 1:
            raise ValueError("thumbnail_quality must be in (0, 1]")

    @classmethod
    def from_env(cls, *, env_path: Optional[Path] = None) -> "HistoryConfig":
        load_dotenv(dotenv_path=env_path)

        store_raw = os.getenv("COPYBIN_STORE_PATH")
        store_path = Path(store_raw).expanduser() if store_raw else default_store_path()

        return cls(
            poll_interval=_env_float("COPYBIN_POLL_INTERVAL", cls.poll_interval),
            max_items=_env_int("COPYBIN_MAX_ITEMS", cls.max_items),
            image_window=_env_float("COPYBIN_IMAGE_WINDOW", cls.image_window),
            persist_delay=_env_float("COPYBIN_PERSIST_DELAY", cls.persist_delay),
            thumbnail_max_dimension=_env_int(
                "COPYBIN_THUMBNAIL_SIZE", cls.thumbnail_max_dimension),
            thumbnail_quality=_env_float(
                "COPYBIN_THUMBNAIL_QUALITY", cls.thumbnail_quality),
            store_path=store_path,
            redis_uri=os.getenv("COPYBIN_REDIS_URI") or None,
        )


@dataclass(frozen=True)
class RedisConfig:
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: Optional[str] = None
    decode_responses: bool = True
    key: str = "copybin:history"

    @classmethod
    def from_env(cls, *, env_path: Optional[Path] = None) -> "RedisConfig":
        load_dotenv(dotenv_path=env_path)

        uri = os.getenv("REDIS_URI")
        if uri:
            return cls.from_uri(uri)

        host = os.getenv("REDIS_HOST", cls.host)
        port_raw = os.getenv("REDIS_PORT")
        db_raw = os.getenv("REDIS_DB")
        password = os.getenv("REDIS_PASSWORD") or None
        decode = _to_bool(os.getenv("REDIS_DECODE_RESPONSES"), default=True)
        key = os.getenv("COPYBIN_REDIS_KEY", cls.key)

        port = int(port_raw) if port_raw else cls.port
        db = int(db_raw) if db_raw else cls.db

        return cls(host=host, port=port, db=db, password=password,
                   decode_responses=decode, key=key)

    @classmethod
    def from_uri(cls, uri: str) -> "RedisConfig":
        parsed = urlparse(uri)
        if parsed.scheme not in {"redis", "rediss"}:
            raise ValueError(
                f"Unsupported Redis URI scheme: {parsed.scheme!r}")

        host = parsed.hostname or cls.host
        port = parsed.port or cls.port
        password = parsed.password or None
        db_fragment = parsed.path.lstrip("/")
        db = int(db_fragment) if db_fragment else cls.db

        decode = _to_bool(os.getenv("REDIS_DECODE_RESPONSES"), default=True)
        key = os.getenv("COPYBIN_REDIS_KEY", cls.key)

        return cls(host=host, port=port, db=db, password=password,
                   decode_responses=decode, key=key)
