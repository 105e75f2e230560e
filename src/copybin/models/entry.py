from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ulid import ULID

IMAGE_PLACEHOLDER = "Copied image"


class EntryKind(str, Enum):
    TEXT = "text"
    URL = "url"
    EMAIL = "email"
    IMAGE = "image"


def classify(content: str) -> EntryKind:
    """Assign a kind to captured text. First matching rule wins."""
    if "@" in content and "." in content and not any(ch.isspace() for ch in content):
        return EntryKind.EMAIL
    if content.startswith("http") or content.startswith("www."):
        return EntryKind.URL
    return EntryKind.TEXT


def new_entry_id() -> str:
    return str(ULID())


@dataclass(frozen=True)
class ClipboardEntry:
    """Immutable record of one clipboard capture."""
    entry_id: str
    kind: EntryKind
    content: str
    created_at: datetime
    image_data: Optional[bytes] = None

    @classmethod
    def from_text(cls, content: str, created_at: datetime) -> "ClipboardEntry":
        return cls(
            entry_id=new_entry_id(),
            kind=classify(content),
            content=content,
            created_at=created_at,
        )

    @classmethod
    def from_image(cls, image_data: bytes, created_at: datetime) -> "ClipboardEntry":
        return cls(
            entry_id=new_entry_id(),
            kind=EntryKind.IMAGE,
            content=IMAGE_PLACEHOLDER,
            created_at=created_at,
            image_data=image_data,
        )

    @property
    def is_image(self) -> bool:
        return self.kind is EntryKind.IMAGE
