"""On-disk record format shared by every history store.

A stored history is a JSON array, newest first, of::

    {
        "id": "01J9...",
        "content": "hello",
        "imageData": null,            # base64 for image entries
        "timestamp": "2025-10-06T12:45:00.123456",
        "type": "text"                # text | url | email | image
    }
"""

import base64
import binascii
import json
from datetime import datetime
from typing import Iterable, List, Optional

from pydantic import BaseModel, ValidationError

from copybin.exceptions import HistoryLoadError
from copybin.models.entry import ClipboardEntry, EntryKind


class StoredEntry(BaseModel):
    id: str
    content: str
    imageData: Optional[str] = None
    timestamp: datetime
    type: EntryKind

    @classmethod
    def from_entry(cls, entry: ClipboardEntry) -> "StoredEntry":
        image_data = None
        if entry.image_data is not None:
            image_data = base64.b64encode(entry.image_data).decode("ascii")
        return cls(
            id=entry.entry_id,
            content=entry.content,
            imageData=image_data,
            timestamp=entry.created_at,
            type=entry.kind,
        )

    def to_entry(self) -> ClipboardEntry:
        image_data = None
        if self.imageData is not None:
            image_data = base64.b64decode(self.imageData, validate=True)
        return ClipboardEntry(
            entry_id=self.id,
            kind=self.type,
            content=self.content,
            created_at=self.timestamp,
            image_data=image_data,
        )


def dump_entries(entries: Iterable[ClipboardEntry]) -> str:
    records = [StoredEntry.from_entry(entry).model_dump(mode="json") for entry in entries]
    return json.dumps(records, ensure_ascii=False)


def load_entries(document: str) -> List[ClipboardEntry]:
    try:
        records = json.loads(document)
    except json.JSONDecodeError as exc:
        raise HistoryLoadError(f"History is not valid JSON: {exc}") from exc

    if not isinstance(records, list):
        raise HistoryLoadError(
            f"History must be a JSON array, got {type(records).__name__}")

    try:
        return [StoredEntry.model_validate(record).to_entry() for record in records]
    except (ValidationError, binascii.Error, ValueError) as exc:
        raise HistoryLoadError(f"Malformed history record: {exc}") from exc
