"""Read-side helpers for presenting the history.

Nothing here mutates the history; the presentation layer passes in the
``entries`` snapshot it got from the service.
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Union

from copybin.models.entry import ClipboardEntry, EntryKind


def filter_entries(
    entries: Iterable[ClipboardEntry],
    kind: Optional[Union[EntryKind, str]] = None,
    query: Optional[str] = None,
) -> List[ClipboardEntry]:
    """Keep entries of ``kind`` whose content contains ``query``, ignoring case."""
    selected = list(entries)

    if kind is not None:
        wanted = EntryKind(kind)
        selected = [entry for entry in selected if entry.kind is wanted]

    if query:
        needle = query.casefold()
        selected = [entry for entry in selected if needle in entry.content.casefold()]

    return selected


def format_timestamp(timestamp: datetime, now: Optional[datetime] = None) -> str:
    """Short label for a list row: clock time today, "Yesterday", else day/month."""
    now = now or datetime.now(timestamp.tzinfo)
    if timestamp.date() == now.date():
        return timestamp.strftime("%H:%M")
    if timestamp.date() == (now - timedelta(days=1)).date():
        return "Yesterday"
    return timestamp.strftime("%d/%m")


def preview(content: str, limit: int = 60) -> str:
    text = " ".join(content.split())
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"
