"""
Cross-platform pasteboard access.

Each platform module implements ``PasteboardSource`` for reading and writing
text and image data; ``get_pasteboard`` picks the one for this system.
"""

from copybin.clipboard.base import PasteboardSource, Snapshot
from copybin.clipboard.factory import get_pasteboard, get_pasteboard_class

__all__ = [
    'PasteboardSource',
    'Snapshot',
    'get_pasteboard',
    'get_pasteboard_class',
]
