from copybin.models.entry import ClipboardEntry, EntryKind, IMAGE_PLACEHOLDER, classify
from copybin.models.history import ClipboardHistory

__all__ = [
    'ClipboardEntry',
    'ClipboardHistory',
    'EntryKind',
    'IMAGE_PLACEHOLDER',
    'classify',
]
