"""Exceptions raised across Copybin.

None of these are fatal to the capture loop; the service catches each one and
degrades to a safe default (empty snapshot, raw image bytes, empty history).
"""


class CopybinError(Exception):
    """Base class for all Copybin errors."""


class PasteboardReadError(CopybinError):
    """The system pasteboard could not be read on this tick."""


class ImageDecodeError(CopybinError):
    """Captured image bytes could not be decoded."""


class HistoryStoreError(CopybinError):
    """Persisting the history failed."""


class HistoryLoadError(CopybinError):
    """Stored history could not be read or is malformed."""
