"""Service layer for Copybin."""

from copybin.services.clipboard_service import ClipboardService, SeenImage, SeenText

__all__ = ["ClipboardService", "SeenImage", "SeenText"]
