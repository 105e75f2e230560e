from typing import Optional

try:
    from AppKit import NSImage, NSPasteboard, NSPasteboardTypePNG, NSPasteboardTypeString, NSPasteboardTypeTIFF
    from Foundation import NSData
    HAS_APPKIT = True
except ImportError:
    HAS_APPKIT = False

from copybin.clipboard.base import PasteboardSource, Snapshot
from copybin.exceptions import PasteboardReadError


class MacOSPasteboard(PasteboardSource):
    """General pasteboard access through PyObjC."""

    def read_snapshot(self) -> Snapshot:
        if not HAS_APPKIT:
            raise PasteboardReadError("AppKit is not available")

        try:
            pasteboard = NSPasteboard.generalPasteboard()
            types = pasteboard.types() or []
            image = self._get_image(pasteboard, types)
            text = None
            if NSPasteboardTypeString in types:
                text = pasteboard.stringForType_(NSPasteboardTypeString)
        except Exception as exc:
            raise PasteboardReadError(f"Cannot read general pasteboard: {exc}") from exc

        return Snapshot(text=str(text) if text is not None else None, image=image)

    def _get_image(self, pasteboard, types) -> Optional[bytes]:
        for pb_type in (NSPasteboardTypeTIFF, NSPasteboardTypePNG):
            if pb_type in types:
                data = pasteboard.dataForType_(pb_type)
                if data:
                    return bytes(data)
        return None

    def _write_text(self, text: str) -> bool:
        if not HAS_APPKIT:
            return False
        pasteboard = NSPasteboard.generalPasteboard()
        pasteboard.clearContents()
        return bool(pasteboard.setString_forType_(text, NSPasteboardTypeString))

    def _write_image(self, data: bytes) -> bool:
        if not HAS_APPKIT:
            return False
        ns_data = NSData.dataWithBytes_length_(data, len(data))
        image = NSImage.alloc().initWithData_(ns_data)
        if image is None:
            return False

        pasteboard = NSPasteboard.generalPasteboard()
        pasteboard.clearContents()
        return bool(pasteboard.setData_forType_(image.TIFFRepresentation(), NSPasteboardTypeTIFF))
