import io
import time
from typing import Optional

import win32clipboard as wc
from PIL import Image, ImageGrab

from copybin.clipboard.base import PasteboardSource, Snapshot
from copybin.exceptions import PasteboardReadError


class WindowsPasteboard(PasteboardSource):

    def read_snapshot(self) -> Snapshot:
        image = self._from_imagegrab()

        if not self._open():
            raise PasteboardReadError("Clipboard is locked by another process")
        try:
            text = None
            if wc.IsClipboardFormatAvailable(wc.CF_UNICODETEXT):
                try:
                    text = wc.GetClipboardData(wc.CF_UNICODETEXT)
                except Exception:
                    text = None
        finally:
            self._close()

        return Snapshot(text=text, image=image)

    def _from_imagegrab(self) -> Optional[bytes]:
        try:
            clipboard_data = ImageGrab.grabclipboard()
        except Exception:
            return None

        # A list means file paths were copied, not pixels.
        if clipboard_data is None or not hasattr(clipboard_data, "save"):
            return None

        output = io.BytesIO()
        try:
            clipboard_data.save(output, format="PNG")
        except Exception:
            return None
        return output.getvalue()

    def _open(self) -> bool:
        for _ in range(3):
            try:
                wc.OpenClipboard()
                return True
            except Exception:
                time.sleep(0.05)
        return False

    def _close(self) -> None:
        try:
            wc.CloseClipboard()
        except Exception:
            pass

    def _write_text(self, text: str) -> bool:
        if not self._open():
            return False
        try:
            wc.EmptyClipboard()
            wc.SetClipboardData(wc.CF_UNICODETEXT, text)
            return True
        finally:
            self._close()

    def _write_image(self, data: bytes) -> bool:
        image = Image.open(io.BytesIO(data))

        if image.mode == "RGBA":
            background = Image.new("RGB", image.size, (255, 255, 255))
            background.paste(image, mask=image.split()[3])
            image = background
        elif image.mode != "RGB":
            image = image.convert("RGB")

        output = io.BytesIO()
        image.save(output, "BMP")
        bmp_data = output.getvalue()
        if len(bmp_data) <= 14:
            return False

        if not self._open():
            return False
        try:
            wc.EmptyClipboard()
            # CF_DIB wants the bitmap without its 14-byte file header.
            wc.SetClipboardData(wc.CF_DIB, bmp_data[14:])
            return True
        finally:
            self._close()
