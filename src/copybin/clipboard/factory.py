import platform
from typing import Type

from copybin.clipboard.base import PasteboardSource


def get_pasteboard_class() -> Type[PasteboardSource]:
    system = platform.system()

    if system == "Darwin":
        from copybin.clipboard.macos import MacOSPasteboard
        return MacOSPasteboard
    elif system == "Linux":
        from copybin.clipboard.linux import LinuxPasteboard
        return LinuxPasteboard
    elif system == "Windows":
        from copybin.clipboard.windows import WindowsPasteboard
        return WindowsPasteboard
    else:
        raise NotImplementedError(f"Platform '{system}' is not supported")


def get_pasteboard() -> PasteboardSource:
    pasteboard_class = get_pasteboard_class()
    return pasteboard_class()
