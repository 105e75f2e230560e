import io
import os
import shutil
import subprocess
from typing import Callable, List, Optional

from PIL import Image

from copybin.clipboard.base import PasteboardSource, Snapshot
from copybin.exceptions import PasteboardReadError


def image_mime(data: bytes) -> str:
    try:
        with Image.open(io.BytesIO(data)) as image:
            return Image.MIME.get(image.format or "", "image/png")
    except Exception:
        return "image/png"


class LinuxPasteboard(PasteboardSource):
    """Clipboard selection access through wl-clipboard or xclip."""

    _IMAGE_TARGETS = (
        "image/png",
        "image/jpeg",
        "image/bmp",
        "image/webp",
        "image/tiff",
    )
    _TEXT_TARGETS = {
        "text/plain;charset=utf-8",
        "text/plain;charset=utf8",
        "utf8_string",
        "text/plain",
        "string",
    }

    def read_snapshot(self) -> Snapshot:
        if os.environ.get("WAYLAND_DISPLAY") and shutil.which("wl-paste"):
            return self._from_wayland()
        if shutil.which("xclip"):
            return self._from_xclip()
        raise PasteboardReadError("Neither wl-paste nor xclip is available")

    def _from_wayland(self) -> Snapshot:
        types = self._parse_type_list(
            self._run_command(["wl-paste", "--list-types"], timeout=1.5)
        )

        def reader(target: str) -> Optional[bytes]:
            command = ["wl-paste", "--type", target]
            if target.lower().startswith("text/"):
                command.append("--no-newline")
            return self._run_command(command, timeout=1.5)

        return self._extract_from_types(types, reader)

    def _from_xclip(self) -> Snapshot:
        types = self._parse_type_list(
            self._run_command(
                ["xclip", "-selection", "clipboard", "-t", "TARGETS", "-o"],
                timeout=1.5,
            )
        )

        def reader(target: str) -> Optional[bytes]:
            return self._run_command(
                ["xclip", "-selection", "clipboard", "-t", target, "-o"],
                timeout=1.5,
            )

        return self._extract_from_types(types, reader)

    def _extract_from_types(
        self,
        types: List[str],
        reader: Callable[[str], Optional[bytes]],
    ) -> Snapshot:
        lowered = {target.lower(): target for target in types}

        image = None
        for target in self._IMAGE_TARGETS:
            if target in lowered:
                image = reader(lowered[target])
                if image:
                    break

        text = None
        for target_lower, target in lowered.items():
            if target_lower in self._TEXT_TARGETS:
                data = reader(target)
                if data:
                    text = data.decode("utf-8", errors="ignore")
                    break

        return Snapshot(text=text, image=image or None)

    def _parse_type_list(self, data: Optional[bytes]) -> List[str]:
        if not data:
            return []
        text = data.decode("utf-8", errors="ignore")
        return [line.strip() for line in text.splitlines() if line.strip()]

    def _run_command(self, command: List[str], timeout: float) -> Optional[bytes]:
        try:
            result = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=True,
                timeout=timeout,
            )
            return result.stdout
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError):
            return None

    def _copy_command(self, mime: Optional[str] = None) -> Optional[List[str]]:
        if os.environ.get("WAYLAND_DISPLAY") and shutil.which("wl-copy"):
            return ["wl-copy", "--type", mime] if mime else ["wl-copy"]
        if shutil.which("xclip"):
            command = ["xclip", "-selection", "clipboard"]
            return command + ["-t", mime] if mime else command
        return None

    def _write(self, payload: bytes, mime: Optional[str] = None) -> bool:
        command = self._copy_command(mime)
        if command is None:
            return False
        try:
            subprocess.run(command, input=payload, check=True, timeout=2.0)
            return True
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError):
            return False

    def _write_text(self, text: str) -> bool:
        return self._write(text.encode("utf-8"))

    def _write_image(self, data: bytes) -> bool:
        return self._write(data, image_mime(data))
