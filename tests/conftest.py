import io
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, List, Optional

import pytest
from PIL import Image

# Make src importable without an install
REPO_ROOT = Path(__file__).resolve().parent.parent
SRC = REPO_ROOT / "src"
sys.path.insert(0, str(SRC))

from copybin.clipboard.base import PasteboardSource, Snapshot  # noqa: E402
from copybin.config import HistoryConfig  # noqa: E402
from copybin.database.base import HistoryStore  # noqa: E402
from copybin.exceptions import PasteboardReadError  # noqa: E402
from copybin.services.clipboard_service import ClipboardService  # noqa: E402


class FakePasteboard(PasteboardSource):
    """In-memory pasteboard. ``reencode`` mimics a system that rewrites images on write."""

    def __init__(self, reencode: Optional[Callable[[bytes], bytes]] = None):
        self.snapshot = Snapshot()
        self.fail_reads = False
        self.reencode = reencode
        self.writes: List[Snapshot] = []

    def set_text(self, text: str) -> None:
        self.snapshot = Snapshot(text=text)

    def set_image(self, data: bytes, text: Optional[str] = None) -> None:
        self.snapshot = Snapshot(text=text, image=data)

    def read_snapshot(self) -> Snapshot:
        if self.fail_reads:
            raise PasteboardReadError("pasteboard locked")
        return self.snapshot

    def _write_text(self, text: str) -> bool:
        self.writes.append(Snapshot(text=text))
        self.snapshot = Snapshot(text=text)
        return True

    def _write_image(self, data: bytes) -> bool:
        self.writes.append(Snapshot(image=data))
        stored = self.reencode(data) if self.reencode else data
        self.snapshot = Snapshot(image=stored)
        return True


class MemoryStore(HistoryStore):

    def __init__(self, entries=None, load_error: Optional[Exception] = None,
                 save_error: Optional[Exception] = None):
        self.entries = list(entries or [])
        self.load_error = load_error
        self.save_error = save_error
        self.saves: List[list] = []

    def load(self):
        if self.load_error is not None:
            raise self.load_error
        return list(self.entries)

    def save(self, entries):
        if self.save_error is not None:
            raise self.save_error
        self.entries = list(entries)
        self.saves.append(list(entries))


class FakeClock:

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2025, 10, 6, 12, 0, 0)

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now

    def __call__(self) -> datetime:
        return self.now


def make_image(size=(40, 30), color=(200, 30, 30), mode="RGB", fmt="PNG") -> bytes:
    image = Image.new(mode, size, color)
    output = io.BytesIO()
    image.save(output, format=fmt)
    return output.getvalue()


@pytest.fixture
def pasteboard():
    return FakePasteboard()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config(tmp_path):
    # Long persist delay so tests decide when writes happen via flush().
    return HistoryConfig(persist_delay=60, poll_interval=0.01, store_path=tmp_path / "history.json")


@pytest.fixture
def service(pasteboard, store, config, clock):
    svc = ClipboardService(pasteboard, store, config=config, clock=clock)
    yield svc
    svc.stop()
