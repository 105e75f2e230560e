import pytest

from conftest import make_image
from copybin.clipboard import factory, linux
from copybin.clipboard.base import PasteboardSource, Snapshot
from copybin.clipboard.linux import LinuxPasteboard, image_mime
from copybin.exceptions import PasteboardReadError


class BrokenPasteboard(PasteboardSource):

    def read_snapshot(self):
        return Snapshot()

    def _write_text(self, text):
        raise RuntimeError("no display")

    def _write_image(self, data):
        return True


def test_snapshot_is_empty():
    assert Snapshot().is_empty
    assert Snapshot(text="").is_empty
    assert not Snapshot(text="x").is_empty
    assert not Snapshot(image=b"x").is_empty


def test_write_errors_become_false(caplog):
    source = BrokenPasteboard()
    assert source.write(Snapshot(text="x")) is False
    assert "Failed to write" in caplog.text


def test_write_prefers_image():
    assert BrokenPasteboard().write(Snapshot(text="x", image=b"img")) is True
    assert BrokenPasteboard().write(Snapshot()) is False


def test_factory_rejects_unknown_platform(monkeypatch):
    monkeypatch.setattr(factory.platform, "system", lambda: "Plan9")
    with pytest.raises(NotImplementedError):
        factory.get_pasteboard()


def test_factory_picks_linux(monkeypatch):
    monkeypatch.setattr(factory.platform, "system", lambda: "Linux")
    assert isinstance(factory.get_pasteboard(), LinuxPasteboard)


def test_linux_extracts_image_and_text():
    png = make_image()
    outputs = {"image/png": png, "UTF8_STRING": b"caption"}
    snapshot = LinuxPasteboard()._extract_from_types(
        ["TARGETS", "UTF8_STRING", "image/png"], outputs.get)

    assert snapshot == Snapshot(text="caption", image=png)


def test_linux_text_only():
    snapshot = LinuxPasteboard()._extract_from_types(
        ["text/plain;charset=utf-8"], lambda target: "héllo".encode("utf-8"))
    assert snapshot == Snapshot(text="héllo")


def test_linux_without_tools_raises(monkeypatch):
    monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
    monkeypatch.setattr(linux.shutil, "which", lambda name: None)
    with pytest.raises(PasteboardReadError):
        LinuxPasteboard().read_snapshot()


def test_linux_write_uses_xclip(monkeypatch):
    calls = []
    monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
    monkeypatch.setattr(linux.shutil, "which", lambda name: "/usr/bin/" + name)
    monkeypatch.setattr(linux.subprocess, "run",
                        lambda command, **kwargs: calls.append((command, kwargs["input"])))

    source = LinuxPasteboard()
    assert source.write(Snapshot(text="hi"))
    assert source.write(Snapshot(image=make_image(fmt="JPEG")))

    assert calls[0] == (["xclip", "-selection", "clipboard"], b"hi")
    assert calls[1][0] == ["xclip", "-selection", "clipboard", "-t", "image/jpeg"]


def test_linux_write_without_tools(monkeypatch):
    monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
    monkeypatch.setattr(linux.shutil, "which", lambda name: None)
    assert LinuxPasteboard().write(Snapshot(text="hi")) is False


def test_image_mime():
    assert image_mime(make_image(fmt="PNG")) == "image/png"
    assert image_mime(make_image(fmt="JPEG")) == "image/jpeg"
    assert image_mime(b"garbage") == "image/png"
