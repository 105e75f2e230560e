from datetime import datetime

import pytest

from copybin.models.entry import IMAGE_PLACEHOLDER, ClipboardEntry, EntryKind, classify


@pytest.mark.parametrize("content", [
    "someone@example.com",
    "a@b.c",
    "http://user@host.example",
    "www.me@site.org",
])
def test_email_rule_wins(content):
    assert classify(content) is EntryKind.EMAIL


@pytest.mark.parametrize("content", [
    "https://example.com/path",
    "http://localhost:8000",
    "www.python.org",
    "https://example.com/search?q=a b",
    "httpbin",
])
def test_url_rule(content):
    assert classify(content) is EntryKind.URL


@pytest.mark.parametrize("content", [
    "hello world",
    "mail me at someone@example.com",
    "someone@example",
    "version 1.2",
    "ftp://example.com",
    "someone@example.com\n",
])
def test_plain_text(content):
    assert classify(content) is EntryKind.TEXT


def test_text_entry_fields():
    created = datetime(2025, 1, 2, 3, 4, 5)
    entry = ClipboardEntry.from_text("www.example.com", created)

    assert entry.kind is EntryKind.URL
    assert entry.content == "www.example.com"
    assert entry.image_data is None
    assert entry.created_at == created
    assert not entry.is_image


def test_image_entry_uses_placeholder():
    entry = ClipboardEntry.from_image(b"\x89PNG...", datetime.now())

    assert entry.kind is EntryKind.IMAGE
    assert entry.content == IMAGE_PLACEHOLDER
    assert entry.image_data == b"\x89PNG..."
    assert entry.is_image


def test_ids_are_unique():
    now = datetime.now()
    ids = {ClipboardEntry.from_text("same", now).entry_id for _ in range(50)}
    assert len(ids) == 50
