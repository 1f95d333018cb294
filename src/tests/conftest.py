from __future__ import annotations

import pytest

from flux_tui.datamodels import Entry, Feed, ReadStatus


@pytest.fixture
def make_entry():
    feed = Feed(id=7, title="Example Feed", site_url="https://example.com",
                feed_url="https://example.com/feed.xml")

    def _make(entry_id: int, status: ReadStatus = ReadStatus.UNREAD,
              starred: bool = False, content: str = "<p>Body</p>") -> Entry:
        return Entry(
            id=entry_id,
            feed_id=feed.id,
            feed=feed,
            title=f"Entry {entry_id}",
            url=f"https://example.com/{entry_id}",
            content=content,
            status=status,
            starred=starred,
        )

    return _make
