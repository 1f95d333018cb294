from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ReadStatus(Enum):
    READ = "read"
    UNREAD = "unread"

    def toggle(self) -> ReadStatus:
        if self is ReadStatus.READ:
            return ReadStatus.UNREAD
        return ReadStatus.READ


class ListViewType(Enum):
    UNREAD_ENTRIES = "unread"
    STARRED_ENTRIES = "starred"

    @property
    def title(self) -> str:
        if self is ListViewType.UNREAD_ENTRIES:
            return " Unread Entries "
        return " Starred Entries "

    def cycle(self) -> ListViewType:
        if self is ListViewType.UNREAD_ENTRIES:
            return ListViewType.STARRED_ENTRIES
        return ListViewType.UNREAD_ENTRIES


@dataclass(frozen=True)
class Feed:
    id: int
    title: str
    site_url: str = ""
    feed_url: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Feed:
        return cls(
            id=int(data["id"]),
            title=data.get("title") or "",
            site_url=data.get("site_url") or "",
            feed_url=data.get("feed_url") or "",
        )


@dataclass
class Entry:
    id: int
    feed_id: int
    feed: Feed
    title: str
    url: str
    content: str = ""
    status: ReadStatus = ReadStatus.UNREAD
    starred: bool = False
    author: str = ""
    published_at: str = ""
    original_content: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Entry:
        """Build an entry from one item of a Miniflux ``/v1/entries`` response."""
        feed = Feed.from_dict(data["feed"])
        return cls(
            id=int(data["id"]),
            feed_id=int(data.get("feed_id", feed.id)),
            feed=feed,
            title=data.get("title") or "",
            url=data.get("url") or "",
            content=data.get("content") or "",
            # "removed" entries only show up in starred lists; treat them as read
            status=(
                ReadStatus.UNREAD
                if data.get("status", "unread") == "unread"
                else ReadStatus.READ
            ),
            starred=bool(data.get("starred", False)),
            author=data.get("author") or "",
            published_at=data.get("published_at") or "",
        )

    @property
    def is_read(self) -> bool:
        return self.status is ReadStatus.READ

    @property
    def display_content(self) -> str:
        if self.original_content is not None:
            return self.original_content
        return self.content
