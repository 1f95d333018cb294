from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..datamodels import Entry, ListViewType, ReadStatus


class ClientError(Exception):
    """A failed request against the feed service."""

    def __init__(self, status_code: Optional[int], message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.status_code}: {self.message}"


class FeedClient(ABC):
    """Abstract base class for a feed service client.

    Every operation either returns its value or raises ClientError.
    """

    @abstractmethod
    def list_entries(
        self, view_type: ListViewType, limit: int, offset: int
    ) -> List[Entry]:
        """Return unread or starred entries, newest first."""

    @abstractmethod
    def set_read_status(self, entry_id: int, status: ReadStatus) -> None:
        pass

    @abstractmethod
    def toggle_starred(self, entry_id: int) -> None:
        pass

    @abstractmethod
    def save(self, entry_id: int) -> None:
        """Send the entry to the third-party services configured on the server."""

    @abstractmethod
    def mark_all_read(self, entry_ids: Sequence[int]) -> None:
        pass

    @abstractmethod
    def refresh_all_feeds(self) -> None:
        pass

    @abstractmethod
    def fetch_original_content(self, entry_id: int) -> str:
        """Return the full article as scraped by the server."""
