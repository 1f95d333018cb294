"""Messages reduced by :class:`flux_tui.model.Model`.

Key presses, ticks and background completions are all turned into one of
these before they reach the model.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .datamodels import Entry, ListViewType, ReadStatus


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class AppClose:
    pass


@dataclass(frozen=True)
class RefreshRequested:
    view_type: ListViewType = ListViewType.UNREAD_ENTRIES


@dataclass(frozen=True)
class ForceRefreshRequested:
    view_type: ListViewType = ListViewType.UNREAD_ENTRIES


@dataclass(frozen=True)
class FeedEntriesReceived:
    entries: List[Entry] = field(default_factory=list)


@dataclass(frozen=True)
class EntrySelected:
    entry: Entry


@dataclass(frozen=True)
class ChangeEntryReadStatus:
    entry_id: int
    status: ReadStatus


@dataclass(frozen=True)
class ToggleStarred:
    entry_id: int


@dataclass(frozen=True)
class SaveEntry:
    entry_id: int


@dataclass(frozen=True)
class MarkAllAsRead:
    entry_ids: Tuple[int, ...]


@dataclass(frozen=True)
class FetchOriginalEntryContentsRequested:
    entry_id: int


@dataclass(frozen=True)
class OriginalEntryContentsReceived:
    entry_id: int
    content: str


@dataclass(frozen=True)
class OpenInBrowserRequested:
    url: str


@dataclass(frozen=True)
class ReadEntryViewClosed:
    pass


@dataclass(frozen=True)
class ShowKeyboardHelp:
    pass


@dataclass(frozen=True)
class HideKeyboardHelp:
    pass


@dataclass(frozen=True)
class RequestErrorEncountered:
    status_code: Optional[int]
    message: str

    @property
    def text(self) -> str:
        if self.status_code is None:
            return f"Error: {self.message}"
        return f"Error {self.status_code}: {self.message}"


@dataclass(frozen=True)
class DismissError:
    pass


@dataclass(frozen=True)
class Batch:
    """Several messages produced by one action, dispatched in order."""

    messages: Tuple[Optional[Message], ...]


Message = Union[
    Tick,
    AppClose,
    RefreshRequested,
    ForceRefreshRequested,
    FeedEntriesReceived,
    EntrySelected,
    ChangeEntryReadStatus,
    ToggleStarred,
    SaveEntry,
    MarkAllAsRead,
    FetchOriginalEntryContentsRequested,
    OriginalEntryContentsReceived,
    OpenInBrowserRequested,
    ReadEntryViewClosed,
    ShowKeyboardHelp,
    HideKeyboardHelp,
    RequestErrorEncountered,
    DismissError,
    Batch,
]
