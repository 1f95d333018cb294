"""State and key handling for each view.

View-models never talk to the network. Every user action that needs the
server comes back out of ``handle_input`` as a message for the model.
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from rich.text import Text

from .datamodels import Entry, ListViewType, ReadStatus
from .messages import (
    AppClose,
    Batch,
    ChangeEntryReadStatus,
    DismissError,
    EntrySelected,
    FetchOriginalEntryContentsRequested,
    ForceRefreshRequested,
    HideKeyboardHelp,
    MarkAllAsRead,
    Message,
    OpenInBrowserRequested,
    ReadEntryViewClosed,
    RefreshRequested,
    SaveEntry,
    ShowKeyboardHelp,
    Tick,
    ToggleStarred,
)
from .render import RenderedEntry, render_entry

# The number of lines to scroll on PageUp/PageDown
PAGE_SCROLL_AMOUNT = 8

BACK_KEYS = ("b", "escape")


class Direction(Enum):
    UP = "up"
    DOWN = "down"


class LoadingViewModel:
    def __init__(self) -> None:
        self.view_type = ListViewType.UNREAD_ENTRIES

    @property
    def text(self) -> str:
        return f"Loading{self.view_type.title.lower().rstrip()}..."

    def handle_input(self, key: str) -> Optional[Message]:
        if key == "q":
            return AppClose()
        if key == "r":
            return RefreshRequested(self.view_type)
        if key == "R":
            return ForceRefreshRequested(self.view_type)
        return None


class EntryListViewModel:
    def __init__(
        self,
        entries: Sequence[Entry] = (),
        view_type: ListViewType = ListViewType.UNREAD_ENTRIES,
    ):
        self.entries: List[Entry] = list(entries)
        self.view_type = view_type
        self.selected = 0

    @property
    def title(self) -> str:
        return self.view_type.title

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def zero_state_text(self) -> str:
        kind = "unread" if self.view_type is ListViewType.UNREAD_ENTRIES else "starred"
        return f"No {kind} entries. Press r to refresh."

    @property
    def selected_entry(self) -> Optional[Entry]:
        if 0 <= self.selected < len(self.entries):
            return self.entries[self.selected]
        return None

    def replace_entries(self, new_entries: Sequence[Entry]) -> None:
        self.entries = list(new_entries)
        self.selected = max(0, min(self.selected, len(self.entries) - 1))

    def update_entry(self, entry: Entry) -> None:
        for idx, existing in enumerate(self.entries):
            if existing.id == entry.id:
                self.entries[idx] = dataclasses.replace(entry)
                return

    def move_selection(self, direction: Direction) -> bool:
        """Move the cursor one row, stopping at either end. Returns True if it moved."""
        if not self.entries:
            return False
        if direction is Direction.UP:
            new = max(0, self.selected - 1)
        else:
            new = min(len(self.entries) - 1, self.selected + 1)
        moved = new != self.selected
        self.selected = new
        return moved

    def _entry_at(self, index: int) -> Optional[Entry]:
        if 0 <= index < len(self.entries):
            return self.entries[index]
        return None

    def toggle_read_at(self, index: int) -> Optional[Message]:
        entry = self._entry_at(index)
        if entry is None:
            return None
        entry.status = entry.status.toggle()
        return ChangeEntryReadStatus(entry.id, entry.status)

    def mark_read_at(self, index: int) -> Optional[Message]:
        entry = self._entry_at(index)
        if entry is None or entry.is_read:
            return None
        entry.status = ReadStatus.READ
        return ChangeEntryReadStatus(entry.id, entry.status)

    def toggle_starred_at(self, index: int) -> Optional[Message]:
        entry = self._entry_at(index)
        if entry is None:
            return None
        entry.starred = not entry.starred
        return ToggleStarred(entry.id)

    def save_at(self, index: int) -> Optional[Message]:
        entry = self._entry_at(index)
        if entry is None:
            return None
        return SaveEntry(entry.id)

    def mark_all_read(self) -> Optional[Message]:
        if not self.entries:
            return None
        for entry in self.entries:
            entry.status = ReadStatus.READ
        return MarkAllAsRead(tuple(e.id for e in self.entries))

    def cycle_view_type(self) -> Message:
        self.view_type = self.view_type.cycle()
        return RefreshRequested(self.view_type)

    def submit_selected(self) -> Optional[Message]:
        """Mark the selected entry read and open it for reading."""
        if self.selected_entry is None:
            return None
        change_status = self.mark_read_at(self.selected)
        # the reading view gets its own copy
        entry = dataclasses.replace(self.entries[self.selected])
        return Batch((change_status, EntrySelected(entry)))

    def handle_input(self, key: str) -> Optional[Message]:
        if key in ("j", "down"):
            return Tick() if self.move_selection(Direction.DOWN) else None
        if key in ("k", "up"):
            return Tick() if self.move_selection(Direction.UP) else None
        if key == "enter":
            return self.submit_selected()
        if key == "m":
            return self.toggle_read_at(self.selected)
        if key == "s":
            return self.toggle_starred_at(self.selected)
        if key == "e":
            return self.save_at(self.selected)
        if key == "a":
            return self.mark_all_read()
        if key == "v":
            return self.cycle_view_type()
        if key == "r":
            return RefreshRequested(self.view_type)
        if key == "R":
            return ForceRefreshRequested(self.view_type)
        if key == "o":
            entry = self.selected_entry
            return OpenInBrowserRequested(entry.url) if entry and entry.url else None
        if key == "?":
            return ShowKeyboardHelp()
        if key == "q":
            return AppClose()
        return None


class ReadingViewModel:
    def __init__(self) -> None:
        self.entry: Optional[Entry] = None
        self.rendered = RenderedEntry()
        self.scroll = 0
        self.showing_original = False

    @property
    def is_active(self) -> bool:
        return self.entry is not None

    @property
    def title(self) -> str:
        return self.entry.title if self.entry else ""

    @property
    def visible_lines(self) -> List[Text]:
        # scrolling past the end is allowed and shows nothing
        return self.rendered.lines[self.scroll:]

    def open(self, entry: Entry) -> None:
        self.entry = entry
        self.showing_original = entry.original_content is not None
        self.rendered = render_entry(entry.display_content)
        self.scroll = 0

    def close(self) -> Optional[Entry]:
        """Deactivate the view, returning the entry that was open."""
        entry = self.entry
        self.entry = None
        self.rendered = RenderedEntry()
        self.scroll = 0
        self.showing_original = False
        return entry

    def scroll_by(self, direction: Direction, amount: int = 1) -> None:
        if direction is Direction.UP:
            self.scroll = max(0, self.scroll - amount)
        else:
            self.scroll += amount

    def page(self, direction: Direction) -> None:
        self.scroll_by(direction, PAGE_SCROLL_AMOUNT)

    def toggle_read(self) -> Optional[Message]:
        if self.entry is None:
            return None
        self.entry.status = self.entry.status.toggle()
        return ChangeEntryReadStatus(self.entry.id, self.entry.status)

    def mark_unread(self) -> Optional[Message]:
        if self.entry is None or not self.entry.is_read:
            return None
        self.entry.status = ReadStatus.UNREAD
        return ChangeEntryReadStatus(self.entry.id, self.entry.status)

    def toggle_starred(self) -> Optional[Message]:
        if self.entry is None:
            return None
        self.entry.starred = not self.entry.starred
        return ToggleStarred(self.entry.id)

    def request_save(self) -> Optional[Message]:
        if self.entry is None:
            return None
        return SaveEntry(self.entry.id)

    def request_fetch_original(self) -> Optional[Message]:
        if self.entry is None:
            return None
        return FetchOriginalEntryContentsRequested(self.entry.id)

    def request_open_in_browser(self) -> Optional[Message]:
        if self.entry is None or not self.entry.url:
            return None
        return OpenInBrowserRequested(self.entry.url)

    def show_original(self, entry_id: int, content: str) -> bool:
        """Swap in fetched article content; ignored if another entry is open."""
        if self.entry is None or self.entry.id != entry_id:
            return False
        self.entry.original_content = content
        self.showing_original = True
        self.rendered = render_entry(content)
        self.scroll = 0
        return True

    def handle_input(self, key: str) -> Optional[Message]:
        if key in ("j", "down"):
            self.scroll_by(Direction.DOWN)
            return Tick()
        if key in ("k", "up"):
            self.scroll_by(Direction.UP)
            return Tick()
        if key == "pagedown":
            self.page(Direction.DOWN)
            return Tick()
        if key == "pageup":
            self.page(Direction.UP)
            return Tick()
        if key == "m":
            return self.toggle_read()
        if key == "u":
            return self.mark_unread()
        if key == "s":
            return self.toggle_starred()
        if key == "e":
            return self.request_save()
        if key == "F":
            return self.request_fetch_original()
        if key == "o":
            return self.request_open_in_browser()
        if key in BACK_KEYS:
            return ReadEntryViewClosed()
        if key == "?":
            return ShowKeyboardHelp()
        if key == "q":
            return AppClose()
        return None


HELP_SECTIONS: Tuple[Tuple[str, Tuple[Tuple[str, str], ...]], ...] = (
    ("Global", (
        ("q", "Quit"),
        ("?", "Show keyboard help"),
    )),
    ("Unread/Starred Entries view", (
        ("j / Down", "Move down"),
        ("k / Up", "Move up"),
        ("Enter", "Read entry"),
        ("m", "Mark as read/unread"),
        ("s", "Toggle starred"),
        ("e", "Save entry"),
        ("a", "Mark all as read"),
        ("o", "Open in browser"),
        ("v", "Swap view (Unread Entries/Starred Entries)"),
        ("r", "Refresh"),
        ("R", "Refresh all feeds on the server, then reload"),
    )),
    ("Read entry view", (
        ("j / Down", "Scroll down"),
        ("k / Up", "Scroll up"),
        ("PageDown / PageUp", f"Scroll {PAGE_SCROLL_AMOUNT} lines"),
        ("m", "Mark as read/unread"),
        ("u", "Mark as unread"),
        ("s", "Toggle starred"),
        ("e", "Save entry"),
        ("F", "Fetch original content"),
        ("o", "Open in browser"),
        ("b / Esc", "Back to entries"),
    )),
    ("Keyboard help / error view", (
        ("b / Esc", "Close"),
    )),
)


class KeyboardHelpViewModel:
    sections = HELP_SECTIONS

    def handle_input(self, key: str) -> Optional[Message]:
        if key == "q":
            return AppClose()
        if key in BACK_KEYS:
            return HideKeyboardHelp()
        return None


class ErrorViewModel:
    def __init__(self) -> None:
        self.message = ""

    def show(self, message: str) -> None:
        self.message = message

    def handle_input(self, key: str) -> Optional[Message]:
        if key == "q":
            return AppClose()
        if key in BACK_KEYS:
            return DismissError()
        return None
