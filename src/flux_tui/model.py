"""The update loop at the centre of the client.

``Model.update`` reduces one message: it mutates the view-models and the
navigation state, launches any background effects, and may return a follow-up
message. ``Model.dispatch`` feeds follow-ups back in until none is left, so
everything caused by one key press is settled before the next one is read.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Union

from .datamodels import ListViewType
from .effects import (
    EffectRunner,
    FetchEntries,
    FetchOriginalContent,
    ForceRefresh,
    MarkAllRead,
    OpenUrl,
    Save,
    UpdateReadStatus,
    UpdateStarred,
)
from .messages import (
    AppClose,
    Batch,
    ChangeEntryReadStatus,
    DismissError,
    EntrySelected,
    FeedEntriesReceived,
    FetchOriginalEntryContentsRequested,
    ForceRefreshRequested,
    HideKeyboardHelp,
    MarkAllAsRead,
    Message,
    OpenInBrowserRequested,
    OriginalEntryContentsReceived,
    ReadEntryViewClosed,
    RefreshRequested,
    RequestErrorEncountered,
    SaveEntry,
    ShowKeyboardHelp,
    Tick,
    ToggleStarred,
)
from .navigation import NavigationState, ViewId
from .viewmodels import (
    EntryListViewModel,
    ErrorViewModel,
    KeyboardHelpViewModel,
    LoadingViewModel,
    ReadingViewModel,
)

logger = logging.getLogger("flux")

ViewModel = Union[
    LoadingViewModel,
    EntryListViewModel,
    ReadingViewModel,
    KeyboardHelpViewModel,
    ErrorViewModel,
]


class Model:
    def __init__(self, effects: EffectRunner):
        self.effects = effects
        self.navigation = NavigationState(ViewId.LOADING)
        self.loading = LoadingViewModel()
        self.entry_list = EntryListViewModel()
        self.reading = ReadingViewModel()
        self.keyboard_help = KeyboardHelpViewModel()
        self.error = ErrorViewModel()
        self.quit = False
        self.redraw = True

    @property
    def current_view(self) -> ViewId:
        return self.navigation.current

    @property
    def active_view_model(self) -> ViewModel:
        return self.view_model(self.navigation.current)

    def view_model(self, view_id: ViewId) -> ViewModel:
        return {
            ViewId.LOADING: self.loading,
            ViewId.ENTRY_LIST: self.entry_list,
            ViewId.READING: self.reading,
            ViewId.KEYBOARD_HELP: self.keyboard_help,
            ViewId.ERROR: self.error,
        }[view_id]

    def start(self) -> None:
        self.dispatch(RefreshRequested(ListViewType.UNREAD_ENTRIES))

    def handle_input(self, key: str) -> None:
        """Route a key press to the active view and reduce whatever it asks for."""
        self.dispatch(self.active_view_model.handle_input(key))

    def dispatch(self, msg: Optional[Message]) -> None:
        while msg is not None:
            msg = self.update(msg)

    def update(self, msg: Optional[Message]) -> Optional[Message]:
        if msg is None:
            return None
        if not isinstance(msg, (Tick, Batch)):
            logger.debug("Update: %s", type(msg).__name__)
        self.redraw = True

        if isinstance(msg, AppClose):
            self.quit = True
            return None

        if isinstance(msg, Tick):
            return None

        if isinstance(msg, Batch):
            return self._update_batch(msg)

        if isinstance(msg, (RefreshRequested, ForceRefreshRequested)):
            self.entry_list.view_type = msg.view_type
            self.loading.view_type = msg.view_type
            if isinstance(msg, ForceRefreshRequested):
                self.effects.launch(ForceRefresh(msg.view_type))
            else:
                self.effects.launch(FetchEntries(msg.view_type))
            self.navigation.activate(ViewId.LOADING)

        elif isinstance(msg, FeedEntriesReceived):
            # a late result can land while reading; local edits are newer than it
            open_entry = self.reading.close()
            self.entry_list.replace_entries(msg.entries)
            if open_entry is not None:
                self.entry_list.update_entry(open_entry)
            self.navigation.activate(ViewId.ENTRY_LIST)

        elif isinstance(msg, EntrySelected):
            self.reading.open(msg.entry)
            self.navigation.activate(ViewId.READING)

        elif isinstance(msg, ReadEntryViewClosed):
            entry = self.reading.close()
            if entry is not None:
                self.entry_list.update_entry(entry)
            self.navigation.activate(ViewId.ENTRY_LIST)

        elif isinstance(msg, ChangeEntryReadStatus):
            self.effects.launch(UpdateReadStatus(msg.entry_id, msg.status))

        elif isinstance(msg, ToggleStarred):
            self.effects.launch(UpdateStarred(msg.entry_id))

        elif isinstance(msg, SaveEntry):
            self.effects.launch(Save(msg.entry_id))

        elif isinstance(msg, MarkAllAsRead):
            self.effects.launch(MarkAllRead(tuple(msg.entry_ids)))

        elif isinstance(msg, FetchOriginalEntryContentsRequested):
            self.effects.launch(FetchOriginalContent(msg.entry_id))

        elif isinstance(msg, OriginalEntryContentsReceived):
            self.reading.show_original(msg.entry_id, msg.content)

        elif isinstance(msg, OpenInBrowserRequested):
            self.effects.launch(OpenUrl(msg.url))

        elif isinstance(msg, ShowKeyboardHelp):
            self.navigation.show_overlay(ViewId.KEYBOARD_HELP)

        elif isinstance(msg, HideKeyboardHelp):
            self.navigation.dismiss_overlay()

        elif isinstance(msg, RequestErrorEncountered):
            self.error.show(msg.text)
            self.navigation.show_overlay(ViewId.ERROR)

        elif isinstance(msg, DismissError):
            self.navigation.dismiss_overlay()

        else:
            logger.warning("Ignoring unknown message %r", msg)
            return None

        return Tick()

    def _update_batch(self, batch: Batch) -> Optional[Message]:
        follow_ups: List[Message] = []
        for msg in batch.messages:
            if msg is None:
                continue
            follow_up = self.update(msg)
            if follow_up is not None:
                follow_ups.append(follow_up)
        if not follow_ups:
            return None
        if len(follow_ups) == 1:
            return follow_ups[0]
        return Batch(tuple(follow_ups))
