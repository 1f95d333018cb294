from __future__ import annotations

import functools
import logging
import queue
import webbrowser
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from .client import ClientError, FeedClient
from .config import PAGE_SIZE
from .datamodels import ListViewType, ReadStatus
from .messages import (
    FeedEntriesReceived,
    Message,
    OriginalEntryContentsReceived,
    RequestErrorEncountered,
    Tick,
)

logger = logging.getLogger("flux")


@dataclass(frozen=True)
class FetchEntries:
    view_type: ListViewType


@dataclass(frozen=True)
class ForceRefresh:
    view_type: ListViewType


@dataclass(frozen=True)
class UpdateReadStatus:
    entry_id: int
    status: ReadStatus


@dataclass(frozen=True)
class UpdateStarred:
    entry_id: int


@dataclass(frozen=True)
class Save:
    entry_id: int


@dataclass(frozen=True)
class MarkAllRead:
    entry_ids: Tuple[int, ...]


@dataclass(frozen=True)
class FetchOriginalContent:
    entry_id: int


@dataclass(frozen=True)
class OpenUrl:
    url: str


Effect = Union[
    FetchEntries,
    ForceRefresh,
    UpdateReadStatus,
    UpdateStarred,
    Save,
    MarkAllRead,
    FetchOriginalContent,
    OpenUrl,
]

Spawn = Callable[[Callable[[], None]], object]


class EffectRunner:
    """Runs effects off the UI thread and collects their outcome in an inbox.

    Every launched effect puts exactly one message into the inbox, either its
    result or a RequestErrorEncountered.
    """

    def __init__(
        self,
        client: FeedClient,
        inbox: Optional[queue.Queue] = None,
        spawn: Optional[Spawn] = None,
        page_size: int = PAGE_SIZE,
    ):
        self.client = client
        self.inbox: queue.Queue = inbox if inbox is not None else queue.Queue()
        self.page_size = page_size
        # launched but not yet drained; only touched from the UI thread
        self.in_flight = 0
        self._executor: Optional[ThreadPoolExecutor] = None
        if spawn is None:
            self._executor = ThreadPoolExecutor(thread_name_prefix="flux-effect")
            spawn = self._executor.submit
        self._spawn = spawn

    def launch(self, effect: Effect) -> None:
        logger.debug("Launching %s", effect)
        self.in_flight += 1
        self._spawn(functools.partial(self.run, effect))

    def run(self, effect: Effect) -> None:
        try:
            msg = self._perform(effect)
        except ClientError as e:
            logger.error("%s failed: %s", type(effect).__name__, e)
            msg = RequestErrorEncountered(e.status_code, e.message)
        except Exception as e:
            logger.exception("%s crashed", type(effect).__name__)
            msg = RequestErrorEncountered(None, str(e) or type(e).__name__)
        self.inbox.put(msg)

    def _perform(self, effect: Effect) -> Message:
        client = self.client
        if isinstance(effect, FetchEntries):
            return FeedEntriesReceived(
                client.list_entries(effect.view_type, self.page_size, 0)
            )
        if isinstance(effect, ForceRefresh):
            client.refresh_all_feeds()
            return FeedEntriesReceived(
                client.list_entries(effect.view_type, self.page_size, 0)
            )
        if isinstance(effect, UpdateReadStatus):
            client.set_read_status(effect.entry_id, effect.status)
        elif isinstance(effect, UpdateStarred):
            client.toggle_starred(effect.entry_id)
        elif isinstance(effect, Save):
            client.save(effect.entry_id)
        elif isinstance(effect, MarkAllRead):
            client.mark_all_read(effect.entry_ids)
        elif isinstance(effect, FetchOriginalContent):
            return OriginalEntryContentsReceived(
                effect.entry_id, client.fetch_original_content(effect.entry_id)
            )
        elif isinstance(effect, OpenUrl):
            if not webbrowser.open(effect.url):
                return RequestErrorEncountered(None, f"Could not open {effect.url}")
        else:
            raise TypeError(f"Unknown effect: {effect!r}")
        return Tick()

    def drain(self) -> List[Message]:
        """Take every message currently waiting, without blocking."""
        messages = []
        while True:
            try:
                messages.append(self.inbox.get_nowait())
            except queue.Empty:
                self.in_flight = max(0, self.in_flight - len(messages))
                return messages

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
