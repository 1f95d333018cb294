from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from textual import events
from textual.app import App, ComposeResult
from textual.widgets import ContentSwitcher, Header

from .client import FeedClient
from .config import DEFAULT_THEME, INBOX_POLL_INTERVAL, PAGE_SIZE, TICK_INTERVAL
from .effects import EffectRunner
from .messages import Tick
from .model import Model
from .navigation import ViewId
from .widgets import (
    EntryListView,
    ErrorView,
    KeyboardHelpView,
    LoadingView,
    ReadingView,
    StatusBar,
)

logger = logging.getLogger("flux")

KEYBINDING_HINTS = {
    ViewId.LOADING: "[b]r[/] retry  [b]q[/] quit",
    ViewId.ENTRY_LIST: (
        "[b]enter[/] read  [b]m[/] read/unread  [b]s[/] star  "
        "[b]v[/] unread/starred  [b]r[/] refresh  [b]?[/] help  [b]q[/] quit"
    ),
    ViewId.READING: (
        "[b]b[/] back  [b]u[/] unread  [b]s[/] star  [b]F[/] original  "
        "[b]o[/] browser  [b]?[/] help"
    ),
    ViewId.KEYBOARD_HELP: "[b]esc[/] close",
    ViewId.ERROR: "[b]esc[/] dismiss  [b]q[/] quit",
}


def normalize_key(event: events.Key) -> str:
    """Printable keys by their character (so "R" and "?"), others by name."""
    if event.is_printable and event.character:
        return event.character
    return event.key


class FluxApp(App):
    TITLE = "flux"
    SUB_TITLE = "Miniflux terminal client"

    ENABLE_COMMAND_PALETTE = False

    CSS = """
    #views {
        height: 1fr;
    }
    #views > Static {
        height: 1fr;
        border: round $accent;
        border-title-align: center;
        padding: 0 1;
        overflow: hidden;
    }
    #error {
        border: round $error;
    }
    StatusBar {
        height: 1;
        dock: bottom;
        padding: 0 1;
        background: $panel;
    }
    """

    def __init__(
        self,
        client: FeedClient,
        config: Optional[Dict[str, Any]] = None,
        theme: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.config = config or {}
        self._theme_name = theme or self.config.get("theme") or DEFAULT_THEME
        self.effects = EffectRunner(
            client,
            spawn=self._spawn_worker,
            page_size=self.config.get("page_size", PAGE_SIZE),
        )
        self.model = Model(self.effects)

    @property
    def theme_name(self) -> str:
        return self._theme_name

    def compose(self) -> ComposeResult:
        yield Header()
        with ContentSwitcher(initial=ViewId.LOADING.value, id="views"):
            yield LoadingView(id=ViewId.LOADING.value)
            yield EntryListView(id=ViewId.ENTRY_LIST.value)
            yield ReadingView(id=ViewId.READING.value)
            yield KeyboardHelpView(id=ViewId.KEYBOARD_HELP.value)
            yield ErrorView(id=ViewId.ERROR.value)
        yield StatusBar()

    def on_mount(self) -> None:
        if self._theme_name in self.available_themes:
            self.theme = self._theme_name
        else:
            logger.warning("Theme '%s' not found, keeping %s", self._theme_name, self.theme)

        self.set_interval(INBOX_POLL_INTERVAL, self._drain_inbox)
        self.set_interval(
            self.config.get("tick_interval", TICK_INTERVAL), self._tick
        )
        self.model.start()
        self._after_update()

    def _spawn_worker(self, work: Callable[[], None]) -> object:
        return self.run_worker(
            work, name="effect", group="effects", thread=True, exit_on_error=False
        )

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        key = normalize_key(event)
        self.model.handle_input(key)
        self._after_update()

    def on_resize(self, event: events.Resize) -> None:
        self.model.redraw = True
        self.call_after_refresh(self._after_update)

    def _drain_inbox(self) -> None:
        messages = self.effects.drain()
        for msg in messages:
            self.model.dispatch(msg)
        if messages:
            self._after_update()

    def _tick(self) -> None:
        self.model.dispatch(Tick())
        self._after_update()

    def _after_update(self) -> None:
        if self.model.quit:
            self.effects.shutdown()
            self.exit()
            return
        if self.model.redraw:
            self.model.redraw = False
            self._render_current_view()

    def _render_current_view(self) -> None:
        view_id = self.model.current_view
        self.query_one("#views", ContentSwitcher).current = view_id.value
        widget = self.query_one(f"#{view_id.value}")
        widget.show(self.model.view_model(view_id))

        status = self.query_one(StatusBar)
        status.keybinding_hint = KEYBINDING_HINTS[view_id]
        status.pending_requests = self.effects.in_flight
