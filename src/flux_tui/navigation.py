from __future__ import annotations

from enum import Enum
from typing import Optional


class ViewId(Enum):
    # values double as widget ids in the app's ContentSwitcher
    LOADING = "loading"
    ENTRY_LIST = "entry-list"
    READING = "reading"
    KEYBOARD_HELP = "keyboard-help"
    ERROR = "error"

    @property
    def is_overlay(self) -> bool:
        return self in (ViewId.KEYBOARD_HELP, ViewId.ERROR)


class NavigationState:
    """The active view, plus where an overlay returns to when dismissed."""

    def __init__(self, current: ViewId = ViewId.LOADING):
        self.current = current
        self.previous: Optional[ViewId] = None

    @property
    def overlay_active(self) -> bool:
        return self.current.is_overlay

    def activate(self, view_id: ViewId) -> None:
        """Switch to a regular view.

        While an overlay is up the switch happens underneath it: the overlay
        stays visible and dismissing it lands on ``view_id``.
        """
        if self.overlay_active:
            self.previous = view_id
        else:
            self.current = view_id

    def show_overlay(self, view_id: ViewId) -> None:
        if not self.overlay_active:
            self.previous = self.current
        self.current = view_id

    def dismiss_overlay(self) -> None:
        if not self.overlay_active:
            return
        self.current = self.previous or ViewId.ENTRY_LIST
        self.previous = None
