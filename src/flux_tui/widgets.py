from __future__ import annotations

from rich.table import Table
from rich.text import Text
from textual.reactive import reactive
from textual.widgets import Static

from .viewmodels import (
    EntryListViewModel,
    ErrorViewModel,
    KeyboardHelpViewModel,
    LoadingViewModel,
    ReadingViewModel,
)


class LoadingView(Static):
    def show(self, vm: LoadingViewModel) -> None:
        self.update(Text(vm.text, style="italic"))


class EntryListView(Static):
    def show(self, vm: EntryListViewModel) -> None:
        self.border_title = vm.title.strip()
        if vm.is_empty:
            self.update(Text(vm.zero_state_text, style="italic"))
            return

        # keep the cursor roughly centred once the list is taller than the view
        # not laid out yet on the first frame after switching to the list
        height = self.content_size.height or max(1, self.app.size.height - 4)
        start = max(0, min(vm.selected - height // 2, len(vm.entries) - height))
        lines = []
        for idx in range(start, min(len(vm.entries), start + height)):
            entry = vm.entries[idx]
            line = Text(no_wrap=True, overflow="ellipsis")
            line.append(">> " if idx == vm.selected else "   ")
            line.append("★ " if entry.starred else "  ", style="yellow")
            line.append(entry.title, style="dim" if entry.is_read else "bold")
            line.append(" »» ")
            line.append(entry.feed.title, style="italic")
            if idx == vm.selected:
                line.stylize("reverse")
            lines.append(line)
        self.update(Text("\n", no_wrap=True).join(lines))


class ReadingView(Static):
    def show(self, vm: ReadingViewModel) -> None:
        entry = vm.entry
        if entry is None:
            self.border_title = ""
            self.border_subtitle = ""
            self.update("")
            return
        self.border_title = f" {entry.title} "
        details = [entry.feed.title, entry.author, entry.published_at[:10]]
        if vm.showing_original:
            details.append("original")
        self.border_subtitle = " · ".join(d for d in details if d)
        self.update(Text("\n").join(vm.visible_lines))


class KeyboardHelpView(Static):
    def show(self, vm: KeyboardHelpViewModel) -> None:
        self.border_title = "Keyboard Help"
        table = Table.grid(padding=(0, 3))
        table.add_column(justify="right", style="bold cyan")
        table.add_column()
        for heading, bindings in vm.sections:
            table.add_row("", Text(heading, style="bold underline"))
            for keys, description in bindings:
                table.add_row(keys, description)
            table.add_row("", "")
        self.update(table)


class ErrorView(Static):
    def show(self, vm: ErrorViewModel) -> None:
        self.border_title = "Error"
        self.border_subtitle = "b / Esc to dismiss"
        self.update(Text(vm.message, style="bold red"))


class StatusBar(Static):
    pending_requests = reactive(0)
    keybinding_hint = reactive("")

    def on_mount(self) -> None:
        self.update_display()

    def update_display(self) -> None:
        status_items = []
        if self.pending_requests:
            noun = "request" if self.pending_requests == 1 else "requests"
            status_items.append(f"[i]{self.pending_requests} {noun} in flight[/]")

        if self.keybinding_hint:
            status_items.append(self.keybinding_hint)

        self.update(" | ".join(status_items))

    def watch_pending_requests(self, pending_requests: int) -> None:
        self.update_display()

    def watch_keybinding_hint(self, keybinding_hint: str) -> None:
        self.update_display()
