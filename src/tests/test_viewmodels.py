from __future__ import annotations

import random

import pytest

from flux_tui.datamodels import ListViewType, ReadStatus
from flux_tui.messages import (
    AppClose,
    Batch,
    ChangeEntryReadStatus,
    DismissError,
    EntrySelected,
    FetchOriginalEntryContentsRequested,
    ForceRefreshRequested,
    HideKeyboardHelp,
    MarkAllAsRead,
    OpenInBrowserRequested,
    ReadEntryViewClosed,
    RefreshRequested,
    SaveEntry,
    ShowKeyboardHelp,
    Tick,
    ToggleStarred,
)
from flux_tui.viewmodels import (
    PAGE_SCROLL_AMOUNT,
    Direction,
    EntryListViewModel,
    ErrorViewModel,
    KeyboardHelpViewModel,
    LoadingViewModel,
    ReadingViewModel,
)


@pytest.fixture
def entry_list(make_entry):
    return EntryListViewModel([
        make_entry(1),
        make_entry(2, status=ReadStatus.READ),
        make_entry(3, starred=True),
    ])


# --- Entry list ---
def test_selection_stays_in_bounds(entry_list):
    rng = random.Random(1234)
    for _ in range(200):
        entry_list.move_selection(rng.choice(list(Direction)))
        assert 0 <= entry_list.selected <= len(entry_list.entries) - 1


def test_selection_does_not_wrap(entry_list):
    assert entry_list.move_selection(Direction.UP) is False
    assert entry_list.selected == 0
    for _ in range(5):
        entry_list.move_selection(Direction.DOWN)
    assert entry_list.selected == 2


def test_move_keys_produce_tick_only_when_moving(entry_list):
    assert entry_list.handle_input("k") is None
    assert entry_list.handle_input("j") == Tick()
    assert entry_list.handle_input("down") == Tick()
    assert entry_list.handle_input("down") is None
    assert entry_list.handle_input("up") == Tick()


def test_replace_entries_clamps_selection(entry_list, make_entry):
    entry_list.selected = 2
    entry_list.replace_entries([make_entry(10)])
    assert entry_list.selected == 0
    entry_list.replace_entries([])
    assert entry_list.selected == 0
    assert entry_list.is_empty


def test_replace_entries_keeps_selection_in_range(entry_list, make_entry):
    entry_list.selected = 1
    entry_list.replace_entries([make_entry(i) for i in range(10)])
    assert entry_list.selected == 1


def test_toggle_read_is_an_involution(entry_list):
    first = entry_list.toggle_read_at(0)
    assert first == ChangeEntryReadStatus(1, ReadStatus.READ)
    assert entry_list.entries[0].status is ReadStatus.READ
    second = entry_list.toggle_read_at(0)
    assert second == ChangeEntryReadStatus(1, ReadStatus.UNREAD)
    assert entry_list.entries[0].status is ReadStatus.UNREAD


def test_toggle_starred_is_optimistic(entry_list):
    assert entry_list.toggle_starred_at(2) == ToggleStarred(3)
    assert entry_list.entries[2].starred is False


@pytest.mark.parametrize("index", [-1, 3, 100])
def test_out_of_bounds_actions_are_no_ops(entry_list, index):
    assert entry_list.toggle_read_at(index) is None
    assert entry_list.toggle_starred_at(index) is None
    assert entry_list.save_at(index) is None
    assert entry_list.mark_read_at(index) is None


def test_save_and_keys(entry_list):
    entry_list.selected = 1
    assert entry_list.handle_input("e") == SaveEntry(2)
    assert entry_list.handle_input("s") == ToggleStarred(2)
    assert entry_list.handle_input("m") == ChangeEntryReadStatus(2, ReadStatus.UNREAD)
    assert entry_list.handle_input("o") == OpenInBrowserRequested("https://example.com/2")
    assert entry_list.handle_input("?") == ShowKeyboardHelp()
    assert entry_list.handle_input("q") == AppClose()
    assert entry_list.handle_input("x") is None


def test_mark_all_read(make_entry):
    vm = EntryListViewModel([make_entry(1), make_entry(2)])
    msg = vm.mark_all_read()
    assert msg == MarkAllAsRead((1, 2))
    assert all(e.status is ReadStatus.READ for e in vm.entries)


def test_mark_all_read_on_empty_list():
    assert EntryListViewModel().mark_all_read() is None


def test_cycle_view_type_requests_refresh(entry_list):
    assert entry_list.handle_input("v") == RefreshRequested(ListViewType.STARRED_ENTRIES)
    assert entry_list.cycle_view_type() == RefreshRequested(ListViewType.UNREAD_ENTRIES)
    assert entry_list.view_type is ListViewType.UNREAD_ENTRIES


def test_refresh_keys_use_current_view_type(entry_list):
    entry_list.view_type = ListViewType.STARRED_ENTRIES
    assert entry_list.handle_input("r") == RefreshRequested(ListViewType.STARRED_ENTRIES)
    assert entry_list.handle_input("R") == ForceRefreshRequested(ListViewType.STARRED_ENTRIES)


def test_submit_marks_read_and_opens(entry_list):
    msg = entry_list.handle_input("enter")
    assert isinstance(msg, Batch)
    change, selected = msg.messages
    assert change == ChangeEntryReadStatus(1, ReadStatus.READ)
    assert isinstance(selected, EntrySelected)
    assert selected.entry.id == 1
    assert selected.entry.status is ReadStatus.READ
    # the reading view gets a copy, not the list's own entry
    assert selected.entry is not entry_list.entries[0]


def test_submit_already_read_entry_skips_status_change(entry_list):
    entry_list.selected = 1
    msg = entry_list.submit_selected()
    assert msg.messages[0] is None
    assert msg.messages[1].entry.id == 2


def test_submit_on_empty_list():
    assert EntryListViewModel().submit_selected() is None


def test_zero_state_text():
    vm = EntryListViewModel()
    assert vm.zero_state_text == "No unread entries. Press r to refresh."
    vm.view_type = ListViewType.STARRED_ENTRIES
    assert vm.zero_state_text == "No starred entries. Press r to refresh."


def test_update_entry_replaces_matching_copy(entry_list, make_entry):
    changed = make_entry(2, status=ReadStatus.UNREAD, starred=True)
    entry_list.update_entry(changed)
    assert entry_list.entries[1].starred is True
    assert entry_list.entries[1] is not changed
    entry_list.update_entry(make_entry(99))
    assert [e.id for e in entry_list.entries] == [1, 2, 3]


# --- Reading view ---
@pytest.fixture
def reading(make_entry):
    vm = ReadingViewModel()
    vm.open(make_entry(5, status=ReadStatus.READ,
                       content="".join(f"<p>line {i}</p>" for i in range(40))))
    return vm


def test_open_resets_scroll(reading, make_entry):
    reading.scroll = 12
    reading.open(make_entry(6))
    assert reading.scroll == 0
    assert reading.entry.id == 6
    assert [line.plain for line in reading.visible_lines] == ["Body"]


def test_scroll_floor(reading):
    for _ in range(3):
        reading.handle_input("j")
    for _ in range(5):
        reading.handle_input("k")
    assert reading.scroll == 0


def test_scroll_past_end_is_allowed(reading):
    for _ in range(500):
        reading.scroll_by(Direction.DOWN)
    assert reading.scroll == 500
    assert reading.visible_lines == []


def test_page_scroll(reading):
    assert reading.handle_input("pagedown") == Tick()
    assert reading.scroll == PAGE_SCROLL_AMOUNT
    reading.scroll_by(Direction.UP, 3)
    reading.page(Direction.UP)
    assert reading.scroll == 0


def test_reading_toggles(reading):
    assert reading.handle_input("m") == ChangeEntryReadStatus(5, ReadStatus.UNREAD)
    assert reading.handle_input("u") is None
    assert reading.handle_input("m") == ChangeEntryReadStatus(5, ReadStatus.READ)
    assert reading.handle_input("u") == ChangeEntryReadStatus(5, ReadStatus.UNREAD)
    assert reading.handle_input("s") == ToggleStarred(5)
    assert reading.entry.starred is True


def test_reading_requests(reading):
    assert reading.handle_input("e") == SaveEntry(5)
    assert reading.handle_input("F") == FetchOriginalEntryContentsRequested(5)
    assert reading.handle_input("o") == OpenInBrowserRequested("https://example.com/5")
    assert reading.handle_input("b") == ReadEntryViewClosed()
    assert reading.handle_input("escape") == ReadEntryViewClosed()


def test_show_original_replaces_body(reading):
    reading.scroll = 10
    assert reading.show_original(5, "<p>The whole article</p>") is True
    assert reading.scroll == 0
    assert reading.showing_original is True
    assert [line.plain for line in reading.visible_lines] == ["The whole article"]
    assert reading.entry.original_content == "<p>The whole article</p>"


def test_show_original_for_other_entry_is_ignored(reading):
    assert reading.show_original(999, "<p>stale</p>") is False
    assert reading.showing_original is False


def test_inactive_reading_view_is_inert():
    vm = ReadingViewModel()
    assert not vm.is_active
    assert vm.toggle_read() is None
    assert vm.toggle_starred() is None
    assert vm.request_save() is None
    assert vm.request_fetch_original() is None
    assert vm.close() is None


def test_close_returns_entry(reading):
    entry = reading.close()
    assert entry.id == 5
    assert not reading.is_active
    assert reading.visible_lines == []


# --- Overlays and loading ---
def test_overlay_keys():
    help_vm = KeyboardHelpViewModel()
    assert help_vm.handle_input("escape") == HideKeyboardHelp()
    assert help_vm.handle_input("b") == HideKeyboardHelp()
    assert help_vm.handle_input("q") == AppClose()
    assert help_vm.handle_input("j") is None

    error_vm = ErrorViewModel()
    error_vm.show("Error: boom")
    assert error_vm.message == "Error: boom"
    assert error_vm.handle_input("escape") == DismissError()
    assert error_vm.handle_input("q") == AppClose()


def test_loading_view_keys():
    vm = LoadingViewModel()
    assert vm.text == "Loading unread entries..."
    vm.view_type = ListViewType.STARRED_ENTRIES
    assert vm.handle_input("r") == RefreshRequested(ListViewType.STARRED_ENTRIES)
    assert vm.handle_input("R") == ForceRefreshRequested(ListViewType.STARRED_ENTRIES)
    assert vm.handle_input("q") == AppClose()
    assert vm.handle_input("j") is None
