"""Tests for opexport.navigator — the selection state machine."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from opexport.navigator import (
    DataLoaded,
    KeyPressed,
    LineBuffer,
    LoadFailed,
    Navigator,
    Status,
    Tick,
)
from opexport.onepassword.errors import CLIError


def _press(nav: Navigator, *keys: str) -> None:
    for key in keys:
        if len(key) == 1:
            nav.update(KeyPressed(key=key, character=key))
        else:
            nav.update(KeyPressed(key=key))


def _type(nav: Navigator, text: str) -> None:
    for ch in text:
        nav.update(KeyPressed(key=ch, character=ch))


@pytest.fixture
def loaded(small_tree) -> Navigator:
    nav = Navigator()
    nav.start_loading()
    nav.update(DataLoaded(small_tree))
    return nav


class TestLifecycle:
    def test_initial_state(self):
        """A fresh navigator is uninitialized with no data."""
        nav = Navigator()
        assert nav.status is Status.UNINITIALIZED
        assert nav.visible == []
        assert nav.cursor == 0
        assert nav.current_entry is None

    def test_start_loading(self):
        """start_loading enters LOADING with the first indicator dot."""
        nav = Navigator()
        nav.start_loading()
        assert nav.status is Status.LOADING
        assert nav.indicator == 1

    def test_loaded(self, loaded, small_tree):
        """DataLoaded builds flat and visible lists and resets the cursor."""
        assert loaded.status is Status.LOADED
        assert loaded.export_data is small_tree
        assert [e.id for e in loaded.flat] == ["A", "V", "I1", "I2"]
        assert loaded.visible == loaded.flat
        assert loaded.cursor == 0
        assert loaded.indicator == 0

    def test_reload_replaces_tree_and_resets_selection(self, loaded, wide_tree):
        """A second DataLoaded replaces the tree and clears exclusions."""
        _press(loaded, "down", "space")
        loaded.update(DataLoaded(wide_tree))
        assert loaded.export_data is wide_tree
        assert loaded.flat[0].id == "A1"
        assert len(loaded.exclusions) == 0
        assert loaded.cursor == 0

    def test_load_failed(self):
        nav = Navigator()
        nav.start_loading()
        error = CLIError("[ERROR] You are not currently signed in.")
        nav.update(LoadFailed(error))
        assert nav.status is Status.LOAD_FAILED
        assert nav.error is error
        assert nav.indicator == 0

    def test_load_failed_is_inert(self):
        """Keys other than Escape do nothing after a failed load."""
        nav = Navigator()
        nav.start_loading()
        nav.update(LoadFailed(CLIError("boom")))
        _press(nav, "down", "space", "a", "enter")
        assert nav.status is Status.LOAD_FAILED
        assert nav.path_input.text == ""

    @pytest.mark.parametrize("status", ["uninitialized", "loading", "loaded", "load_failed"])
    def test_escape_terminates_from_any_state(self, status, small_tree):
        """Escape reaches TERMINAL from every state."""
        nav = Navigator()
        if status != "uninitialized":
            nav.start_loading()
        if status == "loaded":
            nav.update(DataLoaded(small_tree))
        elif status == "load_failed":
            nav.update(LoadFailed(CLIError("boom")))
        _press(nav, "escape")
        assert nav.status is Status.TERMINAL

    def test_messages_after_terminal_dropped(self, small_tree):
        """Nothing changes once the navigator is TERMINAL."""
        nav = Navigator()
        nav.start_loading()
        _press(nav, "escape")
        nav.update(DataLoaded(small_tree))
        assert nav.status is Status.TERMINAL
        assert nav.export_data is None


class TestTick:
    def test_cycles_one_to_five(self):
        nav = Navigator()
        nav.start_loading()
        seen = []
        for _ in range(6):
            nav.update(Tick())
            seen.append(nav.indicator)
        assert seen == [2, 3, 4, 5, 1, 2]

    def test_ignored_once_loaded(self, loaded):
        """Ticks after loading leave the indicator alone."""
        loaded.update(Tick())
        assert loaded.indicator == 0


class TestCursor:
    def test_down_and_up(self, loaded):
        _press(loaded, "down", "down")
        assert loaded.cursor == 2
        _press(loaded, "up")
        assert loaded.cursor == 1

    def test_up_at_top_clamped(self, loaded):
        """Up on the first entry keeps the cursor at 0."""
        _press(loaded, "up")
        assert loaded.cursor == 0

    def test_down_at_bottom_clamped(self, loaded):
        """Down on the last entry keeps the cursor there."""
        _press(loaded, "down", "down", "down")
        assert loaded.cursor == 3
        _press(loaded, "down")
        assert loaded.cursor == 3

    def test_empty_tree(self):
        """An empty tree loads with no visible entries."""
        from opexport.model import ExportData

        nav = Navigator()
        nav.start_loading()
        nav.update(DataLoaded(ExportData()))
        _press(nav, "down", "up", "space")
        assert nav.cursor == 0
        assert nav.visible == []
        assert len(nav.exclusions) == 0


class TestToggle:
    def test_space_toggles_entry_under_cursor(self, loaded):
        """Space toggles the entry under the cursor."""
        _press(loaded, "down", "down", "space")
        assert loaded.exclusions.items == {"I1"}
        _press(loaded, "space")
        assert loaded.exclusions.items == set()

    def test_excluding_vault_hides_items(self, loaded):
        """Excluding a vault hides its items from the view."""
        _press(loaded, "down", "space")
        assert [e.id for e in loaded.visible] == ["A", "V"]
        assert loaded.current_entry.id == "V"

    def test_excluding_account_hides_everything_below(self, loaded):
        """Excluding an account hides its vaults and items."""
        _press(loaded, "space")
        assert [e.id for e in loaded.visible] == ["A"]
        _press(loaded, "down")
        assert loaded.cursor == 0

    def test_toggle_follows_visible_entry(self, wide_tree):
        """After a subtree is hidden, Space acts on the entry shown under the cursor."""
        nav = Navigator()
        nav.start_loading()
        nav.update(DataLoaded(wide_tree))
        _press(nav, "space")  # exclude A1 -> visible: A1, A2, V3, I3, V4, ...
        _press(nav, "down", "down")
        assert nav.current_entry.id == "V3"
        _press(nav, "space")
        assert nav.exclusions.vaults == {"V3"}
        assert nav.exclusions.accounts == {"A1"}

    def test_cursor_clamped_after_list_shrinks(self, wide_tree):
        """The cursor is clamped when the visible list shrinks."""
        nav = Navigator()
        nav.start_loading()
        nav.update(DataLoaded(wide_tree))
        _press(nav, *["down"] * 5)  # A2
        assert nav.current_entry.id == "A2"
        _press(nav, "space")
        assert nav.cursor == 5
        assert nav.cursor < len(nav.visible)


class TestPathInput:
    def test_typing_sets_output_path(self, loaded):
        """Typed characters become the pending output path."""
        _type(loaded, "out.json")
        assert loaded.path_input.text == "out.json"
        assert loaded.output_path == "out.json"

    def test_editing_keys(self, loaded):
        _type(loaded, "ab")
        _press(loaded, "left")
        _type(loaded, "X")
        assert loaded.output_path == "aXb"
        _press(loaded, "backspace")
        assert loaded.output_path == "ab"
        _press(loaded, "home", "delete")
        assert loaded.output_path == "b"

    def test_space_does_not_insert(self, loaded):
        """Space toggles the current entry and is never typed into the path."""
        _type(loaded, "a")
        loaded.update(KeyPressed(key="space", character=" "))
        assert loaded.output_path == "a"
        assert loaded.exclusions.accounts == {"A"}

    def test_enter_with_empty_buffer_does_nothing(self, small_tree):
        """Enter with no path neither saves nor exits."""
        saver = MagicMock()
        nav = Navigator(saver=saver)
        nav.start_loading()
        nav.update(DataLoaded(small_tree))
        _press(nav, "enter")
        saver.assert_not_called()
        assert nav.status is Status.LOADED

    def test_enter_saves_and_terminates(self, small_tree, tmp_path: Path):
        """Enter saves to the typed path and terminates."""
        nav = Navigator()
        nav.start_loading()
        nav.update(DataLoaded(small_tree))
        _press(nav, "down", "down", "space")
        out = tmp_path / "out.json"
        _type(nav, str(out))
        _press(nav, "enter")
        assert nav.status is Status.TERMINAL
        assert nav.saved_path == out
        doc = json.loads(out.read_text(encoding="utf-8"))
        assert [i["uuid"] for i in doc["accounts"][0]["vaults"][0]["items"]] == ["I2"]

    def test_save_failure_keeps_navigator_loaded(self, small_tree, tmp_path: Path):
        """A failed save keeps the navigator LOADED with the error shown."""
        nav = Navigator()
        nav.start_loading()
        nav.update(DataLoaded(small_tree))
        bad = tmp_path / "missing" / "out.json"
        _type(nav, str(bad))
        _press(nav, "enter")
        assert nav.status is Status.LOADED
        assert isinstance(nav.save_error, OSError)
        assert nav.path_input.text == str(bad)

        # Correct the path and retry
        for _ in range(len("missing/out.json")):
            _press(nav, "backspace")
        assert nav.save_error is None
        _type(nav, "out.json")
        _press(nav, "enter")
        assert nav.status is Status.TERMINAL
        assert (tmp_path / "out.json").exists()

    def test_saver_receives_tree_and_exclusions(self, small_tree):
        """The saver gets the loaded tree and the current exclusions."""
        saver = MagicMock(return_value=Path("x.json"))
        nav = Navigator(saver=saver)
        nav.start_loading()
        nav.update(DataLoaded(small_tree))
        _press(nav, "space")
        _type(nav, "x.json")
        _press(nav, "enter")
        saver.assert_called_once_with(small_tree, nav.exclusions, "x.json")


class TestLineBuffer:
    def test_insert_at_cursor(self):
        """Characters are inserted at the cursor, not appended."""
        buf = LineBuffer("ac")
        buf.handle("left")
        buf.handle("b", "b")
        assert buf.text == "abc"
        assert buf.pos == 2

    def test_bounds(self):
        """Cursor movement and deletes stop at the buffer ends."""
        buf = LineBuffer("a")
        buf.handle("right")
        assert buf.pos == 1
        buf.handle("home")
        buf.handle("left")
        assert buf.pos == 0
        buf.handle("backspace")
        assert buf.text == "a"
        buf.handle("end")
        buf.handle("delete")
        assert buf.text == "a"

    def test_unknown_key_not_consumed(self):
        """Keys the buffer does not know are left unconsumed."""
        buf = LineBuffer()
        assert buf.handle("f5") is False
        assert buf.handle("tab", "\t") is False
        assert buf.text == ""

    def test_clear(self):
        buf = LineBuffer("abc")
        buf.clear()
        assert (buf.text, buf.pos) == ("", 0)
