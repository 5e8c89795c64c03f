"""
Custom Textual widgets for the op-export TUI.

ControlsPanel — static key help.
EntryList — the visible entries with cursor marker and exclusion marks.
PathPrompt — the export path input with a caret under the cursor.
StatusLine — loading dots, load errors, position and save errors.

Every widget renders plain text from the Navigator; titles coming from 1Password
are never parsed as markup.
"""

from __future__ import annotations

from typing import assert_never

from textual.content import Content
from textual.widgets import Static

from opexport.model import AccountEntry, Entry, ItemEntry, VaultEntry
from opexport.navigator import Navigator, Status

ARROW = "-->"
EXPORT_PATH_PROMPT = "Export path: "
CONTROLS = """\
-----------------------------------------*
Esc: Quit                                |
Enter: Save export file to path and quit |
Up / Down: Navigate through export data  |
Left / Right: Navigate through path      |
Space: Toggle export data entry          |
-----------------------------------------*"""
LINES_PER_PAGE = 20


def entry_label(entry: Entry) -> str:
    match entry:
        case AccountEntry(attrs=attrs):
            return f"(Account) {attrs.name}"
        case VaultEntry(attrs=attrs):
            return f"  (Vault) {attrs.name}"
        case ItemEntry(item=item):
            return f"    ({item.category_uuid}) {item.overview.title}"
        case _:
            assert_never(entry)


class ControlsPanel(Static):
    """Key help block shown above the entries."""

    DEFAULT_CSS = """
    ControlsPanel {
        color: $text-muted;
        height: auto;
    }
    """

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(Content(CONTROLS), id=id)


class EntryList(Static):
    """Page of visible entries around the cursor.

    Rows look like ``--> ✓ (Account) Personal``; ``x`` marks excluded entries.
    """

    DEFAULT_CSS = """
    EntryList {
        height: auto;
    }
    """

    def __init__(self, page_size: int = LINES_PER_PAGE, *, id: str | None = None) -> None:
        self.page_size = page_size
        self._navigator: Navigator | None = None
        super().__init__(Content(""), id=id)

    def _format(self) -> str:
        nav = self._navigator
        if nav is None or nav.status is not Status.LOADED or not nav.visible:
            return ""

        start = (nav.cursor // self.page_size) * self.page_size
        rows = []
        for i, entry in enumerate(nav.visible[start : start + self.page_size], start):
            marker = ARROW if i == nav.cursor else " " * len(ARROW)
            mark = "x" if nav.exclusions.is_excluded(entry) else "✓"
            rows.append(f"{marker} {mark} {entry_label(entry)}")
        return "\n".join(rows)

    def refresh_from(self, navigator: Navigator) -> None:
        self._navigator = navigator
        self.update(Content(self._format()))


class PathPrompt(Static):
    """Export path buffer with a ``^`` caret under the cursor position."""

    DEFAULT_CSS = """
    PathPrompt {
        height: auto;
        margin: 1 0 0 0;
    }
    """

    def __init__(self, *, id: str | None = None) -> None:
        self._navigator: Navigator | None = None
        super().__init__(Content(""), id=id)

    def _format(self) -> str:
        nav = self._navigator
        if nav is None or nav.status is not Status.LOADED:
            return ""
        buffer = nav.path_input
        caret = " " * (len(EXPORT_PATH_PROMPT) + buffer.pos) + "^"
        return f"{EXPORT_PATH_PROMPT}{buffer.text}\n{caret}"

    def refresh_from(self, navigator: Navigator) -> None:
        self._navigator = navigator
        self.update(Content(self._format()))


class StatusLine(Static):
    """Loading dots, the load error, or the ``(n/m)`` position line."""

    DEFAULT_CSS = """
    StatusLine {
        height: auto;
    }
    StatusLine.-error {
        color: $error;
    }
    """

    def __init__(self, *, id: str | None = None) -> None:
        self._navigator: Navigator | None = None
        super().__init__(Content(""), id=id)

    def _format(self) -> str:
        nav = self._navigator
        if nav is None:
            return ""
        if nav.status in (Status.UNINITIALIZED, Status.LOADING):
            return "Fetching all account data (this may take a while)" + "." * nav.indicator
        if nav.status is Status.LOAD_FAILED and nav.error is not None:
            return nav.error.describe()
        if not nav.visible:
            return "No account data."

        line = f"({nav.cursor + 1}/{len(nav.visible)})"
        excluded = len(nav.exclusions)
        if excluded:
            line += f"  {excluded} excluded"
        if nav.save_error is not None:
            line += f"\nSave failed: {nav.save_error}"
        return line

    def refresh_from(self, navigator: Navigator) -> None:
        self._navigator = navigator
        failed = navigator.status is Status.LOAD_FAILED or navigator.save_error is not None
        self.set_class(failed, "-error")
        self.update(Content(self._format()))
