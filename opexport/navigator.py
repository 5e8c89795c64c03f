"""
Navigator — the selection state machine behind the interactive exporter.

States:
    UNINITIALIZED → LOADING → LOADED | LOAD_FAILED
    any state     → TERMINAL (Escape, or a successful save)

The navigator owns all UI state explicitly and applies exactly one message per
update() call. It never does I/O of its own except the export write triggered
by Enter; the runtime feeds it load results, ticks and key presses.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from opexport.codec import flatten
from opexport.exclusions import ExclusionSet
from opexport.export import save
from opexport.model import Entry, ExportData
from opexport.onepassword.errors import OPError
from opexport.visibility import project

logger = logging.getLogger(__name__)

INDICATOR_MAX = 5

Saver = Callable[[ExportData, ExclusionSet, str], Path]


class Status(StrEnum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    LOADED = "loaded"
    LOAD_FAILED = "load_failed"
    TERMINAL = "terminal"


# ─── Messages ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class DataLoaded:
    export_data: ExportData


@dataclass(frozen=True)
class LoadFailed:
    error: OPError


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class KeyPressed:
    key: str  # textual key name: "up", "space", "a", "backspace", ...
    character: str | None = None


Message = DataLoaded | LoadFailed | Tick | KeyPressed


# ─── Path input ──────────────────────────────────────────────────────


class LineBuffer:
    """Single-line text field with a cursor."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.pos = len(text)

    def handle(self, key: str, character: str | None = None) -> bool:
        """Apply an editing key. Returns True if the key was consumed."""
        if key == "left":
            self.pos = max(0, self.pos - 1)
        elif key == "right":
            self.pos = min(len(self.text), self.pos + 1)
        elif key == "home":
            self.pos = 0
        elif key == "end":
            self.pos = len(self.text)
        elif key == "backspace":
            if self.pos > 0:
                self.text = self.text[: self.pos - 1] + self.text[self.pos :]
                self.pos -= 1
        elif key == "delete":
            self.text = self.text[: self.pos] + self.text[self.pos + 1 :]
        elif character and len(character) == 1 and character.isprintable():
            self.text = self.text[: self.pos] + character + self.text[self.pos :]
            self.pos += 1
        else:
            return False
        return True

    def clear(self) -> None:
        self.text = ""
        self.pos = 0


# ─── State machine ───────────────────────────────────────────────────


class Navigator:
    """Holds the loaded tree, the exclusion set, the cursor and the path buffer."""

    def __init__(self, saver: Saver = save) -> None:
        self._saver = saver
        self.status = Status.UNINITIALIZED
        self.export_data: ExportData | None = None
        self.flat: list[Entry] = []
        self.visible: list[Entry] = []
        self.exclusions = ExclusionSet()
        self.cursor = 0
        self.path_input = LineBuffer()
        self.output_path = ""
        self.indicator = 0
        self.error: OPError | None = None
        self.save_error: OSError | None = None
        self.saved_path: Path | None = None

    @property
    def current_entry(self) -> Entry | None:
        if not self.visible:
            return None
        return self.visible[self.cursor]

    def start_loading(self) -> None:
        if self.status is Status.UNINITIALIZED:
            self.status = Status.LOADING
            self.indicator = 1

    def update(self, message: Message) -> None:
        """Apply one message. Messages arriving after TERMINAL are dropped."""
        if self.status is Status.TERMINAL:
            logger.debug("Dropping %s after terminal state", type(message).__name__)
            return

        match message:
            case DataLoaded(export_data=export_data):
                self._on_loaded(export_data)
            case LoadFailed(error=error):
                self._on_load_failed(error)
            case Tick():
                self._on_tick()
            case KeyPressed(key=key, character=character):
                self._on_key(key, character)

    # ── Background results ──

    def _on_loaded(self, export_data: ExportData) -> None:
        self.export_data = export_data
        self.flat = flatten(export_data)
        self.exclusions.clear()
        self._refresh_visible()
        self.cursor = 0
        self.indicator = 0
        self.error = None
        self.status = Status.LOADED
        logger.info("Loaded %d entries", len(self.flat))

    def _on_load_failed(self, error: OPError) -> None:
        self.error = error
        self.indicator = 0
        self.status = Status.LOAD_FAILED

    def _on_tick(self) -> None:
        if self.status is not Status.LOADING:
            return
        self.indicator = 1 if self.indicator >= INDICATOR_MAX else self.indicator + 1

    # ── Keys ──

    def _on_key(self, key: str, character: str | None) -> None:
        if key == "escape":
            self.status = Status.TERMINAL
            return

        if self.status is not Status.LOADED:
            return

        if key == "enter":
            self._save()
        elif key == "up":
            self.move_up()
        elif key == "down":
            self.move_down()
        elif key == "space":
            self.toggle_current()
        elif self.path_input.handle(key, character):
            self.output_path = self.path_input.text
            self.save_error = None

    def move_up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def move_down(self) -> None:
        if self.cursor < len(self.visible) - 1:
            self.cursor += 1

    def toggle_current(self) -> None:
        entry = self.current_entry
        if entry is None:
            return
        self.exclusions.toggle(entry)
        self._refresh_visible()

    def _refresh_visible(self) -> None:
        self.visible = project(self.flat, self.exclusions)
        self.cursor = max(0, min(self.cursor, len(self.visible) - 1))

    def _save(self) -> None:
        path = self.output_path
        if not path or self.export_data is None:
            return
        try:
            self.saved_path = self._saver(self.export_data, self.exclusions, path)
        except OSError as e:
            logger.warning("Saving export to %s failed: %s", path, e)
            self.save_error = e
            return
        self.status = Status.TERMINAL
