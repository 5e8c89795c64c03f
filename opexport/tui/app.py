"""
ExportApp — main Textual application for the interactive exporter.

The app is only a front end: it forwards every key press to the Runtime and
re-renders the widgets from the Navigator after each transition. It exits when
the navigator reaches TERMINAL.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from functools import partial
from typing import Any

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Header

from opexport.config import get_config
from opexport.navigator import Navigator
from opexport.onepassword import load_export_data
from opexport.runtime import Loader, Runtime
from opexport.tui.widgets import ControlsPanel, EntryList, PathPrompt, StatusLine

logger = logging.getLogger(__name__)


class ExportApp(App):
    """Browse accounts, vaults and items and pick what goes into the export."""

    TITLE = "1Password Export Tool"
    AUTO_FOCUS = None

    CSS = """
    #body {
        padding: 0 1;
    }
    """

    def __init__(
        self,
        load: Loader | None = None,
        navigator: Navigator | None = None,
        tick_interval: float | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        if tick_interval is None:
            tick_interval = get_config().tick_interval
        self.navigator = navigator or Navigator()
        cancel = threading.Event()
        self.runtime = Runtime(
            self.navigator,
            load or partial(load_export_data, cancel=cancel),
            tick_interval=tick_interval,
            on_change=self._render_state,
            cancel=cancel,
        )
        self._runtime_task: asyncio.Task | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="body"):
            yield ControlsPanel(id="controls")
            yield StatusLine(id="status-line")
            yield EntryList(id="entries")
            yield PathPrompt(id="path-prompt")

    async def on_mount(self) -> None:
        """Start loading account data and the loading indicator."""
        self._runtime_task = asyncio.create_task(self._drive())

    async def _drive(self) -> None:
        try:
            await self.runtime.run()
        except Exception:
            logger.error("Export runtime stopped unexpectedly")
            self.exit(None, return_code=1)
            return
        if self.navigator.saved_path is not None:
            self.exit(str(self.navigator.saved_path))
        else:
            self.exit(None)

    def _render_state(self, navigator: Navigator) -> None:
        self.query_one("#status-line", StatusLine).refresh_from(navigator)
        self.query_one("#entries", EntryList).refresh_from(navigator)
        self.query_one("#path-prompt", PathPrompt).refresh_from(navigator)

    async def on_key(self, event: events.Key) -> None:
        """Every key belongs to the navigator; nothing reaches default bindings."""
        event.prevent_default()
        event.stop()
        self.runtime.post_key(event.key, event.character)

    async def on_unmount(self) -> None:
        """Clean up on exit."""
        self.runtime.stop()
        if self._runtime_task:
            self._runtime_task.cancel()
