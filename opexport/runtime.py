"""
Runtime — the cooperative event loop that drives the Navigator.

One consumer, one queue. Background work (the op load in a daemon thread and
the loading-indicator tick) and key presses all post messages to the queue;
run() applies them to the navigator one at a time on the event loop thread.

The tick task lives exactly as long as the navigator is LOADING. Once the
navigator reaches TERMINAL the loop stops, background tasks are cancelled and
anything posted afterwards is dropped. The load thread is never joined: stop()
sets the cancel event and the thread's late result goes nowhere, so leaving
the program never waits on an in-flight op call.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from opexport.model import ExportData
from opexport.navigator import (
    DataLoaded,
    KeyPressed,
    LoadFailed,
    Message,
    Navigator,
    Status,
    Tick,
)
from opexport.onepassword.errors import LoadCancelled, OPError

logger = logging.getLogger(__name__)

Loader = Callable[[], ExportData]


@dataclass(frozen=True)
class _LoaderCrashed:
    error: Exception


class Runtime:
    """Feed load results, ticks and keys into a Navigator, serially."""

    def __init__(
        self,
        navigator: Navigator,
        load: Loader,
        tick_interval: float = 0.5,
        on_change: Callable[[Navigator], None] | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        self.navigator = navigator
        self._load_fn = load
        self.tick_interval = tick_interval
        self._on_change = on_change
        self._queue: asyncio.Queue[Message | _LoaderCrashed] = asyncio.Queue()
        self.cancelled = cancel or threading.Event()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._load_thread: threading.Thread | None = None
        self._tick_task: asyncio.Task | None = None
        self._started = False
        self._stopped = False

    @property
    def ticking(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    def start(self) -> None:
        """Enter LOADING and launch the load thread and tick task concurrently."""
        if self._started:
            return
        self._started = True
        self._loop = asyncio.get_running_loop()
        self.navigator.start_loading()
        self._load_thread = threading.Thread(
            target=self._load, name="opexport-load", daemon=True
        )
        self._load_thread.start()
        self._tick_task = asyncio.create_task(self._tick_loop())
        self._notify()

    def _load(self) -> None:
        """Run the loader on the load thread and hand its outcome to the loop."""
        message: Message | _LoaderCrashed
        try:
            message = DataLoaded(self._load_fn())
        except LoadCancelled:
            logger.debug("Load cancelled")
            return
        except OPError as e:
            logger.info("Loading account data failed: %s", e.describe())
            message = LoadFailed(e)
        except Exception as e:
            logger.exception("Unexpected error while loading account data")
            message = _LoaderCrashed(e)
        self._post_from_thread(message)

    def _post_from_thread(self, message: Message | _LoaderCrashed) -> None:
        if self.cancelled.is_set() or self._loop is None:
            logger.debug("Load result arrived after stop, dropping %s", type(message).__name__)
            return
        try:
            self._loop.call_soon_threadsafe(self.post, message)
        except RuntimeError:
            logger.debug("Event loop closed, dropping %s", type(message).__name__)

    async def _tick_loop(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            self.post(Tick())

    def post(self, message: Message | _LoaderCrashed) -> None:
        if self._stopped:
            logger.debug("Runtime stopped, dropping %s", type(message).__name__)
            return
        self._queue.put_nowait(message)

    def post_key(self, key: str, character: str | None = None) -> None:
        self.post(KeyPressed(key=key, character=character))

    def dispatch(self, message: Message) -> None:
        """Apply one message and settle background tasks for the new state."""
        self.navigator.update(message)

        if self.navigator.status is not Status.LOADING:
            self._cancel_tick()
        if self.navigator.status is Status.TERMINAL:
            self.stop()

        self._notify()

    async def run(self) -> Navigator:
        """Process messages until the navigator reaches TERMINAL."""
        self.start()
        try:
            while self.navigator.status is not Status.TERMINAL:
                message = await self._queue.get()
                if isinstance(message, _LoaderCrashed):
                    raise message.error
                self.dispatch(message)
        finally:
            self.stop()
        return self.navigator

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        self.cancelled.set()
        self._cancel_tick()

    def _cancel_tick(self) -> None:
        if self._tick_task is None:
            return
        self._tick_task.cancel()
        self._tick_task = None
        logger.debug("Loading indicator tick stopped")

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.navigator)
