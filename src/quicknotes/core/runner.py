"""
Background Event Loop

Runs one asyncio event loop on a daemon thread so synchronous callers
(the Streamlit script thread, scripts) can drive the async gateway and
controller. Every coroutine runs on the same loop, which keeps the
engine's pooled aiosqlite connections bound to a single loop.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Coroutine
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BackgroundLoop:
    """
    Event loop running on a dedicated daemon thread.

    Usage::

        loop = BackgroundLoop()
        notes = loop.run(gateway.search("", 50, 0))
        loop.stop()
    """

    def __init__(self, name: str = "quicknotes-loop") -> None:
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._serve, name=name, daemon=True)
        self._thread.start()
        logger.debug("Background loop %s started", name)

    def _serve(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    @property
    def is_running(self) -> bool:
        return self._thread.is_alive() and not self._loop.is_closed()

    def run(self, coro: Coroutine[Any, Any, T], timeout: float | None = None) -> T:
        """
        Run ``coro`` on the background loop and block for its result.

        Exceptions raised by the coroutine propagate to the caller.
        """
        if not self.is_running:
            coro.close()
            raise RuntimeError("Background loop is not running")
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        return future.result(timeout)

    def stop(self) -> None:
        """Stop the loop and join its thread."""
        if not self.is_running:
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join()
        self._loop.close()
        logger.debug("Background loop stopped")
