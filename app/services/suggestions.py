from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional

logger = logging.getLogger(__name__)

Lookup = Callable[[str], Awaitable[List[Any]]]
ResultsCallback = Callable[[str, List[Any]], None]


class SuggestionDebouncer:
    """
    Debounces location-suggestion lookups driven by keystrokes.

    Each `on_input` call supersedes the pending lookup, so only the last input
    inside `delay_s` reaches the provider. After `select()` the next input
    change (the field being filled with the chosen label) is ignored once.

    Must be used from within a running event loop.
    """

    def __init__(
        self,
        lookup: Lookup,
        delay_s: float = 0.5,
        on_results: Optional[ResultsCallback] = None,
    ):
        self.lookup = lookup
        self.delay_s = delay_s
        self.on_results = on_results
        self.last_query: Optional[str] = None
        self.last_results: List[Any] = []
        self._pending: Optional[asyncio.Task] = None
        self._suppress_next = False

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    def select(self, label: str) -> None:
        """Record a picked suggestion; the next input change will not trigger a lookup."""
        self.cancel()
        self._suppress_next = True
        self.last_query = label
        self.last_results = []

    def on_input(self, query: str) -> None:
        self.cancel()

        if self._suppress_next:
            self._suppress_next = False
            return

        if not query or not query.strip():
            self.last_results = []
            return

        self._pending = asyncio.get_running_loop().create_task(self._run(query))

    async def _run(self, query: str) -> None:
        await asyncio.sleep(self.delay_s)
        try:
            results = await self.lookup(query)
        except Exception:
            logger.exception("Suggestion lookup failed for %r", query)
            results = []

        self.last_query = query
        self.last_results = list(results)
        if self.on_results is not None:
            self.on_results(query, self.last_results)

    async def wait(self) -> None:
        """Wait for the pending lookup, if any, to finish."""
        task = self._pending
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            pass
