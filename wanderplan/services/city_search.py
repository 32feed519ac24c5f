"""
Search-as-you-type over city lookups.

``DebouncedCitySearch`` turns keystrokes into rate-limited lookups:

- every input restarts the debounce delay; only the value present when the
  delay elapses is looked up
- queries shorter than the minimum length close the results immediately and
  never reach the lookup
- a lookup that resolves after a newer query was entered is discarded
- lookup failures end in ``SHOWING_EMPTY``; nothing is raised to the caller
"""

import asyncio
import inspect
import logging
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Set

from wanderplan.config import get_settings
from wanderplan.schemas.city import City

logger = logging.getLogger(__name__)

CityLookup = Callable[[str], Awaitable[List[City]]]
SelectCallback = Callable[[City], object]


class SearchState(str, Enum):
    IDLE = "idle"
    QUERYING = "querying"
    SHOWING_RESULTS = "showing_results"
    SHOWING_EMPTY = "showing_empty"
    CLOSED = "closed"


class DebouncedCitySearch:
    """State machine behind the city search box."""

    def __init__(
        self,
        lookup: CityLookup,
        on_select: Optional[SelectCallback] = None,
        placeholder: str = "Search for a city...",
        debounce_ms: Optional[int] = None,
        min_query_length: Optional[int] = None,
    ):
        search_settings = get_settings().search
        self.lookup = lookup
        self.on_select = on_select
        self.placeholder = placeholder
        self.delay = (search_settings.debounce_ms if debounce_ms is None else debounce_ms) / 1000
        self.min_query_length = (
            search_settings.min_query_length if min_query_length is None else min_query_length
        )

        self.query = ""
        self.results: List[City] = []
        self.state = SearchState.IDLE
        self.selected: Optional[City] = None
        self.lookup_count = 0

        self._debounce_task: Optional[asyncio.Task] = None
        self._lookups: Set[asyncio.Task] = set()
        self._callbacks: Set[asyncio.Task] = set()
        # Query of the most recently issued lookup; older resolutions are stale
        self._latest_query: Optional[str] = None

    @property
    def results_visible(self) -> bool:
        return self.state in (SearchState.SHOWING_RESULTS, SearchState.SHOWING_EMPTY)

    def on_input(self, query: str) -> None:
        """Handle a keystroke; must be called from a running event loop."""
        self.query = query
        self._cancel_debounce()
        # Anything in flight now answers an outdated query
        self._latest_query = None

        if len(query) < self.min_query_length:
            self.results = []
            self.state = SearchState.CLOSED
            return

        self._debounce_task = asyncio.get_running_loop().create_task(self._debounce(query))

    async def _debounce(self, query: str) -> None:
        await asyncio.sleep(self.delay)
        self._debounce_task = None
        self._latest_query = query
        task = asyncio.get_running_loop().create_task(self._run_lookup(query))
        self._lookups.add(task)
        task.add_done_callback(self._lookups.discard)

    async def _run_lookup(self, query: str) -> None:
        self.state = SearchState.QUERYING
        self.lookup_count += 1
        try:
            cities = await self.lookup(query)
        except Exception as e:
            logger.warning(f"City lookup failed for '{query}': {e}")
            if self._is_current(query):
                self.results = []
                self.state = SearchState.SHOWING_EMPTY
            return

        if not self._is_current(query):
            logger.debug(f"Discarding stale city results for '{query}'")
            return

        self.results = list(cities)
        self.state = SearchState.SHOWING_RESULTS if self.results else SearchState.SHOWING_EMPTY

    def _is_current(self, query: str) -> bool:
        return self._latest_query == query and self.query == query

    def select(self, city: City) -> None:
        """Pick a result: close, show the canonical label, notify the parent."""
        self._cancel_debounce()
        self._latest_query = None
        self.query = city.label
        self.selected = city
        self.state = SearchState.CLOSED
        if self.on_select is not None:
            result = self.on_select(city)
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._callbacks.add(task)
                task.add_done_callback(self._callback_done)

    def _callback_done(self, task: asyncio.Task) -> None:
        self._callbacks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"City selection handler failed: {error}", exc_info=error)

    def dismiss(self) -> None:
        """Click-away: hide results without touching the query."""
        self.state = SearchState.CLOSED

    def focus(self) -> None:
        """Re-show previous results when the query is long enough."""
        if len(self.query) < self.min_query_length or self.state == SearchState.QUERYING:
            return
        self.state = SearchState.SHOWING_RESULTS if self.results else SearchState.SHOWING_EMPTY

    async def flush(self) -> None:
        """Wait for the pending debounce, in-flight lookups and selection handlers."""
        while True:
            pending = [t for t in self._lookups | self._callbacks if not t.done()]
            if self._debounce_task is not None and not self._debounce_task.done():
                pending.append(self._debounce_task)
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def close(self) -> None:
        self._cancel_debounce()
        for task in list(self._callbacks):
            task.cancel()
        self._latest_query = None
        self.state = SearchState.CLOSED

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None
