"""
Asynchronous dispatch of paint searches for interactive hosts.

A user picking colors rapidly produces a burst of requests of which only the
last one matters. MatchDispatcher waits a short debounce delay, runs the
synchronous search on a worker thread and drops any request that a newer one
has superseded.
"""

import asyncio
import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from .catalog_search import MatchResult
from .matcher import PaintMatcher
from .paint_catalog import CatalogEntry

logger = logging.getLogger(__name__)


class MatchDispatcher:
    """Run PaintMatcher searches off the event loop, newest request wins.

    A dispatcher belongs to a single event loop.
    """

    def __init__(self, matcher: Optional[PaintMatcher] = None,
                 debounce_seconds: Optional[float] = None,
                 max_workers: Optional[int] = None):
        self.matcher = matcher or PaintMatcher()
        search_prefs = self.matcher.preferences.search_prefs
        self.debounce_seconds = search_prefs.debounce_seconds if debounce_seconds is None else debounce_seconds
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or search_prefs.max_workers,
            thread_name_prefix='paintmatch',
        )
        self._generation = 0
        self._pending: Optional[asyncio.Future] = None

    async def request(self, target_hex: str, catalog: Iterable[CatalogEntry],
                      owned: Iterable[str] = (), k: Optional[int] = None) -> Optional[List[MatchResult]]:
        """Search for target_hex unless a newer request arrives first.

        Returns:
            The ranked matches, or None if this request was superseded

        Raises:
            InvalidColorFormat, InvalidTopK: from the search itself
        """
        self._generation += 1
        generation = self._generation

        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
            self._pending = None

        if self.debounce_seconds > 0:
            await asyncio.sleep(self.debounce_seconds)
        if generation != self._generation:
            logger.debug(f"Request for {target_hex} superseded before searching")
            return None

        # Snapshot the inputs so the caller may mutate its collections meanwhile
        catalog = list(catalog)
        owned = frozenset(owned)

        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(
            self._executor,
            functools.partial(self.matcher.match_hex, target_hex, catalog, owned, k),
        )
        self._pending = future

        try:
            results = await future
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug(f"Request for {target_hex} superseded while searching")
                return None
            raise
        finally:
            if self._pending is future:
                self._pending = None

        if generation != self._generation:
            logger.debug(f"Discarding stale results for {target_hex}")
            return None
        return results

    def shutdown(self, wait: bool = True):
        """Stop the worker threads."""
        self._executor.shutdown(wait=wait)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.shutdown(wait=False)
