"""
Search session: one live search at a time.

Submitting a new query cancels the search still in flight. Cancellation
lands at whatever the old search is awaiting (the index fetch or a detail
fetch), so stale work stops early. A superseded search reports
SUPERSEDED and never replaces the latest published outcome.
"""

import asyncio
import logging

from pokeindex.models.search import SearchOutcome, SearchStatus
from pokeindex.services.search_pipeline import SearchPipeline

logger = logging.getLogger(__name__)


class SearchSession:
    """Runs searches so that only the most recent submission is published."""

    def __init__(self, pipeline: SearchPipeline) -> None:
        self.pipeline = pipeline
        self.latest: SearchOutcome | None = None
        self._current: asyncio.Task[SearchOutcome] | None = None
        self._generation = 0

    @property
    def in_flight(self) -> bool:
        return self._current is not None and not self._current.done()

    def cancel(self) -> bool:
        """
        Abandon the in-flight search, if any.

        Returns:
            True if a search was cancelled
        """
        self._generation += 1
        current = self._current
        if current is None or current.done():
            return False
        current.cancel()
        return True

    async def submit(self, query: str) -> SearchOutcome:
        """
        Run a search, superseding any search still in flight.

        Returns:
            The search outcome, or a SUPERSEDED outcome if a later
            submission (or ``cancel()``) overtook this one
        """
        self.cancel()
        generation = self._generation

        task = asyncio.create_task(self.pipeline.run(query))
        self._current = task

        try:
            outcome = await task
        except asyncio.CancelledError:
            if generation == self._generation:
                # We were cancelled by our own caller, not superseded
                raise
            outcome = None

        if outcome is None or generation != self._generation:
            logger.info("Search for '%s' was superseded", query)
            return SearchOutcome(query=query, status=SearchStatus.SUPERSEDED)

        self.latest = outcome
        return outcome
