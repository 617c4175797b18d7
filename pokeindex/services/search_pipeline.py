"""
Prefix search over the catalog.

Pipeline:
1. Reject blank queries without touching the network
2. Fetch the whole index
3. Keep names that start with the query (case-insensitive)
4. Sort by numeric id, ascending
5. Fetch every match's detail record concurrently
6. Return records in step 4 order

With FanOutPolicy.ALL_OR_NOTHING (the default) one failed detail fetch
fails the whole search. With FanOutPolicy.PARTIAL failed ids are reported
next to the records that did arrive.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from pokeindex.config import settings
from pokeindex.models.errors import SearchFailedError
from pokeindex.models.failure import KnownError
from pokeindex.models.pokemon import DetailRecord, IndexEntry
from pokeindex.models.search import FanOutPolicy, SearchOutcome, SearchStatus
from pokeindex.services.pokeapi_client import PokeApiClient

logger = logging.getLogger(__name__)


def normalize_query(query: str) -> str:
    """Trim and lowercase a query. Blank queries normalize to ``""``."""
    return query.strip().lower()


def filter_by_prefix(entries: list[IndexEntry], query: str) -> list[IndexEntry]:
    """
    Keep entries whose name starts with ``query``, ignoring case.

    Prefix match only: "ka" matches "kakuna" but not "pikachu".
    """
    prefix = normalize_query(query)
    if not prefix:
        return []
    return [e for e in entries if e.name.lower().startswith(prefix)]


def sort_by_id(entries: list[IndexEntry]) -> list[IndexEntry]:
    """
    Order entries by ascending numeric id.

    Raises:
        MalformedResponseError: If an entry's url carries no numeric id
    """
    return sorted(entries, key=lambda e: e.id)


@dataclass
class FanOutResult:
    """Detail records of a fan-out, in request order, plus ids that failed."""

    records: list[DetailRecord] = field(default_factory=list)
    failed_ids: list[int] = field(default_factory=list)


class SearchPipeline:
    """Prefix search with concurrent detail enrichment."""

    def __init__(
        self,
        client: PokeApiClient,
        policy: FanOutPolicy | None = None,
    ) -> None:
        """
        Args:
            client: Catalog client used for index and detail fetches
            policy: Fan-out failure policy. Defaults to settings.fanout_policy.
        """
        self.client = client
        self.policy = policy or FanOutPolicy(settings.fanout_policy)

    async def matching_entries(self, query: str) -> list[IndexEntry]:
        """Fetch the index and return matching entries in ascending id order."""
        entries = await self.client.fetch_index()
        return sort_by_id(filter_by_prefix(entries, query))

    async def _fetch_all(self, ids: list[int]) -> list[DetailRecord]:
        """
        Fetch every id concurrently; the first failure cancels the rest.

        Each task writes into its own slot so completion order never
        affects result order.
        """
        slots: list[DetailRecord | None] = [None] * len(ids)

        async def fetch_into(position: int, pokemon_id: int) -> None:
            slots[position] = await self.client.fetch_detail(pokemon_id)

        try:
            async with asyncio.TaskGroup() as group:
                for position, pokemon_id in enumerate(ids):
                    group.create_task(fetch_into(position, pokemon_id))
        except ExceptionGroup as eg:
            known = [e for e in eg.exceptions if isinstance(e, KnownError)]
            if not known:
                raise
            raise known[0] from None

        return [record for record in slots if record is not None]

    async def _fetch_available(self, ids: list[int]) -> FanOutResult:
        """Fetch every id concurrently, keeping whatever succeeds."""
        outcomes = await asyncio.gather(
            *(self.client.fetch_detail(pokemon_id) for pokemon_id in ids),
            return_exceptions=True,
        )

        result = FanOutResult()
        for pokemon_id, outcome in zip(ids, outcomes, strict=True):
            if isinstance(outcome, KnownError):
                logger.warning("Detail fetch for %d failed: %s", pokemon_id, outcome.message)
                result.failed_ids.append(pokemon_id)
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                result.records.append(outcome)
        return result

    async def _search(self, query: str) -> FanOutResult:
        if not normalize_query(query):
            return FanOutResult()

        try:
            matches = await self.matching_entries(query)
            ids = [entry.id for entry in matches]

            if self.policy == FanOutPolicy.PARTIAL:
                result = await self._fetch_available(ids)
            else:
                result = FanOutResult(records=await self._fetch_all(ids))
        except KnownError as e:
            logger.error("Search for '%s' failed: %s", query, e.message)
            raise SearchFailedError(query, e) from e

        logger.info(
            "Search for '%s' matched %d, fetched %d, failed %d",
            query,
            len(ids),
            len(result.records),
            len(result.failed_ids),
        )
        return result

    async def search(self, query: str) -> list[DetailRecord]:
        """
        Search the catalog by name prefix.

        Args:
            query: Name prefix; surrounding whitespace and case are ignored

        Returns:
            Matching records in ascending id order. Empty for a blank query
            (no requests made) or when nothing matches. Under the PARTIAL
            policy, records whose fetch failed are left out.

        Raises:
            SearchFailedError: If the index fetch fails, or (ALL_OR_NOTHING)
                any detail fetch fails
        """
        result = await self._search(query)
        return result.records

    async def run(self, query: str) -> SearchOutcome:
        """
        Search and classify the result instead of raising.

        A failed search and a search with zero matches both come back with
        no records; ``status`` distinguishes FAILED from NO_MATCHES.
        """
        if not normalize_query(query):
            return SearchOutcome(query=query, status=SearchStatus.EMPTY_QUERY)

        try:
            result = await self._search(query)
        except SearchFailedError as e:
            return SearchOutcome(query=query, status=SearchStatus.FAILED, error=e.detail)

        if result.failed_ids:
            status = SearchStatus.PARTIAL
        elif result.records:
            status = SearchStatus.FOUND
        else:
            status = SearchStatus.NO_MATCHES

        return SearchOutcome(
            query=query,
            status=status,
            records=result.records,
            failed_ids=result.failed_ids,
        )
