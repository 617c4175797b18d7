"""
PokeAPI client.

Fetches the catalog index and single Pokemon records. Every call issues
exactly one request: there is no retry and no caching, so fetching the
same id twice hits the network twice.
"""

import logging
from types import TracebackType
from typing import Any

import httpx

from pokeindex.config import USER_AGENT, settings
from pokeindex.models.errors import MalformedResponseError, NetworkError, RecordNotFoundError
from pokeindex.models.pokemon import DetailRecord, IndexEntry
from pokeindex.parsers.pokeapi import parse_detail, parse_index

logger = logging.getLogger(__name__)


class PokeApiClient:
    """
    Client for the PokeAPI catalog.

    Holds one ``httpx.AsyncClient`` so concurrent detail fetches share a
    connection pool. Use as an async context manager, or call ``aclose()``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        index_page_size: int | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the PokeAPI client.

        Args:
            base_url: API root. Defaults to settings.api_base_url.
            timeout: Per-request timeout in seconds. Defaults to settings.request_timeout.
            index_page_size: Index ``limit`` parameter. Defaults to settings.index_page_size.
            http_client: Pre-built client (tests, custom transports). Not closed by us.
        """
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.index_page_size = index_page_size or settings.index_page_size
        self._client = http_client
        self._owns_client = http_client is None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
                follow_redirects=True,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "PokeApiClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET a URL and decode its JSON body.

        Raises:
            NetworkError: On transport failure, timeout, or non-2xx status
            MalformedResponseError: If the body is not JSON
        """
        try:
            response = await self._http().get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error("PokeAPI returned HTTP %d for %s", status_code, url)
            raise NetworkError(url, f"HTTP {status_code}", status_code=status_code) from e
        except httpx.TimeoutException as e:
            logger.error("PokeAPI request to %s timed out after %.1fs", url, self.timeout)
            raise NetworkError(url, "request timed out") from e
        except httpx.RequestError as e:
            logger.error("PokeAPI request to %s failed: %s", url, e)
            raise NetworkError(url, str(e) or type(e).__name__) from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError("body is not valid JSON", url) from e

    async def fetch_index(self) -> list[IndexEntry]:
        """
        Fetch the whole catalog index in one request.

        Returns:
            Index entries in the catalog's native order

        Raises:
            NetworkError: If the request fails
            MalformedResponseError: If the payload lacks the ``results`` list
        """
        url = f"{self.base_url}/pokemon"
        payload = await self._get_json(url, params={"limit": self.index_page_size})
        entries = parse_index(payload, source=url)
        logger.info("Fetched catalog index with %d entries", len(entries))
        return entries

    async def fetch_detail(self, pokemon_id: int) -> DetailRecord:
        """
        Fetch the full record for one Pokemon.

        Args:
            pokemon_id: National dex number

        Raises:
            RecordNotFoundError: If the catalog has no such id
            NetworkError: If the request fails otherwise
            MalformedResponseError: If the payload is not a valid record
        """
        url = f"{self.base_url}/pokemon/{pokemon_id}"
        try:
            payload = await self._get_json(url)
        except NetworkError as e:
            if e.upstream_status == 404:
                raise RecordNotFoundError(url, pokemon_id) from e
            raise

        record = parse_detail(payload, source=url)
        logger.debug("Fetched Pokemon %d (%s)", record.id, record.name)
        return record

    async def health_check(self) -> bool:
        """
        Check if PokeAPI is reachable.

        Returns:
            True if a minimal index request succeeds, False otherwise
        """
        try:
            response = await self._http().get(f"{self.base_url}/pokemon", params={"limit": 1})
            return response.status_code == 200
        except httpx.HTTPError:
            return False
