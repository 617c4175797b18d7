"""
Process-wide instances and their FastAPI dependency providers.

The catalog client and the favorites store are created once, on first
use, and live until ``shutdown()``. Tests swap them through
``app.dependency_overrides`` or ``reset_dependencies()``.
"""

from typing import Annotated

from fastapi import Depends

from pokeindex.config import settings
from pokeindex.services.favorites import FavoritesStore
from pokeindex.services.pokeapi_client import PokeApiClient
from pokeindex.services.search_pipeline import SearchPipeline
from pokeindex.services.storage import JsonFileStorage

_client: PokeApiClient | None = None
_favorites: FavoritesStore | None = None


def get_pokeapi_client() -> PokeApiClient:
    """
    Get the shared PokeAPI client.

    Returns:
        Singleton PokeApiClient instance
    """
    global _client
    if _client is None:
        _client = PokeApiClient()
    return _client


def get_favorites_store() -> FavoritesStore:
    """
    Get the shared favorites store, hydrated from disk on first call.

    Returns:
        Singleton FavoritesStore instance
    """
    global _favorites
    if _favorites is None:
        store = FavoritesStore(JsonFileStorage(settings.favorites_path))
        store.initialize()
        _favorites = store
    return _favorites


def get_search_pipeline(
    client: Annotated[PokeApiClient, Depends(get_pokeapi_client)],
) -> SearchPipeline:
    """Build a search pipeline over the shared client. Cheap, per request."""
    return SearchPipeline(client)


async def shutdown() -> None:
    """Close the shared client. Favorites need no teardown."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


def reset_dependencies() -> None:
    """Forget the shared instances (for testing)."""
    global _client, _favorites
    _client = None
    _favorites = None
