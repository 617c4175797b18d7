"""
PokeIndex services.

Catalog access, prefix search and the favorites store.
"""

from pokeindex.services.favorites import FavoritesStore, decode_favorites, encode_favorites
from pokeindex.services.pokeapi_client import PokeApiClient
from pokeindex.services.search_pipeline import (
    SearchPipeline,
    filter_by_prefix,
    normalize_query,
    sort_by_id,
)
from pokeindex.services.search_session import SearchSession
from pokeindex.services.storage import JsonFileStorage, KeyValueStorage, MemoryStorage

__all__ = [
    "FavoritesStore",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "PokeApiClient",
    "SearchPipeline",
    "SearchSession",
    "decode_favorites",
    "encode_favorites",
    "filter_by_prefix",
    "normalize_query",
    "sort_by_id",
]
