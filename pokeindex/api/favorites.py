"""
Favorites endpoints.

Mutations return the whole collection, in the order entries were added.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, Field

from pokeindex.api.pokemon import PokemonSummary, to_summary
from pokeindex.dependencies import get_favorites_store, get_pokeapi_client
from pokeindex.services.favorites import FavoritesStore
from pokeindex.services.pokeapi_client import PokeApiClient

router = APIRouter(prefix="/favorites", tags=["favorites"])

PokemonId = Annotated[int, Path(ge=1)]


class FavoritesResponse(BaseModel):
    """The favorites collection."""

    count: int
    favorites: list[PokemonSummary] = Field(default_factory=list)


def _collection(store: FavoritesStore) -> FavoritesResponse:
    favorites = store.favorites
    return FavoritesResponse(
        count=len(favorites),
        favorites=[to_summary(r, store) for r in favorites],
    )


@router.get("", response_model=FavoritesResponse)
async def list_favorites(
    store: Annotated[FavoritesStore, Depends(get_favorites_store)],
) -> FavoritesResponse:
    """List favorites in insertion order."""
    return _collection(store)


@router.put("/{pokemon_id}", response_model=FavoritesResponse)
async def add_favorite(
    pokemon_id: PokemonId,
    store: Annotated[FavoritesStore, Depends(get_favorites_store)],
    client: Annotated[PokeApiClient, Depends(get_pokeapi_client)],
) -> FavoritesResponse:
    """
    Add a Pokemon to favorites.

    Idempotent: an id already in favorites is not re-fetched or duplicated.
    """
    if not store.is_favorite(pokemon_id):
        record = await client.fetch_detail(pokemon_id)
        store.add(record)
    return _collection(store)


@router.post("/{pokemon_id}/toggle", response_model=FavoritesResponse)
async def toggle_favorite(
    pokemon_id: PokemonId,
    store: Annotated[FavoritesStore, Depends(get_favorites_store)],
    client: Annotated[PokeApiClient, Depends(get_pokeapi_client)],
) -> FavoritesResponse:
    """
    Flip a Pokemon's favorite membership, as a result card's heart does.

    Removing needs no catalog request; only adding fetches the record.
    """
    record = store.get(pokemon_id) or await client.fetch_detail(pokemon_id)
    store.toggle(record)
    return _collection(store)


@router.delete("/{pokemon_id}", response_model=FavoritesResponse)
async def remove_favorite(
    pokemon_id: PokemonId,
    store: Annotated[FavoritesStore, Depends(get_favorites_store)],
) -> FavoritesResponse:
    """Remove a Pokemon from favorites. Unknown ids are a no-op."""
    store.remove(pokemon_id)
    return _collection(store)
