"""
Search and detail endpoints.

``/search`` always answers with the outcome envelope so that a failed
search (502, known_failure) can never be mistaken for one that matched
nothing (200, success with zero results).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status
from pydantic import BaseModel, Field

from pokeindex.dependencies import get_favorites_store, get_pokeapi_client, get_search_pipeline
from pokeindex.models.failure import ApiResponse, FailureKind, create_known_failure, create_success
from pokeindex.models.pokemon import DetailRecord
from pokeindex.models.search import SearchStatus
from pokeindex.services.favorites import FavoritesStore
from pokeindex.services.pokeapi_client import PokeApiClient
from pokeindex.services.search_pipeline import SearchPipeline

router = APIRouter(tags=["pokemon"])


class PokemonSummary(BaseModel):
    """What a result card shows."""

    id: int
    number: str = Field(..., description="Display number, e.g. #025")
    name: str
    types: list[str]
    thumbnail: str | None = None
    is_favorite: bool = False


class StatResponse(BaseModel):
    name: str
    label: str
    base_value: int


class AbilityResponse(BaseModel):
    name: str
    label: str
    is_hidden: bool


class PokemonResponse(PokemonSummary):
    """Full detail view of one Pokemon."""

    artwork: str | None = None
    stats: list[StatResponse] = Field(default_factory=list)
    abilities: list[AbilityResponse] = Field(default_factory=list)


class SearchResponse(BaseModel):
    """Search results in ascending id order."""

    query: str
    status: SearchStatus
    count: int
    results: list[PokemonSummary] = Field(default_factory=list)
    failed_ids: list[int] = Field(
        default_factory=list,
        description="Ids whose detail fetch failed (partial fan-out policy only)",
    )


def to_summary(record: DetailRecord, favorites: FavoritesStore) -> PokemonSummary:
    return PokemonSummary(
        id=record.id,
        number=record.display_number,
        name=record.name,
        types=list(record.types),
        thumbnail=record.sprites.thumbnail,
        is_favorite=favorites.is_favorite(record.id),
    )


def to_detail(record: DetailRecord, favorites: FavoritesStore) -> PokemonResponse:
    return PokemonResponse(
        **to_summary(record, favorites).model_dump(),
        artwork=record.sprites.artwork,
        stats=[
            StatResponse(name=s.name, label=s.label, base_value=s.base_value)
            for s in record.stats
        ],
        abilities=[
            AbilityResponse(name=a.name, label=a.label, is_hidden=a.is_hidden)
            for a in record.abilities
        ],
    )


@router.get("/search", response_model=ApiResponse[SearchResponse])
async def search_pokemon(
    response: Response,
    pipeline: Annotated[SearchPipeline, Depends(get_search_pipeline)],
    favorites: Annotated[FavoritesStore, Depends(get_favorites_store)],
    q: Annotated[str, Query(max_length=100, description="Name prefix")] = "",
) -> ApiResponse[SearchResponse]:
    """
    Search Pokemon by name prefix.

    Blank queries return an empty success without contacting PokeAPI.
    """
    outcome = await pipeline.run(q)

    if outcome.failed:
        response.status_code = status.HTTP_502_BAD_GATEWAY
        return create_known_failure(
            FailureKind.EXTERNAL_API_ERROR,
            outcome.error or f"search for '{q}' failed",
        )

    return create_success(
        SearchResponse(
            query=outcome.query,
            status=outcome.status,
            count=outcome.count(),
            results=[to_summary(r, favorites) for r in outcome.records],
            failed_ids=outcome.failed_ids,
        )
    )


@router.get("/pokemon/{pokemon_id}", response_model=PokemonResponse)
async def get_pokemon(
    pokemon_id: Annotated[int, Path(ge=1)],
    client: Annotated[PokeApiClient, Depends(get_pokeapi_client)],
    favorites: Annotated[FavoritesStore, Depends(get_favorites_store)],
) -> PokemonResponse:
    """
    Get one Pokemon by id.

    Always re-fetched from PokeAPI. Unknown ids answer 404.
    """
    record = await client.fetch_detail(pokemon_id)
    return to_detail(record, favorites)
