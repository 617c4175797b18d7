"""
Health check endpoints.

Provides liveness and readiness checks. Readiness checks that PokeAPI
answers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from pokeindex.dependencies import get_pokeapi_client
from pokeindex.services.pokeapi_client import PokeApiClient

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    catalog: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness check.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    client: Annotated[PokeApiClient, Depends(get_pokeapi_client)],
) -> HealthResponse:
    """
    Readiness check.

    Returns 503 if PokeAPI cannot be reached.
    """
    if await client.health_check():
        return HealthResponse(status="ready", catalog="reachable")

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(status="not ready", catalog="unreachable")
