import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pokeindex.api import favorites_router, health_router, pokemon_router
from pokeindex.config import settings
from pokeindex.dependencies import get_favorites_store, shutdown
from pokeindex.models.failure import KnownError, create_unknown_failure

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Hydrate favorites at startup, close the catalog client at shutdown."""
    get_favorites_store()
    yield
    await shutdown()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("pokeindex"),
    lifespan=lifespan,
)

app.include_router(favorites_router)
app.include_router(health_router)
app.include_router(pokemon_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def handle_known_error(request: Request, exc: KnownError) -> JSONResponse:
    """Known failures become a classified envelope with the error's status code."""
    logger.info("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Anything else becomes a classified unknown failure, never a bare 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=create_unknown_failure(exc).model_dump(mode="json"),
    )
