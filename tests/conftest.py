from collections.abc import Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from pokeindex.dependencies import get_favorites_store, get_pokeapi_client
from pokeindex.main import app
from pokeindex.models import failure as failure_module
from pokeindex.models.pokemon import Ability, DetailRecord, Sprites, StatValue
from pokeindex.services.favorites import FavoritesStore
from pokeindex.services.pokeapi_client import PokeApiClient
from pokeindex.services.storage import MemoryStorage

BASE_URL = "https://pokeapi.test/api/v2"


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    Python reuses memory addresses for new objects, so stale ids from an
    earlier test could make an unfinalized response look finalized.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def make_detail_payload() -> Callable[..., dict[str, Any]]:
    """Factory for PokeAPI detail payloads."""

    def make(
        pokemon_id: int,
        name: str,
        types: list[str] | None = None,
        stats: dict[str, int] | None = None,
    ) -> dict[str, Any]:
        types = types or ["normal"]
        stats = stats or {"hp": 40, "attack": 45}
        return {
            "id": pokemon_id,
            "name": name,
            "sprites": {
                "front_default": f"https://img.test/{pokemon_id}.png",
                "front_shiny": f"https://img.test/shiny/{pokemon_id}.png",
                "other": {
                    "official-artwork": {
                        "front_default": f"https://img.test/artwork/{pokemon_id}.png"
                    }
                },
            },
            "types": [{"slot": i + 1, "type": {"name": t}} for i, t in enumerate(types)],
            "stats": [{"base_stat": v, "stat": {"name": k}} for k, v in stats.items()],
            "abilities": [
                {"is_hidden": False, "ability": {"name": "keen-eye"}},
                {"is_hidden": True, "ability": {"name": "big-pecks"}},
            ],
        }

    return make


@pytest.fixture
def index_payload() -> dict[str, Any]:
    """Catalog index in PokeAPI's native (not id-sorted) order."""
    return {
        "count": 5,
        "results": [
            {"name": "pikachu", "url": "https://pokeapi.co/api/v2/pokemon/25/"},
            {"name": "bulbasaur", "url": "https://pokeapi.co/api/v2/pokemon/1/"},
            {"name": "pidgey", "url": "https://pokeapi.co/api/v2/pokemon/16/"},
            {"name": "Pichu", "url": "https://pokeapi.co/api/v2/pokemon/172/"},
            {"name": "rapidash", "url": "https://pokeapi.co/api/v2/pokemon/78/"},
        ],
    }


@pytest.fixture
def pikachu() -> DetailRecord:
    return DetailRecord(
        id=25,
        name="pikachu",
        types=("electric",),
        sprites=Sprites(front_default="https://img.test/25.png"),
        stats=(StatValue("hp", 35), StatValue("special-attack", 50)),
        abilities=(Ability("static"), Ability("lightning-rod", is_hidden=True)),
    )


@pytest.fixture
def pidgey() -> DetailRecord:
    return DetailRecord(
        id=16,
        name="pidgey",
        types=("normal", "flying"),
        sprites=Sprites(front_default=None, front_shiny="https://img.test/shiny/16.png"),
        stats=(StatValue("hp", 40),),
        abilities=(Ability("keen-eye"), Ability("big-pecks", is_hidden=True)),
    )


@pytest.fixture
def bulbasaur() -> DetailRecord:
    return DetailRecord(id=1, name="bulbasaur", types=("grass", "poison"))


@pytest.fixture
def favorites_store() -> FavoritesStore:
    store = FavoritesStore(MemoryStorage())
    store.initialize()
    return store


@pytest.fixture
async def api_client(favorites_store: FavoritesStore):
    """Async test client over the app, talking to the test catalog URL."""
    catalog = PokeApiClient(base_url=BASE_URL)
    app.dependency_overrides[get_pokeapi_client] = lambda: catalog
    app.dependency_overrides[get_favorites_store] = lambda: favorites_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    await catalog.aclose()
