from pokeindex.api.favorites import router as favorites_router
from pokeindex.api.health import router as health_router
from pokeindex.api.pokemon import router as pokemon_router

__all__ = [
    "favorites_router",
    "health_router",
    "pokemon_router",
]
