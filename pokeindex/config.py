from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="POKEINDEX_")

    app_name: str = "PokeIndex"
    debug: bool = False

    api_base_url: str = "https://pokeapi.co/api/v2"

    # Large enough to return the whole catalog in one index request
    index_page_size: int = 1000

    # Per-request timeout in seconds
    request_timeout: float = 10.0

    favorites_path: Path = Path.home() / ".pokeindex" / "storage.json"
    favorites_key: str = "pokemon-favorites"

    # all_or_nothing: one failed detail fetch fails the whole search
    # partial: keep successful records, report failed ids separately
    fanout_policy: Literal["all_or_nothing", "partial"] = "all_or_nothing"


settings = Settings()


# =============================================================================
# REQUEST DEFAULTS
# =============================================================================

USER_AGENT = "PokeIndex/1.0"

# Zero-padding width for display numbers (#025)
DISPLAY_NUMBER_WIDTH = 3
