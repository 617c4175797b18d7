from dataclasses import dataclass, field
from typing import Any

from pokeindex.config import DISPLAY_NUMBER_WIDTH


@dataclass(frozen=True, slots=True)
class IndexEntry:
    """
    One row of the catalog index.

    Attributes:
        name: Pokemon name, unique case-insensitively
        url: Detail resource locator, ending in the numeric id (".../pokemon/25/")
    """

    name: str
    url: str

    @property
    def id(self) -> int:
        """Numeric identifier parsed from the trailing path segment of ``url``."""
        # Local import: the parser module imports this one
        from pokeindex.parsers.pokeapi import parse_resource_id

        return parse_resource_id(self.url)


@dataclass(frozen=True, slots=True)
class Sprites:
    """Image URIs for a Pokemon. Any variant may be missing."""

    front_default: str | None = None
    front_shiny: str | None = None
    official_artwork: str | None = None

    @property
    def thumbnail(self) -> str | None:
        """Small image for list cards."""
        return self.front_default or self.front_shiny

    @property
    def artwork(self) -> str | None:
        """Large image for the detail view."""
        return self.official_artwork or self.front_default


@dataclass(frozen=True, slots=True)
class StatValue:
    name: str
    base_value: int

    @property
    def label(self) -> str:
        return self.name.replace("-", " ")


@dataclass(frozen=True, slots=True)
class Ability:
    name: str
    is_hidden: bool = False

    @property
    def label(self) -> str:
        return self.name.replace("-", " ")


@dataclass(frozen=True, slots=True)
class DetailRecord:
    """
    Full record for a single Pokemon.

    Attributes:
        id: Positive national dex number, the primary identifier
        name: Lowercase Pokemon name
        sprites: Image URIs
        types: Type labels in slot order (never empty)
        stats: Base stats in catalog order
        abilities: Abilities in catalog order
    """

    id: int
    name: str
    types: tuple[str, ...]
    sprites: Sprites = field(default_factory=Sprites)
    stats: tuple[StatValue, ...] = ()
    abilities: tuple[Ability, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id <= 0:
            raise ValueError(f"id must be a positive integer, got {self.id!r}")
        if not self.types:
            raise ValueError(f"Pokemon {self.id} has no types")
        for stat in self.stats:
            if stat.base_value < 0:
                raise ValueError(f"Stat {stat.name} of Pokemon {self.id} is negative")

    @property
    def display_number(self) -> str:
        """Dex number as shown on cards, e.g. ``#025``."""
        return f"#{self.id:0{DISPLAY_NUMBER_WIDTH}d}"

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape kept in local storage."""
        return {
            "id": self.id,
            "name": self.name,
            "sprites": {
                "front_default": self.sprites.front_default,
                "front_shiny": self.sprites.front_shiny,
                "official_artwork": self.sprites.official_artwork,
            },
            "types": list(self.types),
            "stats": [{"name": s.name, "base_value": s.base_value} for s in self.stats],
            "abilities": [{"name": a.name, "is_hidden": a.is_hidden} for a in self.abilities],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DetailRecord":
        """
        Rebuild a record written by ``to_dict``.

        Raises:
            KeyError: If a required field is missing
            TypeError: If a field has the wrong container type
            ValueError: If a field value violates the record invariants
        """
        sprites = data.get("sprites") or {}
        if not isinstance(sprites, dict):
            raise TypeError("sprites must be an object")
        if not isinstance(data["types"], list):
            raise TypeError("types must be a list")
        if not all(isinstance(t, str) for t in data["types"]):
            raise TypeError("types must be strings")
        abilities = data.get("abilities", [])
        if not isinstance(abilities, list) or not all(
            isinstance(a, dict) and isinstance(a.get("is_hidden", False), bool) for a in abilities
        ):
            raise TypeError("abilities must be objects with a boolean is_hidden")

        return cls(
            id=data["id"],
            name=str(data["name"]),
            sprites=Sprites(
                front_default=sprites.get("front_default"),
                front_shiny=sprites.get("front_shiny"),
                official_artwork=sprites.get("official_artwork"),
            ),
            types=tuple(data["types"]),
            stats=tuple(
                StatValue(name=str(s["name"]), base_value=int(s["base_value"]))
                for s in data.get("stats", [])
            ),
            abilities=tuple(
                Ability(name=str(a["name"]), is_hidden=a.get("is_hidden", False))
                for a in abilities
            ),
        )
