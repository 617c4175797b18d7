"""
PokeAPI payload parsing.

Turns raw JSON from the index and detail endpoints into domain records.
Anything that does not have the expected shape raises
MalformedResponseError; nothing here touches the network.

API docs: https://pokeapi.co/docs/v2#pokemon
"""

import re
from typing import Any

from pokeindex.models.errors import MalformedResponseError
from pokeindex.models.pokemon import Ability, DetailRecord, IndexEntry, Sprites, StatValue

# Trailing numeric path segment, with or without a final slash: ".../pokemon/25/"
_RESOURCE_ID_PATTERN = re.compile(r"/(\d+)/?$")


def parse_resource_id(url: str) -> int:
    """
    Derive the numeric identifier from a resource locator.

    Args:
        url: Resource URL such as "https://pokeapi.co/api/v2/pokemon/25/"

    Returns:
        The identifier (25)

    Raises:
        MalformedResponseError: If the URL does not end in a positive number
    """
    match = _RESOURCE_ID_PATTERN.search(url.strip()) if isinstance(url, str) else None
    if match is None:
        raise MalformedResponseError(f"no numeric id at end of resource url {url!r}")

    resource_id = int(match.group(1))
    if resource_id <= 0:
        raise MalformedResponseError(f"resource id must be positive in {url!r}")
    return resource_id


def parse_index(payload: Any, source: str | None = None) -> list[IndexEntry]:
    """
    Parse the index payload ``{"results": [{"name": ..., "url": ...}]}``.

    Entries keep the order the catalog returned them in.

    Raises:
        MalformedResponseError: If ``results`` is missing or an entry lacks name/url
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("results"), list):
        raise MalformedResponseError("expected an object with a 'results' list", source)

    entries: list[IndexEntry] = []
    for position, item in enumerate(payload["results"]):
        if not isinstance(item, dict):
            raise MalformedResponseError(f"index entry {position} is not an object", source)
        name = item.get("name")
        url = item.get("url")
        if not isinstance(name, str) or not isinstance(url, str):
            raise MalformedResponseError(f"index entry {position} lacks name or url", source)
        entries.append(IndexEntry(name=name, url=url))

    return entries


def _named(item: dict[str, Any], key: str) -> str:
    """Read ``item[key]["name"]``, the nested shape PokeAPI uses for references."""
    ref = item.get(key)
    if not isinstance(ref, dict) or not isinstance(ref.get("name"), str):
        raise KeyError(key)
    return str(ref["name"])


def _parse_sprites(raw: Any) -> Sprites:
    if not isinstance(raw, dict):
        return Sprites()

    artwork = None
    other = raw.get("other")
    if isinstance(other, dict):
        official = other.get("official-artwork")
        if isinstance(official, dict):
            artwork = official.get("front_default")

    return Sprites(
        front_default=raw.get("front_default"),
        front_shiny=raw.get("front_shiny"),
        official_artwork=artwork,
    )


def parse_detail(payload: Any, source: str | None = None) -> DetailRecord:
    """
    Parse a single Pokemon detail payload.

    Types are ordered by their ``slot``; stats and abilities keep catalog order.

    Raises:
        MalformedResponseError: If required fields are missing or invalid
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError("expected a Pokemon object", source)

    try:
        type_slots = sorted(payload["types"], key=lambda t: t.get("slot", 0))
        return DetailRecord(
            id=payload["id"],
            name=str(payload["name"]),
            sprites=_parse_sprites(payload.get("sprites")),
            types=tuple(_named(t, "type") for t in type_slots),
            stats=tuple(
                StatValue(name=_named(s, "stat"), base_value=int(s["base_stat"]))
                for s in payload.get("stats") or []
            ),
            abilities=tuple(
                Ability(name=_named(a, "ability"), is_hidden=bool(a.get("is_hidden", False)))
                for a in payload.get("abilities") or []
            ),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedResponseError(f"invalid Pokemon payload ({e!r})", source) from e
