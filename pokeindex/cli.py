"""
Terminal views for PokeIndex.

    pokeindex search pi
    pokeindex show 25
    pokeindex favorites list
    pokeindex favorites add 25
    pokeindex favorites remove 25
    pokeindex favorites toggle 25

Exit status is 0 on success (including a search with zero matches) and 1
when the catalog could not be reached or read.
"""

import argparse
import asyncio
import logging
import sys

from pokeindex.config import settings
from pokeindex.models.failure import KnownError
from pokeindex.models.pokemon import DetailRecord
from pokeindex.models.search import SearchStatus
from pokeindex.services.favorites import FavoritesStore
from pokeindex.services.pokeapi_client import PokeApiClient
from pokeindex.services.search_pipeline import SearchPipeline
from pokeindex.services.storage import JsonFileStorage

logger = logging.getLogger(__name__)


def format_card(record: DetailRecord, favorite: bool = False) -> str:
    """One-line summary used in search results and the favorites list."""
    heart = "*" if favorite else " "
    return f"{heart} {record.display_number} {record.display_name:<14} {'/'.join(record.types)}"


def format_detail(record: DetailRecord, favorite: bool = False) -> str:
    """Multi-line detail view."""
    lines = [
        f"{record.display_number} {record.display_name}" + ("  [favorite]" if favorite else ""),
        f"Types: {', '.join(record.types)}",
    ]
    if record.sprites.artwork:
        lines.append(f"Artwork: {record.sprites.artwork}")

    lines.append("Base stats:")
    lines.extend(f"  {s.label:<16} {s.base_value:>3}" for s in record.stats)

    lines.append("Abilities:")
    lines.extend(
        f"  {a.label}" + (" (hidden)" if a.is_hidden else "") for a in record.abilities
    )
    return "\n".join(lines)


async def run_search(query: str, client: PokeApiClient, store: FavoritesStore) -> int:
    outcome = await SearchPipeline(client).run(query)

    if outcome.status == SearchStatus.EMPTY_QUERY:
        print("Enter a name to search for.")
        return 0
    if outcome.failed:
        print(f"Search failed: {outcome.error}", file=sys.stderr)
        return 1
    if outcome.status == SearchStatus.NO_MATCHES:
        print("No Pokemon found. Try searching for something else!")
        return 0

    print(f"Found {outcome.count()} Pokemon")
    for record in outcome.records:
        print(format_card(record, store.is_favorite(record.id)))
    if outcome.failed_ids:
        print(f"Could not load: {', '.join(str(i) for i in outcome.failed_ids)}", file=sys.stderr)
    return 0


async def run_show(pokemon_id: int, client: PokeApiClient, store: FavoritesStore) -> int:
    record = await client.fetch_detail(pokemon_id)
    print(format_detail(record, store.is_favorite(record.id)))
    return 0


async def run_favorites(
    action: str,
    pokemon_id: int | None,
    client: PokeApiClient,
    store: FavoritesStore,
) -> int:
    if action == "add" and pokemon_id is not None and not store.is_favorite(pokemon_id):
        store.add(await client.fetch_detail(pokemon_id))
    elif action == "remove" and pokemon_id is not None:
        store.remove(pokemon_id)
    elif action == "toggle" and pokemon_id is not None:
        store.toggle(store.get(pokemon_id) or await client.fetch_detail(pokemon_id))

    favorites = store.favorites
    print(f"{len(favorites)} favorites saved")
    for record in favorites:
        print(format_card(record, favorite=True))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pokeindex", description="Browse the Pokemon catalog.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log requests")
    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="Search by name prefix")
    search.add_argument("query")

    show = commands.add_parser("show", help="Show one Pokemon")
    show.add_argument("pokemon_id", type=int)

    favorites = commands.add_parser("favorites", help="List or edit favorites")
    favorites.add_argument(
        "action", choices=["list", "add", "remove", "toggle"], nargs="?", default="list"
    )
    favorites.add_argument("pokemon_id", type=int, nargs="?")

    return parser


async def run(args: argparse.Namespace, store: FavoritesStore) -> int:
    async with PokeApiClient() as client:
        try:
            if args.command == "search":
                return await run_search(args.query, client, store)
            if args.command == "show":
                return await run_show(args.pokemon_id, client, store)
            return await run_favorites(args.action, args.pokemon_id, client, store)
        except KnownError as e:
            print(e.message, file=sys.stderr)
            return 1


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "favorites" and args.action != "list" and args.pokemon_id is None:
        parser.error(f"favorites {args.action} needs a Pokemon id")
    if args.command == "favorites" and args.action == "list" and args.pokemon_id is not None:
        parser.error("favorites list takes no Pokemon id")

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    store = FavoritesStore(JsonFileStorage(settings.favorites_path))
    store.initialize()

    return asyncio.run(run(args, store))


if __name__ == "__main__":
    sys.exit(main())
