"""
Favorites store.

Owns the ordered favorites collection and mirrors it into durable storage
after every mutation. Entries are unique by id and kept in the order they
were added.

Storage errors never reach the caller: a missing or corrupt stored value
hydrates as an empty collection.
"""

import json
import logging
from typing import Any

from pokeindex.config import settings
from pokeindex.models.errors import StorageReadError
from pokeindex.models.pokemon import DetailRecord
from pokeindex.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)


def decode_favorites(raw: str) -> list[DetailRecord]:
    """
    Decode a stored favorites value.

    Duplicate ids keep their first occurrence.

    Raises:
        StorageReadError: If the value is not a JSON list of records
    """
    try:
        data: Any = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise StorageReadError(f"not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise StorageReadError(f"expected a list, got {type(data).__name__}")

    records: list[DetailRecord] = []
    seen: set[int] = set()
    for position, item in enumerate(data):
        if not isinstance(item, dict):
            raise StorageReadError(f"entry {position} is not an object")
        try:
            record = DetailRecord.from_dict(item)
        except (KeyError, TypeError, ValueError) as e:
            raise StorageReadError(f"entry {position} is not a valid record: {e!r}") from e
        if record.id not in seen:
            seen.add(record.id)
            records.append(record)

    return records


def encode_favorites(records: list[DetailRecord]) -> str:
    """Serialize the collection as a JSON array of records."""
    return json.dumps([r.to_dict() for r in records])


class FavoritesStore:
    """
    The process-wide favorites collection.

    Create one at startup, call ``initialize()`` once, and pass the
    instance to whatever needs it.
    """

    def __init__(self, storage: KeyValueStorage, key: str | None = None) -> None:
        """
        Args:
            storage: Durable storage the collection is mirrored into
            key: Storage key. Defaults to settings.favorites_key.
        """
        self.storage = storage
        self.key = key or settings.favorites_key
        self._favorites: list[DetailRecord] = []

    def initialize(self) -> list[DetailRecord]:
        """
        Hydrate the collection from storage.

        Returns:
            The stored collection, or an empty one if nothing usable is stored
        """
        raw = self.storage.get(self.key)
        if raw is None:
            self._favorites = []
            return self.favorites

        try:
            self._favorites = decode_favorites(raw)
        except StorageReadError as e:
            logger.warning("Discarding stored favorites under '%s': %s", self.key, e)
            self._favorites = []

        logger.info("Loaded %d favorites", len(self._favorites))
        return self.favorites

    def _commit(self, favorites: list[DetailRecord]) -> None:
        # Write first; memory only changes once storage has the new collection
        self.storage.set(self.key, encode_favorites(favorites))
        self._favorites = favorites

    @property
    def favorites(self) -> list[DetailRecord]:
        """Snapshot of the collection in insertion order."""
        return list(self._favorites)

    def count(self) -> int:
        return len(self._favorites)

    def is_favorite(self, pokemon_id: int) -> bool:
        """Membership test against the in-memory collection. No I/O."""
        return any(r.id == pokemon_id for r in self._favorites)

    def get(self, pokemon_id: int) -> DetailRecord | None:
        return next((r for r in self._favorites if r.id == pokemon_id), None)

    def add(self, record: DetailRecord) -> list[DetailRecord]:
        """
        Append a record unless its id is already present.

        Adding an existing id changes nothing and writes nothing.
        """
        if self.is_favorite(record.id):
            return self.favorites

        self._commit([*self._favorites, record])
        logger.info("Added %s (%d) to favorites", record.name, record.id)
        return self.favorites

    def remove(self, pokemon_id: int) -> list[DetailRecord]:
        """Remove the record with ``pokemon_id`` if present, then persist."""
        self._commit([r for r in self._favorites if r.id != pokemon_id])
        return self.favorites

    def toggle(self, record: DetailRecord) -> bool:
        """
        Add the record if absent, remove it if present.

        Returns:
            True if the record is a favorite afterwards
        """
        if self.is_favorite(record.id):
            self.remove(record.id)
            return False
        self.add(record)
        return True
