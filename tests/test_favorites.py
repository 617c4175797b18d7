"""Tests for the favorites store."""

import json
from pathlib import Path

import pytest

from pokeindex.models.errors import StorageReadError
from pokeindex.models.pokemon import DetailRecord
from pokeindex.services.favorites import FavoritesStore, decode_favorites, encode_favorites
from pokeindex.services.storage import JsonFileStorage, MemoryStorage

KEY = "pokemon-favorites"


class FailingStorage(MemoryStorage):
    """Storage whose writes always fail."""

    def set(self, key: str, value: str) -> None:
        raise OSError("disk full")


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage) -> FavoritesStore:
    store = FavoritesStore(storage, key=KEY)
    store.initialize()
    return store


class TestInitialize:
    def test_absent_value_is_empty(self, storage: MemoryStorage) -> None:
        assert FavoritesStore(storage, key=KEY).initialize() == []

    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            '{"id": 25}',
            '"pikachu"',
            "[1, 2]",
            '[{"id": 25, "name": "pikachu"}]',
            '[{"id": -1, "name": "x", "types": ["normal"]}]',
            '[{"id": 25, "name": "pikachu", "types": [{"name": "electric"}]}]',
        ],
    )
    def test_malformed_value_is_empty(self, raw: str) -> None:
        """Malformed stored content hydrates as empty instead of raising."""
        store = FavoritesStore(MemoryStorage({KEY: raw}), key=KEY)

        assert store.initialize() == []
        assert store.count() == 0

    def test_deeply_nested_value_is_empty(self) -> None:
        """Nesting past the decoder recursion limit hydrates as empty."""
        store = FavoritesStore(MemoryStorage({KEY: "[" * 100_000}), key=KEY)

        assert store.initialize() == []

    def test_loads_stored_collection(self, pikachu: DetailRecord, pidgey: DetailRecord) -> None:
        storage = MemoryStorage({KEY: encode_favorites([pikachu, pidgey])})

        assert FavoritesStore(storage, key=KEY).initialize() == [pikachu, pidgey]

    def test_default_key_from_settings(self, storage: MemoryStorage) -> None:
        assert FavoritesStore(storage).key == "pokemon-favorites"


class TestAdd:
    def test_appends_in_call_order(
        self, store: FavoritesStore, pikachu: DetailRecord, pidgey: DetailRecord
    ) -> None:
        """Order is insertion order, not id order."""
        store.add(pikachu)
        result = store.add(pidgey)

        assert [r.id for r in result] == [25, 16]

    def test_idempotent(self, store: FavoritesStore, pikachu: DetailRecord) -> None:
        """Adding the same id twice equals adding it once."""
        once = store.add(pikachu)
        twice = store.add(pikachu)

        assert once == twice == [pikachu]

    def test_duplicate_add_does_not_write(
        self, store: FavoritesStore, storage: MemoryStorage, pikachu: DetailRecord
    ) -> None:
        store.add(pikachu)
        store.add(pikachu)

        assert storage.writes == 1

    def test_persists_full_collection(
        self,
        store: FavoritesStore,
        storage: MemoryStorage,
        pikachu: DetailRecord,
        pidgey: DetailRecord,
    ) -> None:
        store.add(pikachu)
        store.add(pidgey)

        stored = json.loads(storage.get(KEY) or "")
        assert [item["id"] for item in stored] == [25, 16]
        assert stored[0] == pikachu.to_dict()


class TestRemove:
    def test_add_then_remove_restores_previous(
        self,
        store: FavoritesStore,
        pikachu: DetailRecord,
        pidgey: DetailRecord,
        bulbasaur: DetailRecord,
    ) -> None:
        """add(x); remove(x.id) leaves the collection as before, order preserved."""
        store.add(bulbasaur)
        store.add(pidgey)
        before = store.favorites

        store.add(pikachu)
        after = store.remove(pikachu.id)

        assert after == before

    def test_scenario_add_add_remove(
        self, store: FavoritesStore, pikachu: DetailRecord, pidgey: DetailRecord
    ) -> None:
        """add(pikachu), add(pidgey), remove(25) leaves [pidgey]."""
        store.add(pikachu)
        store.add(pidgey)

        assert store.remove(25) == [pidgey]

    def test_remove_absent_is_noop(self, store: FavoritesStore, pikachu: DetailRecord) -> None:
        store.add(pikachu)

        assert store.remove(999) == [pikachu]

    def test_each_remove_writes_once(
        self, store: FavoritesStore, storage: MemoryStorage, pikachu: DetailRecord
    ) -> None:
        store.add(pikachu)
        store.remove(25)

        assert storage.writes == 2


class TestFailedWrites:
    @pytest.fixture
    def failing_storage(self) -> FailingStorage:
        return FailingStorage()

    def test_failed_add_leaves_collection_unchanged(
        self, failing_storage: FailingStorage, pikachu: DetailRecord
    ) -> None:
        """Memory never holds a favorite that storage does not."""
        store = FavoritesStore(failing_storage, key=KEY)
        store.initialize()

        with pytest.raises(OSError):
            store.add(pikachu)

        assert store.favorites == []
        assert store.is_favorite(25) is False

    def test_failed_remove_keeps_entry(
        self, failing_storage: FailingStorage, pikachu: DetailRecord
    ) -> None:
        failing_storage.values[KEY] = encode_favorites([pikachu])
        store = FavoritesStore(failing_storage, key=KEY)
        store.initialize()

        with pytest.raises(OSError):
            store.remove(25)

        assert store.favorites == [pikachu]


class TestQueries:
    def test_is_favorite(self, store: FavoritesStore, pikachu: DetailRecord) -> None:
        assert store.is_favorite(25) is False
        store.add(pikachu)
        assert store.is_favorite(25) is True

    def test_is_favorite_does_no_io(
        self, store: FavoritesStore, storage: MemoryStorage, pikachu: DetailRecord
    ) -> None:
        store.add(pikachu)
        storage.values.clear()

        assert store.is_favorite(25) is True

    def test_favorites_is_a_snapshot(self, store: FavoritesStore, pikachu: DetailRecord) -> None:
        """Mutating the returned list does not change the store."""
        store.add(pikachu).clear()

        assert store.favorites == [pikachu]

    def test_get(self, store: FavoritesStore, pikachu: DetailRecord) -> None:
        store.add(pikachu)

        assert store.get(25) == pikachu
        assert store.get(16) is None

    def test_toggle(self, store: FavoritesStore, pikachu: DetailRecord) -> None:
        assert store.toggle(pikachu) is True
        assert store.toggle(pikachu) is False
        assert store.favorites == []


class TestPersistenceRoundTrip:
    def test_fresh_store_reproduces_collection(
        self,
        tmp_path: Path,
        pikachu: DetailRecord,
        pidgey: DetailRecord,
        bulbasaur: DetailRecord,
    ) -> None:
        """After any add/remove sequence, a fresh store reads back the same collection."""
        path = tmp_path / "storage.json"
        store = FavoritesStore(JsonFileStorage(path), key=KEY)
        store.initialize()

        store.add(pikachu)
        store.add(bulbasaur)
        store.add(pidgey)
        store.remove(bulbasaur.id)
        store.add(bulbasaur)
        store.add(pikachu)

        fresh = FavoritesStore(JsonFileStorage(path), key=KEY)
        assert fresh.initialize() == store.favorites == [pikachu, pidgey, bulbasaur]

    def test_corrupt_file_hydrates_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        path.write_text(json.dumps({KEY: "[{broken"}))

        assert FavoritesStore(JsonFileStorage(path), key=KEY).initialize() == []


class TestDecode:
    def test_raises_storage_read_error(self) -> None:
        with pytest.raises(StorageReadError):
            decode_favorites("nope")

    def test_drops_duplicate_ids(self, pikachu: DetailRecord) -> None:
        raw = json.dumps([pikachu.to_dict(), pikachu.to_dict()])

        assert decode_favorites(raw) == [pikachu]
