"""Tests for the favorites endpoints."""

import httpx
import respx
from httpx import AsyncClient

from pokeindex.models.pokemon import DetailRecord
from pokeindex.services.favorites import FavoritesStore


class TestFavoritesEndpoints:
    async def test_empty_list(self, api_client: AsyncClient) -> None:
        response = await api_client.get("/favorites")

        assert response.status_code == 200
        assert response.json() == {"count": 0, "favorites": []}

    @respx.mock
    async def test_add_then_list(
        self, api_client: AsyncClient, base_url: str, make_detail_payload
    ) -> None:
        respx.get(f"{base_url}/pokemon/25").mock(
            return_value=httpx.Response(200, json=make_detail_payload(25, "pikachu"))
        )
        respx.get(f"{base_url}/pokemon/16").mock(
            return_value=httpx.Response(200, json=make_detail_payload(16, "pidgey"))
        )

        await api_client.put("/favorites/25")
        response = await api_client.put("/favorites/16")

        data = response.json()
        assert data["count"] == 2
        # Insertion order, not id order
        assert [f["id"] for f in data["favorites"]] == [25, 16]
        assert all(f["is_favorite"] for f in data["favorites"])

        listed = await api_client.get("/favorites")
        assert listed.json() == data

    @respx.mock
    async def test_add_is_idempotent(
        self, api_client: AsyncClient, base_url: str, make_detail_payload
    ) -> None:
        """A repeat PUT neither duplicates nor re-fetches."""
        route = respx.get(f"{base_url}/pokemon/25").mock(
            return_value=httpx.Response(200, json=make_detail_payload(25, "pikachu"))
        )

        first = await api_client.put("/favorites/25")
        second = await api_client.put("/favorites/25")

        assert first.json() == second.json()
        assert second.json()["count"] == 1
        assert route.call_count == 1

    @respx.mock
    async def test_add_unknown_id(
        self, api_client: AsyncClient, base_url: str, favorites_store: FavoritesStore
    ) -> None:
        respx.get(f"{base_url}/pokemon/99999").mock(return_value=httpx.Response(404))

        response = await api_client.put("/favorites/99999")

        assert response.status_code == 404
        assert favorites_store.count() == 0

    async def test_remove(
        self,
        api_client: AsyncClient,
        favorites_store: FavoritesStore,
        pikachu: DetailRecord,
        pidgey: DetailRecord,
    ) -> None:
        favorites_store.add(pikachu)
        favorites_store.add(pidgey)

        response = await api_client.delete("/favorites/25")

        assert response.status_code == 200
        assert [f["id"] for f in response.json()["favorites"]] == [16]

    async def test_remove_absent_is_noop(
        self, api_client: AsyncClient, favorites_store: FavoritesStore, pikachu: DetailRecord
    ) -> None:
        favorites_store.add(pikachu)

        response = await api_client.delete("/favorites/999")

        assert response.status_code == 200
        assert response.json()["count"] == 1

    @respx.mock
    async def test_toggle_adds_then_removes(
        self,
        api_client: AsyncClient,
        base_url: str,
        favorites_store: FavoritesStore,
        make_detail_payload,
    ) -> None:
        """The second toggle removes without asking the catalog again."""
        route = respx.get(f"{base_url}/pokemon/25").mock(
            return_value=httpx.Response(200, json=make_detail_payload(25, "pikachu"))
        )

        added = await api_client.post("/favorites/25/toggle")
        removed = await api_client.post("/favorites/25/toggle")

        assert [f["id"] for f in added.json()["favorites"]] == [25]
        assert removed.json() == {"count": 0, "favorites": []}
        assert route.call_count == 1
        assert favorites_store.is_favorite(25) is False

    @respx.mock
    async def test_toggle_unknown_id(
        self, api_client: AsyncClient, base_url: str, favorites_store: FavoritesStore
    ) -> None:
        respx.get(f"{base_url}/pokemon/99999").mock(return_value=httpx.Response(404))

        response = await api_client.post("/favorites/99999/toggle")

        assert response.status_code == 404
        assert favorites_store.count() == 0
