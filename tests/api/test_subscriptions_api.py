"""Tests for the subscription endpoints (CRUD and total cost)."""

from uuid import uuid4

import pytest
from httpx import AsyncClient


def _payload(user_id, **overrides):
    body = {
        "service_name": "Yandex Plus",
        "price": 400,
        "user_id": str(user_id),
        "start_date": "06-2025",
    }
    body.update(overrides)
    return body


async def _create(client: AsyncClient, user_id, **overrides) -> dict:
    response = await client.post("/subscriptions", json=_payload(user_id, **overrides))
    assert response.status_code == 201, response.text
    return response.json()


class TestSubscriptionCrud:
    @pytest.mark.asyncio
    async def test_create_subscription(self, client: AsyncClient):
        user_id = uuid4()
        data = await _create(client, user_id, end_date="12-2025")

        assert data["id"] > 0
        assert data["service_name"] == "Yandex Plus"
        assert data["price"] == 400
        assert data["user_id"] == str(user_id)
        assert data["start_date"] == "06-2025"
        assert data["end_date"] == "12-2025"

    @pytest.mark.asyncio
    async def test_create_without_end_date(self, client: AsyncClient):
        data = await _create(client, uuid4())
        assert data["end_date"] is None

    @pytest.mark.asyncio
    async def test_create_rejects_bad_month(self, client: AsyncClient):
        response = await client.post("/subscriptions", json=_payload(uuid4(), start_date="2025-06"))
        assert response.status_code == 400
        assert response.json()["detail"]["type"] == "invalid_date_format"

    @pytest.mark.asyncio
    async def test_create_rejects_end_before_start(self, client: AsyncClient):
        response = await client.post(
            "/subscriptions", json=_payload(uuid4(), start_date="06-2025", end_date="05-2025")
        )
        assert response.status_code == 400
        assert response.json()["detail"]["type"] == "validation_error"

    @pytest.mark.asyncio
    async def test_create_rejects_negative_price(self, client: AsyncClient):
        response = await client.post("/subscriptions", json=_payload(uuid4(), price=-1))
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_subscription(self, client: AsyncClient):
        created = await _create(client, uuid4())
        response = await client.get(f"/subscriptions/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_get_missing_subscription(self, client: AsyncClient):
        response = await client.get("/subscriptions/9999")
        assert response.status_code == 404
        assert response.json()["detail"]["type"] == "not_found"

    @pytest.mark.asyncio
    async def test_get_non_numeric_id(self, client: AsyncClient):
        response = await client.get("/subscriptions/abc")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_subscription(self, client: AsyncClient):
        user_id = uuid4()
        created = await _create(client, user_id, end_date="09-2025")

        response = await client.put(
            f"/subscriptions/{created['id']}",
            json=_payload(user_id, service_name="Netflix", price=799, start_date="07-2025"),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created["id"]
        assert data["service_name"] == "Netflix"
        assert data["price"] == 799
        assert data["start_date"] == "07-2025"
        assert data["end_date"] is None

    @pytest.mark.asyncio
    async def test_update_missing_subscription(self, client: AsyncClient):
        response = await client.put("/subscriptions/9999", json=_payload(uuid4()))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_subscription(self, client: AsyncClient):
        created = await _create(client, uuid4())

        response = await client.delete(f"/subscriptions/{created['id']}")
        assert response.status_code == 204

        response = await client.get(f"/subscriptions/{created['id']}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_subscription(self, client: AsyncClient):
        response = await client.delete("/subscriptions/9999")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_subscriptions(self, client: AsyncClient):
        alice, bob = uuid4(), uuid4()
        await _create(client, alice, service_name="Netflix")
        await _create(client, alice, service_name="Spotify")
        await _create(client, bob, service_name="Netflix")

        response = await client.get("/subscriptions")
        assert response.status_code == 200
        assert len(response.json()) == 3

        response = await client.get("/subscriptions", params={"user_id": str(alice)})
        assert [s["service_name"] for s in response.json()] == ["Netflix", "Spotify"]

        response = await client.get(
            "/subscriptions", params={"user_id": str(alice), "service_name": "Spotify"}
        )
        assert len(response.json()) == 1

        response = await client.get("/subscriptions", params={"limit": 1, "offset": 1})
        assert len(response.json()) == 1


class TestTotalCost:
    @pytest.mark.asyncio
    async def test_total_over_window(self, client: AsyncClient):
        user_id = uuid4()
        await _create(client, user_id, price=400, start_date="06-2025")
        await _create(client, user_id, price=600, start_date="07-2025")

        response = await client.get(
            "/subscriptions/total",
            params={"user_id": str(user_id), "start_date": "06-2025", "end_date": "07-2025"},
        )
        assert response.status_code == 200
        assert response.json() == {"total": 1400}

    @pytest.mark.asyncio
    async def test_total_filters_by_service_name(self, client: AsyncClient):
        user_id = uuid4()
        await _create(client, user_id, service_name="Netflix", price=400, start_date="06-2025")
        await _create(client, user_id, service_name="Spotify", price=600, start_date="07-2025")

        response = await client.get(
            "/subscriptions/total",
            params={
                "user_id": str(user_id),
                "service_name": "Spotify",
                "start_date": "06-2025",
                "end_date": "07-2025",
            },
        )
        assert response.json() == {"total": 600}

    @pytest.mark.asyncio
    async def test_total_ignores_other_users(self, client: AsyncClient):
        user_id = uuid4()
        await _create(client, user_id, price=100, start_date="06-2025", end_date="06-2025")
        await _create(client, uuid4(), price=5000, start_date="06-2025", end_date="06-2025")

        response = await client.get("/subscriptions/total", params={"user_id": str(user_id)})
        assert response.json() == {"total": 100}

    @pytest.mark.asyncio
    async def test_total_without_window_runs_until_now(self, client: AsyncClient):
        # now is pinned to 2025-08-15: June, July, August
        user_id = uuid4()
        await _create(client, user_id, price=100, start_date="06-2025")

        response = await client.get("/subscriptions/total", params={"user_id": str(user_id)})
        assert response.json() == {"total": 300}

    @pytest.mark.asyncio
    async def test_total_for_unknown_user_is_zero(self, client: AsyncClient):
        response = await client.get("/subscriptions/total", params={"user_id": str(uuid4())})
        assert response.status_code == 200
        assert response.json() == {"total": 0}

    @pytest.mark.asyncio
    async def test_total_rejects_malformed_window(self, client: AsyncClient):
        user_id = uuid4()
        await _create(client, user_id)

        response = await client.get(
            "/subscriptions/total",
            params={"user_id": str(user_id), "start_date": "invalid-date"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["detail"]["type"] == "invalid_date_format"
        assert "total" not in body

    @pytest.mark.asyncio
    async def test_total_requires_valid_user_id(self, client: AsyncClient):
        response = await client.get("/subscriptions/total", params={"user_id": "not-a-uuid"})
        assert response.status_code == 422


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
