"""
Integration Tests - Expense endpoints
"""
from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from app.core.db.base import Base

pytestmark = pytest.mark.usefixtures("seeded_categories")


def _iso(dt: datetime) -> str:
    return dt.isoformat()


def _naive_utc(dt: datetime) -> datetime:
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


@pytest.fixture
def yesterday() -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=1)


async def _create(client: AsyncClient, base_path: str, **overrides):
    payload = {
        "category_id": 1,
        "expense_date": _iso(datetime.now(timezone.utc) - timedelta(hours=1)),
        "amount": 10.0,
    }
    payload.update(overrides)
    return await client.post(f"{base_path}/expenses/create", json=payload)


class TestReadExpenses:
    """Tests for listing and fetching expenses"""

    @pytest.mark.asyncio
    async def test_list_empty(self, client: AsyncClient, base_path: str):
        response = await client.get(f"{base_path}/expenses/")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_is_ordered_by_expense_date(self, client: AsyncClient, base_path: str):
        now = datetime.now(timezone.utc)
        for days_ago in (2, 10, 5):
            response = await _create(
                client, base_path, expense_date=_iso(now - timedelta(days=days_ago)), amount=days_ago
            )
            assert response.status_code == 201

        response = await client.get(f"{base_path}/expenses/")

        assert response.status_code == 200
        data = response.json()
        assert [item["amount"] for item in data] == [10, 5, 2]
        dates = [datetime.fromisoformat(item["expense_date"]) for item in data]
        assert dates == sorted(dates)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", [0, -1, -9999])
    async def test_get_non_positive_key_is_bad_request(
        self, client: AsyncClient, base_path: str, executed_sql, key: int
    ):
        response = await client.get(f"{base_path}/expenses/{key}")

        assert response.status_code == 400
        assert executed_sql == []

    @pytest.mark.asyncio
    async def test_get_non_integer_key_is_bad_request(self, client: AsyncClient, base_path: str):
        response = await client.get(f"{base_path}/expenses/abc")

        assert response.status_code == 400
        assert response.json() == {"error": {"message": "Bad Request"}}

    @pytest.mark.asyncio
    async def test_get_missing_expense(self, client: AsyncClient, base_path: str):
        response = await client.get(f"{base_path}/expenses/4242")

        assert response.status_code == 404
        assert response.json() == {"error": {"message": "Not Found"}}

    @pytest.mark.asyncio
    async def test_store_failure_is_generic_server_error(
        self, client: AsyncClient, base_path: str, engine
    ):
        async with engine.begin() as connection:
            await connection.run_sync(Base.metadata.drop_all)

        response = await client.get(f"{base_path}/expenses/")

        assert response.status_code == 500
        assert response.json() == {"error": {"message": "Internal Server Error"}}


class TestCreateExpense:
    """Tests for creating expenses"""

    @pytest.mark.asyncio
    async def test_create_and_retrieve(self, client: AsyncClient, base_path: str, yesterday: datetime):
        response = await _create(
            client, base_path, category_id=3, expense_date=_iso(yesterday), amount=42.50
        )

        assert response.status_code == 201
        created = response.json()
        assert created["expense_id"] > 0
        assert response.headers["location"] == f"{base_path}/expenses/3"

        get_resp = await client.get(f"{base_path}/expenses/{created['expense_id']}")
        assert get_resp.status_code == 200
        payload = get_resp.json()
        assert payload["amount"] == 42.50
        assert payload["category_id"] == 3
        assert datetime.fromisoformat(payload["expense_date"]) == _naive_utc(yesterday)

    @pytest.mark.asyncio
    async def test_client_supplied_id_is_ignored(self, client: AsyncClient, base_path: str):
        response = await _create(client, base_path, expense_id=777)

        assert response.status_code == 201
        assert response.json()["expense_id"] != 777

    @pytest.mark.asyncio
    async def test_negative_amount_is_rejected(self, client: AsyncClient, base_path: str):
        response = await _create(
            client, base_path, category_id=1, expense_date=_iso(datetime.now(timezone.utc)), amount=-5
        )

        assert response.status_code == 400
        assert (await client.get(f"{base_path}/expenses/")).json() == []

    @pytest.mark.asyncio
    async def test_zero_amount_is_rejected(self, client: AsyncClient, base_path: str):
        response = await _create(client, base_path, amount=0)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_future_date_is_rejected(self, client: AsyncClient, base_path: str, executed_sql):
        tomorrow = datetime.now(timezone.utc) + timedelta(days=1)

        response = await _create(client, base_path, expense_date=_iso(tomorrow))

        assert response.status_code == 400
        assert executed_sql == []

    @pytest.mark.asyncio
    async def test_missing_field_is_bad_request(self, client: AsyncClient, base_path: str):
        response = await client.post(
            f"{base_path}/expenses/create",
            json={"category_id": 1, "amount": 12.0},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    async def test_non_finite_amount_is_rejected(
        self, client: AsyncClient, base_path: str, yesterday: datetime, literal: str
    ):
        body = (
            '{"category_id": 1, "expense_date": "%s", "amount": %s}'
            % (_iso(yesterday), literal)
        )

        response = await client.post(
            f"{base_path}/expenses/create",
            content=body,
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert (await client.get(f"{base_path}/expenses/")).json() == []

    @pytest.mark.asyncio
    async def test_unknown_category_is_not_created(self, client: AsyncClient, base_path: str):
        response = await _create(client, base_path, category_id=424242)

        assert response.status_code == 500
        assert (await client.get(f"{base_path}/expenses/")).json() == []


class TestUpdateExpense:
    """Tests for replacing expenses"""

    @pytest.mark.asyncio
    async def test_update_replaces_all_fields(self, client: AsyncClient, base_path: str, yesterday: datetime):
        created = (await _create(client, base_path)).json()
        expense_id = created["expense_id"]

        response = await client.put(
            f"{base_path}/expenses/update",
            params={"id": expense_id},
            json={
                "expense_id": expense_id,
                "category_id": 7,
                "expense_date": _iso(yesterday),
                "amount": 99.99,
            },
        )

        assert response.status_code == 204
        assert response.content == b""

        payload = (await client.get(f"{base_path}/expenses/{expense_id}")).json()
        assert payload["category_id"] == 7
        assert payload["amount"] == 99.99
        assert datetime.fromisoformat(payload["expense_date"]) == _naive_utc(yesterday)

    @pytest.mark.asyncio
    async def test_id_mismatch_is_rejected_before_existence_check(
        self, client: AsyncClient, base_path: str, yesterday: datetime, executed_sql
    ):
        response = await client.put(
            f"{base_path}/expenses/update",
            params={"id": 1},
            json={
                "expense_id": 2,
                "category_id": 1,
                "expense_date": _iso(yesterday),
                "amount": 5.0,
            },
        )

        assert response.status_code == 400
        assert executed_sql == []

    @pytest.mark.asyncio
    async def test_invalid_domain_values_are_rejected(self, client: AsyncClient, base_path: str, yesterday: datetime):
        created = (await _create(client, base_path)).json()

        response = await client.put(
            f"{base_path}/expenses/update",
            params={"id": created["expense_id"]},
            json={
                "expense_id": created["expense_id"],
                "category_id": 1,
                "expense_date": _iso(yesterday),
                "amount": -1,
            },
        )

        assert response.status_code == 400
        payload = (await client.get(f"{base_path}/expenses/{created['expense_id']}")).json()
        assert payload["amount"] == created["amount"]

    @pytest.mark.asyncio
    async def test_future_date_is_rejected(self, client: AsyncClient, base_path: str):
        created = (await _create(client, base_path)).json()
        tomorrow = datetime.now(timezone.utc) + timedelta(days=1)

        response = await client.put(
            f"{base_path}/expenses/update",
            params={"id": created["expense_id"]},
            json={
                "expense_id": created["expense_id"],
                "category_id": 3,
                "expense_date": _iso(tomorrow),
                "amount": 15.0,
            },
        )

        assert response.status_code == 400
        payload = (await client.get(f"{base_path}/expenses/{created['expense_id']}")).json()
        assert payload == created

    @pytest.mark.asyncio
    async def test_update_missing_expense(self, client: AsyncClient, base_path: str, yesterday: datetime):
        response = await client.put(
            f"{base_path}/expenses/update",
            params={"id": 9999},
            json={
                "expense_id": 9999,
                "category_id": 1,
                "expense_date": _iso(yesterday),
                "amount": 20.0,
            },
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_missing_id_query_is_bad_request(self, client: AsyncClient, base_path: str, yesterday: datetime):
        response = await client.put(
            f"{base_path}/expenses/update",
            json={
                "expense_id": 1,
                "category_id": 1,
                "expense_date": _iso(yesterday),
                "amount": 20.0,
            },
        )

        assert response.status_code == 400


class TestDeleteExpense:
    """Tests for deleting expenses"""

    @pytest.mark.asyncio
    async def test_delete_removes_exactly_that_record(self, client: AsyncClient, base_path: str):
        first = (await _create(client, base_path, amount=1.0)).json()
        second = (await _create(client, base_path, amount=2.0)).json()

        response = await client.delete(f"{base_path}/expenses/delete/{first['expense_id']}")

        assert response.status_code == 200
        assert (await client.get(f"{base_path}/expenses/{first['expense_id']}")).status_code == 404
        remaining = (await client.get(f"{base_path}/expenses/")).json()
        assert [item["expense_id"] for item in remaining] == [second["expense_id"]]

    @pytest.mark.asyncio
    async def test_delete_missing_leaves_store_unchanged(self, client: AsyncClient, base_path: str):
        created = (await _create(client, base_path)).json()

        response = await client.delete(f"{base_path}/expenses/delete/9999")

        assert response.status_code == 404
        remaining = (await client.get(f"{base_path}/expenses/")).json()
        assert [item["expense_id"] for item in remaining] == [created["expense_id"]]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", [0, -3])
    async def test_delete_non_positive_key_is_bad_request(
        self, client: AsyncClient, base_path: str, executed_sql, key: int
    ):
        response = await client.delete(f"{base_path}/expenses/delete/{key}")

        assert response.status_code == 400
        assert executed_sql == []

    @pytest.mark.asyncio
    async def test_category_in_use_cannot_be_deleted(self, client: AsyncClient, base_path: str):
        created = (await _create(client, base_path, category_id=3)).json()

        response = await client.delete(f"{base_path}/categories/delete/3")

        assert response.status_code == 500
        assert (await client.get(f"{base_path}/categories/3")).status_code == 200
        assert (await client.get(f"{base_path}/expenses/{created['expense_id']}")).status_code == 200
