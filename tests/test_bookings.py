"""
Tests for BookingRepository.
"""

from datetime import datetime, timezone

import pytest
from postgrest.exceptions import APIError

from linkgo.dal import BookingRepository
from tests.conftest import MANAGER_ID, TALENT_ID

START = datetime(2026, 10, 20, 18, 0, tzinfo=timezone.utc)
END = datetime(2026, 10, 20, 19, 30, tzinfo=timezone.utc)


@pytest.fixture
def bookings(manager_client):
    return BookingRepository(manager_client)


class TestGate:
    """Every booking operation needs a signed-in user."""

    @pytest.mark.asyncio
    async def test_all_operations_blocked_without_session(self, fake_client):
        repo = BookingRepository(fake_client)
        results = [
            await repo.request(TALENT_ID, "referee", START, END),
            await repo.respond("bk-1", "accept"),
            await repo.list_mine("manager"),
            await repo.get_by_id("bk-1"),
        ]
        for result in results:
            assert result.data is None
            assert result.error.code == "AUTH_REQUIRED"
        assert fake_client.queries == []


class TestRequest:
    """Tests for BookingRepository.request()."""

    @pytest.mark.asyncio
    async def test_request_inserts_requested_booking(self, bookings, manager_client):
        manager_client.responses["bookings"] = [{"id": "bk-1", "status": "requested"}]

        result = await bookings.request(TALENT_ID, "referee", START, END, "Skytteholms IP", "Träningsmatch U13")
        assert result.error is None
        assert result.data == {"id": "bk-1", "status": "requested"}

        (args, _), = manager_client.last_query("bookings").called("insert")
        row = args[0]
        assert row["status"] == "requested"
        assert row["manager_id"] == MANAGER_ID
        assert row["talent_id"] == TALENT_ID
        assert row["role_at_booking"] == "referee"
        assert row["start_ts"].startswith("2026-10-20T18:00:00")
        assert row["location"] == "Skytteholms IP"

    @pytest.mark.asyncio
    async def test_request_bad_role(self, bookings, manager_client):
        result = await bookings.request(TALENT_ID, "goalkeeper", START, END)
        assert result.error.code == "BAD_REQUEST"
        assert "role_at_booking" in result.error.message
        assert manager_client.queries == []

    @pytest.mark.asyncio
    async def test_request_overlap_is_relabeled(self, bookings, manager_client):
        manager_client.errors["bookings"] = APIError({
            "message": 'conflicting key value violates exclusion constraint "bookings_no_overlap"',
            "code": "23P01",
        })

        result = await bookings.request(TALENT_ID, "coach", START, END)
        assert result.data is None
        assert result.error.code == "23P01"
        assert result.error.message == "time conflict"

    @pytest.mark.asyncio
    async def test_request_other_error_passes_through(self, bookings, manager_client):
        manager_client.errors["bookings"] = APIError({
            "message": "duplicate key value violates unique constraint",
            "code": "23505",
        })

        result = await bookings.request(TALENT_ID, "coach", START, END)
        assert result.error.code == "23505"
        assert result.error.message == "duplicate key value violates unique constraint"


class TestRespond:
    """Tests for BookingRepository.respond()."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("action,status", [
        ("accept", "accepted"),
        ("decline", "declined"),
        ("cancel", "cancelled"),
    ])
    async def test_respond_maps_action(self, bookings, manager_client, action, status):
        manager_client.responses["bookings"] = [{"id": "bk-1", "status": status}]

        result = await bookings.respond("bk-1", action)
        assert result.error is None
        assert result.data["status"] == status

        query = manager_client.last_query("bookings")
        (args, _), = query.called("update")
        assert args[0]["status"] == status
        assert datetime.fromisoformat(args[0]["responded_at"]).tzinfo is not None
        assert query.called("eq") == [(("id", "bk-1"), {})]

    @pytest.mark.asyncio
    async def test_respond_unknown_action(self, bookings, manager_client):
        result = await bookings.respond("bk-1", "approve")
        assert result.data is None
        assert result.error.code == "BAD_REQUEST"
        assert manager_client.queries == []

    @pytest.mark.asyncio
    async def test_respond_invalid_transition_is_relabeled(self, bookings, manager_client):
        manager_client.errors["bookings"] = APIError({
            "message": "Invalid status change: accepted -> declined",
            "code": "P0001",
        })

        result = await bookings.respond("bk-1", "decline")
        assert result.error.code == "P0001"
        assert result.error.message == "invalid status transition"

    @pytest.mark.asyncio
    async def test_respond_no_visible_row(self, bookings, manager_client):
        manager_client.responses["bookings"] = []

        result = await bookings.respond("bk-404", "cancel")
        assert result.data is None
        assert result.error.code == "NOT_FOUND"


class TestListAndGet:
    """Tests for list_mine() and get_by_id()."""

    @pytest.mark.asyncio
    async def test_list_mine_as_manager(self, bookings, manager_client):
        manager_client.responses["bookings"] = [{"id": "bk-1"}, {"id": "bk-2"}]

        result = await bookings.list_mine("manager", limit=10, offset=10)
        assert result.data == [{"id": "bk-1"}, {"id": "bk-2"}]

        query = manager_client.last_query("bookings")
        assert query.called("eq") == [(("manager_id", MANAGER_ID), {})]
        assert query.called("order") == [(("start_ts",), {"desc": False})]
        assert query.called("range") == [((10, 19), {})]

    @pytest.mark.asyncio
    async def test_list_mine_as_talent_with_filters(self, bookings, manager_client):
        await bookings.list_mine("talent", status="requested", date_from=START, date_to="2026-10-31T00:00:00+00:00")

        query = manager_client.last_query("bookings")
        assert query.called("eq") == [
            (("talent_id", MANAGER_ID), {}),
            (("status", "requested"), {}),
        ]
        assert query.called("gte") == [(("start_ts", START.isoformat()), {})]
        assert query.called("lte") == [(("start_ts", "2026-10-31T00:00:00+00:00"), {})]

    @pytest.mark.asyncio
    async def test_list_mine_bad_parameters(self, bookings, manager_client):
        assert (await bookings.list_mine("referee")).error.code == "BAD_REQUEST"
        assert (await bookings.list_mine("manager", status="pending")).error.code == "BAD_REQUEST"
        assert (await bookings.list_mine("manager", limit=0)).error.code == "BAD_REQUEST"
        assert manager_client.queries == []

    @pytest.mark.asyncio
    async def test_list_mine_badly_typed_parameters(self, bookings, manager_client):
        cases = [
            {"offset": None},
            {"limit": "ten"},
            {"date_from": "next tuesday"},
            {"date_to": 3.5j},
        ]
        for kwargs in cases:
            result = await bookings.list_mine("talent", **kwargs)
            assert result.data is None
            assert result.error.code == "BAD_REQUEST"
        assert manager_client.queries == []

    @pytest.mark.asyncio
    async def test_get_by_id(self, bookings, manager_client):
        manager_client.responses["bookings"] = {"id": "bk-1", "status": "requested"}

        result = await bookings.get_by_id("bk-1")
        assert result.data == {"id": "bk-1", "status": "requested"}

        query = manager_client.last_query("bookings")
        assert query.called("eq") == [(("id", "bk-1"), {})]
        assert "single" in query.call_names

    @pytest.mark.asyncio
    async def test_get_by_id_not_found_passes_code_through(self, bookings, manager_client):
        manager_client.errors["bookings"] = APIError({
            "message": "JSON object requested, multiple (or no) rows returned",
            "code": "PGRST116",
        })

        result = await bookings.get_by_id("bk-404")
        assert result.data is None
        assert result.error.code == "PGRST116"
