"""Tests for the analytics dashboard endpoint."""

from datetime import date
from decimal import Decimal

import pytest
from httpx import AsyncClient

from staybook.stores.memory import InMemoryBookingStore

pytestmark = pytest.mark.asyncio


@pytest.fixture
def booking_store(make_booking) -> InMemoryBookingStore:
    """Store pre-loaded with bookings across two months."""
    return InMemoryBookingStore(
        [
            make_booking("BK0001", room_id="SS1020", platform="Airbnb", payment="9000",
                         check_in=date(2025, 3, 1), check_out=date(2025, 3, 4)),
            make_booking("BK0002", room_id="SS1022", platform="Goibibo", payment="4000",
                         check_in=date(2025, 3, 5), check_out=date(2025, 3, 7)),
            make_booking("BK0003", room_id="SS1020", platform="Airbnb", payment="6000",
                         check_in=date(2025, 4, 2), check_out=date(2025, 4, 4)),
            make_booking("BK0004", room_id="SS715", platform="Offline", payment="not recorded",
                         check_in=date(2025, 4, 10), check_out=date(2025, 4, 15)),
        ]
    )


# ---------------------------------------------------------------------------
# GET /api/v1/analytics
# ---------------------------------------------------------------------------


class TestAnalytics:
    """Tests for the analytics endpoint."""

    async def test_unfiltered_report(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.get("/api/v1/analytics", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()

        assert data["total_bookings"] == 4
        assert Decimal(data["total_revenue"]) == Decimal("19000")
        assert list(data["monthly_room_performance"]) == ["Mar 2025", "Apr 2025"]
        assert [p["month"] for p in data["revenue_trends"]] == ["Mar 2025", "Apr 2025"]
        assert data["top_rooms"][0]["room"] == "SS1020"
        assert sum(p["percentage"] for p in data["platform_share"]) == pytest.approx(100.0)

    async def test_percentages_relative_to_filtered_set(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.get(
            "/api/v1/analytics",
            params={"room_id": "SS1020"},
            headers=auth_headers,
        )
        data = response.json()
        assert data["total_bookings"] == 2
        assert [(p["platform"], p["percentage"]) for p in data["platform_share"]] == [("Airbnb", 100.0)]

    async def test_date_range_filter(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.get(
            "/api/v1/analytics",
            params={"start_date": "2025-04-01", "end_date": "2025-04-30", "platform": "All"},
            headers=auth_headers,
        )
        data = response.json()
        assert data["total_bookings"] == 2
        assert list(data["monthly_room_performance"]) == ["Apr 2025"]

    async def test_empty_result(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.get("/api/v1/analytics", params={"platform": "Agoda"}, headers=auth_headers)
        data = response.json()
        assert data["total_bookings"] == 0
        assert data["platform_share"] == []
        assert data["top_rooms"] == []

    async def test_reversed_dates_rejected(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.get(
            "/api/v1/analytics",
            params={"start_date": "2025-04-30", "end_date": "2025-04-01"},
            headers=auth_headers,
        )
        assert response.status_code == 400

    async def test_unknown_room_rejected(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.get("/api/v1/analytics", params={"room_id": "SS0000"}, headers=auth_headers)
        assert response.status_code == 422
