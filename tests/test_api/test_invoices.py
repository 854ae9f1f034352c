"""Tests for invoice generation and price quotes."""

from datetime import date
from decimal import Decimal

import pytest
from httpx import AsyncClient

from staybook.stores.memory import InMemoryBookingStore

pytestmark = pytest.mark.asyncio


@pytest.fixture
def booking_store(make_booking) -> InMemoryBookingStore:
    return InMemoryBookingStore(
        [make_booking("BK0007", name="Meera Kulkarni", payment="9000", rate_per_night="3000")]
    )


# ---------------------------------------------------------------------------
# POST /api/v1/invoices
# ---------------------------------------------------------------------------


class TestCreateInvoice:
    async def test_invoice_for_stored_booking(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post(
            "/api/v1/invoices",
            json={"booking_id": "BK0007", "invoice_date": "2025-03-13"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["invoice"]["booking_id"] == "BK0007"
        assert data["invoice"]["nights"] == 3
        assert Decimal(data["invoice"]["total_amount"]) == Decimal("9000")

        fields = data["template_fields"]
        assert fields["guestName"] == "Meera Kulkarni"
        assert fields["invoiceDate"] == "13 Mar 2025"
        assert fields["checkIn"] == "10 Mar 2025 at 2:00 PM"
        assert fields["checkOut"] == "13 Mar 2025 at 11:00 AM"
        assert fields["pricePerNight"] == "3,000"
        assert fields["totalAmount"] == "9,000"
        assert fields["invoiceNo"].startswith("INV-")

    async def test_ad_hoc_invoice(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post(
            "/api/v1/invoices",
            json={
                "guest_name": "Walk-in Guest",
                "check_in": "2025-03-10",
                "check_out": "2025-03-12",
                "price_per_night": "2750",
            },
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["template_fields"]["totalAmount"] == "5,500"
        assert data["invoice"]["booking_id"].startswith("BK-")
        assert data["invoice"]["invoice_date"] == date.today().isoformat()

    async def test_missing_booking(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post("/api/v1/invoices", json={"booking_id": "BK0404"}, headers=auth_headers)
        assert response.status_code == 404

    async def test_missing_fields(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post(
            "/api/v1/invoices",
            json={"guest_name": "Walk-in Guest", "check_in": "2025-03-10"},
            headers=auth_headers,
        )
        assert response.status_code == 422
        assert "Missing required field" in response.text

    async def test_check_out_before_check_in(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post(
            "/api/v1/invoices",
            json={
                "guest_name": "Walk-in Guest",
                "check_in": "2025-03-12",
                "check_out": "2025-03-10",
                "price_per_night": "2750",
            },
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Check-out date must be after check-in date"


# ---------------------------------------------------------------------------
# POST /api/v1/pricing/quote
# ---------------------------------------------------------------------------


class TestQuote:
    async def test_quote_with_override(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post(
            "/api/v1/pricing/quote",
            json={
                "check_in": "2025-03-10",
                "check_out": "2025-03-13",
                "rate_per_night": "3000",
                "custom_daily_rates": {"2025-03-11": "5000"},
            },
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["nights"] == 3
        assert data["dates"] == ["2025-03-10", "2025-03-11", "2025-03-12"]
        assert Decimal(data["total_amount"]) == Decimal("11000")

    async def test_invalid_stay(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.post(
            "/api/v1/pricing/quote",
            json={"check_in": "2025-03-10", "check_out": "2025-03-10", "rate_per_night": "3000"},
            headers=auth_headers,
        )
        assert response.status_code == 400
