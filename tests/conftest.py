"""Shared test configuration and fixtures.

API tests run against an :class:`InMemoryBookingStore` and an image store in
a temporary directory, both injected through ``app.dependency_overrides``;
no database is needed. The SQL store has its own SQLite-backed fixtures in
``tests/test_stores``.
"""

from collections.abc import AsyncGenerator
from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from staybook.api.deps import get_booking_store, get_image_store
from staybook.auth.session import create_session_token
from staybook.config import settings
from staybook.main import app
from staybook.schemas.booking import Booking
from staybook.storage.images import LocalImageStore
from staybook.stores.memory import InMemoryBookingStore

# ---------------------------------------------------------------------------
# Booking factory
# ---------------------------------------------------------------------------


def _make_booking(
    booking_id: str = "BK0001",
    *,
    room_id: str = "SS1020",
    platform: str = "Airbnb",
    check_in: date = date(2025, 3, 10),
    check_out: date = date(2025, 3, 13),
    payment: str = "9000",
    booked_on: date | None = None,
    **overrides,
) -> Booking:
    """Build a stored booking with sensible defaults."""
    fields = {
        "id": booking_id,
        "date": booked_on or check_in,
        "name": "Aarav Sharma",
        "aadhaar": "123412341234",
        "phone": "9876543210",
        "payment": payment,
        "platform": platform,
        "room_id": room_id,
        "check_in": check_in,
        "check_out": check_out,
    }
    fields.update(overrides)
    return Booking(**fields)


def _booking_payload(**overrides) -> dict:
    """JSON body for ``POST /api/v1/bookings``."""
    payload = {
        "date": "2025-03-01",
        "name": "Priya Nair",
        "aadhaar": "567856785678",
        "phone": "9845012345",
        "additional_guests": [],
        "rate_per_night": "3000",
        "platform": "Airbnb",
        "room_id": "SS1022",
        "check_in": "2025-03-10",
        "check_out": "2025-03-13",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_booking():
    """Factory for stored bookings: ``make_booking("BK0002", room_id="SS715")``."""
    return _make_booking


@pytest.fixture
def booking_payload():
    """Factory for create/replace request bodies."""
    return _booking_payload


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


@pytest.fixture
def booking_store() -> InMemoryBookingStore:
    return InMemoryBookingStore()


@pytest.fixture
def image_store(tmp_path) -> LocalImageStore:
    return LocalImageStore(root=tmp_path / "images", signing_key="test-signing-key")


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def client(
    booking_store: InMemoryBookingStore,
    image_store: LocalImageStore,
) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the in-memory stores."""
    app.dependency_overrides[get_booking_store] = lambda: booking_store
    app.dependency_overrides[get_image_store] = lambda: image_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Bearer header carrying a valid session token."""
    return {"Authorization": f"Bearer {create_session_token(settings.auth_username)}"}
