"""Seed the database with realistic sample bookings.

Spreads bookings over every room and platform across the last few months
and the weeks ahead, mixing flat nightly rates, weekend surcharges via
custom daily rates, and offline bookings entered with a lump-sum payment.

Run from the project root:
    python -m scripts.seed_data
"""

import asyncio
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import func, select

import staybook.models  # noqa: F401  registers the tables on Base.metadata
from staybook.database import Base, async_session_factory, engine
from staybook.models.booking import BookingRow
from staybook.schemas.booking import BookingCreate, GuestInfo, Platform, RoomId
from staybook.stores.sql import SqlBookingStore

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

GUESTS = [
    ("Aarav Sharma", "9876543210"),
    ("Priya Nair", "9845012345"),
    ("Rohan Mehta", "9820098765"),
    ("Ananya Iyer", "9900112233"),
    ("Vikram Singh", "9811122233"),
    ("Meera Kulkarni", "9766554433"),
    ("Kabir Das", "9833445566"),
    ("Sneha Reddy", "9848022338"),
    ("Arjun Menon", "9895123456"),
    ("Ishita Banerjee", "9830011223"),
]

ROOM_RATES = {
    RoomId.SS1020: Decimal("2800"),
    RoomId.SS1022: Decimal("3000"),
    RoomId.SS1124: Decimal("3500"),
    RoomId.SS1125: Decimal("3500"),
    RoomId.SS1003: Decimal("2500"),
    RoomId.SS715: Decimal("4200"),
}

WEEKEND_SURCHARGE = Decimal("800")

# (days from today for check-in, nights, room, platform, additional guest count)
STAYS = [
    (-95, 3, RoomId.SS1020, Platform.AIRBNB, 1),
    (-88, 2, RoomId.SS1124, Platform.GOIBIBO, 0),
    (-80, 5, RoomId.SS715, Platform.MAKEMYTRIP, 2),
    (-71, 1, RoomId.SS1003, Platform.OFFLINE, 0),
    (-64, 4, RoomId.SS1022, Platform.AGODA, 1),
    (-60, 2, RoomId.SS1125, Platform.AIRBNB, 0),
    (-52, 6, RoomId.SS1020, Platform.MAKEMYTRIP, 1),
    (-45, 3, RoomId.SS715, Platform.AIRBNB, 0),
    (-39, 2, RoomId.SS1124, Platform.OFFLINE, 1),
    (-33, 7, RoomId.SS1003, Platform.GOIBIBO, 0),
    (-26, 3, RoomId.SS1022, Platform.AIRBNB, 2),
    (-20, 2, RoomId.SS1125, Platform.AGODA, 0),
    (-14, 4, RoomId.SS715, Platform.MAKEMYTRIP, 1),
    (-8, 3, RoomId.SS1020, Platform.AIRBNB, 0),
    (-3, 5, RoomId.SS1124, Platform.GOIBIBO, 1),
    (0, 2, RoomId.SS1003, Platform.OFFLINE, 0),
    (2, 3, RoomId.SS1022, Platform.AIRBNB, 0),
    (5, 4, RoomId.SS1125, Platform.MAKEMYTRIP, 2),
    (9, 2, RoomId.SS715, Platform.AGODA, 0),
    (16, 6, RoomId.SS1020, Platform.AIRBNB, 1),
]


def _build_bookings(today: date) -> list[BookingCreate]:
    """Booking requests for each entry of ``STAYS`` relative to ``today``."""
    bookings: list[BookingCreate] = []
    for index, (offset, stay_nights, room, platform, extra_guests) in enumerate(STAYS):
        check_in = today + timedelta(days=offset)
        check_out = check_in + timedelta(days=stay_nights)
        name, phone = GUESTS[index % len(GUESTS)]
        companions = [
            GuestInfo(name=companion, phone=companion_phone)
            for companion, companion_phone in (GUESTS[(index + n) % len(GUESTS)] for n in range(1, extra_guests + 1))
        ]
        rate = ROOM_RATES[room]

        pricing: dict = {}
        if platform is Platform.OFFLINE:
            # Walk-ins are entered with the agreed lump sum.
            pricing["payment"] = rate * stay_nights - Decimal("500")
        else:
            pricing["rate_per_night"] = rate
            weekend = {
                check_in + timedelta(days=n): rate + WEEKEND_SURCHARGE
                for n in range(stay_nights)
                if (check_in + timedelta(days=n)).weekday() in (4, 5)
            }
            if weekend:
                pricing["custom_daily_rates"] = weekend

        bookings.append(
            BookingCreate(
                date=check_in - timedelta(days=7 + index % 5),
                name=name,
                aadhaar=f"{4000_0000_0000 + index * 1111_1111:012d}",
                phone=phone,
                additional_guests=companions,
                platform=platform,
                room_id=room,
                check_in=check_in,
                check_out=check_out,
                **pricing,
            )
        )
    return bookings


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


async def seed() -> None:
    """Populate an empty database with sample bookings.

    Does nothing when bookings already exist, so it is safe to run twice.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        existing = await session.scalar(select(func.count()).select_from(BookingRow))
        if existing:
            print(f"Database already holds {existing} bookings, skipping seed.")
            await engine.dispose()
            return

        store = SqlBookingStore(session)
        created = [await store.create_booking(data) for data in _build_bookings(date.today())]
        await session.commit()

    total = sum(Decimal(booking.payment) for booking in created)
    print("=" * 60)
    print("Seed Summary")
    print("=" * 60)
    print(f"   Bookings:      {len(created)} ({created[0].id} .. {created[-1].id})")
    print(f"   Rooms:         {len({b.room_id for b in created})}")
    print(f"   Platforms:     {len({b.platform for b in created})}")
    print(f"   Revenue:       {total}")
    print("=" * 60)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
