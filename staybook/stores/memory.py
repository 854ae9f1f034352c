"""In-process booking store.

Used by the test suite and for local demos; holds everything in a dict and
needs no configuration or environment.
"""

from __future__ import annotations

from datetime import datetime, timezone

from staybook.schemas.booking import Booking, BookingCreate, BookingFilter
from staybook.stores.base import (
    BookingNotFoundError,
    BookingStore,
    booking_sequence,
    format_booking_id,
    priced_fields,
)


def _stored(booking_id: str, fields: dict, created_at: datetime, updated_at: datetime) -> Booking:
    rates = fields["custom_daily_rates"]
    return Booking(
        **{
            **fields,
            "id": booking_id,
            "payment": str(fields["payment"]),
            "rate_per_night": None if fields["rate_per_night"] is None else str(fields["rate_per_night"]),
            "custom_daily_rates": dict(rates) if rates else None,
            "created_at": created_at,
            "updated_at": updated_at,
        }
    )


class InMemoryBookingStore(BookingStore):
    """Dict-backed store with the same id and ordering rules as the SQL store."""

    def __init__(self, bookings: list[Booking] | None = None) -> None:
        self._bookings: dict[str, Booking] = {}
        self._sequence = 0
        for booking in bookings or []:
            self._bookings[booking.id] = booking
            self._sequence = max(self._sequence, booking_sequence(booking.id))

    async def list_bookings(self, booking_filter: BookingFilter | None = None) -> list[Booking]:
        booking_filter = booking_filter or BookingFilter()
        matching = [b for b in self._bookings.values() if booking_filter.matches(b)]
        return sorted(matching, key=lambda b: b.date, reverse=True)

    async def get_booking(self, booking_id: str) -> Booking:
        try:
            return self._bookings[booking_id]
        except KeyError:
            raise BookingNotFoundError(booking_id) from None

    async def create_booking(self, data: BookingCreate) -> Booking:
        self._sequence += 1
        booking_id = format_booking_id(self._sequence)

        now = datetime.now(timezone.utc)
        booking = _stored(booking_id, priced_fields(data), now, now)
        self._bookings[booking_id] = booking
        return booking

    async def update_booking(self, booking_id: str, data: BookingCreate) -> Booking:
        existing = await self.get_booking(booking_id)
        booking = _stored(booking_id, priced_fields(data), existing.created_at, datetime.now(timezone.utc))
        self._bookings[booking_id] = booking
        return booking

    async def delete_booking(self, booking_id: str) -> None:
        await self.get_booking(booking_id)
        del self._bookings[booking_id]
