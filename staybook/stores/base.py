"""Booking store interface shared by the SQL and in-memory implementations.

Routers and the reports only ever see :class:`~staybook.schemas.booking.Booking`
values coming out of a store; where they are persisted is the store's concern.
"""

from __future__ import annotations

import abc
import re

from staybook.schemas.booking import Booking, BookingCreate, BookingFilter, GuestInfo
from staybook.services.pricing import nights, parse_amount, total_amount

BOOKING_ID_PREFIX = "BK"
_BOOKING_ID_RE = re.compile(r"^BK(\d+)$")


class BookingNotFoundError(LookupError):
    """Raised when no booking has the requested id."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(f"Booking {booking_id} not found")
        self.booking_id = booking_id


class GuestSlotError(LookupError):
    """Raised when a guest slot does not exist on the booking."""


def format_booking_id(sequence: int) -> str:
    """``1`` -> ``"BK0001"``. Sequences past 9999 simply grow wider."""
    return f"{BOOKING_ID_PREFIX}{sequence:04d}"


def booking_sequence(booking_id: str) -> int:
    """Creation sequence encoded in a booking id; 0 for foreign ids."""
    match = _BOOKING_ID_RE.match(booking_id)
    return int(match.group(1)) if match else 0


def priced_fields(data: BookingCreate) -> dict:
    """Stored field values for a create/replace request.

    ``payment`` is recomputed from the rates when any are given and
    ``total_nights`` always reflects the dates.
    """
    fields = data.model_dump(exclude={"additional_guests"})
    fields["additional_guests"] = [guest.model_dump() for guest in data.additional_guests]
    if data.has_rates:
        fields["payment"] = total_amount(
            data.check_in,
            data.check_out,
            data.rate_per_night,
            data.custom_daily_rates,
        )
    fields["total_nights"] = nights(data.check_in, data.check_out)
    return fields


def booking_to_create(booking: Booking) -> BookingCreate:
    """Turn a stored booking back into a replace request with identical values."""
    return BookingCreate(
        date=booking.date,
        name=booking.name,
        aadhaar=booking.aadhaar,
        aadhaar_image_url=booking.aadhaar_image_url,
        phone=booking.phone,
        additional_guests=list(booking.additional_guests),
        payment=parse_amount(booking.payment),
        rate_per_night=parse_amount(booking.rate_per_night) if booking.rate_per_night is not None else None,
        custom_daily_rates=booking.custom_daily_rates,
        platform=booking.platform,
        room_id=booking.room_id,
        check_in=booking.check_in,
        check_out=booking.check_out,
    )


class BookingStore(abc.ABC):
    """Persistence of bookings.

    Implementations must assign ids with :func:`format_booking_id` from a
    counter that never goes backwards, so deleted ids are not reused.
    """

    @abc.abstractmethod
    async def list_bookings(self, booking_filter: BookingFilter | None = None) -> list[Booking]:
        """Bookings matching the filter, most recently dated first."""

    @abc.abstractmethod
    async def get_booking(self, booking_id: str) -> Booking:
        """Raises :class:`BookingNotFoundError` when missing."""

    @abc.abstractmethod
    async def create_booking(self, data: BookingCreate) -> Booking: ...

    @abc.abstractmethod
    async def update_booking(self, booking_id: str, data: BookingCreate) -> Booking:
        """Replace every field of the booking. Raises :class:`BookingNotFoundError`."""

    @abc.abstractmethod
    async def delete_booking(self, booking_id: str) -> None:
        """Raises :class:`BookingNotFoundError` when missing."""

    async def commit(self) -> None:
        """Make earlier writes durable. Stores without transactions do nothing."""

    async def set_guest_image(self, booking_id: str, guest_slot: int, image_url: str) -> Booking:
        """Make an uploaded ID image authoritative for one guest.

        Slot 0 is the primary guest, slot ``n`` the n-th additional guest.
        The Aadhaar number of that guest is cleared.
        """
        booking = await self.get_booking(booking_id)
        data = booking_to_create(booking)

        if guest_slot == 0:
            data = data.model_copy(update={"aadhaar": None, "aadhaar_image_url": image_url})
        elif 1 <= guest_slot <= len(data.additional_guests):
            guests = list(data.additional_guests)
            guests[guest_slot - 1] = GuestInfo(
                name=guests[guest_slot - 1].name,
                phone=guests[guest_slot - 1].phone,
                aadhaar_image_url=image_url,
            )
            data = data.model_copy(update={"additional_guests": guests})
        else:
            raise GuestSlotError(f"Booking {booking_id} has no guest slot {guest_slot}")

        return await self.update_booking(booking_id, data)
