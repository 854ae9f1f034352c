"""SQLAlchemy-backed booking store."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.models.booking import BookingRow, IdCounter
from staybook.schemas.booking import Booking, BookingCreate, BookingFilter
from staybook.stores.base import BookingNotFoundError, BookingStore, format_booking_id, priced_fields

logger = logging.getLogger(__name__)

_BOOKING_COUNTER = "booking"


def _to_booking(row: BookingRow) -> Booking:
    return Booking(
        id=row.id,
        date=row.date,
        name=row.name,
        aadhaar=row.aadhaar,
        aadhaar_image_url=row.aadhaar_image_url,
        phone=row.phone,
        additional_guests=row.additional_guests or [],
        payment=str(row.payment),
        rate_per_night=None if row.rate_per_night is None else str(row.rate_per_night),
        custom_daily_rates=row.custom_daily_rates or None,
        total_nights=row.total_nights,
        platform=row.platform,
        room_id=row.room_id,
        check_in=row.check_in,
        check_out=row.check_out,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _apply(row: BookingRow, fields: dict) -> None:
    rates = fields["custom_daily_rates"]
    row.date = fields["date"]
    row.name = fields["name"]
    row.aadhaar = fields["aadhaar"]
    row.aadhaar_image_url = fields["aadhaar_image_url"]
    row.phone = fields["phone"]
    row.additional_guests = fields["additional_guests"]
    row.payment = fields["payment"]
    row.rate_per_night = fields["rate_per_night"]
    row.custom_daily_rates = {day.isoformat(): str(rate) for day, rate in rates.items()} if rates else None
    row.total_nights = fields["total_nights"]
    row.platform = fields["platform"].value
    row.room_id = fields["room_id"].value
    row.check_in = fields["check_in"]
    row.check_out = fields["check_out"]


class SqlBookingStore(BookingStore):
    """Store bookings through an async SQLAlchemy session.

    The session's transaction is owned by the caller (``get_db`` commits at
    the end of the request). Writes are only flushed. Routes call
    :meth:`commit` before file work that cannot be rolled back.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _next_sequence(self) -> int:
        counter = await self.session.get(IdCounter, _BOOKING_COUNTER, with_for_update=True)
        if counter is None:
            counter = IdCounter(name=_BOOKING_COUNTER, value=0)
            self.session.add(counter)
        counter.value += 1
        await self.session.flush()
        return counter.value

    async def _get_row(self, booking_id: str) -> BookingRow:
        row = await self.session.get(BookingRow, booking_id)
        if row is None:
            raise BookingNotFoundError(booking_id)
        return row

    async def list_bookings(self, booking_filter: BookingFilter | None = None) -> list[Booking]:
        query = select(BookingRow)
        if booking_filter is not None:
            if booking_filter.platform is not None:
                query = query.where(BookingRow.platform == booking_filter.platform.value)
            if booking_filter.room_id is not None:
                query = query.where(BookingRow.room_id == booking_filter.room_id.value)
            if booking_filter.start_date is not None:
                query = query.where(BookingRow.check_in >= booking_filter.start_date)
            if booking_filter.end_date is not None:
                query = query.where(BookingRow.check_out <= booking_filter.end_date)

        result = await self.session.execute(query.order_by(BookingRow.date.desc(), BookingRow.sequence))
        return [_to_booking(row) for row in result.scalars().all()]

    async def get_booking(self, booking_id: str) -> Booking:
        return _to_booking(await self._get_row(booking_id))

    async def create_booking(self, data: BookingCreate) -> Booking:
        sequence = await self._next_sequence()
        row = BookingRow(id=format_booking_id(sequence), sequence=sequence)
        _apply(row, priced_fields(data))
        self.session.add(row)
        await self.session.flush()
        await self.session.refresh(row)
        logger.info("Stored booking %s", row.id)
        return _to_booking(row)

    async def update_booking(self, booking_id: str, data: BookingCreate) -> Booking:
        row = await self._get_row(booking_id)
        _apply(row, priced_fields(data))
        await self.session.flush()
        await self.session.refresh(row)
        return _to_booking(row)

    async def delete_booking(self, booking_id: str) -> None:
        row = await self._get_row(booking_id)
        await self.session.delete(row)
        await self.session.flush()

    async def commit(self) -> None:
        await self.session.commit()
