"""Booking model: room reservations and the booking id counter."""

import datetime as dt
from decimal import Decimal

from sqlalchemy import JSON, Date, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from staybook.database import Base


class BookingRow(Base):
    """A reservation of one room over a date range, sourced from one platform."""

    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(String(16), primary_key=True)  # BK0001
    sequence: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    aadhaar: Mapped[str | None] = mapped_column(String(32), nullable=True)
    aadhaar_image_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    additional_guests: Mapped[list[dict]] = mapped_column(JSON, default=list, nullable=False)
    payment: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    rate_per_night: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    custom_daily_rates: Mapped[dict[str, str] | None] = mapped_column(JSON, nullable=True)
    total_nights: Mapped[int | None] = mapped_column(Integer, nullable=True)
    platform: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    room_id: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    check_in: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    check_out: Mapped[dt.date] = mapped_column(Date, nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[dt.datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<BookingRow(id={self.id}, room_id={self.room_id}, check_in={self.check_in})>"


class IdCounter(Base):
    """Monotonic counters for human-readable ids; never decremented on delete."""

    __tablename__ = "id_counters"

    name: Mapped[str] = mapped_column(String(32), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
