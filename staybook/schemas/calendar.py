"""Pydantic v2 schemas for the occupancy calendar."""

import datetime as dt

from pydantic import BaseModel, Field, computed_field

from staybook.schemas.booking import Booking


class BookingBar(BaseModel):
    """The part of a booking's stay visible in one week row of the calendar.

    ``slot`` is the vertical lane within the row; bars sharing a slot never
    overlap.
    """

    booking: Booking
    start_column: int = Field(..., ge=1, le=7)  # 1 = Sunday
    row_span_length: int = Field(..., ge=1, le=7)
    week_row: int = Field(..., ge=0, le=5)
    slot: int = Field(0, ge=0)

    @computed_field
    @property
    def end_column(self) -> int:
        return self.start_column + self.row_span_length - 1


class CalendarDay(BaseModel):
    date: dt.date
    in_current_month: bool
    is_today: bool
    is_past: bool


class MonthRef(BaseModel):
    year: int
    month: int


class CalendarMonthResponse(BaseModel):
    """A six-week grid for one month plus the booking bars drawn on it."""

    year: int
    month: int
    label: str  # e.g. "March 2025"
    days: list[CalendarDay]
    bars: list[BookingBar]
    previous: MonthRef
    next: MonthRef
