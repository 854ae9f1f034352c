"""Pydantic v2 request/response schemas for booking endpoints."""

import datetime as dt
import enum
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from staybook.services.pricing import nights, validate_stay


class Platform(str, enum.Enum):
    """Channel a booking originated from."""

    AIRBNB = "Airbnb"
    GOIBIBO = "Goibibo"
    MAKEMYTRIP = "MakeMyTrip"
    AGODA = "Agoda"
    OFFLINE = "Offline"


class RoomId(str, enum.Enum):
    """Physical rooms of the property."""

    SS1020 = "SS1020"
    SS1022 = "SS1022"
    SS1124 = "SS1124"
    SS1125 = "SS1125"
    SS1003 = "SS1003"
    SS715 = "SS715"


# ---------------------------------------------------------------------------
# Guests
# ---------------------------------------------------------------------------


class GuestInfo(BaseModel):
    """Identity of a guest staying under a booking.

    Either the Aadhaar number or an uploaded image of the card identifies the
    guest, never both.
    """

    name: str = Field(..., min_length=1, max_length=255)
    aadhaar: str | None = Field(None, max_length=32)
    aadhaar_image_url: str | None = Field(None, max_length=512)
    phone: str = Field(..., min_length=1, max_length=32)

    @model_validator(mode="after")
    def check_single_id(self) -> "GuestInfo":
        if self.aadhaar and self.aadhaar_image_url:
            raise ValueError("provide either aadhaar or aadhaar_image_url, not both")
        return self


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Schema for creating a booking, also used for full replace on update.

    When ``rate_per_night`` or ``custom_daily_rates`` are given the server
    computes ``payment`` and ``total_nights``; otherwise ``payment`` is taken
    as entered.
    """

    date: dt.date
    name: str = Field(..., min_length=1, max_length=255)
    aadhaar: str | None = Field(None, max_length=32)
    aadhaar_image_url: str | None = Field(None, max_length=512)
    phone: str = Field(..., min_length=1, max_length=32)
    additional_guests: list[GuestInfo] = Field(default_factory=list)
    payment: Decimal | None = Field(None, ge=0)
    rate_per_night: Decimal | None = Field(None, ge=0)
    custom_daily_rates: dict[dt.date, Decimal] | None = None
    total_nights: int | None = Field(None, ge=1)
    platform: Platform
    room_id: RoomId
    check_in: dt.date
    check_out: dt.date

    @model_validator(mode="after")
    def check_stay(self) -> "BookingCreate":
        """Validate dates, custom rate keys, cached nights and pricing inputs."""
        stay_nights = validate_stay(self.check_in, self.check_out)

        if self.aadhaar and self.aadhaar_image_url:
            raise ValueError("provide either aadhaar or aadhaar_image_url, not both")

        for night, rate in (self.custom_daily_rates or {}).items():
            if not self.check_in <= night < self.check_out:
                raise ValueError(f"custom rate date {night.isoformat()} is outside the stay")
            if rate < 0:
                raise ValueError("custom daily rates must be non-negative")

        if self.total_nights is not None and self.total_nights != stay_nights:
            raise ValueError(f"total_nights must be {stay_nights} for the given dates")

        if self.payment is None and not self.has_rates:
            raise ValueError("either payment or a nightly rate is required")
        return self

    @property
    def has_rates(self) -> bool:
        return self.rate_per_night is not None or bool(self.custom_daily_rates)


class BookingFilter(BaseModel):
    """Predicates that define the filtered input of the analytics reports.

    ``"All"`` (what the dashboard sends for an unset dropdown) disables the
    platform and room filters. Date bounds are inclusive: check-in on or after
    ``start_date`` and check-out on or before ``end_date``.
    """

    platform: Platform | None = None
    room_id: RoomId | None = None
    start_date: dt.date | None = None
    end_date: dt.date | None = None

    @classmethod
    def from_query(
        cls,
        platform: str | None = None,
        room_id: str | None = None,
        start_date: dt.date | None = None,
        end_date: dt.date | None = None,
    ) -> "BookingFilter":
        return cls(
            platform=None if platform in (None, "", "All") else platform,
            room_id=None if room_id in (None, "", "All") else room_id,
            start_date=start_date,
            end_date=end_date,
        )

    def matches(self, booking: "Booking") -> bool:
        if self.platform is not None and booking.platform != self.platform:
            return False
        if self.room_id is not None and booking.room_id != self.room_id:
            return False
        if self.start_date is not None and booking.check_in < self.start_date:
            return False
        if self.end_date is not None and booking.check_out > self.end_date:
            return False
        return True


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class Booking(BaseModel):
    """A stored booking as returned by the API and consumed by the reports."""

    id: str
    date: dt.date
    name: str
    aadhaar: str | None = None
    aadhaar_image_url: str | None = None
    phone: str
    additional_guests: list[GuestInfo] = Field(default_factory=list)
    payment: str  # decimal string
    rate_per_night: str | None = None
    custom_daily_rates: dict[dt.date, Decimal] | None = None
    total_nights: int | None = None
    platform: Platform
    room_id: RoomId
    check_in: dt.date
    check_out: dt.date
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @property
    def nights(self) -> int:
        return nights(self.check_in, self.check_out)


class BookingListResponse(BaseModel):
    """List of bookings matching the requested filter."""

    items: list[Booking]
    total: int
