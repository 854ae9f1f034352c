"""Pydantic v2 schemas for invoice generation and price quotes."""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class InvoiceRequest(BaseModel):
    """Invoice either a stored booking or an ad-hoc stay.

    With ``booking_id`` the guest, dates and prices come from the booking.
    Otherwise ``guest_name``, ``check_in``, ``check_out`` and
    ``price_per_night`` are required.
    """

    booking_id: str | None = None
    guest_name: str | None = Field(None, min_length=1, max_length=255)
    check_in: dt.date | None = None
    check_out: dt.date | None = None
    price_per_night: Decimal | None = Field(None, ge=0)
    invoice_date: dt.date | None = None

    @model_validator(mode="after")
    def check_source(self) -> "InvoiceRequest":
        if self.booking_id is None:
            missing = [
                name
                for name in ("guest_name", "check_in", "check_out", "price_per_night")
                if getattr(self, name) is None
            ]
            if missing:
                raise ValueError(f"Missing required field: {', '.join(missing)}")
        return self


class QuoteRequest(BaseModel):
    """A proposed stay to price before creating a booking."""

    check_in: dt.date
    check_out: dt.date
    rate_per_night: Decimal | None = Field(None, ge=0)
    custom_daily_rates: dict[dt.date, Decimal] | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class InvoiceData(BaseModel):
    """Flat invoice record handed to a document renderer."""

    invoice_no: str
    invoice_date: dt.date
    booking_id: str
    guest_name: str
    check_in: dt.date
    check_out: dt.date
    nights: int
    price_per_night: Decimal
    total_amount: Decimal


class InvoiceResponse(BaseModel):
    invoice: InvoiceData
    template_fields: dict[str, str]


class QuoteResponse(BaseModel):
    nights: int
    dates: list[dt.date]
    total_amount: Decimal
