"""Invoice and price-quote API router."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from staybook.api.deps import get_booking_store, require_session
from staybook.config import settings
from staybook.schemas.invoice import InvoiceRequest, InvoiceResponse, QuoteRequest, QuoteResponse
from staybook.services.invoices import build_invoice, invoice_for_booking, template_fields
from staybook.services.pricing import InvalidStayError, date_range, total_amount, validate_stay
from staybook.stores.base import BookingNotFoundError, BookingStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1",
    tags=["invoices"],
    dependencies=[Depends(require_session)],
)

_INVALID_STAY = "Check-out date must be after check-in date"


@router.post("/invoices", response_model=InvoiceResponse)
async def create_invoice(
    body: InvoiceRequest,
    store: BookingStore = Depends(get_booking_store),
) -> InvoiceResponse:
    """Build the invoice record and template values for a booking or ad-hoc stay."""
    try:
        if body.booking_id is not None:
            booking = await store.get_booking(body.booking_id)
            invoice = invoice_for_booking(booking, body.invoice_date)
        else:
            invoice = build_invoice(
                guest_name=body.guest_name,
                check_in=body.check_in,
                check_out=body.check_out,
                price_per_night=body.price_per_night,
                invoice_date=body.invoice_date,
            )
    except BookingNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        ) from None
    except InvalidStayError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_INVALID_STAY,
        ) from None

    logger.info("Generated invoice %s for booking %s", invoice.invoice_no, invoice.booking_id)
    return InvoiceResponse(
        invoice=invoice,
        template_fields=template_fields(
            invoice,
            check_in_time=settings.invoice_check_in_time,
            check_out_time=settings.invoice_check_out_time,
        ),
    )


@router.post("/pricing/quote", response_model=QuoteResponse)
async def quote_stay(body: QuoteRequest) -> QuoteResponse:
    """Price a stay from a nightly rate and optional per-date overrides."""
    try:
        stay_nights = validate_stay(body.check_in, body.check_out)
    except InvalidStayError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_INVALID_STAY,
        ) from None

    return QuoteResponse(
        nights=stay_nights,
        dates=date_range(body.check_in, body.check_out),
        total_amount=total_amount(
            body.check_in,
            body.check_out,
            body.rate_per_night,
            body.custom_daily_rates,
        ),
    )
