"""Invoice records for guest stays.

Builds the flat :class:`InvoiceData` record and the formatted strings a
document template expects. Rendering the document itself happens elsewhere.
"""

import secrets
import string
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from staybook.schemas.booking import Booking
from staybook.schemas.invoice import InvoiceData
from staybook.services.pricing import parse_amount, total_amount, validate_stay

_REFERENCE_ALPHABET = string.ascii_uppercase + string.digits
_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_PAISE = Decimal("0.01")


def generate_reference(prefix: str, length: int = 6) -> str:
    """Random reference such as ``INV-7K2Q9A``."""
    return prefix + "".join(secrets.choice(_REFERENCE_ALPHABET) for _ in range(length))


def format_invoice_date(day: date) -> str:
    """Format as ``"05 Mar 2025"``."""
    return f"{day.day:02d} {_MONTH_ABBR[day.month - 1]} {day.year}"


def format_inr(amount: Decimal | int | float) -> str:
    """Format an amount with Indian digit grouping, e.g. ``12,34,567.5``.

    Paise are shown only when non-zero.
    """
    value = Decimal(str(amount)).quantize(_PAISE, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    rupees, _, paise = f"{abs(value):.2f}".partition(".")

    if len(rupees) > 3:
        head, tail = rupees[:-3], rupees[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        groups.insert(0, head)
        rupees = ",".join(groups) + "," + tail

    paise = paise.rstrip("0")
    return f"{sign}{rupees}.{paise}" if paise else f"{sign}{rupees}"


def build_invoice(
    guest_name: str,
    check_in: date,
    check_out: date,
    price_per_night: Decimal,
    booking_id: str | None = None,
    invoice_date: date | None = None,
) -> InvoiceData:
    """Invoice an ad-hoc stay at a flat nightly price.

    Raises:
        InvalidStayError: If check-out is not after check-in.
    """
    stay_nights = validate_stay(check_in, check_out)
    return InvoiceData(
        invoice_no=generate_reference("INV-"),
        invoice_date=invoice_date or date.today(),
        booking_id=booking_id or generate_reference("BK-"),
        guest_name=guest_name,
        check_in=check_in,
        check_out=check_out,
        nights=stay_nights,
        price_per_night=price_per_night,
        total_amount=total_amount(check_in, check_out, price_per_night),
    )


def invoice_for_booking(booking: Booking, invoice_date: date | None = None) -> InvoiceData:
    """Invoice a stored booking for the amount it was booked at.

    The nightly price is the booking's flat rate when set, otherwise the
    average over the stay.
    """
    stay_nights = validate_stay(booking.check_in, booking.check_out)
    total = parse_amount(booking.payment)
    if booking.rate_per_night is not None:
        price = parse_amount(booking.rate_per_night)
    else:
        price = (total / stay_nights).quantize(_PAISE, rounding=ROUND_HALF_UP)

    return InvoiceData(
        invoice_no=generate_reference("INV-"),
        invoice_date=invoice_date or date.today(),
        booking_id=booking.id,
        guest_name=booking.name,
        check_in=booking.check_in,
        check_out=booking.check_out,
        nights=stay_nights,
        price_per_night=price,
        total_amount=total,
    )


def template_fields(invoice: InvoiceData, check_in_time: str, check_out_time: str) -> dict[str, str]:
    """Flat string values for the invoice document template."""
    return {
        "invoiceNo": invoice.invoice_no,
        "invoiceDate": format_invoice_date(invoice.invoice_date),
        "bookingId": invoice.booking_id,
        "guestName": invoice.guest_name,
        "checkIn": f"{format_invoice_date(invoice.check_in)} at {check_in_time}",
        "checkOut": f"{format_invoice_date(invoice.check_out)} at {check_out_time}",
        "nights": str(invoice.nights),
        "pricePerNight": format_inr(invoice.price_per_night),
        "totalAmount": format_inr(invoice.total_amount),
    }
