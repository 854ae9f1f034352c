"""Bookings CRUD API router.

Ids are assigned by the store (``BK0001``, ``BK0002``, ...). Updates replace
the whole booking and recompute ``payment`` and ``total_nights`` from the
rates, the same way creation does.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Path, UploadFile, status

from staybook.api.deps import get_booking_filter, get_booking_store, get_image_store, require_session
from staybook.schemas.analytics import BookingStatsResponse
from staybook.schemas.auth import MessageResponse
from staybook.schemas.booking import Booking, BookingCreate, BookingFilter, BookingListResponse
from staybook.services.analytics import booking_stats
from staybook.storage.images import InvalidImageError, LocalImageStore
from staybook.stores.base import BookingNotFoundError, BookingStore, GuestSlotError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/bookings",
    tags=["bookings"],
    dependencies=[Depends(require_session)],
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _get_booking_or_404(store: BookingStore, booking_id: str) -> Booking:
    """Fetch a booking, raising ``HTTPException 404`` when it does not exist."""
    try:
        return await store.get_booking(booking_id)
    except BookingNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        ) from None


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=Booking,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
)
async def create_booking(
    body: BookingCreate,
    store: BookingStore = Depends(get_booking_store),
) -> Booking:
    """Create a booking.

    When a nightly rate or custom daily rates are supplied the stored
    ``payment`` is computed from them; otherwise the entered payment is kept.
    """
    booking = await store.create_booking(body)
    logger.info("Created booking %s for room %s", booking.id, booking.room_id.value)
    return booking


@router.get(
    "",
    response_model=BookingListResponse,
    summary="List bookings",
)
async def list_bookings(
    booking_filter: BookingFilter = Depends(get_booking_filter),
    store: BookingStore = Depends(get_booking_store),
) -> dict:
    """Return bookings matching the filters, most recently dated first."""
    items = await store.list_bookings(booking_filter)
    return {"items": items, "total": len(items)}


@router.get(
    "/stats",
    response_model=BookingStatsResponse,
    summary="Totals, platform breakdown and recent bookings",
)
async def get_booking_stats(
    store: BookingStore = Depends(get_booking_store),
) -> BookingStatsResponse:
    return booking_stats(await store.list_bookings())


@router.get(
    "/{booking_id}",
    response_model=Booking,
    summary="Get a booking",
)
async def get_booking(
    booking_id: str,
    store: BookingStore = Depends(get_booking_store),
) -> Booking:
    return await _get_booking_or_404(store, booking_id)


@router.put(
    "/{booking_id}",
    response_model=Booking,
    summary="Replace a booking",
)
async def update_booking(
    booking_id: str,
    body: BookingCreate,
    store: BookingStore = Depends(get_booking_store),
) -> Booking:
    """Replace every field of a booking, recomputing its totals."""
    try:
        booking = await store.update_booking(booking_id, body)
    except BookingNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        ) from None
    logger.info("Updated booking %s", booking_id)
    return booking


@router.delete(
    "/{booking_id}",
    response_model=MessageResponse,
    summary="Delete a booking",
)
async def delete_booking(
    booking_id: str,
    store: BookingStore = Depends(get_booking_store),
    images: LocalImageStore = Depends(get_image_store),
) -> dict:
    """Delete a booking, then its uploaded guest ID images once the delete is committed."""
    try:
        await store.delete_booking(booking_id)
    except BookingNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        ) from None
    await store.commit()

    images.delete_booking_images(booking_id)
    logger.info("Deleted booking %s", booking_id)
    return {"message": "Booking deleted successfully"}


def _guest_image(booking: Booking, guest_slot: int) -> str | None:
    if guest_slot == 0:
        return booking.aadhaar_image_url
    return booking.additional_guests[guest_slot - 1].aadhaar_image_url


@router.post(
    "/{booking_id}/guests/{guest_slot}/aadhaar-image",
    response_model=Booking,
    summary="Upload a guest's Aadhaar card image",
)
async def upload_aadhaar_image(
    booking_id: str,
    guest_slot: int = Path(..., ge=0, description="0 = primary guest, n = n-th additional guest"),
    file: UploadFile = File(...),
    store: BookingStore = Depends(get_booking_store),
    images: LocalImageStore = Depends(get_image_store),
) -> Booking:
    """Store the image and make it the guest's authoritative ID.

    The new file is removed again if the booking cannot be updated; the
    guest's previous image is removed only after the update is committed.
    """
    booking = await _get_booking_or_404(store, booking_id)
    if guest_slot > len(booking.additional_guests):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Booking has no guest slot {guest_slot}",
        )
    previous = _guest_image(booking, guest_slot)

    try:
        path = images.upload_image(await file.read(), file.filename or "", booking_id, guest_slot)
    except InvalidImageError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None

    try:
        updated = await store.set_guest_image(booking_id, guest_slot, path)
        await store.commit()
    except GuestSlotError as exc:
        images.remove_image(path)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from None
    except Exception:
        images.remove_image(path)
        raise

    if previous and previous != path:
        images.remove_image(previous)
    return updated
