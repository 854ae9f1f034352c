"""Guest ID image API router.

Signed links are issued to logged-in operators. The download route itself
is authorised by the link's token, so it can be opened directly in a browser
tab or ``<img>`` tag.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import FileResponse

from staybook.api.deps import get_image_store, require_session
from staybook.schemas.image import SignedUrlResponse
from staybook.storage.images import ImageNotFoundError, InvalidImageTokenError, LocalImageStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/aadhaar-images", tags=["aadhaar-images"])


@router.get(
    "/signed-url",
    response_model=SignedUrlResponse,
    dependencies=[Depends(require_session)],
)
async def get_signed_url(
    path: str = Query(..., min_length=1, description="Stored image path, e.g. BK0001/guest-0-1a2b3c4d.jpg"),
    images: LocalImageStore = Depends(get_image_store),
) -> SignedUrlResponse:
    try:
        url = images.get_signed_url(path)
    except ImageNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Image not found",
        ) from None
    return SignedUrlResponse(signed_url=url, expires_in=images.expires_seconds)


@router.get("/file", response_class=FileResponse)
async def download_image(
    token: str = Query(..., min_length=1),
    images: LocalImageStore = Depends(get_image_store),
) -> FileResponse:
    """Serve the image named by a signed-URL token."""
    try:
        file_path = images.resolve_signed_token(token)
    except InvalidImageTokenError as exc:
        logger.warning("Rejected image link: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from None
    except ImageNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Image not found",
        ) from None
    return FileResponse(file_path)
