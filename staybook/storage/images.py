"""Guest ID (Aadhaar card) image storage on the local filesystem.

Images live under ``<root>/<booking_id>/guest-<slot>-<random><ext>``. Every
upload gets a fresh name, so a replaced image survives until the booking
change that drops it is committed. Images are never served directly:
callers obtain a short-lived signed URL whose token is a JWT naming the
stored path.
"""

from __future__ import annotations

import logging
import secrets
import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path, PurePosixPath

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".pdf"}
_TOKEN_TYPE = "aadhaar-image"


class ImageNotFoundError(LookupError):
    """Raised when a stored image path does not exist."""


class InvalidImageTokenError(ValueError):
    """Raised for expired, tampered or malformed signed-URL tokens."""


class InvalidImageError(ValueError):
    """Raised when an upload is empty, too large or of an unsupported type."""


class LocalImageStore:
    """Filesystem image store with JWT-signed, expiring download URLs.

    Args:
        root: Directory that holds one sub-directory per booking.
        signing_key: Secret used to sign download tokens.
        url_path: Route that serves signed downloads.
        expires_seconds: Lifetime of a signed URL.
        max_bytes: Largest accepted upload.
        algorithm: JWT signing algorithm.
    """

    def __init__(
        self,
        root: Path,
        signing_key: str,
        url_path: str = "/api/v1/aadhaar-images/file",
        expires_seconds: int = 3600,
        max_bytes: int = 5 * 1024 * 1024,
        algorithm: str = "HS256",
    ) -> None:
        self.root = Path(root)
        self.signing_key = signing_key
        self.url_path = url_path
        self.expires_seconds = expires_seconds
        self.max_bytes = max_bytes
        self.algorithm = algorithm

    def _resolve(self, path: str) -> Path:
        candidate = (self.root / PurePosixPath(path)).resolve()
        root = self.root.resolve()
        if root not in candidate.parents:
            raise ImageNotFoundError(path)
        return candidate

    def upload_image(self, content: bytes, filename: str, booking_id: str, guest_slot: int) -> str:
        """Store an ID image and return its path relative to the store root.

        Earlier images of the same guest are left in place; remove them with
        :meth:`remove_image` once the new path is saved.
        """
        extension = Path(filename).suffix.lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise InvalidImageError(f"Unsupported file type '{extension or filename}'")
        if not content:
            raise InvalidImageError("Uploaded file is empty")
        if len(content) > self.max_bytes:
            raise InvalidImageError(f"Uploaded file exceeds {self.max_bytes} bytes")

        directory = self._resolve(booking_id)
        directory.mkdir(parents=True, exist_ok=True)
        relative = f"{booking_id}/guest-{guest_slot}-{secrets.token_hex(4)}{extension}"
        self._resolve(relative).write_bytes(content)
        logger.info("Stored ID image %s", relative)
        return relative

    def get_signed_url(self, path: str) -> str:
        """Signed download URL for a stored image, valid for ``expires_seconds``."""
        if not self._resolve(path).is_file():
            raise ImageNotFoundError(path)

        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "path": path,
                "type": _TOKEN_TYPE,
                "iat": now,
                "exp": now + timedelta(seconds=self.expires_seconds),
            },
            self.signing_key,
            algorithm=self.algorithm,
        )
        return f"{self.url_path}?token={token}"

    def resolve_signed_token(self, token: str) -> Path:
        """File referenced by a signed-URL token.

        Raises:
            InvalidImageTokenError: If the token is invalid or expired.
            ImageNotFoundError: If the image no longer exists.
        """
        try:
            payload = jwt.decode(token, self.signing_key, algorithms=[self.algorithm])
        except JWTError as exc:
            raise InvalidImageTokenError("Invalid or expired image link") from exc

        path = payload.get("path")
        if payload.get("type") != _TOKEN_TYPE or not isinstance(path, str):
            raise InvalidImageTokenError("Invalid image link")

        file_path = self._resolve(path)
        if not file_path.is_file():
            raise ImageNotFoundError(path)
        return file_path

    def remove_image(self, path: str) -> None:
        """Delete one stored image. Missing files and foreign paths are ignored."""
        try:
            file_path = self._resolve(path)
        except ImageNotFoundError:
            logger.warning("Not removing image outside the store: %s", path)
            return
        file_path.unlink(missing_ok=True)

    def delete_booking_images(self, booking_id: str) -> None:
        directory = self._resolve(booking_id)
        if directory.exists():
            shutil.rmtree(directory)
            logger.info("Removed ID images of booking %s", booking_id)
