# services/storage.py
import logging
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from jose import JWTError, jwt

from app.core.config import settings
from app.core.exceptions import NotFoundError, UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)

PHOTO_BUCKET = "journal-photos"
VIDEO_BUCKET = "journal-videos"
BUCKETS = {PHOTO_BUCKET, VIDEO_BUCKET}

_safe_re = re.compile(r"[^A-Za-z0-9_.-]")


def _sanitize(name: str) -> str:
    return _safe_re.sub("_", str(name))


def object_path(user_id, entry_date, timestamp: int, ext: str, index: Optional[int] = None) -> str:
    """`{user}/{date}_{timestamp}_{index}.{ext}`; videos have no index."""
    stem = f"{entry_date}_{timestamp}" if index is None else f"{entry_date}_{timestamp}_{index}"
    return f"{_sanitize(user_id)}/{_sanitize(stem)}.{_sanitize(ext.lstrip('.').lower() or 'bin')}"


class BlobStore:
    """Bucketed file store under MEDIA_ROOT with time-limited signed URLs."""

    def _root(self) -> Path:
        return Path(settings.MEDIA_ROOT).resolve()

    def _resolve(self, bucket: str, path: str) -> Path:
        if bucket not in BUCKETS:
            raise NotFoundError(f"Unknown bucket '{bucket}'")
        bucket_dir = (self._root() / bucket).resolve()
        target = (bucket_dir / path).resolve()
        if bucket_dir not in target.parents:
            raise ValidationError("Invalid object path")
        return target

    # =====================================================================
    # OBJECTS
    # =====================================================================

    def upload(self, bucket: str, path: str, data: bytes) -> str:
        """Write (or overwrite) an object and return its path within the bucket."""
        target = self._resolve(bucket, path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "wb") as f:
            f.write(data)
        logger.info(f"Stored {len(data)} bytes at {bucket}/{path}")
        return path

    def open_path(self, bucket: str, path: str) -> Path:
        target = self._resolve(bucket, path)
        if not target.is_file():
            raise NotFoundError("File not found")
        return target

    def remove(self, bucket: str, path: str) -> bool:
        target = self._resolve(bucket, path)
        if not target.is_file():
            return False
        target.unlink()
        return True

    # =====================================================================
    # SIGNED URLS
    # =====================================================================

    def sign(self, bucket: str, path: str, ttl: Optional[int] = None, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        expire = now + timedelta(seconds=ttl or settings.SIGNED_URL_TTL_SECONDS)
        return jwt.encode(
            {"bucket": bucket, "path": path, "exp": expire},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )

    def signed_url(self, bucket: str, path: str, ttl: Optional[int] = None, now: Optional[datetime] = None) -> str:
        token = self.sign(bucket, path, ttl=ttl, now=now)
        return f"/media/{bucket}/{quote(path)}?token={token}"

    def verify(self, bucket: str, path: str, token: str) -> None:
        """
        Raises:
            UnauthorizedError: expired, tampered, or issued for another object
        """
        try:
            claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        except JWTError as exc:
            raise UnauthorizedError("Invalid or expired media link") from exc

        if claims.get("bucket") != bucket or claims.get("path") != path:
            raise UnauthorizedError("Media link does not match this file")


blob_store = BlobStore()
