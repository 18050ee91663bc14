"""Storage of continuous-recording video chunks."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from portfolio_site.domain.background import StoredObject
from portfolio_site.services.errors import PayloadTooLargeError, UploadRejectedError
from portfolio_site.services.stores import ONE_YEAR_SECONDS, ObjectStore

_logger = logging.getLogger(__name__)

DEFAULT_MAX_CHUNK_BYTES = 15 * 1024 * 1024

_SESSION_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,64}")
_INDEX_PATTERN = re.compile(r"[0-9]{1,9}")
_EXTENSIONS = {
    "video/mp4": "mp4",
    "video/quicktime": "mov",
    "video/x-matroska": "mkv",
    "video/webm": "webm",
}


def extension_for_media_type(media_type: str | None) -> str:
    """Return the file extension for a declared media type, ignoring codecs."""
    base = (media_type or "").split(";", maxsplit=1)[0].strip().lower()
    return _EXTENSIONS.get(base, "webm")


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class VideoChunkService:
    """Stores sequential video segments of a recording session."""

    object_store: ObjectStore
    max_bytes: int = DEFAULT_MAX_CHUNK_BYTES
    clock: Callable[[], datetime] = field(default=_utc_now)

    def store_chunk(
        self,
        data: bytes | None,
        session: str | None,
        index: str | None,
        media_type: str | None,
    ) -> StoredObject:
        """Validate and store one chunk at a path keyed by session and index.

        Replaying the same session and index overwrites the earlier object.
        """
        if data is None:
            raise UploadRejectedError("missing file")
        if not session or not index:
            raise UploadRejectedError("missing session/idx")
        if not _SESSION_PATTERN.fullmatch(session):
            raise UploadRejectedError("invalid session")
        if not _INDEX_PATTERN.fullmatch(index):
            raise UploadRejectedError("invalid idx")
        if len(data) > self.max_bytes:
            raise PayloadTooLargeError("chunk too large")

        resolved_type = (media_type or "video/webm").split(";", maxsplit=1)[0].strip()
        extension = extension_for_media_type(resolved_type)
        pathname = (
            f"backups/videos/{self.clock():%Y/%m/%d}/{session}/{int(index)}.{extension}"
        )
        stored = self.object_store.put(
            pathname,
            data,
            content_type=resolved_type or "video/webm",
            cache_control_max_age=ONE_YEAR_SECONDS,
            overwrite=True,
        )
        _logger.info("Video chunk stored: session=%s idx=%s", session, index)
        return stored
