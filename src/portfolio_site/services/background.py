"""Background image publishing and resolution."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from portfolio_site.domain.background import (
    BACKGROUND_POINTER_KEY,
    BackgroundPointer,
)
from portfolio_site.services.errors import UploadRejectedError
from portfolio_site.services.images import process_upload
from portfolio_site.services.stores import (
    ONE_YEAR_SECONDS,
    KeyValueStore,
    ObjectStore,
)

_logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class BackgroundService:
    """Publishes uploaded photos as the site background."""

    object_store: ObjectStore
    kv_store: KeyValueStore
    max_width: int = 1920
    clock_ms: Callable[[], int] = field(default=_now_ms)

    async def publish_upload(
        self, data: bytes | None, content_type: str | None
    ) -> BackgroundPointer:
        """Process an uploaded image, store both variants and move the pointer.

        The pointer is written last, so readers never see a URL for an object
        that has not been stored yet.
        """
        if data is None:
            raise UploadRejectedError("Missing file")
        if not (content_type or "").startswith("image/"):
            raise UploadRejectedError("Only images are allowed")

        processed = process_upload(data, self.max_width)
        previous = await self.current()
        version = self.clock_ms()
        if previous is not None and version <= previous.version:
            version = previous.version + 1

        current = self.object_store.put(
            f"bg/current/{version}.jpg",
            processed.current,
            content_type="image/jpeg",
            cache_control_max_age=ONE_YEAR_SECONDS,
        )
        self.object_store.put(
            _backup_path(datetime.fromtimestamp(version / 1000, tz=UTC)),
            processed.backup,
            content_type="image/jpeg",
            cache_control_max_age=ONE_YEAR_SECONDS,
        )

        pointer = BackgroundPointer(
            url=current.url, version=version, updated_at=version
        )
        await self.kv_store.hset(BACKGROUND_POINTER_KEY, pointer.to_hash())
        _logger.info(
            "Background published: version=%s size=%sx%s",
            version,
            processed.width,
            processed.height,
        )
        return pointer

    async def current(self) -> BackgroundPointer | None:
        """Return the current background pointer, if one was ever published."""
        data = await self.kv_store.hgetall(BACKGROUND_POINTER_KEY)
        return BackgroundPointer.from_hash(data)


def _backup_path(moment: datetime) -> str:
    return f"backups/{moment:%Y/%m/%d}/{uuid4()}.jpg"
