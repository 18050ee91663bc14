"""Interfaces for the managed key-value and object stores."""

from typing import Protocol

from portfolio_site.domain.background import StoredObject

ONE_YEAR_SECONDS = 60 * 60 * 24 * 365


class KeyValueStore(Protocol):
    """Redis-style key-value store."""

    async def hgetall(self, key: str) -> dict[str, str] | None:
        """Return all fields of a hash, or None when the key is absent."""

    async def hset(self, key: str, mapping: dict[str, str]) -> None:
        """Set the given fields of a hash."""

    async def incr(self, key: str) -> int:
        """Atomically increment an integer key and return the new value."""

    async def get(self, key: str) -> str | None:
        """Return a scalar value, or None when absent."""

    async def pfadd(self, key: str, *members: str) -> bool:
        """Add members to an approximate distinct-count set."""

    async def pfcount(self, key: str) -> int:
        """Return the approximate distinct count of a set."""


class ObjectStore(Protocol):
    """Public-by-URL blob storage."""

    def put(  # noqa: PLR0913
        self,
        pathname: str,
        data: bytes,
        *,
        content_type: str,
        cache_control_max_age: int,
        overwrite: bool = False,
    ) -> StoredObject:
        """Write an object and return its public URL and pathname."""
