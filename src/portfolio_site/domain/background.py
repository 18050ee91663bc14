"""Domain models for the site background."""

from dataclasses import dataclass

BACKGROUND_POINTER_KEY = "bg:current"


@dataclass(frozen=True)
class StoredObject:
    """An object written to the object store."""

    url: str
    pathname: str


@dataclass(frozen=True)
class BackgroundPointer:
    """The key-value record naming the current background image."""

    url: str
    version: int
    updated_at: int

    def to_hash(self) -> dict[str, str]:
        return {
            "url": self.url,
            "version": str(self.version),
            "updatedAt": str(self.updated_at),
        }

    @classmethod
    def from_hash(cls, data: dict[str, str] | None) -> "BackgroundPointer | None":
        """Parse a stored hash; a record without a URL counts as absent."""
        if not data or not data.get("url"):
            return None
        version = _parse_int(data.get("version"))
        updated_at = _parse_int(data.get("updatedAt")) or version
        return cls(url=data["url"], version=version, updated_at=updated_at)


def _parse_int(raw: object) -> int:
    try:
        return int(str(raw))
    except (TypeError, ValueError):
        return 0
