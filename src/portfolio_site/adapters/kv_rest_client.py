"""Redis REST client for the managed key-value store."""

from dataclasses import dataclass

import httpx

from portfolio_site.services.stores import KeyValueStore


class KeyValueError(RuntimeError):
    """Raised when the REST endpoint reports a command error."""


@dataclass
class HttpxKeyValueClient(KeyValueStore):
    """Key-value client speaking the Redis-over-REST protocol with httpx."""

    base_url: str
    token: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, token: str) -> "HttpxKeyValueClient":
        """Create a key-value client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"), token=token, http_client=httpx.AsyncClient()
        )

    async def command(self, *args: str) -> object:
        """Run one Redis command and return its result."""
        response = await self.http_client.post(
            self.base_url,
            json=list(args),
            headers={"Authorization": f"Bearer {self.token}"},
            timeout=10,
        )
        if response.is_error:
            raise KeyValueError(_error_message(response))
        payload = response.json()
        if payload.get("error"):
            raise KeyValueError(str(payload["error"]))
        return payload.get("result")

    async def hgetall(self, key: str) -> dict[str, str] | None:
        """Return a hash as a dict; the REST reply is a flat field/value list."""
        result = await self.command("HGETALL", key)
        if not result:
            return None
        if isinstance(result, dict):
            return {str(field): str(value) for field, value in result.items()}
        items = [str(item) for item in result]
        return dict(zip(items[::2], items[1::2], strict=True))

    async def hset(self, key: str, mapping: dict[str, str]) -> None:
        """Set hash fields."""
        args = ["HSET", key]
        for field, value in mapping.items():
            args.extend([field, value])
        await self.command(*args)

    async def incr(self, key: str) -> int:
        """Increment a counter."""
        return int(await self.command("INCR", key))

    async def get(self, key: str) -> str | None:
        """Return a scalar value."""
        result = await self.command("GET", key)
        return None if result is None else str(result)

    async def pfadd(self, key: str, *members: str) -> bool:
        """Add members to a HyperLogLog."""
        return bool(await self.command("PFADD", key, *members))

    async def pfcount(self, key: str) -> int:
        """Return the HyperLogLog cardinality estimate."""
        return int(await self.command("PFCOUNT", key) or 0)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return f"Key-value request failed with status {response.status_code}"
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return f"Key-value request failed with status {response.status_code}"
