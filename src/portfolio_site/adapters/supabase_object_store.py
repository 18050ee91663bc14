"""Supabase Storage-backed object store."""

from dataclasses import dataclass

from supabase import Client

from portfolio_site.domain.background import StoredObject
from portfolio_site.services.stores import ObjectStore


@dataclass
class SupabaseObjectStore(ObjectStore):
    """Supabase implementation for public-by-URL object storage."""

    client: Client
    bucket: str

    def put(  # noqa: PLR0913
        self,
        pathname: str,
        data: bytes,
        *,
        content_type: str,
        cache_control_max_age: int,
        overwrite: bool = False,
    ) -> StoredObject:
        """Upload an object and return its public URL."""
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(
            pathname,
            data,
            file_options={
                "content-type": content_type,
                "cache-control": str(cache_control_max_age),
                "upsert": "true" if overwrite else "false",
            },
        )
        url = bucket.get_public_url(pathname)
        return StoredObject(url=url.rstrip("?"), pathname=pathname)
