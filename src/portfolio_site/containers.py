"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from portfolio_site.adapters.kv_rest_client import HttpxKeyValueClient
from portfolio_site.adapters.supabase_object_store import SupabaseObjectStore
from portfolio_site.config import Settings
from portfolio_site.services.background import BackgroundService
from portfolio_site.services.video_chunks import VideoChunkService
from portfolio_site.services.visits import VisitService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    background_service: BackgroundService
    video_chunk_service: VideoChunkService
    visit_service: VisitService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    object_store = SupabaseObjectStore(
        client=supabase_client, bucket=resolved_settings.storage_bucket
    )
    kv_client = HttpxKeyValueClient.create(
        base_url=resolved_settings.kv_rest_api_url,
        token=resolved_settings.kv_rest_api_token,
    )
    background_service = BackgroundService(
        object_store=object_store,
        kv_store=kv_client,
        max_width=resolved_settings.current_max_width,
    )
    video_chunk_service = VideoChunkService(
        object_store=object_store,
        max_bytes=resolved_settings.video_chunk_max_bytes,
    )
    visit_service = VisitService(kv_client)

    async def close_resources() -> None:
        await kv_client.close()

    return AppContainer(
        settings=resolved_settings,
        background_service=background_service,
        video_chunk_service=video_chunk_service,
        visit_service=visit_service,
        close_resources=close_resources,
    )
