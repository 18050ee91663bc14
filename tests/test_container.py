"""Tests for container wiring."""

import asyncio

from portfolio_site.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.background_service is not None
    assert container.video_chunk_service.max_bytes == settings.video_chunk_max_bytes
    assert container.background_service.max_width == 1920
    asyncio.run(container.close_resources())
