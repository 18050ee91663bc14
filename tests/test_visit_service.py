"""Tests for visit counting."""

import asyncio

from portfolio_site.services.visits import VisitService, is_bot
from tests.conftest import InMemoryKeyValueStore

BROWSER_UA = "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) Safari/605.1.15"


def test_new_visitor_gets_id_and_is_counted(kv_store: InMemoryKeyValueStore) -> None:
    service = VisitService(kv_store)

    result = asyncio.run(service.record_visit(None, BROWSER_UA))

    assert result.is_new_visitor
    assert result.counted
    assert result.visitor_id
    assert (result.counts.pv, result.counts.uv) == (1, 1)


def test_returning_visitor_increments_pageviews_only(
    kv_store: InMemoryKeyValueStore,
) -> None:
    service = VisitService(kv_store)

    first = asyncio.run(service.record_visit(None, BROWSER_UA))
    second = asyncio.run(service.record_visit(first.visitor_id, BROWSER_UA))

    assert not second.is_new_visitor
    assert second.visitor_id == first.visitor_id
    assert (second.counts.pv, second.counts.uv) == (2, 1)


def test_bots_are_not_counted(kv_store: InMemoryKeyValueStore) -> None:
    service = VisitService(kv_store)

    result = asyncio.run(service.record_visit("visitor", "curl/8.4.0"))

    assert not result.counted
    assert (result.counts.pv, result.counts.uv) == (0, 0)


def test_is_bot_patterns() -> None:
    assert is_bot("Googlebot/2.1")
    assert is_bot("facebookexternalhit/1.1")
    assert is_bot("python-requests/2.31")
    assert is_bot("TelegramBot (like TwitterBot)")
    assert not is_bot(BROWSER_UA)
    assert not is_bot(None)
