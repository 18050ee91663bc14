"""Pageview and unique-visitor counting."""

import re
from dataclasses import dataclass
from uuid import uuid4

from portfolio_site.domain.visits import (
    PAGEVIEW_KEY,
    UNIQUE_VISITORS_KEY,
    VisitCounts,
    VisitResult,
)
from portfolio_site.services.stores import KeyValueStore

VISITOR_COOKIE = "v_id"
VISITOR_COOKIE_MAX_AGE = 60 * 60 * 24 * 365

_BOT_PATTERN = re.compile(
    r"bot|crawl|spider|preview|scan|wget|curl|python-requests|facebookexternalhit"
    r"|twitterbot|linkedinbot|slackbot|discordbot|whatsapp|telegram",
    re.IGNORECASE,
)


def is_bot(user_agent: str | None) -> bool:
    """Very light user-agent check for automated clients."""
    return bool(_BOT_PATTERN.search(user_agent or ""))


@dataclass
class VisitService:
    """Counts visits in the key-value store."""

    kv_store: KeyValueStore

    async def record_visit(
        self, visitor_id: str | None, user_agent: str | None
    ) -> VisitResult:
        """Count one visit unless it comes from a bot, then return readings."""
        is_new_visitor = not visitor_id
        resolved_id = visitor_id or str(uuid4())
        counted = not is_bot(user_agent)
        if counted:
            await self.kv_store.incr(PAGEVIEW_KEY)
            await self.kv_store.pfadd(UNIQUE_VISITORS_KEY, resolved_id)
        return VisitResult(
            counts=await self.counts(),
            visitor_id=resolved_id,
            is_new_visitor=is_new_visitor,
            counted=counted,
        )

    async def counts(self) -> VisitCounts:
        """Return the current pageview and unique-visitor readings."""
        raw_pv = await self.kv_store.get(PAGEVIEW_KEY)
        uv = await self.kv_store.pfcount(UNIQUE_VISITORS_KEY)
        return VisitCounts(pv=int(raw_pv or 0), uv=uv)
