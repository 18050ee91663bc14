"""Domain models for visit counting."""

from dataclasses import dataclass

PAGEVIEW_KEY = "stats:pv"
UNIQUE_VISITORS_KEY = "stats:uv"


@dataclass(frozen=True)
class VisitCounts:
    """Pageview total and approximate unique visitors."""

    pv: int
    uv: int


@dataclass(frozen=True)
class VisitResult:
    """Outcome of recording one visit."""

    counts: VisitCounts
    visitor_id: str
    is_new_visitor: bool
    counted: bool
