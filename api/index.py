"""Vercel function serving every route of the portfolio site."""

from __future__ import annotations

import sys
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from portfolio_site.api.app import create_app  # noqa: E402
from portfolio_site.containers import build_container  # noqa: E402

container = build_container()
app = create_app(container)
