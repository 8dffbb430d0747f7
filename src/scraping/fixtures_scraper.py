"""Fixtures source (Transfermarkt full schedule)."""

from __future__ import annotations

from typing import Optional, Tuple

import httpx

from config import settings
from core import cache, http_client
from domain.models import MatchesSnapshot
from parsing import fixtures_parser

CACHE_NAME = "transfermarkt-fixtures"


def fetch_and_parse(
    url: str = settings.TRANSFERMARKT_FIXTURES_URL,
    *,
    data_dir: str,
    season: str = settings.DEFAULT_SEASON,
    group: str = settings.DEFAULT_GROUP,
    competition: str = settings.DEFAULT_COMPETITION,
    use_cache: bool = True,
    no_cache: bool = False,
    client: Optional[httpx.Client] = None,
) -> Tuple[MatchesSnapshot, int]:
    cache_path = cache.debug_path(data_dir, CACHE_NAME) if use_cache else None
    html = http_client.fetch_text(url, cache_path=cache_path, no_cache=no_cache, client=client)
    snapshot = fixtures_parser.parse_fixtures(
        html, season=season, group=group, competition=competition
    )
    return snapshot, len(html.encode("utf-8"))
