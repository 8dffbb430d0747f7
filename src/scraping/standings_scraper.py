"""Standings sources: fetch a page and run the matching parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import httpx

from config import settings
from core import cache, http_client
from domain.models import StandingsSnapshot
from parsing import besoccer_parser, transfermarkt_parser


@dataclass(frozen=True, slots=True)
class StandingsSource:
    name: str
    url: str
    parse: Callable[..., StandingsSnapshot]
    cache_name: str


def besoccer(url: str = settings.BESOCCER_STANDINGS_URL) -> StandingsSource:
    return StandingsSource("besoccer", url, besoccer_parser.parse_standings, "besoccer-standings")


def transfermarkt(url: str = settings.TRANSFERMARKT_STANDINGS_URL) -> StandingsSource:
    return StandingsSource(
        "transfermarkt", url, transfermarkt_parser.parse_standings, "transfermarkt-standings"
    )


def fetch_and_parse(
    source: StandingsSource,
    *,
    data_dir: str,
    group: str = settings.DEFAULT_GROUP,
    use_cache: bool = True,
    no_cache: bool = False,
    client: Optional[httpx.Client] = None,
) -> Tuple[StandingsSnapshot, int]:
    """Return the parsed snapshot and the size in bytes of the raw page."""
    cache_path = cache.debug_path(data_dir, source.cache_name) if use_cache else None
    html = http_client.fetch_text(source.url, cache_path=cache_path, no_cache=no_cache, client=client)
    return source.parse(html, group=group), len(html.encode("utf-8"))
