"""Scrape orchestration: standings with one fallback source, fixtures, snapshots.

Runtime switches (CI mode, cache bypass) arrive through ``RunOptions``; this
module never reads the environment.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Tuple

import httpx

from config import settings
from core import filesystem, http_client
from domain.models import RunMeta, StandingsSnapshot, utc_now_iso
from parsing.errors import ParseError
from scraping import fixtures_scraper, standings_scraper
from scraping.standings_scraper import StandingsSource

logger = logging.getLogger(__name__)


class StandingsUnavailableError(RuntimeError):
    """Every standings source failed."""


@dataclass(slots=True)
class RunOptions:
    data_dir: str = settings.DATA_DIR
    # BeSoccer rejects automated clients on CI runners; go straight to the fallback
    ci: bool = False
    no_cache: bool = False
    use_cache: bool = True
    group: str = settings.DEFAULT_GROUP
    season: str = settings.DEFAULT_SEASON
    competition: str = settings.DEFAULT_COMPETITION
    besoccer_url: str = settings.BESOCCER_STANDINGS_URL
    transfermarkt_standings_url: str = settings.TRANSFERMARKT_STANDINGS_URL
    transfermarkt_fixtures_url: str = settings.TRANSFERMARKT_FIXTURES_URL


def standings_sources(options: RunOptions) -> List[StandingsSource]:
    fallback = standings_scraper.transfermarkt(options.transfermarkt_standings_url)
    if options.ci:
        return [fallback]
    return [standings_scraper.besoccer(options.besoccer_url), fallback]


def scrape_standings(
    options: RunOptions, *, client: Optional[httpx.Client] = None
) -> Tuple[StandingsSnapshot, StandingsSource, int, Optional[str]]:
    """Try each source in order; returns (snapshot, source, raw bytes, first error)."""
    first_error: Optional[str] = None
    last_exc: Optional[Exception] = None
    for source in standings_sources(options):
        try:
            snapshot, size = standings_scraper.fetch_and_parse(
                source,
                data_dir=options.data_dir,
                group=options.group,
                use_cache=options.use_cache,
                no_cache=options.no_cache,
                client=client,
            )
        except (http_client.FetchError, ParseError) as e:
            logger.warning("standings source %s failed: %s", source.name, e)
            if first_error is None:
                first_error = f"{source.name}: {e}"
            last_exc = e
            continue
        logger.info("standings from %s: %d rows", source.name, len(snapshot.table))
        return snapshot, source, size, first_error
    raise StandingsUnavailableError(f"all standings sources failed: {last_exc}") from last_exc


def run(options: RunOptions, *, client: Optional[httpx.Client] = None) -> dict:
    """Run one scrape and write standings.json, matches.json and meta.json.

    Nothing is written unless both standings and fixtures were obtained.
    """
    own_client = client is None
    if own_client:
        client = http_client.build_client()
    try:
        standings, source, standings_bytes, primary_error = scrape_standings(options, client=client)
        matches, fixtures_bytes = fixtures_scraper.fetch_and_parse(
            options.transfermarkt_fixtures_url,
            data_dir=options.data_dir,
            season=options.season,
            group=options.group,
            competition=options.competition,
            use_cache=options.use_cache,
            no_cache=options.no_cache,
            client=client,
        )
    finally:
        if own_client:
            client.close()

    match_count = sum(len(md.matches) for md in matches.matchdays)
    logger.info("fixtures: %d matchdays, %d matches", len(matches.matchdays), match_count)

    filesystem.ensure_dir(options.data_dir)
    filesystem.write_json_atomic(
        os.path.join(options.data_dir, settings.STANDINGS_FILENAME), standings.to_dict()
    )
    filesystem.write_json_atomic(
        os.path.join(options.data_dir, settings.MATCHES_FILENAME), matches.to_dict()
    )
    meta = RunMeta(
        updated_at=utc_now_iso(),
        standings_source=source.name,
        standings_url=source.url,
        fixtures_url=options.transfermarkt_fixtures_url,
        standings_rows=len(standings.table),
        matchdays=len(matches.matchdays),
        matches=match_count,
        standings_bytes=standings_bytes,
        fixtures_bytes=fixtures_bytes,
        fallback_used=options.ci or primary_error is not None,
        primary_error=primary_error,
    )
    payload = meta.to_dict()
    filesystem.write_json_atomic(os.path.join(options.data_dir, settings.META_FILENAME), payload)
    return payload
