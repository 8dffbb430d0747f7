"""Parsing of the Transfermarkt full-season fixtures page."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup

from config import settings
from domain.models import Match, Matchday, MatchesSnapshot, Score, utc_now_iso
from utils import html_utils, naming
from .errors import MissingSectionError

HEADLINE_SELECTOR = "div.content-box-headline"
HEADLINE_MARKER = "Matchday"
# mobile-only rows that repeat the kickoff date as a separator
DATE_SEPARATOR_CLASS = "bg_blau_20"

MATCHDAY_RE = re.compile(r"(\d+)\s*\.")
DATE_RE = re.compile(r"(\d{2})/(\d{2})/(\d{2})")
SCORE_RE = re.compile(r"^(\d+)\s*:\s*(\d+)$")
SOURCE_ID_RE = re.compile(r"^\d+$")


def parse_matchday_number(headline: str) -> Optional[int]:
    m = MATCHDAY_RE.search(headline or "")
    return int(m.group(1)) if m else None


def parse_date(text: str) -> Optional[str]:
    """'Fri 29/08/25' -> '2025-08-29'."""
    m = DATE_RE.search(text or "")
    if not m:
        return None
    dd, mm, yy = (int(g) for g in m.groups())
    return f"{2000 + yy:04d}-{mm:02d}-{dd:02d}"


def parse_score(text: str) -> Optional[Score]:
    m = SCORE_RE.match(html_utils.clean_cell(text))
    if not m:
        return None
    return Score(home=int(m.group(1)), away=int(m.group(2)))


def _team_from_cell(td) -> Tuple[str, str]:
    a = td.find("a")
    name = html_utils.cell_text(a)
    href = a.get("href") if a is not None else None
    return naming.slug_from_href(href, fallback=name, segment="first"), name


def build_match_id(
    matchday: int, home_id: str, away_id: str, date: Optional[str], source_id: Optional[str]
) -> str:
    if source_id and SOURCE_ID_RE.match(source_id):
        return f"tm-{source_id}"
    return f"{naming.matchday_code(matchday)}-{home_id}-{away_id}-{date or 'na'}"


def _parse_row(tr, matchday: int) -> Optional[Match]:
    if DATE_SEPARATOR_CLASS in (tr.get("class") or []):
        return None
    home_cell = tr.select_one("td.text-right.hauptlink")
    away_cells = tr.select("td.no-border-links.hauptlink")
    if home_cell is None or not away_cells:
        return None
    home_id, home_name = _team_from_cell(home_cell)
    away_id, away_name = _team_from_cell(away_cells[-1])

    date = parse_date(html_utils.cell_text(tr.select_one("td.hide-for-small")))
    time = html_utils.cell_text(tr.select_one("td.zentriert.hide-for-small")) or None

    result_link = tr.select_one("a.ergebnis-link")
    score = parse_score(html_utils.cell_text(result_link)) if result_link is not None else None
    source_id = result_link.get("id") if result_link is not None else None

    return Match(
        match_id=build_match_id(matchday, home_id, away_id, date, source_id),
        matchday=matchday,
        home_team_id=home_id,
        away_team_id=away_id,
        home_name=home_name,
        away_name=away_name,
        date=date,
        time=time,
        score=score,
    )


def parse_fixtures(
    html: str,
    *,
    season: str = settings.DEFAULT_SEASON,
    group: str = settings.DEFAULT_GROUP,
    competition: str = settings.DEFAULT_COMPETITION,
) -> MatchesSnapshot:
    soup = BeautifulSoup(html, "html.parser")
    headlines = [
        h for h in soup.select(HEADLINE_SELECTOR) if HEADLINE_MARKER in h.get_text()
    ]
    if not headlines:
        raise MissingSectionError(
            f'No matchday headlines found ({HEADLINE_SELECTOR} containing "{HEADLINE_MARKER}").',
            context={"source": "transfermarkt-fixtures"},
        )

    by_number: Dict[int, List[Match]] = {}
    for headline in headlines:
        number = parse_matchday_number(headline.get_text(" ", strip=True))
        if not number:
            continue
        matches = by_number.setdefault(number, [])
        table = headline.find_next_sibling("table")
        if table is None:
            continue
        body = table.find("tbody") or table
        for tr in body.find_all("tr"):
            match = _parse_row(tr, number)
            if match is not None:
                matches.append(match)

    return MatchesSnapshot(
        updated_at=utc_now_iso(),
        season=season,
        group=group,
        competition=competition,
        matchdays=[Matchday(matchday=n, matches=by_number[n]) for n in sorted(by_number)],
    )
