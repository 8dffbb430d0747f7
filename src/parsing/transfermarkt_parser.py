"""Parsing of the Transfermarkt league table (loose, heuristic layout).

Transfermarkt varies its table markup between page versions, so instead of
fixed indices the ``gf:ga`` goals cell is used as an anchor:

    pos | crest | team | mp | w | d | l | gf:ga | gd | pts

mp/w/d/l are the four cells before the anchor and points sit two cells after
it (falling back to the last cell when the row is shorter).
"""

from __future__ import annotations

import re
from typing import List, Optional

from bs4 import BeautifulSoup

from config import settings
from domain.models import StandingRow, StandingsSnapshot, utc_now_iso
from utils import html_utils, naming
from .errors import MissingSectionError
from .standings_common import finalize_table

MIN_CELLS = 8
GOALS_RE = re.compile(r"^(\d+)\s*:\s*(\d+)$")
TEAM_LINK_SELECTORS = ('a[href*="/startseite/verein/"]', 'a[href*="/verein/"]')


def _body_rows(table) -> list:
    body = table.find("tbody")
    return (body or table).find_all("tr")


def _wide_rows(table) -> list:
    return [tr for tr in _body_rows(table) if len(tr.find_all("td")) >= MIN_CELLS]


def pick_standings_table(soup: BeautifulSoup):
    """Return the ``table.items`` table, else the table with the most wide rows."""
    preferred = soup.select("table.items, table[class*='items']")
    if preferred:
        return preferred[0]
    best = None
    best_rows = 0
    for table in soup.find_all("table"):
        count = len(_wide_rows(table))
        if count > best_rows:
            best, best_rows = table, count
    return best


def _team_link(tr):
    for selector in TEAM_LINK_SELECTORS:
        links = tr.select(selector)
        if not links:
            continue
        # the crest link comes first and carries no text
        for a in links:
            if html_utils.cell_text(a):
                return a
        return links[0]
    return None


def _parse_row(tr) -> Optional[StandingRow]:
    tds = tr.find_all("td")
    if len(tds) < MIN_CELLS:
        return None
    texts = [html_utils.cell_text(td) for td in tds]

    pos = html_utils.first_int(texts[0])
    if not pos:
        return None

    link = _team_link(tr)
    team_name = (html_utils.cell_text(link) if link is not None else "") or texts[2] or texts[1]
    if not team_name:
        return None
    href = link.get("href") if link is not None else None
    team_id = naming.slug_from_href(href, fallback=team_name, segment="first")

    anchor = next((i for i, t in enumerate(texts) if GOALS_RE.match(t)), None)
    if anchor is None or anchor < 4:
        return None
    goals = GOALS_RE.match(texts[anchor])
    gf, ga = int(goals.group(1)), int(goals.group(2))

    pts_text = texts[anchor + 2] if anchor + 2 < len(texts) else texts[-1]
    return StandingRow(
        pos=pos,
        team_id=team_id,
        team_name=team_name,
        pts=html_utils.first_int(pts_text),
        mp=html_utils.first_int(texts[anchor - 4]),
        w=html_utils.first_int(texts[anchor - 3]),
        d=html_utils.first_int(texts[anchor - 2]),
        l=html_utils.first_int(texts[anchor - 1]),
        gf=gf,
        ga=ga,
        gd=gf - ga,
    )


def parse_standings(html: str, *, group: str = settings.DEFAULT_GROUP) -> StandingsSnapshot:
    soup = BeautifulSoup(html, "html.parser")
    table = pick_standings_table(soup)
    if table is None:
        raise MissingSectionError(
            "Could not locate standings table in Transfermarkt HTML.",
            context={"source": "transfermarkt"},
        )
    parsed: List[StandingRow] = []
    for tr in _body_rows(table):
        row = _parse_row(tr)
        if row is not None:
            parsed.append(row)
    return StandingsSnapshot(
        updated_at=utc_now_iso(),
        group=group,
        table=finalize_table(parsed, source="transfermarkt"),
    )
