"""Parsing of the BeSoccer standings page (strict, fixed column layout)."""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup

from config import settings
from domain.models import StandingRow, StandingsSnapshot, utc_now_iso
from utils import html_utils, naming
from .errors import MissingSectionError
from .standings_common import finalize_table

ROW_SELECTOR = "#tab_total0 table.table tr.row-body"

# td.number-box | td.td-shield | td.name | PTS | MP | W | D | L | GF | GA | GD
COL_PTS, COL_MP, COL_W, COL_D, COL_L, COL_GF, COL_GA = range(3, 10)


def _int_at(cells: list, idx: int) -> int:
    return html_utils.first_int(html_utils.cell_text(cells[idx])) if idx < len(cells) else 0


def _parse_row(tr) -> StandingRow:
    tds = tr.find_all("td")
    pos_cell = tr.select_one("td.number-box") or (tds[0] if tds else None)
    pos = html_utils.first_int(html_utils.cell_text(pos_cell))

    team_name = html_utils.cell_text(tr.select_one("td.name .team-name"))
    link = tr.select_one('td.name a[data-cy="team"]')
    href = link.get("href") if link is not None else None
    team_id = naming.slug_from_href(href, fallback=team_name, segment="last")

    gf = _int_at(tds, COL_GF)
    ga = _int_at(tds, COL_GA)
    return StandingRow(
        pos=pos,
        team_id=team_id,
        team_name=team_name,
        pts=_int_at(tds, COL_PTS),
        mp=_int_at(tds, COL_MP),
        w=_int_at(tds, COL_W),
        d=_int_at(tds, COL_D),
        l=_int_at(tds, COL_L),
        gf=gf,
        ga=ga,
        gd=gf - ga,
    )


def parse_standings(html: str, *, group: str = settings.DEFAULT_GROUP) -> StandingsSnapshot:
    """Parse the "Total" tab of a BeSoccer table page.

    Only rows under ``#tab_total0`` are considered; the home/away tabs share the
    same markup and would otherwise be mixed in.
    """
    soup = BeautifulSoup(html, "html.parser")
    rows = soup.select(ROW_SELECTOR)
    if not rows:
        raise MissingSectionError(
            f"No standings rows found: selector {ROW_SELECTOR} returned 0 rows.",
            context={"source": "besoccer", "selector": ROW_SELECTOR},
        )
    parsed: List[StandingRow] = [_parse_row(tr) for tr in rows]
    return StandingsSnapshot(
        updated_at=utc_now_iso(),
        group=group,
        table=finalize_table(parsed, source="besoccer"),
    )
