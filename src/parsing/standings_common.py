"""Row filtering shared by both standings parsers."""

from __future__ import annotations

import logging
from typing import Iterable, List

from domain.models import StandingRow
from .errors import EmptyTableError

logger = logging.getLogger(__name__)


def finalize_table(rows: Iterable[StandingRow], *, source: str) -> List[StandingRow]:
    """Drop header/footer noise, de-duplicate teams and order by position.

    Raises EmptyTableError when nothing usable is left.
    """
    kept: List[StandingRow] = []
    seen: set[str] = set()
    for row in rows:
        if not row.team_name or not row.team_id or row.mp <= 0:
            continue
        if row.team_id in seen:
            logger.debug("%s: duplicate team %s ignored", source, row.team_id)
            continue
        seen.add(row.team_id)
        row.gd = row.gf - row.ga
        kept.append(row)
    if not kept:
        raise EmptyTableError(
            f"{source}: standings table yielded no usable rows",
            context={"source": source},
        )
    # stable: equal positions keep DOM order
    kept.sort(key=lambda r: r.pos)
    return kept
