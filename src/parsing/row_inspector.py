"""Debug helper: dump table rows mentioning given texts.

Used when a fixture is mis-parsed to see which cells and result link the page
actually carries for it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from bs4 import BeautifulSoup

from utils import html_utils


@dataclass(slots=True)
class RowDump:
    index: int
    classes: List[str] = field(default_factory=list)
    cells: List[str] = field(default_factory=list)
    result_text: Optional[str] = None
    result_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "classes": self.classes,
            "cells": self.cells,
            "resultText": self.result_text,
            "resultId": self.result_id,
        }


def find_rows(html: str, *needles: str, limit: int | None = None) -> List[RowDump]:
    """Rows whose normalized text contains every needle (all rows when none given)."""
    soup = BeautifulSoup(html, "html.parser")
    hits: List[RowDump] = []
    for idx, tr in enumerate(soup.find_all("tr")):
        text = html_utils.cell_text(tr)
        if not all(n in text for n in needles):
            continue
        link = tr.select_one("a.ergebnis-link")
        hits.append(
            RowDump(
                index=idx,
                classes=list(tr.get("class") or []),
                cells=[html_utils.cell_text(td) for td in tr.find_all("td")],
                result_text=(html_utils.cell_text(link) or None) if link is not None else None,
                result_id=link.get("id") if link is not None else None,
            )
        )
        if limit is not None and len(hits) >= limit:
            break
    return hits
