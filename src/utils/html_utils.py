"""Text helpers for scraped table cells."""

from __future__ import annotations

import re

NBSP_RE = re.compile(r"[\u00a0\u202f]")
WS_RE = re.compile(r"\s+")
INT_RE = re.compile(r"-?\d+")


def clean_cell(text: str | None) -> str:
    text = NBSP_RE.sub(" ", text or "")
    return WS_RE.sub(" ", text).strip()


def cell_text(node) -> str:
    """Normalized text of a bs4 node; empty string for ``None``."""
    return clean_cell(node.get_text(" ", strip=True)) if node is not None else ""


def first_int(text: str | None, default: int = 0) -> int:
    """First integer appearing in ``text`` (robust to '1.', '#1', '+6')."""
    m = INT_RE.search(clean_cell(text))
    return int(m.group(0)) if m else default
