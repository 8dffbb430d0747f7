"""Slug and identifier helpers shared by the parsers."""

from __future__ import annotations

import re
import unicodedata
from urllib.parse import urlsplit

_NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9]+")


def slugify(value: str | None) -> str:
    """Lowercase, diacritic-stripped, hyphen-separated identifier.

    >>> slugify("Atlètic Balears")
    'atletic-balears'
    """
    text = unicodedata.normalize("NFKD", str(value or ""))
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = _NON_ALNUM_PATTERN.sub("-", text.lower())
    return text.strip("-")


def path_segments(href: str | None) -> list[str]:
    if not href:
        return []
    path = urlsplit(href).path
    return [seg for seg in path.split("/") if seg]


def slug_from_href(href: str | None, *, fallback: str, segment: str = "last") -> str:
    """Slug of the first or last non-empty path segment, else slug of ``fallback``."""
    parts = path_segments(href)
    if parts:
        picked = parts[-1] if segment == "last" else parts[0]
        slug = slugify(picked)
        if slug:
            return slug
    return slugify(fallback)


def matchday_code(matchday: int) -> str:
    return f"MD{matchday:02d}"
