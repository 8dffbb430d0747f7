"""HTTP fetching with an optional on-disk HTML cache."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from config import settings
from . import cache

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Transport level failure while fetching a page."""

    def __init__(self, message: str, *, url: str):
        super().__init__(message)
        self.url = url


class HttpError(FetchError):
    """Non-2xx response."""

    def __init__(self, status: int, url: str):
        super().__init__(f"HTTP {status} fetching {url}", url=url)
        self.status = status


def build_client() -> httpx.Client:
    # No timeout: a hung request hangs the run until the transport gives up
    return httpx.Client(headers=settings.DEFAULT_HEADERS, follow_redirects=True, timeout=None)


def fetch_text(
    url: str,
    *,
    cache_path: Optional[str] = None,
    no_cache: bool = False,
    client: Optional[httpx.Client] = None,
) -> str:
    if cache_path and not no_cache:
        cached = cache.load(cache_path)
        if cached is not None:
            logger.debug("cache hit for %s (%s)", url, cache_path)
            return cached

    close_client = False
    if client is None:
        client = build_client()
        close_client = True
    try:
        try:
            resp = client.get(url, headers=settings.DEFAULT_HEADERS)
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch {url}: {e}", url=url) from e
        if not resp.is_success:
            raise HttpError(resp.status_code, url)
        text = resp.text
    finally:
        if close_client:
            client.close()

    logger.info("fetched %s (%d bytes)", url, len(text.encode("utf-8")))
    if cache_path:
        cache.store(cache_path, text)
    return text
