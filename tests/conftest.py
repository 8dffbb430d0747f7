# Shared fixtures: canned HTML pages for the three sources and a stub fetcher
# so no test ever touches the network.

import pytest

from tests import factories


@pytest.fixture
def besoccer_html() -> str:
    return factories.besoccer_page(
        [
            factories.besoccer_row(2, "Atlètic Balears", "atletic-baleares", 40, 20, 12, 4, 4, 28, 17),
            factories.besoccer_row(1, "CE Europa", "ce-europa", 42, 20, 13, 3, 4, 32, 18),
            factories.besoccer_row(3, "CD Teruel", "cd-teruel", 33, 20, 9, 6, 5, 25, 20),
        ],
        home_rows=[factories.besoccer_row(1, "Home Only FC", "home-only", 30, 10, 10, 0, 0, 20, 2)],
    )


@pytest.fixture
def transfermarkt_standings_html() -> str:
    return factories.tm_standings_page(
        [
            factories.tm_standings_row(1, "CE Europa", "ce-europa", 20, 13, 3, 4, 32, 18, 42, verein_id=10),
            factories.tm_standings_row(2, "Atlètic Balears", "atletic-baleares", 20, 12, 4, 4, 28, 17, 40, verein_id=11),
            factories.tm_standings_row(3, "CD Teruel", "cd-teruel", 20, 9, 6, 5, 25, 20, 33, verein_id=12),
        ]
    )


@pytest.fixture
def fixtures_html() -> str:
    return factories.tm_fixtures_page(
        [
            (
                "2. Matchday",
                [
                    factories.tm_fixture_row(
                        "CD Teruel", "cd-teruel", "CE Europa", "ce-europa",
                        date="Sat 06/09/25", time="6:00 PM", result="-:-",
                    ),
                ],
            ),
            (
                "1. Matchday",
                [
                    factories.tm_date_separator("Fri 29/08/25"),
                    factories.tm_fixture_row(
                        "CE Europa", "ce-europa", "Atlètic Balears", "atletic-baleares",
                        result="2:1", result_id="4650794",
                    ),
                ],
            ),
        ]
    )


class FakeFetch:
    """Replacement for core.http_client.fetch_text keyed by URL."""

    def __init__(self, pages: dict):
        self.pages = pages
        self.calls: list[str] = []

    def __call__(self, url, *, cache_path=None, no_cache=False, client=None):
        self.calls.append(url)
        page = self.pages.get(url)
        if isinstance(page, Exception):
            raise page
        if page is None:
            from core.http_client import HttpError

            raise HttpError(404, url)
        return page


@pytest.fixture
def fake_fetch(monkeypatch):
    from core import http_client

    def install(pages: dict) -> FakeFetch:
        fake = FakeFetch(pages)
        monkeypatch.setattr(http_client, "fetch_text", fake)
        return fake

    return install
