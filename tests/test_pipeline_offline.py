import json
import logging

import pytest

from config import settings
from core.http_client import FetchError, HttpError
from parsing.errors import ParseError
from services import pipeline


def _options(tmp_path, **kw) -> pipeline.RunOptions:
    return pipeline.RunOptions(data_dir=str(tmp_path / "data"), **kw)


def _pages(besoccer, tm_standings, fixtures) -> dict:
    return {
        settings.BESOCCER_STANDINGS_URL: besoccer,
        settings.TRANSFERMARKT_STANDINGS_URL: tm_standings,
        settings.TRANSFERMARKT_FIXTURES_URL: fixtures,
    }


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_primary_source_used_when_it_works(
    tmp_path, fake_fetch, besoccer_html, transfermarkt_standings_html, fixtures_html
):
    fake = fake_fetch(_pages(besoccer_html, transfermarkt_standings_html, fixtures_html))
    result = pipeline.run(_options(tmp_path))

    assert result["standingsSource"] == "besoccer"
    assert result["fallbackUsed"] is False
    assert result["standingsRows"] == 3
    assert result["matchdays"] == 2
    assert result["matches"] == 2
    assert settings.TRANSFERMARKT_STANDINGS_URL not in fake.calls

    data_dir = tmp_path / "data"
    standings = _read(data_dir / "standings.json")
    matches = _read(data_dir / "matches.json")
    meta = _read(data_dir / "meta.json")
    assert [r["teamId"] for r in standings["table"]] == ["ce-europa", "atletic-baleares", "cd-teruel"]
    assert [md["matchday"] for md in matches["matchdays"]] == [1, 2]
    assert meta["standingsUrl"] == settings.BESOCCER_STANDINGS_URL
    assert meta["standingsBytes"] == len(besoccer_html.encode("utf-8"))
    # no temp files left behind
    assert sorted(p.name for p in data_dir.iterdir()) == ["matches.json", "meta.json", "standings.json"]


def test_falls_back_on_primary_http_error(
    tmp_path, fake_fetch, transfermarkt_standings_html, fixtures_html, caplog
):
    fake_fetch(_pages(HttpError(403, settings.BESOCCER_STANDINGS_URL), transfermarkt_standings_html, fixtures_html))
    with caplog.at_level(logging.WARNING, logger="services.pipeline"):
        result = pipeline.run(_options(tmp_path))
    assert result["standingsSource"] == "transfermarkt"
    assert result["fallbackUsed"] is True
    assert "HTTP 403" in result["primaryError"]
    assert any("besoccer" in rec.getMessage() for rec in caplog.records)


def test_falls_back_on_primary_parse_error(tmp_path, fake_fetch, transfermarkt_standings_html, fixtures_html):
    fake_fetch(_pages("<html>captcha</html>", transfermarkt_standings_html, fixtures_html))
    result = pipeline.run(_options(tmp_path))
    assert result["standingsSource"] == "transfermarkt"


def test_ci_mode_skips_primary(tmp_path, fake_fetch, besoccer_html, transfermarkt_standings_html, fixtures_html):
    fake = fake_fetch(_pages(besoccer_html, transfermarkt_standings_html, fixtures_html))
    result = pipeline.run(_options(tmp_path, ci=True))
    assert settings.BESOCCER_STANDINGS_URL not in fake.calls
    assert result["standingsSource"] == "transfermarkt"
    assert result["primaryError"] is None


def test_both_standings_sources_failing_is_fatal(tmp_path, fake_fetch, fixtures_html):
    fake_fetch(_pages(FetchError("down", url="x"), "<html></html>", fixtures_html))
    with pytest.raises(pipeline.StandingsUnavailableError) as exc:
        pipeline.run(_options(tmp_path))
    assert isinstance(exc.value.__cause__, ParseError)
    assert not (tmp_path / "data" / "standings.json").exists()


def test_fixtures_failure_is_fatal_and_writes_nothing(tmp_path, fake_fetch, besoccer_html):
    fake_fetch(_pages(besoccer_html, None, "<html><body>no schedule</body></html>"))
    with pytest.raises(ParseError):
        pipeline.run(_options(tmp_path))
    assert not (tmp_path / "data" / "standings.json").exists()
    assert not (tmp_path / "data" / "matches.json").exists()


def test_snapshots_are_fully_overwritten(
    tmp_path, fake_fetch, besoccer_html, transfermarkt_standings_html, fixtures_html
):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "standings.json").write_text('{"stale": true, "padding": "' + "x" * 5000 + '"}', encoding="utf-8")
    fake_fetch(_pages(besoccer_html, transfermarkt_standings_html, fixtures_html))
    pipeline.run(_options(tmp_path))
    assert "stale" not in _read(data_dir / "standings.json")


def test_cache_paths_are_passed_unless_disabled(tmp_path, monkeypatch, besoccer_html, fixtures_html):
    from core import http_client

    seen = []

    def fake(url, *, cache_path=None, no_cache=False, client=None):
        seen.append((url, cache_path, no_cache))
        return besoccer_html if url == settings.BESOCCER_STANDINGS_URL else fixtures_html

    monkeypatch.setattr(http_client, "fetch_text", fake)
    pipeline.run(_options(tmp_path, no_cache=True))
    assert all(nc for _u, _p, nc in seen)
    assert seen[0][1].endswith("besoccer-standings.html")
    assert seen[1][1].endswith("transfermarkt-fixtures.html")

    seen.clear()
    pipeline.run(_options(tmp_path, use_cache=False))
    assert all(p is None for _u, p, _nc in seen)
