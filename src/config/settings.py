"""Global configuration and constants for the standings scraping pipeline."""

from __future__ import annotations

import os
from typing import Final

BESOCCER_STANDINGS_URL: Final = (
    "https://www.besoccer.com/competition/table/primera_division_rfef/2026/group2"
)
TRANSFERMARKT_STANDINGS_URL: Final = (
    "https://www.transfermarkt.com/primera-federacion-grupo-ii/tabelle/wettbewerb/E3G2/saison_id/2025"
)
TRANSFERMARKT_FIXTURES_URL: Final = (
    "https://www.transfermarkt.com/primera-federacion-grupo-ii/gesamtspielplan/wettbewerb/E3G2/saison_id/2025"
)

DEFAULT_USER_AGENT: Final = (
    "Mozilla/5.0 (X11; Linux x86_64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_HEADERS: Final = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "ca-ES,ca;q=0.9,es-ES;q=0.8,es;q=0.7,en;q=0.6",
    "Referer": "https://www.transfermarkt.com/",
    "Connection": "keep-alive",
}

DATA_DIR: Final = os.environ.get("RFEF_DATA_DIR", "data")
DEBUG_DIRNAME: Final = "_debug"
WEB_DATA_DIR: Final = os.path.join("apps", "web", "public", "data")

STANDINGS_FILENAME: Final = "standings.json"
MATCHES_FILENAME: Final = "matches.json"
META_FILENAME: Final = "meta.json"
PREDICTIONS_FILENAME: Final = "predictions.json"

# Fixed key the prediction map lives under inside the predictions file
STORAGE_KEY: Final = "rfef-grup2:predictions:v1"

DEFAULT_GROUP: Final = "1RFEF 2025-2026 · Grup 2"
DEFAULT_SEASON: Final = "2025-2026"
DEFAULT_COMPETITION: Final = "Primera Federación - Grupo II"
