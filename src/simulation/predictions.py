"""Prediction persistence (local stand-in for browser storage).

The prediction map lives under ``settings.STORAGE_KEY`` inside a small JSON
file. A missing or corrupt file means "no predictions"; corrupt files are
moved aside with a ``.corrupt.<timestamp>`` suffix. Predictions never enter the
scraped snapshots.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Dict, Optional

from config import settings
from core import filesystem
from domain.models import Prediction

logger = logging.getLogger(__name__)

__all__ = ["StorageError", "PredictionStore"]


class StorageError(RuntimeError):
    """Reading or writing the prediction file failed."""


def _decode(raw: object) -> Dict[str, Prediction]:
    if not isinstance(raw, dict):
        raise StorageError("predictions file is not a JSON object")
    entries = raw.get(settings.STORAGE_KEY, {})
    if not isinstance(entries, dict):
        raise StorageError(f"{settings.STORAGE_KEY} is not a JSON object")
    out: Dict[str, Prediction] = {}
    for match_id, value in entries.items():
        if isinstance(value, dict):
            out[str(match_id)] = Prediction.from_dict(value)
    return out


class PredictionStore:
    def __init__(self, path: str):
        self.path = path
        self._items: Dict[str, Prediction] = {}
        self._loaded = False

    # Persistence ------------------------------------------------------
    def _read(self) -> Dict[str, Prediction]:
        try:
            raw = json.loads(filesystem.read_text(self.path))
        except ValueError as e:
            raise StorageError(f"cannot decode {self.path}: {e}") from e
        return _decode(raw)

    def _backup_corrupt(self) -> None:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        try:
            os.replace(self.path, f"{self.path}.corrupt.{stamp}")
        except OSError as e:  # pragma: no cover
            logger.warning("could not move corrupt predictions file aside: %s", e)

    def load(self) -> Dict[str, Prediction]:
        self._loaded = True
        if not os.path.exists(self.path):
            self._items = {}
            return dict(self._items)
        try:
            self._items = self._read()
        except OSError as e:
            logger.warning("cannot read stored predictions: %s", e)
            self._items = {}
        except StorageError as e:
            logger.warning("ignoring stored predictions: %s", e)
            self._backup_corrupt()
            self._items = {}
        return dict(self._items)

    def save(self) -> None:
        payload = {
            settings.STORAGE_KEY: {mid: p.to_dict() for mid, p in sorted(self._items.items())}
        }
        try:
            filesystem.write_json_atomic(self.path, payload)
        except OSError as e:
            raise StorageError(f"cannot write {self.path}: {e}") from e

    def _persist(self) -> bool:
        try:
            self.save()
        except StorageError as e:
            logger.warning("%s", e)
            return False
        return True

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    # Access -----------------------------------------------------------
    def all(self) -> Dict[str, Prediction]:
        self._ensure_loaded()
        return dict(self._items)

    def get(self, match_id: str) -> Optional[Prediction]:
        self._ensure_loaded()
        return self._items.get(match_id)

    def set(self, match_id: str, home: str, away: str) -> bool:
        """Store a prediction as typed; returns False when it could not be persisted."""
        self._ensure_loaded()
        self._items[match_id] = Prediction(home=str(home).strip(), away=str(away).strip())
        return self._persist()

    def remove(self, match_id: str) -> bool:
        self._ensure_loaded()
        if self._items.pop(match_id, None) is None:
            return True
        return self._persist()

    def clear(self) -> bool:
        self._items = {}
        self._loaded = True
        return self._persist()
