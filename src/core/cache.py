"""Path-keyed filesystem cache for raw HTML pages."""

from __future__ import annotations

import os
from typing import Optional

from config import settings
from . import filesystem


def debug_path(data_dir: str, name: str) -> str:
    """Cache location of the raw page for source ``name``."""
    return os.path.join(data_dir, settings.DEBUG_DIRNAME, f"{name}.html")


def load(path: str) -> Optional[str]:
    if not os.path.exists(path):
        return None
    return filesystem.read_text(path)


def store(path: str, content: str) -> None:
    filesystem.write_text(path, content)
