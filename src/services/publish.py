"""Copy generated snapshots into the web app's static data directory."""

from __future__ import annotations

import logging
import os
import shutil
from typing import List

from core import filesystem

logger = logging.getLogger(__name__)


def sync_data(src_dir: str, dst_dir: str) -> List[str]:
    """Copy every ``*.json`` in ``src_dir`` to ``dst_dir``; returns copied names."""
    if not os.path.isdir(src_dir):
        logger.info("no data directory at %s", src_dir)
        return []
    files = sorted(f for f in os.listdir(src_dir) if f.endswith(".json"))
    if not files:
        logger.info("no JSON files found in %s", src_dir)
        return []
    filesystem.ensure_dir(dst_dir)
    for name in files:
        shutil.copyfile(os.path.join(src_dir, name), os.path.join(dst_dir, name))
        logger.info("copied %s -> %s", name, dst_dir)
    return files
