"""Filesystem utility helpers."""

from __future__ import annotations

import json
import os
import tempfile
from typing import Any


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def write_text(path: str, content: str, encoding: str = "utf-8") -> None:
    dir_part = os.path.dirname(path)
    if dir_part:
        ensure_dir(dir_part)
    with open(path, "w", encoding=encoding, newline="") as fh:
        fh.write(content)


def read_text(path: str, encoding: str = "utf-8") -> str:
    with open(path, "r", encoding=encoding, newline="") as fh:
        return fh.read()


def write_json_atomic(path: str, payload: Any) -> int:
    """Write ``payload`` as pretty JSON; readers never observe a partial file.

    Returns the number of bytes written.
    """
    dir_part = os.path.dirname(path) or "."
    ensure_dir(dir_part)
    data = (json.dumps(payload, indent=2, ensure_ascii=False) + "\n").encode("utf-8")
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", suffix=".json", dir=dir_part)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
    return len(data)


def read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)
