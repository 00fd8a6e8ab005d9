# -*- coding: utf-8 -*-
"""JSON document I/O shared by the profile store and the router config."""

from __future__ import annotations

import json
import os
import shutil
from pathlib import Path
from typing import Any, Optional

from ..errors import IOFailureError, MalformedDocumentError


def read_json(path: Path) -> Optional[dict]:
    """Read a JSON object from *path*.

    Returns ``None`` when the file does not exist. Raises
    ``MalformedDocumentError`` if the content is not UTF-8 encoded JSON
    holding an object.
    """
    if not path.is_file():
        return None
    try:
        with open(path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedDocumentError(path, exc) from exc
    except OSError as exc:
        raise IOFailureError(path, exc) from exc
    if not isinstance(raw, dict):
        raise MalformedDocumentError(
            path,
            TypeError(f"expected a JSON object, got {type(raw).__name__}"),
        )
    return raw


def write_json_atomic(path: Path, data: Any) -> None:
    """Write *data* as pretty JSON, replacing *path* in one rename.

    The content goes to a sibling ``.tmp`` file first, so a crash never
    leaves a truncated document where a valid one used to be.
    """
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, ensure_ascii=False)
            fh.write("\n")
            fh.flush()
            os.fsync(fh.fileno())
        tmp.replace(path)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise IOFailureError(path, exc) from exc


def copy_atomic(src: Path, dst: Path) -> None:
    """Copy *src* over *dst* through a temporary sibling and a rename."""
    tmp = dst.with_suffix(dst.suffix + ".tmp")
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, tmp)
        tmp.replace(dst)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise IOFailureError(dst, exc) from exc
