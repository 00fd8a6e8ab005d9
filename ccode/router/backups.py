# -*- coding: utf-8 -*-
"""Timestamped snapshots of the proxy config file."""

from __future__ import annotations

import logging
import re
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ..constant import (
    BACKUP_PREFIX,
    BACKUP_SUFFIX,
    BACKUP_TIMESTAMP_FORMAT,
    get_backup_dir,
)
from ..errors import (
    CcodeError,
    InvalidConfigError,
    IOFailureError,
    NothingToBackupError,
    NotFoundError,
)
from ..utils.fs import copy_atomic

logger = logging.getLogger(__name__)

# config_backup_20250101_120000.json, or ..._120000_2.json on a collision
_BACKUP_NAME_RE = re.compile(
    rf"^{re.escape(BACKUP_PREFIX)}(\d{{8}}_\d{{6}})(?:_(\d+))?"
    rf"{re.escape(BACKUP_SUFFIX)}$",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _sort_key(name: str) -> Tuple[str, int]:
    match = _BACKUP_NAME_RE.match(name)
    if match is None:
        return ("", 0)
    return (match.group(1), int(match.group(2) or 0))


def is_backup_name(name: str) -> bool:
    return _BACKUP_NAME_RE.match(name) is not None


class BackupManager:
    """Create, list, restore and prune backups of one config file.

    Backups are never modified once written.
    """

    def __init__(
        self,
        config_path: Path,
        backup_dir: Optional[Path] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.config_path = config_path
        self.backup_dir = backup_dir or get_backup_dir(config_path)
        self._clock = clock

    def _path(self, name: str) -> Path:
        if not is_backup_name(name):
            raise NotFoundError(name, "backup")
        return self.backup_dir / name

    def _new_name(self) -> str:
        stamp = self._clock().strftime(BACKUP_TIMESTAMP_FORMAT)
        name = f"{BACKUP_PREFIX}{stamp}{BACKUP_SUFFIX}"
        seq = 1
        # Several writes within one second must not share a snapshot.
        while (self.backup_dir / name).exists():
            name = f"{BACKUP_PREFIX}{stamp}_{seq}{BACKUP_SUFFIX}"
            seq += 1
        return name

    def create_backup(self) -> str:
        """Copy the current config into the backup directory.

        Returns the generated backup name.
        """
        if not self.config_path.is_file():
            raise NothingToBackupError(self.config_path)
        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            name = self._new_name()
            shutil.copy2(self.config_path, self.backup_dir / name)
        except OSError as exc:
            raise IOFailureError(self.backup_dir, exc) from exc
        logger.info("Backup created: %s", self.backup_dir / name)
        return name

    def list_backups(self) -> List[str]:
        """Backup names, newest first."""
        if not self.backup_dir.is_dir():
            return []
        names = [
            p.name
            for p in self.backup_dir.iterdir()
            if p.is_file() and is_backup_name(p.name)
        ]
        return sorted(names, key=_sort_key, reverse=True)

    def restore(self, name: str) -> Optional[str]:
        """Overwrite the config with backup *name*.

        The current config is backed up first when possible; that step is
        best-effort. Returns the name of that safety backup, if any.
        """
        source = self._path(name)
        if not source.is_file():
            raise NotFoundError(name, "backup")

        safety: Optional[str] = None
        if self.config_path.is_file():
            try:
                safety = self.create_backup()
            except CcodeError as exc:
                logger.warning(
                    "Could not back up current config before restore: %s",
                    exc,
                )
        copy_atomic(source, self.config_path)
        logger.info("Restored %s from backup %s", self.config_path, name)
        return safety

    def delete(self, name: str) -> None:
        path = self._path(name)
        if not path.is_file():
            raise NotFoundError(name, "backup")
        try:
            path.unlink()
        except OSError as exc:
            raise IOFailureError(path, exc) from exc
        logger.info("Backup deleted: %s", name)

    def cleanup(self, keep_count: int) -> int:
        """Delete all but the *keep_count* newest backups.

        Returns how many were removed. A file that cannot be deleted is
        logged and skipped.
        """
        if keep_count < 0:
            raise InvalidConfigError(
                "keep_count must not be negative",
                "keep_count",
            )
        removed = 0
        for name in self.list_backups()[keep_count:]:
            try:
                (self.backup_dir / name).unlink()
            except OSError as exc:
                logger.warning("Failed to delete backup %s: %s", name, exc)
                continue
            removed += 1
        if removed:
            logger.info("Removed %d old backup(s)", removed)
        return removed
