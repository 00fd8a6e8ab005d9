# -*- coding: utf-8 -*-
"""claude-code-router config: reconciliation, backups and bootstrap."""

from .backups import BackupManager, is_backup_name
from .bootstrap import BootstrapResolver, BootstrapResult, RouterProfileStatus
from .config_file import ProviderOp, RouterConfigManager

__all__ = [
    "BackupManager",
    "BootstrapResolver",
    "BootstrapResult",
    "ProviderOp",
    "RouterConfigManager",
    "RouterProfileStatus",
    "is_backup_name",
]
