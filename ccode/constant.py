# -*- coding: utf-8 -*-
import os
from pathlib import Path

# Local profile store (direct + router profiles).
CONFIG_DIR = (
    Path(os.environ.get("CCODE_CONFIG_DIR", "~/.config/ccode"))
    .expanduser()
    .resolve()
)

PROFILES_FILE = os.environ.get("CCODE_PROFILES_FILE", "config.json")

# Config directory of the external claude-code-router proxy.
ROUTER_DIR = (
    Path(os.environ.get("CCODE_ROUTER_DIR", "~/.claude-code-router"))
    .expanduser()
    .resolve()
)

ROUTER_CONFIG_FILE = "config.json"

BACKUP_DIR_NAME = "backups"
BACKUP_PREFIX = "config_backup_"
BACKUP_SUFFIX = ".json"
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

# How many router config backups `backup cleanup` keeps by default.
BACKUP_KEEP_COUNT = int(os.environ.get("CCODE_BACKUP_KEEP", "10"))

# Env key for log level (read by the CLI entry point).
LOG_LEVEL_ENV = "CCODE_LOG_LEVEL"

SCHEMA_VERSION = "1.0"

GROUP_DIRECT = "direct"
GROUP_ROUTER = "router"
GROUPS = (GROUP_DIRECT, GROUP_ROUTER)

DEFAULT_LONG_CONTEXT_THRESHOLD = 60000
DEFAULT_API_TIMEOUT_MS = 600000

# Router.default written into a freshly created proxy config.
PLACEHOLDER_ROUTE = "provider,model"

# The only router profile name that may be synthesized on demand.
DEFAULT_ROUTER_PROFILE = "default"


def get_profiles_path() -> Path:
    """Return the default profile store path."""
    return CONFIG_DIR / PROFILES_FILE


def get_router_config_path() -> Path:
    """Return the default proxy config path."""
    return ROUTER_DIR / ROUTER_CONFIG_FILE


def get_backup_dir(config_path: Path) -> Path:
    """Backups live in a ``backups`` directory beside the proxy config."""
    return config_path.parent / BACKUP_DIR_NAME
