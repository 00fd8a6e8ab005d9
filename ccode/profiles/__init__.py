# -*- coding: utf-8 -*-
"""Local profile store: direct and router profiles with defaults."""

from .migrate import migrate, migrate_raw
from .models import (
    DefaultSelection,
    DirectProfile,
    ProfileGroups,
    ProfileStoreData,
    RouterProfile,
    now_iso,
)
from .store import ProfileCollection, ProfileEntry, ProfileStore

__all__ = [
    # models
    "DefaultSelection",
    "DirectProfile",
    "ProfileGroups",
    "ProfileStoreData",
    "RouterProfile",
    "now_iso",
    # migrate
    "migrate",
    "migrate_raw",
    # store
    "ProfileCollection",
    "ProfileEntry",
    "ProfileStore",
]
