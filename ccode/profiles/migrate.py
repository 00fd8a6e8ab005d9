# -*- coding: utf-8 -*-
"""Upgrade older profile store layouts to the grouped layout.

The legacy layout is flat::

    {"default": "work", "profiles": {"work": {...}, "home": {...}}}

The current layout groups profiles per kind::

    {"version": "1.0", "default_group": "direct",
     "default_profile": {"direct": "work", "router": null},
     "groups": {"direct": {...}, "router": {...}}}
"""

from __future__ import annotations

import logging

from ..constant import GROUP_DIRECT, SCHEMA_VERSION
from .models import ProfileStoreData

logger = logging.getLogger(__name__)


def migrate(data: ProfileStoreData) -> ProfileStoreData:
    """Return a copy of *data* in the current layout.

    Idempotent: a document without legacy fields comes back unchanged
    apart from filling ``default_group`` and ``schema_version``.
    """
    out = data.model_copy(deep=True)

    if out.legacy_profiles:
        for name, profile in out.legacy_profiles.items():
            # The legacy entry replaces a grouped one of the same name.
            if name in out.groups.direct:
                logger.debug("Legacy profile %s replaces grouped entry", name)
            out.groups.direct[name] = profile
        logger.info(
            "Migrated %d legacy profile(s) into the direct group",
            len(out.legacy_profiles),
        )
    out.legacy_profiles = None

    if out.legacy_default and not out.defaults.direct_name:
        out.defaults.direct_name = out.legacy_default
    out.legacy_default = None

    if not out.default_group:
        out.default_group = GROUP_DIRECT
    if not out.schema_version:
        out.schema_version = SCHEMA_VERSION
    return out


def migrate_raw(raw: dict) -> ProfileStoreData:
    """Parse a raw JSON object of either layout and migrate it.

    Missing sections (``groups``, ``default_profile``, ...) are tolerated;
    explicit ``null`` values are treated as absent.
    """
    cleaned = {k: v for k, v in raw.items() if v is not None}
    groups = cleaned.get("groups")
    if isinstance(groups, dict):
        cleaned["groups"] = {
            k: v for k, v in groups.items() if isinstance(v, dict)
        }
    return migrate(ProfileStoreData.model_validate(cleaned))
