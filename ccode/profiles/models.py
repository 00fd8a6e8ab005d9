# -*- coding: utf-8 -*-
"""Pydantic models for the local profile store document."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel, Field

from ..constant import GROUP_DIRECT, SCHEMA_VERSION
from ..providers.models import RouteSet


def now_iso() -> str:
    """Timestamp stored in ``created_at``."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class DirectProfile(BaseModel):
    """Pass-through connection: auth token + base URL."""

    model_config = {"populate_by_name": True}

    auth_token: str = Field(..., alias="ANTHROPIC_AUTH_TOKEN")
    base_url: str = Field(..., alias="ANTHROPIC_BASE_URL")
    model: Optional[str] = Field(default=None, alias="ANTHROPIC_MODEL")
    small_fast_model: Optional[str] = Field(
        default=None,
        alias="ANTHROPIC_SMALL_FAST_MODEL",
    )
    description: Optional[str] = None
    created_at: Optional[str] = None

    def to_env(self) -> Dict[str, str]:
        """Environment variables a launcher exports for this profile."""
        env = {
            "ANTHROPIC_AUTH_TOKEN": self.auth_token,
            "ANTHROPIC_BASE_URL": self.base_url,
        }
        if self.model:
            env["ANTHROPIC_MODEL"] = self.model
        if self.small_fast_model:
            env["ANTHROPIC_SMALL_FAST_MODEL"] = self.small_fast_model
        return env


class RouterProfile(BaseModel):
    """A named route set kept locally, applied to the proxy on demand."""

    model_config = {"populate_by_name": True}

    name: str
    route_set: RouteSet = Field(..., alias="router")
    description: Optional[str] = None
    created_at: Optional[str] = None


class DefaultSelection(BaseModel):
    """Default pointer per group (``default_profile`` on disk)."""

    model_config = {"populate_by_name": True}

    direct_name: Optional[str] = Field(default=None, alias="direct")
    router_name: Optional[str] = Field(default=None, alias="router")


class ProfileGroups(BaseModel):
    direct: Dict[str, DirectProfile] = Field(default_factory=dict)
    router: Dict[str, RouterProfile] = Field(default_factory=dict)


class ProfileStoreData(BaseModel):
    """Top-level structure of the profile store ``config.json``.

    ``legacy_default`` and ``legacy_profiles`` are the flat layout of older
    releases; they are emptied by migration on every load.
    """

    model_config = {"populate_by_name": True}

    schema_version: str = Field(default=SCHEMA_VERSION, alias="version")
    default_group: Optional[str] = Field(default=GROUP_DIRECT)
    defaults: DefaultSelection = Field(
        default_factory=DefaultSelection,
        alias="default_profile",
    )
    groups: ProfileGroups = Field(default_factory=ProfileGroups)
    legacy_default: Optional[str] = Field(default=None, alias="default")
    legacy_profiles: Optional[Dict[str, DirectProfile]] = Field(
        default=None,
        alias="profiles",
    )

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
