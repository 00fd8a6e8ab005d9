# -*- coding: utf-8 -*-
"""Make sure a usable router profile exists locally.

Priority: a local router profile, then one generated from the proxy
config, then telling the caller to create a provider first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..constant import DEFAULT_ROUTER_PROFILE
from ..errors import NotFoundError
from ..profiles.models import RouterProfile, now_iso
from ..profiles.store import ProfileEntry, ProfileStore
from ..providers.validate import (
    validate_cross_references,
    validate_router_profile,
)
from .config_file import RouterConfigManager

logger = logging.getLogger(__name__)

NO_PROVIDER_HINT = (
    "no provider is configured yet, add one with 'ccode provider add' "
    "first"
)


class RouterProfileStatus(str, Enum):
    LOCAL_EXISTS = "local_exists"
    GENERATED_DEFAULT = "generated_default"
    NEED_CREATE_PROVIDER = "need_create_provider"


@dataclass
class BootstrapResult:
    status: RouterProfileStatus
    profile: Optional[RouterProfile] = None
    warnings: List[str] = field(default_factory=list)


class BootstrapResolver:
    def __init__(self, store: ProfileStore, manager: RouterConfigManager):
        self.store = store
        self.manager = manager

    def generate_default_profile(self) -> Optional[BootstrapResult]:
        """Build (without saving) a ``default`` profile from the proxy config.

        Returns ``None`` when the proxy config has no provider. Dangling
        route references do not stop generation; they are returned as
        warnings.
        """
        if not self.manager.exists():
            return None
        config = self.manager.load()
        if not config.providers:
            return None

        warnings = validate_cross_references(
            config.providers,
            config.route_set,
            collect=True,
        )
        for warning in warnings:
            logger.warning(warning)

        profile = RouterProfile(
            name=DEFAULT_ROUTER_PROFILE,
            route_set=config.route_set.model_copy(deep=True),
            description="Generated from the claude-code-router config",
            created_at=now_iso(),
        )
        validate_router_profile(profile)
        return BootstrapResult(
            RouterProfileStatus.GENERATED_DEFAULT,
            profile,
            warnings,
        )

    def ensure_router_profile(self) -> BootstrapResult:
        if len(self.store.router):
            return BootstrapResult(RouterProfileStatus.LOCAL_EXISTS)

        result = self.generate_default_profile()
        if result is None:
            return BootstrapResult(RouterProfileStatus.NEED_CREATE_PROVIDER)

        self.store.router.add(DEFAULT_ROUTER_PROFILE, result.profile)
        self.store.save()
        logger.info("Generated router profile %s", DEFAULT_ROUTER_PROFILE)
        return result

    def resolve_default_profile(self, name: str) -> RouterProfile:
        """Look up a router profile, synthesizing ``default`` if needed.

        Only ``default`` is ever generated; any other missing name raises
        ``NotFoundError`` straight away.
        """
        try:
            return self.store.router.get(name)
        except NotFoundError:
            if name != DEFAULT_ROUTER_PROFILE:
                raise

        result = self.ensure_router_profile()
        if result.status == RouterProfileStatus.GENERATED_DEFAULT:
            return self.store.router.get(name)
        if result.status == RouterProfileStatus.NEED_CREATE_PROVIDER:
            raise NotFoundError(name, "router profile", hint=NO_PROVIDER_HINT)
        raise NotFoundError(name, "router profile")

    def list_router_profiles(self) -> List[ProfileEntry[RouterProfile]]:
        """Local router profiles, generating ``default`` on first use."""
        result = self.ensure_router_profile()
        if result.status == RouterProfileStatus.NEED_CREATE_PROVIDER:
            return []
        return self.store.router.list()

    def use_router_profile(self, name: str) -> RouterProfile:
        """Apply a router profile to the proxy config and make it default."""
        profile = self.resolve_default_profile(name)
        self.manager.apply_router_profile(profile)
        self.store.router.set_default(name)
        self.store.save()
        return profile
