# -*- coding: utf-8 -*-
"""Read/modify/write of the claude-code-router ``config.json``.

The proxy owns this file and users edit it by hand, so mutations patch
only the node they change (one ``Providers`` entry, the ``Router`` object
or a handful of scalars) on the raw JSON object. Keys this package does
not model survive untouched.

Every write follows the same order: validate, back up the existing file,
then replace the file atomically.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from ..constant import get_router_config_path
from ..errors import (
    AlreadyExistsError,
    InvalidConfigError,
    MalformedDocumentError,
    NotFoundError,
)
from ..profiles.models import RouterProfile
from ..providers.models import ConfigStats, Provider, ProxyConfig, RouteSet
from ..providers.validate import (
    validate_cross_references,
    validate_provider,
    validate_proxy_config,
    validate_route_set,
    validate_router_profile,
)
from ..utils.fs import read_json, write_json_atomic
from .backups import BackupManager

logger = logging.getLogger(__name__)


class ProviderOp(str, Enum):
    ADD = "add"
    UPDATE = "update"
    REMOVE = "remove"


class RouterConfigManager:
    """Owns the proxy config file and its backup directory."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        backups: Optional[BackupManager] = None,
    ):
        self.config_path = config_path or get_router_config_path()
        self.backups = backups or BackupManager(self.config_path)

    def exists(self) -> bool:
        return self.config_path.is_file()

    # -----------------------------------------------------------------------
    # Load / Save
    # -----------------------------------------------------------------------

    def _load_raw(self) -> dict:
        raw = read_json(self.config_path)
        if raw is None:
            return ProxyConfig.new().to_document()
        return raw

    def _parse(self, raw: dict) -> ProxyConfig:
        try:
            return ProxyConfig.model_validate(raw)
        except ValidationError as exc:
            raise MalformedDocumentError(self.config_path, exc) from exc

    def _write(self, raw: dict) -> None:
        # Callers validate before getting here.
        if self.exists():
            self.backups.create_backup()
        write_json_atomic(self.config_path, raw)
        logger.info("Router config saved: %s", self.config_path)

    def load(self) -> ProxyConfig:
        """Return the current document.

        A missing file is the "not configured yet" state and yields
        ``ProxyConfig.new()`` rather than an error.
        """
        return self._parse(self._load_raw())

    def save(self, config: ProxyConfig) -> None:
        """Replace the whole document after strict validation."""
        validate_proxy_config(config)
        self._write(config.to_document())

    # -----------------------------------------------------------------------
    # Partial updates
    # -----------------------------------------------------------------------

    def update_provider_only(
        self,
        provider: Union[Provider, str],
        op: ProviderOp,
    ) -> List[str]:
        """Add, replace or remove exactly one ``Providers`` entry.

        ``REMOVE`` accepts a bare name. Removing a provider that routes
        still reference is allowed; the returned list holds the resulting
        dangling-reference problems (also logged as warnings).
        """
        op = ProviderOp(op)
        raw = self._load_raw()
        current = self._parse(raw)
        name = provider if isinstance(provider, str) else provider.name

        entries = list(raw.get("Providers") or [])
        index = next(
            (
                i
                for i, entry in enumerate(entries)
                if isinstance(entry, dict) and entry.get("name") == name
            ),
            None,
        )

        if op == ProviderOp.REMOVE:
            if index is None:
                raise NotFoundError(name, "provider")
            del entries[index]
        else:
            if isinstance(provider, str):
                raise InvalidConfigError(
                    f"A full provider is required to {op.value} '{name}'",
                    "provider",
                )
            if op == ProviderOp.ADD and index is not None:
                raise AlreadyExistsError(name, "provider")
            if op == ProviderOp.UPDATE and index is None:
                raise NotFoundError(name, "provider")
            validate_provider(provider)
            if index is None:
                entries.append(provider.to_document())
            else:
                entries[index] = provider.to_document()

        raw["Providers"] = entries
        self._write(raw)
        logger.info("Provider %s: %s", op.value, name)

        remaining = [p for p in current.providers if p.name != name]
        if op != ProviderOp.REMOVE:
            remaining.append(provider)
        problems = validate_cross_references(
            remaining,
            current.route_set,
            collect=True,
        )
        for problem in problems:
            logger.warning(problem)
        return problems

    def add_provider(self, provider: Provider) -> List[str]:
        return self.update_provider_only(provider, ProviderOp.ADD)

    def update_provider(self, provider: Provider) -> List[str]:
        return self.update_provider_only(provider, ProviderOp.UPDATE)

    def remove_provider(self, name: str) -> List[str]:
        return self.update_provider_only(name, ProviderOp.REMOVE)

    def update_router_only(self, route_set: RouteSet) -> None:
        """Replace only ``Router``; every route must name a current provider."""
        raw = self._load_raw()
        current = self._parse(raw)
        validate_route_set(route_set)
        validate_cross_references(current.providers, route_set)
        raw["Router"] = route_set.to_document()
        self._write(raw)

    def apply_router_profile(self, profile: RouterProfile) -> None:
        """Write a router profile's route set into the proxy config."""
        validate_router_profile(profile)
        try:
            self.update_router_only(profile.route_set)
        except InvalidConfigError as exc:
            raise InvalidConfigError(
                f"Router profile '{profile.name}': {exc.reason}",
                exc.field,
            ) from exc
        logger.info("Applied router profile %s", profile.name)

    def set_basic_options(
        self,
        *,
        api_key: Optional[str] = None,
        proxy_url: Optional[str] = None,
        log_enabled: Optional[bool] = None,
        timeout_ms: Optional[int] = None,
        host: Optional[str] = None,
    ) -> None:
        """Patch the top-level scalar settings that are not ``None``.

        The patched document must still pass full validation, so a config
        with dangling routes cannot be patched until they are fixed.
        """
        if timeout_ms is not None and timeout_ms <= 0:
            raise InvalidConfigError(
                "API_TIMEOUT_MS must be a positive integer",
                "API_TIMEOUT_MS",
            )
        if proxy_url is not None and not proxy_url.startswith(
            ("http://", "https://"),
        ):
            raise InvalidConfigError(
                f"PROXY_URL '{proxy_url}' must start with 'http://' or "
                "'https://'",
                "PROXY_URL",
            )
        changes = {
            "APIKEY": api_key,
            "PROXY_URL": proxy_url,
            "LOG": log_enabled,
            "API_TIMEOUT_MS": timeout_ms,
            "HOST": host,
        }
        changes = {k: v for k, v in changes.items() if v is not None}
        if not changes:
            return
        raw = self._load_raw()
        raw.update(changes)
        validate_proxy_config(self._parse(raw))
        self._write(raw)

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    def list_providers(self) -> List[Provider]:
        return self.load().providers

    def get_provider(self, name: str) -> Provider:
        provider = self.load().get_provider(name)
        if provider is None:
            raise NotFoundError(name, "provider")
        return provider

    def provider_exists(self, name: str) -> bool:
        return self.load().get_provider(name) is not None

    def get_route_set(self) -> RouteSet:
        return self.load().route_set

    def get_stats(self) -> ConfigStats:
        return self.load().stats()

    def validate_cross_references(self) -> List[str]:
        """Every dangling route reference, for display; never raises on them."""
        config = self.load()
        return validate_cross_references(
            config.providers,
            config.route_set,
            collect=True,
        )
