# -*- coding: utf-8 -*-
"""Pydantic models for providers, routes and the proxy config document."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from ..constant import (
    DEFAULT_API_TIMEOUT_MS,
    DEFAULT_LONG_CONTEXT_THRESHOLD,
    PLACEHOLDER_ROUTE,
)
from .registry import ProviderKind, get_provider_kind

# Optional routes in the order they are reported, as (attribute, wire name).
OPTIONAL_ROUTES: Tuple[Tuple[str, str], ...] = (
    ("background", "background"),
    ("think", "think"),
    ("long_context", "longContext"),
    ("web_search", "webSearch"),
)


class Provider(BaseModel):
    """One upstream endpoint in the proxy config ``Providers`` array."""

    model_config = {"extra": "allow"}

    name: str = Field(..., description="Unique provider name")
    api_base_url: str = Field(..., description="Full API URL")
    api_key: str = Field(default="", description="API key")
    models: List[str] = Field(default_factory=list)
    transformer: Optional[Any] = Field(
        default=None,
        description="Request shaping payload, passed through as-is",
    )
    provider_type: Optional[ProviderKind] = Field(
        default=None,
        description="Kind used to derive defaults and validate the URL",
    )

    @classmethod
    def create(
        cls,
        name: str,
        api_base_url: str,
        api_key: str,
        models: Sequence[str],
        provider_type: ProviderKind,
    ) -> "Provider":
        """Build a provider, deriving ``transformer`` from its kind."""
        defn = get_provider_kind(provider_type)
        models = list(models) or (list(defn.default_models) if defn else [])
        return cls(
            name=name,
            api_base_url=api_base_url,
            api_key=api_key,
            models=models,
            transformer=defn.transformer_for(models) if defn else None,
            provider_type=provider_type,
        )

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RouteSet(BaseModel):
    """The proxy config ``Router`` object.

    Every route is a ``"provider,model"`` string; ``web_search`` routes may
    carry a modifier such as ``:online``.
    """

    model_config = {"populate_by_name": True, "extra": "allow"}

    default: str
    background: Optional[str] = None
    think: Optional[str] = None
    long_context: Optional[str] = Field(default=None, alias="longContext")
    long_context_threshold: Optional[int] = Field(
        default=DEFAULT_LONG_CONTEXT_THRESHOLD,
        alias="longContextThreshold",
    )
    web_search: Optional[str] = Field(default=None, alias="webSearch")

    def all_routes(self) -> List[Tuple[str, str]]:
        """Return ``(wire_name, route)`` for every non-blank route."""
        routes = [("default", self.default)]
        for attr, wire in OPTIONAL_ROUTES:
            value = getattr(self, attr)
            if value is not None and value.strip():
                routes.append((wire, value))
        return routes

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ConfigStats(BaseModel):
    """Summary of a proxy config document."""

    provider_count: int = 0
    default_route: str = ""
    has_background_route: bool = False
    has_think_route: bool = False
    has_long_context_route: bool = False
    has_web_search_route: bool = False
    timeout_ms: Optional[int] = None
    log_enabled: bool = False

    def format_display(self) -> str:
        lines = [
            f"Providers      : {self.provider_count}",
            f"Default route  : {self.default_route}",
        ]
        for label, flag in (
            ("background", self.has_background_route),
            ("think", self.has_think_route),
            ("longContext", self.has_long_context_route),
            ("webSearch", self.has_web_search_route),
        ):
            if flag:
                lines.append(f"{label:15s}: set")
        if self.timeout_ms is not None:
            lines.append(f"API timeout    : {self.timeout_ms}ms")
        lines.append(
            f"Logging        : {'on' if self.log_enabled else 'off'}",
        )
        return "\n".join(lines)


class ProxyConfig(BaseModel):
    """The claude-code-router ``config.json`` document.

    Field aliases are the exact keys the proxy reads. Keys this model does
    not know about are kept so that a whole-document save preserves them.
    """

    model_config = {"populate_by_name": True, "extra": "allow"}

    api_key: Optional[str] = Field(default=None, alias="APIKEY")
    proxy_url: Optional[str] = Field(default=None, alias="PROXY_URL")
    log_enabled: Optional[bool] = Field(default=None, alias="LOG")
    timeout_ms: Optional[int] = Field(default=None, alias="API_TIMEOUT_MS")
    host: Optional[str] = Field(default=None, alias="HOST")
    providers: List[Provider] = Field(
        default_factory=list,
        alias="Providers",
    )
    route_set: RouteSet = Field(
        default_factory=lambda: RouteSet(default=PLACEHOLDER_ROUTE),
        alias="Router",
    )
    transformers: Optional[List[Any]] = None
    custom_router_path: Optional[str] = Field(
        default=None,
        alias="CUSTOM_ROUTER_PATH",
    )

    @classmethod
    def new(cls) -> "ProxyConfig":
        """Document used when no proxy config exists yet."""
        return cls(
            log_enabled=True,
            timeout_ms=DEFAULT_API_TIMEOUT_MS,
            route_set=RouteSet(default=PLACEHOLDER_ROUTE),
        )

    def get_provider(self, name: str) -> Optional[Provider]:
        for p in self.providers:
            if p.name == name:
                return p
        return None

    def provider_names(self) -> List[str]:
        return [p.name for p in self.providers]

    def stats(self) -> ConfigStats:
        rs = self.route_set
        return ConfigStats(
            provider_count=len(self.providers),
            default_route=rs.default,
            has_background_route=rs.background is not None,
            has_think_route=rs.think is not None,
            has_long_context_route=rs.long_context is not None,
            has_web_search_route=rs.web_search is not None,
            timeout_ms=self.timeout_ms,
            log_enabled=bool(self.log_enabled),
        )

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
