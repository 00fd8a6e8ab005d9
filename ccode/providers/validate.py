# -*- coding: utf-8 -*-
"""Structural and cross-document validation rules.

Every ``validate_*`` function returns ``None`` on success and raises
``InvalidConfigError`` (with the offending field) on the first failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional

from ..errors import InvalidConfigError
from .models import OPTIONAL_ROUTES, Provider, ProxyConfig, RouteSet
from .registry import get_provider_kind

if TYPE_CHECKING:
    from ..profiles.models import DirectProfile, RouterProfile

_URL_SCHEMES = ("http://", "https://")


def _check_url(url: str, field: str, label: str) -> None:
    if not url or not url.strip():
        raise InvalidConfigError(f"{label} must not be empty", field)
    if not url.startswith(_URL_SCHEMES):
        raise InvalidConfigError(
            f"{label} '{url}' is invalid, it must start with "
            "'http://' or 'https://'",
            field,
        )


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------


def validate_provider(provider: Provider) -> None:
    if not provider.name.strip():
        raise InvalidConfigError("Provider name must not be empty", "name")
    _check_url(provider.api_base_url, "api_base_url", "API URL")
    if not provider.models:
        raise InvalidConfigError(
            f"Provider '{provider.name}' must list at least one model",
            "models",
        )
    if any(not m.strip() for m in provider.models):
        raise InvalidConfigError(
            f"Provider '{provider.name}' has a blank model name",
            "models",
        )
    if provider.provider_type is not None:
        defn = get_provider_kind(provider.provider_type)
        problem = defn.check_url(provider.api_base_url) if defn else None
        if problem:
            raise InvalidConfigError(problem, "api_base_url")


def validate_provider_names_unique(providers: Iterable[Provider]) -> None:
    seen = set()
    for p in providers:
        if p.name in seen:
            raise InvalidConfigError(
                f"Provider name '{p.name}' is used more than once",
                "Providers",
            )
        seen.add(p.name)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


def route_provider(route: str) -> str:
    """Return the provider segment of a ``provider,model`` route."""
    return route.split(",", 1)[0]


def validate_route(route: Optional[str], field: str) -> None:
    """Check ``provider,model`` shape, allowing a ``:modifier`` suffix."""
    if route is None or not route.strip():
        raise InvalidConfigError(f"Route '{field}' must not be empty", field)
    if "," not in route:
        raise InvalidConfigError(
            f"Route '{field}' is invalid ('{route}'), expected "
            "'provider,model'",
            field,
        )
    provider, model = route.split(",", 1)
    # Only the model segment may carry a modifier (e.g. ":online").
    model = model.rsplit(":", 1)[0] if ":" in model else model
    if not provider.strip() or not model.strip():
        raise InvalidConfigError(
            f"Route '{field}' is invalid ('{route}'), provider and model "
            "must both be set",
            field,
        )
    if provider != provider.strip() or model != model.strip():
        raise InvalidConfigError(
            f"Route '{field}' is invalid ('{route}'), provider and model "
            "must not have surrounding whitespace",
            field,
        )
    if "," in model:
        raise InvalidConfigError(
            f"Route '{field}' is invalid ('{route}'), expected exactly one "
            "comma",
            field,
        )


def validate_route_set(route_set: RouteSet) -> None:
    validate_route(route_set.default, "default")
    for attr, wire in OPTIONAL_ROUTES:
        value = getattr(route_set, attr)
        if value is not None and value.strip():
            validate_route(value, wire)
    threshold = route_set.long_context_threshold
    if threshold is not None and threshold <= 0:
        raise InvalidConfigError(
            "longContextThreshold must be a positive integer",
            "longContextThreshold",
        )


@dataclass(frozen=True)
class DanglingReference:
    """A route whose provider segment names no declared provider."""

    route_name: str
    route: str
    provider: str

    def describe(self) -> str:
        return (
            f"Route '{self.route_name}' references unknown provider "
            f"'{self.provider}'"
        )


def find_dangling_references(
    providers: Iterable[Provider],
    route_set: RouteSet,
) -> List[DanglingReference]:
    names = {p.name for p in providers}
    return [
        DanglingReference(route_name, route, route_provider(route))
        for route_name, route in route_set.all_routes()
        if route_provider(route) not in names
    ]


def validate_cross_references(
    providers: Iterable[Provider],
    route_set: RouteSet,
    *,
    collect: bool = False,
) -> List[str]:
    """Check that every route names a declared provider.

    With ``collect=False`` the first dangling reference raises
    ``InvalidConfigError``; with ``collect=True`` all problems are returned
    as messages and nothing is raised.
    """
    dangling = find_dangling_references(providers, route_set)
    if not collect and dangling:
        first = dangling[0]
        raise InvalidConfigError(first.describe(), first.route_name)
    return [d.describe() for d in dangling]


# ---------------------------------------------------------------------------
# Local profiles
# ---------------------------------------------------------------------------


def validate_direct_profile(profile: "DirectProfile") -> None:
    if not profile.auth_token.strip():
        raise InvalidConfigError(
            "Auth token must not be empty",
            "ANTHROPIC_AUTH_TOKEN",
        )
    _check_url(profile.base_url, "ANTHROPIC_BASE_URL", "Base URL")


def validate_router_profile(profile: "RouterProfile") -> None:
    if not profile.name.strip():
        raise InvalidConfigError(
            "Router profile name must not be empty",
            "name",
        )
    validate_route_set(profile.route_set)


# ---------------------------------------------------------------------------
# Whole document
# ---------------------------------------------------------------------------


def validate_proxy_config(config: ProxyConfig) -> None:
    """Everything a full proxy config save must satisfy.

    An empty provider list can never pass: ``Router.default`` always needs
    a provider to resolve against.
    """
    for provider in config.providers:
        validate_provider(provider)
    validate_provider_names_unique(config.providers)
    validate_route_set(config.route_set)
    validate_cross_references(config.providers, config.route_set)
