# -*- coding: utf-8 -*-
"""Provider management: kinds, document models and validation rules."""

from .models import (
    OPTIONAL_ROUTES,
    ConfigStats,
    Provider,
    ProxyConfig,
    RouteSet,
)
from .registry import (
    PROVIDER_KINDS,
    ProviderKind,
    ProviderKindDefinition,
    get_provider_kind,
    list_provider_kinds,
    recommend_routes,
)
from .validate import (
    DanglingReference,
    find_dangling_references,
    route_provider,
    validate_cross_references,
    validate_direct_profile,
    validate_provider,
    validate_provider_names_unique,
    validate_proxy_config,
    validate_route,
    validate_route_set,
    validate_router_profile,
)

__all__ = [
    # models
    "OPTIONAL_ROUTES",
    "ConfigStats",
    "Provider",
    "ProxyConfig",
    "RouteSet",
    # registry
    "PROVIDER_KINDS",
    "ProviderKind",
    "ProviderKindDefinition",
    "get_provider_kind",
    "list_provider_kinds",
    "recommend_routes",
    # validate
    "DanglingReference",
    "find_dangling_references",
    "route_provider",
    "validate_cross_references",
    "validate_direct_profile",
    "validate_provider",
    "validate_provider_names_unique",
    "validate_proxy_config",
    "validate_route",
    "validate_route_set",
    "validate_router_profile",
]
