"""Shared test fixtures"""
import json
from pathlib import Path
from typing import Callable

import pytest

from ccode.profiles import DirectProfile, ProfileStore, RouterProfile
from ccode.providers import Provider, RouteSet
from ccode.router import BootstrapResolver, RouterConfigManager


@pytest.fixture
def profiles_path(tmp_path: Path) -> Path:
    return tmp_path / "ccode" / "config.json"


@pytest.fixture
def router_path(tmp_path: Path) -> Path:
    return tmp_path / "claude-code-router" / "config.json"


@pytest.fixture
def store(profiles_path: Path) -> ProfileStore:
    return ProfileStore(profiles_path)


@pytest.fixture
def manager(router_path: Path) -> RouterConfigManager:
    return RouterConfigManager(router_path)


@pytest.fixture
def resolver(store: ProfileStore, manager: RouterConfigManager) -> BootstrapResolver:
    return BootstrapResolver(store, manager)


@pytest.fixture
def make_provider() -> Callable[..., Provider]:
    """Factory for a valid provider without a kind"""

    def _make(name: str = "acme", models=("m1", "m2"), **kwargs) -> Provider:
        kwargs.setdefault(
            "api_base_url", f"https://api.{name}.test/v1/chat/completions"
        )
        kwargs.setdefault("api_key", f"sk-{name}-key")
        return Provider(name=name, models=list(models), **kwargs)

    return _make


@pytest.fixture
def direct_profile() -> DirectProfile:
    return DirectProfile(
        auth_token="test-token-123",
        base_url="https://api.anthropic.com",
        description="Test profile",
        created_at="2025-07-29T00:00:00+00:00",
    )


@pytest.fixture
def make_router_profile() -> Callable[..., RouterProfile]:
    def _make(name: str = "fast", default: str = "acme,m1", **routes) -> RouterProfile:
        return RouterProfile(
            name=name,
            route_set=RouteSet(default=default, **routes),
        )

    return _make


@pytest.fixture
def router_doc() -> dict:
    """A hand-written proxy config, including a key ccode does not model"""
    return {
        "APIKEY": "proxy-secret",
        "LOG": True,
        "API_TIMEOUT_MS": 600000,
        "HOST": "127.0.0.1",
        "Providers": [
            {
                "name": "acme",
                "api_base_url": "https://api.acme.test/v1/chat/completions",
                "api_key": "sk-acme",
                "models": ["m1", "m2"],
            },
            {
                "name": "other",
                "api_base_url": "https://api.other.test/v1/chat/completions",
                "api_key": "sk-other",
                "models": ["o1"],
                "transformer": {"use": ["openrouter"]},
            },
        ],
        "Router": {"default": "acme,m1", "longContextThreshold": 60000},
        "StatusLine": {"enabled": True, "theme": "dark"},
    }


@pytest.fixture
def write_router(router_path: Path) -> Callable[[dict], Path]:
    def _write(doc: dict) -> Path:
        router_path.parent.mkdir(parents=True, exist_ok=True)
        router_path.write_text(json.dumps(doc, indent=2), encoding="utf-8")
        return router_path

    return _write


@pytest.fixture
def read_doc() -> Callable[[Path], dict]:
    def _read(path: Path) -> dict:
        return json.loads(path.read_text(encoding="utf-8"))

    return _read
