# -*- coding: utf-8 -*-
"""CLI commands for direct and router profiles."""
from __future__ import annotations

import shlex
from typing import Optional

import click

from ..constant import DEFAULT_LONG_CONTEXT_THRESHOLD, GROUP_DIRECT
from ..profiles import DirectProfile, RouterProfile, now_iso
from ..providers import RouteSet, validate_cross_references
from .utils import (
    AppContext,
    echo_ok,
    echo_warning,
    handle_errors,
    mask_api_key,
    pass_app,
    print_json,
)


# ---------------------------------------------------------------------------
# Direct profiles
# ---------------------------------------------------------------------------


@click.group("profile")
def profiles_group() -> None:
    """Manage direct profiles (auth token + base URL)."""


@profiles_group.command("list")
@pass_app
@handle_errors
def list_profiles(app: AppContext) -> None:
    """List direct profiles; the default is marked with *."""
    entries = app.store.direct.list()
    if not entries:
        click.echo("No direct profiles. Add one with 'ccode profile add'.")
        return
    for entry in entries:
        mark = "*" if entry.is_default else " "
        p = entry.profile
        click.echo(f"{mark} {entry.name:20s} {p.base_url}")
        if p.description:
            click.echo(f"  {'':20s} {p.description}")


@profiles_group.command("add")
@click.argument("name")
@click.option("--token", required=True, help="ANTHROPIC_AUTH_TOKEN")
@click.option("--base-url", required=True, help="ANTHROPIC_BASE_URL")
@click.option("--model", default=None, help="ANTHROPIC_MODEL")
@click.option(
    "--small-fast-model",
    default=None,
    help="ANTHROPIC_SMALL_FAST_MODEL",
)
@click.option("--description", default=None)
@pass_app
@handle_errors
def add_profile(
    app: AppContext,
    name: str,
    token: str,
    base_url: str,
    model: Optional[str],
    small_fast_model: Optional[str],
    description: Optional[str],
) -> None:
    """Add a direct profile."""
    profile = DirectProfile(
        auth_token=token,
        base_url=base_url,
        model=model,
        small_fast_model=small_fast_model,
        description=description,
        created_at=now_iso(),
    )
    app.store.direct.add(name, profile)
    app.store.save()
    echo_ok(f"Profile '{name}' added")
    if app.store.direct.default_name == name:
        click.echo("  (set as default)")


@profiles_group.command("use")
@click.argument("name")
@pass_app
@handle_errors
def use_profile(app: AppContext, name: str) -> None:
    """Make NAME the default direct profile."""
    app.store.direct.set_default(name)
    app.store.default_group = GROUP_DIRECT
    app.store.save()
    echo_ok(f"'{name}' is now the default profile")


@profiles_group.command("remove")
@click.argument("name")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@pass_app
@handle_errors
def remove_profile(app: AppContext, name: str, yes: bool) -> None:
    """Remove a direct profile."""
    app.store.direct.get(name)
    if not yes and not click.confirm(f"Remove profile '{name}'?"):
        click.echo("Cancelled")
        return
    app.store.direct.remove(name)
    app.store.save()
    echo_ok(f"Profile '{name}' removed")
    default = app.store.direct.default_name
    if default:
        click.echo(f"  default profile: {default}")


@profiles_group.command("show")
@click.argument("name", required=False)
@pass_app
@handle_errors
def show_profile(app: AppContext, name: Optional[str]) -> None:
    """Show a direct profile (default profile when NAME is omitted)."""
    if name is None:
        name, profile = app.store.direct.get_default()
    else:
        profile = app.store.direct.get(name)
    data = profile.model_dump(by_alias=True, exclude_none=True)
    data["ANTHROPIC_AUTH_TOKEN"] = mask_api_key(profile.auth_token)
    print_json({name: data})


@profiles_group.command("env")
@click.argument("name", required=False)
@pass_app
@handle_errors
def env_profile(app: AppContext, name: Optional[str]) -> None:
    """Print shell exports for a direct profile.

    \b
    Example:
      eval "$(ccode profile env work)"
    """
    if name is None:
        _, profile = app.store.direct.get_default()
    else:
        profile = app.store.direct.get(name)
    for key, value in profile.to_env().items():
        click.echo(f"export {key}={shlex.quote(value)}")


# ---------------------------------------------------------------------------
# Router profiles
# ---------------------------------------------------------------------------


@click.group("router")
def routers_group() -> None:
    """Manage router profiles (route sets for claude-code-router)."""


@routers_group.command("list")
@pass_app
@handle_errors
def list_routers(app: AppContext) -> None:
    """List router profiles; generates 'default' from the proxy config."""
    entries = app.resolver.list_router_profiles()
    if not entries:
        click.echo(
            "No router profiles and no provider configured. "
            "Add one with 'ccode provider add'.",
        )
        return
    for entry in entries:
        mark = "*" if entry.is_default else " "
        click.echo(f"{mark} {entry.name:20s} {entry.profile.route_set.default}")


@routers_group.command("add")
@click.argument("name")
@click.option("--default", "default_route", required=True, help="provider,model")
@click.option("--background", default=None, help="provider,model")
@click.option("--think", default=None, help="provider,model")
@click.option("--long-context", default=None, help="provider,model")
@click.option(
    "--long-context-threshold",
    type=int,
    default=DEFAULT_LONG_CONTEXT_THRESHOLD,
    show_default=True,
)
@click.option("--web-search", default=None, help="provider,model[:online]")
@click.option("--description", default=None)
@pass_app
@handle_errors
def add_router(
    app: AppContext,
    name: str,
    default_route: str,
    background: Optional[str],
    think: Optional[str],
    long_context: Optional[str],
    long_context_threshold: int,
    web_search: Optional[str],
    description: Optional[str],
) -> None:
    """Add a router profile."""
    profile = RouterProfile(
        name=name,
        route_set=RouteSet(
            default=default_route,
            background=background,
            think=think,
            long_context=long_context,
            long_context_threshold=long_context_threshold,
            web_search=web_search,
        ),
        description=description,
        created_at=now_iso(),
    )
    app.store.router.add(name, profile)
    app.store.save()
    echo_ok(f"Router profile '{name}' added")
    config = app.manager.load()
    for problem in validate_cross_references(
        config.providers,
        profile.route_set,
        collect=True,
    ):
        echo_warning(problem)


@routers_group.command("use")
@click.argument("name")
@pass_app
@handle_errors
def use_router(app: AppContext, name: str) -> None:
    """Apply router profile NAME to the proxy config and make it default."""
    app.resolver.use_router_profile(name)
    echo_ok(f"Router profile '{name}' applied")


@routers_group.command("remove")
@click.argument("name")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@pass_app
@handle_errors
def remove_router(app: AppContext, name: str, yes: bool) -> None:
    """Remove a router profile (the proxy config is left as is)."""
    app.store.router.get(name)
    if not yes and not click.confirm(f"Remove router profile '{name}'?"):
        click.echo("Cancelled")
        return
    app.store.router.remove(name)
    app.store.save()
    echo_ok(f"Router profile '{name}' removed")


@routers_group.command("show")
@click.argument("name", default="default")
@pass_app
@handle_errors
def show_router(app: AppContext, name: str) -> None:
    """Show a router profile."""
    profile = app.resolver.resolve_default_profile(name)
    print_json(profile.model_dump(mode="json", by_alias=True, exclude_none=True))


@routers_group.command("status")
@pass_app
@handle_errors
def router_status(app: AppContext) -> None:
    """Summarize the proxy config and report dangling routes."""
    if not app.manager.exists():
        click.echo(f"No proxy config at {app.manager.config_path}")
        return
    click.echo(app.manager.get_stats().format_display())
    for problem in app.manager.validate_cross_references():
        echo_warning(problem)
