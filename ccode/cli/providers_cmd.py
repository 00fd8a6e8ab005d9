# -*- coding: utf-8 -*-
"""CLI commands for providers in the claude-code-router config."""
from __future__ import annotations

from typing import Optional, Tuple

import click

from ..providers import (
    Provider,
    ProviderKind,
    get_provider_kind,
    list_provider_kinds,
    recommend_routes,
)
from .utils import (
    AppContext,
    echo_ok,
    echo_warning,
    handle_errors,
    mask_api_key,
    pass_app,
    print_json,
)

_KIND_CHOICE = click.Choice([k.value for k in ProviderKind])


def _build_provider(
    name: str,
    kind: str,
    url: Optional[str],
    api_key: str,
    models: Tuple[str, ...],
) -> Provider:
    """Fill URL and models from the kind's defaults where omitted."""
    defn = get_provider_kind(kind)
    return Provider.create(
        name=name,
        api_base_url=url or defn.url_template,
        api_key=api_key,
        models=list(models) or list(defn.default_models),
        provider_type=defn.kind,
    )


@click.group("provider")
def providers_group() -> None:
    """Manage providers in the claude-code-router config."""


@providers_group.command("list")
@pass_app
@handle_errors
def list_cmd(app: AppContext) -> None:
    """Show all providers."""
    providers = app.manager.list_providers()
    if not providers:
        click.echo("No providers. Add one with 'ccode provider add'.")
        return
    for p in providers:
        kind = p.provider_type.value if p.provider_type else "-"
        click.echo(f"\n{'─' * 44}")
        click.echo(f"  {p.name} ({kind})")
        click.echo(f"{'─' * 44}")
        click.echo(f"  {'api_base_url':16s}: {p.api_base_url}")
        click.echo(f"  {'api_key':16s}: {mask_api_key(p.api_key) or '(not set)'}")
        click.echo(f"  {'models':16s}: {', '.join(p.models)}")
    click.echo()


@providers_group.command("kinds")
def kinds_cmd() -> None:
    """Show the built-in provider kinds and their defaults."""
    for defn in list_provider_kinds():
        click.echo(f"\n{defn.name} ({defn.kind.value})")
        click.echo(f"  {'url':16s}: {defn.url_template}")
        click.echo(f"  {'models':16s}: {', '.join(defn.default_models)}")
        for hint in defn.hints:
            click.echo(f"  • {hint}")


@providers_group.command("add")
@click.argument("name")
@click.option("--kind", type=_KIND_CHOICE, default="openai", show_default=True)
@click.option("--url", default=None, help="API URL (default: kind template)")
@click.option("--api-key", default="", help="API key")
@click.option(
    "--model",
    "models",
    multiple=True,
    help="Model name; repeat for several (default: kind defaults)",
)
@pass_app
@handle_errors
def add_cmd(
    app: AppContext,
    name: str,
    kind: str,
    url: Optional[str],
    api_key: str,
    models: Tuple[str, ...],
) -> None:
    """Add a provider."""
    provider = _build_provider(name, kind, url, api_key, models)
    app.manager.add_provider(provider)
    echo_ok(f"Provider '{name}' added ({len(provider.models)} model(s))")


@providers_group.command("edit")
@click.argument("name")
@click.option("--url", default=None, help="New API URL")
@click.option("--api-key", default=None, help="New API key")
@click.option("--model", "models", multiple=True, help="Replace model list")
@pass_app
@handle_errors
def edit_cmd(
    app: AppContext,
    name: str,
    url: Optional[str],
    api_key: Optional[str],
    models: Tuple[str, ...],
) -> None:
    """Change a provider's URL, key or models."""
    current = app.manager.get_provider(name)
    new_models = list(models) or current.models
    updates = {"models": new_models}
    if url is not None:
        updates["api_base_url"] = url
    if api_key is not None:
        updates["api_key"] = api_key
    if models and current.provider_type is not None:
        defn = get_provider_kind(current.provider_type)
        updates["transformer"] = defn.transformer_for(new_models)
    app.manager.update_provider(current.model_copy(update=updates))
    echo_ok(f"Provider '{name}' updated")


@providers_group.command("remove")
@click.argument("name")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@pass_app
@handle_errors
def remove_cmd(app: AppContext, name: str, yes: bool) -> None:
    """Remove a provider (routes that use it are reported)."""
    app.manager.get_provider(name)
    if not yes and not click.confirm(f"Remove provider '{name}'?"):
        click.echo("Cancelled")
        return
    problems = app.manager.remove_provider(name)
    echo_ok(f"Provider '{name}' removed")
    for problem in problems:
        echo_warning(problem)


@providers_group.command("show")
@click.argument("name")
@pass_app
@handle_errors
def show_cmd(app: AppContext, name: str) -> None:
    """Show one provider."""
    provider = app.manager.get_provider(name)
    data = provider.to_document()
    data["api_key"] = mask_api_key(provider.api_key)
    print_json(data)


@providers_group.command("check")
@pass_app
@handle_errors
def check_cmd(app: AppContext) -> None:
    """Report routes that reference undeclared providers."""
    problems = app.manager.validate_cross_references()
    if not problems:
        echo_ok("All routes reference existing providers")
        return
    for problem in problems:
        echo_warning(problem)
    raise SystemExit(1)


@providers_group.command("recommend")
@click.argument(
    "category",
    type=click.Choice(["background", "think", "longContext", "webSearch"]),
)
@pass_app
@handle_errors
def recommend_cmd(app: AppContext, category: str) -> None:
    """Suggest routes for CATEGORY based on the configured providers."""
    suggestions = recommend_routes(category, app.manager.list_providers())
    if not suggestions:
        click.echo("No suggestions for the configured providers.")
        return
    for route, reason in suggestions:
        click.echo(f"  {route:50s} {reason}")
