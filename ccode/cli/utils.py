# -*- coding: utf-8 -*-
from __future__ import annotations

import functools
import json
from typing import Any, Callable

import click

from ..errors import CcodeError
from ..profiles import ProfileStore
from ..router import BootstrapResolver, RouterConfigManager


class AppContext:
    """Engine objects shared by every command through ``ctx.obj``."""

    def __init__(self, store: ProfileStore, manager: RouterConfigManager):
        self.store = store
        self.manager = manager

    @property
    def resolver(self) -> BootstrapResolver:
        return BootstrapResolver(self.store, self.manager)


pass_app = click.make_pass_decorator(AppContext)


def print_json(data: Any) -> None:
    click.echo(json.dumps(data, ensure_ascii=False, indent=2))


def echo_ok(message: str) -> None:
    click.echo(click.style(f"✓ {message}", fg="green"))


def echo_warning(message: str) -> None:
    click.echo(click.style(f"! {message}", fg="yellow"))


def fail(message: str) -> None:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    raise SystemExit(1)


def handle_errors(func: Callable) -> Callable:
    """Turn engine errors into a red message and exit status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except CcodeError as exc:
            fail(str(exc))

    return wrapper


def mask_api_key(api_key: str, visible_chars: int = 4) -> str:
    """Mask an API key for safe display.

    Example: ``"sk-abcdefghijk"`` → ``"sk-*******hijk"``
    """
    if not api_key:
        return ""
    if len(api_key) <= visible_chars:
        return "*" * len(api_key)
    prefix = api_key[:3] if len(api_key) > 3 else ""
    suffix = api_key[-visible_chars:]
    hidden_len = len(api_key) - len(prefix) - visible_chars
    return f"{prefix}{'*' * max(hidden_len, 4)}{suffix}"
