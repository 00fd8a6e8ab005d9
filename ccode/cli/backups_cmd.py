# -*- coding: utf-8 -*-
"""CLI commands for claude-code-router config backups."""
from __future__ import annotations

import click

from ..constant import BACKUP_KEEP_COUNT
from .utils import AppContext, echo_ok, handle_errors, pass_app


@click.group("backup")
def backups_group() -> None:
    """Manage backups of the claude-code-router config."""


@backups_group.command("list")
@pass_app
@handle_errors
def list_cmd(app: AppContext) -> None:
    """List backups, newest first."""
    names = app.manager.backups.list_backups()
    if not names:
        click.echo("No backups.")
        return
    for name in names:
        click.echo(name)


@backups_group.command("create")
@pass_app
@handle_errors
def create_cmd(app: AppContext) -> None:
    """Back up the current config."""
    name = app.manager.backups.create_backup()
    echo_ok(f"Backup created: {name}")


@backups_group.command("restore")
@click.argument("name")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@pass_app
@handle_errors
def restore_cmd(app: AppContext, name: str, yes: bool) -> None:
    """Replace the current config with backup NAME."""
    if not yes and not click.confirm(f"Restore {name} over the current config?"):
        click.echo("Cancelled")
        return
    safety = app.manager.backups.restore(name)
    echo_ok(f"Restored {name}")
    if safety:
        click.echo(f"  previous config saved as {safety}")


@backups_group.command("delete")
@click.argument("name")
@pass_app
@handle_errors
def delete_cmd(app: AppContext, name: str) -> None:
    """Delete backup NAME."""
    app.manager.backups.delete(name)
    echo_ok(f"Deleted {name}")


@backups_group.command("cleanup")
@click.option(
    "--keep",
    type=int,
    default=BACKUP_KEEP_COUNT,
    show_default=True,
    help="Number of newest backups to keep",
)
@pass_app
@handle_errors
def cleanup_cmd(app: AppContext, keep: int) -> None:
    """Delete all but the newest backups."""
    removed = app.manager.backups.cleanup(keep)
    echo_ok(f"Removed {removed} backup(s)")
