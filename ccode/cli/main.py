# -*- coding: utf-8 -*-
"""ccode command-line entry point."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import click

from .. import __version__
from ..constant import LOG_LEVEL_ENV
from ..profiles import ProfileStore
from ..router import RouterConfigManager
from .backups_cmd import backups_group
from .profiles_cmd import profiles_group, routers_group
from .providers_cmd import providers_group
from .utils import AppContext


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.version_option(__version__, prog_name="ccode")
@click.option(
    "--profiles-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Profile store file (default: ~/.config/ccode/config.json)",
)
@click.option(
    "--router-config",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="claude-code-router config (default: "
    "~/.claude-code-router/config.json)",
)
@click.option(
    "--log-level",
    default=lambda: os.environ.get(LOG_LEVEL_ENV, "warning"),
    type=click.Choice(
        ["critical", "error", "warning", "info", "debug"],
        case_sensitive=False,
    ),
    show_default="warning",
    help=f"Log level (env: {LOG_LEVEL_ENV})",
)
@click.pass_context
def cli(
    ctx: click.Context,
    profiles_path: Optional[Path],
    router_config: Optional[Path],
    log_level: str,
) -> None:
    """Switch between Claude API profiles and claude-code-router setups."""
    setup_logging(log_level)
    ctx.obj = AppContext(
        ProfileStore(profiles_path),
        RouterConfigManager(router_config),
    )


cli.add_command(profiles_group)
cli.add_command(routers_group)
cli.add_command(providers_group)
cli.add_command(backups_group)


def main() -> None:
    cli()  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    main()
