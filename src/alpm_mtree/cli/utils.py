"""
alpm-mtree CLI utilities.

Shared helpers used across CLI modules.
"""

import logging
import platform
from pathlib import Path

import typer

from alpm_mtree._version import get_version
from alpm_mtree.core.config import MtreeConfig, load_config
from alpm_mtree.core.errors import ConfigError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"alpm-mtree version {get_version()}")
        typer.echo(
            f"Python {platform.python_implementation()} {platform.python_version()} "
            f"on {platform.system()} {platform.machine()}"
        )
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send library logging to stderr; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def resolve_config(config_path: str | None) -> MtreeConfig:
    """Load configuration or exit with a message."""
    try:
        return load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(code=2)
