"""
alpm-mtree CLI.

- manifest.py: parse / check / render commands
- utils.py: version, logging and config helpers
"""

import typer

from .manifest import check_command, parse_command, render_command
from .utils import configure_logging, version_callback

app = typer.Typer(
    help="""alpm-mtree – inspect ALPM .MTREE package manifests

Commands:
  • parse   → print resolved entries (text or json)
  • check   → report problems, non-zero exit on failure
  • render  → re-emit the manifest with defaults resolved
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """alpm-mtree main callback for global options."""
    configure_logging(verbose)


app.command(name="parse")(parse_command)
app.command(name="check")(check_command)
app.command(name="render")(render_command)


def main() -> None:
    app()


__all__ = ["app", "main"]
