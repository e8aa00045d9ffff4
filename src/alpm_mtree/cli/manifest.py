"""
Manifest CLI commands.

``parse``, ``check`` and ``render`` operate on one .MTREE file, plain or
gzip-compressed.
"""

import json
from pathlib import Path

import typer
from rich.console import Console

from alpm_mtree.core.config import MtreeConfig
from alpm_mtree.core.errors import LoadError
from alpm_mtree.core.loader import parse_file
from alpm_mtree.core.parser import ParseResult
from alpm_mtree.core.report import print_report
from alpm_mtree.core.writer import render_entry, render_manifest

from .utils import resolve_config


def _load(path: Path) -> ParseResult:
    try:
        return parse_file(path)
    except LoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)


def _print_diagnostics(result: ParseResult, config: MtreeConfig) -> None:
    """Print diagnostics to stderr using the configured report style."""
    if not result.diagnostics:
        return
    console = Console(stderr=True, no_color=not config.report.color, highlight=False)
    print_report(
        result.source,
        (d.as_triple() for d in result.diagnostics),
        file=result.source_name,
        context=config.report.context,
        limit=config.report.max_diagnostics,
        console=console,
    )
    hidden = len(result.diagnostics) - config.report.max_diagnostics
    if config.report.max_diagnostics and hidden > 0:
        typer.echo(f"... {hidden} more diagnostic(s) not shown", err=True)


def _result_to_json(result: ParseResult) -> str:
    payload = {
        "entries": [
            entry.model_dump(mode="json", exclude_none=True) for entry in result.manifest
        ],
        "diagnostics": [d.model_dump(mode="json") for d in result.diagnostics],
    }
    return json.dumps(payload, indent=2)


def parse_command(
    path: Path = typer.Argument(..., help="Path to a .MTREE file (plain or gzip)"),
    format: str = typer.Option("text", "--format", "-f", help="Output format: 'text' or 'json'"),
    config: str | None = typer.Option(None, "--config", "-c", help="Path to mtree.toml"),
) -> None:
    """
    Parse a manifest and print its resolved entries.
    """
    if format not in ("text", "json"):
        typer.echo(f"Unknown format: {format} (expected 'text' or 'json')", err=True)
        raise typer.Exit(code=2)

    cfg = resolve_config(config)
    result = _load(path)

    if format == "json":
        typer.echo(_result_to_json(result))
    else:
        for entry in result.manifest:
            typer.echo(render_entry(entry))
        _print_diagnostics(result, cfg)

    if result.fatal:
        raise typer.Exit(code=1)


def check_command(
    path: Path = typer.Argument(..., help="Path to a .MTREE file (plain or gzip)"),
    strict: bool | None = typer.Option(
        None, "--strict/--no-strict", help="Fail on recoverable diagnostics too"
    ),
    config: str | None = typer.Option(None, "--config", "-c", help="Path to mtree.toml"),
) -> None:
    """
    Report every problem in a manifest.

    Exits 1 on a fatal diagnostic, or on any diagnostic in strict mode.
    """
    cfg = resolve_config(config)
    if strict is None:
        strict = cfg.check.strict

    result = _load(path)
    _print_diagnostics(result, cfg)

    if result.fatal or (strict and result.diagnostics):
        typer.echo(
            f"{result.source_name}: {len(result.diagnostics)} problem(s), "
            f"{len(result.manifest)} entries",
            err=True,
        )
        raise typer.Exit(code=1)

    if result.diagnostics:
        typer.echo(
            f"OK with warnings: {len(result.manifest)} entries, "
            f"{len(result.diagnostics)} recoverable problem(s)"
        )
    else:
        typer.echo(f"OK: {len(result.manifest)} entries")


def render_command(
    path: Path = typer.Argument(..., help="Path to a .MTREE file (plain or gzip)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
    no_header: bool = typer.Option(False, "--no-header", help="Omit the #mtree header"),
    config: str | None = typer.Option(None, "--config", "-c", help="Path to mtree.toml"),
) -> None:
    """
    Re-emit a manifest with every default resolved into its entries.
    """
    cfg = resolve_config(config)
    result = _load(path)
    _print_diagnostics(result, cfg)

    text = render_manifest(result.manifest, header=not no_header)
    if output is not None:
        output.write_text(text, encoding="utf-8")
        typer.echo(f"Wrote {len(result.manifest)} entries to {output}", err=True)
    else:
        typer.echo(text, nl=False)

    if result.fatal:
        raise typer.Exit(code=1)
