"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from manupub.config import Settings, load_config
from manupub.core.pipeline import build_items, check_manifest, run_build


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _abspath(path: Optional[str]) -> Optional[str]:
    """Resolve a CLI-supplied path against the working directory."""
    return str(Path(path).resolve()) if path else None


def _settings(ctx: typer.Context, overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and apply the log level."""
    overrides = dict(overrides or {})
    if ctx.obj:
        overrides.setdefault("log_level", ctx.obj.get("log_level"))
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail("Invalid configuration", e)
    logging.getLogger().setLevel(settings.log_level)
    return settings


def build_cmd(
    ctx: typer.Context,
    source: Annotated[Optional[str], typer.Argument(help="Manuscript directory")] = None,
    manifest: Annotated[Optional[str], typer.Option("--manifest", help="Order manifest file")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    limit: Annotated[Optional[int], typer.Option("--preview-limit", help="Max preview characters")] = None,
    direction: Annotated[Optional[str], typer.Option("--order-direction", help="append or prepend")] = None,
    unlisted: Annotated[Optional[str], typer.Option("--unlisted", help="drop or append files missing from the manifest")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Derivation threads")] = None,
    ):
    """Run the full pipeline: discover -> order -> derive -> link -> export."""
    settings = _settings(ctx, overrides={
        "source_dir": source, "manifest": _abspath(manifest), "output_dir": out,
        "preview_limit": limit, "order_direction": direction,
        "unlisted": unlisted, "workers": workers,
    })
    try:
        results = run_build(settings)
    except RuntimeError as e:
        _fail("Export failed", e)
    for item_id, html_path in results:
        typer.echo(f"  {item_id} -> {html_path}")
    if not results:
        typer.echo(f"No items built. Check {settings.manifest} and {settings.source_dir}/.")
        return
    typer.echo(f"Built {len(results)} item(s) to {Path(settings.output_dir)}/")


def list_cmd(
    ctx: typer.Context,
    source: Annotated[Optional[str], typer.Argument(help="Manuscript directory")] = None,
    manifest: Annotated[Optional[str], typer.Option("--manifest", help="Order manifest file")] = None,
    ):
    """Print items in reading order: position, url, title and preview."""
    settings = _settings(ctx, overrides={"source_dir": source, "manifest": _abspath(manifest)})
    items = build_items(settings)
    if not items:
        typer.echo("No items found.")
        raise typer.Exit(1)
    for item in items:
        typer.echo(f"{item.order:3d}  {item.url}  {item.title}")
        if item.preview:
            typer.echo(f"     {item.preview.splitlines()[0]}")


def check_cmd(
    ctx: typer.Context,
    source: Annotated[Optional[str], typer.Argument(help="Manuscript directory")] = None,
    manifest: Annotated[Optional[str], typer.Option("--manifest", help="Order manifest file")] = None,
    ):
    """Compare the manifest with the files on disk. Exits 1 if entries are missing."""
    settings = _settings(ctx, overrides={"source_dir": source, "manifest": _abspath(manifest)})
    report = check_manifest(settings)
    for entry in report.missing:
        typer.echo(f"  missing: {entry}")
    for entry in report.duplicates:
        typer.echo(f"  duplicate: {entry}")
    for entry in report.unlisted:
        typer.echo(f"  unlisted: {entry}")
    if report.clean:
        typer.echo("Manifest matches sources.")
    typer.echo(
        f"Check complete - "
        f"{len(report.missing)} missing, "
        f"{len(report.duplicates)} duplicate, "
        f"{len(report.unlisted)} unlisted"
    )
    if report.missing:
        raise typer.Exit(1)
