"""CLI for fetching a single xeno-canto recording into the local sound library."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from xcfetch.config import get_settings, resolve_api_key
from xcfetch.errors import ConfigurationError, IdentifierParseError, XenoCantoError
from xcfetch.ingest.identifiers import parse_identifier
from xcfetch.ingest.xeno_canto_api import XenoCantoClient
from xcfetch.paths import default_paths
from xcfetch.pipeline import FetchRequest, FetchSummary, run_fetch
from xcfetch.storage.index import MergeOutcome

app = typer.Typer(help="Fetch recording metadata (and audio) from the xeno-canto API v3")


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")


def _print_summary(summary: FetchSummary) -> None:
    meta = summary.metadata
    typer.echo(f"XC{meta.xc_id}: {meta.en} ({meta.gen} {meta.sp})")
    typer.echo(f"Recordist: {meta.rec}")
    typer.echo(f"License: {meta.lic}")
    typer.echo(f"Attribution: {meta.attribution}")
    if summary.index_outcome is MergeOutcome.INSERTED:
        typer.secho("Index: entry added", fg=typer.colors.GREEN)
    elif summary.index_outcome is MergeOutcome.ALREADY_PRESENT:
        typer.secho("Index: already present, unchanged", fg=typer.colors.YELLOW)


@app.command()
def fetch(
    identifier: str = typer.Argument(..., help="Catalogue number, XC-prefixed id or xeno-canto URL"),
    metadata_only: bool = typer.Option(False, "--metadata-only", help="Skip the audio download"),
    no_index: bool = typer.Option(False, "--no-index", help="Do not update the shared sound index"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Directory for metadata and audio"),
    index: Optional[Path] = typer.Option(None, "--index", help="Path of the shared index JSON"),
    key: Optional[str] = typer.Option(None, "--key", help="API key (overrides XC_API_KEY)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Fetch one recording, write its metadata and audio, and index it."""
    configure_logging(verbose)
    settings = get_settings()

    try:
        parse_identifier(identifier)
        api_key = resolve_api_key(key, settings)
    except (IdentifierParseError, ConfigurationError) as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    default_output, default_index = default_paths(settings.xc_anchor_marker)
    request = FetchRequest(
        identifier=identifier,
        output_dir=output_dir or settings.xc_output_dir or default_output,
        index_path=None if no_index else (index or settings.xc_index_path or default_index),
        download_audio=not metadata_only,
    )

    client = XenoCantoClient(api_key=api_key, timeout=settings.xc_timeout)
    try:
        summary = run_fetch(request, client)
    except XenoCantoError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    _print_summary(summary)


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    app()
