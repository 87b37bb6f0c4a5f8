"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from pubarchive.config import Settings, load_config, require_data_dir
from pubarchive.core.discover import collect_documents
from pubarchive.core.pipeline import BuildReport, run_build
from pubarchive.core.templates import write_starter_templates


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _configure_logging(settings: Settings, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _echo_report(report: BuildReport, output_dir: str) -> None:
    """Print per-phase counts and a summary line."""
    typer.echo(f"  folders created: {report.folders}")
    typer.echo(f"  indexes written: {report.indexes}")
    typer.echo(f"  assets: {report.assets_copied} copied, {report.assets_skipped} skipped")
    typer.echo(f"  feed: {report.feed}")
    typer.echo(
        f"Build complete - "
        f"{report.documents} document(s), "
        f"{report.pages_written} written, "
        f"{report.pages_skipped} skipped -> {output_dir}/"
    )


def build_cmd(
    data: Annotated[Optional[str], typer.Option("--data-dir", help="Root directory to scan")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    public: Annotated[Optional[str], typer.Option("--public-dir", help="Public directory name suffix")] = None,
    extensions: Annotated[Optional[str], typer.Option("--extensions", help="Comma-separated allowed extensions")] = None,
    templates: Annotated[Optional[str], typer.Option("--template-dir", help="Template directory")] = None,
    overwrite: Annotated[Optional[bool], typer.Option("--overwrite/--no-overwrite", help="Re-render existing pages")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Render every public document, the indexes and the RSS feed."""
    settings = _settings(overrides={
        "data_dir": data, "output_dir": out, "public_dir": public,
        "extensions": extensions, "template_dir": templates, "overwrite": overwrite,
    })
    _configure_logging(settings, verbose)
    try:
        require_data_dir(settings)
    except ValueError as e:
        _fail(str(e))

    try:
        report = run_build(settings)
    except (OSError, RuntimeError) as e:
        _fail("Build failed", e)
    _echo_report(report, settings.output_dir)


def list_cmd(
    data: Annotated[Optional[str], typer.Option("--data-dir", help="Root directory to scan")] = None,
    public: Annotated[Optional[str], typer.Option("--public-dir", help="Public directory name suffix")] = None,
    ):
    """List the documents a build would publish, newest first."""
    settings = _settings(overrides={"data_dir": data, "public_dir": public})
    _configure_logging(settings)
    try:
        root = require_data_dir(settings)
        docs = collect_documents(root, settings.public_dir, settings.extensions, Path(settings.output_dir))
    except ValueError as e:
        _fail(str(e))
    except (OSError, RuntimeError) as e:
        _fail("Scan failed", e)
    if not docs:
        typer.echo("No documents found.")
        raise typer.Exit(1)
    for doc in docs:
        typer.echo(f"{doc.date_iso}  {doc.url}  {doc.source_path}")


def init_cmd(
    templates: Annotated[Optional[str], typer.Option("--template-dir", help="Template directory")] = None,
    ):
    """Write the starter template set. Existing templates are kept."""
    settings = _settings(overrides={"template_dir": templates})
    try:
        results = write_starter_templates(Path(settings.template_dir))
    except OSError as e:
        _fail("Could not write templates", e)
    for path, written in results:
        typer.echo(f"  {'created' if written else 'exists'}: {path}")
    typer.echo(f"Templates ready in: {settings.template_dir}")
