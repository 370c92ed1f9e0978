"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdsite.config import Settings, load_config
from mdsite.core.errors import SourceNotFoundError, TemplateError, UnreadableSourceError
from mdsite.core.models import BuildReport
from mdsite.core.pipeline import build_page, run_build
from mdsite.core.template import resolve_template


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


def _setup_logging(settings: Settings, verbose: bool) -> None:
    level = logging.INFO if verbose else settings.log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _echo_report(report: BuildReport, output_dir: Path) -> None:
    """Print the failure summary and a final count line."""
    for failure in report.failures:
        typer.echo(f"  FAILED {failure.source}: {failure.reason.value} ({failure.detail})", err=True)
    typer.echo(
        f"Built {len(report.written)} page(s) to {output_dir}/ - "
        f"{len(report.failures)} failed"
    )


def _resolve(settings: Settings, template_dir: Path):
    """Resolve the page template the same way for every command."""
    return resolve_template(
        template_dir,
        Path(settings.template_file) if settings.template_file else None,
        settings.header_file, settings.footer_file, settings.standalone,
    )


def build_cmd(
    source: Annotated[Optional[str], typer.Argument(help="Source directory (or single file)")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", "-o", help="Output directory")] = None,
    template: Annotated[Optional[str], typer.Option("--template", help="Template file with a {{ content }} marker")] = None,
    fragment: Annotated[bool, typer.Option("--fragment", help="Write body fragments when no template is found")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log each converted file")] = False,
    ):
    """Convert every markdown file under SOURCE into a mirrored HTML tree."""
    settings = _settings(overrides={
        "source_dir": source, "output_dir": out, "template_file": template,
        "standalone": False if fragment else None,
    })
    _setup_logging(settings, verbose)
    source_dir = Path(settings.source_dir)
    output_dir = Path(settings.output_dir)

    try:
        page_template = _resolve(settings, source_dir if source_dir.is_dir() else source_dir.parent)
        report = run_build(source_dir, output_dir, page_template, settings.frontmatter)
    except (SourceNotFoundError, TemplateError) as e:
        _fail("Build aborted", e)

    for path in report.written:
        typer.echo(f"  {path}")
    _echo_report(report, output_dir)
    if not report.ok:
        raise typer.Exit(1)


def render_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to convert")],
    template: Annotated[Optional[str], typer.Option("--template", help="Template file with a {{ content }} marker")] = None,
    fragment: Annotated[bool, typer.Option("--fragment", help="Write a body fragment when no template is found")] = False,
    ):
    """Convert a single markdown file and write the HTML to stdout."""
    settings = _settings(overrides={
        "template_file": template, "standalone": False if fragment else None,
    })
    _setup_logging(settings, verbose=False)
    source = Path(path)

    try:
        page_template = _resolve(settings, source.parent)
        page = build_page(source, source, Path("."), page_template, settings.frontmatter)
    except (TemplateError, UnreadableSourceError) as e:
        _fail("Render failed", e)

    typer.echo(page.html.decode("utf-8"), nl=False)
