"""Site walker: discover sources, convert each to a page, write, and report"""

import logging
from pathlib import Path
from typing import Optional

from mdsite.core.errors import (
    FileError,
    SourceNotFoundError,
    UnreadableSourceError,
    UnwritableDestinationError,
)
from mdsite.core.models import BuildReport, FailureReason, FileFailure, Page
from mdsite.core.parse import discover_files, is_markdown, parse_markdown
from mdsite.core.render import render
from mdsite.core.template import Template


logger = logging.getLogger(__name__)

FAILURE_REASONS: dict[type, FailureReason] = {
    UnreadableSourceError:      FailureReason.unreadable_source,
    UnwritableDestinationError: FailureReason.unwritable_destination,
}


def output_path(source: Path, source_dir: Path, output_dir: Path) -> Path:
    """Mirror source's path relative to source_dir under output_dir, with an .html suffix.

    A single-file build (source == source_dir) maps to output_dir / <stem>.html.
    """
    rel = Path(source.name) if source == source_dir else source.relative_to(source_dir)
    return output_dir / rel.with_suffix('.html')


def _nested_output(source_dir: Path, output_dir: Path) -> Optional[Path]:
    """output_dir when it lies strictly inside source_dir, else None."""
    src, out = source_dir.resolve(), output_dir.resolve()
    return output_dir if src in out.parents else None


def build_page(
    source: Path,
    source_dir: Path,
    output_dir: Path,
    template: Optional[Template] = None,
    frontmatter: bool = True,
    ) -> Page:
    """Read, parse, and render a single source file into a Page."""
    try:
        raw = source.read_bytes()
    except OSError as e:
        raise UnreadableSourceError(source, e) from e

    doc = parse_markdown(raw, frontmatter=frontmatter)
    logger.debug("Parsed %s: %d block(s)", source, len(doc.blocks))
    return Page(
        source=source,
        destination=output_path(source, source_dir, output_dir),
        html=render(doc, template),
    )


def write_page(page: Page) -> Path:
    try:
        page.destination.parent.mkdir(parents=True, exist_ok=True)
        page.destination.write_bytes(page.html)
    except OSError as e:
        raise UnwritableDestinationError(page.destination, e) from e
    return page.destination


def run_build(
    source_dir: Path,
    output_dir: Path,
    template: Optional[Template] = None,
    frontmatter: bool = True,
    ) -> BuildReport:
    """Convert every markdown file under source_dir into output_dir.

    Per-file read/write failures are collected in the report and do not stop the
    batch. Raises SourceNotFoundError before processing anything if source_dir is
    neither a directory nor a markdown file.
    """
    if not (source_dir.is_dir() or (source_dir.is_file() and is_markdown(source_dir))):
        raise SourceNotFoundError(source_dir)

    report = BuildReport()
    files = discover_files(source_dir, exclude=_nested_output(source_dir, output_dir))
    logger.info("Building %d file(s) from %s into %s", len(files), source_dir, output_dir)

    for src in files:
        try:
            page = build_page(src, source_dir, output_dir, template, frontmatter)
            report.written.append(write_page(page))
            logger.info("%s -> %s", src, page.destination)
        except FileError as e:
            logger.warning("Failed %s: %s", src, e)
            report.failures.append(FileFailure(
                source=src,
                reason=FAILURE_REASONS[type(e)],
                detail=str(e),
            ))

    logger.info("Done. written=%d failed=%d", len(report.written), len(report.failures))
    return report
