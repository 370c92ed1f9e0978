"""Source discovery, frontmatter extraction, and markdown-it tokenization"""

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from markdown_it import MarkdownIt

from mdsite.core.extract.blocks import tokens_to_blocks
from mdsite.core.models import Document


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)', re.DOTALL)
MD_EXTENSIONS = {'.md', '.markdown'}


@lru_cache(maxsize=None)
def _make_parser() -> MarkdownIt:
    """CommonMark tokenizer with raw HTML treated as text."""
    return MarkdownIt('commonmark', options_update={'html': False})


def _decode(raw: Union[str, bytes]) -> str:
    if isinstance(raw, bytes):
        return raw.decode('utf-8', errors='replace')
    return raw


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body); text without a valid YAML mapping header is returned as-is."""
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    if any(not line.strip() for line in m.group(0).splitlines()[1:-1]):
        # a blank line means the opening --- is a thematic break, not a header
        return {}, text
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        logger.warning("Ignoring invalid YAML frontmatter: %s", e)
        return {}, text
    if not isinstance(fm, dict):
        logger.warning("Ignoring frontmatter: expected a mapping, got %s", type(fm).__name__)
        return {}, text
    return fm, text[m.end():]


def parse_markdown(raw: Union[str, bytes], frontmatter: bool = True) -> Document:
    """Parse markdown text into a Document. Never raises on malformed input."""
    text = _decode(raw)
    fm: dict[str, Any] = {}
    if frontmatter:
        fm, text = _strip_frontmatter(text)
    tokens = _make_parser().parse(text)
    return Document(blocks=tokens_to_blocks(tokens), frontmatter=fm)


def is_markdown(path: Path) -> bool:
    return path.suffix.lower() in MD_EXTENSIONS


def discover_files(path: Path, exclude: Optional[Path] = None) -> list[Path]:
    """Return sorted markdown files under path, or [path] if a single file.

    Files under `exclude` (e.g. an output directory nested in the source tree) are skipped.
    """
    if path.is_file():
        return [path] if is_markdown(path) else []
    excluded = exclude.resolve() if exclude is not None else None
    return sorted(
        p for p in path.rglob('*')
        if is_markdown(p) and not (excluded and excluded in p.resolve().parents)
    )
