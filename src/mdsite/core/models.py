"""Document tree, page, and build report models for the parse -> render -> write pipeline"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- inline nodes ---

class Text(_Node):
    """Literal text; stored unescaped."""
    kind: Literal["text"] = "text"
    text: str


class Emphasis(_Node):
    kind: Literal["emphasis"] = "emphasis"
    children: tuple[Inline, ...] = ()


class Strong(_Node):
    kind: Literal["strong"] = "strong"
    children: tuple[Inline, ...] = ()


class Link(_Node):
    kind: Literal["link"] = "link"
    href: str
    title: Optional[str] = None
    children: tuple[Inline, ...] = ()


class Image(_Node):
    kind: Literal["image"] = "image"
    src: str
    alt: str = ""
    title: Optional[str] = None


class CodeSpan(_Node):
    kind: Literal["code_span"] = "code_span"
    text: str


class LineBreak(_Node):
    """Hard line break (two trailing spaces or a backslash)."""
    kind: Literal["line_break"] = "line_break"


Inline = Annotated[
    Union[Text, Emphasis, Strong, Link, Image, CodeSpan, LineBreak],
    Field(discriminator="kind"),
]


# --- block nodes ---

class Heading(_Node):
    kind: Literal["heading"] = "heading"
    level: int = Field(..., ge=1, le=6)
    children: tuple[Inline, ...] = ()


class Paragraph(_Node):
    kind: Literal["paragraph"] = "paragraph"
    children: tuple[Inline, ...] = ()


class ListItem(_Node):
    kind: Literal["list_item"] = "list_item"
    children: tuple[Block, ...] = ()


class ListBlock(_Node):
    """Ordered or unordered list; tight lists render item paragraphs without <p>."""
    kind: Literal["list"] = "list"
    ordered: bool = False
    start: Optional[int] = None     # first number of an ordered list; None for bullets
    tight: bool = True
    items: tuple[ListItem, ...] = ()


class CodeBlock(_Node):
    kind: Literal["code_block"] = "code_block"
    language: Optional[str] = None
    text: str = ""


class Blockquote(_Node):
    kind: Literal["blockquote"] = "blockquote"
    children: tuple[Block, ...] = ()


class ThematicBreak(_Node):
    kind: Literal["thematic_break"] = "thematic_break"


Block = Annotated[
    Union[Heading, Paragraph, ListBlock, CodeBlock, Blockquote, ThematicBreak],
    Field(discriminator="kind"),
]


for _model in (Emphasis, Strong, Link, Heading, Paragraph, ListItem, ListBlock, Blockquote):
    _model.model_rebuild()


class Document(_Node):
    """Parsed representation of one markdown source."""
    blocks: tuple[Block, ...] = ()
    frontmatter: dict[str, Any] = {}


# --- walker results ---

class Page(_Node):
    """Rendered HTML paired with its destination path."""
    source: Path
    destination: Path
    html: bytes


class FailureReason(str, Enum):
    unreadable_source = "unreadable_source"
    unwritable_destination = "unwritable_destination"


class FileFailure(BaseModel):
    source: Path
    reason: FailureReason
    detail: str


class BuildReport(BaseModel):
    """Outcome of a batch build: pages written and per-file failures."""
    written: list[Path] = []
    failures: list[FileFailure] = []

    @property
    def ok(self) -> bool:
        return not self.failures
