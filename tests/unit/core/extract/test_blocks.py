"""Unit tests for core/extract/blocks.py"""

import pytest

from mdsite.core.extract.blocks import tokens_to_blocks
from mdsite.core.models import (
    Blockquote,
    CodeBlock,
    Heading,
    ListBlock,
    ListItem,
    Paragraph,
    Text,
    ThematicBreak,
)


def _parse_blocks(parser, md: str):
    return tokens_to_blocks(parser.parse(md))


def _item(text: str) -> ListItem:
    return ListItem(children=[Paragraph(children=[Text(text=text)])])


@pytest.mark.parametrize("md,level", [("# H\n", 1), ("### H\n", 3), ("###### H\n", 6), ("H\n---\n", 2)])
def test_heading_levels(parser, md, level):
    """ATX and setext headings keep their level."""
    blocks = _parse_blocks(parser, md)
    assert blocks == [Heading(level=level, children=[Text(text="H")])]


def test_seven_hashes_is_paragraph(parser):
    """More than six # is not a heading."""
    blocks = _parse_blocks(parser, "####### H\n")
    assert blocks == [Paragraph(children=[Text(text="####### H")])]


def test_paragraphs_split_on_blank_line(parser):
    """Blank lines separate paragraphs; single newlines stay inside one."""
    blocks = _parse_blocks(parser, "one\ntwo\n\nthree\n")
    assert blocks == [
        Paragraph(children=[Text(text="one\ntwo")]),
        Paragraph(children=[Text(text="three")]),
    ]


def test_tight_bullet_list(parser):
    """A list without blank lines between items is tight."""
    blocks = _parse_blocks(parser, "- one\n- two\n")
    assert blocks == [ListBlock(ordered=False, start=None, tight=True, items=[_item("one"), _item("two")])]


def test_star_bullets(parser):
    """* markers also produce an unordered list."""
    blocks = _parse_blocks(parser, "* one\n* two\n")
    assert blocks[0].ordered is False
    assert len(blocks[0].items) == 2


def test_loose_bullet_list(parser):
    """A blank line between items makes the list loose."""
    blocks = _parse_blocks(parser, "- one\n\n- two\n")
    assert blocks[0].tight is False
    assert blocks[0].items == (_item("one"), _item("two"))


def test_ordered_list_start(parser):
    """Ordered lists record their first number."""
    blocks = _parse_blocks(parser, "3. a\n4. b\n")
    assert blocks[0].ordered is True
    assert blocks[0].start == 3


def test_ordered_list_default_start(parser):
    blocks = _parse_blocks(parser, "1. a\n")
    assert blocks[0].start == 1


def test_nested_list(parser):
    """A nested list lives inside its parent item."""
    blocks = _parse_blocks(parser, "- outer\n  - inner\n")
    outer = blocks[0].items[0]
    assert outer.children[0] == Paragraph(children=[Text(text="outer")])
    assert isinstance(outer.children[1], ListBlock)
    assert outer.children[1].items == (_item("inner"),)


def test_fenced_code_language(parser):
    """The first word of the info string is the language hint."""
    blocks = _parse_blocks(parser, "```python title=x\nprint('x')\n```\n")
    assert blocks == [CodeBlock(language="python", text="print('x')\n")]


def test_fenced_code_no_language(parser):
    blocks = _parse_blocks(parser, "```\nraw *text*\n```\n")
    assert blocks == [CodeBlock(language=None, text="raw *text*\n")]


def test_indented_code(parser):
    """Indented code blocks have no language."""
    blocks = _parse_blocks(parser, "    indented code\n")
    assert blocks == [CodeBlock(language=None, text="indented code\n")]


def test_blockquote_nesting(parser):
    """Blockquotes contain nested blocks, including other blockquotes."""
    blocks = _parse_blocks(parser, "> # Title\n>\n> > inner\n")
    assert blocks == [Blockquote(children=[
        Heading(level=1, children=[Text(text="Title")]),
        Blockquote(children=[Paragraph(children=[Text(text="inner")])]),
    ])]


@pytest.mark.parametrize("md", ["---\n", "***\n", "___\n"])
def test_thematic_break(parser, md):
    assert _parse_blocks(parser, md) == [ThematicBreak()]


def test_sample_tokens_cover_all_blocks(sample_tokens):
    """Every top-level construct in the sample becomes exactly one block."""
    blocks = tokens_to_blocks(sample_tokens)
    assert len(blocks) == 8
    assert isinstance(blocks[-2], ThematicBreak)
