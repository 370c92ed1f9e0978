"""Block token-to-node conversion for a markdown-it token stream"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from mdsite.core.extract.inlines import tokens_to_inlines
from mdsite.core.models import (
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    ListBlock,
    ListItem,
    Paragraph,
    Text,
    ThematicBreak,
)


logger = logging.getLogger(__name__)

LIST_OPENERS = {'bullet_list_open', 'ordered_list_open'}


@dataclass
class _Frame:
    """An open container token and the nodes collected inside it."""
    opener: Any
    children: list = field(default_factory=list)
    tight: bool = False


def _heading_level(token) -> Optional[int]:
    """Extract heading level (1-6) from a heading_open token tag, else None."""
    if token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def _code_language(token) -> Optional[str]:
    """First word of a fence info string, e.g. 'python' for ```python title=x."""
    info = (token.info or '').strip()
    return info.split()[0] if info else None


def _list_start(token) -> Optional[int]:
    if token.type != 'ordered_list_open':
        return None
    start = token.attrGet('start')
    return int(start) if start is not None else 1


def _close(frame: _Frame, stack: list[_Frame]) -> Optional[Any]:
    """Build the node for a closed container, or None for unknown containers."""
    opener, children = frame.opener, frame.children
    kind = opener.type

    if kind == 'heading_open':
        return Heading(level=_heading_level(opener) or 1, children=children)
    if kind == 'paragraph_open':
        if opener.hidden:
            # tokenizer hides paragraphs inside tight list items
            for outer in reversed(stack):
                if outer.opener is not None and outer.opener.type in LIST_OPENERS:
                    outer.tight = True
                    break
        return Paragraph(children=children)
    if kind == 'blockquote_open':
        return Blockquote(children=children)
    if kind == 'list_item_open':
        return ListItem(children=children)
    if kind in LIST_OPENERS:
        return ListBlock(
            ordered=kind == 'ordered_list_open',
            start=_list_start(opener),
            tight=frame.tight,
            items=[c for c in children if isinstance(c, ListItem)],
        )
    return None


def _leaf(token) -> Optional[Block]:
    """Convert a self-contained block token (nesting 0) other than inline."""
    if token.type in ('fence', 'code_block'):
        language = _code_language(token) if token.type == 'fence' else None
        return CodeBlock(language=language, text=token.content)
    if token.type == 'hr':
        return ThematicBreak()
    if token.content:
        logger.debug("Unhandled block token %s kept as text", token.type)
        return Paragraph(children=[Text(text=token.content)])
    return None


def tokens_to_blocks(tokens: list) -> list[Block]:
    """Convert a markdown-it block token stream to a list of Block nodes."""
    stack: list[_Frame] = [_Frame(opener=None)]

    for tok in tokens:
        frame = stack[-1]
        if tok.type == 'inline':
            frame.children.extend(tokens_to_inlines(tok.children or []))
        elif tok.nesting == 1:
            stack.append(_Frame(opener=tok))
        elif tok.nesting == -1 and len(stack) > 1:
            closed = stack.pop()
            node = _close(closed, stack)
            if node is None:
                stack[-1].children.extend(closed.children)
            else:
                stack[-1].children.append(node)
        else:
            node = _leaf(tok)
            if node is not None:
                frame.children.append(node)

    return stack[0].children
