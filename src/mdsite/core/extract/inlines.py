"""Inline token-to-node conversion for markdown-it inline children"""

from typing import Optional

from mdsite.core.models import CodeSpan, Emphasis, Image, Inline, LineBreak, Link, Strong, Text


TEXT_TOKENS = {'text', 'text_special', 'html_inline'}


def _append_text(nodes: list, content: str) -> None:
    """Append text, merging into a preceding Text node so spans never fragment."""
    if not content:
        return
    if nodes and isinstance(nodes[-1], Text):
        nodes[-1] = Text(text=nodes[-1].text + content)
    else:
        nodes.append(Text(text=content))


def plain_text(tokens: list) -> str:
    """Flatten inline tokens to their text content (used for image alt text)."""
    parts = []
    for tok in tokens:
        if tok.type in TEXT_TOKENS or tok.type == 'code_inline':
            parts.append(tok.content)
        elif tok.type in ('softbreak', 'hardbreak'):
            parts.append('\n')
        elif tok.type == 'image':
            parts.append(plain_text(tok.children or []))
    return ''.join(parts)


def _wrap(opener, children: list) -> Optional[Inline]:
    """Build the container node for a closed opener token."""
    if opener.type == 'em_open':
        return Emphasis(children=children)
    if opener.type == 'strong_open':
        return Strong(children=children)
    if opener.type == 'link_open':
        return Link(href=opener.attrGet('href') or '', title=opener.attrGet('title'), children=children)
    return None


def tokens_to_inlines(tokens: list) -> list[Inline]:
    """Convert a flat markdown-it inline token list to nested Inline nodes."""
    stack: list[tuple[object, list]] = [(None, [])]

    for tok in tokens:
        nodes = stack[-1][1]
        if tok.type in TEXT_TOKENS:
            _append_text(nodes, tok.content)
        elif tok.type == 'softbreak':
            _append_text(nodes, '\n')
        elif tok.type == 'hardbreak':
            nodes.append(LineBreak())
        elif tok.type == 'code_inline':
            nodes.append(CodeSpan(text=tok.content))
        elif tok.type == 'image':
            nodes.append(Image(
                src=tok.attrGet('src') or '',
                alt=plain_text(tok.children or []),
                title=tok.attrGet('title'),
            ))
        elif tok.nesting == 1:
            stack.append((tok, []))
        elif tok.nesting == -1 and len(stack) > 1:
            opener, children = stack.pop()
            node = _wrap(opener, children)
            parent = stack[-1][1]
            if node is None:
                # unknown container: keep its children in place
                for child in children:
                    if isinstance(child, Text):
                        _append_text(parent, child.text)
                    else:
                        parent.append(child)
            else:
                parent.append(node)
        else:
            _append_text(nodes, tok.content)

    return stack[0][1]
