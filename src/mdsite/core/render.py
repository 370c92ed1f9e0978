"""HTML rendering of Document trees

Every Text value and attribute is escaped exactly once, at the leaf where it is
emitted; container renderers only concatenate already-rendered markup.
"""

import html
from typing import Optional

from mdsite.core.models import Document, ListBlock, Paragraph
from mdsite.core.template import Template


INLINE_TAGS: dict[str, str] = {
    'emphasis': 'em',
    'strong':   'strong',
}


def escape(text: str) -> str:
    """Escape the five HTML special characters: & < > " '"""
    return html.escape(text, quote=True)


def _attrs(**values: Optional[str]) -> str:
    return ''.join(f' {k}="{escape(v)}"' for k, v in values.items() if v is not None)


# --- inline ---

def render_inline(node) -> str:
    kind = node.kind
    if kind == 'text':
        return escape(node.text)
    if kind in INLINE_TAGS:
        tag = INLINE_TAGS[kind]
        return f"<{tag}>{render_inlines(node.children)}</{tag}>"
    if kind == 'link':
        return f"<a{_attrs(href=node.href, title=node.title)}>{render_inlines(node.children)}</a>"
    if kind == 'image':
        return f"<img{_attrs(src=node.src, alt=node.alt, title=node.title)} />"
    if kind == 'code_span':
        return f"<code>{escape(node.text)}</code>"
    if kind == 'line_break':
        return "<br />"
    raise TypeError(f"Unknown inline node: {kind}")


def render_inlines(nodes) -> str:
    return ''.join(render_inline(n) for n in nodes)


# --- block ---

def _render_list(node: ListBlock) -> str:
    tag = 'ol' if node.ordered else 'ul'
    start = str(node.start) if node.ordered and node.start not in (None, 1) else None
    items = []
    for item in node.items:
        parts = []
        for child in item.children:
            if node.tight and isinstance(child, Paragraph):
                parts.append(render_inlines(child.children))
            else:
                parts.append(render_block(child))
        items.append(f"<li>{''.join(parts)}</li>")
    return f"<{tag}{_attrs(start=start)}>{''.join(items)}</{tag}>"


def render_block(node) -> str:
    kind = node.kind
    if kind == 'heading':
        return f"<h{node.level}>{render_inlines(node.children)}</h{node.level}>"
    if kind == 'paragraph':
        return f"<p>{render_inlines(node.children)}</p>"
    if kind == 'list':
        return _render_list(node)
    if kind == 'code_block':
        css = f"language-{node.language}" if node.language else None
        return f"<pre><code{_attrs(**{'class': css})}>{escape(node.text)}</code></pre>"
    if kind == 'blockquote':
        return f"<blockquote>{render_blocks(node.children)}</blockquote>"
    if kind == 'thematic_break':
        return "<hr />"
    raise TypeError(f"Unknown block node: {kind}")


def render_blocks(nodes) -> str:
    return ''.join(render_block(n) for n in nodes)


def render_body(doc: Document) -> str:
    """Render a Document's blocks to an HTML fragment; empty document -> ''."""
    return render_blocks(doc.blocks)


def render(doc: Document, template: Optional[Template] = None) -> bytes:
    """Render a Document to UTF-8 HTML, wrapped in template when given."""
    body = render_body(doc)
    if template is not None:
        body = template.apply(body)
    return body.encode('utf-8')
