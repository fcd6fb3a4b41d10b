"""File discovery, frontmatter extraction, and markdown-it parsing into the typed syntax tree"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from mdpress.core import nodes as n
from mdpress.core.nodes import extract_text
from mdpress.core.utils.tokens import cell_align, heading_level


logger = logging.getLogger(__name__)

FRONTMATTER_OPEN_RE = re.compile(r'\A---[ \t]*\r?\n')
FRONTMATTER_CLOSE_RE = re.compile(r'^---[ \t]*(?:\r?\n|\Z)', re.M)
MD_EXTENSIONS = {'.md', '.mdx'}
TASK_CHECKBOX_CLASS = 'task-list-item-checkbox'


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with a leading YAML header removed.

    Never raises: a missing closing delimiter, invalid YAML, or a non-mapping
    header all yield ({}, text) with the input untouched.
    """
    opening = FRONTMATTER_OPEN_RE.match(text)
    if not opening:
        return {}, text
    closing = FRONTMATTER_CLOSE_RE.search(text, opening.end())
    if not closing:
        return {}, text

    header = text[opening.end():closing.start()]
    try:
        fm = yaml.safe_load(header) if header.strip() else {}
    except yaml.YAMLError as e:
        logger.warning("Ignoring invalid YAML frontmatter: %s", e)
        return {}, text
    if fm is None:
        fm = {}
    if not isinstance(fm, dict):
        logger.warning("Ignoring frontmatter that is not a mapping (%s)", type(fm).__name__)
        return {}, text
    return fm, text[closing.end():].lstrip('\r\n')


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)


def make_parser(gfm: bool = True) -> MarkdownIt:
    """Build a MarkdownIt instance: GFM-like (tables, strikethrough, autolinks, task lists) or plain CommonMark."""
    if gfm:
        md = MarkdownIt('gfm-like')
        md.use(tasklists_plugin)
    else:
        md = MarkdownIt('commonmark')
    md.use(footnote_plugin)
    # Definitions stay where they were written; the footnote pass numbers and
    # collects them itself, unreferenced ones included.
    md.disable('footnote_tail')
    return md


def parse_markdown(body: str, gfm: bool = True) -> n.Root:
    """Parse a markdown body (no frontmatter) into a fresh syntax tree."""
    env: dict[str, Any] = {}
    tokens = make_parser(gfm).parse(body, env)
    root = n.Root(children=_blocks(SyntaxTreeNode(tokens).children))
    root.children.extend(_inline_footnotes(env))
    return root


# --- block conversion ---

def _blocks(children) -> list[n.Node]:
    out: list[n.Node] = []
    for child in children:
        out.extend(_block(child))
    return out


def _block(node) -> list[n.Node]:
    t = node.type
    if t == 'paragraph':
        return [n.Paragraph(children=_inline_of(node))]
    if t == 'heading':
        return [n.Heading(depth=heading_level(node) or 1, children=_inline_of(node))]
    if t == 'hr':
        return [n.ThematicBreak()]
    if t == 'blockquote':
        return [n.Blockquote(children=_blocks(node.children))]
    if t in ('bullet_list', 'ordered_list'):
        return [_list(node)]
    if t == 'list_item':
        return [_list_item(node)]
    if t in ('fence', 'code_block'):
        return [_code(node)]
    if t == 'html_block':
        return [n.Html(value=node.content)]
    if t == 'table':
        return [_table(node)]
    if t == 'footnote_reference':
        return [_footnote_definition(node)]
    if t == 'inline':
        return [n.Paragraph(children=_inlines(node.children))]
    # Unrecognized construct: keep its content rather than failing.
    if node.children:
        return _blocks(node.children)
    return [n.Paragraph(children=[n.Text(value=node.content)])] if node.content else []


def _list(node) -> n.List:
    items = [_list_item(item) for item in node.children if item.type == 'list_item']
    loose = any(
        child.type == 'paragraph' and not child.hidden
        for item in node.children for child in item.children
    )
    start = None
    if node.type == 'ordered_list':
        start = int(node.attrs.get('start', 1))
    return n.List(children=items, ordered=node.type == 'ordered_list', start=start, spread=loose)


def _list_item(node) -> n.ListItem:
    item = n.ListItem(children=_blocks(node.children))
    first = item.children[0] if item.children else None
    if isinstance(first, n.Paragraph) and first.children:
        head = first.children[0]
        if isinstance(head, n.Html) and TASK_CHECKBOX_CLASS in head.value:
            item.checked = 'checked' in head.value.replace(TASK_CHECKBOX_CLASS, '')
            del first.children[0]
            if first.children and isinstance(first.children[0], n.Text):
                first.children[0].value = first.children[0].value.lstrip(' ')
    return item


def _code(node) -> n.Code:
    value = node.content[:-1] if node.content.endswith('\n') else node.content
    lang = meta = None
    if node.type == 'fence':
        info = (node.info or '').strip()
        if info:
            lang, _, rest = info.partition(' ')
            meta = rest.strip() or None
    return n.Code(value=value, lang=lang, meta=meta)


def _table(node) -> n.Table:
    rows: list[n.TableRow] = []
    for section in node.children:
        for tr in section.children:
            rows.append(n.TableRow(
                header=section.type == 'thead',
                children=[n.TableCell(children=_inline_of(cell)) for cell in tr.children],
            ))
    align = [cell_align(cell) for cell in node.children[0].children[0].children] if rows else []
    return n.Table(children=rows, align=align)


def _footnote_key(meta: dict) -> str:
    """Labelled footnotes are keyed by label, ^[inline] ones by their parser id."""
    if meta.get('label') is not None:
        return str(meta['label'])
    return f"^{meta.get('id', '')}"


def _footnote_definition(node) -> n.FootnoteDefinition:
    meta = node.meta or {}
    return n.FootnoteDefinition(
        identifier=_footnote_key(meta),
        label=meta.get('label'),
        children=_blocks(node.children),
    )


def _inline_footnotes(env: dict[str, Any]) -> list[n.FootnoteDefinition]:
    """Definitions for ^[inline] footnotes, whose content only lives in the parser env."""
    found = env.get('footnotes', {}).get('list', {})
    return [
        n.FootnoteDefinition(
            identifier=_footnote_key({'id': fid}),
            children=[n.Paragraph(children=_inlines(SyntaxTreeNode(item['tokens']).children))],
        )
        for fid, item in sorted(found.items())
        if item.get('tokens')
    ]


# --- inline conversion ---

def _inline_of(block) -> list[n.Node]:
    """Inline children of a paragraph/heading/cell, skipping non-inline helpers."""
    out: list[n.Node] = []
    for child in block.children:
        if child.type == 'inline':
            out.extend(_inlines(child.children))
    return _merge_text(out)


def _inlines(children) -> list[n.Node]:
    out: list[n.Node] = []
    for child in children:
        converted = _inline(child)
        if converted is not None:
            out.append(converted)
    return _merge_text(out)


def _inline(node) -> n.Node | None:
    t = node.type
    if t in ('text', 'text_special'):
        return n.Text(value=node.content)
    if t == 'softbreak':
        return n.Text(value='\n')
    if t == 'hardbreak':
        return n.Break()
    if t == 'em':
        return n.Emphasis(children=_inlines(node.children))
    if t == 'strong':
        return n.Strong(children=_inlines(node.children))
    if t == 's':
        return n.Delete(children=_inlines(node.children))
    if t == 'code_inline':
        return n.InlineCode(value=node.content)
    if t == 'link':
        return n.Link(
            url=str(node.attrs.get('href', '')),
            title=node.attrs.get('title'),
            children=_inlines(node.children),
        )
    if t == 'image':
        return n.Image(
            url=str(node.attrs.get('src', '')),
            alt=extract_text(n.Paragraph(children=_inlines(node.children))),
            title=node.attrs.get('title'),
        )
    if t == 'html_inline':
        return n.Html(value=node.content)
    if t == 'footnote_ref':
        meta = node.meta or {}
        return n.FootnoteReference(identifier=_footnote_key(meta), label=meta.get('label'))
    # Unrecognized inline: degrade to its literal text.
    if node.children:
        return n.Text(value=extract_text(n.Paragraph(children=_inlines(node.children))))
    return n.Text(value=node.content) if node.content else None


def _merge_text(nodes: list[n.Node]) -> list[n.Node]:
    """Fold adjacent Text nodes (soft breaks included) into one."""
    merged: list[n.Node] = []
    for node in nodes:
        if isinstance(node, n.Text) and merged and isinstance(merged[-1], n.Text):
            merged[-1] = n.Text(value=merged[-1].value + node.value)
        else:
            merged.append(node)
    return merged
