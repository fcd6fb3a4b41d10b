"""Expand :::note / :::warning / :::tip / :::info blocks into styled containers"""

import html
import re

from mdpress.core.nodes import Html, Node, Paragraph, Parent, Root, Text, walk


CALLOUT_RE = re.compile(r'^:::(note|warning|tip|info)[ \t]*\n([\s\S]*?)^:::[ \t]*$', re.M)

CALLOUT_STYLES = {
    'note':    'border-blue-500 bg-blue-50 dark:bg-blue-950',
    'warning': 'border-yellow-500 bg-yellow-50 dark:bg-yellow-950',
    'tip':     'border-green-500 bg-green-50 dark:bg-green-950',
    'info':    'border-purple-500 bg-purple-50 dark:bg-purple-950',
}
CALLOUT_ICONS = {
    'note':    '📝',
    'warning': '⚠️',
    'tip':     '💡',
    'info':    'ℹ️',
}


def callout_html(kind: str, content: str) -> str:
    """Render one callout container; content is escaped and newlines become <br />."""
    body = html.escape(content.strip(), quote=False).replace('\n', '<br />')
    return (
        f'<div class="callout callout-{kind} border-l-4 p-4 my-4 {CALLOUT_STYLES[kind]}">'
        f'<div class="flex items-start gap-2">'
        f'<span class="text-xl">{CALLOUT_ICONS[kind]}</span>'
        f'<div class="callout-content prose dark:prose-invert max-w-none">{body}</div>'
        f'</div></div>'
    )


def split_callouts(value: str) -> list[Node]:
    """Split text into Text/Html runs, one Html per callout; [] when there are none."""
    matches = list(CALLOUT_RE.finditer(value))
    if not matches:
        return []
    parts: list[Node] = []
    last = 0
    for m in matches:
        if m.start() > last:
            parts.append(Text(value=value[last:m.start()]))
        parts.append(Html(value=callout_html(m.group(1), m.group(2))))
        last = m.end()
    if last < len(value):
        parts.append(Text(value=value[last:]))
    return parts


def _is_callout(node: Node) -> bool:
    return isinstance(node, Html) and node.value.startswith('<div class="callout ')


def _only_callouts(paragraph: Paragraph) -> bool:
    """True when every child is a callout or whitespace-only text, with at least one callout."""
    has_callout = False
    for child in paragraph.children:
        if _is_callout(child):
            has_callout = True
        elif not (isinstance(child, Text) and not child.value.strip()):
            return False
    return has_callout


def expand_callouts(tree: Root) -> Root:
    """Replace callout syntax inside text nodes, keeping surrounding text in place.

    Children lists are rebuilt per parent rather than spliced during the walk.
    A paragraph left holding only callouts is unwrapped so the containers are
    not nested inside <p>.
    """
    for node, _, _ in walk(tree):
        if not isinstance(node, Parent):
            continue
        rebuilt: list[Node] = []
        changed = False
        for child in node.children:
            parts = split_callouts(child.value) if isinstance(child, Text) else []
            if parts:
                rebuilt.extend(parts)
                changed = True
            else:
                rebuilt.append(child)
        if changed:
            node.children = rebuilt

    for node, _, _ in walk(tree):
        if not isinstance(node, Parent) or isinstance(node, Paragraph):
            continue
        unwrapped: list[Node] = []
        for child in node.children:
            if isinstance(child, Paragraph) and _only_callouts(child):
                unwrapped.extend(c for c in child.children if isinstance(c, Html))
            else:
                unwrapped.append(child)
        node.children = unwrapped
    return tree
