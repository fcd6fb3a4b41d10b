"""Shared markdown-it syntax tree utilities"""

from typing import Optional


def heading_level(node) -> int | None:
    """Return the heading level (1-6) for a heading SyntaxTreeNode, else None."""
    if node.type == 'heading' and node.tag and node.tag[0] == 'h' and node.tag[1:].isdigit():
        return int(node.tag[1:])
    return None


def cell_align(node) -> Optional[str]:
    """Return 'left'/'center'/'right' from a th/td node's text-align style, else None."""
    style = node.attrs.get('style') or ''
    if style.startswith('text-align:'):
        return style.split(':', 1)[1].strip() or None
    return None
