"""Collect footnote definitions into a trailing section and relink references"""

import html
from typing import Optional

from mdpress.core.models import FootnoteEntry
from mdpress.core.nodes import (
    FootnoteDefinition,
    FootnoteReference,
    Html,
    Root,
    extract_text,
    prune,
    walk,
)


def footnote_ref_html(number: int, entry_id: str, ref_id: str) -> str:
    return f'<sup><a href="#{entry_id}" id="{ref_id}" class="footnote-ref">[{number}]</a></sup>'


def footnotes_section_html(entries: list[FootnoteEntry], referenced: Optional[set[str]] = None) -> str:
    """Render the Footnotes section. Back-links are only added for entries in referenced (all when None)."""
    items = ''.join(
        f'<li id="{e.id}">{html.escape(e.content, quote=False)}'
        + (f' <a href="#{e.id}-ref" class="footnote-backref">↩</a>' if referenced is None or e.id in referenced else '')
        + '</li>'
        for e in entries
    )
    return (
        '<div class="footnotes-section border-t pt-4 mt-8">'
        '<h3 class="text-sm font-semibold mb-2">Footnotes</h3>'
        f'<ol class="text-sm space-y-1">{items}</ol>'
        '</div>'
    )


def definition_text(node: FootnoteDefinition) -> str:
    """Plain text of a definition, one space between its blocks."""
    parts = (extract_text(child).strip() for child in node.children)
    return ' '.join(p for p in parts if p)


def process_footnotes(tree: Root, entries: list[FootnoteEntry]) -> Root:
    """Move footnote definitions into a generated section and link references to them.

    Phase 1 numbers every definition fn-1, fn-2, ... in document order
    (referenced or not), appends them to entries, and flags the definition
    nodes as removed. Phase 2 replaces each reference with a superscript
    anchor. Flagged nodes are dropped by a single prune at the end, never
    while walking. All numbering state is local to this call.
    """
    numbered: dict[str, tuple[int, FootnoteEntry]] = {}
    for node, _, _ in walk(tree):
        if not isinstance(node, FootnoteDefinition):
            continue
        node.removed = True
        if node.identifier in numbered:
            continue
        number = len(numbered) + 1
        entry = FootnoteEntry(id=f'fn-{number}', content=definition_text(node))
        numbered[node.identifier] = (number, entry)
        entries.append(entry)

    seen: dict[str, int] = {}
    for node, index, parent in walk(tree, skip_removed=True):
        if not isinstance(node, FootnoteReference) or parent is None:
            continue
        target = numbered.get(node.identifier)
        if target is None:
            continue
        number, entry = target
        seen[entry.id] = seen.get(entry.id, 0) + 1
        ref_id = f'{entry.id}-ref' if seen[entry.id] == 1 else f'{entry.id}-ref-{seen[entry.id]}'
        parent.children[index] = Html(value=footnote_ref_html(number, entry.id, ref_id))

    if numbered:
        collected = [entry for _, entry in numbered.values()]
        tree.children.append(Html(value=footnotes_section_html(collected, set(seen))))
    prune(tree)
    return tree
