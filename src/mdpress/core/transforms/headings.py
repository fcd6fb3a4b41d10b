"""Collect heading records for the table of contents"""

from mdpress.core.models import HeadingRecord
from mdpress.core.nodes import FootnoteDefinition, Heading, Root, extract_text, walk
from mdpress.core.utils.slug import Slugger


def collect_headings(tree: Root, headings: list[HeadingRecord], skip_footnotes: bool = False) -> Root:
    """Append {id, text, level} for each heading to headings, in document order.

    Ids come from a Slugger local to this call and are stored on the heading
    as data['id'], which the renderer emits as-is. With skip_footnotes,
    headings inside footnote definitions are ignored since the footnote pass
    flattens those definitions into plain text.
    """
    slugger = Slugger()
    skip = (FootnoteDefinition,) if skip_footnotes else ()
    for node, _, _ in walk(tree, skip=skip):
        if isinstance(node, Heading):
            text = extract_text(node)
            node.data['id'] = slugger.slug(text)
            headings.append(HeadingRecord(id=node.data['id'], text=text, level=node.depth))
    return tree
