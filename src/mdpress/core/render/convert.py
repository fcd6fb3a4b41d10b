"""Syntax tree to HTML render tree conversion"""

from typing import Callable

from mdpress.core import nodes as n
from mdpress.core.nodes import extract_text
from mdpress.core.render.hast import Element, HNode, HText, Raw, to_html
from mdpress.core.render.highlight import HIGHLIGHT_CLASS, highlight_code
from mdpress.core.utils.slug import Slugger


def _wrap(children: list[HNode]) -> list[HNode]:
    """Put a newline before, between, and after block children."""
    out: list[HNode] = [HText('\n')]
    for child in children:
        out.extend((child, HText('\n')))
    return out


def _join(children: list[HNode]) -> list[HNode]:
    out: list[HNode] = []
    for i, child in enumerate(children):
        if i:
            out.append(HText('\n'))
        out.append(child)
    return out


def _dedupe(classes: list[str]) -> list[str]:
    return list(dict.fromkeys(classes))


class HastConverter:
    """Convert one syntax tree into a render tree.

    Headings that already carry data['id'] (set by collect_headings) keep it;
    any other heading is slugged by a per-instance Slugger.
    """

    def __init__(self, heading_ids: bool = True, highlight: bool = True, detect_language: bool = True):
        self.slugger = Slugger() if heading_ids else None
        self.highlight = highlight
        self.detect_language = detect_language
        self._handlers: dict[type, Callable[[n.Node], list[HNode]]] = {
            n.Root:               self._root,
            n.Paragraph:          lambda node: [Element('p', children=self._all(node.children))],
            n.Heading:            self._heading,
            n.ThematicBreak:      lambda node: [Element('hr')],
            n.Blockquote:         lambda node: [Element('blockquote', children=_wrap(self._all(node.children)))],
            n.List:               self._list,
            n.ListItem:           lambda node: [self._list_item(node, loose=True)],
            n.Code:               self._code,
            n.Html:               lambda node: [Raw(node.value)],
            n.Table:              self._table,
            n.TableRow:           lambda node: [self._row(node, [])],
            n.TableCell:          lambda node: [Element('td', children=self._all(node.children))],
            n.FootnoteDefinition: self._footnote_definition,
            n.Text:               lambda node: [HText(node.value)],
            n.Emphasis:           lambda node: [Element('em', children=self._all(node.children))],
            n.Strong:             lambda node: [Element('strong', children=self._all(node.children))],
            n.Delete:             lambda node: [Element('del', children=self._all(node.children))],
            n.InlineCode:         lambda node: [Element('code', children=[HText(node.value)])],
            n.Break:              lambda node: [Element('br'), HText('\n')],
            n.Link:               self._link,
            n.Image:              self._image,
            n.FootnoteReference:  self._footnote_reference,
        }

    def convert(self, node: n.Node) -> list[HNode]:
        handler = self._handlers.get(type(node))
        if handler is None:
            raise TypeError(f"No HTML conversion for node type {type(node).__name__}")
        return handler(node)

    def _all(self, children: list[n.Node]) -> list[HNode]:
        out: list[HNode] = []
        for child in children:
            out.extend(self.convert(child))
        return out

    def _blocks(self, children: list[n.Node]) -> list[HNode]:
        """Convert block children keeping one output group per child (for newline joining)."""
        out: list[HNode] = []
        for child in children:
            converted = self.convert(child)
            out.append(converted[0] if len(converted) == 1 else Element('root', children=converted))
        return out

    def _root(self, node: n.Root) -> list[HNode]:
        return [Element('root', children=_join(self._blocks(node.children)))]

    def _heading(self, node: n.Heading) -> list[HNode]:
        attrs = {}
        if self.slugger is not None:
            attrs['id'] = node.data.get('id') or self.slugger.slug(extract_text(node))
        return [Element(f'h{node.depth}', attrs, self._all(node.children))]

    def _list(self, node: n.List) -> list[HNode]:
        attrs = {}
        if node.ordered and node.start not in (None, 1):
            attrs['start'] = node.start
        if any(item.checked is not None for item in node.children if isinstance(item, n.ListItem)):
            attrs['class'] = ['contains-task-list']
        items = [
            self._list_item(item, node.spread) if isinstance(item, n.ListItem) else Element('li', children=self.convert(item))
            for item in node.children
        ]
        return [Element('ol' if node.ordered else 'ul', attrs, _wrap(items))]

    def _list_item(self, node: n.ListItem, loose: bool) -> Element:
        attrs = {}
        checkbox: list[HNode] = []
        if node.checked is not None:
            attrs['class'] = ['task-list-item']
            checkbox = [Element('input', {'type': 'checkbox', 'checked': node.checked, 'disabled': True}), HText(' ')]

        if loose:
            parts = self._blocks(node.children)
            if checkbox:
                first = parts[0] if parts else None
                if isinstance(first, Element) and first.tag == 'p':
                    first.children[:0] = checkbox
                else:
                    parts[:0] = [Element('root', children=checkbox)]
            return Element('li', attrs, _wrap(parts))

        # Tight items render paragraph content without the <p> wrapper.
        parts = [
            Element('root', children=self._all(child.children)) if isinstance(child, n.Paragraph) else self._blocks([child])[0]
            for child in node.children
        ]
        children = _join(parts)
        if len(parts) > 1 and not isinstance(node.children[-1], n.Paragraph):
            children.append(HText('\n'))
        return Element('li', attrs, checkbox + children)

    def _code(self, node: n.Code) -> list[HNode]:
        classes = list(node.data.get('class', []))
        if node.lang and f'language-{node.lang}' not in classes:
            classes.insert(0, f'language-{node.lang}')
        attrs = {k: v for k, v in node.data.items() if k != 'class'}

        body: list[HNode] = [HText(node.value + '\n')]
        if self.highlight:
            highlighted = highlight_code(node.value + '\n', node.lang, self.detect_language)
            if highlighted:
                markup, alias = highlighted
                body = [Raw(markup)]
                classes.append(HIGHLIGHT_CLASS)
                if not node.lang:
                    classes.append(f'language-{alias}')

        code = Element('code', {'class': _dedupe(classes), **attrs}, body)
        return [Element('pre', children=[code])]

    def _table(self, node: n.Table) -> list[HNode]:
        head = [self._row(r, node.align) for r in node.children if isinstance(r, n.TableRow) and r.header]
        body = [self._row(r, node.align) for r in node.children if not (isinstance(r, n.TableRow) and r.header)]
        sections: list[HNode] = []
        if head:
            sections.append(Element('thead', children=_wrap(head)))
        if body:
            sections.append(Element('tbody', children=_wrap(body)))
        return [Element('table', children=_wrap(sections))]

    def _row(self, row: n.TableRow, align: list) -> Element:
        tag = 'th' if row.header else 'td'
        cells = []
        for i, cell in enumerate(row.children):
            attrs = {'align': align[i]} if i < len(align) and align[i] else {}
            cells.append(Element(tag, attrs, self._all(cell.children)))
        return Element('tr', children=_wrap(cells))

    def _link(self, node: n.Link) -> list[HNode]:
        return [Element('a', {'href': node.url, 'title': node.title}, self._all(node.children))]

    def _image(self, node: n.Image) -> list[HNode]:
        return [Element('img', {'src': node.url, 'alt': node.alt, 'title': node.title})]

    def _footnote_reference(self, node: n.FootnoteReference) -> list[HNode]:
        label = node.label or node.identifier
        link = Element('a', {'href': f'#fn-{label}', 'class': ['footnote-ref']}, [HText(f'[{label}]')])
        return [Element('sup', children=[link])]

    def _footnote_definition(self, node: n.FootnoteDefinition) -> list[HNode]:
        label = node.label or node.identifier
        attrs = {'id': f'fn-{label}', 'class': ['footnote-definition']}
        return [Element('div', attrs, _wrap(self._blocks(node.children)))]


def to_hast(tree: n.Root, heading_ids: bool = True, highlight: bool = True, detect_language: bool = True) -> Element:
    """Convert a syntax tree into a render tree rooted at a 'root' element."""
    converter = HastConverter(heading_ids=heading_ids, highlight=highlight, detect_language=detect_language)
    return converter.convert(tree)[0]


def render_html(tree: n.Root, **kwargs) -> str:
    """Convert and serialize in one step; raw nodes pass through."""
    return to_html(to_hast(tree, **kwargs), allow_raw=True)
