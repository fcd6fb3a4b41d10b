"""Typed markdown syntax tree.

Every node kind is declared here; passes and the renderer dispatch on these
classes rather than probing attributes. Parent nodes own an ordered
``children`` list, leaf nodes carry their own payload fields. ``data`` holds
render hints (attributes) that passes attach for the HTML converter.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional, Union


@dataclass
class Node:
    data: dict[str, Any] = field(default_factory=dict, kw_only=True)
    removed: bool = field(default=False, kw_only=True)   # set by passes, dropped by prune()


@dataclass
class Parent(Node):
    children: list[Node] = field(default_factory=list)


# --- block nodes ---

@dataclass
class Root(Parent):
    pass


@dataclass
class Paragraph(Parent):
    pass


@dataclass
class Heading(Parent):
    depth: int = 1


@dataclass
class ThematicBreak(Node):
    pass


@dataclass
class Blockquote(Parent):
    pass


@dataclass
class List(Parent):
    ordered: bool = False
    start:   Optional[int] = None
    spread:  bool = False       # loose list: item paragraphs keep their <p>


@dataclass
class ListItem(Parent):
    checked: Optional[bool] = None   # None unless this is a task list item


@dataclass
class Code(Node):
    value: str = ""
    lang:  Optional[str] = None
    meta:  Optional[str] = None


@dataclass
class Html(Node):
    """Raw markup passed through the renderer verbatim."""
    value: str = ""


@dataclass
class Table(Parent):
    align: list[Optional[str]] = field(default_factory=list)


@dataclass
class TableRow(Parent):
    header: bool = False


@dataclass
class TableCell(Parent):
    pass


@dataclass
class FootnoteDefinition(Parent):
    identifier: str = ""
    label:      Optional[str] = None


# --- inline nodes ---

@dataclass
class Text(Node):
    value: str = ""


@dataclass
class Emphasis(Parent):
    pass


@dataclass
class Strong(Parent):
    pass


@dataclass
class Delete(Parent):
    pass


@dataclass
class InlineCode(Node):
    value: str = ""


@dataclass
class Break(Node):
    pass


@dataclass
class Link(Parent):
    url:   str = ""
    title: Optional[str] = None


@dataclass
class Image(Node):
    url:   str = ""
    alt:   str = ""
    title: Optional[str] = None


@dataclass
class FootnoteReference(Node):
    identifier: str = ""
    label:      Optional[str] = None


AnyNode = Union[
    Root, Paragraph, Heading, ThematicBreak, Blockquote, List, ListItem, Code, Html,
    Table, TableRow, TableCell, FootnoteDefinition, Text, Emphasis, Strong, Delete,
    InlineCode, Break, Link, Image, FootnoteReference,
]

Visitor = Callable[[Node, int, Parent], None]


def walk(
    node: Node,
    parent: Optional[Parent] = None,
    index: int = 0,
    skip_removed: bool = False,
    skip: tuple[type, ...] = (),
    ) -> Iterator[tuple[Node, int, Optional[Parent]]]:
    """Yield (node, index, parent) depth-first in document order.

    The children list is snapshotted per parent, so a visitor that replaces
    ``parent.children[index]`` sees the original node but never its replacement.
    With skip_removed, subtrees already flagged for removal are not entered;
    nodes of a type listed in skip are neither yielded nor entered.
    """
    if skip_removed and node.removed:
        return
    if skip and isinstance(node, skip):
        return
    yield node, index, parent
    if isinstance(node, Parent):
        for i, child in enumerate(list(node.children)):
            yield from walk(child, node, i, skip_removed, skip)


def visit(tree: Node, kind: type, visitor: Visitor) -> None:
    """Call visitor(node, index, parent) for every node of the given class."""
    for node, index, parent in walk(tree):
        if isinstance(node, kind) and parent is not None:
            visitor(node, index, parent)


def extract_text(node: Node) -> str:
    """Concatenate the values of all descendant Text and InlineCode nodes."""
    if isinstance(node, (Text, InlineCode)):
        return node.value
    if isinstance(node, Parent):
        return "".join(extract_text(child) for child in node.children)
    return ""


def prune(node: Node) -> Node:
    """Drop every node flagged ``removed`` from the tree, in one pass."""
    if isinstance(node, Parent):
        node.children = [prune(c) for c in node.children if not c.removed]
    return node
