"""HTML render tree and its string serializer"""

import html
from dataclasses import dataclass, field
from typing import Any, Union


VOID_ELEMENTS = {'br', 'hr', 'img', 'input', 'meta', 'link', 'source', 'wbr'}


@dataclass
class Element:
    tag: str
    attrs: dict[str, Any] = field(default_factory=dict)
    children: list["HNode"] = field(default_factory=list)


@dataclass
class HText:
    value: str


@dataclass
class Raw:
    """Markup emitted verbatim when raw output is allowed, escaped otherwise."""
    value: str


HNode = Union[Element, HText, Raw]


def _attr_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        value = ' '.join(str(v) for v in value)
    return html.escape(str(value), quote=True)


def _attrs(attrs: dict[str, Any]) -> str:
    parts = []
    for name, value in attrs.items():
        if value is None or value is False or value == []:
            continue
        if value is True:
            parts.append(f' {name}')
        else:
            parts.append(f' {name}="{_attr_value(value)}"')
    return ''.join(parts)


def to_html(node: HNode, allow_raw: bool = True) -> str:
    """Serialize a render tree. allow_raw=False escapes Raw nodes instead of passing them through."""
    if isinstance(node, HText):
        return html.escape(node.value, quote=False)
    if isinstance(node, Raw):
        return node.value if allow_raw else html.escape(node.value, quote=False)
    if isinstance(node, Element):
        inner = ''.join(to_html(child, allow_raw) for child in node.children)
        if node.tag == 'root':
            return inner
        if node.tag in VOID_ELEMENTS:
            return f'<{node.tag}{_attrs(node.attrs)}>'
        return f'<{node.tag}{_attrs(node.attrs)}>{inner}</{node.tag}>'
    raise TypeError(f"Unknown render node: {type(node).__name__}")
