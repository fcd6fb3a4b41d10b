"""Unit tests for core/transforms/code.py"""

from mdpress.core import nodes as n
from mdpress.core.transforms.code import decorate_code_blocks


def _code(**kwargs):
    return n.Root(children=[n.Code(**kwargs)])


def test_decorate_with_language():
    tree = decorate_code_blocks(_code(value="x = 1", lang="python"))
    code = tree.children[0]
    assert code.data["class"] == ["code-block", "language-python"]
    assert code.data["data-language"] == "python"
    assert "data-line-count" not in code.data


def test_decorate_without_language():
    code = decorate_code_blocks(_code(value="plain")).children[0]
    assert code.data["class"] == ["code-block"]
    assert "data-language" not in code.data


def test_decorate_line_numbers():
    """Line counting is opt-in and adds the line-numbers class."""
    code = decorate_code_blocks(_code(value="a\nb\nc", lang="js"), line_numbers=True).children[0]
    assert code.data["data-line-count"] == 3
    assert code.data["class"] == ["code-block", "language-js", "line-numbers"]


def test_decorate_skips_inline_code():
    tree = n.Root(children=[n.Paragraph(children=[n.InlineCode(value="x")])])
    decorate_code_blocks(tree)
    assert tree.children[0].children[0].data == {}
