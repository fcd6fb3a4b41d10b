"""Unit tests for core/transforms/footnotes.py"""

from mdpress.core import nodes as n
from mdpress.core.models import FootnoteEntry
from mdpress.core.parse import parse_markdown
from mdpress.core.transforms.footnotes import footnote_ref_html, footnotes_section_html, process_footnotes


MD = "First[^a] and second[^b] and again[^a].\n\n[^a]: Alpha note.\n[^b]: Beta note.\n"


def _html_values(tree):
    return [node.value for node, _, _ in n.walk(tree) if isinstance(node, n.Html)]


def test_footnote_ref_html():
    assert footnote_ref_html(2, "fn-2", "fn-2-ref") == (
        '<sup><a href="#fn-2" id="fn-2-ref" class="footnote-ref">[2]</a></sup>'
    )


def test_footnotes_section_html():
    markup = footnotes_section_html([FootnoteEntry(id="fn-1", content="a < b")])
    assert markup.startswith('<div class="footnotes-section')
    assert "<h3" in markup and "Footnotes</h3>" in markup
    assert '<li id="fn-1">a &lt; b <a href="#fn-1-ref" class="footnote-backref">↩</a></li>' in markup


def test_process_footnotes_numbers_definitions():
    entries = []
    process_footnotes(parse_markdown(MD), entries)
    assert entries == [
        FootnoteEntry(id="fn-1", content="Alpha note."),
        FootnoteEntry(id="fn-2", content="Beta note."),
    ]


def test_process_footnotes_relinks_references():
    """Each reference becomes an anchor; repeats get distinct ref ids."""
    tree = process_footnotes(parse_markdown(MD), [])
    refs = [v for v in _html_values(tree) if v.startswith("<sup>")]
    assert refs == [
        footnote_ref_html(1, "fn-1", "fn-1-ref"),
        footnote_ref_html(2, "fn-2", "fn-2-ref"),
        footnote_ref_html(1, "fn-1", "fn-1-ref-2"),
    ]


def test_process_footnotes_moves_definitions_to_section():
    """Definitions leave the tree; a single section is appended last."""
    tree = process_footnotes(parse_markdown(MD), [])
    assert not any(isinstance(node, n.FootnoteDefinition) for node, _, _ in n.walk(tree))
    assert not any(node.removed for node, _, _ in n.walk(tree))
    last = tree.children[-1]
    assert isinstance(last, n.Html)
    assert last.value.startswith('<div class="footnotes-section')
    assert '<li id="fn-1">Alpha note.' in last.value


def test_process_footnotes_state_is_per_call():
    """Two runs number from fn-1 independently."""
    first, second = [], []
    process_footnotes(parse_markdown(MD), first)
    process_footnotes(parse_markdown("Only[^z].\n\n[^z]: Zed.\n"), second)
    assert [e.id for e in second] == ["fn-1"]
    assert second[0].content == "Zed."


def test_process_footnotes_without_footnotes():
    tree = parse_markdown("No notes here.\n")
    entries = []
    process_footnotes(tree, entries)
    assert entries == []
    assert len(tree.children) == 1
    assert isinstance(tree.children[0], n.Paragraph)


def test_footnotes_section_html_backref_only_when_referenced():
    entries = [FootnoteEntry(id="fn-1", content="Used."), FootnoteEntry(id="fn-2", content="Unused.")]
    markup = footnotes_section_html(entries, referenced={"fn-1"})
    assert '<li id="fn-1">Used. <a href="#fn-1-ref" class="footnote-backref">↩</a></li>' in markup
    assert '<li id="fn-2">Unused.</li>' in markup


def test_process_footnotes_numbers_in_definition_order():
    """Numbering follows where definitions are written, not where they are cited."""
    entries = []
    tree = process_footnotes(parse_markdown("See[^b] then[^a].\n\n[^a]: Alpha.\n[^b]: Beta.\n"), entries)
    assert entries == [FootnoteEntry(id="fn-1", content="Alpha."), FootnoteEntry(id="fn-2", content="Beta.")]
    refs = [v for v in _html_values(tree) if v.startswith("<sup>")]
    assert refs == [footnote_ref_html(2, "fn-2", "fn-2-ref"), footnote_ref_html(1, "fn-1", "fn-1-ref")]


def test_process_footnotes_keeps_unreferenced_definitions():
    entries = []
    tree = process_footnotes(parse_markdown("No refs.\n\n[^a]: Alpha.\n"), entries)
    assert entries == [FootnoteEntry(id="fn-1", content="Alpha.")]
    section = tree.children[-1].value
    assert '<li id="fn-1">Alpha.</li>' in section
    assert "footnote-backref" not in section


def test_process_footnotes_inline_note():
    entries = []
    tree = process_footnotes(parse_markdown("Text^[inline note].\n"), entries)
    assert entries == [FootnoteEntry(id="fn-1", content="inline note")]
    assert footnote_ref_html(1, "fn-1", "fn-1-ref") in _html_values(tree)


def test_process_footnotes_joins_blocks_with_spaces():
    """A definition spanning several blocks reads as one line of words."""
    entries = []
    process_footnotes(parse_markdown("Text[^1].\n\n[^1]: note\n\n    # Intro\n\n    More.\n"), entries)
    assert entries[0].content == "note Intro More."
