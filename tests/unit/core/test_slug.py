"""Unit tests for core/utils/slug.py"""

import pytest

from mdpress.core.utils.slug import Slugger, slugify


@pytest.mark.parametrize("text,expected", [
    ("Hello World", "hello-world"),
    ("my_file_name", "my_file_name"),
    ("  leading and trailing  ", "leading-and-trailing"),
    ("multiple---hyphens", "multiple-hyphens"),
    ("Special! Ch@rs#", "special-chrs"),
    ("What's New in v2.0?", "whats-new-in-v20"),
    ("Café Menu", "café-menu"),
    ("", ""),
])
def test_slugify_basic(text, expected):
    """slugify lowercases, drops punctuation, and hyphenates whitespace."""
    assert slugify(text) == expected


def test_slugify_is_idempotent():
    slug = slugify("Getting Started: Part 1")
    assert slugify(slug) == slug


def test_slugger_suffixes_repeats():
    """Repeated headings get -1, -2 suffixes in document order."""
    slugger = Slugger()
    assert [slugger.slug("Intro") for _ in range(3)] == ["intro", "intro-1", "intro-2"]


def test_slugger_avoids_collision_with_literal_suffix():
    """A heading that already looks like a suffixed slug does not get reused."""
    slugger = Slugger()
    assert slugger.slug("Intro 1") == "intro-1"
    assert slugger.slug("Intro") == "intro"
    assert slugger.slug("Intro") == "intro-2"


def test_slugger_reset():
    slugger = Slugger()
    slugger.slug("Intro")
    slugger.reset()
    assert slugger.slug("Intro") == "intro"


def test_slugger_falls_back_for_punctuation_only_text():
    """Text with no word characters still yields a usable, unique id."""
    slugger = Slugger()
    assert [slugger.slug("!!!"), slugger.slug("???"), slugger.slug("")] == ["heading", "heading-1", "heading-2"]
