"""Plain-text helpers: markdown stripping, excerpts, word counts, reading time"""

import math
import re


# Applied in order; fenced code and images go before links so their syntax
# is not half-consumed by the link pattern.
_STRIP_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r'```[\s\S]*?```'), ''),                  # fenced code
    (re.compile(r'!\[([^\]]*)\]\([^)]*\)'), ''),           # images
    (re.compile(r'^\s{0,3}\[\^[^\]]+\]:\s?', re.M), ''),  # footnote definition labels
    (re.compile(r'\[\^[^\]]+\]'), ''),                # footnote references
    (re.compile(r'\[([^\]]+)\]\([^)]*\)'), r'\1'),         # links -> link text
    (re.compile(r'^\s{0,3}#{1,6}\s+', re.M), ''),          # ATX headers
    (re.compile(r'\*\*([^*]+)\*\*'), r'\1'),               # bold
    (re.compile(r'__([^_]+)__'), r'\1'),
    (re.compile(r'\*([^*]+)\*'), r'\1'),                   # italic
    (re.compile(r'~~([^~]+)~~'), r'\1'),                   # strikethrough
    (re.compile(r'`([^`]+)`'), r'\1'),                     # inline code
    (re.compile(r'^\s*>\s?', re.M), ''),                   # block quotes
    (re.compile(r'^\s*[-*+]\s', re.M), ''),                # bullet markers
    (re.compile(r'^\s*\d+\.\s', re.M), ''),                # ordered markers
]

ELLIPSIS = '...'


def extract_plain_text(markdown: str) -> str:
    """Strip common markdown syntax and collapse whitespace to single spaces."""
    text = markdown
    for pattern, repl in _STRIP_RULES:
        text = pattern.sub(repl, text)
    return re.sub(r'\s+', ' ', text).strip()


def truncate_at_word(text: str, max_length: int) -> str:
    """Cut text to at most max_length chars at a word boundary, appending an ellipsis.

    Text that already fits is returned unchanged. A single word longer than
    max_length is hard-cut since there is no boundary to fall back to.
    """
    if len(text) <= max_length:
        return text
    # Include the next char: a space there means the cut already ends on a whole word.
    window = text[:max_length + 1]
    cut = window.rfind(' ')
    if cut > 0:
        return window[:cut].rstrip() + ELLIPSIS
    return text[:max_length] + ELLIPSIS


def generate_excerpt(markdown: str, max_length: int = 160) -> str:
    """Summarize a markdown body as plain text of at most max_length chars (plus ellipsis)."""
    return truncate_at_word(extract_plain_text(markdown), max_length)


def truncate_text(text: str, max_length: int) -> str:
    """Hard-cut truncation with ellipsis; no word boundary handling."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + ELLIPSIS


def count_words(text: str) -> int:
    return len(text.split())


def reading_time(word_count: int, words_per_minute: int = 225) -> int:
    """Minutes to read word_count words, rounded up, never below 1."""
    return max(1, math.ceil(word_count / words_per_minute))


def reading_time_text(minutes: int) -> str:
    if minutes < 1:
        return 'Less than 1 min read'
    if minutes == 1:
        return '1 min read'
    return f'{minutes} min read'
