"""Best-effort markdown linting and removal of executable content"""

import re

from mdpress.core.models import ValidationReport


FENCE_RE = re.compile(r'```')
IMAGE_OPEN_RE = re.compile(r'!\[([^\]]*)\]\(')
LINK_OPEN_RE = re.compile(r'(?<!!)\[([^\]]+)\]\(')
CLOSED_TARGET_RE = re.compile(r'[^)]+\)')

SCRIPT_RE = re.compile(r'<script\b[^>]*>.*?</script\s*>', re.I | re.S)
STYLE_RE = re.compile(r'<style\b[^>]*>.*?</style\s*>', re.I | re.S)
EVENT_HANDLER_RE = re.compile(r'\son\w+\s*=\s*(?:"[^"]*"|\'[^\']*\')', re.I)
JAVASCRIPT_RE = re.compile(r'javascript\s*:', re.I)
DATA_URL_RE = re.compile(r'data:(?!image/)', re.I)


def _unclosed(pattern: re.Pattern, text: str) -> list[int]:
    """Positions where pattern opens a (target) that never reaches a closing paren."""
    return [
        m.start() for m in pattern.finditer(text)
        if not CLOSED_TARGET_RE.match(text, m.end())
    ]


def validate_markdown(text: str) -> ValidationReport:
    """Lint text for empty input, unbalanced ``` fences, and unterminated link/image targets."""
    errors: list[str] = []
    if not text or not text.strip():
        errors.append("Markdown content is empty")
    if len(FENCE_RE.findall(text or '')) % 2:
        errors.append("Unclosed code block detected")
    for pos in _unclosed(IMAGE_OPEN_RE, text or ''):
        errors.append(f"Broken image syntax at position {pos}")
    for pos in _unclosed(LINK_OPEN_RE, text or ''):
        errors.append(f"Broken link syntax at position {pos}")
    return ValidationReport(is_valid=not errors, errors=errors)


def sanitize_markdown(text: str) -> str:
    """Strip script/style blocks, on* handler attributes, javascript: schemes, and non-image data: URLs."""
    text = SCRIPT_RE.sub('', text)
    text = STYLE_RE.sub('', text)
    text = EVENT_HANDLER_RE.sub('', text)
    text = JAVASCRIPT_RE.sub('', text)
    return DATA_URL_RE.sub('', text)
