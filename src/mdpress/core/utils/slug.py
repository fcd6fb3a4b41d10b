"""Slug generation for heading ids and document identifiers"""

import re


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower().strip()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'\s+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


class Slugger:
    """Per-document slug allocator: repeats get -1, -2, ... suffixes."""

    def __init__(self):
        self._seen: dict[str, int] = {}

    def slug(self, text: str) -> str:
        base = slugify(text) or 'heading'
        candidate = base
        while candidate in self._seen:
            self._seen[base] += 1
            candidate = f"{base}-{self._seen[base]}"
        self._seen[candidate] = 0
        return candidate

    def reset(self) -> None:
        self._seen.clear()
