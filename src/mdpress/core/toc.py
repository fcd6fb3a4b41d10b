"""Nested table of contents from a flat heading list"""

from typing import Optional

from mdpress.core.models import HeadingRecord, TocNode


def build_table_of_contents(headings: list[HeadingRecord], max_level: Optional[int] = None) -> list[TocNode]:
    """Nest headings by level with a stack; headings deeper than max_level are skipped.

    A heading becomes a child of the nearest preceding heading with a strictly
    smaller level, or a root entry when there is none.
    """
    toc: list[TocNode] = []
    stack: list[TocNode] = []

    for heading in headings:
        if max_level is not None and heading.level > max_level:
            continue
        item = TocNode(id=heading.id, text=heading.text, level=heading.level)

        while stack and stack[-1].level >= heading.level:
            stack.pop()

        if stack:
            stack[-1].children.append(item)
        else:
            toc.append(item)
        stack.append(item)

    return toc
