"""Shared fixtures for core unit tests"""

import pytest

from mdpress.core.parse import parse_markdown


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text and a [link](https://example.com).

## Heading 2

- item one
- item two

```python
print("hello")
```

### Heading 3

![Diagram](images/diagram.png)
"""

SAMPLE_FM_MD = """\
---
title: Test Doc
slug: test-doc
tags: [a, b]
---

# Title

Body content.
"""


@pytest.fixture(name="sample_tree")
def sample_tree_fixture():
    return parse_markdown(SAMPLE_MD)


@pytest.fixture(name="sample_fm_md")
def sample_fm_md_fixture():
    return SAMPLE_FM_MD
