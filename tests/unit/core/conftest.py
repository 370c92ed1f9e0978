"""Shared fixtures for core unit tests"""

import pytest
from markdown_it import MarkdownIt


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```python
print("hello")
```

> A quote.

---

Footer paragraph.
"""

SAMPLE_FM_MD = """\
---
title: Test Doc
tags: [a, b]
---

# Title

Body content.
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return MarkdownIt("commonmark", options_update={"html": False})


@pytest.fixture(name="sample_tokens")
def sample_tokens_fixture(parser):
    return parser.parse(SAMPLE_MD)


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="sample_fm_md")
def sample_fm_md_fixture():
    return SAMPLE_FM_MD
