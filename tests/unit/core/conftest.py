"""Shared fixtures for core unit tests"""

from pathlib import Path

import pytest

from manupub.core.derive import MarkdownPolicy
from manupub.core.models import SourceFile
from manupub.core.render.parser import make_parser


SAMPLE_MD = """\
# Getting Started

A paragraph with **bold** text and a [link](https://example.com).

T> Keep the dev server running.

## Installing *webpack*

- item one
- item two

```bash
npm install webpack
```

W> Do not commit `node_modules`.
"""


def _make_source(text: str, source_id: str = "chapter.md") -> SourceFile:
    return SourceFile(id=source_id, path=Path(source_id), text=text)


@pytest.fixture(name="parser")
def parser_fixture():
    return make_parser("gfm-like")


@pytest.fixture(name="policy")
def policy_fixture(parser):
    return MarkdownPolicy(parser=parser)


@pytest.fixture(name="sample_source")
def sample_source_fixture():
    return _make_source(SAMPLE_MD, "getting-started.md")


@pytest.fixture(name="abc_sources")
def abc_sources_fixture():
    """Three chapters whose first lines are '# Intro', '# Middle', '# End'."""
    return [
        _make_source("# Intro\n\nWelcome to the book.\n", "a.md"),
        _make_source("# Middle\n\nThe main part.\n", "b.md"),
        _make_source("# End\n\nThat's all.\n", "c.md"),
    ]


@pytest.fixture(name="make_source")
def make_source_fixture():
    """Factory for in-memory SourceFiles: make_source(text, source_id)."""
    return _make_source
