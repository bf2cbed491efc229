"""Slug generation for heading anchors"""

import re


_NON_WORD_RE = re.compile(r'\W+')


def heading_slug(text: str) -> str:
    """Lowercase text with every run of non-word characters replaced by one hyphen.

    Leading and trailing hyphens are kept so the transform stays a plain
    substitution: 'Getting Started!' -> 'getting-started-'.
    """
    return _NON_WORD_RE.sub('-', text.lower())
