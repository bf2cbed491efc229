"""Title, HTML body and preview derivation for manuscript sources

The first line of a source (after any YAML frontmatter) is always the title;
every following line is the body. Derivation never raises on malformed
Markdown: markdown-it renders it best-effort.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache
from typing import Any, Optional, Protocol

from markdown_it import MarkdownIt

from manupub.core.discover import split_frontmatter
from manupub.core.link import item_url
from manupub.core.models import ContentItem, SourceFile
from manupub.core.render.callouts import rewrite_callouts
from manupub.core.render.headings import anchor_headings
from manupub.core.render.parser import make_parser, render_tokens
from manupub.core.render.plain import inline_text, plain_text, truncate
from manupub.core.utils.hashing import sha256


logger = logging.getLogger(__name__)

HEADING_MARKER_RE = re.compile(r'^\s*#+\s*')
CLOSING_MARKER_RE = re.compile(r'\s+#+\s*$')
DEFAULT_MARKERS = {'tip': 'T>', 'warning': 'W>'}


class DerivationPolicy(Protocol):
    """How a SourceFile becomes a title, an HTML body, and a preview."""

    def extract_title(self, source: SourceFile) -> str: ...

    def render_body(self, source: SourceFile) -> str: ...

    def compute_preview(self, source: SourceFile, limit: int) -> str: ...


def split_title(content: str) -> tuple[str, str]:
    """Return (first_line, body) where body is every later line joined with newlines."""
    lines = content.splitlines()
    if not lines:
        return '', ''
    return lines[0], '\n'.join(lines[1:])


@lru_cache(maxsize=256)
def split_source(source: SourceFile) -> tuple[dict[str, Any], str, str]:
    """Return (frontmatter, first_line, body) for a source, computed once per source."""
    frontmatter, content = split_frontmatter(source.text)
    first, body = split_title(content)
    return frontmatter, first, body


class MarkdownPolicy:
    """Default DerivationPolicy backed by an injected MarkdownIt parser."""

    def __init__(
        self,
        parser: Optional[MarkdownIt] = None,
        markers: Optional[dict[str, str]] = None,
        anchors: bool = True,
        ):
        self.parser = parser or make_parser()
        self.markers = dict(DEFAULT_MARKERS if markers is None else markers)
        self.anchors = anchors

    def _body_tokens(self, source: SourceFile) -> list:
        _, _, body = split_source(source)
        return rewrite_callouts(self.parser.parse(body), self.markers)

    def extract_title(self, source: SourceFile) -> str:
        """First line with heading markers removed, then inline Markdown stripped."""
        _, first, _ = split_source(source)
        if not first.strip():
            return ''
        if HEADING_MARKER_RE.match(first):
            first = CLOSING_MARKER_RE.sub('', HEADING_MARKER_RE.sub('', first))
        inline = self.parser.parseInline(first)
        return inline_text(inline[0].children or []).strip() if inline else first.strip()

    def render_body(self, source: SourceFile) -> str:
        tokens = self._body_tokens(source)
        if self.anchors:
            tokens = anchor_headings(tokens)
        return render_tokens(self.parser, tokens)

    def compute_preview(self, source: SourceFile, limit: int) -> str:
        return truncate(plain_text(self._body_tokens(source)), limit)


def derive_item(source: SourceFile, policy: DerivationPolicy, preview_limit: int, order: int) -> ContentItem:
    """Derive one unlinked ContentItem at the given position."""
    frontmatter = dict(split_source(source)[0])
    return ContentItem(
        id=source.id,
        title=policy.extract_title(source),
        html=policy.render_body(source),
        preview=policy.compute_preview(source, preview_limit),
        order=order,
        url=item_url(source.id),
        hash=sha256(source.text),
        frontmatter=frontmatter,
    )


def derive_items(
    sources: list[SourceFile],
    policy: DerivationPolicy,
    preview_limit: int,
    workers: int = 1,
    ) -> list[ContentItem]:
    """Derive items in input order; order values are the input positions.

    Sources are independent, so workers > 1 derives them on a thread pool.
    """
    def _derive(pair):
        order, source = pair
        return derive_item(source, policy, preview_limit, order)

    if workers <= 1 or len(sources) <= 1:
        items = [_derive(pair) for pair in enumerate(sources)]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            items = list(executor.map(_derive, enumerate(sources)))
    logger.debug("derived count=%d workers=%d", len(items), workers)
    return items
