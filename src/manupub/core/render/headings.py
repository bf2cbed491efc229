"""Heading ids and self-link anchors for deep-linking"""

from markdown_it.token import Token

from manupub.core.render.plain import inline_text
from manupub.core.utils.slug import heading_slug


def anchor_headings(tokens: list[Token], anchor_class: str = 'header-anchor') -> list[Token]:
    """Return a new token list where each heading has an id and a trailing `#` self-link."""
    out: list[Token] = []
    slug = None
    for i, tok in enumerate(tokens):
        if tok.type == 'heading_open' and i + 1 < len(tokens):
            slug = heading_slug(inline_text(tokens[i + 1].children or []))
            out.append(tok.copy(attrs={**tok.attrs, 'id': slug}))
        elif tok.type == 'inline' and slug is not None:
            link = Token('html_inline', '', 0, content=f'<a class="{anchor_class}" href="#{slug}">#</a>')
            out.append(tok.copy(children=[*(tok.children or []), link]))
            slug = None
        else:
            out.append(tok)
    return out
