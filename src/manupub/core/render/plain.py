"""Markdown-stripped plain text from markdown-it tokens"""

from markdown_it.token import Token


ELLIPSIS = '…'

_INLINE_TEXT = {'text', 'code_inline', 'image'}     # image content is its alt text
_INLINE_BREAK = {'softbreak', 'hardbreak'}
_BLOCK_CODE = {'fence', 'code_block'}


def inline_text(children: list[Token]) -> str:
    """Concatenate the visible text of inline children; breaks become spaces, raw HTML is dropped."""
    parts = []
    for child in children:
        if child.type in _INLINE_TEXT:
            parts.append(child.content)
        elif child.type in _INLINE_BREAK:
            parts.append(' ')
    return ''.join(parts)


def plain_text(tokens: list[Token]) -> str:
    """Return block-level plain text, one line per paragraph/heading/code block."""
    lines = []
    for tok in tokens:
        if tok.type == 'inline':
            text = inline_text(tok.children or []).strip()
        elif tok.type in _BLOCK_CODE:
            text = tok.content.strip()
        else:
            continue
        if text:
            lines.append(text)
    return '\n'.join(lines)


def truncate(text: str, limit: int) -> str:
    """First `limit` characters plus ELLIPSIS when text is longer; text unchanged otherwise."""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS
