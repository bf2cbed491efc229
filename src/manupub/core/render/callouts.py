"""Callout paragraphs (`T> ...`, `W> ...`) rewritten into classed blockquotes"""

from markdown_it.token import Token


def _strip_marker(children: list[Token], marker: str) -> list[Token] | None:
    """Copy inline children with marker and following whitespace removed; None if absent."""
    if not children or children[0].type != 'text' or not children[0].content.startswith(marker):
        return None
    rest = children[0].content[len(marker):].lstrip()
    stripped = ([children[0].copy(content=rest)] if rest else []) + [c.copy() for c in children[1:]]
    # "T>\nmore text": drop breaks left dangling at the start
    while stripped and (stripped[0].type in ('softbreak', 'hardbreak')
                        or (stripped[0].type == 'text' and not stripped[0].content.strip())):
        stripped.pop(0)
    if stripped and stripped[0].type == 'text':
        stripped[0] = stripped[0].copy(content=stripped[0].content.lstrip())
    return stripped


def _match(inline: Token, markers: dict[str, str]) -> tuple[str, list[Token]] | None:
    """Return (class_name, stripped_children) for the first marker the paragraph starts with."""
    for class_name, marker in markers.items():
        if not inline.content.startswith(marker):
            continue
        children = _strip_marker(inline.children or [], marker)
        if children is not None:
            return class_name, children
    return None


def rewrite_callouts(tokens: list[Token], markers: dict[str, str]) -> list[Token]:
    """Return a new token list with marker paragraphs turned into `<blockquote class=...>`.

    markers maps the CSS class to its paragraph prefix, e.g. {'tip': 'T>'}.
    Paragraphs hidden inside tight lists are left alone. Input tokens are not mutated.
    """
    out: list[Token] = []
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if (tok.type == 'paragraph_open' and not tok.hidden and i + 2 < len(tokens)
                and tokens[i + 1].type == 'inline' and tokens[i + 2].type == 'paragraph_close'):
            inline = tokens[i + 1]
            found = _match(inline, markers)
            if found:
                class_name, children = found
                marker = markers[class_name]
                out.append(tok.copy(type='callout_open', tag='blockquote', attrs={'class': class_name}))
                out.append(inline.copy(content=inline.content[len(marker):].lstrip(), children=children))
                out.append(tokens[i + 2].copy(type='callout_close', tag='blockquote'))
                i += 3
                continue
        out.append(tok)
        i += 1
    return out
