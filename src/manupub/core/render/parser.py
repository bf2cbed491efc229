"""MarkdownIt construction and token rendering"""

from markdown_it import MarkdownIt
from markdown_it.token import Token


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def render_tokens(parser: MarkdownIt, tokens: list[Token]) -> str:
    """Render a (possibly rewritten) block token stream to HTML."""
    return parser.renderer.render(tokens, parser.options, {})
