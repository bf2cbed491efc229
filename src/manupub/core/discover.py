"""Source discovery and YAML frontmatter splitting"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from manupub.core.models import SourceFile


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*(?:\n|$)', re.DOTALL)


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, content) with a leading YAML header removed.

    A leading byte-order mark is dropped. Malformed or non-mapping headers are
    logged and the text is returned unchanged.
    """
    text = text.removeprefix('\ufeff')
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        logger.warning("invalid_frontmatter error=%s", e)
        return {}, text
    if not isinstance(fm, dict):
        logger.warning("invalid_frontmatter expected=mapping got=%s", type(fm).__name__)
        return {}, text
    return {str(k): v for k, v in fm.items()}, text[m.end():]


def read_source(path: Path, root: Path) -> SourceFile:
    """Read a single manuscript file; its id is the POSIX path relative to root."""
    return SourceFile(
        id=path.relative_to(root).as_posix(),
        path=path,
        text=path.read_text(encoding='utf-8-sig'),
    )


def discover_sources(root: Path, pattern: str = '**/*.md') -> list[SourceFile]:
    """Return SourceFiles under root matching pattern, sorted by id.

    A missing directory or zero matches yields an empty list.
    """
    root = Path(root)
    if not root.is_dir():
        logger.info("source_dir_missing root=%s", root)
        return []

    sources = []
    for p in sorted(root.glob(pattern)):
        if not p.is_file():
            continue
        try:
            sources.append(read_source(p, root))
        except (UnicodeDecodeError, OSError) as e:
            logger.warning("unreadable_source path=%s error=%s", p, e)
    logger.debug("discovered root=%s count=%d", root, len(sources))
    return sources
