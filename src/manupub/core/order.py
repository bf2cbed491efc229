"""Manifest parsing and reconciliation of discovered sources into reading order"""

import logging
from collections import Counter
from pathlib import Path
from typing import Optional

from manupub.core.models import ManifestReport, OrderManifest, SourceFile


logger = logging.getLogger(__name__)

DIRECTIONS = ('append', 'prepend')
UNLISTED_POLICIES = ('drop', 'append')
FALLBACKS = ('empty', 'discovery')


def parse_manifest(text: str, path: Optional[Path] = None) -> OrderManifest:
    """Build an OrderManifest from text: one id per line, blank lines ignored."""
    entries = tuple(line.strip() for line in text.splitlines() if line.strip())
    return OrderManifest(entries=entries, path=path)


def read_manifest(path: Path) -> Optional[OrderManifest]:
    """Read a manifest file; None if it does not exist."""
    path = Path(path)
    if not path.is_file():
        logger.info("manifest_missing path=%s", path)
        return None
    return parse_manifest(path.read_text(encoding='utf-8'), path)


def _check_option(name: str, value: str, allowed: tuple[str, ...]) -> None:
    if value not in allowed:
        raise ValueError(f"Invalid {name} {value!r}: expected one of {', '.join(allowed)}")


def order_sources(
    sources: list[SourceFile],
    manifest: Optional[OrderManifest],
    direction: str = 'append',
    unlisted: str = 'drop',
    fallback: str = 'empty',
    deduplicate: bool = False,
    ) -> list[SourceFile]:
    """Arrange sources in manifest order.

    Manifest entries without a matching source are skipped with a warning.
    direction='prepend' inserts each entry at the front, reversing manifest order.
    unlisted='append' adds sources absent from the manifest after the listed ones,
    in id order; 'drop' excludes them. A missing or empty manifest yields [] for
    fallback='empty' and every source in id order for fallback='discovery'.
    """
    _check_option("direction", direction, DIRECTIONS)
    _check_option("unlisted policy", unlisted, UNLISTED_POLICIES)
    _check_option("manifest fallback", fallback, FALLBACKS)

    by_id = {s.id: s for s in sources}
    if not manifest:
        return [] if fallback == 'empty' else [by_id[k] for k in sorted(by_id)]

    ordered: list[SourceFile] = []
    seen: set[str] = set()
    for entry in manifest:
        source = by_id.get(entry)
        if source is None:
            logger.warning("manifest_entry_missing entry=%s manifest=%s", entry, manifest.path)
            continue
        if entry in seen:
            logger.warning("manifest_entry_duplicate entry=%s skipped=%s", entry, deduplicate)
            if deduplicate:
                continue
        seen.add(entry)
        if direction == 'append':
            ordered.append(source)
        else:
            ordered.insert(0, source)

    if unlisted == 'append':
        ordered.extend(by_id[k] for k in sorted(by_id) if k not in seen)
    return ordered


def reconcile(sources: list[SourceFile], manifest: Optional[OrderManifest]) -> ManifestReport:
    """Report manifest entries with no file, unlisted files, and repeated entries."""
    entries = list(manifest or ())
    ids = {s.id for s in sources}
    listed = set(entries)
    counts = Counter(entries)
    return ManifestReport(
        missing=list(dict.fromkeys(e for e in entries if e not in ids)),
        unlisted=sorted(ids - listed),
        duplicates=[e for e, n in counts.items() if n > 1],
    )
