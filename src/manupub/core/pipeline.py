"""Pipeline step functions: discover -> order -> derive -> link, plus export orchestration"""

import logging
from pathlib import Path
from typing import Optional

from manupub.config import Settings
from manupub.core.derive import DerivationPolicy, MarkdownPolicy, derive_items
from manupub.core.discover import discover_sources
from manupub.core.export import url_collisions, write_index, write_item
from manupub.core.link import link_items
from manupub.core.models import ContentItem, ManifestReport
from manupub.core.order import order_sources, read_manifest, reconcile
from manupub.core.render.parser import make_parser


logger = logging.getLogger(__name__)


def make_policy(settings: Settings) -> MarkdownPolicy:
    """Build the default MarkdownPolicy with a fresh parser for these settings."""
    return MarkdownPolicy(
        parser=make_parser(settings.parser_config),
        markers=settings.callout_markers.model_dump(),
    )


def manifest_path(settings: Settings) -> Path:
    """Manifest location; relative paths are resolved against source_dir."""
    return Path(settings.source_dir) / settings.manifest


def build_items(settings: Settings, policy: Optional[DerivationPolicy] = None) -> list[ContentItem]:
    """Run discovery, ordering, derivation and linking; returns the linked sequence."""
    sources = discover_sources(Path(settings.source_dir), settings.pattern)
    manifest = read_manifest(manifest_path(settings))
    ordered = order_sources(
        sources, manifest,
        direction=settings.order_direction,
        unlisted=settings.unlisted,
        fallback=settings.manifest_fallback,
        deduplicate=settings.deduplicate,
    )
    items = derive_items(ordered, policy or make_policy(settings), settings.preview_limit, settings.workers)
    linked = link_items(items)
    logger.info(
        "built items=%d discovered=%d manifest_entries=%d",
        len(linked), len(sources), len(manifest) if manifest else 0,
    )
    return linked


def check_manifest(settings: Settings) -> ManifestReport:
    """Compare the manifest against discovered sources without deriving anything."""
    sources = discover_sources(Path(settings.source_dir), settings.pattern)
    return reconcile(sources, read_manifest(manifest_path(settings)))


def run_build(
    settings: Settings,
    policy: Optional[DerivationPolicy] = None,
    ) -> list[tuple[str, Path]]:
    """Build items and write them to settings.output_dir. Returns (id, html_path) pairs.

    Raises RuntimeError before writing anything when two sources map to the same url.
    """
    items = build_items(settings, policy)
    collisions = url_collisions(items)
    if collisions:
        detail = "; ".join(f"{url}: {', '.join(ids)}" for url, ids in collisions.items())
        raise RuntimeError(f"Sources share an output url: {detail}")
    output_dir = Path(settings.output_dir)
    results = []
    for item in items:
        html_path, _ = write_item(item, output_dir)
        results.append((item.id, html_path))
    write_index(items, output_dir)
    return results
