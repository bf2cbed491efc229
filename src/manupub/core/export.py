"""Export: write rendered HTML, sidecar JSON, and the ordered index"""

import json
from pathlib import Path

from manupub.core.models import ContentItem


INDEX_FILE = "_index.json"


def build_sidecar(item: ContentItem) -> dict:
    """Return every ContentItem field except the rendered html."""
    return item.model_dump(mode="json", exclude={"html"})


def url_collisions(items: list[ContentItem]) -> dict[str, list[str]]:
    """Map each url claimed by more than one distinct source id to those ids."""
    claims: dict[str, list[str]] = {}
    for item in items:
        ids = claims.setdefault(item.url, [])
        if item.id not in ids:
            ids.append(item.id)
    return {url: ids for url, ids in claims.items() if len(ids) > 1}


def write_item(item: ContentItem, output_dir: Path) -> tuple[Path, Path]:
    """Write HTML + sidecar JSON for one item.

    Output path follows the item url:
      output_dir / item.url.{html|json}

    Returns (html_path, json_path).
    """
    html_path = output_dir / f"{item.url}.html"
    json_path = output_dir / f"{item.url}.json"
    try:
        html_path.parent.mkdir(parents=True, exist_ok=True)
        html_path.write_text(item.html, encoding='utf-8')
        json_path.write_text(
            json.dumps(build_sidecar(item), indent=2, ensure_ascii=False),
            encoding='utf-8',
        )
    except OSError as e:
        raise RuntimeError(f"Failed to export {item.id}: {e}") from e
    return html_path, json_path


def write_index(items: list[ContentItem], output_dir: Path) -> Path:
    """Write the ordered item list (without html) to output_dir/_index.json."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / INDEX_FILE
    path.write_text(
        json.dumps([build_sidecar(i) for i in items], indent=2, ensure_ascii=False),
        encoding='utf-8',
    )
    return path
