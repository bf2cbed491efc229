"""Item URLs and previous/next references across the ordered sequence"""

from pathlib import PurePosixPath

from manupub.core.models import ContentItem, Ref


def item_url(source_id: str) -> str:
    """Relative URL for a source id: extension dropped, leading chapter directory dropped.

    '01_intro/getting-started.md' -> 'getting-started'; 'preface.md' -> 'preface'.
    """
    parts = PurePosixPath(source_id).with_suffix('').parts
    if len(parts) > 1:
        parts = parts[1:]
    return '/'.join(parts)


def _ref(item: ContentItem) -> Ref:
    return Ref(title=item.title, url=item.url)


def link_items(items: list[ContentItem]) -> list[ContentItem]:
    """Return copies of items with previous_ref/next_ref set from their neighbours.

    Must run after every item in the sequence has been derived.
    """
    last = len(items) - 1
    return [
        item.model_copy(update={
            "previous_ref": _ref(items[i - 1]) if i > 0 else None,
            "next_ref": _ref(items[i + 1]) if i < last else None,
        })
        for i, item in enumerate(items)
    ]
