"""Data models for the manuscript pipeline"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel


@dataclass(frozen=True)
class SourceFile:
    """A raw manuscript file as read by discovery; never modified afterwards."""
    id:   str          # POSIX path relative to the source root, extension included
    path: Path
    text: str          # full UTF-8 content, frontmatter included


@dataclass(frozen=True)
class OrderManifest:
    """Canonical reading order: one source id per non-blank manifest line."""
    entries: tuple[str, ...] = ()
    path:    Optional[Path] = None

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)


@dataclass(frozen=True)
class ManifestReport:
    """Differences between a manifest and the discovered sources."""
    missing:    list[str] = field(default_factory=list)   # listed, no matching file
    unlisted:   list[str] = field(default_factory=list)   # discovered, not listed
    duplicates: list[str] = field(default_factory=list)   # listed more than once

    @property
    def clean(self) -> bool:
        return not (self.missing or self.unlisted or self.duplicates)


class Ref(BaseModel):
    """Title and relative URL of a neighbouring item."""
    title: str
    url: str


class ContentItem(BaseModel):
    """Public output contract: one derived, ordered, linked manuscript page."""
    id: str
    title: str
    html: str
    preview: str
    order: int
    url: str
    hash: str
    frontmatter: dict[str, Any] = {}
    previous_ref: Optional[Ref] = None
    next_ref: Optional[Ref] = None
