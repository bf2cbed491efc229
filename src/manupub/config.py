"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class CalloutMarkers(BaseModel):
    """Paragraph prefixes rewritten into classed blockquotes."""
    tip:     str = Field(default="T>", min_length=1)
    warning: str = Field(default="W>", min_length=1)


class Settings(BaseModel):
    app_name:          str = "manupub"
    source_dir:        str = Field(default="manuscript",          description="Root directory of Markdown chapters")
    manifest:          str = Field(default="Book.txt",            description="Order manifest, relative to source_dir unless absolute")
    pattern:           str = Field(default="**/*.md",             description="Glob used to discover source files")
    preview_limit:     int = Field(default=150, ge=0,             description="Max preview characters before the ellipsis")
    callout_markers:   CalloutMarkers = Field(default_factory=CalloutMarkers)
    order_direction:   str = Field(default="append",  pattern="^(append|prepend)$", description="Insert direction for manifest entries")
    unlisted:          str = Field(default="drop",    pattern="^(drop|append)$",    description="Policy for files missing from the manifest")
    manifest_fallback: str = Field(default="empty",   pattern="^(empty|discovery)$", description="Output when the manifest is missing or empty")
    deduplicate:       bool = Field(default=False,   description="Ignore repeated manifest entries")
    workers:           int = Field(default=1, ge=1,   description="Derivation threads; 1 derives sequentially")
    parser_config:     str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    output_dir:        str = Field(default="build",    description="Directory for exported HTML + JSON files")
    log_level:         str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MANUPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MANUPUB_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
