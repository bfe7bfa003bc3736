"""Pydantic settings for the parser and the sync layer."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

DEFAULT_WORD_BOUNDARIES = " \t\n.,;?!"


class DocSyncConfig(BaseModel):
    """Tunables shared by the parser, the offset index and the CLI."""

    close_matching: Literal["name", "ancestor"] = Field(
        "name",
        alias="closeMatching",
        description=(
            "How an element finds its close tag. 'name' stops at the first close "
            "tag with the same name; 'ancestor' also ends it at a close of an open ancestor."
        ),
    )
    max_depth: int = Field(
        256,
        ge=1,
        alias="maxDepth",
        description="Maximum element nesting before the parse fails closed.",
    )
    check_well_formed: bool = Field(
        True,
        alias="checkWellFormed",
        description="Run the coarse XML well-formedness gate before tokenizing.",
    )
    word_boundaries: str = Field(
        DEFAULT_WORD_BOUNDARIES,
        min_length=1,
        alias="wordBoundaries",
        description="Characters that stop word snapping inside a text run.",
    )

    model_config = ConfigDict(populate_by_name=True, frozen=True)


def load_config(path: Optional[Path]) -> DocSyncConfig:
    """Load a config from YAML, falling back to defaults when no path is given."""
    if path is None:
        return DocSyncConfig()
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping of settings.")
    try:
        return DocSyncConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {path}: {exc}") from exc


__all__ = ["DEFAULT_WORD_BOUNDARIES", "DocSyncConfig", "load_config"]
