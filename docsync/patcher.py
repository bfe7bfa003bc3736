"""Apply preview-side text edits back onto the raw markup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .offset_index import OffsetIndex
from .tree_model import TextRun

ESCAPE_TABLE = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"))


def escape_markup(text: str) -> str:
    for char, entity in ESCAPE_TABLE:
        text = text.replace(char, entity)
    return text


@dataclass(frozen=True)
class FocusIntent:
    """Where the caret should go once the edited document has been reparsed."""

    run_id: int
    cursor: int
    anchor: int
    length: int


@dataclass(frozen=True)
class CaretPlacement:
    run_id: int
    cursor: int


@dataclass(frozen=True)
class TextPatch:
    text: str
    intent: FocusIntent


def apply_text_edit(raw: str, run: TextRun, new_content: str, cursor: int) -> TextPatch:
    """Replace exactly ``raw[run.start:run.end]`` with the escaped ``new_content``."""
    replacement = escape_markup(new_content)
    # The reparsed run drops leading whitespace, so the caret moves left with it.
    leading = len(new_content) - len(new_content.lstrip()) if new_content.strip() else 0
    text = raw[: run.start] + replacement + raw[run.end :]
    intent = FocusIntent(run_id=run.id, cursor=max(0, cursor - leading), anchor=run.start, length=len(replacement))
    return TextPatch(text=text, intent=intent)


def resolve_focus_intent(intent: FocusIntent, index: OffsetIndex) -> Optional[CaretPlacement]:
    """Find the run now occupying the edited region, or ``None`` to drop the intent."""
    run = index.run_at(intent.anchor)
    if run is None:
        region_end = intent.anchor + intent.length
        run = next(
            (candidate for candidate in index.runs if intent.anchor <= candidate.start < region_end),
            None,
        )
    if run is None:
        return None
    return CaretPlacement(run_id=run.id, cursor=min(intent.cursor, len(run.content)))


__all__ = [
    "CaretPlacement",
    "FocusIntent",
    "TextPatch",
    "apply_text_edit",
    "escape_markup",
    "resolve_focus_intent",
]
