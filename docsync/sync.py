"""Cursor, highlight and scroll reconciliation between editor and preview."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from .errors import UnknownItemError
from .offset_index import OffsetIndex, Span
from .tree_model import Node, TextRun, TreeItem

ViewName = Literal["editor", "preview"]


def normalized_position(y: float, top: float, height: float) -> float:
    """Fraction of a viewport's height at which ``y`` sits, clamped to [0, 1]."""
    if height <= 0:
        return 0.0
    return max(0.0, min(1.0, (y - top) / height))


def scroll_top_for(element_top: float, viewport_height: float, relative_pos: float) -> float:
    """Scroll offset that shows ``element_top`` at ``relative_pos`` of the viewport."""
    return element_top - viewport_height * relative_pos


@dataclass(frozen=True)
class ScrollRequest:
    view: ViewName
    offset: int
    anchor: Optional[Span]
    relative_pos: float


@dataclass(frozen=True)
class SyncUpdate:
    """Everything the other view needs to follow one position event."""

    source: ViewName
    offset: int
    relative_pos: float
    target: Optional[TreeItem]
    scroll: ScrollRequest
    highlight: Optional[Span] = None
    cursor_marker: Optional[int] = None


class SyncController:
    def __init__(self, index: OffsetIndex):
        self.index = index
        self.source: Optional[ViewName] = None
        self.offset: Optional[int] = None
        self.relative_pos: Optional[float] = None

    def rebind(self, index: OffsetIndex) -> None:
        """Swap in the index of a fresh parse; the last position is kept."""
        self.index = index

    def _record(self, source: ViewName, offset: int, relative_pos: float) -> float:
        relative_pos = max(0.0, min(1.0, relative_pos))
        self.source = source
        self.offset = offset
        self.relative_pos = relative_pos
        return relative_pos

    def editor_moved(self, offset: int, relative_pos: float) -> SyncUpdate:
        """The editor caret moved to ``offset`` at ``relative_pos`` of its viewport."""
        relative_pos = self._record("editor", offset, relative_pos)
        target = self.index.locate(offset)
        highlight = self.index.word_span(offset)
        anchor = highlight or (_content_span(target) if target is not None else None)
        return SyncUpdate(
            source="editor",
            offset=offset,
            relative_pos=relative_pos,
            target=target,
            scroll=ScrollRequest(view="preview", offset=offset, anchor=anchor, relative_pos=relative_pos),
            highlight=highlight,
        )

    def resolve_click(self, target_id: int, click_offset: Optional[int]) -> int:
        """Map a click inside a rendered item to a source offset.

        Clicks on a text run land at ``run.start + click_offset``, clamped to the
        run; anything else falls back to the start of the clicked node's content.
        """
        item = self.index.get(target_id)
        if isinstance(item, TextRun):
            if click_offset is None:
                return item.start
            return item.start + min(max(0, click_offset), item.end - item.start)
        return item.content_start

    def preview_clicked(
        self, target_id: int, click_offset: Optional[int], relative_pos: float
    ) -> Optional[SyncUpdate]:
        """Follow a preview click; ids from an earlier render resolve to ``None``."""
        try:
            offset = self.resolve_click(target_id, click_offset)
        except UnknownItemError:
            return None
        relative_pos = self._record("preview", offset, relative_pos)
        target = self.index.locate(offset)
        return SyncUpdate(
            source="preview",
            offset=offset,
            relative_pos=relative_pos,
            target=target,
            scroll=ScrollRequest(view="editor", offset=offset, anchor=(offset, offset), relative_pos=relative_pos),
            cursor_marker=offset,
        )


def _content_span(item: TreeItem) -> Span:
    if isinstance(item, Node):
        return item.content_span
    return item.span


__all__ = [
    "ScrollRequest",
    "SyncController",
    "SyncUpdate",
    "ViewName",
    "normalized_position",
    "scroll_top_for",
]
