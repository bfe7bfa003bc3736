"""Single source of truth for one open document."""

from __future__ import annotations

from typing import Optional

from .config import DocSyncConfig
from .errors import UnknownItemError
from .offset_index import OffsetIndex
from .parser import parse_document
from .patcher import CaretPlacement, FocusIntent, apply_text_edit, resolve_focus_intent
from .sync import SyncController, SyncUpdate
from .tree_model import Node, ParseResult, TextRun


class DocumentSession:
    """Owns the raw text and everything derived from it.

    Edits from either view arrive as commands; each one replaces the text and
    triggers a full reparse before any other query can observe the state.
    """

    def __init__(self, text: str = "", config: Optional[DocSyncConfig] = None):
        self.config = config or DocSyncConfig()
        self._text = text
        self.result: ParseResult = parse_document(text, self.config)
        self.index = OffsetIndex.build(self.result, self.config)
        self.sync = SyncController(self.index)
        self._pending_intent: Optional[FocusIntent] = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def tree(self) -> Optional[Node]:
        return self.result.tree

    def set_text(self, text: str) -> ParseResult:
        """Replace the raw text (editor typing) and reparse."""
        self._text = text
        self.result = parse_document(text, self.config)
        self.index = OffsetIndex.build(self.result, self.config)
        self.sync.rebind(self.index)
        return self.result

    def edit_run(self, run_id: int, new_content: str, cursor: int) -> str:
        """Apply an in-place edit made on a rendered text run."""
        run = self.index.get(run_id)
        if not isinstance(run, TextRun):
            raise UnknownItemError(f"item {run_id} is not a text run")
        patch = apply_text_edit(self._text, run, new_content, cursor)
        self.set_text(patch.text)
        self._pending_intent = patch.intent
        return patch.text

    def take_caret(self) -> Optional[CaretPlacement]:
        """Consume the pending focus intent, if any, against the current tree."""
        intent, self._pending_intent = self._pending_intent, None
        if intent is None:
            return None
        return resolve_focus_intent(intent, self.index)

    def editor_moved(self, offset: int, relative_pos: float) -> SyncUpdate:
        return self.sync.editor_moved(offset, relative_pos)

    def preview_clicked(
        self, target_id: int, click_offset: Optional[int], relative_pos: float
    ) -> Optional[SyncUpdate]:
        return self.sync.preview_clicked(target_id, click_offset, relative_pos)


__all__ = ["DocumentSession"]
