"""Read-only position queries over a parsed tree."""

from __future__ import annotations

from bisect import bisect_right
from typing import Dict, List, Optional, Tuple, Union

from .config import DEFAULT_WORD_BOUNDARIES, DocSyncConfig
from .errors import UnknownItemError
from .tree_model import Node, ParseResult, TextRun, TreeItem

Span = Tuple[int, int]


class OffsetIndex:
    """Maps source offsets to tree items and back.

    Built once per parse; the tree it wraps is never mutated, so an index can
    be shared freely until the next reparse replaces it.
    """

    def __init__(self, tree: Optional[Node], *, word_boundaries: str = DEFAULT_WORD_BOUNDARIES):
        self.tree = tree
        self.word_boundaries = frozenset(word_boundaries)
        self._items: Dict[int, TreeItem] = {}
        self._parents: Dict[int, int] = {}
        self._nodes: List[Node] = []
        self._runs: List[TextRun] = []
        if tree is not None:
            self._collect(tree, None)
        self._runs.sort(key=lambda run: run.start)
        self._run_starts = [run.start for run in self._runs]

    @classmethod
    def build(cls, result: ParseResult, config: Optional[DocSyncConfig] = None) -> "OffsetIndex":
        config = config or DocSyncConfig()
        return cls(result.tree, word_boundaries=config.word_boundaries)

    def _collect(self, item: TreeItem, parent_id: Optional[int]) -> None:
        self._items[item.id] = item
        if parent_id is not None:
            self._parents[item.id] = parent_id
        if isinstance(item, TextRun):
            self._runs.append(item)
            return
        self._nodes.append(item)
        for child in item.children:
            self._collect(child, item.id)

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes)

    @property
    def runs(self) -> List[TextRun]:
        return list(self._runs)

    def get(self, item_id: int) -> TreeItem:
        try:
            return self._items[item_id]
        except KeyError:
            raise UnknownItemError(item_id) from None

    def parent_of(self, item_id: int) -> Optional[Node]:
        self.get(item_id)
        parent_id = self._parents.get(item_id)
        if parent_id is None:
            return None
        return self._items[parent_id]  # type: ignore[return-value]

    def span_of(self, item: Union[TreeItem, int]) -> Span:
        """Reverse lookup: the source span of a node or run."""
        item_id = item if isinstance(item, int) else item.id
        return self.get(item_id).span

    def run_at(self, offset: int) -> Optional[TextRun]:
        position = bisect_right(self._run_starts, offset) - 1
        if position < 0:
            return None
        run = self._runs[position]
        if run.start <= offset < run.end:
            return run
        return None

    def node_at(self, offset: int) -> Optional[Node]:
        """Deepest node whose content bounds contain ``offset``."""
        node = self.tree
        if node is None or not node.content_start <= offset <= node.content_end:
            return None
        while True:
            for child in node.children:
                if isinstance(child, Node) and child.content_start <= offset <= child.content_end:
                    node = child
                    break
            else:
                return node

    def locate(self, offset: int) -> Optional[TreeItem]:
        """Forward lookup: the run at ``offset``, else its enclosing node."""
        run = self.run_at(offset)
        if run is not None:
            return run
        return self.node_at(offset)

    def word_span(self, offset: int) -> Optional[Span]:
        """Snap ``offset`` to the word around it, never leaving its text run."""
        run = self.run_at(offset)
        if run is None:
            return None
        content = run.content
        boundaries = self.word_boundaries

        def is_boundary(position: int) -> bool:
            # Past the content lies the whitespace the tokenizer trimmed off.
            return position >= len(content) or content[position] in boundaries

        relative = offset - run.start
        word_start = relative
        while word_start > 0 and not is_boundary(word_start - 1):
            word_start -= 1
        word_end = relative + 1
        while word_end < run.end - run.start and not is_boundary(word_end):
            word_end += 1
        return (run.start + word_start, run.start + word_end)


__all__ = ["OffsetIndex", "Span"]
