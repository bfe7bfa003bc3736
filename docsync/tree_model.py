"""Offset-annotated document tree produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .tokenizer import Token


@dataclass(frozen=True)
class TextRun:
    id: int
    content: str
    start: int
    end: int

    @property
    def span(self) -> Tuple[int, int]:
        return (self.start, self.end)

    def to_dict(self) -> dict:
        return {
            "type": "text",
            "id": self.id,
            "content": self.content,
            "start": self.start,
            "end": self.end,
        }


@dataclass(frozen=True)
class Node:
    id: int
    tag: str
    variant: str
    start: int
    end: int
    content_start: int
    content_end: int
    attributes: Dict[str, str] = field(default_factory=dict)
    hints: Dict[str, str] = field(default_factory=dict)
    children: Tuple["TreeItem", ...] = ()

    @property
    def span(self) -> Tuple[int, int]:
        return (self.start, self.end)

    @property
    def content_span(self) -> Tuple[int, int]:
        return (self.content_start, self.content_end)

    def walk(self) -> Iterator["TreeItem"]:
        """Yield this node and every descendant in document order."""
        yield self
        for child in self.children:
            if isinstance(child, Node):
                yield from child.walk()
            else:
                yield child

    def text_runs(self) -> List[TextRun]:
        return [item for item in self.walk() if isinstance(item, TextRun)]

    def to_dict(self) -> dict:
        return {
            "type": "node",
            "id": self.id,
            "tag": self.tag,
            "variant": self.variant,
            "attributes": dict(self.attributes),
            "hints": dict(self.hints),
            "start": self.start,
            "end": self.end,
            "contentStart": self.content_start,
            "contentEnd": self.content_end,
            "children": [child.to_dict() for child in self.children],
        }


TreeItem = Union[Node, TextRun]


@dataclass(frozen=True)
class ParseResult:
    """Outcome of one parse pass; ``tree`` is ``None`` when parsing failed closed."""

    tree: Optional[Node]
    tokens: Tuple[Token, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.tree is not None


__all__ = ["Node", "ParseResult", "TextRun", "TreeItem"]
