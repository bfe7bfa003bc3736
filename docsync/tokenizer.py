"""Lenient regex scanner that splits markup into offset-annotated tokens.

The scanner is not an XML engine. It recognizes four shapes (comments, close
tags, open/self-closing tags and text) with one alternation and silently skips
anything else, e.g. a lone ``<`` that does not start a tag.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Literal, Optional

TokenKind = Literal["open", "close", "text", "comment", "self-closing"]

TOKEN_RE = re.compile(
    r"(?P<comment><!--.*?-->)"
    r"|(?P<close></[A-Za-z0-9_:]+>)"
    r"|(?P<open><[A-Za-z0-9_:]+(?:\s+[A-Za-z0-9_:-]+=(?:\"[^\"]*\"|'[^']*'))*\s*/?>)"
    r"|(?P<text>[^<]+)",
    re.DOTALL,
)
TAG_NAME_RE = re.compile(r"<([A-Za-z0-9_:]+)")
ATTRIBUTE_RE = re.compile(r"([A-Za-z0-9_:-]+)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')")


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    start: int
    end: int
    tag: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict)
    content: Optional[str] = None

    def to_dict(self) -> dict:
        data: dict = {"kind": self.kind, "start": self.start, "end": self.end}
        if self.tag is not None:
            data["tag"] = self.tag
        if self.kind in ("open", "self-closing"):
            data["attributes"] = dict(self.attributes)
        if self.content is not None:
            data["content"] = self.content
        return data


def parse_attributes(tag_source: str) -> Dict[str, str]:
    """Collect attributes in source order; values stay raw (no entity decoding)."""
    attributes: Dict[str, str] = {}
    for match in ATTRIBUTE_RE.finditer(tag_source):
        name, double_quoted, single_quoted = match.groups()
        attributes[name] = double_quoted if double_quoted is not None else single_quoted
    return attributes


def _text_token(text: str, start: int, end: int) -> Token:
    stripped = text.strip()
    if not stripped:
        return Token(kind="text", start=start, end=end, content=text)
    # Leading whitespace moves the start; the end keeps covering the trailing part.
    leading = len(text) - len(text.lstrip())
    return Token(kind="text", start=start + leading, end=end, content=stripped)


def iter_tokens(text: str) -> Iterator[Token]:
    for match in TOKEN_RE.finditer(text):
        start, end = match.span()
        if match.group("comment") is not None:
            yield Token(kind="comment", start=start, end=end, content=match.group("comment"))
        elif match.group("close") is not None:
            yield Token(kind="close", start=start, end=end, tag=match.group("close")[2:-1].lower())
        elif match.group("open") is not None:
            source = match.group("open")
            name = TAG_NAME_RE.match(source)
            if not name:
                continue
            kind: TokenKind = "self-closing" if source.endswith("/>") else "open"
            yield Token(
                kind=kind,
                start=start,
                end=end,
                tag=name.group(1).lower(),
                attributes=parse_attributes(source[name.end():]),
            )
        else:
            yield _text_token(match.group("text"), start, end)


def tokenize(text: str) -> List[Token]:
    """Return the ordered token sequence for ``text``."""
    return list(iter_tokens(text))


__all__ = ["Token", "TokenKind", "iter_tokens", "parse_attributes", "tokenize"]
