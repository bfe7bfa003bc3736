"""Recursive-descent parser from tokens to an offset-annotated tree.

Parsing is fail-closed at the top level: a document that fails the coarse
well-formedness gate, has no opening tag, nests too deeply or trips any other
error yields ``ParseResult(tree=None)``. Locally it is fail-open: an element
without a close tag simply extends to the last token it consumed.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
from xml.etree import ElementTree as ET

from .config import DocSyncConfig
from .errors import NestingTooDeep, WellFormednessFailure
from .io_utils import warn
from .tokenizer import Token, tokenize
from .tree_model import Node, ParseResult, TextRun, TreeItem
from .variants import resolve_variant


def check_well_formed(text: str) -> None:
    """Raise ``WellFormednessFailure`` when the XML parser rejects ``text``."""
    try:
        ET.fromstring(text)
    except ET.ParseError as exc:
        raise WellFormednessFailure(f"XML parse error: {exc}") from exc


def _parse_element(
    tokens: Sequence[Token],
    index: int,
    next_id: int,
    config: DocSyncConfig,
    ancestors: Tuple[str, ...] = (),
) -> Tuple[Node, int, int]:
    """Parse the element opened at ``tokens[index]``.

    Returns the node, the index of the first unconsumed token and the next
    free id.
    """
    token = tokens[index]
    if len(ancestors) >= config.max_depth:
        raise NestingTooDeep(config.max_depth, token.start)

    tag = token.tag or ""
    parent = ancestors[-1] if ancestors else None
    variant, hints = resolve_variant(tag, token.attributes, parent)
    node_id = next_id
    next_id += 1

    children: List[TreeItem] = []
    content_start = content_end = end = token.end
    position = index + 1

    if token.kind == "open":
        lineage = ancestors + (tag,)
        closed = False
        while position < len(tokens):
            current = tokens[position]
            if current.kind == "close" and current.tag == tag:
                content_end = current.start
                end = current.end
                position += 1
                closed = True
                break
            if (
                current.kind == "close"
                and config.close_matching == "ancestor"
                and current.tag in ancestors
            ):
                # Implicitly closed; the ancestor consumes this token.
                content_end = end = current.start
                closed = True
                break

            if current.kind == "text":
                children.append(
                    TextRun(id=next_id, content=current.content or "", start=current.start, end=current.end)
                )
                next_id += 1
                end = current.end
                position += 1
            elif current.kind in ("open", "self-closing"):
                child, position, next_id = _parse_element(tokens, position, next_id, config, lineage)
                children.append(child)
                end = child.end
            else:
                end = current.end
                position += 1

        if not closed:
            content_end = end

    node = Node(
        id=node_id,
        tag=tag,
        variant=variant,
        start=token.start,
        end=end,
        content_start=content_start,
        content_end=content_end,
        attributes=dict(token.attributes),
        hints=hints,
        children=tuple(children),
    )
    return node, position, next_id


def parse_tokens(tokens: Sequence[Token], config: Optional[DocSyncConfig] = None) -> Optional[Node]:
    """Build a tree from ``tokens``, starting at the first opening tag."""
    config = config or DocSyncConfig()
    first_open = next((i for i, token in enumerate(tokens) if token.kind == "open"), None)
    if first_open is None:
        return None
    node, _, _ = _parse_element(tokens, first_open, 0, config)
    return node


def parse_document(text: str, config: Optional[DocSyncConfig] = None) -> ParseResult:
    """Tokenize and parse ``text``; never raises."""
    config = config or DocSyncConfig()
    tokens = tuple(tokenize(text))
    if not tokens:
        return ParseResult(tree=None, tokens=tokens, error="document is empty")
    try:
        if config.check_well_formed:
            check_well_formed(text)
        tree = parse_tokens(tokens, config)
    except WellFormednessFailure as exc:
        warn(f"Could not parse document: {exc}")
        return ParseResult(tree=None, tokens=tokens, error=str(exc))
    except Exception as exc:  # noqa: BLE001 - traversal failures must not escape
        warn(f"Unexpected error while parsing document: {exc!r}")
        return ParseResult(tree=None, tokens=tokens, error=f"unexpected error: {exc!r}")

    if tree is None:
        return ParseResult(tree=None, tokens=tokens, error="no opening tag found")
    return ParseResult(tree=tree, tokens=tokens)


__all__ = ["check_well_formed", "parse_document", "parse_tokens"]
