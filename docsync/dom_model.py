"""Minimal DOM model for serializing the rendered preview."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Dict, List, Sequence


@dataclass
class DomNode:
    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List["DomContent"] = field(default_factory=list)
    text: str | None = None


DomContent = DomNode | str


def _render_attrs(attrs: Dict[str, str]) -> str:
    if not attrs:
        return ""
    parts = [f'{name}="{html.escape(value, quote=True)}"' for name, value in attrs.items()]
    return " " + " ".join(parts)


def _render_content(children: Sequence[DomContent]) -> str:
    parts: List[str] = []
    for child in children:
        if isinstance(child, DomNode):
            parts.append(dom_to_html([child]))
        else:
            # Text is shown literally, so markup characters in it are escaped.
            parts.append(html.escape(child, quote=False))
    return "".join(parts)


def dom_to_html(dom: Sequence[DomNode]) -> str:
    parts: List[str] = []
    for node in dom:
        attrs = _render_attrs(node.attrs)
        parts.append(f"<{node.tag}{attrs}>")
        if node.text is not None:
            parts.append(html.escape(node.text, quote=False))
        if node.children:
            parts.append(_render_content(node.children))
        parts.append(f"</{node.tag}>")
    return "".join(parts)


__all__ = ["DomContent", "DomNode", "dom_to_html"]
