"""Turn a parsed tree into preview HTML for the rendering layer."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

from .dom_model import DomContent, DomNode, dom_to_html
from .offset_index import Span
from .tree_model import Node, ParseResult, TextRun
from .variants import element_for

TEMPLATES_DIR = Path(__file__).parent / "templates"
HIGHLIGHT_CLASS = "ds-sync-highlight"


@lru_cache(maxsize=1)
def jinja_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "jinja"]),
        undefined=StrictUndefined,
    )


def _run_to_dom(run: TextRun, highlight: Optional[Span]) -> DomNode:
    attrs = {"data-id": str(run.id), "data-start-index": str(run.start)}
    if highlight is not None:
        start = highlight[0] - run.start
        end = min(highlight[1] - run.start, len(run.content))
        if 0 <= start < end:
            children: List[DomContent] = []
            if start:
                children.append(run.content[:start])
            children.append(DomNode(tag="span", attrs={"class": HIGHLIGHT_CLASS}, text=run.content[start:end]))
            if end < len(run.content):
                children.append(run.content[end:])
            return DomNode(tag="span", attrs=attrs, children=children)
    return DomNode(tag="span", attrs=attrs, text=run.content)


def tree_to_dom(node: Node, highlight: Optional[Span] = None) -> DomNode:
    """Convert ``node`` and its descendants, marking the highlighted word span."""
    attrs = {"class": f"ds-{node.variant}", "data-id": str(node.id)}
    attrs.update(node.hints)
    children: List[DomContent] = []
    for child in node.children:
        if isinstance(child, Node):
            children.append(tree_to_dom(child, highlight))
        else:
            children.append(_run_to_dom(child, highlight))
    return DomNode(tag=element_for(node.variant), attrs=attrs, children=children)


def render_tree(tree: Node, highlight: Optional[Span] = None) -> str:
    return dom_to_html([tree_to_dom(tree, highlight)])


def render_page(result: ParseResult, *, title: str = "Preview", highlight: Optional[Span] = None) -> str:
    """Render a full preview page; a failed parse shows an explicit error state."""
    body = Markup(render_tree(result.tree, highlight)) if result.tree is not None else None
    template = jinja_env().get_template("preview.html.jinja")
    return template.render(title=title, body=body, error=result.error)


__all__ = ["HIGHLIGHT_CLASS", "render_page", "render_tree", "tree_to_dom"]
