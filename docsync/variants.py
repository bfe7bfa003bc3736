"""Tag to presentation-variant resolution."""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Tuple

FALLBACK_VARIANT = "block"

TAG_VARIANTS: Dict[str, str] = {
    "article": "article",
    "title": "heading-1",
    "para": "paragraph",
    "itemizedlist": "bullet-list",
    "listitem": "list-item",
    "emphasis": "emphasis",
    "phrase": "phrase",
    "superscript": "superscript",
    "subscript": "subscript",
    "sect1": "section",
    "sect2": "section",
    "ulink": "link",
    "link": "link",
}

# Title variants keyed by the immediate parent tag.
TITLE_VARIANTS: Dict[str, str] = {
    "article": "heading-1",
    "sect1": "heading-2",
    "sect2": "heading-3",
}
TITLE_FALLBACK_VARIANT = "title-inline"

EMPHASIS_ROLE_VARIANTS: Dict[str, str] = {
    "bold": "strong",
    "underline": "underline",
}

LINK_TARGET_ATTRIBUTES = ("url", "xlink:href")

# HTML element used by the renderer for each variant.
VARIANT_ELEMENTS: Dict[str, str] = {
    "article": "div",
    "heading-1": "h1",
    "heading-2": "h2",
    "heading-3": "h3",
    "title-inline": "strong",
    "paragraph": "p",
    "bullet-list": "ul",
    "list-item": "li",
    "emphasis": "em",
    "strong": "strong",
    "underline": "span",
    "phrase": "span",
    "superscript": "sup",
    "subscript": "sub",
    "section": "section",
    "link": "a",
    FALLBACK_VARIANT: "div",
}


def link_target(attributes: Mapping[str, str]) -> Optional[str]:
    for name in LINK_TARGET_ATTRIBUTES:
        value = attributes.get(name)
        if value:
            return value
    return None


def resolve_variant(
    tag: str, attributes: Mapping[str, str], parent: Optional[str] = None
) -> Tuple[str, Dict[str, str]]:
    """Return the variant for a tag instance and its attribute-derived hints."""
    variant = TAG_VARIANTS.get(tag, FALLBACK_VARIANT)
    hints: Dict[str, str] = {}

    if tag == "title":
        variant = TITLE_VARIANTS.get(parent or "", TITLE_FALLBACK_VARIANT)
    elif tag == "emphasis":
        variant = EMPHASIS_ROLE_VARIANTS.get(attributes.get("role", ""), "emphasis")
    elif variant == "link":
        href = link_target(attributes)
        if href:
            hints["href"] = href
            hints["target"] = "_blank"
            hints["rel"] = "noopener noreferrer"

    return variant, hints


def element_for(variant: str) -> str:
    return VARIANT_ELEMENTS.get(variant, VARIANT_ELEMENTS[FALLBACK_VARIANT])


__all__ = [
    "FALLBACK_VARIANT",
    "TAG_VARIANTS",
    "VARIANT_ELEMENTS",
    "element_for",
    "link_target",
    "resolve_variant",
]
