"""Whitelist HTML sanitizer applied to the output of both extraction tiers.

This is the only security boundary before extracted content is rendered as
markup: scripts, styles, event handlers, iframes, forms and unknown
attributes never survive it.
"""

from __future__ import annotations

import nh3

# Base safe tag set (block, inline and table markup with no active content)
BASE_TAGS: frozenset[str] = frozenset({
    "address", "article", "aside", "footer", "header", "hgroup", "main", "nav",
    "section", "blockquote", "dd", "div", "dl", "dt", "hr", "li", "ol", "p",
    "pre", "ul", "a", "abbr", "b", "bdi", "bdo", "br", "cite", "code", "data",
    "dfn", "em", "i", "kbd", "mark", "q", "s", "samp", "small", "span",
    "strong", "sub", "sup", "time", "u", "var", "wbr", "caption", "col",
    "colgroup", "tfoot",
})

STRUCTURAL_TAGS: frozenset[str] = frozenset({
    "h1", "h2", "h3", "h4", "h5", "h6",
    "table", "thead", "tbody", "tr", "th", "td",
    "figure", "figcaption",
})

ALLOWED_TAGS: frozenset[str] = BASE_TAGS | STRUCTURAL_TAGS

ALLOWED_ATTRIBUTES: dict[str, set[str]] = {
    "a": {"href", "target", "rel"},
    "*": {"id", "class"},
}

# Elements dropped together with their text content
CLEAN_CONTENT_TAGS: frozenset[str] = frozenset({
    "script", "style", "noscript", "textarea", "option",
})

URL_SCHEMES: frozenset[str] = frozenset({"http", "https", "mailto", "tel"})


def sanitize(html: str) -> str:
    """Return ``html`` reduced to the allowed tag and attribute subset.

    Args:
        html: Untrusted HTML from either extractor tier.

    Returns:
        Sanitized HTML; "" for empty input.
    """
    if not html:
        return ""
    return nh3.clean(
        html,
        tags=set(ALLOWED_TAGS),
        clean_content_tags=set(CLEAN_CONTENT_TAGS),
        attributes=ALLOWED_ATTRIBUTES,
        url_schemes=set(URL_SCHEMES),
        # rel is passed through as an allowed attribute instead of rewritten
        link_rel=None,
    )
