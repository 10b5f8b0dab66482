"""Helpers shared by the tree-based postprocessors."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

# Context key holding (html, soup) for the most recent parse
_SOUP_CACHE_KEY = "__soup_cache"


def get_shared_soup(html: str, context: dict) -> BeautifulSoup:
    """Return the parsed tree for html, reusing the one cached in context.

    Tree-based postprocessors that run back to back hand each other the
    string they serialized, so a tree is only parsed again after a
    string-based step (such as the sanitizer) has produced different HTML.
    """
    cached = context.get(_SOUP_CACHE_KEY)
    if cached is not None and cached[0] == html:
        return cached[1]
    soup = BeautifulSoup(html, "html.parser")
    context[_SOUP_CACHE_KEY] = (html, soup)
    return soup


def soup_to_html(context: dict, soup: BeautifulSoup | None = None) -> str:
    """Serialize the (shared) tree and record the result as its source."""
    if soup is None:
        cached = context.get(_SOUP_CACHE_KEY)
        soup = cached[1] if cached is not None else None
    if soup is None:
        return ""
    html = str(soup)
    context[_SOUP_CACHE_KEY] = (html, soup)
    return html


def clear_shared_soup(context: dict) -> None:
    context.pop(_SOUP_CACHE_KEY, None)


def class_list(tag: Tag) -> list[str]:
    classes = tag.get("class", [])
    if isinstance(classes, str):
        classes = classes.split()
    return list(classes)
