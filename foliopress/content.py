# foliopress/content.py
"""
Rendering of stored entries.

The content store itself lives outside this app; anything with an async
`get_by_slug` that returns a mapping with a "content" key will do.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol

from .markdown.renderer import render_markdown
from .markdown.toc import TocEntry, extract_toc

logger = logging.getLogger(__name__)


class ContentNotFound(LookupError):
    """Raised when the store has no entry for a slug."""

    def __init__(self, slug: str):
        super().__init__(f"No content for slug {slug!r}")
        self.slug = slug


class ContentStore(Protocol):
    async def get_by_slug(self, slug: str) -> Optional[Mapping[str, Any]]:
        ...


@dataclass
class RenderedEntry:
    slug: str
    html: str
    toc: list[TocEntry] = field(default_factory=list)


async def render_entry(store: ContentStore, slug: str, context: Optional[dict] = None) -> RenderedEntry:
    """
    Fetch an entry from the store and render it with its table of contents.

    Args:
        store: Content store to read from
        slug: Slug of the entry
        context: Optional dict passed to the pre/post processors

    Returns:
        RenderedEntry with the final HTML and the h2/h3 outline

    Raises:
        ContentNotFound: If the store has no entry for the slug
    """
    entry = await store.get_by_slug(slug)
    if entry is None:
        raise ContentNotFound(slug)

    content = entry.get("content") or ""
    if not content:
        logger.warning(f"Entry {slug!r} has no content")

    html = await render_markdown(content, context)
    return RenderedEntry(slug=slug, html=html, toc=extract_toc(html))
