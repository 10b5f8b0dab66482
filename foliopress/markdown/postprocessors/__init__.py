# foliopress/markdown/postprocessors/__init__.py

import inspect

from .add_heading_links import add_heading_links
from .code_highlighter import highlight_code_blocks
from .heading_slugs import assign_heading_slugs
from .sanitizer import sanitize_html
from .utils import clear_shared_soup

POSTPROCESSORS = [
    sanitize_html,  # Must run first, before any other HTML modifications
    highlight_code_blocks,  # Dual-theme Pygments highlighting of fenced code
    assign_heading_slugs,  # Unique ids for headings that lack one
    add_heading_links,  # Wrap heading content in a self-link
    # Order matters - they run sequentially
]


async def apply_postprocessors(html, context):
    """Apply all postprocessors in order, awaiting the asynchronous ones"""
    for processor in POSTPROCESSORS:
        result = processor(html, context)
        if inspect.isawaitable(result):
            result = await result
        html = result
    return html


async def post_process(html: str, context: dict | None = None) -> str:
    """
    Run the post-processing pipeline over rendered HTML.

    Args:
        html: HTML produced by the renderer
        context: Optional dict shared by the postprocessors

    Returns:
        Sanitized, highlighted HTML with linked, uniquely identified headings
    """
    context = {} if context is None else context
    try:
        return await apply_postprocessors(html, context)
    finally:
        clear_shared_soup(context)
