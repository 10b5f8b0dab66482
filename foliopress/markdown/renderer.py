# foliopress/markdown/renderer.py

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor

from asgiref.sync import async_to_sync

from .html import render
from .parser import parse
from .postprocessors import post_process
from .preprocessors import apply_preprocessors
from .schema import TagRegistry
from .transformer import transform

logger = logging.getLogger(__name__)


def render_document(text, context=None, registry: TagRegistry | None = None) -> str:
    """
    Render storage-format markup to HTML, without post-processing.

    Args:
        text: Raw storage-format markup
        context: Optional dict for processors that need additional data
        registry: Tag registry; defaults to the one in context, then the built-in tags

    Returns:
        Escaped, unsanitized HTML
    """
    context = {} if context is None else context
    if registry is not None:
        context["tag_registry"] = registry

    # Pre-processing: Before parsing
    text = apply_preprocessors(text or "", context)

    tree = parse(text)
    tree = transform(tree, context.get("tag_registry"))
    return render(tree)


async def render_markdown(text, context=None) -> str:
    """
    Main rendering function: render the document, then run the post-processing pipeline.

    Args:
        text: Raw storage-format markup
        context: Optional dict for processors that need additional data
    """
    context = {} if context is None else context
    html = render_document(text, context)
    logger.debug(f"Rendered {len(html)} characters of HTML, post-processing")
    return await post_process(html, context)


def render_markdown_sync(text, context=None) -> str:
    """
    Blocking wrapper around render_markdown, for template filters and other sync callers.

    AsyncToSync refuses to run on a thread that already has an event loop
    (e.g. a template rendered from an async view), so in that case the
    pipeline runs on a worker thread and this call blocks until it finishes.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return async_to_sync(render_markdown)(text, context)

    logger.debug("Event loop running in this thread, rendering on a worker thread")
    with ThreadPoolExecutor(max_workers=1) as executor:
        return executor.submit(async_to_sync(render_markdown), text, context).result()
