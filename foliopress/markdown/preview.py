# foliopress/markdown/preview.py
"""
Lightweight preview rendering for the editor.

Runs the same parse and transform path as the full renderer but without
post-processing (no sanitizing, no highlighting, no heading links), and with
custom tags shown as labelled placeholders instead of their real output:

    {% folium-table ... /%}   → <div class="preview-placeholder preview-folium-table">📋 Folium Table</div>
    {% youtube id="abc" /%}   → <div class="preview-placeholder preview-youtube">▶ YouTube: abc</div>
"""

from .html import render
from .parser import parse
from .preprocessors import apply_preprocessors
from .transformer import transform


def render_preview(content, context=None) -> str:
    if not content or not content.strip():
        return ""

    context = {} if context is None else context
    text = apply_preprocessors(content, context)
    tree = transform(parse(text), context.get("tag_registry"), preview=True)
    return render(tree)
