# foliopress/markdown/__init__.py

from .exceptions import MarkupError, TagSyntaxError, TagValidationError
from .excerpt import first_image_url, first_sentences
from .html import render
from .parser import parse
from .postprocessors import post_process
from .preview import render_preview
from .renderer import render_document, render_markdown, render_markdown_sync
from .schema import DEFAULT_REGISTRY, AttributeSpec, TagRegistry, TagSchema
from .toc import TocEntry, extract_toc
from .transcoder import (
    from_legacy_components,
    to_editor_syntax,
    to_legacy_components,
    to_storage_syntax,
)
from .transformer import transform

__all__ = [
    "DEFAULT_REGISTRY",
    "AttributeSpec",
    "MarkupError",
    "TagRegistry",
    "TagSchema",
    "TagSyntaxError",
    "TagValidationError",
    "TocEntry",
    "extract_toc",
    "first_image_url",
    "first_sentences",
    "from_legacy_components",
    "parse",
    "post_process",
    "render",
    "render_document",
    "render_markdown",
    "render_markdown_sync",
    "render_preview",
    "to_editor_syntax",
    "to_legacy_components",
    "to_storage_syntax",
    "transform",
]
