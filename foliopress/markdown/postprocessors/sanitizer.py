# foliopress/markdown/postprocessors/sanitizer.py

import logging
from functools import lru_cache

import bleach
from bleach.css_sanitizer import CSSSanitizer

from ..config import get_markdown_settings

logger = logging.getLogger(__name__)

ALLOWED_TAGS = set(bleach.sanitizer.ALLOWED_TAGS).union(
    {
        # text
        "p",
        "br",
        "div",
        "span",
        "section",
        "del",
        "u",
        "sup",
        "sub",
        # headings
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        # lists
        "ul",
        "ol",
        "li",
        "dl",
        "dt",
        "dd",
        "hr",
        "blockquote",
        # code
        "pre",
        "code",
        # tables
        "table",
        "caption",
        "thead",
        "tbody",
        "tfoot",
        "tr",
        "th",
        "td",
        # media
        "img",
        "figure",
        "figcaption",
        "iframe",
    }
)

_COMMON_ATTRIBUTES = {"class", "id", "title", "role"}

ALLOWED_ATTRIBUTES = {
    "a": {"href", "title"},
    "img": {"src", "alt", "title", "width", "height"},
    "iframe": {"src", "title", "allow", "allowfullscreen"},
    "ol": {"start", "type"},
    "th": {"colspan", "rowspan", "style"},
    "td": {"colspan", "rowspan", "style"},
    "div": {"data-tag"},
    "pre": {"style"},
    "span": {"style"},
}

# Custom properties set by the folium table and code highlighting
ALLOWED_CSS_PROPERTIES = [
    "text-align",
    "--pt-bg",
    "--pt-text",
    "--hl-light",
    "--hl-dark",
    "--hl-light-bg",
    "--hl-dark-bg",
]

ALLOWED_PROTOCOLS = ["http", "https", "mailto", "tel"]


def allow_attribute(tag: str, name: str, value: str) -> bool:
    """Attribute filter passed to bleach; data-* and aria-* are allowed everywhere."""
    if name in _COMMON_ATTRIBUTES:
        return True
    if name.startswith("data-") or name.startswith("aria-"):
        return True
    return name in ALLOWED_ATTRIBUTES.get(tag, ())


@lru_cache(maxsize=1)
def _get_cleaner():
    """Cache the bleach cleaner for better performance."""
    return bleach.Cleaner(
        tags=ALLOWED_TAGS,
        attributes=allow_attribute,
        protocols=ALLOWED_PROTOCOLS,
        strip=False,  # Escape disallowed tags instead of dropping their text
        css_sanitizer=CSSSanitizer(allowed_css_properties=ALLOWED_CSS_PROPERTIES),
    )


def sanitize_html(html, context):
    """
    Sanitize HTML output using bleach.
    This is the FIRST post-processor and should run before any other HTML modifications.
    """
    if not get_markdown_settings()["SANITIZE"]:
        logger.debug("Sanitization disabled by settings, skipping")
        return html

    try:
        return _get_cleaner().clean(html)
    except Exception as e:
        logger.error(f"Bleach sanitization failed: {e}", exc_info=True)
        # On failure, return original HTML
        return html
