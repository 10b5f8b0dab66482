# foliopress/markdown/postprocessors/heading_slugs.py
"""
Postprocessor that gives every heading a stable, unique id.

- Headings that already carry an id (explicit `{#id}` in the source, or a
  previous run of this postprocessor) keep it.
- Other headings get a slug of their text; every id already present in the
  document is reserved first, and duplicates get -2, -3, ... appended.
"""

from django.utils.text import slugify

from .utils import HEADING_TAGS, get_shared_soup, soup_to_html

FALLBACK_SLUG = "section"


def heading_slug(text: str) -> str:
    """Convert heading text to a URL-safe slug (letters of any script are kept)."""
    return slugify(text, allow_unicode=True) or FALLBACK_SLUG


def assign_heading_slugs(html: str, context: dict) -> str:
    soup = get_shared_soup(html, context)

    used = {element["id"] for element in soup.find_all(id=True)}
    changed = False

    for heading in soup.find_all(HEADING_TAGS):
        if heading.get("id"):
            continue

        base = heading_slug(heading.get_text())
        slug = base
        count = 1
        while slug in used:
            count += 1
            slug = f"{base}-{count}"

        used.add(slug)
        heading["id"] = slug
        changed = True

    return soup_to_html(context, soup) if changed else html
