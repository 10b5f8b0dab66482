# foliopress/markdown/toc.py

from __future__ import annotations

import html as html_lib
import re
from typing import TypedDict

from bs4 import BeautifulSoup, Tag

TOC_LEVELS = ["h2", "h3"]

_ENTITY_RE = re.compile(r"&[^;]+;")


class TocEntry(TypedDict):
    level: int
    text: str
    slug: str
    children: list["TocEntry"]


def _heading_text(heading: Tag) -> str:
    """
    Return the display text of a heading.

    Links inside the heading (including the self-link added by post-processing)
    contribute their text like any other inline markup. Entities are not
    decoded faithfully: any `&...;` sequence becomes a single space.
    """
    text = html_lib.escape(heading.get_text(), quote=False).replace("\xa0", " ")
    return _ENTITY_RE.sub(" ", text.strip()).strip()


def extract_toc(html: str) -> list[TocEntry]:
    """
    Given rendered HTML, return the h2/h3 outline of the document.

    Only headings that carry an id are listed; h1 and h4+ are ignored. Each h3
    is nested under the nearest preceding h2. An h3 with no h2 before it is kept
    as a root entry.

    Each entry is a dictionary with:
        - level: 2 or 3
        - text: plain-text heading content
        - slug: the heading's id
        - children: nested list of entries
    """
    soup = BeautifulSoup(html, "html.parser")
    toc: list[TocEntry] = []
    stack: list[TocEntry] = []

    for heading in soup.find_all(TOC_LEVELS):
        slug = heading.get("id")
        if not slug:
            continue
        text = _heading_text(heading)
        if not text:
            continue

        level = int(heading.name[1])  # "h2" -> 2
        node: TocEntry = {"level": level, "text": text, "slug": slug, "children": []}

        while stack and stack[-1]["level"] >= level:
            stack.pop()

        if stack:
            stack[-1]["children"].append(node)
        else:
            toc.append(node)

        stack.append(node)

    return toc
