# foliopress/markdown/postprocessors/add_heading_links.py

from bs4 import NavigableString, Tag

from .utils import HEADING_TAGS, get_shared_soup, soup_to_html


def _is_wrapped(heading: Tag, slug: str) -> bool:
    children = [
        child
        for child in heading.contents
        if not (isinstance(child, NavigableString) and not child.strip())
    ]
    return (
        len(children) == 1
        and isinstance(children[0], Tag)
        and children[0].name == "a"
        and children[0].get("href") == f"#{slug}"
    )


def add_heading_links(html: str, context: dict) -> str:
    """
    Wrap the content of every heading that has an id in a link to itself.

        <h2 id="setup">Setup</h2>  →  <h2 id="setup"><a href="#setup">Setup</a></h2>

    Links already inside the heading are flattened into the new anchor, since
    anchors cannot nest. Headings that are already wrapped are left alone.
    """
    soup = get_shared_soup(html, context)
    changed = False

    for heading in soup.find_all(HEADING_TAGS):
        slug = heading.get("id")
        if not slug or _is_wrapped(heading, slug):
            continue

        anchor = soup.new_tag("a", href=f"#{slug}")
        for item in list(heading.contents):
            item.extract()
            if isinstance(item, Tag) and item.name == "a":
                for grandchild in list(item.contents):
                    anchor.append(grandchild)
            else:
                anchor.append(item)

        heading.append(anchor)
        changed = True

    return soup_to_html(context, soup) if changed else html
