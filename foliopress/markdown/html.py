# foliopress/markdown/html.py
"""
HTML renderer: render tree → HTML string.

render() is total. Unknown node types render as nothing, and every text
and attribute value goes through escape().
"""

import base64

from .colors import CellColor
from .config import get_markdown_settings
from .nodes import (
    AttrValue,
    CodeBlock,
    CustomEmbed,
    CustomTable,
    Element,
    MermaidDiagram,
    Node,
    Placeholder,
    Text,
)

VOID_ELEMENTS = frozenset(
    {
        "img",
        "br",
        "hr",
        "input",
        "meta",
        "link",
        "area",
        "base",
        "col",
        "embed",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Cells with text this short get the no-wrap hint class
NOWRAP_LENGTH = 15

EMPTY_CELL = "—"

EMBED_ALLOW = (
    "accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture"
)

_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
    }
)


def escape(value: str) -> str:
    return str(value).translate(_ESCAPE_TABLE)


def render_attributes(attributes: dict[str, AttrValue]) -> str:
    """
    Serialize attributes with a leading space, or "" when there are none.

    True renders as a bare attribute name; False and None are omitted.
    """
    parts = []
    for name, value in attributes.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(escape(name))
        else:
            parts.append(f'{escape(name)}="{escape(value)}"')
    return (" " + " ".join(parts)) if parts else ""


def _cell(tag: str, index_attr: str, index: int, text: str, color: CellColor | None, colored_class: str) -> str:
    classes = []
    if color is not None and color.is_set:
        classes.append(colored_class)
    if len(text) <= NOWRAP_LENGTH:
        classes.append("ft-nowrap")

    attributes: dict[str, AttrValue] = {}
    if classes:
        attributes["class"] = " ".join(classes)
    if color is not None and color.background:
        attributes["style"] = f"--pt-bg:{color.background};--pt-text:{color.text}"
    attributes[index_attr] = str(index)
    if color is not None and color.background_dark:
        attributes["data-pt-bg-dark"] = color.background_dark
    if color is not None and color.text_dark:
        attributes["data-pt-text-dark"] = color.text_dark

    return f"<{tag}{render_attributes(attributes)}>{escape(text)}</{tag}>"


def render_table(table: CustomTable) -> str:
    def color_at(colors: tuple[CellColor, ...], index: int) -> CellColor | None:
        return colors[index] if index < len(colors) else None

    head = "".join(
        _cell("th", "data-pt-head-idx", i, column, color_at(table.head_colors, i), "pt-head-col")
        for i, column in enumerate(table.columns)
    )

    body = []
    for row in table.rows:
        cells = "".join(
            _cell("td", "data-pt-body-idx", i, cell or EMPTY_CELL, color_at(table.body_colors, i), "pt-body-col")
            for i, cell in enumerate(row)
        )
        body.append(f"<tr>{cells}</tr>")

    table_class = "folium-table has-col-colors" if table.has_colors else "folium-table"
    return (
        f'<div class="folium-table-wrapper"><table class="{table_class}">'
        f"<thead><tr>{head}</tr></thead>"
        f"<tbody>{''.join(body)}</tbody>"
        f"</table></div>"
    )


def render_embed(embed: CustomEmbed) -> str:
    url = get_markdown_settings()["EMBED_URL"].format(id=escape(embed.id))
    return (
        '<div class="youtube-embed-wrapper">'
        f'<iframe src="{url}" title="YouTube video" allow="{EMBED_ALLOW}" '
        'allowfullscreen class="youtube-embed"></iframe>'
        "</div>"
    )


def render_code_block(block: CodeBlock) -> str:
    code_class = f' class="language-{escape(block.language)}"' if block.language else ""
    return f"<pre><code{code_class}>{escape(block.content)}</code></pre>"


def render_mermaid(diagram: MermaidDiagram) -> str:
    # Base64 of the UTF-8 definition; the client-side renderer decodes and draws it
    encoded = base64.b64encode(diagram.definition.encode("utf-8")).decode("ascii")
    return f'<div class="mermaid-pending" data-mermaid-definition="{encoded}"></div>'


def render_placeholder(placeholder: Placeholder) -> str:
    return f'<div class="markup-placeholder" data-tag="{escape(placeholder.tag_name)}"></div>'


def render(node: Node) -> str:
    """Serialize a render tree depth-first, pre-order."""
    if node is None:
        return ""
    if isinstance(node, Text):
        return escape(node.value)
    if isinstance(node, list):
        return "".join(render(child) for child in node)
    if isinstance(node, CodeBlock):
        return render_code_block(node)
    if isinstance(node, MermaidDiagram):
        return render_mermaid(node)
    if isinstance(node, CustomTable):
        return render_table(node)
    if isinstance(node, CustomEmbed):
        return render_embed(node)
    if isinstance(node, Placeholder):
        return render_placeholder(node)
    if not isinstance(node, Element):
        return ""

    if not node.tag_name:
        return "".join(render(child) for child in node.children)

    name = node.tag_name
    opening = f"<{name}{render_attributes(node.attributes)}>"
    if name in VOID_ELEMENTS:
        return opening
    children = "".join(render(child) for child in node.children)
    return f"{opening}{children}</{name}>"
