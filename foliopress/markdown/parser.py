# foliopress/markdown/parser.py
"""
Document parser: storage-format markup → document tree.

Parsing happens in two passes:

1. Block-level custom tags (`{% youtube id="..." /%}`) are cut out of the
   source with the tag scanner and replaced by placeholder paragraphs.
   Malformed or unterminated tags are left where they are and read as text.
2. The remaining Markdown is handed to Pandoc (through pypandoc) which
   returns its JSON AST. That AST is lowered into our Element/Text nodes,
   with placeholders swapped back for Tag nodes and code blocks kept as
   CodeFence nodes for the transformer.
"""

import json
import logging
import re
import secrets

import pypandoc

from .config import get_pandoc_config
from .exceptions import TagSyntaxError
from .nodes import CodeFence, Element, Node, Tag, Text, fragment
from .tags import iter_regions, read_storage_tag

logger = logging.getLogger(__name__)

# Pandoc key/value attributes that keep their own name; others get "data-"
_PASSTHROUGH_ATTRIBUTES = {"title", "lang", "dir", "width", "height"}

_LIST_STYLES = {
    "LowerAlpha": "a",
    "UpperAlpha": "A",
    "LowerRoman": "i",
    "UpperRoman": "I",
}

_ALIGNMENTS = {
    "AlignLeft": "left",
    "AlignRight": "right",
    "AlignCenter": "center",
}

_SIMPLE_INLINES = {
    "Emph": "em",
    "Strong": "strong",
    "Strikeout": "del",
    "Underline": "u",
    "Superscript": "sup",
    "Subscript": "sub",
}


def extract_block_tags(source: str) -> tuple[str, dict[str, Tag]]:
    """
    Replace block-level custom tags with placeholder paragraphs.

    A tag is block-level when it starts a line (at most three spaces of
    indentation), sits outside fenced code, and nothing but whitespace follows
    its closing `/%}` on the last line it occupies.

    Returns:
        The rewritten source and a mapping of placeholder → Tag.
    """
    nonce = secrets.token_hex(4)
    tags: dict[str, Tag] = {}
    pieces: list[str] = []

    for start, end, fenced in iter_regions(source):
        if fenced:
            pieces.append(source[start:end])
            continue

        cursor = pos = start
        while pos < end:
            newline = source.find("\n", pos, end)
            line_end = end if newline == -1 else newline + 1

            indent = 0
            while indent < 3 and source.startswith(" ", pos + indent, end):
                indent += 1
            tag_start = pos + indent

            if source.startswith("{%", tag_start, end):
                try:
                    scanned = read_storage_tag(source, tag_start, end)
                except TagSyntaxError as e:
                    logger.debug(f"Treating malformed tag as text: {e}")
                else:
                    newline = source.find("\n", scanned.end, end)
                    tail_end = end if newline == -1 else newline + 1
                    if not source[scanned.end:tail_end].strip():
                        key = f"fptag{nonce}n{len(tags)}"
                        tags[key] = Tag(
                            name=scanned.name,
                            attributes=scanned.attributes,
                            source=source[scanned.start:scanned.end],
                        )
                        pieces.append(source[cursor:pos])
                        # Same indentation, so a tag continuing a list item stays in it
                        pieces.append(f"\n{' ' * indent}{key}\n\n")
                        cursor = pos = tail_end
                        continue

            pos = line_end

        pieces.append(source[cursor:end])

    return "".join(pieces), tags


def _pandoc_ast(text: str) -> dict:
    config = get_pandoc_config()
    output = pypandoc.convert_text(
        text,
        to=config["to"],
        format=config["format"],
        extra_args=config["extra_args"],
    )
    return json.loads(output)


def _fallback_tree(source: str) -> Element:
    """Plain paragraphs of literal text, used when Pandoc cannot read the input."""
    paragraphs = [p for p in re.split(r"\n\s*\n", source) if p.strip()]
    return fragment(*(Element("p", {}, [Text(p.strip())]) for p in paragraphs))


def plain_text(nodes: list[Node]) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.value)
        elif isinstance(node, Element):
            parts.append(plain_text(node.children))
    return "".join(parts)


class PandocLowering:
    """Lower a Pandoc JSON AST into document tree nodes."""

    def __init__(self, tags: dict[str, Tag] | None = None):
        self.tags = tags or {}
        self.notes: list[list[Node]] = []
        self._placeholder_re = (
            re.compile("|".join(re.escape(key) for key in self.tags)) if self.tags else None
        )

    def document(self, ast: dict) -> Element:
        root = fragment(*self.blocks(ast.get("blocks", [])))
        if self.notes:
            root.children.append(self._footnotes())
        return root

    # Blocks

    def blocks(self, items: list) -> list[Node]:
        nodes: list[Node] = []
        for block in items:
            nodes.extend(self.block(block))
        return nodes

    def block(self, block: dict) -> list[Node]:
        kind = block.get("t")
        c = block.get("c")

        if kind in ("Para", "Plain"):
            tag = self._placeholder_tag(c)
            if tag is not None:
                return [tag]
            if kind == "Plain":
                return self.inlines(c)
            return [Element("p", {}, self.inlines(c))]

        if kind == "Header":
            level, attr, content = c
            return [Element(f"h{level}", self.attributes(attr), self.inlines(content))]

        if kind == "CodeBlock":
            attr, text = c
            return [
                CodeFence(
                    content=text,
                    classes=list(attr[1]),
                    attributes={k: v for k, v in attr[2]},
                )
            ]

        if kind == "BlockQuote":
            return [Element("blockquote", {}, self.blocks(c))]

        if kind == "BulletList":
            return [Element("ul", {}, self._list_items(c))]

        if kind == "OrderedList":
            (start, style, _delim), items = c
            attributes: dict = {}
            if start != 1:
                attributes["start"] = str(start)
            if style.get("t") in _LIST_STYLES:
                attributes["type"] = _LIST_STYLES[style["t"]]
            return [Element("ol", attributes, self._list_items(items))]

        if kind == "DefinitionList":
            children: list[Node] = []
            for term, definitions in c:
                children.append(Element("dt", {}, self.inlines(term)))
                for definition in definitions:
                    children.append(Element("dd", {}, self.blocks(definition)))
            return [Element("dl", {}, children)]

        if kind == "LineBlock":
            children = []
            for index, line in enumerate(c):
                if index:
                    children.append(Element("br"))
                children.extend(self.inlines(line))
            return [Element("div", {"class": "line-block"}, children)]

        if kind == "HorizontalRule":
            return [Element("hr")]

        if kind == "Div":
            attr, content = c
            return [Element("div", self.attributes(attr), self.blocks(content))]

        if kind == "Figure":
            attr, caption, content = c
            children = self.blocks(content)
            if caption[1]:
                children.append(Element("figcaption", {}, self._cell_content(caption[1])))
            return [Element("figure", self.attributes(attr), children)]

        if kind == "Table":
            try:
                return [self._table(c)]
            except (ValueError, TypeError, IndexError, KeyError) as e:
                logger.warning(f"Skipping table with unexpected Pandoc structure: {e}")
                return []

        if kind == "RawBlock":
            _format, text = c
            return [Element("p", {}, [Text(text)])]

        logger.debug(f"Ignoring unsupported Pandoc block {kind!r}")
        return []

    def _list_items(self, items: list) -> list[Node]:
        return [Element("li", {}, self.blocks(item)) for item in items]

    def _cell_content(self, blocks: list) -> list[Node]:
        if len(blocks) == 1 and blocks[0].get("t") == "Plain":
            return self.inlines(blocks[0]["c"])
        return self.blocks(blocks)

    def _table(self, c: list) -> Element:
        attr, caption, colspecs, head, bodies, foot = c
        aligns = [_ALIGNMENTS.get(spec[0].get("t")) for spec in colspecs]
        table = Element("table", self.attributes(attr))

        if caption[1]:
            table.children.append(Element("caption", {}, self._cell_content(caption[1])))

        if head[1]:
            table.children.append(
                Element("thead", {}, [self._row(row, "th", aligns) for row in head[1]])
            )

        for body in bodies:
            _attr, _row_head_columns, body_head, body_rows = body
            rows = [self._row(row, "th", aligns) for row in body_head]
            rows.extend(self._row(row, "td", aligns) for row in body_rows)
            table.children.append(Element("tbody", {}, rows))

        if foot[1]:
            table.children.append(
                Element("tfoot", {}, [self._row(row, "td", aligns) for row in foot[1]])
            )
        return table

    def _row(self, row: list, cell_tag: str, aligns: list) -> Element:
        attr, cells = row
        children: list[Node] = []
        column = 0
        for cell_attr, alignment, rowspan, colspan, content in cells:
            attributes = self.attributes(cell_attr)
            align = _ALIGNMENTS.get(alignment.get("t"))
            if align is None and column < len(aligns):
                align = aligns[column]
            if align:
                attributes["style"] = f"text-align: {align};"
            if rowspan > 1:
                attributes["rowspan"] = str(rowspan)
            if colspan > 1:
                attributes["colspan"] = str(colspan)
            children.append(Element(cell_tag, attributes, self._cell_content(content)))
            column += colspan
        return Element("tr", self.attributes(attr), children)

    def _footnotes(self) -> Element:
        items: list[Node] = []
        for number, content in enumerate(self.notes, start=1):
            backlink = Element(
                "a",
                {"href": f"#fnref{number}", "class": "footnote-back", "role": "doc-backlink"},
                [Text("↩︎")],
            )
            if content and isinstance(content[-1], Element) and content[-1].tag_name == "p":
                content[-1].children.append(backlink)
            else:
                content.append(Element("p", {}, [backlink]))
            items.append(Element("li", {"id": f"fn{number}"}, content))

        return Element(
            "section",
            {"class": "footnotes", "role": "doc-endnotes"},
            [Element("hr"), Element("ol", {}, items)],
        )

    def _placeholder_tag(self, inlines: list) -> Tag | None:
        if len(inlines) == 1 and inlines[0].get("t") == "Str":
            return self.tags.get(inlines[0]["c"])
        return None

    # Inlines

    def inlines(self, items: list) -> list[Node]:
        nodes: list[Node] = []
        for inline in items:
            for node in self.inline(inline):
                if isinstance(node, Text) and nodes and isinstance(nodes[-1], Text):
                    nodes[-1] = Text(nodes[-1].value + node.value)
                else:
                    nodes.append(node)
        return nodes

    def inline(self, inline: dict) -> list[Node]:
        kind = inline.get("t")
        c = inline.get("c")

        if kind == "Str":
            return [Text(self._restore_placeholders(c))]
        if kind == "Space":
            return [Text(" ")]
        if kind == "SoftBreak":
            return [Text("\n")]
        if kind == "LineBreak":
            return [Element("br")]

        if kind in _SIMPLE_INLINES:
            return [Element(_SIMPLE_INLINES[kind], {}, self.inlines(c))]

        if kind == "SmallCaps":
            return [Element("span", {"class": "smallcaps"}, self.inlines(c))]

        if kind == "Code":
            attr, text = c
            return [Element("code", self.attributes(attr), [Text(text)])]

        if kind == "Math":
            math_type, tex = c
            if math_type.get("t") == "DisplayMath":
                return [Element("span", {"class": "math display"}, [Text(f"\\[{tex}\\]")])]
            return [Element("span", {"class": "math inline"}, [Text(f"\\({tex}\\)")])]

        if kind == "Link":
            attr, content, (url, title) = c
            attributes = self.attributes(attr)
            attributes["href"] = url
            if title:
                attributes["title"] = title
            return [Element("a", attributes, self.inlines(content))]

        if kind == "Image":
            attr, content, (url, title) = c
            attributes = self.attributes(attr)
            attributes["src"] = url
            attributes["alt"] = plain_text(self.inlines(content))
            if title:
                attributes["title"] = title
            return [Element("img", attributes)]

        if kind == "Span":
            attr, content = c
            return [Element("span", self.attributes(attr), self.inlines(content))]

        if kind == "Cite":
            _citations, content = c
            return [Element("span", {"class": "citation"}, self.inlines(content))]

        if kind == "Note":
            self.notes.append(self.blocks(c))
            number = len(self.notes)
            link = Element(
                "a",
                {"href": f"#fn{number}", "id": f"fnref{number}", "role": "doc-noteref"},
                [Text(str(number))],
            )
            return [Element("sup", {"class": "footnote-ref"}, [link])]

        if kind == "RawInline":
            _format, text = c
            return [Text(text)]

        logger.debug(f"Ignoring unsupported Pandoc inline {kind!r}")
        return []

    def _restore_placeholders(self, value: str) -> str:
        # A tag that ended up inside running text reads as its literal source
        if self._placeholder_re is None:
            return value
        return self._placeholder_re.sub(lambda m: self.tags[m.group(0)].source, value)

    @staticmethod
    def attributes(attr: list) -> dict:
        identifier, classes, pairs = attr
        attributes: dict = {}
        if identifier:
            attributes["id"] = identifier
        if classes:
            attributes["class"] = " ".join(classes)
        for key, value in pairs:
            if key in _PASSTHROUGH_ATTRIBUTES or key.startswith("data-"):
                attributes[key] = value
            else:
                attributes[f"data-{key}"] = value
        return attributes


def parse(source: str) -> Element:
    """
    Parse storage-format markup into a document tree.

    Never raises on malformed markup: unknown or broken tag syntax stays as
    literal text. A missing Pandoc binary is a configuration error and does
    propagate (OSError).
    """
    text, tags = extract_block_tags(source or "")
    if not text.strip():
        return fragment(*tags.values())

    try:
        ast = _pandoc_ast(text)
    except RuntimeError as e:
        logger.error(f"Pandoc failed to parse document, rendering as plain text: {e}")
        return _fallback_tree(source)

    return PandocLowering(tags).document(ast)
