# foliopress/markdown/transformer.py
"""
Tree transformer: document tree → render tree.

- Custom Tag nodes are looked up in the tag registry, validated against
  their schema and lowered to CustomTable / CustomEmbed. A tag that fails
  validation becomes a Placeholder; the rest of the document is unaffected.
- Tags with no registered schema fall back to their literal source text.
- CodeFence nodes are normalized to CodeBlock(content, language), except
  mermaid fences, which become MermaidDiagram nodes and are never highlighted.
"""

import logging
from typing import Callable

from .attributes import parse_rows, parse_string_array
from .colors import CellColor
from .exceptions import TagValidationError
from .nodes import (
    CodeBlock,
    CodeFence,
    CustomEmbed,
    CustomTable,
    Element,
    MermaidDiagram,
    Node,
    Placeholder,
    Tag,
    Text,
)
from .schema import DEFAULT_REGISTRY, TagRegistry, TagSchema

logger = logging.getLogger(__name__)

# Fence classes that describe presentation rather than the language
_NON_LANGUAGE_CLASSES = {"numberLines", "sourceCode", "number-lines", "numberlines"}

MERMAID_LANGUAGE = "mermaid"


def code_language(classes: list[str]) -> str | None:
    for cls in classes:
        if cls in _NON_LANGUAGE_CLASSES:
            continue
        if cls.startswith("language-"):
            cls = cls[len("language-"):]
        if cls:
            return cls
    return None


def _zip_colors(light: list[str], dark: list[str]) -> tuple[CellColor, ...]:
    # Index i of either array colors column i; missing entries leave it plain
    return tuple(
        CellColor.resolve(
            light[i] if i < len(light) else None,
            dark[i] if i < len(dark) else None,
        )
        for i in range(max(len(light), len(dark)))
    )


def build_table(attributes: dict[str, str]) -> CustomTable:
    head_light = parse_string_array(attributes.get("columnHeadColors"))
    head_dark = parse_string_array(attributes.get("columnHeadColorsDark"))
    body_light = parse_string_array(attributes.get("rowColors"))
    body_dark = parse_string_array(attributes.get("rowColorsDark"))

    return CustomTable(
        columns=parse_string_array(attributes.get("columns")),
        rows=parse_rows(attributes.get("rows")),
        head_colors=_zip_colors(head_light, head_dark),
        body_colors=_zip_colors(body_light, body_dark),
        has_colors=bool(head_light or body_light),
    )


def build_embed(attributes: dict[str, str]) -> CustomEmbed:
    return CustomEmbed(id=attributes["id"])


RENDERERS: dict[str, Callable[[dict[str, str]], Node]] = {
    "FoliumTable": build_table,
    "YouTube": build_embed,
}


def preview_placeholder(schema: TagSchema, attributes: dict[str, str]) -> Element:
    label = schema.preview_label or schema.name
    if schema.preview_detail and attributes.get(schema.preview_detail):
        label = f"{label}: {attributes[schema.preview_detail]}"
    return Element(
        "div",
        {"class": f"preview-placeholder preview-{schema.name}"},
        [Text(label)],
    )


class Transformer:
    def __init__(self, registry: TagRegistry | None = None, preview: bool = False):
        self.registry = registry or DEFAULT_REGISTRY
        self.preview = preview

    def transform(self, node: Node) -> Node:
        if isinstance(node, Element):
            return Element(
                node.tag_name,
                dict(node.attributes),
                [self.transform(child) for child in node.children],
            )
        if isinstance(node, CodeFence):
            language = code_language(node.classes)
            if language == MERMAID_LANGUAGE:
                return MermaidDiagram(definition=node.content)
            return CodeBlock(content=node.content, language=language)
        if isinstance(node, Tag):
            return self.transform_tag(node)
        return node

    def transform_tag(self, tag: Tag) -> Node:
        schema = self.registry.get(tag.name)
        if schema is None:
            logger.debug(f"Unknown tag '{tag.name}', keeping it as text")
            return Element("p", {}, [Text(tag.source)])

        ignored = schema.undeclared(tag.attributes)
        if ignored:
            logger.debug(f"Tag '{tag.name}' ignores undeclared attributes: {', '.join(ignored)}")

        try:
            attributes = schema.validate(tag.attributes)
        except TagValidationError as e:
            logger.warning(f"Custom tag rendered as placeholder: {e}")
            return Placeholder(tag_name=tag.name, reason=e.reason)

        if self.preview:
            return preview_placeholder(schema, attributes)

        build = RENDERERS.get(schema.render)
        if build is None:
            logger.warning(f"No renderer '{schema.render}' for tag '{tag.name}'")
            return Placeholder(tag_name=tag.name, reason=f"no renderer '{schema.render}'")
        return build(attributes)


def transform(tree: Node, registry: TagRegistry | None = None, preview: bool = False) -> Node:
    """Lower a parsed document tree into a render tree."""
    return Transformer(registry, preview=preview).transform(tree)
