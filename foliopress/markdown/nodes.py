# foliopress/markdown/nodes.py
"""
Node types shared by the parser, transformer and HTML renderer.

The parser produces a document tree of Element/Text nodes plus two raw
forms, CodeFence and Tag. The transformer lowers those into the render tree
forms (CodeBlock, MermaidDiagram, CustomTable, CustomEmbed, Placeholder)
which the renderer knows how to serialize.
"""

from dataclasses import dataclass, field
from typing import Union

from .colors import CellColor

AttrValue = Union[str, bool, None]


@dataclass
class Text:
    value: str


@dataclass
class Element:
    """A standard element; tag_name None marks a root/fragment."""

    tag_name: str | None
    attributes: dict[str, AttrValue] = field(default_factory=dict)
    children: list["Node"] = field(default_factory=list)


@dataclass
class CodeFence:
    """A fenced code block as parsed, before its info string is normalized."""

    content: str
    classes: list[str] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass
class Tag:
    """A custom storage tag; source is kept for the literal-text fallback."""

    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    source: str = ""


@dataclass
class CodeBlock:
    content: str
    language: str | None = None


@dataclass
class MermaidDiagram:
    """A mermaid code fence, drawn client-side from its definition."""

    definition: str


@dataclass
class CustomTable:
    columns: list[str]
    rows: list[list[str]]
    head_colors: tuple[CellColor, ...] = ()
    body_colors: tuple[CellColor, ...] = ()
    has_colors: bool = False


@dataclass
class CustomEmbed:
    id: str


@dataclass
class Placeholder:
    """Stand-in for a custom tag that failed validation."""

    tag_name: str
    reason: str = ""


Node = Union[
    Text, Element, CodeFence, Tag, CodeBlock, MermaidDiagram, CustomTable, CustomEmbed, Placeholder
]


def fragment(*children: Node) -> Element:
    return Element(None, {}, list(children))
