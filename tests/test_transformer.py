"""Tests for the tree transformer."""

from __future__ import annotations

import logging

import pytest

from foliopress.markdown.colors import DARK_TEXT, LIGHT_TEXT, CellColor
from foliopress.markdown.nodes import (
    CodeBlock,
    CodeFence,
    CustomEmbed,
    CustomTable,
    Element,
    MermaidDiagram,
    Placeholder,
    Tag,
    Text,
    fragment,
)
from foliopress.markdown.schema import AttributeSpec, TagRegistry, TagSchema
from foliopress.markdown.transformer import code_language, transform


def _tag(name: str, **attributes: str) -> Tag:
    return Tag(name=name, attributes=attributes, source=f"{{% {name} /%}}")


class TestCodeFences:
    """Code fences lower to CodeBlock(content, language), mermaid fences to diagrams."""

    @pytest.mark.parametrize(
        ("classes", "language"),
        [
            (["python"], "python"),
            (["language-js"], "js"),
            (["numberLines", "rust"], "rust"),
            (["sourceCode"], None),
            ([], None),
        ],
    )
    def test_code_language(self, classes: list[str], language: str | None) -> None:
        assert code_language(classes) == language

    def test_fence_is_normalized(self) -> None:
        tree = fragment(CodeFence(content="x = 1", classes=["language-python"]))
        assert transform(tree).children == [CodeBlock(content="x = 1", language="python")]

    def test_mermaid_fence_becomes_diagram(self) -> None:
        tree = fragment(CodeFence(content="graph TD; A-->B", classes=["mermaid"]))
        assert transform(tree).children == [MermaidDiagram(definition="graph TD; A-->B")]


class TestEmbed:
    """Tests for the youtube tag."""

    def test_embed(self) -> None:
        tree = fragment(_tag("youtube", id="abc123"))
        assert transform(tree).children == [CustomEmbed(id="abc123")]

    def test_missing_id_becomes_placeholder(self, caplog: pytest.LogCaptureFixture) -> None:
        """A missing required attribute fails only that node."""
        tree = fragment(
            Element("p", {}, [Text("before")]),
            _tag("youtube"),
            Element("p", {}, [Text("after")]),
        )
        with caplog.at_level(logging.WARNING):
            result = transform(tree)

        before, placeholder, after = result.children
        assert before == Element("p", {}, [Text("before")])
        assert isinstance(placeholder, Placeholder)
        assert placeholder.tag_name == "youtube"
        assert "id" in placeholder.reason
        assert after == Element("p", {}, [Text("after")])
        assert "placeholder" in caplog.text

    def test_undeclared_attributes_are_ignored(self) -> None:
        tree = fragment(_tag("youtube", id="x", autoplay="1"))
        assert transform(tree).children == [CustomEmbed(id="x")]


class TestTable:
    """Tests for the folium-table tag."""

    def test_plain_table(self) -> None:
        tree = fragment(_tag("folium-table", columns='["A","B"]', rows='[["1","2"]]'))
        (table,) = transform(tree).children
        assert table == CustomTable(columns=["A", "B"], rows=[["1", "2"]])
        assert not table.has_colors

    def test_colors_are_resolved_per_column(self) -> None:
        tree = fragment(
            _tag(
                "folium-table",
                columns='["A","B"]',
                rows="[]",
                columnHeadColors='["green-400","green-900"]',
                columnHeadColorsDark='["green-800"]',
            )
        )
        (table,) = transform(tree).children
        first, second = table.head_colors
        assert first == CellColor("#4ade80", LIGHT_TEXT, "#166534", DARK_TEXT)
        assert second == CellColor("#14532d", DARK_TEXT, "", DARK_TEXT)
        assert table.body_colors == ()
        assert table.has_colors

    def test_dark_only_colors_do_not_flag_table(self) -> None:
        tree = fragment(
            _tag("folium-table", columns='["A"]', rows="[]", rowColorsDark='["red-700"]')
        )
        (table,) = transform(tree).children
        assert not table.has_colors
        assert table.body_colors[0].background_dark == "#b91c1c"

    def test_malformed_color_json_is_ignored(self) -> None:
        tree = fragment(
            _tag("folium-table", columns='["A"]', rows='[["1"]]', rowColors="[not json")
        )
        (table,) = transform(tree).children
        assert table.body_colors == ()
        assert table.rows == [["1"]]

    def test_missing_rows_becomes_placeholder(self) -> None:
        tree = fragment(_tag("folium-table", columns='["A"]'))
        (node,) = transform(tree).children
        assert isinstance(node, Placeholder)
        assert node.tag_name == "folium-table"


class TestUnknownTags:
    """Tags without a schema degrade to their literal source."""

    def test_unknown_tag_is_text(self) -> None:
        tag = Tag(name="gallery", attributes={"x": "1"}, source='{% gallery x="1" /%}')
        (node,) = transform(fragment(tag)).children
        assert node == Element("p", {}, [Text('{% gallery x="1" /%}')])

    def test_custom_registry(self) -> None:
        registry = TagRegistry()
        registry.register(
            TagSchema(name="video", render="YouTube", attributes=(AttributeSpec("id", required=True),))
        )
        (node,) = transform(fragment(_tag("video", id="z")), registry).children
        assert node == CustomEmbed(id="z")

        (node,) = transform(fragment(_tag("youtube", id="z")), registry).children
        assert isinstance(node, Element)


class TestPreview:
    """Preview mode replaces custom tags with labelled placeholders."""

    def test_youtube_preview(self) -> None:
        (node,) = transform(fragment(_tag("youtube", id="abc")), preview=True).children
        assert node == Element(
            "div",
            {"class": "preview-placeholder preview-youtube"},
            [Text("▶ YouTube: abc")],
        )

    def test_table_preview(self) -> None:
        tree = fragment(_tag("folium-table", columns="[]", rows="[]"))
        (node,) = transform(tree, preview=True).children
        assert node.attributes["class"] == "preview-placeholder preview-folium-table"
        assert node.children == [Text("📋 Folium Table")]


class TestSchemaTypes:
    """Attribute values are validated against the declared type."""

    def test_wrong_type_is_placeholder(self) -> None:
        tag = Tag(name="youtube", attributes={"id": True}, source="")
        (node,) = transform(fragment(tag)).children
        assert isinstance(node, Placeholder)
        assert "must be str" in node.reason
