"""Tests for the HTML renderer."""

from __future__ import annotations

import pytest

from foliopress.markdown.colors import CellColor
from foliopress.markdown.html import escape, render, render_attributes
from foliopress.markdown.nodes import (
    CodeBlock,
    CustomEmbed,
    CustomTable,
    Element,
    MermaidDiagram,
    Placeholder,
    Text,
    fragment,
)


class TestEscaping:
    """Tests for text and attribute escaping."""

    @pytest.mark.parametrize(
        "value",
        ["<script>", "a & b", 'say "hi"', "&amp;", "<<>>&&", "plain"],
    )
    def test_text_never_contains_raw_markup(self, value: str) -> None:
        out = render(Text(value))
        assert "<" not in out
        assert ">" not in out
        assert '"' not in out
        assert out.replace("&amp;", "").replace("&lt;", "").replace("&gt;", "").replace(
            "&quot;", ""
        ).count("&") == 0

    def test_escape(self) -> None:
        assert escape('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"

    def test_attribute_values_are_escaped(self) -> None:
        out = render(Element("a", {"href": 'x" onclick="y'}, [Text("t")]))
        assert out == '<a href="x&quot; onclick=&quot;y">t</a>'


class TestElements:
    """Tests for generic element rendering."""

    def test_nested_elements(self) -> None:
        tree = Element("p", {}, [Text("a "), Element("em", {}, [Text("b")])])
        assert render(tree) == "<p>a <em>b</em></p>"

    def test_void_element_ignores_children(self) -> None:
        tree = Element("img", {"src": "x.png", "alt": ""}, [Text("ignored")])
        assert render(tree) == '<img src="x.png" alt="">'

    def test_boolean_attributes(self) -> None:
        assert render_attributes({"checked": True, "disabled": False, "x": None}) == " checked"

    def test_no_attributes(self) -> None:
        assert render_attributes({}) == ""

    def test_fragment_renders_children_only(self) -> None:
        tree = fragment(Element("p", {}, [Text("1")]), Element("p", {}, [Text("2")]))
        assert render(tree) == "<p>1</p><p>2</p>"

    def test_unknown_node_renders_nothing(self) -> None:
        assert render(object()) == ""
        assert render(None) == ""


class TestCodeBlocks:
    """Tests for code block rendering."""

    def test_with_language(self) -> None:
        out = render(CodeBlock(content='if a < b: print("x")', language="python"))
        assert out == (
            '<pre><code class="language-python">if a &lt; b: print(&quot;x&quot;)</code></pre>'
        )

    def test_without_language(self) -> None:
        assert render(CodeBlock(content="x")) == "<pre><code>x</code></pre>"


class TestMermaid:
    """Tests for mermaid diagram rendering."""

    def test_definition_is_base64_encoded(self) -> None:
        out = render(MermaidDiagram(definition="graph TD; A-->B"))
        assert out == '<div class="mermaid-pending" data-mermaid-definition="Z3JhcGggVEQ7IEEtLT5C"></div>'

    def test_non_ascii_definition_is_utf8(self) -> None:
        out = render(MermaidDiagram(definition="graph TD\n  A[시작] --> B"))
        assert 'data-mermaid-definition="Z3JhcGggVEQKICBBW+yLnOyekV0gLS0+IEI="' in out


class TestTable:
    """Tests for folium table rendering."""

    def test_plain_table(self) -> None:
        table = CustomTable(columns=["Name", "Description"], rows=[["a", ""]])
        assert render(table) == (
            '<div class="folium-table-wrapper"><table class="folium-table">'
            "<thead><tr>"
            '<th class="ft-nowrap" data-pt-head-idx="0">Name</th>'
            '<th class="ft-nowrap" data-pt-head-idx="1">Description</th>'
            "</tr></thead>"
            "<tbody><tr>"
            '<td class="ft-nowrap" data-pt-body-idx="0">a</td>'
            '<td class="ft-nowrap" data-pt-body-idx="1">—</td>'
            "</tr></tbody>"
            "</table></div>"
        )

    def test_long_text_wraps(self) -> None:
        table = CustomTable(columns=["x" * 16], rows=[])
        assert render(table).count("ft-nowrap") == 0

    def test_colored_head_cell(self) -> None:
        table = CustomTable(
            columns=["A"],
            rows=[],
            head_colors=(CellColor.resolve("green-400", "green-800"),),
            has_colors=True,
        )
        out = render(table)
        assert '<table class="folium-table has-col-colors">' in out
        assert (
            '<th class="pt-head-col ft-nowrap" '
            'style="--pt-bg:#4ade80;--pt-text:var(--color-foreground)" '
            'data-pt-head-idx="0" '
            'data-pt-bg-dark="#166534" '
            'data-pt-text-dark="rgba(255,255,255,0.95)">A</th>'
        ) in out

    def test_dark_background_gets_white_text(self) -> None:
        table = CustomTable(
            columns=["A"], rows=[], head_colors=(CellColor.resolve("green-900"),), has_colors=True
        )
        assert "--pt-text:rgba(255,255,255,0.95)" in render(table)

    def test_uncolored_cells_have_no_color_attributes(self) -> None:
        table = CustomTable(
            columns=["A", "B"],
            rows=[["1", "2"]],
            body_colors=(CellColor.resolve("red-200"),),
            has_colors=True,
        )
        out = render(table)
        assert '<td class="ft-nowrap" data-pt-body-idx="1">2</td>' in out
        assert out.count("pt-body-col") == 1

    def test_ragged_rows(self) -> None:
        """Three columns and a one-cell row render one td without error."""
        table = CustomTable(
            columns=["A", "B", "C"],
            rows=[["only"]],
            head_colors=(CellColor.resolve("red-100"),) * 5,
            has_colors=True,
        )
        out = render(table)
        body = out.split("<tbody>")[1]
        assert body.count("<td") == 1
        assert out.count("<th ") == 3

    def test_cell_text_is_escaped(self) -> None:
        table = CustomTable(columns=["<b>"], rows=[['"q" & a']])
        out = render(table)
        assert "&lt;b&gt;" in out
        assert "&quot;q&quot; &amp; a" in out


class TestEmbed:
    """Tests for YouTube embed rendering."""

    def test_embed(self) -> None:
        assert render(CustomEmbed(id="abc123")) == (
            '<div class="youtube-embed-wrapper">'
            '<iframe src="https://www.youtube.com/embed/abc123" title="YouTube video" '
            'allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; '
            'picture-in-picture" allowfullscreen class="youtube-embed"></iframe>'
            "</div>"
        )

    def test_id_is_escaped(self) -> None:
        out = render(CustomEmbed(id='x"><script>'))
        assert "<script>" not in out
        assert 'embed/x&quot;&gt;&lt;script&gt;"' in out

    def test_embed_url_setting(self, settings_override) -> None:
        settings_override(EMBED_URL="https://www.youtube-nocookie.com/embed/{id}")
        assert 'src="https://www.youtube-nocookie.com/embed/abc"' in render(CustomEmbed(id="abc"))


class TestPlaceholder:
    """Tests for the schema-violation placeholder."""

    def test_placeholder(self) -> None:
        out = render(Placeholder(tag_name="youtube", reason="missing id"))
        assert out == '<div class="markup-placeholder" data-tag="youtube"></div>'
