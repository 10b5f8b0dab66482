"""Tests for the template filters and tags."""

from __future__ import annotations

import pytest
from django.template import Context, Template

pytestmark = pytest.mark.pandoc


def _render(source: str, **context) -> str:
    return Template("{% load markdown_tags %}" + source).render(Context(context))


class TestMarkdownTags:
    """Tests for the markdown_tags template library."""

    def test_markdoc_filter(self) -> None:
        out = _render("{{ body|markdoc }}", body='## Hi\n\n{% youtube id="abc" /%}')
        assert '<h2 id="hi"><a href="#hi">Hi</a></h2>' in out
        assert "youtube-embed-wrapper" in out

    def test_markdoc_preview_filter(self) -> None:
        out = _render("{{ body|markdoc_preview }}", body='{% youtube id="abc" /%}')
        assert out == '<div class="preview-placeholder preview-youtube">▶ YouTube: abc</div>'

    def test_toc_tag(self) -> None:
        html = '<h2 id="a">A</h2><h3 id="b">B</h3>'
        out = _render(
            "{% toc html as entries %}{% for e in entries %}{{ e.slug }}:"
            "{% for c in e.children %}{{ c.slug }}{% endfor %}{% endfor %}",
            html=html,
        )
        assert out == "a:b"

    def test_empty_value(self) -> None:
        assert _render("{{ body|markdoc_preview }}", body=None) == ""

    @pytest.mark.asyncio
    async def test_markdoc_filter_from_async_code(self) -> None:
        out = _render("{{ body|markdoc }}", body="## Hi")
        assert out == '<h2 id="hi"><a href="#hi">Hi</a></h2>'
