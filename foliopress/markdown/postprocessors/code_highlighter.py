# foliopress/markdown/postprocessors/code_highlighter.py
"""
Postprocessor that syntax-highlights code blocks with Pygments.

Input (from the HTML renderer):
    <pre><code class="language-python">print(&quot;hi&quot;)</code></pre>

Output:
    <pre class="highlight" data-language="python"
         style="--hl-light-bg:#f8f8f8;--hl-dark-bg:#0d1117">
      <code class="language-python"><span class="line"><span
        style="--hl-light:#008000;--hl-dark:#79c0ff">print</span>...</span></code>
    </pre>

Every token carries both a light and a dark color as CSS custom properties,
so the stylesheet picks one per theme without re-rendering. Lexers are
loaded on first use and cached. Blocks are highlighted concurrently in worker
threads; a block whose language is unknown, or whose highlighting fails, is
left as the escaped plain code the renderer produced.
"""

import asyncio
import logging
from functools import lru_cache

from bs4 import BeautifulSoup
from pygments.lexers import get_lexer_by_name
from pygments.styles import get_style_by_name
from pygments.token import Token
from pygments.util import ClassNotFound

from ..config import get_markdown_settings
from ..html import escape
from .utils import class_list, get_shared_soup, soup_to_html

logger = logging.getLogger(__name__)

LANGUAGE_PREFIX = "language-"


@lru_cache(maxsize=64)
def get_lexer(language: str):
    """Load (once) the lexer for a fence language; raises ClassNotFound."""
    return get_lexer_by_name(language, stripnl=False, stripall=False, ensurenl=False)


@lru_cache(maxsize=8)
def get_style(name: str):
    try:
        return get_style_by_name(name)
    except ClassNotFound:
        logger.warning(f"Unknown Pygments style {name!r}, using 'default'")
        return get_style_by_name("default")


def _hex(value: str | None) -> str:
    if not value:
        return ""
    return value if value.startswith("#") else f"#{value}"


def _color(style, ttype) -> str:
    # Lexers may emit token types the style never declared; use the nearest parent
    while not style.styles_token(ttype) and ttype.parent is not None:
        ttype = ttype.parent
    return _hex(style.style_for_token(ttype)["color"])


class DualThemeHighlighter:
    """Highlights code with one light and one dark Pygments style at once."""

    def __init__(self, light: str = "default", dark: str = "github-dark"):
        self.light = get_style(light)
        self.dark = get_style(dark)
        self._colors: dict = {}

    def token_colors(self, ttype) -> tuple[str, str]:
        if ttype not in self._colors:
            self._colors[ttype] = (_color(self.light, ttype), _color(self.dark, ttype))
        return self._colors[ttype]

    def pre_style(self) -> str:
        parts = []
        light_fg, dark_fg = self.token_colors(Token)
        if light_fg:
            parts.append(f"--hl-light:{light_fg}")
        if dark_fg:
            parts.append(f"--hl-dark:{dark_fg}")
        parts.append(f"--hl-light-bg:{self.light.background_color}")
        parts.append(f"--hl-dark-bg:{self.dark.background_color}")
        return ";".join(parts)

    @staticmethod
    def _span(text: str, light: str, dark: str) -> str:
        if not light and not dark:
            return escape(text)
        style = []
        if light:
            style.append(f"--hl-light:{light}")
        if dark:
            style.append(f"--hl-dark:{dark}")
        return f'<span style="{";".join(style)}">{escape(text)}</span>'

    def highlight_sync(self, code: str, language: str) -> str | None:
        """Return highlighted inner HTML for a code element, or None if the language is unknown."""
        try:
            lexer = get_lexer(language)
        except ClassNotFound:
            logger.debug(f"No lexer for code block language {language!r}")
            return None

        # Each line is a list of [light, dark, text] runs; equal neighbours merge
        lines: list[list[list[str]]] = [[]]
        for ttype, value in lexer.get_tokens(code):
            light, dark = self.token_colors(ttype)
            for index, part in enumerate(value.split("\n")):
                if index:
                    lines.append([])
                if not part:
                    continue
                runs = lines[-1]
                if runs and runs[-1][0] == light and runs[-1][1] == dark:
                    runs[-1][2] += part
                else:
                    runs.append([light, dark, part])

        return "\n".join(
            '<span class="line">'
            + "".join(self._span(text, light, dark) for light, dark, text in runs)
            + "</span>"
            for runs in lines
        )

    async def highlight(self, code: str, language: str) -> str | None:
        return await asyncio.to_thread(self.highlight_sync, code, language)


@lru_cache(maxsize=4)
def _highlighter_for(light: str, dark: str) -> DualThemeHighlighter:
    return DualThemeHighlighter(light, dark)


def get_highlighter() -> DualThemeHighlighter:
    config = get_markdown_settings()
    return _highlighter_for(config["HIGHLIGHT_LIGHT_THEME"], config["HIGHLIGHT_DARK_THEME"])


def _code_language(code) -> str | None:
    for cls in class_list(code):
        if cls.startswith(LANGUAGE_PREFIX) and len(cls) > len(LANGUAGE_PREFIX):
            return cls[len(LANGUAGE_PREFIX):]
    return None


async def highlight_code_blocks(html: str, context: dict) -> str:
    """
    Highlight every <pre><code class="language-X"> block.

    Args:
        html: HTML string to process
        context: Context dictionary; a 'highlighter' entry replaces the default

    Returns:
        HTML with highlighted code blocks
    """
    soup = get_shared_soup(html, context)

    blocks = []
    for code in soup.find_all("code"):
        if code.parent is None or code.parent.name != "pre":
            continue
        language = _code_language(code)
        if language:
            blocks.append((code, language))

    if not blocks:
        return html

    highlighter = context.get("highlighter") or get_highlighter()
    results = await asyncio.gather(
        *(highlighter.highlight(code.get_text(), language) for code, language in blocks),
        return_exceptions=True,
    )

    for (code, language), result in zip(blocks, results):
        if isinstance(result, Exception):
            logger.warning(
                f"Highlighting failed for {language!r} block, leaving it plain: {result}"
            )
            continue
        if isinstance(result, BaseException):
            raise result
        if result is None:
            continue

        fragment = BeautifulSoup(result, "html.parser")
        code.clear()
        for node in list(fragment.contents):
            code.append(node)

        pre = code.parent
        classes = class_list(pre)
        if "highlight" not in classes:
            classes.append("highlight")
        pre["class"] = classes
        pre["data-language"] = language
        pre["style"] = highlighter.pre_style()

    return soup_to_html(context, soup)
