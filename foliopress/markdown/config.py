# foliopress/markdown/config.py

from django.conf import settings

# Pandoc markdown reader. Raw HTML/TeX are read as literal text and automatic
# heading identifiers are left to the heading_slugs postprocessor.
PANDOC_FORMAT = (
    "markdown"
    "-raw_html-raw_tex-raw_attribute-auto_identifiers-hard_line_breaks"
    "+autolink_bare_uris+strikeout+superscript+subscript+task_lists"
    "+pipe_tables+grid_tables+definition_lists+footnotes+fenced_code_blocks"
    "+backtick_code_blocks+fenced_code_attributes+fenced_divs+header_attributes"
    "+fancy_lists+tex_math_dollars"
)

DEFAULT_MARKDOWN_SETTINGS = {
    # Run the bleach allow-list over rendered HTML before post-processing
    "SANITIZE": True,
    # Pygments style names for the two highlighted color sets
    "HIGHLIGHT_LIGHT_THEME": "default",
    "HIGHLIGHT_DARK_THEME": "github-dark",
    "EMBED_URL": "https://www.youtube.com/embed/{id}",
}


def get_pandoc_config():
    """
    Configuration for the pypandoc call made by the document parser.

    The parser asks Pandoc for its JSON AST rather than HTML so that the
    custom tags and code fences can be lowered by our own transformer.
    """
    return {
        "format": PANDOC_FORMAT,
        "to": "json",
        "extra_args": [
            "--tab-stop=4",
        ],
    }


def get_markdown_settings():
    """
    Renderer settings, overridable through settings.FOLIOPRESS_MARKDOWN.

    Works without configured Django settings (the defaults apply), so the
    pipeline can run from scripts and tests.
    """
    config = dict(DEFAULT_MARKDOWN_SETTINGS)
    if settings.configured:
        config.update(getattr(settings, "FOLIOPRESS_MARKDOWN", {}) or {})
    return config
