"""
Preprocessor that upgrades legacy JSX components to storage tags.

Older documents were stored with JSX components instead of tags:

    <YouTube id="abc123" />                    → {% youtube id="abc123" /%}
    <FoliumTable columns={'["A"]'} ... />      → {% folium-table columns="[\"A\"]" ... /%}

Components with no registered tag are left alone (and render as text).
"""

from ..transcoder import from_legacy_components


def legacy_components(text: str, context: dict) -> str:
    """
    Rewrite legacy components in text.

    Args:
        text: Raw markup
        context: May carry a 'tag_registry' to use instead of the default

    Returns:
        Markup with components replaced by storage tags
    """
    if "<" not in text:
        return text
    return from_legacy_components(text, context.get("tag_registry"))


def legacy_components_default(text: str, context: dict) -> str:
    """
    Default configuration for legacy_components.

    Register this in PREPROCESSORS.
    """
    return legacy_components(text, context)
