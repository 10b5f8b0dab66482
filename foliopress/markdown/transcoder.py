# foliopress/markdown/transcoder.py
"""
Storage ⇄ editor syntax conversion for custom tags.

Documents are stored with self-closing tags and edited as leaf directives:

    storage:  {% youtube id="abc123" /%}
    editor:   ::youtube[]{id="abc123"}

Attribute values are moved between the two syntaxes exactly as written
(still escaped), so `to_storage_syntax(to_editor_syntax(text)) == text` for
documents whose tags are laid out the way the storage writer lays them out.
Fenced code blocks and tags with no registered schema are never rewritten.

The legacy helpers convert the JSX component syntax that older documents were
stored in (`<YouTube id="x" />`, `<FoliumTable rows={'[...]'} />`).
"""

import logging
import re
from typing import Callable

from .attributes import escape_attribute, unescape_attribute
from .exceptions import TagSyntaxError
from .schema import DEFAULT_REGISTRY, TagRegistry, TagSchema
from .tags import (
    ScannedTag,
    format_directive,
    format_storage_tag,
    iter_regions,
    read_directive,
    read_storage_tag,
)

logger = logging.getLogger(__name__)

_JSX_TAG_RE = re.compile(r"<([A-Z][A-Za-z0-9]*)\s+([\s\S]*?)\s*/>")
_JSX_ATTR_RE = re.compile(r"""(\w+)\s*=\s*(?:"((?:[^"\\]|\\.)*)"|\{'((?:[^'\\]|\\.)*)'\})""")


def _rewrite(
    text: str,
    marker: str,
    reader: Callable[[str, int, int], ScannedTag],
    writer: Callable[[ScannedTag, TagSchema], str],
    registry: TagRegistry,
) -> str:
    out: list[str] = []
    for start, end, fenced in iter_regions(text):
        if fenced:
            out.append(text[start:end])
            continue

        cursor = start
        pos = text.find(marker, start, end)
        while pos != -1:
            try:
                tag = reader(text, pos, end)
            except TagSyntaxError:
                pos = text.find(marker, pos + 1, end)
                continue

            schema = registry.get(tag.name)
            if schema is not None:
                out.append(text[cursor:pos])
                out.append(writer(tag, schema))
                cursor = tag.end
            pos = text.find(marker, tag.end, end)

        out.append(text[cursor:end])
    return "".join(out)


def to_editor_syntax(storage: str, registry: TagRegistry | None = None) -> str:
    """Convert storage tags to editor directives (on editor load)."""
    return _rewrite(
        storage,
        "{%",
        read_storage_tag,
        lambda tag, schema: format_directive(tag.name, tag.pairs),
        registry or DEFAULT_REGISTRY,
    )


def to_storage_syntax(editor: str, registry: TagRegistry | None = None) -> str:
    """
    Convert editor directives back to storage tags (on save).

    Unquoted directive values (`id=abc123`) are written quoted.
    """
    return _rewrite(
        editor,
        "::",
        read_directive,
        lambda tag, schema: format_storage_tag(tag.name, tag.pairs, schema.multiline),
        registry or DEFAULT_REGISTRY,
    )


def _unescape_js(value: str) -> str:
    return re.sub(r"\\(.)", lambda m: m.group(1) if m.group(1) in "'\\" else m.group(0), value)


def _escape_js(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def from_legacy_components(text: str, registry: TagRegistry | None = None) -> str:
    """Convert legacy JSX components to storage tags."""
    registry = registry or DEFAULT_REGISTRY

    def replace(match: re.Match) -> str:
        schema = registry.by_component(match.group(1))
        if schema is None:
            return match.group(0)

        pairs = []
        for attr in _JSX_ATTR_RE.finditer(match.group(2)):
            key, quoted, expression = attr.groups()
            if quoted is not None:
                pairs.append((key, quoted))
            else:
                pairs.append((key, escape_attribute(_unescape_js(expression))))
        if not pairs:
            logger.debug(f"Legacy component <{match.group(1)}> has no readable attributes")
        return format_storage_tag(schema.name, pairs, schema.multiline)

    out: list[str] = []
    for start, end, fenced in iter_regions(text):
        region = text[start:end]
        out.append(region if fenced else _JSX_TAG_RE.sub(replace, region))
    return "".join(out)


def to_legacy_components(storage: str, registry: TagRegistry | None = None) -> str:
    """
    Convert storage tags to legacy JSX components.

    Values without quotes or backslashes are written as plain JSX strings,
    anything else as a single-quoted string expression.
    """

    def writer(tag: ScannedTag, schema: TagSchema) -> str:
        parts = []
        for key, raw in tag.pairs:
            value = unescape_attribute(raw)
            if '"' in value or "\\" in value or "\n" in value:
                parts.append(f"{key}={{'{_escape_js(value)}'}}")
            else:
                parts.append(f'{key}="{value}"')
        return f"<{schema.component or schema.render} {' '.join(parts)} />"

    return _rewrite(storage, "{%", read_storage_tag, writer, registry or DEFAULT_REGISTRY)
