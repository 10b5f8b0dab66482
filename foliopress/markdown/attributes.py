# foliopress/markdown/attributes.py
"""
Codec for the JSON-array attributes carried by custom tags.

A folium table stores its columns, rows and per-column colors as JSON arrays
inside quoted tag attributes:

    {% folium-table
       columns="[\\"Col1\\",\\"Col2\\"]"
       rows="[[\\"a\\",\\"b\\"],[\\"c\\",\\"d\\"]]"
    /%}

Decoding fails soft: anything that is not a JSON array reads as an empty
array, so a broken attribute never takes the rest of the document down.
"""

import json
import logging
from typing import Any, Iterable, Sequence

logger = logging.getLogger(__name__)

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
}

_UNESCAPES = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def escape_attribute(value: str) -> str:
    """Quote a value for use between the double quotes of a tag attribute."""
    return "".join(_ESCAPES.get(char, char) for char in value)


def unescape_attribute(raw: str) -> str:
    """
    Reverse escape_attribute.

    Unknown backslash sequences are kept verbatim (backslash included) rather
    than rejected.
    """
    if "\\" not in raw:
        return raw

    out: list[str] = []
    i = 0
    while i < len(raw):
        char = raw[i]
        if char == "\\" and i + 1 < len(raw):
            nxt = raw[i + 1]
            if nxt in _UNESCAPES:
                out.append(_UNESCAPES[nxt])
            else:
                out.append(char + nxt)
            i += 2
            continue
        out.append(char)
        i += 1
    return "".join(out)


def parse_array(value: Any) -> list:
    """Decode a JSON array attribute; anything else yields []."""
    if not value:
        return []
    if isinstance(value, list):
        return value
    if not isinstance(value, str):
        return []
    try:
        decoded = json.loads(value)
    except ValueError:
        logger.debug(f"Ignoring malformed array attribute: {value[:80]!r}")
        return []
    return decoded if isinstance(decoded, list) else []


def _cell_text(item: Any) -> str:
    if item is None:
        return ""
    if isinstance(item, str):
        return item
    if isinstance(item, (list, dict)):
        return json.dumps(item, ensure_ascii=False)
    return str(item)


def parse_string_array(value: Any) -> list[str]:
    return [_cell_text(item) for item in parse_array(value)]


def parse_rows(value: Any) -> list[list[str]]:
    """Decode a rows attribute into a list of string rows (rows may be ragged)."""
    rows = []
    for row in parse_array(value):
        if isinstance(row, list):
            rows.append([_cell_text(cell) for cell in row])
        else:
            rows.append([_cell_text(row)])
    return rows


def serialize_array(items: Iterable[Any]) -> str:
    return json.dumps(list(items), ensure_ascii=False, separators=(",", ":"))


def build_table_tag(
    columns: Sequence[str],
    rows: Sequence[Sequence[str]],
    column_head_colors: Sequence[str] | None = None,
    column_head_colors_dark: Sequence[str] | None = None,
    row_colors: Sequence[str] | None = None,
    row_colors_dark: Sequence[str] | None = None,
) -> str:
    """
    Build a storage-format folium-table tag.

    Color lists that are empty or missing are left out entirely.

    Example:
        >>> print(build_table_tag(["A"], [["1"]]))
        {% folium-table
           columns="[\\"A\\"]"
           rows="[[\\"1\\"]]"
        /%}
    """
    attrs = [
        ("columns", serialize_array(columns)),
        ("rows", serialize_array([list(row) for row in rows])),
    ]
    optional = [
        ("columnHeadColors", column_head_colors),
        ("columnHeadColorsDark", column_head_colors_dark),
        ("rowColors", row_colors),
        ("rowColorsDark", row_colors_dark),
    ]
    for name, colors in optional:
        if colors:
            attrs.append((name, serialize_array(colors)))

    lines = [f'{name}="{escape_attribute(value)}"' for name, value in attrs]
    return "{% folium-table\n   " + "\n   ".join(lines) + "\n/%}"


def build_embed_tag(video_id: str) -> str:
    return f'{{% youtube id="{escape_attribute(video_id)}" /%}}'
