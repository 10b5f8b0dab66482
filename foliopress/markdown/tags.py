# foliopress/markdown/tags.py
"""
Scanner for the custom tag micro-syntax.

Two spellings of the same thing are recognized:

    storage:  {% folium-table columns="[\\"A\\"]" rows="[[\\"1\\"]]" /%}
    editor:   ::folium-table[]{columns="[\\"A\\"]" rows="[[\\"1\\"]]"}

Both are read by a small recursive-descent scanner rather than by regular
expressions so that quoted values may contain escaped quotes, braces and
newlines. The scanner keeps each value exactly as written (still escaped) so
the transcoder can move it between the two syntaxes without touching it.
"""

import re
from dataclasses import dataclass, field
from typing import Iterator

from .attributes import unescape_attribute
from .exceptions import TagSyntaxError

_NAME_RE = re.compile(r"[A-Za-z][A-Za-z0-9_-]*")
_KEY_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")
_BARE_VALUE_RE = re.compile(r'[^\s"}]+')

_FENCE_OPEN_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")
_FENCE_CLOSE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")


@dataclass
class ScannedTag:
    """A tag or directive found in source text."""

    name: str
    pairs: list[tuple[str, str]] = field(default_factory=list)
    start: int = 0
    end: int = 0

    @property
    def attributes(self) -> dict[str, str]:
        """Unescaped attribute values; a repeated key keeps its last value."""
        return {key: unescape_attribute(raw) for key, raw in self.pairs}


class _Scanner:
    def __init__(self, source: str, pos: int = 0, end: int | None = None):
        self.source = source
        self.pos = pos
        self.end = len(source) if end is None else end

    def at_end(self) -> bool:
        return self.pos >= self.end

    def startswith(self, literal: str) -> bool:
        return self.source.startswith(literal, self.pos, self.end)

    def expect(self, literal: str) -> None:
        if not self.startswith(literal):
            raise TagSyntaxError(f"expected {literal!r}", self.pos)
        self.pos += len(literal)

    def skip_whitespace(self) -> int:
        start = self.pos
        while self.pos < self.end and self.source[self.pos].isspace():
            self.pos += 1
        return self.pos - start

    def read_pattern(self, pattern: re.Pattern, what: str) -> str:
        match = pattern.match(self.source, self.pos, self.end)
        if not match:
            raise TagSyntaxError(f"expected {what}", self.pos)
        self.pos = match.end()
        return match.group(0)

    def read_quoted(self) -> str:
        """Read a double-quoted value and return its raw (escaped) contents."""
        self.expect('"')
        start = self.pos
        while self.pos < self.end:
            char = self.source[self.pos]
            if char == "\\":
                self.pos += 2
                continue
            if char == '"':
                raw = self.source[start:self.pos]
                self.pos += 1
                return raw
            self.pos += 1
        raise TagSyntaxError("unterminated string", start)


def read_storage_tag(source: str, pos: int = 0, end: int | None = None) -> ScannedTag:
    """
    Read a self-closing `{% name key="value" ... /%}` tag starting at pos.

    Raises:
        TagSyntaxError: if the text at pos is not a well-formed tag.
    """
    scanner = _Scanner(source, pos, end)
    scanner.expect("{%")
    scanner.skip_whitespace()
    tag = ScannedTag(name=scanner.read_pattern(_NAME_RE, "tag name"), start=pos)

    while True:
        separated = scanner.skip_whitespace()
        if scanner.startswith("/%}"):
            scanner.pos += 3
            break
        if scanner.startswith("%}"):
            raise TagSyntaxError("tag is not self-closing", scanner.pos)
        if scanner.at_end():
            raise TagSyntaxError("unterminated tag", scanner.pos)
        if not separated:
            raise TagSyntaxError("expected whitespace before attribute", scanner.pos)

        key = scanner.read_pattern(_KEY_RE, "attribute name")
        scanner.skip_whitespace()
        scanner.expect("=")
        scanner.skip_whitespace()
        tag.pairs.append((key, scanner.read_quoted()))

    tag.end = scanner.pos
    return tag


def read_directive(source: str, pos: int = 0, end: int | None = None) -> ScannedTag:
    """
    Read an editor directive `::name[]{key="value" key=bare}` starting at pos.

    Raises:
        TagSyntaxError: if the text at pos is not a well-formed directive.
    """
    scanner = _Scanner(source, pos, end)
    scanner.expect("::")
    tag = ScannedTag(name=scanner.read_pattern(_NAME_RE, "directive name"), start=pos)
    scanner.expect("[]")
    scanner.expect("{")

    while True:
        scanner.skip_whitespace()
        if scanner.startswith("}"):
            scanner.pos += 1
            break
        if scanner.at_end():
            raise TagSyntaxError("unterminated directive", scanner.pos)

        key = scanner.read_pattern(_KEY_RE, "attribute name")
        scanner.skip_whitespace()
        scanner.expect("=")
        scanner.skip_whitespace()
        if scanner.startswith('"'):
            value = scanner.read_quoted()
        else:
            value = scanner.read_pattern(_BARE_VALUE_RE, "attribute value")
        tag.pairs.append((key, value))

    tag.end = scanner.pos
    return tag


def format_storage_tag(name: str, pairs: list[tuple[str, str]], multiline: bool = False) -> str:
    """Write raw pairs back out as a storage tag."""
    if not pairs:
        return f"{{% {name} /%}}"
    attrs = [f'{key}="{raw}"' for key, raw in pairs]
    if multiline:
        return f"{{% {name}\n   " + "\n   ".join(attrs) + "\n/%}"
    return f"{{% {name} {' '.join(attrs)} /%}}"


def format_directive(name: str, pairs: list[tuple[str, str]]) -> str:
    attrs = " ".join(f'{key}="{raw}"' for key, raw in pairs)
    return f"::{name}[]{{{attrs}}}"


def iter_regions(source: str) -> Iterator[tuple[int, int, bool]]:
    """
    Split source into (start, end, fenced) regions.

    Fenced regions are ``` or ~~~ code blocks, fences included. An unclosed
    fence runs to the end of the text.
    """
    pos = 0
    region_start = 0
    fence: str | None = None

    for line in source.splitlines(keepends=True):
        line_start = pos
        pos += len(line)
        content = line.rstrip("\r\n")

        if fence is None:
            match = _FENCE_OPEN_RE.match(content)
            if match and not (match.group(1)[0] == "`" and "`" in match.group(2)):
                if line_start > region_start:
                    yield region_start, line_start, False
                region_start = line_start
                fence = match.group(1)
            continue

        match = _FENCE_CLOSE_RE.match(content)
        if match and match.group(1)[0] == fence[0] and len(match.group(1)) >= len(fence):
            yield region_start, pos, True
            region_start = pos
            fence = None

    if region_start < len(source):
        yield region_start, len(source), fence is not None
