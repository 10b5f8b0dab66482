# foliopress/markdown/excerpt.py
"""
Helpers that derive listing metadata from raw markup: the cover image and a
short plain-text summary. Both work on the source text with regular
expressions; nothing is rendered.
"""

import re
from typing import Optional

_IMAGE_RE = re.compile(r"!\[[^\]]*\]\(\s*<?([^)\s>]+)>?(?:\s+\"[^\"]*\")?\s*\)")

_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[^\n]*\n[\s\S]*?(?:^ {0,3}\1[ \t]*$|\Z)", re.MULTILINE)
_INLINE_CODE_RE = re.compile(r"(`+)[\s\S]*?\1")
_CUSTOM_TAG_RE = re.compile(r"\{%[\s\S]*?%\}")
_DIRECTIVE_RE = re.compile(r"^::[\w-]+\[[^\]]*\]\{[^\n]*\}[ \t]*$", re.MULTILINE)
_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")
_EMPHASIS_RE = re.compile(r"(?<!\w)(\*\*|__|\*|_|~~)(?=\S)(.+?)(?<=\S)\1(?!\w)")
_HEADING_RE = re.compile(r"^ {0,3}#{1,6}[ \t]+", re.MULTILINE)
_BLOCK_MARKER_RE = re.compile(r"^[ \t]*(?:>[ \t]?|[-*+][ \t]+|\d+[.)][ \t]+)+", re.MULTILINE)
_SENTENCE_RE = re.compile(r"[^.!?]+(?:[.!?]+|$)")


def first_image_url(markdown: str) -> Optional[str]:
    """Return the URL of the first Markdown image in the text, or None."""
    match = _IMAGE_RE.search(markdown or "")
    return match.group(1) if match else None


def plain_summary_text(markdown: str) -> str:
    """Strip markup from the source and collapse it into one line of text."""
    text = markdown or ""
    text = _FENCE_RE.sub(" ", text)
    text = _CUSTOM_TAG_RE.sub(" ", text)
    text = _DIRECTIVE_RE.sub(" ", text)
    text = _INLINE_CODE_RE.sub(" ", text)
    text = _IMAGE_RE.sub(" ", text)
    text = _LINK_RE.sub(r"\1", text)
    text = _HEADING_RE.sub("", text)
    text = _BLOCK_MARKER_RE.sub("", text)
    # Nested emphasis needs a second pass
    for _ in range(2):
        text = _EMPHASIS_RE.sub(r"\2", text)
    return " ".join(text.split())


def first_sentences(markdown: str, count: int = 3) -> str:
    """
    Return the first `count` sentences of the text, without markup.

    A sentence ends with '.', '!' or '?'. Text with no sentence terminator is
    returned whole.
    """
    text = plain_summary_text(markdown)
    sentences = [s.strip() for s in _SENTENCE_RE.findall(text) if s.strip()]
    if not sentences:
        return text
    return " ".join(sentences[:count])
