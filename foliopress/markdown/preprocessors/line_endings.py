# foliopress/markdown/preprocessors/line_endings.py


def normalize_line_endings(text: str, context: dict) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")
