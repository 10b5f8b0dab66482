# foliopress/markdown/exceptions.py
"""Errors raised inside the markup pipeline.

None of these escape the public rendering or transcoding functions under
malformed input: syntax errors degrade to literal text and validation errors
degrade to a placeholder node.
"""


class MarkupError(Exception):
    """Base class for markup pipeline errors."""


class TagSyntaxError(MarkupError):
    """A custom tag or editor directive could not be scanned."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} at offset {position}")
        self.position = position


class TagValidationError(MarkupError):
    """A recognized custom tag failed its attribute schema."""

    def __init__(self, tag_name: str, reason: str):
        super().__init__(f"{tag_name}: {reason}")
        self.tag_name = tag_name
        self.reason = reason
