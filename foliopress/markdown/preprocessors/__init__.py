# foliopress/markdown/preprocessors/__init__.py

from .legacy_components import legacy_components_default
from .line_endings import normalize_line_endings

PREPROCESSORS = [
    normalize_line_endings,  # Must run first; tag scanning works on "\n" lines
    legacy_components_default,  # Rewrite old JSX components as storage tags
    # Order matters - they run sequentially
]


def apply_preprocessors(text, context):
    """Apply all preprocessors in order"""
    for processor in PREPROCESSORS:
        text = processor(text, context)
    return text
