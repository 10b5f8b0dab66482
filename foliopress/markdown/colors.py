# foliopress/markdown/colors.py
"""
Tailwind color names used by folium tables.

Authors pick colors by Tailwind name (e.g. "red-400"). The renderer needs the
hex value for the background and a readable text color, chosen from the
shade: shades 50-400 are light backgrounds (foreground text), 500-950 are
dark backgrounds (near-white text).
"""

import re
from dataclasses import dataclass

PALETTE = {
    "red": "#ef4444",
    "red-50": "#fef2f2",
    "red-100": "#fee2e2",
    "red-200": "#fecaca",
    "red-300": "#fca5a5",
    "red-400": "#f87171",
    "red-500": "#ef4444",
    "red-600": "#dc2626",
    "red-700": "#b91c1c",
    "red-800": "#991b1b",
    "red-900": "#7f1d1d",
    "red-950": "#450a0a",
    "green": "#22c55e",
    "green-50": "#f0fdf4",
    "green-100": "#dcfce7",
    "green-200": "#bbf7d0",
    "green-300": "#86efac",
    "green-400": "#4ade80",
    "green-500": "#22c55e",
    "green-600": "#16a34a",
    "green-700": "#15803d",
    "green-800": "#166534",
    "green-900": "#14532d",
    "green-950": "#052e16",
    "blue": "#3b82f6",
    "blue-50": "#eff6ff",
    "blue-100": "#dbeafe",
    "blue-200": "#bfdbfe",
    "blue-300": "#93c5fd",
    "blue-400": "#60a5fa",
    "blue-500": "#3b82f6",
    "blue-600": "#2563eb",
    "blue-700": "#1d4ed8",
    "blue-800": "#1e40af",
    "blue-900": "#1e3a8a",
    "blue-950": "#172554",
    "yellow": "#eab308",
    "yellow-50": "#fefce8",
    "yellow-100": "#fef9c3",
    "yellow-200": "#fef08a",
    "yellow-300": "#fde047",
    "yellow-400": "#facc15",
    "yellow-500": "#eab308",
    "yellow-600": "#ca8a04",
    "yellow-700": "#a16207",
    "yellow-800": "#854d0e",
    "yellow-900": "#713f12",
    "yellow-950": "#422006",
    "gray": "#6b7280",
    "gray-50": "#f9fafb",
    "gray-100": "#f3f4f6",
    "gray-200": "#e5e7eb",
    "gray-300": "#d1d5db",
    "gray-400": "#9ca3af",
    "gray-500": "#6b7280",
    "gray-600": "#4b5563",
    "gray-700": "#374151",
    "gray-800": "#1f2937",
    "gray-900": "#111827",
    "gray-950": "#030712",
}

LIGHT_SHADES = frozenset({50, 100, 200, 300, 400})

LIGHT_TEXT = "var(--color-foreground)"
DARK_TEXT = "rgba(255,255,255,0.95)"

_SHADE_RE = re.compile(r"-(\d+)$")


def to_hex(name: str) -> str:
    """Return the hex value for a palette name, or the name itself if unknown."""
    trimmed = str(name).strip().lower()
    return PALETTE.get(trimmed, trimmed)


def is_light_background(name: str) -> bool:
    match = _SHADE_RE.search(str(name).strip())
    if not match:
        return True
    return int(match.group(1)) in LIGHT_SHADES


def text_color_for(name: str) -> str:
    return LIGHT_TEXT if is_light_background(name) else DARK_TEXT


@dataclass(frozen=True)
class CellColor:
    """
    Resolved colors for one table column.

    Light values are applied inline as CSS custom properties; dark values are
    carried as data attributes and applied by the theme stylesheet, so a theme
    switch never needs a re-render.
    """

    background: str = ""
    text: str = ""
    background_dark: str = ""
    text_dark: str = ""

    @property
    def is_set(self) -> bool:
        return bool(self.background or self.background_dark)

    @classmethod
    def resolve(cls, light: str | None = None, dark: str | None = None) -> "CellColor":
        if not light and not dark:
            return cls()

        if dark:
            text_dark = text_color_for(dark)
        elif light:
            text_dark = text_color_for(light)
        else:
            text_dark = ""

        return cls(
            background=to_hex(light) if light else "",
            text=text_color_for(light) if light else "",
            background_dark=to_hex(dark) if dark else "",
            text_dark=text_dark,
        )
