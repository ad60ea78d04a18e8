from __future__ import annotations

import re
from typing import Iterable

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

PALETTE: tuple[str, ...] = (
    "#4C78A8",
    "#F58518",
    "#E45756",
    "#72B7B2",
    "#54A24B",
    "#EECA3B",
    "#B279A2",
    "#FF9DA6",
    "#9D755D",
    "#BAB0AC",
)

NEUTRAL_COLOR = "#6B7280"


def validate_palette(colors: Iterable[object] | None = None) -> tuple[str, ...]:
    """Validate a palette override, falling back to the built-in palette when omitted."""

    if colors is None:
        return PALETTE
    out: list[str] = []
    for index, color in enumerate(colors):
        if not isinstance(color, str) or not _HEX_COLOR.match(color):
            raise ValueError(f"Palette entry {index} must be a hex color (#RRGGBB or #RRGGBBAA)")
        out.append(color.upper())
    return tuple(out)


def palette_color(palette: tuple[str, ...], index: int) -> str:
    if not palette:
        return NEUTRAL_COLOR
    return palette[index % len(palette)]


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    if not _HEX_COLOR.match(color):
        raise ValueError(f"Not a hex color: {color}")
    return (int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16))
