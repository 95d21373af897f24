#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Final, Literal

from .geometry import (
    FONT_SIZES,
    LINE_HEIGHT,
    NEUTRAL_DARKER,
    PAGE_MARGIN,
    PAGE_WIDTH,
    Color,
    is_transparent,
)

if TYPE_CHECKING:
    from .surface import PdfSurface

Align = Literal["left", "center", "right"]

TAB_EXPANSION: Final = "    "
WRAP_LINE_HEIGHT_FACTOR: Final = 1.2

_LIGATURES: Final = {
    "\ufb00": "ff",
    "\ufb01": "fi",
    "\ufb02": "fl",
    "\ufb03": "ffi",
    "\ufb04": "ffl",
}
# C0/C1 controls except tab (expanded earlier), newline and carriage return.
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
# Core fonts encode a single-byte table.
_UNENCODABLE_RE = re.compile(r"[^\x00-\xff]")


@dataclass(frozen=True)
class FontFace:
    family: str
    style: str = ""


REGULAR: Final = FontFace("Helvetica")
BOLD: Final = FontFace("Helvetica", "B")


@dataclass(frozen=True)
class TextStyle:
    """Draw options for one line or paragraph.

    ``font=None`` means no glyph metrics are available: alignment falls back to
    left and the paragraph wrapper draws raw lines without breaking them.
    """

    font: FontFace | None = REGULAR
    size: float = FONT_SIZES.body
    color: Color = NEUTRAL_DARKER
    line_height: float | None = None
    align: Align = "left"
    max_width: float | None = None


def sanitize(text: object) -> str:
    if text is None:
        return ""
    value = str(text)
    if not value:
        return ""
    value = value.replace("\r\n", "\n").replace("\r", "\n")
    value = value.replace("\t", TAB_EXPANSION)
    for ligature, expanded in _LIGATURES.items():
        value = value.replace(ligature, expanded)
    value = _CONTROL_RE.sub("", value)
    return _UNENCODABLE_RE.sub("?", value)


def draw_line(
    surface: PdfSurface,
    text: object,
    y: float,
    x: float,
    style: TextStyle = TextStyle(),
) -> float:
    """Draw one line at baseline ``y`` and return the baseline below it."""
    value = sanitize(text)
    line_height = LINE_HEIGHT if style.line_height is None else style.line_height
    if value and not is_transparent(style.color):
        draw_x = x
        if style.font is not None and style.max_width is not None and style.align != "left":
            width = surface.text_width(value, style.font, style.size)
            if style.align == "right":
                draw_x = x + style.max_width - width
            else:
                draw_x = x + (style.max_width - width) / 2
        surface.draw_text(
            value,
            draw_x,
            y,
            font=style.font or REGULAR,
            size=style.size,
            color=style.color,
        )
    return y - line_height


def wrap_text(
    surface: PdfSurface,
    text: object,
    *,
    font: FontFace | None,
    size: float,
    max_width: float,
) -> list[str]:
    lines: list[str] = []
    for raw_line in sanitize(text).split("\n"):
        remaining = raw_line
        while remaining:
            if font is None or surface.text_width(remaining, font, size) <= max_width:
                lines.append(remaining)
                break
            split = _break_index(surface, remaining, font, size, max_width)
            lines.append(remaining[:split])
            remaining = remaining[split:].lstrip()
    return lines


def draw_wrapped(
    surface: PdfSurface,
    text: object,
    start_y: float,
    x: float,
    style: TextStyle = TextStyle(),
    *,
    page_width: float = PAGE_WIDTH,
    margin: float = PAGE_MARGIN,
) -> float:
    """Draw wrapped paragraph text starting at ``start_y``.

    Every drawn line moves down by the line writer's own line height and then by
    the paragraph line height (``line_height`` or ``size * 1.2``). The returned
    position adds one paragraph line height back, so callers receive the next
    usable top rather than the last consumed baseline. An empty input returns
    ``start_y`` untouched.
    """
    value = sanitize(text)
    if not value:
        return start_y
    advance = (
        style.size * WRAP_LINE_HEIGHT_FACTOR if style.line_height is None else style.line_height
    )
    max_width = style.max_width if style.max_width is not None else page_width - x - margin
    line_style = replace(style, max_width=max_width)
    y = start_y
    for line in wrap_text(surface, value, font=style.font, size=style.size, max_width=max_width):
        y = draw_line(surface, line, y, x, line_style)
        y -= advance
    return y + advance


def _break_index(
    surface: PdfSurface,
    text: str,
    font: FontFace,
    size: float,
    max_width: float,
) -> int:
    fit = _longest_fitting_prefix(surface, text, font, size, max_width)
    space = text.rfind(" ", 0, fit + 1)
    if space > 0:
        return space
    if " " not in text:
        # single unbreakable word: drawn in full
        return len(text)
    return max(fit, 1)


def _longest_fitting_prefix(
    surface: PdfSurface,
    text: str,
    font: FontFace,
    size: float,
    max_width: float,
) -> int:
    lo, hi = 0, len(text) - 1
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if surface.text_width(text[:mid], font, size) <= max_width:
            lo = mid
        else:
            hi = mid - 1
    return lo
