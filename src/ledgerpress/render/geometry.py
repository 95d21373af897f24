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

from dataclasses import dataclass
from typing import Final, Sequence

# A4 in points
PAGE_WIDTH: Final = 595.28
PAGE_HEIGHT: Final = 841.89

PAGE_MARGIN: Final = 50.0
LINE_HEIGHT: Final = 15.0
MIN_HEADER_HEIGHT: Final = 150.0

# Rows start a new page once the cursor drops below margin + this reserve.
TABLE_BOTTOM_RESERVE: Final = 200.0
# Footer block needs this many default lines above the bottom margin.
FOOTER_MIN_LINES: Final = 8

LOGO_MAX_WIDTH: Final = 120.0
LOGO_MAX_HEIGHT: Final = 50.0
LOGO_TOP_OFFSET: Final = 20.0

BANK_BOX_PADDING: Final = 10.0


@dataclass(frozen=True)
class FontSizes:
    title: float = 28.0
    header: float = 22.0
    sub_header: float = 16.0
    body: float = 10.0
    small: float = 8.0
    table_header: float = 10.0


FONT_SIZES: Final = FontSizes()


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int


PRIMARY: Final = Color(59, 130, 246)
PRIMARY_DARK: Final = Color(37, 99, 235)
NEUTRAL_DARKER: Final = Color(31, 41, 55)
NEUTRAL_DARK: Final = Color(75, 85, 99)
NEUTRAL_MEDIUM: Final = Color(209, 213, 219)
NEUTRAL_LIGHT: Final = Color(243, 244, 246)
WHITE: Final = Color(255, 255, 255)

# Identity-compared sentinel: layout runs, nothing is drawn.
TRANSPARENT: Final = Color(-1, -1, -1)


def is_transparent(color: Color) -> bool:
    return color is TRANSPARENT


def column_offsets(
    weights: Sequence[float],
    *,
    page_width: float = PAGE_WIDTH,
    margin: float = PAGE_MARGIN,
) -> list[tuple[float, float]]:
    """Return ``(x, width)`` per column from fractional weights of the usable width."""
    usable = page_width - 2 * margin
    offsets: list[tuple[float, float]] = []
    x = margin
    for weight in weights:
        width = usable * float(weight)
        offsets.append((x, width))
        x += width
    return offsets


def fit_within(
    width: float,
    height: float,
    max_width: float = LOGO_MAX_WIDTH,
    max_height: float = LOGO_MAX_HEIGHT,
) -> tuple[float, float]:
    if width <= 0 or height <= 0:
        raise ValueError("image dimensions must be positive")
    scale = min(max_width / width, max_height / height)
    return width * scale, height * scale
