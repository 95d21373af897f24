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

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .geometry import (
    FOOTER_MIN_LINES,
    LINE_HEIGHT,
    PAGE_MARGIN,
    TABLE_BOTTOM_RESERVE,
    Color,
)
from .surface import PdfSurface
from .text import TextStyle, draw_line, draw_wrapped

logger = logging.getLogger(__name__)


@dataclass
class Cursor:
    y: float
    page: int


class FlowController:
    """Owns the current page and the vertical write cursor of one render."""

    def __init__(self, surface: PdfSurface, *, margin: float = PAGE_MARGIN) -> None:
        self.surface = surface
        self.margin = margin
        surface.add_page()
        self.cursor = Cursor(y=self.top, page=surface.page_count)

    @property
    def top(self) -> float:
        return self.surface.page_height - self.margin

    @property
    def y(self) -> float:
        return self.cursor.y

    @property
    def page_count(self) -> int:
        return self.surface.page_count

    @property
    def content_width(self) -> float:
        return self.surface.page_width - 2 * self.margin

    def new_page(self) -> None:
        self.surface.add_page()
        self.cursor = Cursor(y=self.top, page=self.surface.page_count)
        logger.debug("Started page %d", self.cursor.page)

    def advance(self, dy: float) -> None:
        self.cursor.y -= dy

    def move_to(self, y: float) -> None:
        self.cursor.y = y

    def at_bottom_margin(self, reserve: float = 0.0) -> bool:
        return self.cursor.y < self.margin + reserve

    def ensure_row_space(self, emit_header: Callable[[], None]) -> bool:
        """Break before a table row that would start inside the bottom reserve."""
        if not self.at_bottom_margin(TABLE_BOTTOM_RESERVE):
            return False
        self.new_page()
        emit_header()
        return True

    def reserve_footer(self) -> None:
        # Single-page documents pull the footer up; later pages overflow instead.
        footer_min_y = self.margin + LINE_HEIGHT * FOOTER_MIN_LINES
        if self.cursor.y < footer_min_y and self.page_count == 1:
            self.cursor.y = footer_min_y
        elif self.at_bottom_margin():
            self.new_page()

    def ensure_block_space(self, height: float) -> bool:
        if self.cursor.y - height >= self.margin:
            return False
        self.new_page()
        return True

    def write_line(self, text: object, x: float, style: TextStyle = TextStyle()) -> float:
        self.cursor.y = draw_line(self.surface, text, self.cursor.y, x, style)
        return self.cursor.y

    def write_paragraph(
        self,
        text: object,
        x: float,
        style: TextStyle = TextStyle(),
    ) -> float:
        self.cursor.y = draw_wrapped(
            self.surface,
            text,
            self.cursor.y,
            x,
            style,
            page_width=self.surface.page_width,
            margin=self.margin,
        )
        return self.cursor.y

    def rule(
        self,
        *,
        x1: float | None = None,
        x2: float | None = None,
        thickness: float = 1.0,
        color: Color,
    ) -> None:
        start = self.margin if x1 is None else x1
        end = self.surface.page_width - self.margin if x2 is None else x2
        self.surface.draw_rule(start, self.cursor.y, end, thickness=thickness, color=color)
