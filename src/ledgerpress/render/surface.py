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

import io
from datetime import datetime

from fpdf import FPDF

from .geometry import PAGE_HEIGHT, PAGE_WIDTH, Color
from .text import FontFace


class PdfSurface:
    """fpdf2 canvas addressed in points with a bottom-left origin.

    Callers pass baselines that decrease down the page; conversion to fpdf2's
    top-left coordinates happens here and nowhere else.
    """

    def __init__(
        self,
        *,
        page_width: float = PAGE_WIDTH,
        page_height: float = PAGE_HEIGHT,
        title: str | None = None,
        created_at: datetime | None = None,
    ) -> None:
        pdf = FPDF(unit="pt", format=(page_width, page_height))
        pdf.set_auto_page_break(False)
        pdf.set_margins(0, 0, 0)
        pdf.set_creator("ledgerpress")
        if title:
            pdf.set_title(title)
        if created_at is not None:
            pdf.creation_date = created_at
        self._pdf = pdf
        self.page_width = float(page_width)
        self.page_height = float(page_height)

    @property
    def page_count(self) -> int:
        return self._pdf.page_no()

    def add_page(self) -> None:
        self._pdf.add_page()

    def text_width(self, text: str, font: FontFace, size: float) -> float:
        self._pdf.set_font(font.family, font.style, size)
        return float(self._pdf.get_string_width(text))

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        font: FontFace,
        size: float,
        color: Color,
    ) -> None:
        pdf = self._pdf
        pdf.set_font(font.family, font.style, size)
        pdf.set_text_color(color.r, color.g, color.b)
        pdf.text(x, self._flip(y), text)

    def draw_rule(
        self,
        x1: float,
        y: float,
        x2: float,
        *,
        thickness: float,
        color: Color,
    ) -> None:
        pdf = self._pdf
        pdf.set_draw_color(color.r, color.g, color.b)
        pdf.set_line_width(thickness)
        pdf.line(x1, self._flip(y), x2, self._flip(y))

    def draw_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        fill: Color,
        border: Color | None = None,
        border_width: float = 0.0,
    ) -> None:
        """Draw a rectangle whose bottom-left corner sits at ``(x, y)``."""
        pdf = self._pdf
        pdf.set_fill_color(fill.r, fill.g, fill.b)
        style = "F"
        if border is not None and border_width > 0:
            pdf.set_draw_color(border.r, border.g, border.b)
            pdf.set_line_width(border_width)
            style = "DF"
        pdf.rect(x, self._flip(y + height), width, height, style=style)

    def draw_image(self, data: bytes, x: float, y: float, width: float, height: float) -> None:
        self._pdf.image(io.BytesIO(data), x=x, y=self._flip(y + height), w=width, h=height)

    def output(self) -> bytes:
        return bytes(self._pdf.output())

    def _flip(self, y: float) -> float:
        return self.page_height - y
