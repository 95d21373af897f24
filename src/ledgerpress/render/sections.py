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
from dataclasses import replace

from fpdf.errors import FPDFException

from ..core.formatting import format_currency, format_date, format_percent, format_quantity
from ..core.models import CompanyProfile, DocumentRecord, LineItem, Party
from .assets import LogoAsset
from .doc_types import ColumnSpec, DocumentKind
from .flow import FlowController
from .geometry import (
    BANK_BOX_PADDING,
    FONT_SIZES,
    LINE_HEIGHT,
    LOGO_TOP_OFFSET,
    MIN_HEADER_HEIGHT,
    NEUTRAL_DARK,
    NEUTRAL_DARKER,
    NEUTRAL_LIGHT,
    NEUTRAL_MEDIUM,
    PRIMARY,
    PRIMARY_DARK,
    TRANSPARENT,
    WHITE,
    Color,
    column_offsets,
    fit_within,
)
from .text import BOLD, REGULAR, TextStyle, draw_line, draw_wrapped, sanitize

logger = logging.getLogger(__name__)

BADGE_PADDING_X = 8.0
BADGE_PADDING_Y = 3.0
CELL_PADDING = 5.0
ROW_LINE_HEIGHT = LINE_HEIGHT * 1.2
PRODUCT_NAME_SIZE = FONT_SIZES.body - 1
DESCRIPTION_LINE_HEIGHT = FONT_SIZES.small * 0.55
SIGNATURE_BLANK = "________________________"

LABEL = TextStyle(font=BOLD, color=NEUTRAL_DARKER)
BODY = TextStyle(color=NEUTRAL_DARK)


class SectionRenderer:
    """Lays out one document in five phases on a shared flow controller.

    Phases run in a fixed order: header, party block, item table, totals and
    footer. Every kind-specific difference is read from ``DocumentKind``.
    """

    def __init__(
        self,
        flow: FlowController,
        kind: DocumentKind,
        record: DocumentRecord,
        company: CompanyProfile,
        *,
        logo: LogoAsset | None = None,
    ) -> None:
        self.flow = flow
        self.kind = kind
        self.record = record
        self.company = company
        self.logo = logo
        self.spacing = kind.section_spacing
        surface = flow.surface
        self.page_width = surface.page_width
        self.margin = flow.margin
        offsets = column_offsets(
            [column.weight for column in kind.columns],
            page_width=self.page_width,
            margin=self.margin,
        )
        self.columns: list[tuple[ColumnSpec, float, float]] = [
            (column, x, width) for column, (x, width) in zip(kind.columns, offsets)
        ]

    def render(self) -> None:
        self.header()
        self.party_block(self.record.party)
        self.item_table()
        if self.kind.has_totals:
            self.totals()
        if self.kind.shows_client_delivery:
            self.client_delivery_block()
        self.footer()

    # -- header ---------------------------------------------------------

    def header(self) -> None:
        flow = self.flow
        surface = flow.surface
        kind = self.kind
        top = flow.top
        margin = self.margin

        left_y = top
        logo_height = self._draw_logo(top)
        if logo_height is not None:
            left_y = top - (logo_height + LOGO_TOP_OFFSET)

        company = self.company
        left_y = draw_line(
            surface,
            company.name,
            left_y,
            margin,
            replace(LABEL, size=FONT_SIZES.sub_header),
        )
        if company.address:
            address_style = BODY
            if kind.compact_company_block:
                address_style = replace(BODY, line_height=FONT_SIZES.body * 0.5)
            left_y = draw_wrapped(
                surface,
                company.address,
                left_y,
                margin,
                address_style,
                page_width=self.page_width,
                margin=margin,
            )
        if company.tel:
            tel_y = left_y - 5 if kind.compact_company_block else left_y
            left_y = draw_line(surface, f"Tel: {company.tel}", tel_y, margin, BODY)
        if company.contact:
            left_y = draw_line(surface, f"Email: {company.contact}", left_y, margin, BODY)

        right_y = self._header_identity(top)

        separator_y = min(min(left_y, right_y) - self.spacing * 0.5, top - MIN_HEADER_HEIGHT)
        flow.move_to(separator_y)
        flow.rule(thickness=1, color=NEUTRAL_MEDIUM)
        flow.advance(self.spacing)

    def _draw_logo(self, top: float) -> float | None:
        logo = self.logo
        if logo is None:
            return None
        width, height = fit_within(logo.width, logo.height)
        try:
            self.flow.surface.draw_image(
                logo.data,
                self.margin,
                top - height + LOGO_TOP_OFFSET,
                width,
                height,
            )
        except (FPDFException, OSError, ValueError, RuntimeError) as exc:
            logger.warning("Rendering without logo: embedding failed: %s", exc)
            return None
        return height

    def _header_identity(self, top: float) -> float:
        surface = self.flow.surface
        kind = self.kind
        record = self.record
        right_x = self.page_width / 2 + 20
        right_width = self.page_width - right_x - self.margin
        right = TextStyle(font=BOLD, align="right", max_width=right_width)

        y = draw_line(
            surface,
            kind.title,
            top,
            right_x,
            replace(right, size=FONT_SIZES.title, color=PRIMARY),
        )
        y = draw_line(
            surface,
            f"# {record.number}{kind.number_suffix}",
            y,
            right_x,
            replace(right, size=FONT_SIZES.sub_header, color=NEUTRAL_DARKER),
        )
        y -= LINE_HEIGHT * 0.5

        meta = replace(right, font=REGULAR, color=NEUTRAL_DARK)
        if record.issue_date:
            y = draw_line(
                surface,
                f"{kind.issue_date_label} {format_date(record.issue_date)}",
                y,
                right_x,
                meta,
            )
        if kind.secondary_date_label and record.secondary_date:
            y = draw_line(
                surface,
                f"{kind.secondary_date_label} {format_date(record.secondary_date)}",
                y,
                right_x,
                meta,
            )
        if kind.shows_status and record.status:
            y = self._status_badge(y, right_x, right_width)
        return y

    def _status_badge(self, y: float, right_x: float, right_width: float) -> float:
        surface = self.flow.surface
        y -= LINE_HEIGHT * 0.5
        text = sanitize(f"Status: {(self.record.status or '').upper()}")
        size = FONT_SIZES.body
        badge_width = surface.text_width(text, BOLD, size) + BADGE_PADDING_X * 2
        badge_height = size + BADGE_PADDING_Y * 2
        badge_x = right_x + right_width - badge_width
        badge_y = y - badge_height + BADGE_PADDING_Y * 0.8
        surface.draw_rect(badge_x, badge_y, badge_width, badge_height, fill=PRIMARY_DARK)
        draw_line(
            surface,
            text,
            badge_y + BADGE_PADDING_Y,
            badge_x + BADGE_PADDING_X,
            TextStyle(font=BOLD, size=size, color=WHITE, line_height=size),
        )
        return y - badge_height

    # -- party ----------------------------------------------------------

    def party_block(self, party: Party | None) -> None:
        if party is None:
            return
        flow = self.flow
        margin = self.margin
        flow.write_line(self.kind.party_label, margin, replace(LABEL, color=NEUTRAL_DARK))
        flow.write_line(party.name, margin, replace(LABEL, size=FONT_SIZES.sub_header))
        if party.address:
            flow.write_paragraph(party.address, margin, BODY)
        if party.email:
            flow.write_line(party.email, margin, BODY)
        if party.phone:
            flow.write_line(party.phone, margin, BODY)
        flow.advance(self.spacing)

    # -- item table -----------------------------------------------------

    def item_table(self) -> None:
        self.table_header()
        for item in self.record.items:
            self.flow.ensure_row_space(self.table_header)
            self.table_row(item)
        self.flow.advance(self.spacing * 0.5)

    def table_header(self) -> None:
        flow = self.flow
        surface = flow.surface
        style = TextStyle(font=BOLD, size=FONT_SIZES.table_header, color=NEUTRAL_DARKER)
        for column, x, width in self.columns:
            label = column.label.format(currency=self.record.currency_code)
            if column.align == "left":
                draw_line(surface, label, flow.y, x, style)
            else:
                cell = replace(style, align=column.align, max_width=width - CELL_PADDING)
                draw_line(surface, label, flow.y, x, cell)
        flow.advance(LINE_HEIGHT * 0.5)
        flow.rule(thickness=1, color=NEUTRAL_DARKER)
        flow.advance(LINE_HEIGHT)

    def table_row(self, item: LineItem) -> None:
        flow = self.flow
        surface = flow.surface
        row_top = flow.y
        _, desc_x, desc_width = self.columns[0]

        draw_line(
            surface,
            item.display_name,
            row_top,
            desc_x,
            TextStyle(font=BOLD, size=PRODUCT_NAME_SIZE, color=NEUTRAL_DARKER),
        )
        desc_bottom = draw_wrapped(
            surface,
            item.display_description,
            row_top - PRODUCT_NAME_SIZE * 1.2,
            desc_x,
            TextStyle(
                size=FONT_SIZES.small,
                color=NEUTRAL_DARKER,
                line_height=DESCRIPTION_LINE_HEIGHT,
                max_width=desc_width - CELL_PADDING,
            ),
            page_width=self.page_width,
            margin=self.margin,
        )

        cell = TextStyle(size=FONT_SIZES.body, color=NEUTRAL_DARKER, line_height=ROW_LINE_HEIGHT)
        for column, x, width in self.columns[1:]:
            style = replace(cell, align=column.align, max_width=width - CELL_PADDING)
            if column.key == "total":
                style = replace(style, font=BOLD)
            draw_line(surface, self._cell_text(column, item), row_top, x, style)

        line_y = desc_bottom - 5
        flow.move_to(line_y)
        flow.rule(thickness=0.5, color=NEUTRAL_LIGHT)
        flow.move_to(line_y - 10)

    def _cell_text(self, column: ColumnSpec, item: LineItem) -> str:
        currency = self.record.currency_code
        if column.key == "quantity":
            return format_quantity(item.quantity)
        if column.key == "unit_price":
            return format_currency(item.unit_price, currency)
        if column.key == "tax_rate":
            if item.tax_rate > 0:
                return format_percent(item.tax_rate)
            return self.kind.tax_rate_placeholder
        if column.key == "total":
            return format_currency(item.line_total(), currency)
        return ""

    # -- totals ---------------------------------------------------------

    def totals(self) -> None:
        flow = self.flow
        record = self.record
        totals_x = self.page_width / 2
        span = self.page_width - self.margin - totals_x
        label_width = span * 0.6
        value_x = totals_x + label_width
        value_width = span * 0.4

        label = replace(BODY, max_width=label_width)
        value = TextStyle(font=BOLD, color=NEUTRAL_DARKER, align="right", max_width=value_width)

        def pair(text: str, amount: str, label_style: TextStyle, value_style: TextStyle) -> None:
            y = flow.write_line(text, totals_x, label_style)
            draw_line(flow.surface, amount, y + LINE_HEIGHT, value_x, value_style)

        currency = record.currency_code
        pair("Subtotal:", format_currency(record.subtotal, currency), label, value)
        if record.tax_amount > 0:
            pair("Tax:", format_currency(record.tax_amount, currency), label, value)
        if record.discount_amount > 0:
            pair("Discount:", f"-{format_currency(record.discount_amount, currency)}", label, value)

        flow.advance(LINE_HEIGHT * 0.5)
        flow.rule(x1=totals_x, thickness=1, color=NEUTRAL_DARKER)
        flow.advance(LINE_HEIGHT * 1.2)

        pair(
            self.kind.total_label or "",
            format_currency(record.total_amount, currency),
            replace(LABEL, size=FONT_SIZES.sub_header, max_width=label_width),
            replace(value, size=FONT_SIZES.sub_header, color=PRIMARY_DARK),
        )
        flow.advance(self.spacing)

    # -- purchase order extras -----------------------------------------

    def client_delivery_block(self) -> None:
        record = self.record
        client = record.client
        delivery_address = record.delivery_address or (client.address if client else None)
        if client is None and not record.delivery_address:
            return
        flow = self.flow
        margin = self.margin
        heading = replace(LABEL, color=NEUTRAL_DARK)
        flow.write_line("Client & Delivery Information:", margin, heading)
        if client is not None:
            flow.write_line(f"Client: {client.name}", margin, TextStyle(color=NEUTRAL_DARKER))
            if client.email:
                flow.write_line(f"Email: {client.email}", margin, BODY)
            if client.address:
                flow.write_line("Client Address:", margin, heading)
                flow.write_paragraph(client.address, margin, BODY)
        if delivery_address:
            flow.write_line("Delivery Address:", margin, heading)
            flow.write_paragraph(delivery_address, margin, BODY)
        if record.reference_number:
            flow.write_line(f"Reference: {record.reference_number}", margin, BODY)
        flow.advance(self.spacing)

    # -- footer ---------------------------------------------------------

    def footer(self) -> None:
        flow = self.flow
        kind = self.kind
        record = self.record
        company = self.company

        flow.reserve_footer()
        flow.rule(thickness=1, color=NEUTRAL_MEDIUM)
        flow.advance(self.spacing * 0.8)

        self._titled_paragraph("Notes:", record.notes)
        if kind.shows_terms:
            self._titled_paragraph("Terms & Conditions:", record.terms)
        if kind.shows_payment_details:
            self._titled_paragraph("Payment Terms:", company.payment_terms)
            if company.bank_account:
                self.bank_details_box(company.bank_account)
        if kind.shows_delivery_confirmation:
            self.delivery_confirmation()

        self.contact_sentence()

    def _titled_paragraph(self, title: str, text: str | None) -> None:
        if not text:
            return
        flow = self.flow
        flow.write_line(title, self.margin, LABEL)
        flow.write_paragraph(
            text,
            self.margin,
            replace(BODY, max_width=self.page_width - 2 * self.margin),
        )
        flow.advance(LINE_HEIGHT * 0.5)

    def bank_details_box(self, bank_account: str) -> None:
        """Two-pass block: measure with the transparent color, then paint and draw."""
        flow = self.flow
        padding = BANK_BOX_PADDING
        content_y = flow.y
        text_height = content_y - self._bank_details_text(content_y, color=TRANSPARENT)
        box_height = text_height + padding * 1.5

        if flow.ensure_block_space(box_height):
            content_y = flow.y

        box_y = content_y - box_height + padding * 0.5
        flow.surface.draw_rect(
            self.margin,
            box_y,
            self.page_width - 2 * self.margin,
            box_height,
            fill=NEUTRAL_LIGHT,
            border=NEUTRAL_MEDIUM,
            border_width=0.5,
        )
        self._bank_details_text(content_y - padding * 0.5, color=None)
        flow.move_to(box_y - LINE_HEIGHT * 0.5)

    def _bank_details_text(self, y: float, *, color: Color | None) -> float:
        surface = self.flow.surface
        x = self.margin + BANK_BOX_PADDING
        title = replace(LABEL, color=color or NEUTRAL_DARKER)
        body = replace(
            BODY,
            color=color or NEUTRAL_DARK,
            max_width=self.page_width - 2 * x,
        )
        y = draw_line(surface, "Bank Details:", y, x, title)
        return draw_wrapped(
            surface,
            self.company.bank_account,
            y,
            x,
            body,
            page_width=self.page_width,
            margin=self.margin,
        )

    def delivery_confirmation(self) -> None:
        flow = self.flow
        margin = self.margin
        flow.advance(self.spacing)
        flow.write_line("Delivery Confirmation:", margin, LABEL)
        flow.advance(LINE_HEIGHT)
        for label in ("Received by:", "Date:", "Signature:"):
            flow.write_line(f"{label} {SIGNATURE_BLANK}", margin, BODY)

    def contact_sentence(self) -> None:
        flow = self.flow
        company = self.company
        contact = sanitize(company.contact) or sanitize(company.name)
        style = TextStyle(
            size=FONT_SIZES.small,
            color=NEUTRAL_DARK,
            align="center",
            max_width=self.page_width - 2 * self.margin,
        )
        y = min(flow.y, self.margin + LINE_HEIGHT * 2)
        if y < self.margin:
            flow.new_page()
            y = self.margin + LINE_HEIGHT
        flow.move_to(y)
        flow.write_line(self.kind.contact_sentence(contact), self.margin, style)
