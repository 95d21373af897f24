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

import unittest
from typing import Any

from ledgerpress.core.models import parse_company_profile, parse_document_record
from ledgerpress.render.doc_types import (
    DELIVERY_NOTE,
    INVOICE,
    PURCHASE_ORDER,
    QUOTATION,
    DocumentKind,
)
from ledgerpress.render.geometry import (
    NEUTRAL_LIGHT,
    PAGE_MARGIN,
    PAGE_WIDTH,
    PRIMARY_DARK,
)
from ledgerpress.render.service import RenderedDocument, render_document
from ledgerpress.render.text import BOLD, REGULAR
from tests.test_support import (
    COMPANY_PROFILE,
    RecordingSurface,
    make_invoice,
    make_item,
    make_purchase_order,
    make_quotation,
)

SIGNATURE_LINE = "________________________"


def _render(
    kind: DocumentKind,
    data: dict[str, Any],
    company: dict[str, Any] = COMPANY_PROFILE,
) -> tuple[RenderedDocument, RecordingSurface]:
    record = parse_document_record(
        data,
        number_field=kind.number_field,
        items_field=kind.items_field,
        party_field=kind.party_field,
        secondary_date_field=kind.secondary_date_field,
        default_currency="HKD",
    )
    surface = RecordingSurface()
    document = render_document(kind, record, parse_company_profile(company), surface=surface)
    return document, surface


class TestHeaderSection(unittest.TestCase):
    def test_invoice_header_lines(self) -> None:
        _document, surface = _render(INVOICE, make_invoice())
        strings = surface.strings(1)
        for expected in (
            "Acme Trading Ltd",
            "Tel: +852 2123 4567",
            "Email: billing@acme.example",
            "INVOICE",
            "# INV-0042",
            "Date Issued: January 5, 2024",
            "Date Due: February 4, 2024",
            "Status: SENT",
        ):
            with self.subTest(expected=expected):
                self.assertIn(expected, strings)

    def test_identity_block_is_right_aligned_to_margin(self) -> None:
        _document, surface = _render(INVOICE, make_invoice())
        _page, x, _y = surface.position_of("INVOICE")
        width = surface.text_width("INVOICE", BOLD, 28.0)
        self.assertAlmostEqual(x + width, PAGE_WIDTH - PAGE_MARGIN)

    def test_status_badge_is_filled(self) -> None:
        _document, surface = _render(INVOICE, make_invoice(status="overdue"))
        self.assertIn("Status: OVERDUE", surface.strings())
        fills = [rect[5] for rect in surface.rects]
        self.assertEqual(fills[0], PRIMARY_DARK)
        self.assertLess(surface.events.index("<rect>"), surface.events.index("Status: OVERDUE"))

    def test_status_only_on_invoices(self) -> None:
        _document, surface = _render(QUOTATION, make_quotation(status="draft"))
        self.assertFalse(any(text.startswith("Status:") for text in surface.strings()))

    def test_quotation_dates(self) -> None:
        _document, surface = _render(QUOTATION, make_quotation())
        strings = surface.strings()
        self.assertIn("Date Issued: March 1, 2024", strings)
        self.assertIn("Valid Until: March 31, 2024", strings)

    def test_company_block_skips_missing_fields(self) -> None:
        _document, surface = _render(INVOICE, make_invoice(), company={"name": "Solo Co"})
        strings = surface.strings()
        self.assertFalse(any(text.startswith("Tel:") for text in strings))
        self.assertNotIn("Email: None", strings)
        # contact sentence falls back to the company name
        self.assertIn(
            "If you have any questions concerning this invoice, please contact Solo Co.",
            strings,
        )


class TestPartyAndTable(unittest.TestCase):
    def test_absent_party_fields_take_no_lines(self) -> None:
        _document, surface = _render(INVOICE, make_invoice(customer={"name": "Solo"}))
        strings = surface.strings()
        index = strings.index("Solo")
        self.assertEqual(strings[index - 1], "Bill To:")
        self.assertEqual(strings[index + 1], "Description")

    def test_party_lines(self) -> None:
        _document, surface = _render(INVOICE, make_invoice())
        strings = surface.strings()
        start = strings.index("Bill To:")
        self.assertEqual(
            strings[start : start + 6],
            [
                "Bill To:",
                "Globex Corporation",
                "1 Market Street",
                "San Francisco, CA",
                "ap@globex.example",
                "+1 415 555 0100",
            ],
        )

    def test_priced_row_cells(self) -> None:
        items = [
            make_item("Taxed", quantity="2.50", unit_price="40", tax_rate=10),
            make_item("Untaxed", quantity=1, unit_price="9.99"),
        ]
        _document, surface = _render(INVOICE, make_invoice(invoice_items=items))
        strings = surface.strings()
        for expected in ("Taxed", "2.5", "$40.00", "10%", "$110.00", "Untaxed", "$9.99", "N/A"):
            with self.subTest(expected=expected):
                self.assertIn(expected, strings)

    def test_cells_align_to_row_top(self) -> None:
        _document, surface = _render(INVOICE, make_invoice())
        _page, _x, name_y = surface.position_of("Widget")
        _page, _x, total_y = surface.position_of("$100.00")
        self.assertEqual(name_y, total_y)

    def test_quotation_zero_tax_placeholder(self) -> None:
        _document, surface = _render(QUOTATION, make_quotation())
        self.assertIn("0%", surface.strings())
        self.assertIn("HK$100.00", surface.strings())

    def test_unnamed_product_uses_line_description(self) -> None:
        item = make_item(description="Loose part")
        item["product"] = None
        _document, surface = _render(INVOICE, make_invoice(invoice_items=[item]))
        strings = surface.strings()
        self.assertIn("Unnamed Product", strings)
        self.assertIn("Loose part", strings)

    def test_long_description_wraps_inside_column(self) -> None:
        description = " ".join(["lorem"] * 80)
        item = make_item(description=description)
        _document, surface = _render(INVOICE, make_invoice(invoice_items=[item]))
        column_width = (PAGE_WIDTH - 2 * PAGE_MARGIN) * 0.4 - 5
        lines = [text for text in surface.strings() if text.startswith("lorem")]
        self.assertGreater(len(lines), 1)
        self.assertEqual(" ".join(lines), description)
        for line in lines:
            self.assertLessEqual(surface.text_width(line, REGULAR, 8.0), column_width)

    def test_text_is_sanitized(self) -> None:
        customer = {"name": "Zoë \u2603\tLtd"}
        _document, surface = _render(INVOICE, make_invoice(customer=customer))
        self.assertIn("Zoë ?    Ltd", surface.strings())


class TestFooterSection(unittest.TestCase):
    def test_invoice_footer_blocks(self) -> None:
        _document, surface = _render(INVOICE, make_invoice())
        strings = surface.strings()
        for expected in (
            "Notes:",
            "Thank you for your business.",
            "Terms & Conditions:",
            "Payment Terms:",
            "Payment due within 30 days.",
            "Bank Details:",
            "Total Amount Due:",
        ):
            with self.subTest(expected=expected):
                self.assertIn(expected, strings)

    def test_bank_box_is_painted_behind_its_text(self) -> None:
        _document, surface = _render(QUOTATION, make_quotation())
        self.assertEqual(surface.strings().count("Bank Details:"), 1)
        page, x, y, width, height, fill = surface.rects[-1]
        self.assertEqual(fill, NEUTRAL_LIGHT)
        self.assertEqual((x, width), (PAGE_MARGIN, PAGE_WIDTH - 2 * PAGE_MARGIN))
        bank_events = [i for i, e in enumerate(surface.events) if e == "Bank Details:"]
        last_rect = max(i for i, e in enumerate(surface.events) if e == "<rect>")
        self.assertLess(last_rect, bank_events[0])
        for text in ("Bank Details:", "HSBC Hong Kong", "Account 123-456789-001"):
            with self.subTest(text=text):
                text_page, _text_x, text_y = surface.position_of(text)
                self.assertEqual(text_page, page)
                self.assertGreater(text_y, y)
                self.assertLess(text_y, y + height)

    def test_contact_sentence_is_centered_near_bottom(self) -> None:
        document, surface = _render(QUOTATION, make_quotation())
        sentence = (
            "If you have any questions concerning this quotation, "
            "please contact billing@acme.example."
        )
        page, x, y = surface.position_of(sentence)
        self.assertEqual(page, document.page_count)
        self.assertLessEqual(y, PAGE_MARGIN + 30.0)
        self.assertGreaterEqual(y, PAGE_MARGIN)
        width = surface.text_width(sentence, REGULAR, 8.0)
        self.assertAlmostEqual(x + width / 2, PAGE_WIDTH / 2)

    def test_purchase_order_extras(self) -> None:
        _document, surface = _render(PURCHASE_ORDER, make_purchase_order())
        strings = surface.strings()
        for expected in (
            "PURCHASE ORDER",
            "# PO-0009",
            "Expected: April 20, 2024",
            "Vendor:",
            "Initech Supplies",
            "Unit Cost",
            "Total (USD)",
            "Client & Delivery Information:",
            "Client: Globex Corporation",
            "Email: ap@globex.example",
            "Client Address:",
            "Delivery Address:",
            "Warehouse 3, Kwai Chung",
            "Reference: QT-0007",
        ):
            with self.subTest(expected=expected):
                self.assertIn(expected, strings)
        self.assertNotIn("Bank Details:", strings)
        self.assertLess(
            strings.index("Total Amount:"),
            strings.index("Client & Delivery Information:"),
        )

    def test_purchase_order_delivery_falls_back_to_client_address(self) -> None:
        data = make_purchase_order(delivery_address=None, quotation=None)
        _document, surface = _render(PURCHASE_ORDER, data)
        strings = surface.strings()
        self.assertEqual(strings.count("1 Market Street"), 2)
        self.assertFalse(any(text.startswith("Reference:") for text in strings))

    def test_purchase_order_without_client_skips_block(self) -> None:
        data = make_purchase_order(customer=None, delivery_address=None)
        _document, surface = _render(PURCHASE_ORDER, data)
        self.assertNotIn("Client & Delivery Information:", surface.strings())

    def test_delivery_note_layout(self) -> None:
        _document, surface = _render(DELIVERY_NOTE, make_invoice())
        strings = surface.strings()
        for expected in (
            "DELIVERY NOTE",
            "# INV-0042-DN",
            "Date: January 5, 2024",
            "Deliver To:",
            "Quantity",
            "2",
            "Notes:",
            "Delivery Confirmation:",
            f"Received by: {SIGNATURE_LINE}",
            f"Date: {SIGNATURE_LINE}",
            f"Signature: {SIGNATURE_LINE}",
            "For any questions regarding this delivery, please contact billing@acme.example.",
        ):
            with self.subTest(expected=expected):
                self.assertIn(expected, strings)
        for absent in (
            "Subtotal:",
            "Unit Price",
            "Terms & Conditions:",
            "Bank Details:",
            "Status: SENT",
        ):
            with self.subTest(absent=absent):
                self.assertNotIn(absent, strings)
        self.assertFalse(any(text.startswith("Date Due:") for text in strings))


if __name__ == "__main__":
    unittest.main()
