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
from typing import Final, Literal

from .text import Align

DocType = Literal["invoice", "quotation", "purchase_order", "delivery_note"]

DOC_TYPE_INVOICE: Final = "invoice"
DOC_TYPE_QUOTATION: Final = "quotation"
DOC_TYPE_PURCHASE_ORDER: Final = "purchase_order"
DOC_TYPE_DELIVERY_NOTE: Final = "delivery_note"

ColumnKey = Literal["description", "quantity", "unit_price", "tax_rate", "total"]


@dataclass(frozen=True)
class ColumnSpec:
    key: ColumnKey
    label: str
    weight: float
    align: Align = "right"


@dataclass(frozen=True)
class DocumentKind:
    """Everything that differs between the four document types."""

    doc_type: DocType
    title: str
    entity_label: str
    source_table: str
    number_field: str
    items_field: str
    party_field: str
    party_label: str
    filename_prefix: str
    columns: tuple[ColumnSpec, ...]
    section_spacing: float = 10.0
    number_suffix: str = ""
    issue_date_label: str = "Date Issued:"
    secondary_date_field: str | None = None
    secondary_date_label: str | None = None
    total_label: str | None = "Total Amount:"
    tax_rate_placeholder: str = "0%"
    compact_company_block: bool = True
    shows_status: bool = False
    shows_terms: bool = True
    shows_payment_details: bool = False
    shows_client_delivery: bool = False
    shows_delivery_confirmation: bool = False
    contact_subject: str = "document"

    @property
    def has_totals(self) -> bool:
        return self.total_label is not None

    def contact_sentence(self, contact: str) -> str:
        if self.shows_delivery_confirmation:
            return f"For any questions regarding this delivery, please contact {contact}."
        return (
            f"If you have any questions concerning this {self.contact_subject}, "
            f"please contact {contact}."
        )


def _priced_columns(*, price_label: str, total_label: str) -> tuple[ColumnSpec, ...]:
    return (
        ColumnSpec("description", "Description", 0.40, align="left"),
        ColumnSpec("quantity", "Quantity", 0.15),
        ColumnSpec("unit_price", price_label, 0.15),
        ColumnSpec("tax_rate", "Tax Rate", 0.15),
        ColumnSpec("total", total_label, 0.15),
    )


INVOICE: Final = DocumentKind(
    doc_type=DOC_TYPE_INVOICE,
    title="INVOICE",
    entity_label="Invoice",
    source_table="invoices",
    number_field="invoice_number",
    items_field="invoice_items",
    party_field="customer",
    party_label="Bill To:",
    filename_prefix="invoice",
    columns=_priced_columns(price_label="Unit Price", total_label="Line Total"),
    section_spacing=20.0,
    secondary_date_field="due_date",
    secondary_date_label="Date Due:",
    total_label="Total Amount Due:",
    tax_rate_placeholder="N/A",
    compact_company_block=False,
    shows_status=True,
    shows_payment_details=True,
    contact_subject="invoice",
)

QUOTATION: Final = DocumentKind(
    doc_type=DOC_TYPE_QUOTATION,
    title="QUOTATION",
    entity_label="Quotation",
    source_table="quotations",
    number_field="quotation_number",
    items_field="quotation_items",
    party_field="customer",
    party_label="Quote To:",
    filename_prefix="quotation",
    columns=_priced_columns(price_label="Unit Price", total_label="Total ({currency})"),
    secondary_date_field="valid_until",
    secondary_date_label="Valid Until:",
    shows_payment_details=True,
    contact_subject="quotation",
)

PURCHASE_ORDER: Final = DocumentKind(
    doc_type=DOC_TYPE_PURCHASE_ORDER,
    title="PURCHASE ORDER",
    entity_label="Purchase order",
    source_table="purchase_orders",
    number_field="po_number",
    items_field="purchase_order_items",
    party_field="vendor",
    party_label="Vendor:",
    filename_prefix="po",
    columns=_priced_columns(price_label="Unit Cost", total_label="Total ({currency})"),
    secondary_date_field="expected_date",
    secondary_date_label="Expected:",
    shows_client_delivery=True,
    contact_subject="purchase order",
)

DELIVERY_NOTE: Final = DocumentKind(
    doc_type=DOC_TYPE_DELIVERY_NOTE,
    title="DELIVERY NOTE",
    entity_label="Invoice",
    source_table="invoices",
    number_field="invoice_number",
    items_field="invoice_items",
    party_field="customer",
    party_label="Deliver To:",
    filename_prefix="delivery-note",
    columns=(
        ColumnSpec("description", "Description", 0.70, align="left"),
        ColumnSpec("quantity", "Quantity", 0.30),
    ),
    number_suffix="-DN",
    issue_date_label="Date:",
    total_label=None,
    shows_terms=False,
    shows_delivery_confirmation=True,
    contact_subject="delivery",
)

DOCUMENT_KINDS: Final[dict[str, DocumentKind]] = {
    kind.doc_type: kind for kind in (INVOICE, QUOTATION, PURCHASE_ORDER, DELIVERY_NOTE)
}


def document_kind(name: str) -> DocumentKind:
    key = name.strip().lower().replace("-", "_")
    try:
        return DOCUMENT_KINDS[key]
    except KeyError:
        valid = ", ".join(sorted(DOCUMENT_KINDS))
        raise ValueError(f"unknown document type: {name} (expected one of: {valid})") from None
