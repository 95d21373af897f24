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

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal(0)
HUNDRED = Decimal(100)
UNNAMED_PRODUCT = "Unnamed Product"


@dataclass(frozen=True)
class Party:
    name: str
    address: str | None = None
    email: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class LineItem:
    quantity: Decimal
    unit_price: Decimal
    tax_rate: Decimal = ZERO
    description: str | None = None
    product_name: str | None = None
    product_description: str | None = None

    @property
    def display_name(self) -> str:
        return self.product_name or UNNAMED_PRODUCT

    @property
    def display_description(self) -> str | None:
        return self.product_description or self.description

    def line_total(self, *, include_tax: bool = True) -> Decimal:
        total = self.quantity * self.unit_price
        if include_tax and self.tax_rate > 0:
            total *= 1 + self.tax_rate / HUNDRED
        return total


@dataclass(frozen=True)
class CompanyProfile:
    name: str = ""
    address: str | None = None
    tel: str | None = None
    contact: str | None = None
    logo_url: str | None = None
    payment_terms: str | None = None
    bank_account: str | None = None


@dataclass(frozen=True)
class DocumentRecord:
    """A resolved document: header fields, nested items and counterparty.

    Totals are stored values and are displayed as-is; only per-row line totals
    are computed at render time.
    """

    record_id: str
    number: str
    issue_date: str | None
    currency_code: str
    items: tuple[LineItem, ...]
    party: Party | None
    secondary_date: str | None = None
    subtotal: Decimal = ZERO
    tax_amount: Decimal = ZERO
    discount_amount: Decimal = ZERO
    total_amount: Decimal = ZERO
    notes: str | None = None
    terms: str | None = None
    status: str | None = None
    client: Party | None = None
    delivery_address: str | None = None
    reference_number: str | None = None


def parse_company_profile(data: Mapping[str, Any]) -> CompanyProfile:
    return CompanyProfile(
        name=_optional_str(data.get("name"), field="company_profile.name") or "",
        address=_optional_str(data.get("address"), field="company_profile.address"),
        tel=_optional_str(data.get("tel"), field="company_profile.tel"),
        contact=_optional_str(data.get("contact"), field="company_profile.contact"),
        logo_url=_optional_str(data.get("logo_url"), field="company_profile.logo_url"),
        payment_terms=_optional_str(
            data.get("payment_terms"), field="company_profile.payment_terms"
        ),
        bank_account=_optional_str(data.get("bank_account"), field="company_profile.bank_account"),
    )


def parse_document_record(
    data: Mapping[str, Any],
    *,
    number_field: str,
    items_field: str,
    party_field: str,
    secondary_date_field: str | None,
    default_currency: str,
) -> DocumentRecord:
    secondary_date = None
    if secondary_date_field:
        secondary_date = _optional_str(data.get(secondary_date_field), field=secondary_date_field)
    reference = data.get("quotation")
    reference_number = None
    if isinstance(reference, Mapping):
        reference_number = _optional_str(
            reference.get("quotation_number"), field="quotation.quotation_number"
        )
    return DocumentRecord(
        record_id=str(data.get("id", "")),
        number=_optional_str(data.get(number_field), field=number_field) or "",
        issue_date=_optional_str(data.get("issue_date"), field="issue_date"),
        currency_code=(
            _optional_str(data.get("currency_code"), field="currency_code") or default_currency
        ),
        items=_parse_items(data.get(items_field), field=items_field),
        party=_parse_party(data.get(party_field), field=party_field),
        secondary_date=secondary_date,
        subtotal=_decimal(data.get("subtotal"), field="subtotal"),
        tax_amount=_decimal(data.get("tax_amount"), field="tax_amount"),
        discount_amount=_decimal(data.get("discount_amount"), field="discount_amount"),
        total_amount=_decimal(data.get("total_amount"), field="total_amount"),
        notes=_optional_str(data.get("notes"), field="notes"),
        terms=_optional_str(data.get("terms_conditions"), field="terms_conditions"),
        status=_optional_str(data.get("status"), field="status"),
        client=(
            _parse_party(data.get("customer"), field="customer")
            if party_field != "customer"
            else None
        ),
        delivery_address=_optional_str(data.get("delivery_address"), field="delivery_address"),
        reference_number=reference_number,
    )


def _parse_items(value: object, *, field: str) -> tuple[LineItem, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ValueError(f"{field} must be a list")
    items: list[LineItem] = []
    for index, entry in enumerate(value):
        entry_field = f"{field}[{index}]"
        if not isinstance(entry, Mapping):
            raise ValueError(f"{entry_field} must be an object")
        product = entry.get("product")
        product_name = None
        product_description = None
        if isinstance(product, Mapping):
            product_name = _optional_str(product.get("name"), field=f"{entry_field}.product.name")
            product_description = _optional_str(
                product.get("description"), field=f"{entry_field}.product.description"
            )
        items.append(
            LineItem(
                quantity=_decimal(entry.get("quantity"), field=f"{entry_field}.quantity"),
                unit_price=_decimal(entry.get("unit_price"), field=f"{entry_field}.unit_price"),
                tax_rate=_decimal(entry.get("tax_rate"), field=f"{entry_field}.tax_rate"),
                description=_optional_str(
                    entry.get("description"), field=f"{entry_field}.description"
                ),
                product_name=product_name,
                product_description=product_description,
            )
        )
    return tuple(items)


def _parse_party(value: object, *, field: str) -> Party | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ValueError(f"{field} must be an object")
    return Party(
        name=_optional_str(value.get("name"), field=f"{field}.name") or "",
        address=_optional_str(value.get("address"), field=f"{field}.address"),
        email=_optional_str(value.get("email"), field=f"{field}.email"),
        phone=_optional_str(value.get("phone"), field=f"{field}.phone"),
    )


def _optional_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a string")
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    return value if value.strip() else None


def _decimal(value: object, *, field: str) -> Decimal:
    # null numeric columns read as zero
    if value is None or value == "":
        return ZERO
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number")
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float, str)):
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"{field} must be a number") from exc
    else:
        raise ValueError(f"{field} must be a number")
    if not parsed.is_finite():
        raise ValueError(f"{field} must be a finite number")
    return parsed
