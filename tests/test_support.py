import io
import os
import tempfile
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from copy import deepcopy
from pathlib import Path
from typing import Any, Generator
from unittest import mock

from PIL import Image

from ledgerpress.core.store import MappingDocumentStore
from ledgerpress.render.surface import PdfSurface

# =============================================================================
# Test Constants
# =============================================================================

TEST_API_TOKEN = "test-token-123"

COMPANY_PROFILE: dict[str, Any] = {
    "name": "Acme Trading Ltd",
    "address": "12 Harbour Road\nWan Chai, Hong Kong",
    "tel": "+852 2123 4567",
    "contact": "billing@acme.example",
    "payment_terms": "Payment due within 30 days.",
    "bank_account": "HSBC Hong Kong\nAccount 123-456789-001",
}

CUSTOMER: dict[str, Any] = {
    "name": "Globex Corporation",
    "address": "1 Market Street\nSan Francisco, CA",
    "email": "ap@globex.example",
    "phone": "+1 415 555 0100",
}

VENDOR: dict[str, Any] = {
    "name": "Initech Supplies",
    "address": "400 Industrial Way",
    "email": "orders@initech.example",
}


# =============================================================================
# Record Builders
# =============================================================================


def make_item(
    name: str = "Widget",
    *,
    quantity: object = 2,
    unit_price: object = "50.00",
    tax_rate: object = 0,
    description: str | None = "Standard widget",
) -> dict[str, Any]:
    return {
        "quantity": quantity,
        "unit_price": unit_price,
        "tax_rate": tax_rate,
        "description": description,
        "product": {"name": name, "description": None},
    }


def make_items(count: int) -> list[dict[str, Any]]:
    return [make_item(f"Item {index + 1}", quantity=1, unit_price="10") for index in range(count)]


def make_invoice(record_id: str = "42", **overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": record_id,
        "invoice_number": "INV-0042",
        "issue_date": "2024-01-05",
        "due_date": "2024-02-04",
        "currency_code": "USD",
        "status": "sent",
        "subtotal": "100.00",
        "tax_amount": "0",
        "discount_amount": "0",
        "total_amount": "100.00",
        "notes": "Thank you for your business.",
        "terms_conditions": "Goods remain our property until paid.",
        "customer": deepcopy(CUSTOMER),
        "invoice_items": [make_item()],
    }
    record.update(overrides)
    return record


def make_quotation(record_id: str = "7", **overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": record_id,
        "quotation_number": "QT-0007",
        "issue_date": "2024-03-01",
        "valid_until": "2024-03-31",
        "currency_code": "HKD",
        "subtotal": "100.00",
        "total_amount": "100.00",
        "customer": deepcopy(CUSTOMER),
        "quotation_items": [make_item()],
    }
    record.update(overrides)
    return record


def make_purchase_order(record_id: str = "9", **overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": record_id,
        "po_number": "PO-0009",
        "issue_date": "2024-04-10",
        "expected_date": "2024-04-20",
        "currency_code": "USD",
        "subtotal": "100.00",
        "total_amount": "100.00",
        "vendor": deepcopy(VENDOR),
        "customer": deepcopy(CUSTOMER),
        "delivery_address": "Warehouse 3, Kwai Chung",
        "quotation": {"quotation_number": "QT-0007"},
        "purchase_order_items": [make_item()],
    }
    record.update(overrides)
    return record


def make_dataset(
    *,
    company: dict[str, Any] | None = None,
    invoices: list[dict[str, Any]] | None = None,
    quotations: list[dict[str, Any]] | None = None,
    purchase_orders: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    return {
        "company_profile": deepcopy(COMPANY_PROFILE) if company is None else company,
        "invoices": [make_invoice()] if invoices is None else invoices,
        "quotations": [make_quotation()] if quotations is None else quotations,
        "purchase_orders": [make_purchase_order()] if purchase_orders is None else purchase_orders,
    }


def make_store(**kwargs: Any) -> MappingDocumentStore:
    return MappingDocumentStore(make_dataset(**kwargs))


def png_bytes(width: int = 200, height: int = 100, color: str = "blue") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


# =============================================================================
# Surface Doubles
# =============================================================================


class RecordingSurface(PdfSurface):
    """Real fpdf2 surface that also records every drawn string per page."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.texts: list[tuple[int, str, float, float]] = []
        self.images: list[tuple[int, float, float, float, float]] = []
        self.rects: list[tuple[int, float, float, float, float, Any]] = []
        self.events: list[str] = []

    def draw_text(self, text: str, x: float, y: float, **kwargs: Any) -> None:
        self.texts.append((self.page_count, text, x, y))
        self.events.append(text)
        super().draw_text(text, x, y, **kwargs)

    def draw_rect(self, x: float, y: float, width: float, height: float, **kwargs: Any) -> None:
        self.rects.append((self.page_count, x, y, width, height, kwargs.get("fill")))
        self.events.append("<rect>")
        super().draw_rect(x, y, width, height, **kwargs)

    def draw_image(self, data: bytes, x: float, y: float, width: float, height: float) -> None:
        self.images.append((self.page_count, x, y, width, height))
        super().draw_image(data, x, y, width, height)

    def strings(self, page: int | None = None) -> list[str]:
        return [text for text_page, text, _x, _y in self.texts if page in (None, text_page)]

    def position_of(self, text: str) -> tuple[int, float, float]:
        for page, drawn, x, y in self.texts:
            if drawn == text:
                return page, x, y
        raise AssertionError(f"{text!r} was never drawn")


def fixed_width_surface(char_width: float = 5.0) -> mock.MagicMock:
    """Surface mock whose glyphs are all ``char_width`` points wide."""
    surface = mock.MagicMock(spec=PdfSurface)
    surface.text_width.side_effect = lambda text, font, size: len(text) * char_width
    return surface


# =============================================================================
# Environment Helpers
# =============================================================================


@contextmanager
def temp_env(overrides: dict[str, str], *, clear: bool = False):
    with mock.patch.dict(os.environ, overrides, clear=clear):
        yield


@contextmanager
def suppress_output():
    stdout = io.StringIO()
    stderr = io.StringIO()
    with redirect_stdout(stdout), redirect_stderr(stderr):
        yield


# =============================================================================
# File System Helpers
# =============================================================================


@contextmanager
def temp_files(
    **kwargs: bytes | str,
) -> Generator[dict[str, Path], None, None]:
    """Create temporary files with specified content.

    Usage:
        with temp_files(data='{"invoices": []}', config="[logo]") as paths:
            paths["data"]  # Path to file with the JSON text
            paths["config"]  # Path to file with "[logo]"
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        tmp_path = Path(tmpdir)
        result: dict[str, Path] = {}
        for name, content in kwargs.items():
            file_path = tmp_path / name
            if isinstance(content, bytes):
                file_path.write_bytes(content)
            else:
                file_path.write_text(content, encoding="utf-8")
            result[name] = file_path
        result["_dir"] = tmp_path
        yield result


@contextmanager
def temp_directory() -> Generator[Path, None, None]:
    """Create a temporary directory with cleanup."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# =============================================================================
# PDF Helpers
# =============================================================================


def is_valid_pdf(data: bytes) -> bool:
    """Check if bytes represent a valid PDF file."""
    return data.startswith(b"%PDF-") and b"%%EOF" in data[-128:]


def pdf_page_count(data: bytes) -> int:
    """Rough estimate of PDF page count (not 100% accurate)."""
    return data.count(b"/Type /Page") - data.count(b"/Type /Pages")
