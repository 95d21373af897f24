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

"""Document layout engine: text primitives, page flow, sections, assembler."""

from .assets import LogoAsset, LogoResolver
from .doc_types import (
    DELIVERY_NOTE,
    DOCUMENT_KINDS,
    INVOICE,
    PURCHASE_ORDER,
    QUOTATION,
    DocumentKind,
    document_kind,
)
from .flow import Cursor, FlowController
from .service import DocumentService, RenderedDocument, document_filename, render_document
from .surface import PdfSurface
from .text import TextStyle, draw_line, draw_wrapped, sanitize, wrap_text

__all__ = [
    "Cursor",
    "DELIVERY_NOTE",
    "DOCUMENT_KINDS",
    "DocumentKind",
    "DocumentService",
    "FlowController",
    "INVOICE",
    "LogoAsset",
    "LogoResolver",
    "PURCHASE_ORDER",
    "PdfSurface",
    "QUOTATION",
    "RenderedDocument",
    "TextStyle",
    "document_filename",
    "document_kind",
    "draw_line",
    "draw_wrapped",
    "render_document",
    "sanitize",
    "wrap_text",
]
