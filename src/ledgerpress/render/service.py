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
import re
from dataclasses import dataclass
from datetime import datetime, time, timezone

from ..config import AppConfig
from ..core.errors import (
    ConfigurationMissing,
    DocumentError,
    IncompleteData,
    NotFound,
    UnexpectedRenderError,
)
from ..core.formatting import parse_iso_date
from ..core.models import (
    CompanyProfile,
    DocumentRecord,
    parse_company_profile,
    parse_document_record,
)
from ..core.store import DocumentStore
from .assets import LogoAsset, LogoResolver
from .doc_types import DocumentKind, document_kind
from .flow import FlowController
from .sections import SectionRenderer
from .surface import PdfSurface
from .text import sanitize

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
# Pinned so identical records serialize to identical bytes.
FALLBACK_CREATION_DATE = datetime(2000, 1, 1, tzinfo=timezone.utc)
_FILENAME_UNSAFE_RE = re.compile(r'[\\/"\n]')
_STORE_ERRORS = (LookupError, OSError, ValueError)


@dataclass(frozen=True)
class RenderedDocument:
    content: bytes
    filename: str
    page_count: int
    media_type: str = PDF_MEDIA_TYPE


@dataclass(frozen=True)
class DocumentService:
    """Fetches a record and the company profile, then lays out the PDF."""

    store: DocumentStore
    logo_resolver: LogoResolver | None = None
    default_currency: str = "HKD"

    @classmethod
    def from_config(cls, store: DocumentStore, config: AppConfig) -> DocumentService:
        return cls(
            store=store,
            logo_resolver=LogoResolver(config.logo),
            default_currency=config.document.default_currency,
        )

    def generate(self, kind: DocumentKind | str, record_id: str) -> RenderedDocument:
        if isinstance(kind, str):
            kind = document_kind(kind)
        record = self._load_record(kind, record_id)
        company = self._load_company(kind, record_id)
        try:
            logo = self.logo_resolver.resolve(company) if self.logo_resolver else None
            document = render_document(kind, record, company, logo=logo)
        except DocumentError:
            raise
        except Exception as exc:
            logger.exception("Rendering failed for %s %s", kind.doc_type, record_id)
            raise UnexpectedRenderError(f"Error generating PDF: {exc}") from exc
        logger.info(
            "Rendered %s %s (%d pages, %d bytes)",
            kind.doc_type,
            record_id,
            document.page_count,
            len(document.content),
        )
        return document

    def _load_record(self, kind: DocumentKind, record_id: str) -> DocumentRecord:
        try:
            data = self.store.fetch_record(kind.source_table, record_id)
        except _STORE_ERRORS as exc:
            logger.error("Fetching %s %s failed: %s", kind.doc_type, record_id, exc)
            raise NotFound(f"{kind.entity_label} not found: {exc}") from exc
        if data is None:
            logger.warning("%s %s does not exist", kind.entity_label, record_id)
            raise NotFound(f"{kind.entity_label} not found: {record_id}")
        try:
            record = parse_document_record(
                data,
                number_field=kind.number_field,
                items_field=kind.items_field,
                party_field=kind.party_field,
                secondary_date_field=kind.secondary_date_field,
                default_currency=self.default_currency,
            )
        except ValueError as exc:
            logger.error("Record %s %s is malformed: %s", kind.doc_type, record_id, exc)
            raise UnexpectedRenderError(f"Error generating PDF: {exc}") from exc
        if record.party is None or not record.party.name:
            logger.error(
                "%s %s has no %s; refusing to render",
                kind.entity_label,
                record_id,
                kind.party_field,
            )
            raise IncompleteData(
                f"{kind.entity_label} data is incomplete: missing {kind.party_field}"
            )
        return record

    def _load_company(self, kind: DocumentKind, record_id: str) -> CompanyProfile:
        try:
            data = self.store.fetch_company_profile()
        except _STORE_ERRORS as exc:
            logger.error(
                "Company profile lookup failed for %s %s: %s", kind.doc_type, record_id, exc
            )
            raise ConfigurationMissing(f"Failed to fetch company profile: {exc}") from exc
        if data is None:
            logger.error("No company profile; cannot render %s %s", kind.doc_type, record_id)
            raise ConfigurationMissing("Failed to fetch company profile: no profile configured")
        try:
            return parse_company_profile(data)
        except ValueError as exc:
            raise ConfigurationMissing(f"Failed to fetch company profile: {exc}") from exc


def render_document(
    kind: DocumentKind,
    record: DocumentRecord,
    company: CompanyProfile,
    *,
    logo: LogoAsset | None = None,
    surface: PdfSurface | None = None,
) -> RenderedDocument:
    """Lay out and serialize one document; a pure function of its inputs."""
    if surface is None:
        surface = PdfSurface(
            title=sanitize(f"{kind.title} {record.number}{kind.number_suffix}"),
            created_at=creation_date(record),
        )
    flow = FlowController(surface)
    SectionRenderer(flow, kind, record, company, logo=logo).render()
    return RenderedDocument(
        content=surface.output(),
        filename=document_filename(kind, record),
        page_count=surface.page_count,
    )


def document_filename(kind: DocumentKind, record: DocumentRecord) -> str:
    number = _FILENAME_UNSAFE_RE.sub("_", sanitize(record.number)).strip()
    return f"{kind.filename_prefix}-{number}.pdf"


def creation_date(record: DocumentRecord) -> datetime:
    if not record.issue_date:
        return FALLBACK_CREATION_DATE
    return datetime.combine(parse_iso_date(record.issue_date), time(), tzinfo=timezone.utc)
