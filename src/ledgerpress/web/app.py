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

"""Document download endpoints.

Endpoints:
- GET /api/invoices/{record_id}/pdf - Invoice PDF
- GET /api/invoices/{record_id}/delivery-note - Delivery note derived from an invoice
- GET /api/quotations/{record_id}/pdf - Quotation PDF
- GET /api/purchase-orders/{record_id}/pdf - Purchase order PDF

Every endpoint requires an authenticated session. Failures are returned as
plain-text bodies carrying the status code of the failure kind.
"""

from __future__ import annotations

import hmac
import logging
from collections.abc import Iterable
from typing import Protocol

from fastapi import APIRouter, Depends, FastAPI, Header, Request, Response
from fastapi.responses import PlainTextResponse

from ..core.errors import DocumentError, Unauthorized
from ..render.doc_types import (
    DELIVERY_NOTE,
    INVOICE,
    PURCHASE_ORDER,
    QUOTATION,
    DocumentKind,
)
from ..render.service import DocumentService, RenderedDocument

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Documents"])


class SessionResolver(Protocol):
    def resolve(self, authorization: str | None) -> str | None:
        """Return a session identifier, or None when the caller is anonymous."""
        ...


class BearerTokenSessions:
    """Accepts `Authorization: Bearer <token>` for a fixed set of tokens."""

    def __init__(self, tokens: Iterable[str]) -> None:
        self._tokens = tuple(token for token in tokens if token)

    def resolve(self, authorization: str | None) -> str | None:
        if not authorization or not authorization.startswith("Bearer "):
            return None
        presented = authorization[7:].strip()
        if not presented:
            return None
        for index, token in enumerate(self._tokens):
            if hmac.compare_digest(presented.encode(), token.encode()):
                return f"token-{index}"
        return None


def require_session(
    request: Request,
    authorization: str | None = Header(None),
) -> str:
    sessions: SessionResolver = request.app.state.sessions
    session = sessions.resolve(authorization)
    if session is None:
        raise Unauthorized()
    return session


def get_document_service(request: Request) -> DocumentService:
    return request.app.state.document_service


@router.get("/invoices/{record_id}/pdf")
def invoice_pdf(
    record_id: str,
    session: str = Depends(require_session),
    service: DocumentService = Depends(get_document_service),
):
    return _serve(service, INVOICE, record_id, session)


@router.get("/invoices/{record_id}/delivery-note")
def delivery_note_pdf(
    record_id: str,
    session: str = Depends(require_session),
    service: DocumentService = Depends(get_document_service),
):
    return _serve(service, DELIVERY_NOTE, record_id, session)


@router.get("/quotations/{record_id}/pdf")
def quotation_pdf(
    record_id: str,
    session: str = Depends(require_session),
    service: DocumentService = Depends(get_document_service),
):
    return _serve(service, QUOTATION, record_id, session)


@router.get("/purchase-orders/{record_id}/pdf")
def purchase_order_pdf(
    record_id: str,
    session: str = Depends(require_session),
    service: DocumentService = Depends(get_document_service),
):
    return _serve(service, PURCHASE_ORDER, record_id, session)


def _serve(
    service: DocumentService,
    kind: DocumentKind,
    record_id: str,
    session: str,
) -> Response:
    logger.info("%s requested %s %s", session, kind.doc_type, record_id)
    return pdf_response(service.generate(kind, record_id))


def pdf_response(document: RenderedDocument) -> Response:
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{document.filename}"',
            "Content-Length": str(len(document.content)),
        },
    )


async def document_error_handler(request: Request, exc: DocumentError) -> PlainTextResponse:
    if exc.http_status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=exc.http_status)


def create_app(service: DocumentService, sessions: SessionResolver) -> FastAPI:
    app = FastAPI(title="ledgerpress", docs_url=None, redoc_url=None)
    app.state.document_service = service
    app.state.sessions = sessions
    app.add_exception_handler(DocumentError, document_error_handler)
    app.include_router(router)
    return app
