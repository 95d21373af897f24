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
from unittest import mock

from fastapi.testclient import TestClient

from ledgerpress.render.service import DocumentService
from ledgerpress.web import BearerTokenSessions, create_app
from tests.test_support import (
    TEST_API_TOKEN,
    is_valid_pdf,
    make_invoice,
    make_store,
)

AUTH = {"Authorization": f"Bearer {TEST_API_TOKEN}"}


def _client(store=None) -> TestClient:
    service = DocumentService(store if store is not None else make_store())
    return TestClient(create_app(service, BearerTokenSessions([TEST_API_TOKEN])))


class TestBearerTokenSessions(unittest.TestCase):
    def test_resolve(self) -> None:
        sessions = BearerTokenSessions(["alpha", "", "beta"])
        cases = (
            (None, None),
            ("", None),
            ("alpha", None),
            ("Basic alpha", None),
            ("Bearer ", None),
            ("Bearer gamma", None),
            ("Bearer alpha", "token-0"),
            ("Bearer  beta ", "token-1"),
        )
        for header, expected in cases:
            with self.subTest(header=header):
                self.assertEqual(sessions.resolve(header), expected)

    def test_no_tokens_rejects_everyone(self) -> None:
        self.assertIsNone(BearerTokenSessions([]).resolve("Bearer anything"))


class TestDocumentRoutes(unittest.TestCase):
    def test_routes_return_pdf_attachments(self) -> None:
        client = _client()
        cases = (
            ("/api/invoices/42/pdf", "invoice-INV-0042.pdf"),
            ("/api/invoices/42/delivery-note", "delivery-note-INV-0042.pdf"),
            ("/api/quotations/7/pdf", "quotation-QT-0007.pdf"),
            ("/api/purchase-orders/9/pdf", "po-PO-0009.pdf"),
        )
        for path, filename in cases:
            with self.subTest(path=path):
                response = client.get(path, headers=AUTH)
                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.headers["content-type"], "application/pdf")
                self.assertEqual(
                    response.headers["content-disposition"],
                    f'attachment; filename="{filename}"',
                )
                self.assertEqual(
                    int(response.headers["content-length"]), len(response.content)
                )
                self.assertTrue(is_valid_pdf(response.content))

    def test_unauthenticated_requests_never_touch_the_store(self) -> None:
        store = mock.Mock()
        client = _client(store)
        for headers in ({}, {"Authorization": "Bearer wrong"}, {"Authorization": TEST_API_TOKEN}):
            with self.subTest(headers=headers):
                response = client.get("/api/invoices/42/pdf", headers=headers)
                self.assertEqual(response.status_code, 401)
                self.assertEqual(response.text, "Unauthorized")
                self.assertTrue(response.headers["content-type"].startswith("text/plain"))
        store.fetch_record.assert_not_called()
        store.fetch_company_profile.assert_not_called()

    def test_missing_record_is_404(self) -> None:
        response = _client().get("/api/quotations/404/pdf", headers=AUTH)
        self.assertEqual(response.status_code, 404)
        self.assertIn("Quotation not found", response.text)

    def test_incomplete_record_is_500_with_marker(self) -> None:
        store = make_store(invoices=[make_invoice(customer=None)])
        response = _client(store).get("/api/invoices/42/pdf", headers=AUTH)
        self.assertEqual(response.status_code, 500)
        self.assertIn("incomplete", response.text.lower())
        self.assertNotIn(b"%PDF", response.content)

    def test_missing_company_profile_is_500(self) -> None:
        store = make_store()
        store.data.pop("company_profile")
        response = _client(store).get("/api/invoices/42/delivery-note", headers=AUTH)
        self.assertEqual(response.status_code, 500)
        self.assertIn("Failed to fetch company profile", response.text)

    def test_unexpected_failure_is_500_with_message(self) -> None:
        resolver = mock.Mock()
        resolver.resolve.side_effect = RuntimeError("logo stage exploded")
        service = DocumentService(make_store(), logo_resolver=resolver)
        client = TestClient(create_app(service, BearerTokenSessions([TEST_API_TOKEN])))
        with self.assertLogs("ledgerpress.render.service", level="ERROR") as logs:
            response = client.get("/api/invoices/42/pdf", headers=AUTH)
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.text, "Error generating PDF: logo stage exploded")
        self.assertTrue(response.headers["content-type"].startswith("text/plain"))
        self.assertIn("Rendering failed for invoice 42", logs.output[0])

    def test_unknown_route(self) -> None:
        response = _client().get("/api/receipts/1/pdf", headers=AUTH)
        self.assertEqual(response.status_code, 404)


if __name__ == "__main__":
    unittest.main()
