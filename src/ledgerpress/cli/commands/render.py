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

from pathlib import Path

import typer

from ...config import AppConfig
from ...core.store import JsonDocumentStore
from ...render.doc_types import document_kind
from ...render.service import DocumentService
from ..api import console
from ..core.common import _ctx_value, _load_config, _run_cli

_RENDER_HELP = (
    "Render one business document to PDF.\n\n"
    "Examples:\n"
    "  ledgerpress render invoice 42 --data export.json\n"
    "  ledgerpress render delivery-note 42 --data export.json -o dn.pdf\n"
    "  ledgerpress render purchase-order 7 --no-logo\n"
)


def _kind_callback(value: str) -> str:
    try:
        return document_kind(value).doc_type
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def register(app: typer.Typer) -> None:
    app.command(help=_RENDER_HELP)(render)


def render(
    ctx: typer.Context,
    kind: str = typer.Argument(
        ...,
        help="invoice, quotation, purchase-order or delivery-note.",
        callback=_kind_callback,
    ),
    record_id: str = typer.Argument(..., help="Record ID in the data file."),
    data: Path | None = typer.Option(
        None,
        "--data",
        help="JSON data export (defaults to store.path from config).",
        rich_help_panel="Inputs",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (defaults to the document filename).",
        rich_help_panel="Outputs",
    ),
    no_logo: bool = typer.Option(
        False,
        "--no-logo",
        help="Skip fetching the company logo.",
        rich_help_panel="Inputs",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx)
        store = JsonDocumentStore(resolve_data_path(data, config))
        if no_logo:
            service = DocumentService(
                store, default_currency=config.document.default_currency
            )
        else:
            service = DocumentService.from_config(store, config)
        document = service.generate(kind, record_id)
        output_path = output or Path.cwd() / document.filename
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(document.content)
        if not quiet_value:
            pages = "page" if document.page_count == 1 else "pages"
            console.print(f"{output_path} ({document.page_count} {pages})")

    _run_cli(_run, debug=debug_value)


def resolve_data_path(data: Path | None, config: AppConfig) -> Path:
    path = data or config.store.path
    if path is None:
        raise ValueError("no data file: pass --data or set store.path in the config")
    path = path.expanduser()
    if not path.is_file():
        raise ValueError(f"data file not found: {path}")
    return path
