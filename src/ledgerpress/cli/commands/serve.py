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
import uvicorn

from ...core.store import JsonDocumentStore
from ...render.service import DocumentService
from ...web.app import BearerTokenSessions, create_app
from ..core.common import _ctx_value, _load_config, _run_cli
from ..core.log import _warn
from .render import resolve_data_path

_SERVE_HELP = (
    "Serve document PDFs over HTTP.\n\n"
    "Requests must carry `Authorization: Bearer <token>` with a token from\n"
    "server.api_tokens in the config.\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_SERVE_HELP)(serve)


def serve(
    ctx: typer.Context,
    data: Path | None = typer.Option(
        None,
        "--data",
        help="JSON data export (defaults to store.path from config).",
        rich_help_panel="Inputs",
    ),
    host: str | None = typer.Option(
        None,
        "--host",
        help="Bind address (defaults to server.host).",
        rich_help_panel="Server",
    ),
    port: int | None = typer.Option(
        None,
        "--port",
        help="Bind port (defaults to server.port).",
        rich_help_panel="Server",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_config(ctx)
        store = JsonDocumentStore(resolve_data_path(data, config))
        service = DocumentService.from_config(store, config)
        if not config.server.api_tokens:
            _warn("server.api_tokens is empty; every request will be rejected", quiet=quiet_value)
        web_app = create_app(service, BearerTokenSessions(config.server.api_tokens))
        uvicorn.run(
            web_app,
            host=host or config.server.host,
            port=port or config.server.port,
            log_level=config.log_level.lower(),
            log_config=None,
        )

    _run_cli(_run, debug=debug_value)
