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

import typer

from ..render.doc_types import DOCUMENT_KINDS
from . import command_registry
from .api import console, console_err
from .core.common import _get_version
from .startup import run_startup

_APP_HELP = (
    "Render invoices, quotations, purchase orders and delivery notes to PDF.\n\n"
    "Records come from a JSON export (--data or store.path in the config).\n"
    "render writes one document to disk; serve exposes the same documents\n"
    "over authenticated HTTP."
)

app = typer.Typer(add_completion=False, help=_APP_HELP)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"ledgerpress {_get_version()}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    config: str | None = typer.Option(
        None,
        "--config",
        help=(
            "TOML config with store.path, logo fetching and server tokens "
            "(defaults to $LEDGERPRESS_CONFIG, then the user config)."
        ),
        rich_help_panel="Config",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log every fetch and layout stage at DEBUG and show tracebacks.",
        rich_help_panel="Debug",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Only report errors; skip the written-PDF summary and warnings.",
        rich_help_panel="Output",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored console output.",
        rich_help_panel="Output",
    ),
    init_config: bool = typer.Option(
        False,
        "--init-config",
        help=(
            "Write the default config (currency, logo, store, server) "
            "to the user config dir and exit."
        ),
        is_eager=True,
        rich_help_panel="Config",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the ledgerpress version and exit.",
        callback=_version_callback,
        is_eager=True,
        rich_help_panel="Info",
    ),
) -> None:
    _ = version
    try:
        should_exit = run_startup(
            quiet=quiet,
            no_color=no_color,
            debug=debug,
            init_config=init_config,
        )
    except (OSError, RuntimeError, ValueError) as exc:
        console_err.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=2)
    if should_exit:
        raise typer.Exit()
    ctx.ensure_object(dict)
    ctx.obj.update(
        {
            "config": config,
            "debug": debug,
            "quiet": quiet,
            "no_color": no_color,
        }
    )
    if ctx.invoked_subcommand is None:
        console_err.print(
            "[red]Error:[/red] No subcommand provided. "
            f"Try `ledgerpress render KIND RECORD_ID` with KIND one of {_kind_names()}, "
            "or run `ledgerpress --help` for available commands."
        )
        raise typer.Exit(code=2)


def _kind_names() -> str:
    return ", ".join(sorted(name.replace("_", "-") for name in DOCUMENT_KINDS))


command_registry.register(app)


def main() -> None:
    app()
