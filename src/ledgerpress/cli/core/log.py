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

from rich.logging import RichHandler

from ..api import console_err

_HANDLER_NAME = "ledgerpress-cli"


def configure_logging(level: str, *, debug: bool = False, quiet: bool = False) -> None:
    """Route the package loggers through rich on stderr.

    ``--debug`` forces DEBUG and ``--quiet`` caps output at WARNING; otherwise
    the configured level applies. Calling again replaces the previous handler.
    """
    if debug:
        level = "DEBUG"
    elif quiet and logging.getLevelName(level) < logging.WARNING:
        level = "WARNING"
    root = logging.getLogger("ledgerpress")
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
    handler = RichHandler(
        console=console_err,
        show_path=debug,
        rich_tracebacks=debug,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    root.addHandler(handler)
    root.setLevel(level)


def _warn(message: str, *, quiet: bool) -> None:
    if quiet:
        return
    console_err.print(f"[yellow]Warning:[/yellow] {message}")
