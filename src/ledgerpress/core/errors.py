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

"""Failure kinds raised while producing a document."""

from __future__ import annotations


class DocumentError(Exception):
    """Base class for document generation failures.

    ``http_status`` is the status the HTTP boundary answers with.
    """

    http_status = 500


class Unauthorized(DocumentError):
    """No valid session; raised before any data access."""

    http_status = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class NotFound(DocumentError):
    """The primary record does not exist."""

    http_status = 404


class IncompleteData(DocumentError):
    """A found record lacks a required relationship (customer or vendor)."""


class ConfigurationMissing(DocumentError):
    """No company profile is available."""


class AssetDegraded(DocumentError):
    """A logo could not be fetched or decoded; rendering continues without it."""


class UnexpectedRenderError(DocumentError):
    """Any other failure during layout or serialization."""
