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

"""Records, failure kinds, formatting helpers and data access."""

from .errors import (
    AssetDegraded,
    ConfigurationMissing,
    DocumentError,
    IncompleteData,
    NotFound,
    Unauthorized,
    UnexpectedRenderError,
)
from .models import CompanyProfile, DocumentRecord, LineItem, Party
from .store import DocumentStore, JsonDocumentStore, MappingDocumentStore

__all__ = [
    "AssetDegraded",
    "CompanyProfile",
    "ConfigurationMissing",
    "DocumentError",
    "DocumentRecord",
    "DocumentStore",
    "IncompleteData",
    "JsonDocumentStore",
    "LineItem",
    "MappingDocumentStore",
    "NotFound",
    "Party",
    "Unauthorized",
    "UnexpectedRenderError",
]
