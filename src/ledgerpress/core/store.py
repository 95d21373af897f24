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

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

COMPANY_PROFILE_KEY = "company_profile"


class DocumentStore(Protocol):
    """Data-access seam: resolved records and the issuer profile."""

    def fetch_record(self, table: str, record_id: str) -> Mapping[str, Any] | None: ...

    def fetch_company_profile(self) -> Mapping[str, Any] | None: ...


@dataclass(frozen=True)
class MappingDocumentStore:
    data: Mapping[str, Any] = field(default_factory=dict)

    def fetch_record(self, table: str, record_id: str) -> Mapping[str, Any] | None:
        rows = self.data.get(table)
        if rows is None:
            return None
        if not isinstance(rows, list):
            raise ValueError(f"{table} must be a list of records")
        for row in rows:
            if isinstance(row, Mapping) and str(row.get("id")) == record_id:
                return row
        return None

    def fetch_company_profile(self) -> Mapping[str, Any] | None:
        profile = self.data.get(COMPANY_PROFILE_KEY)
        if profile is None:
            return None
        if not isinstance(profile, Mapping):
            raise ValueError(f"{COMPANY_PROFILE_KEY} must be an object")
        return profile


@dataclass(frozen=True)
class JsonDocumentStore:
    """Reads a JSON export on every call; nothing is cached between renders."""

    path: Path

    def fetch_record(self, table: str, record_id: str) -> Mapping[str, Any] | None:
        return self._snapshot().fetch_record(table, record_id)

    def fetch_company_profile(self) -> Mapping[str, Any] | None:
        return self._snapshot().fetch_company_profile()

    def _snapshot(self) -> MappingDocumentStore:
        logger.debug("Loading document data from %s", self.path)
        with self.path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path}: top-level JSON value must be an object")
        return MappingDocumentStore(data)
