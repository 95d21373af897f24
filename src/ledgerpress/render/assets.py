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

import http.client
import io
import logging
import ssl
import time
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass, field
from typing import Final, Literal

import certifi
from PIL import Image, UnidentifiedImageError

from ..config import LogoConfig
from ..core.errors import AssetDegraded
from ..core.models import CompanyProfile
from .text import sanitize

logger = logging.getLogger(__name__)

ImageKind = Literal["png", "jpeg"]

PNG_SIGNATURE: Final = b"\x89PNG"
JPEG_SIGNATURE: Final = b"\xff\xd8"
USER_AGENT: Final = "ledgerpress"


@dataclass(frozen=True)
class LogoAsset:
    data: bytes
    kind: ImageKind
    width: int
    height: int


@dataclass(frozen=True)
class LogoResolver:
    """Fetches the company logo ahead of layout; failures yield ``None``."""

    config: LogoConfig = field(default_factory=LogoConfig)

    def resolve(self, company: CompanyProfile) -> LogoAsset | None:
        if not self.config.enabled:
            return None
        url = logo_url(company, avatar_template=self.config.avatar_url)
        try:
            payload = fetch_bytes(
                url,
                attempts=self.config.attempts,
                base_delay=self.config.retry_delay_seconds,
                timeout=self.config.timeout_seconds,
            )
            return decode_logo(payload)
        except AssetDegraded as exc:
            logger.warning("Rendering without logo: %s", exc)
            return None
        except Exception:
            logger.exception("Unexpected error resolving logo from %s", url)
            return None


def logo_url(company: CompanyProfile, *, avatar_template: str) -> str:
    if company.logo_url:
        return company.logo_url
    seed = urllib.parse.quote(sanitize(company.name) or "C", safe="")
    return avatar_template.format(seed=seed)


def fetch_bytes(url: str, *, attempts: int, base_delay: float, timeout: float) -> bytes:
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    context = ssl.create_default_context(cafile=certifi.where())
    for attempt in range(1, attempts + 1):
        try:
            with urllib.request.urlopen(request, timeout=timeout, context=context) as resp:
                return resp.read()
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
            if attempt < attempts:
                logger.debug("Logo fetch attempt %d failed for %s: %s", attempt, url, exc)
                time.sleep(base_delay * attempt)
                continue
            detail = str(exc)
            if isinstance(exc, urllib.error.HTTPError):
                detail = f"HTTP {exc.code} {exc.reason}"
            elif isinstance(exc, urllib.error.URLError):
                detail = str(exc.reason)
            raise AssetDegraded(f"failed to fetch logo from {url}: {detail}") from exc
    raise AssetDegraded(f"failed to fetch logo from {url}: no attempts made")


def sniff_image_kind(payload: bytes) -> ImageKind | None:
    if len(payload) >= 8 and payload.startswith(PNG_SIGNATURE):
        return "png"
    if payload.startswith(JPEG_SIGNATURE):
        return "jpeg"
    return None


def decode_logo(payload: bytes) -> LogoAsset:
    kind = sniff_image_kind(payload)
    if kind is None:
        raise AssetDegraded("logo is neither PNG nor JPEG")
    try:
        with Image.open(io.BytesIO(payload)) as image:
            image.load()
            width, height = image.size
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
    ) as exc:
        raise AssetDegraded(f"logo image could not be decoded: {exc}") from exc
    if width <= 0 or height <= 0:
        raise AssetDegraded("logo image has no pixels")
    return LogoAsset(data=payload, kind=kind, width=width, height=height)
