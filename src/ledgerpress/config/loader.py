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

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .installer import resolve_config_path

DEFAULT_AVATAR_URL = (
    "https://api.dicebear.com/7.x/initials/png?seed={seed}"
    "&backgroundColor=3B82F6&textColor=ffffff&fontSize=40&radius=10"
)
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class DocumentDefaults:
    default_currency: str = "HKD"


@dataclass(frozen=True)
class LogoConfig:
    enabled: bool = True
    attempts: int = 3
    retry_delay_seconds: float = 1.0
    timeout_seconds: float = 10.0
    avatar_url: str = DEFAULT_AVATAR_URL


@dataclass(frozen=True)
class StoreConfig:
    path: Path | None = None


@dataclass(frozen=True)
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8000
    api_tokens: tuple[str, ...] = ()


@dataclass(frozen=True)
class AppConfig:
    document: DocumentDefaults = field(default_factory=DocumentDefaults)
    logo: LogoConfig = field(default_factory=LogoConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    return AppConfig(
        document=_parse_document_defaults(_get_dict(data, "document")),
        logo=_parse_logo_config(_get_dict(data, "logo")),
        store=_parse_store_config(_get_dict(data, "store"), base_dir=config_path.parent),
        server=_parse_server_config(_get_dict(data, "server")),
        log_level=_parse_log_level(_get_dict(data, "logging").get("level"), field="logging.level"),
    )


def _parse_document_defaults(cfg: dict[str, object]) -> DocumentDefaults:
    currency = _parse_optional_str(cfg.get("default_currency"), field="document.default_currency")
    if currency is None:
        return DocumentDefaults()
    currency = currency.upper()
    if len(currency) != 3 or not currency.isalpha():
        raise ValueError("document.default_currency must be a 3-letter currency code")
    return DocumentDefaults(default_currency=currency)


def _parse_logo_config(cfg: dict[str, object]) -> LogoConfig:
    defaults = LogoConfig()
    attempts = _parse_int_strict(cfg.get("attempts", defaults.attempts), field="logo.attempts")
    if attempts <= 0:
        raise ValueError("logo.attempts must be a positive integer")
    avatar_url = (
        _parse_optional_str(cfg.get("avatar_url"), field="logo.avatar_url") or defaults.avatar_url
    )
    if "{seed}" not in avatar_url:
        raise ValueError("logo.avatar_url must contain a {seed} placeholder")
    return LogoConfig(
        enabled=_parse_bool(cfg.get("enabled"), field="logo.enabled", default=defaults.enabled),
        attempts=attempts,
        retry_delay_seconds=_parse_non_negative_float(
            cfg.get("retry_delay_seconds"),
            field="logo.retry_delay_seconds",
            default=defaults.retry_delay_seconds,
        ),
        timeout_seconds=_parse_non_negative_float(
            cfg.get("timeout_seconds"),
            field="logo.timeout_seconds",
            default=defaults.timeout_seconds,
        ),
        avatar_url=avatar_url,
    )


def _parse_store_config(cfg: dict[str, object], *, base_dir: Path) -> StoreConfig:
    path = _parse_optional_str(cfg.get("path"), field="store.path")
    if path is None:
        return StoreConfig()
    resolved = Path(path).expanduser()
    if not resolved.is_absolute():
        resolved = base_dir / resolved
    return StoreConfig(path=resolved)


def _parse_server_config(cfg: dict[str, object]) -> ServerConfig:
    defaults = ServerConfig()
    port = _parse_int_strict(cfg.get("port", defaults.port), field="server.port")
    if not 0 < port < 65536:
        raise ValueError("server.port must be between 1 and 65535")
    tokens = cfg.get("api_tokens", [])
    if not isinstance(tokens, list) or not all(isinstance(token, str) for token in tokens):
        raise ValueError("server.api_tokens must be a list of strings")
    return ServerConfig(
        host=_parse_optional_str(cfg.get("host"), field="server.host") or defaults.host,
        port=port,
        api_tokens=tuple(token.strip() for token in tokens if token.strip()),
    )


def _parse_log_level(value: object, *, field: str) -> str:
    level = _parse_optional_str(value, field=field)
    if level is None:
        return "INFO"
    level = level.upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"{field} must be one of: {', '.join(_LOG_LEVELS)}")
    return level


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_optional_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    return normalized or None


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{field} must be a boolean")
    raise ValueError(f"{field} must be a boolean")


def _parse_non_negative_float(value: object, *, field: str, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{field} must be a number")
    try:
        parsed = float(value)
    except ValueError as exc:
        raise ValueError(f"{field} must be a number") from exc
    if parsed < 0:
        raise ValueError(f"{field} must not be negative")
    return parsed


def _parse_int_strict(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError(f"{field} must be an integer")
        try:
            return int(text)
        except ValueError as exc:
            raise ValueError(f"{field} must be an integer") from exc
    raise ValueError(f"{field} must be an integer")
