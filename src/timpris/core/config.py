"""Configuration loading, validation, and access."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from urllib.parse import urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from timpris.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://elen.nu/dagens-spotpris/se3-stockholm/"
DEFAULT_SELECTOR = "canvas[data-labels][data-datasets]"

_CONFIG_NAMES = (".timpris.yml", ".timpris.yaml", ".timpris")

# Flat keys understood by the Go predecessor, mapped to nested paths
_LEGACY_KEYS: dict[str, tuple[str, str]] = {
    "influxserver": ("influx", "address"),
    "influxuser": ("influx", "username"),
    "influxpasswd": ("influx", "password"),
    "influxdb": ("influx", "database"),
    "mariadsn": ("relational", "dsn"),
}

RELATIONAL_SCHEMES = ("mysql", "mariadb", "sqlite")

# go-sql-driver style DSN, e.g. user:pass@tcp(db:3306)/power
GO_MYSQL_DSN = re.compile(
    r"^(?:(?P<user>[^:@/]*)(?::(?P<password>[^@]*))?@)?"
    r"(?:tcp\((?P<host>[^)]*)\))?/(?P<database>[^?]*)(?:\?.*)?$"
)

# Env values for these keys are kept verbatim (a numeric password stays a str)
_STRING_KEYS = frozenset(
    {
        "password",
        "username",
        "dsn",
        "database",
        "area",
        "series_label",
        "timezone",
        "user_agent",
        "selector",
    }
)


class SourceConfig(BaseModel):
    """Where the price chart is scraped from."""

    model_config = ConfigDict(frozen=True)

    url: str = DEFAULT_URL
    selector: str = DEFAULT_SELECTOR
    request_timeout: int = 30
    user_agent: str = "timpris/0.1"

    @field_validator("url")
    @classmethod
    def url_is_http(cls, v: str) -> str:
        if urlparse(v).scheme not in ("http", "https"):
            raise ValueError(f"source url must be http or https, got {v!r}")
        return v

    @field_validator("request_timeout")
    @classmethod
    def timeout_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("request_timeout must be >= 1")
        return v


class InfluxConfig(BaseModel):
    """InfluxDB 1.x time-series target."""

    model_config = ConfigDict(frozen=True)

    address: str = "http://localhost:8086"
    username: str = ""
    password: str = ""
    database: str = "powerprices"
    timeout: int | None = None

    @field_validator("address")
    @classmethod
    def address_has_host(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError(
                f"influx address must look like http://host:8086, got {v!r}"
            )
        return v

    @field_validator("database")
    @classmethod
    def database_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("influx database must not be empty")
        return v


def sqlite_path(url_path: str) -> str:
    """Database path of a sqlite URL: one leading slash belongs to the URL."""
    # sqlite:///rel.db -> "rel.db", sqlite:////abs.db -> "/abs.db"
    return url_path[1:] if url_path.startswith("/") else url_path


class RelationalConfig(BaseModel):
    """Optional relational target. An empty DSN disables it."""

    model_config = ConfigDict(frozen=True)

    dsn: str = ""

    @field_validator("dsn")
    @classmethod
    def dsn_scheme_supported(cls, v: str) -> str:
        v = v.strip()
        if not v or GO_MYSQL_DSN.match(v):
            return v
        parsed = urlparse(v)
        if parsed.scheme not in RELATIONAL_SCHEMES:
            raise ValueError(
                f"relational dsn scheme must be one of {', '.join(RELATIONAL_SCHEMES)}"
            )
        if parsed.scheme == "sqlite":
            if not sqlite_path(parsed.path):
                raise ValueError("sqlite dsn needs a database path (sqlite:///prices.db)")
        elif not parsed.path.lstrip("/"):
            raise ValueError(f"{parsed.scheme} dsn needs a database name (/power)")
        return v

    @property
    def enabled(self) -> bool:
        return bool(self.dsn)


class TimprisConfig(BaseModel):
    """Root configuration for one scrape run."""

    model_config = ConfigDict(frozen=True)

    source: SourceConfig = SourceConfig()
    influx: InfluxConfig = InfluxConfig()
    relational: RelationalConfig = RelationalConfig()
    area: str = "SE3"
    series_label: str | None = None
    timezone: str | None = None
    verbose: int = 0

    @field_validator("area")
    @classmethod
    def area_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("area must not be empty")
        return v

    @field_validator("timezone")
    @classmethod
    def timezone_known(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone {v!r}") from e
        return v

    @field_validator("verbose")
    @classmethod
    def verbose_range(cls, v: int) -> int:
        if v < 0 or v > 4:
            raise ValueError("verbose must be between 0 and 4")
        return v

    @property
    def tzinfo(self) -> ZoneInfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None


def load_config(
    config_path: str | None = None,
    env_prefix: str = "TIMPRIS_",
) -> TimprisConfig:
    """Load configuration from environment + YAML file + defaults.

    Resolution order (highest priority first):
    1. Environment variables (TIMPRIS_INFLUX__ADDRESS, etc.)
    2. YAML file at config_path, $TIMPRIS_CONFIG, or ~/.timpris / ./.timpris
    3. Built-in defaults

    Nested keys use double-underscore in env vars:
        TIMPRIS_INFLUX__DATABASE=prices  ->  influx.database = "prices"
    """
    try:
        yaml_path = resolve_config_path(config_path)
        base: dict = {}
        if yaml_path is not None:
            base = _normalize_legacy_keys(_load_yaml(yaml_path))

        merged = _merge_env_vars(base, env_prefix)
        return TimprisConfig.model_validate(merged)
    except Exception as e:
        if isinstance(e, ConfigError):
            raise
        raise ConfigError(str(e), context={"source": "load_config"}) from e


def resolve_config_path(explicit: str | None = None) -> Path | None:
    """Config file a run would read, or None when there is none.

    Raises:
        ConfigError: an explicit or $TIMPRIS_CONFIG path does not exist.
    """
    if explicit is not None:
        p = Path(explicit)
        if not p.exists():
            raise ConfigError(
                f"Config file not found: {explicit}",
                context={"field": "config_path", "value": explicit},
            )
        return p

    env_path = os.environ.get("TIMPRIS_CONFIG")
    if env_path:
        p = Path(env_path)
        if not p.exists():
            raise ConfigError(
                f"Config file from TIMPRIS_CONFIG not found: {env_path}",
                context={"field": "TIMPRIS_CONFIG", "value": env_path},
            )
        return p

    for directory in (Path.home(), Path.cwd()):
        for name in _CONFIG_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate

    return None


def _load_yaml(path: Path) -> dict:
    """Load and parse YAML file."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"YAML config must be a mapping, got {type(data).__name__}",
                context={"field": "config_file", "value": str(path)},
            )
        return data
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Failed to parse YAML config: {e}",
            context={"field": "config_file", "value": str(path)},
        ) from e


def _normalize_legacy_keys(data: dict) -> dict:
    """Move flat legacy keys (InfluxServer, MariaDSN, ...) into sections.

    Keys are matched case-insensitively. Nested values win over legacy ones.
    """
    result: dict = {}
    legacy: list[tuple[tuple[str, str], object]] = []
    for key, value in data.items():
        path = _LEGACY_KEYS.get(str(key).lower())
        if path is None:
            result[key] = value
        else:
            legacy.append((path, value))

    for (section, field), value in legacy:
        target = result.setdefault(section, {})
        if not isinstance(target, dict):
            raise ConfigError(
                f"Config section {section!r} must be a mapping",
                context={"field": section, "value": type(target).__name__},
            )
        target.setdefault(field, value)
    return result


def _merge_env_vars(base: dict, prefix: str) -> dict:
    """Overlay ``<prefix>*`` environment variables onto a copy of ``base``.

    ``__`` separates nesting levels and single-part legacy names map to
    their section. Values are auto-cast unless the leaf is in _STRING_KEYS.
    """
    result = dict(base)
    for key, value in os.environ.items():
        path = _env_key_path(key, prefix)
        if path is None:
            continue
        leaf = path[-1]
        _set_nested(result, path, value if leaf in _STRING_KEYS else _auto_cast(value))
        logger.debug("Config %s set from %s", ".".join(path), key)
    return result


def _env_key_path(key: str, prefix: str) -> tuple[str, ...] | None:
    """Config path addressed by env var ``key``; None if it addresses none."""
    if not key.startswith(prefix):
        return None
    parts = tuple(p.lower() for p in key[len(prefix) :].split("__"))
    if parts == ("config",):
        # TIMPRIS_CONFIG names the file, not a setting
        return None
    if len(parts) == 1 and parts[0] in _LEGACY_KEYS:
        return _LEGACY_KEYS[parts[0]]
    return parts


def _set_nested(target: dict, path: tuple[str, ...], value: object) -> None:
    """Assign ``value`` at ``path``, copying intermediate dicts on the way."""
    *sections, leaf = path
    for section in sections:
        existing = target.get(section)
        target[section] = dict(existing) if isinstance(existing, dict) else {}
        target = target[section]
    target[leaf] = value


_BOOLEANS = {"true": True, "false": False}


def _auto_cast(value: str) -> str | int | float | bool:
    """Env strings to bool, int or float where they read as one."""
    if value.lower() in _BOOLEANS:
        return _BOOLEANS[value.lower()]
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue
    return value
