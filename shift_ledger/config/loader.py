from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    CodecConfig,
    LedgerConfig,
    RateMode,
    SchemaSource,
    StoreBackend,
    StoreConfig,
)

"""Config loader.

Responsibilities:
- Load YAML config (default ``config/ledger.yml``)
- Validate against the packaged JSON schema (config_schema.json)
- Apply defaults (rate_mode=fraction, schema_source=header)
- Apply environment overrides, which take precedence over the file:
    DATABASE_URL / PGDSN      -> store.dsn
    SHIFT_LEDGER_RATE_MODE    -> rate_mode
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/ledger.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the data
            fails validation (missing required keys, wrong types, unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _rate_mode(raw: str) -> RateMode:
    try:
        return RateMode(raw)
    except ValueError as e:
        raise ConfigError(f"unknown rate_mode: {raw!r}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> LedgerConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    rate_mode = os.getenv("SHIFT_LEDGER_RATE_MODE") or data.get("rate_mode", "fraction")
    codec = CodecConfig(
        rate_mode=_rate_mode(rate_mode),
        schema_source=SchemaSource(data.get("schema_source", "header")),
    )

    store_raw = data["store"]
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or store_raw.get("dsn")
    store = StoreConfig(
        backend=StoreBackend(store_raw["backend"]),
        path=store_raw.get("path"),
        sheet=store_raw.get("sheet"),
        dsn=dsn,
        table=store_raw.get("table", "shift_submissions"),
    )
    if store.backend is StoreBackend.POSTGRES and not store.dsn:
        raise ConfigError("postgres store requires store.dsn or DATABASE_URL")

    return LedgerConfig(codec=codec, store=store)
