"""
config.py - service settings loaded from JSON.

Settings come from, in order of precedence: an explicit path, the
``PRODUCT_SCHEMA_CONFIG`` environment variable, then the bundled
``default_config.json``.  Files are checked with the same validator that
guards lead data, with unknown keys rejected.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from . import loader
from . import validator
from .errors import DataValidationError, TypeMismatch

__all__ = ["ENV_VAR", "CONFIG_SCHEMA", "ServiceConfig", "load_config"]

log = logging.getLogger(__name__)

ENV_VAR = "PRODUCT_SCHEMA_CONFIG"

CONFIG_SCHEMA: dict[str, Any] = {
    "default_limit":       {"type": "number", "minimum": 1},
    "products_collection": {"type": "string", "minLength": 1},
    "leads_collection":    {"type": "string", "minLength": 1},
    "log_level":           {"type": "string",
                            "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]},
}


@dataclass(frozen=True)
class ServiceConfig:
    default_limit: int = 10
    products_collection: str = "products"
    leads_collection: str = "leads"
    log_level: str = "INFO"

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ServiceConfig":
        validator.validate(raw, CONFIG_SCHEMA, additional_properties=False)
        values = dict(raw)
        if "default_limit" in values:
            limit = values["default_limit"]
            if not float(limit).is_integer():
                raise TypeMismatch("default_limit", "number", "must be a whole number")
            values["default_limit"] = int(limit)
        return cls(**values)


def load_config(path: str | Path | None = None) -> ServiceConfig:
    """Load :class:`ServiceConfig`; raises ``ValueError`` on a bad file."""
    source = path or os.environ.get(ENV_VAR) or "default_config.json"
    raw = loader.load_schema(source)
    try:
        config = ServiceConfig.from_mapping(raw)
    except DataValidationError as exc:
        raise ValueError(f"Invalid config in {source}: {exc}") from exc
    log.debug("loaded config from %s", source)
    return config
