"""
product.py - High-level API for a product and its lead schema.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Mapping

from . import loader
from . import parser
from . import utils
from . import validator
from .lead import Lead


class Product:
    """A named structural contract that leads are validated against.

    The schema definition is checked when the product is built, so an
    instance always holds a well-formed schema.
    """

    def __init__(self, name: str, description: str, schema: Mapping[str, Any], *,
                 id: str | None = None, additional_properties: bool = True,
                 created_at: str | None = None, updated_at: str | None = None):
        """Initializes the Product, rejecting a malformed *schema*."""
        self.nodes = validator.validate_schema_definition(schema)
        self.schema = copy.deepcopy(dict(schema))
        self.name = name
        self.description = description
        self.additional_properties = additional_properties
        self.id = id or utils._new_id()
        now = utils._now_iso()
        self.created_at = created_at or now
        self.updated_at = updated_at or self.created_at

    @classmethod
    def load(cls, path: str | Path) -> "Product":
        """Loads a product definition from a JSON file and returns a Product instance."""
        data = loader.load_schema(path)

        if not isinstance(data, Mapping) or not all(key in data for key in ("name", "schema")):
            raise ValueError(f"'{path}' is not a valid product definition. Required keys: 'name', 'schema'.")
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            schema=data["schema"],
            additional_properties=data.get("additional_properties", True),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "schema": copy.deepcopy(self.schema),
            "additional_properties": self.additional_properties,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def validate_lead(self, data: Any) -> None:
        """Raise a :class:`~product_schema.errors.DataValidationError` if *data* does not conform."""
        validator.validate(data, self.schema, additional_properties=self.additional_properties)

    def parse_and_validate_lead(self, source: Any | None = None) -> dict[str, Any]:
        """
        End-to-end helper for command-line and file input.
        1. Convert *source* into a plain `dict` (CLI / JSON / Mapping).
        2. Deep-validate the result.
        3. Return the validated mapping.
        """
        if source is None:
            source = []  # parse_input(None) would read sys.argv
        raw = parser.parse_input(source, schema=self.schema)
        self.validate_lead(raw)
        return raw

    def create_lead(self, data: Mapping[str, Any]) -> Lead:
        """Validates *data* and wraps it in a new Lead tied to this product."""
        self.validate_lead(data)
        return Lead(product_id=self.id, data=data)
