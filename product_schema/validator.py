"""
validator.py - fail-fast validation of lead data against product schemas
========================================================================

Two entry points share the schema walk in :mod:`product_schema.nodes`:

Public API
----------
validate(data, schema, *, additional_properties=True)
    Depth-first validation of a lead's ``data`` mapping.  Fields are visited
    in schema declaration order and the first violation is raised as a
    :class:`~product_schema.errors.DataValidationError` subclass.

check(data, schema) -> str | None
    Non-raising form of :func:`validate`; returns the violation message.

validate_schema_definition(schema)
    The schema-of-schema check run when a product is created or updated.
    Raises :class:`~product_schema.errors.MalformedSchema`.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .classifier import classify
from .errors import (
    ArrayElementFailure,
    ConstraintViolation,
    DataValidationError,
    MalformedSchema,
    MissingRequiredField,
    NestedValidationFailure,
    SchemaError,
    UnknownField,
)
from .nodes import SchemaNode, parse_schema
from .values import BOOLEAN, OBJECT, value_kind

__all__ = [
    "SchemaError",
    "validate",
    "check",
    "validate_schema_definition",
]

log = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# Core recursive validator                                                    #
# --------------------------------------------------------------------------- #

def validate(data: Any, schema: Any, *, additional_properties: bool = True) -> None:
    """Assert that *data* satisfies *schema*.

    *schema* is read leniently: fragments that are not valid definitions are
    ignored rather than raising, so a stored schema can never crash a lead
    write.  Neither argument is mutated.

    Parameters
    ----------
    data
        The lead document; must be a mapping.
    schema
        Raw product schema, ``{field_name: definition}``.
    additional_properties
        When ``False``, keys in *data* that the schema does not declare are
        rejected with :class:`UnknownField` after all declared fields pass.
    """
    if value_kind(data) != OBJECT:
        raise DataValidationError("data must be an object")

    try:
        _validate_object(data, parse_schema(schema), additional_properties)
    except DataValidationError as exc:
        log.debug("data validation failed: %s", exc)
        raise


def check(data: Any, schema: Any, *, additional_properties: bool = True) -> Optional[str]:
    """Return the first violation message, or ``None`` when *data* is valid."""
    try:
        validate(data, schema, additional_properties=additional_properties)
    except DataValidationError as exc:
        return str(exc)
    return None


def _validate_object(data: Mapping[str, Any], nodes: Mapping[str, SchemaNode],
                     additional_properties: bool) -> None:
    # 1) declared fields, in declaration order --------------------------------
    for name, node in nodes.items():
        if name not in data:
            if node.required:
                raise MissingRequiredField(name)
            continue
        _check_value(name, data[name], node)

    # 2) undeclared fields --------------------------------------------------
    if not additional_properties:
        for key in data:
            if key not in nodes:
                raise UnknownField(str(key))


def _check_value(field: str, value: Any, node: SchemaNode) -> None:
    if node.kind is None:
        return

    normalised = classify(field, value, node.kind)
    if normalised is None:
        return
    _check_constraints(field, normalised, node)

    # object recursion ----------------------------------------------------
    if node.kind == "object" and node.nested is not None:
        try:
            _validate_object(value, node.nested, node.additional_properties)
        except DataValidationError as exc:
            raise NestedValidationFailure(field, exc) from exc

    # array recursion -----------------------------------------------------
    if node.kind == "array" and node.items is not None:
        for idx, item in enumerate(value):
            try:
                _check_value(field, item, node.items)
            except DataValidationError as exc:
                raise ArrayElementFailure(field, idx, exc) from exc


def _in_enum(value: Any, members: tuple) -> bool:
    # bools only match bools, never 0 or 1
    is_bool = value_kind(value) == BOOLEAN
    return any(m == value and (value_kind(m) == BOOLEAN) == is_bool for m in members)


def _check_constraints(field: str, value: Any, node: SchemaNode) -> None:
    """Apply kind-scoped constraints; only those set for ``node.kind`` exist."""
    if node.enum is not None and not _in_enum(value, node.enum):
        allowed = list(node.enum)
        raise ConstraintViolation(field, "enum", allowed, f"must be one of {allowed}")

    # string -----------------------------------------------------------------
    if node.pattern is not None and node.pattern.search(value) is None:
        raise ConstraintViolation(field, "pattern", node.pattern.pattern,
                                  f"must match pattern '{node.pattern.pattern}'")
    if node.min_length is not None and len(value) < node.min_length:
        raise ConstraintViolation(field, "minLength", node.min_length,
                                  f"must be at least {node.min_length} characters long")
    if node.max_length is not None and len(value) > node.max_length:
        raise ConstraintViolation(field, "maxLength", node.max_length,
                                  f"must be at most {node.max_length} characters long")

    # number / double ------------------------------------------------------
    if node.minimum is not None and value < node.minimum:
        raise ConstraintViolation(field, "minimum", node.minimum, f"must be at least {node.minimum}")
    if node.maximum is not None and value > node.maximum:
        raise ConstraintViolation(field, "maximum", node.maximum, f"must be at most {node.maximum}")

    # array ----------------------------------------------------------------
    if node.min_items is not None and len(value) < node.min_items:
        raise ConstraintViolation(field, "minItems", node.min_items,
                                  f"must contain at least {node.min_items} items")
    if node.max_items is not None and len(value) > node.max_items:
        raise ConstraintViolation(field, "maxItems", node.max_items,
                                  f"must contain at most {node.max_items} items")


# --------------------------------------------------------------------------- #
# Schema definition check                                                     #
# --------------------------------------------------------------------------- #

def validate_schema_definition(schema: Any) -> dict[str, SchemaNode]:
    """Reject a malformed schema before it is ever used to validate data.

    Returns the parsed ``{field_name: SchemaNode}`` mapping on success.

    Raises
    ------
    MalformedSchema
        For the first rule violation: bad field names, unknown or missing
        ``type``, ``array`` without ``items``, constraint keys illegal for
        the declared type, or badly typed constraint values.
    """
    try:
        return parse_schema(schema, strict=True)
    except MalformedSchema as exc:
        log.debug("schema definition rejected: %s", exc)
        raise
